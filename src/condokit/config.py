"""Importer configuration.

Configuration is read once by the CLI and handed to the record store factory
and the import service. Lookup order:

1. an explicit path (``--config`` or the ``CONDOKIT_CONFIG`` variable);
2. the ``CONDO_CONFIG`` variable holding the JSON document itself;
3. ``config.json`` in the working directory.

Example document::

    {
      "building": {"name": "Torre Mar", "currency": "DOP"},
      "databases": {"units": "…", "ledger": "…", "expenses": "…",
                    "movements": "…", "budget": "…"},
      "accounts": {"cajaChica": "…", "bancoPopular": "…"},
      "notion": {"token": "secret_…"},
      "requestDelay": 0.35,
      "store": "notion"
    }
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

from condokit.domain.entities import SheetType
from condokit.domain.errors import ConfigError, config_not_found

DEFAULT_CONFIG_FILE = "config.json"
DEFAULT_CURRENCY = "DOP"
DEFAULT_REQUEST_DELAY = 0.35

STORE_BACKENDS = ("notion", "sqlite")


@dataclass(frozen=True)
class ImporterConfig:
    """Settings for one import run."""

    databases: dict[str, str] = field(default_factory=dict)
    currency: str = DEFAULT_CURRENCY
    request_delay: float = DEFAULT_REQUEST_DELAY
    store: str = "notion"
    sqlite_path: Optional[str] = None
    notion_token: Optional[str] = None
    accounts: dict[str, str] = field(default_factory=dict)
    units: dict[str, str] = field(default_factory=dict)
    source: str = ""

    def collection_id(self, sheet_type: SheetType) -> Optional[str]:
        """Return the collection (database) id records of a sheet type go to.

        The SQLite store falls back to the sheet type name, so it works
        without a databases section.
        """
        collection = self.databases.get(sheet_type.value)
        if collection is None and self.store == "sqlite":
            return sheet_type.value
        return collection

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], source: str = "", environ: Optional[Mapping[str, str]] = None
    ) -> "ImporterConfig":
        """Build a configuration from a parsed JSON document.

        Raises:
            ConfigError: If a value has the wrong shape
        """
        environ = os.environ if environ is None else environ
        if not isinstance(data, Mapping):
            raise ConfigError(f"Configuration in {source or 'input'} must be a JSON object")

        building = data.get("building") or {}
        notion = data.get("notion") or {}
        store = data.get("store", "notion")
        if store not in STORE_BACKENDS:
            raise ConfigError(
                f"Unknown store '{store}'. Supported stores: {', '.join(STORE_BACKENDS)}"
            )

        try:
            request_delay = float(data.get("requestDelay", DEFAULT_REQUEST_DELAY))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid requestDelay: {e}")
        if request_delay < 0:
            raise ConfigError("requestDelay must not be negative")

        return cls(
            databases=_string_map(data.get("databases"), "databases"),
            currency=building.get("currency") or DEFAULT_CURRENCY,
            request_delay=request_delay,
            store=store,
            sqlite_path=data.get("sqlitePath"),
            notion_token=notion.get("token") or environ.get("NOTION_TOKEN"),
            accounts=_string_map(data.get("accounts"), "accounts"),
            units=_string_map(data.get("units"), "units"),
            source=source,
        )


def _string_map(value: Any, name: str) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"'{name}' must be an object")
    return {str(key): str(item) for key, item in value.items() if item}


def load_config(
    config_path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None
) -> ImporterConfig:
    """Load the importer configuration.

    Args:
        config_path: Optional explicit path to a JSON config file
        environ: Environment mapping (defaults to os.environ)

    Returns:
        ImporterConfig

    Raises:
        ConfigError: If no configuration is found or it cannot be parsed
    """
    environ = os.environ if environ is None else environ
    config_path = config_path or environ.get("CONDOKIT_CONFIG")

    if config_path:
        path = Path(config_path)
        if not path.is_file():
            raise ConfigError(config_not_found([str(path)]))
        return _load_file(path, environ)

    inline = environ.get("CONDO_CONFIG")
    if inline:
        try:
            data = json.loads(inline)
        except json.JSONDecodeError as e:
            raise ConfigError(f"CONDO_CONFIG is not valid JSON: {e}")
        return ImporterConfig.from_dict(data, source="CONDO_CONFIG", environ=environ)

    path = Path.cwd() / DEFAULT_CONFIG_FILE
    if path.is_file():
        return _load_file(path, environ)

    raise ConfigError(config_not_found(["--config", "CONDOKIT_CONFIG", "CONDO_CONFIG", str(path)]))


def _load_file(path: Path, environ: Mapping[str, str]) -> ImporterConfig:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read config {path}: {e}")
    return ImporterConfig.from_dict(data, source=str(path), environ=environ)
