"""Record store factory functions."""

from pathlib import Path
from typing import Optional

from condokit.config import ImporterConfig
from condokit.domain.errors import ConfigError
from condokit.store.base import RecordStore
from condokit.store.notion import NotionRecordStore
from condokit.store.sqlalchemy_store import SQLAlchemyRecordStore


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemyRecordStore:
    """Create a SQLite record store.

    Args:
        database_path: Path to SQLite database file. Defaults to
            ~/.condokit/records.db

    Returns:
        SQLAlchemyRecordStore instance configured for SQLite
    """
    if database_path is None:
        db_dir = Path.home() / ".condokit"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "records.db")
    return SQLAlchemyRecordStore(f"sqlite:///{database_path}")


def create_record_store(config: ImporterConfig) -> RecordStore:
    """Create the record store selected by the configuration.

    Raises:
        ConfigError: If the Notion store is selected without a token
    """
    if config.store == "sqlite":
        return create_sqlite_store(config.sqlite_path)
    if not config.notion_token:
        raise ConfigError("Notion token missing (set notion.token in config or NOTION_TOKEN)")
    return NotionRecordStore(config.notion_token)
