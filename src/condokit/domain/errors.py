"""Error types and the messages shown when an import cannot proceed."""


class DomainError(ValueError):
    """Base class for errors reported to the user without a traceback.

    Subclassing ValueError lets callers that only know about bad input
    catch these too.
    """


class ConfigError(DomainError):
    """Configuration is missing or unreadable."""


class NotFoundError(DomainError):
    """Requested file, sheet or collection does not exist."""


class RecordStoreError(DomainError):
    """The record store rejected a write."""


def file_not_found(path: str) -> str:
    """Return message for a missing input file."""
    return f"File not found: {path}"


def config_not_found(locations: list[str]) -> str:
    """Return message when no configuration source exists."""
    return f"Configuration not found (looked in: {', '.join(locations)})"


def collection_not_configured(sheet_type: str) -> str:
    """Return message when no collection id is configured for a sheet type."""
    return f"No '{sheet_type}' database configured (set databases.{sheet_type} in config)"
