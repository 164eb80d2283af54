"""SQLAlchemy-backed record store."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from condokit.domain.errors import RecordStoreError
from condokit.domain.properties import record_title
from condokit.store.base import RecordStore
from condokit.store.models import Record, create_session_factory


@dataclass(frozen=True)
class StoredRecord:
    """A record read back from the local store."""

    id: str
    collection: str
    title: str
    properties: dict[str, Any]
    created_at: datetime


class SQLAlchemyRecordStore(RecordStore):
    """Record store keeping records in a local SQL database."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy record store.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def close(self) -> None:
        """Close the session."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def create_record(self, collection_id: str, properties: dict[str, Any]) -> str:
        """Create a record. Returns record ID."""
        session = self._get_session()
        record = Record(
            collection=collection_id,
            title=record_title(properties),
            properties=properties,
        )
        try:
            session.add(record)
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise RecordStoreError(f"Could not store record in '{collection_id}': {e}") from e
        return str(record.id)

    def list_records(self, collection_id: Optional[str] = None) -> list[StoredRecord]:
        """List records in creation order, optionally filtered by collection."""
        session = self._get_session()
        query = session.query(Record)
        if collection_id is not None:
            query = query.filter(Record.collection == collection_id)
        return [_to_stored(record) for record in query.order_by(Record.id).all()]

    def count_records(self, collection_id: Optional[str] = None) -> int:
        """Count records, optionally filtered by collection."""
        session = self._get_session()
        query = session.query(Record)
        if collection_id is not None:
            query = query.filter(Record.collection == collection_id)
        return query.count()


def _to_stored(record: Record) -> StoredRecord:
    return StoredRecord(
        id=str(record.id),
        collection=record.collection,
        title=record.title,
        properties=record.properties,
        created_at=record.created_at,
    )
