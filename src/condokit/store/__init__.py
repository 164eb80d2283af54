"""Record store layer for condokit application."""

from condokit.store.base import RecordStore
from condokit.store.factories import create_record_store, create_sqlite_store

__all__ = ["RecordStore", "create_record_store", "create_sqlite_store"]
