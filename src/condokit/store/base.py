"""Abstract record store interface."""

from abc import ABC, abstractmethod
from typing import Any


class RecordStore(ABC):
    """Abstract destination for imported records.

    A record is a property map created in a named collection. There is no
    batch or transactional variant: each record is written on its own.
    """

    @abstractmethod
    def create_record(self, collection_id: str, properties: dict[str, Any]) -> str:
        """Create a record in a collection.

        Args:
            collection_id: Collection (database) identifier
            properties: Property map of the record

        Returns:
            Identifier of the new record

        Raises:
            RecordStoreError: If the store rejects the record
        """
        pass

    def close(self) -> None:
        """Release any connection held by the store."""
        pass
