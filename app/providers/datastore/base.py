"""Base datastore interface for inquiry persistence."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class InquiryStore(ABC):
    """Abstract base class for inquiry datastores."""

    @abstractmethod
    async def insert(self, record: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Insert one inquiry record.

        Args:
            record: Flat client_inquiry record

        Returns:
            The inserted row(s) as stored, including the generated id

        Raises:
            DatastoreError: If the datastore rejects the write
        """
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Get the name of this datastore."""
        pass

    def close(self) -> None:
        """Release any held connections."""
