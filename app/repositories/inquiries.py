"""Client inquiry repository for database operations."""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session as DBSession

from app.db.models import ClientInquiry

_TIMESTAMP_COLUMNS = ("arrival_date", "departure_date", "special_arrangements_date")


class InquiryRepository:
    """Repository for client inquiry operations."""

    def __init__(self, db: DBSession):
        self.db = db

    def create_inquiry(self, record: Dict[str, Any]) -> ClientInquiry:
        """Insert a new inquiry.
        Args:
            record (Dict[str, Any]): Column values; timestamps as ISO strings or datetimes.
        Returns:
            ClientInquiry: Created inquiry object.
        """
        values = dict(record)
        for column in _TIMESTAMP_COLUMNS:
            if isinstance(values.get(column), str):
                values[column] = datetime.fromisoformat(values[column])

        inquiry = ClientInquiry(**values)
        self.db.add(inquiry)
        self.db.commit()
        self.db.refresh(inquiry)
        return inquiry

    def get_inquiry(self, inquiry_id: str) -> Optional[ClientInquiry]:
        """Get inquiry by ID.
        Args:
            inquiry_id (str): Inquiry identifier.
        Returns:
            Optional[ClientInquiry]: Inquiry object or None if not found.
        """
        return (
            self.db.query(ClientInquiry)
            .filter(ClientInquiry.id == uuid.UUID(str(inquiry_id)))
            .first()
        )

    def list_recent(self, limit: int = 20) -> List[ClientInquiry]:
        """Most recent inquiries first.
        Args:
            limit (int): Maximum number of rows.
        Returns:
            List[ClientInquiry]: Inquiries ordered by submission time.
        """
        return (
            self.db.query(ClientInquiry)
            .order_by(ClientInquiry.created_at.desc())
            .limit(limit)
            .all()
        )
