"""SQLAlchemy-backed inquiry datastore."""

import logging
from typing import Any, Dict, List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session as DBSession

from app.errors import DatastoreError
from app.providers.datastore.base import InquiryStore
from app.repositories.inquiries import InquiryRepository

logger = logging.getLogger(__name__)


class SqlInquiryStore(InquiryStore):
    """Stores inquiries in the application's relational database."""

    def __init__(self, db: DBSession):
        self.db = db
        self.inquiry_repo = InquiryRepository(db)

    async def insert(self, record: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Insert a record through the inquiry repository."""
        try:
            inquiry = self.inquiry_repo.create_inquiry(record)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error inserting inquiry: {e}")
            raise DatastoreError(str(e.__cause__ or e), status=500, status_text="Database Error") from e
        except (TypeError, ValueError) as e:
            self.db.rollback()
            logger.error(f"Rejected inquiry record: {e}")
            raise DatastoreError(str(e), status=400, status_text="Bad Request") from e

        logger.info(f"Inquiry {inquiry.id} stored")
        return [inquiry.to_dict()]

    def get_provider_name(self) -> str:
        """Get the provider name."""
        return "sql"
