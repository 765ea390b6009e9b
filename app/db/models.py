"""SQLAlchemy database models.
Defines the schema for persisted client travel inquiries.
"""

import uuid

from sqlalchemy import (
    Column, String, DateTime, Integer, Text, Index, TypeDecorator, JSON
)
from sqlalchemy.dialects.postgresql import UUID as PostgreSQL_UUID, JSONB
from sqlalchemy.sql import func

from app.db.base import Base


class GUID(TypeDecorator):
    """Platform-independent GUID type.

    Uses PostgreSQL's UUID type when available,
    otherwise uses CHAR(36), storing as stringified hex values.
    """
    impl = String
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(PostgreSQL_UUID(as_uuid=True))
        return dialect.type_descriptor(String(36))

    def process_bind_param(self, value, dialect):
        if value is None or dialect.name == 'postgresql':
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(value)


class JSONColumn(TypeDecorator):
    """Platform-independent JSON type.

    Uses PostgreSQL's JSONB when available,
    otherwise uses JSON.
    """
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(JSON())


class ClientInquiry(Base):
    """Client travel inquiry model.
    One submitted intake form. Inherits from Base.
    Columns:
        id (UUID): Primary key.
        created_at (DateTime): Timestamp of submission.
        full_name, email_address, contact_number (String): Customer contact details.
        nationality, country (String): Customer origin.
        arrival_date, departure_date (DateTime): Trip bounds, timezone-aware.
        no_of_nights (Integer): Derived night count.
        hotel_category (String): Category, or "Other: <text>".
        room_type (Text): JSON-encoded list of room selections.
        basis, children, tour_type, transport (String): Single-choice answers.
        no_of_pax (Integer): Number of travelers.
        site_interests, other_service (JSON): Multi-choice answers.
        special_arrangements (String): Occasion, or "None".
        special_arrangements_date (DateTime): Occasion date.
        arrival_flight, departure_flight (String): Flight references.
    """
    __tablename__ = "client_inquiry"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now())
    full_name = Column(String(200), nullable=False)
    email_address = Column(String(320), nullable=False, index=True)
    contact_number = Column(String(50), nullable=False)
    nationality = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    arrival_date = Column(DateTime(timezone=True), nullable=False)
    departure_date = Column(DateTime(timezone=True), nullable=False)
    no_of_nights = Column(Integer, nullable=True)
    hotel_category = Column(String(200), nullable=True)
    room_type = Column(Text, nullable=True)
    basis = Column(String(10), nullable=True)
    no_of_pax = Column(Integer, nullable=True)
    children = Column(String(50), nullable=True)
    tour_type = Column(String(100), nullable=True)
    transport = Column(String(100), nullable=True)
    site_interests = Column(JSONColumn(), nullable=True)
    other_service = Column(JSONColumn(), nullable=True)
    special_arrangements = Column(String(100), nullable=True)
    special_arrangements_date = Column(DateTime(timezone=True), nullable=True)
    arrival_flight = Column(String(100), nullable=True)
    departure_flight = Column(String(100), nullable=True)

    __table_args__ = (
        Index('idx_client_inquiry_created', 'created_at'),
    )

    def to_dict(self) -> dict:
        """Row as a JSON-compatible dict, datetimes as ISO strings."""
        row = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)
            if isinstance(value, uuid.UUID):
                value = str(value)
            elif hasattr(value, "isoformat"):
                value = value.isoformat()
            row[column.name] = value
        return row
