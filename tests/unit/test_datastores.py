"""Unit tests for the inquiry datastores.

Covers:
- SQL store insert, constraint failures and bad records
- Inquiry repository lookups
- Supabase store request shape and error mapping
"""

import uuid
from typing import Any, Dict, List, Optional

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.config import Settings
from app.db.base import Base
from app.errors import DatastoreError
from app.orchestration.transform import build_inquiry_record
from app.providers.datastore.sql_store import SqlInquiryStore
from app.providers.datastore.supabase_store import SupabaseInquiryStore
from app.repositories.inquiries import InquiryRepository


@pytest.fixture()
def db_session():
    engine = create_engine("sqlite:///:memory:", connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def supabase_settings() -> Settings:
    return Settings(
        datastore_provider="supabase",
        supabase_url="https://project.supabase.co/",
        supabase_key="anon-key",
        supabase_table="client_inquiry",
    )


class FakeResponse:
    def __init__(self, json_data: Any, status_code: int = 201, reason_phrase: str = "Created"):
        self._json = json_data
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        self.text = "" if json_data is None else str(json_data)

    def json(self) -> Any:
        if self._json is None:
            raise ValueError("No JSON body")
        return self._json


@pytest.mark.asyncio
async def test_sql_store_inserts_record(db_session, valid_wizard):
    store = SqlInquiryStore(db_session)
    record = build_inquiry_record(valid_wizard.state)

    rows = await store.insert(record)

    assert len(rows) == 1
    row = rows[0]
    assert uuid.UUID(row["id"])
    assert row["full_name"] == "Jane Doe"
    assert row["other_service"] == ["None"]
    assert row["arrival_date"].startswith("2025-03-10")

    repo = InquiryRepository(db_session)
    stored = repo.get_inquiry(row["id"])
    assert stored is not None
    assert stored.no_of_nights == 7
    assert [inquiry.id for inquiry in repo.list_recent()] == [stored.id]


@pytest.mark.asyncio
async def test_sql_store_constraint_failure(db_session, valid_wizard):
    store = SqlInquiryStore(db_session)
    record = build_inquiry_record(valid_wizard.state)
    record["full_name"] = None

    with pytest.raises(DatastoreError) as exc_info:
        await store.insert(record)
    assert exc_info.value.status == 500
    assert exc_info.value.status_text == "Database Error"

    # Session is usable again after the rollback
    record["full_name"] = "Jane Doe"
    rows = await store.insert(record)
    assert rows[0]["full_name"] == "Jane Doe"


@pytest.mark.asyncio
async def test_sql_store_rejects_unknown_columns(db_session, valid_wizard):
    store = SqlInquiryStore(db_session)
    record = build_inquiry_record(valid_wizard.state)
    record["favourite_colour"] = "blue"

    with pytest.raises(DatastoreError) as exc_info:
        await store.insert(record)
    assert exc_info.value.status == 400


def test_supabase_store_requires_credentials():
    with pytest.raises(ValueError):
        SupabaseInquiryStore(Settings(supabase_url=None, supabase_key=None))


@pytest.mark.asyncio
async def test_supabase_insert_success(supabase_settings: Settings, valid_wizard):
    store = SupabaseInquiryStore(supabase_settings)
    captured: Dict[str, Any] = {}

    def fake_post(url, json=None, **kwargs):
        captured["url"] = url
        captured["json"] = json
        return FakeResponse([{"id": "row-1", **json[0]}])

    store.client.post = fake_post  # type: ignore

    record = build_inquiry_record(valid_wizard.state)
    rows = await store.insert(record)

    assert captured["url"] == "https://project.supabase.co/rest/v1/client_inquiry"
    assert captured["json"] == [record]
    assert rows[0]["id"] == "row-1"
    assert store.client.headers["Prefer"] == "return=representation"
    assert store.client.headers["apikey"] == "anon-key"

    store.close()


@pytest.mark.asyncio
async def test_supabase_insert_error_status(supabase_settings: Settings):
    store = SupabaseInquiryStore(supabase_settings)

    def fake_post(url, json=None, **kwargs):
        return FakeResponse({"message": "null value in column \"full_name\""}, 400, "Bad Request")

    store.client.post = fake_post  # type: ignore

    with pytest.raises(DatastoreError) as exc_info:
        await store.insert({"full_name": None})

    assert exc_info.value.message == "null value in column \"full_name\""
    assert exc_info.value.status == 400
    assert exc_info.value.status_text == "Bad Request"

    store.close()


@pytest.mark.asyncio
async def test_supabase_network_error(supabase_settings: Settings):
    store = SupabaseInquiryStore(supabase_settings)

    def fake_post(url, json=None, **kwargs):
        raise httpx.ConnectError("connection refused")

    store.client.post = fake_post  # type: ignore

    with pytest.raises(DatastoreError) as exc_info:
        await store.insert({"full_name": "Jane Doe"})
    assert exc_info.value.status is None
    assert exc_info.value.status_text == "Network Error"

    store.close()


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [None, {"id": "row-1"}])
async def test_supabase_non_list_body_returns_no_rows(supabase_settings: Settings, payload: Optional[Dict]):
    store = SupabaseInquiryStore(supabase_settings)
    store.client.post = lambda url, json=None, **kwargs: FakeResponse(payload)  # type: ignore

    rows: List[Dict[str, Any]] = await store.insert({"full_name": "Jane Doe"})
    assert rows == []

    store.close()
