"""Integration test for the Supabase inquiry datastore.

Requires SUPABASE_URL and SUPABASE_KEY for a project with a client_inquiry table.
This test performs a live insert and will be skipped if the credentials are not present.
"""

import os

import pytest

from app.config import Settings
from app.orchestration.transform import build_inquiry_record
from app.providers.datastore.supabase_store import SupabaseInquiryStore


pytestmark = pytest.mark.skipif(
    not (os.getenv("SUPABASE_URL") and os.getenv("SUPABASE_KEY")),
    reason="SUPABASE_URL/SUPABASE_KEY not set; skipping live Supabase integration test.",
)


@pytest.mark.asyncio
async def test_insert_inquiry_live(valid_wizard):
    settings = Settings(
        datastore_provider="supabase",
        supabase_url=os.environ["SUPABASE_URL"],
        supabase_key=os.environ["SUPABASE_KEY"],
    )

    store = SupabaseInquiryStore(settings)
    try:
        rows = await store.insert(build_inquiry_record(valid_wizard.state))
    finally:
        store.close()

    assert isinstance(rows, list) and rows
    assert rows[0].get("id")
    assert rows[0].get("full_name") == "Jane Doe"
