"""Unit tests for the submission pipeline.

Covers:
- Invalid forms never reach the datastore
- Successful submission resets the wizard
- Datastore failures keep the form and map to PersistenceFailed
- Empty datastore answers map to UnknownResponse
"""

from typing import Any, Dict, List, Optional

import pytest

from app.errors import DatastoreError, PersistenceFailed, UnknownResponse, ValidationFailed
from app.form.sections import ordered_required_fields
from app.form.wizard import WizardController
from app.orchestration.submission import SubmissionPipeline
from app.providers.datastore.base import InquiryStore


class FakeStore(InquiryStore):
    def __init__(self, rows: Optional[List[Dict[str, Any]]] = None, error: Optional[DatastoreError] = None):
        self.rows = rows if rows is not None else [{"id": "3f0c9a52-0000-4000-8000-000000000001"}]
        self.error = error
        self.records: List[Dict[str, Any]] = []

    async def insert(self, record: Dict[str, Any]) -> List[Dict[str, Any]]:
        self.records.append(record)
        if self.error:
            raise self.error
        return self.rows

    def get_provider_name(self) -> str:
        return "fake"


@pytest.mark.asyncio
async def test_invalid_form_is_not_sent():
    store = FakeStore()
    wizard = WizardController()
    wizard.change_field("Customer Name", "Jane Doe")

    with pytest.raises(ValidationFailed) as exc_info:
        await SubmissionPipeline(store).submit(wizard)

    assert store.records == []
    assert "Customer Email" in exc_info.value.errors
    # Untouched required fields now show their messages too
    assert wizard.state.errors["Customer Email"] == "Customer Email is required"
    assert wizard.state.get("Customer Name") is not None



@pytest.mark.asyncio
@pytest.mark.parametrize("field_name", ordered_required_fields())
async def test_each_missing_required_field_blocks_submission(valid_wizard, field_name):
    store = FakeStore()
    valid_wizard.change_field(field_name, None)

    with pytest.raises(ValidationFailed) as exc_info:
        await SubmissionPipeline(store).submit(valid_wizard)

    assert exc_info.value.errors[field_name] == f"{field_name} is required"
    assert store.records == []

@pytest.mark.asyncio
async def test_successful_submission_resets_wizard(valid_wizard):
    store = FakeStore()
    valid_wizard.jump_to(4)

    record_id = await SubmissionPipeline(store).submit(valid_wizard)

    assert record_id == "3f0c9a52-0000-4000-8000-000000000001"
    assert len(store.records) == 1
    assert store.records[0]["full_name"] == "Jane Doe"
    assert valid_wizard.state.values == {}
    assert valid_wizard.state.active_section == 0


@pytest.mark.asyncio
async def test_datastore_error_keeps_state(valid_wizard):
    store = FakeStore(error=DatastoreError("duplicate key value", status=409, status_text="Conflict"))
    values_before = dict(valid_wizard.state.values)

    with pytest.raises(PersistenceFailed) as exc_info:
        await SubmissionPipeline(store).submit(valid_wizard)

    assert exc_info.value.message == "duplicate key value"
    assert exc_info.value.status == 409
    assert exc_info.value.status_text == "Conflict"
    assert valid_wizard.state.values == values_before


@pytest.mark.asyncio
@pytest.mark.parametrize("rows", [[], [{"id": None}], [{"full_name": "Jane Doe"}]])
async def test_missing_rows_is_unknown_response(valid_wizard, rows):
    store = FakeStore(rows=rows)

    with pytest.raises(UnknownResponse):
        await SubmissionPipeline(store).submit(valid_wizard)

    assert valid_wizard.state.values != {}
