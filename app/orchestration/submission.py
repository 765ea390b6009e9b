"""Submission pipeline.
Turns a valid wizard state into a persisted client inquiry.
"""

import logging

from app.errors import DatastoreError, PersistenceFailed, UnknownResponse, ValidationFailed
from app.form.wizard import WizardController
from app.orchestration.transform import build_inquiry_record, missing_record_fields
from app.providers.datastore.base import InquiryStore

logger = logging.getLogger(__name__)


class SubmissionPipeline:
    """Validates, transforms and persists one wizard session's inquiry."""

    def __init__(self, store: InquiryStore):
        self.store = store

    async def submit(self, wizard: WizardController) -> str:
        """Persist the wizard's form and reset it.

        Email and PDF follow-ups are not part of this call; a failure there
        never undoes the stored row.
        Args:
            wizard (WizardController): Session to submit.
        Returns:
            str: Identifier of the persisted record.
        Raises:
            ValidationFailed: Form invalid or a required record field came out empty.
            PersistenceFailed: Datastore rejected the write; the form is kept.
            UnknownResponse: Datastore reported success without returning a row.
        """
        errors = wizard.form_errors()
        if errors:
            # Surface every blocking message, including fields never touched
            wizard.state.errors.update(errors)
            logger.info(f"Submission blocked by {len(errors)} validation error(s)")
            raise ValidationFailed(errors)

        record = build_inquiry_record(wizard.state)
        missing = missing_record_fields(record)
        if missing:
            logger.info(f"Submission blocked, record incomplete: {sorted(missing)}")
            raise ValidationFailed(missing)

        try:
            rows = await self.store.insert(record)
        except DatastoreError as e:
            logger.error(
                f"Datastore error saving inquiry via {self.store.get_provider_name()}: "
                f"{e.message} (Status: {e.status} {e.status_text})"
            )
            raise PersistenceFailed(e.message, status=e.status, status_text=e.status_text) from e

        if not rows or not rows[0].get("id"):
            logger.error("Datastore returned no inserted row")
            raise UnknownResponse()

        record_id = str(rows[0]["id"])
        logger.info(f"Client inquiry {record_id} saved")
        wizard.reset()
        return record_id
