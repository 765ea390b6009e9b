"""FastAPI routes for the travel inquiry service."""

import logging
from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings
from app.deps import (
    build_pdf_renderer,
    get_email_sender,
    get_inquiry_store,
    get_pdf_renderer,
    get_wizard_registry,
)
from app.errors import (
    NotificationFailed,
    PdfRenderError,
    PersistenceFailed,
    UnknownResponse,
    ValidationFailed,
)
from app.form.wizard import WizardController
from app.orchestration.notifications import InquiryNotifier
from app.orchestration.submission import SubmissionPipeline
from app.providers.datastore.base import InquiryStore
from app.providers.email.base import EmailSender
from app.providers.pdf.base import PdfRenderer
from app.repositories.wizard_sessions import WizardSessionRegistry
from app.utils.formatting import pdf_download_filename
from app.web.forms import DocumentForm, FieldChangeForm, JumpForm, SendInquiryForm

logger = logging.getLogger(__name__)

router = APIRouter()


def _wizard_view(session_id: str, wizard: WizardController) -> Dict[str, Any]:
    """JSON view of a wizard session."""
    form_data, _ = wizard.export_document_payload()
    return {
        "session_id": session_id,
        "active_section": wizard.state.active_section,
        "sections": [
            {
                "index": index,
                "title": section.title,
                "description": section.description,
                "fields": list(section.fields),
                "required": [name for name in section.fields if name in section.required],
            }
            for index, section in enumerate(wizard.sections)
        ],
        "values": form_data,
        "errors": dict(wizard.state.errors),
        "progress": wizard.progress,
        "nights": wizard.nights,
        "is_valid": wizard.is_valid(),
        "can_go_next": wizard.can_go_next,
        "can_go_previous": wizard.can_go_previous,
    }


def _get_wizard(session_id: str, registry: WizardSessionRegistry) -> WizardController:
    wizard = registry.get_session(session_id)
    if wizard is None:
        raise HTTPException(status_code=404, detail="Wizard session not found")
    return wizard


# Wizard session API

@router.post("/api/v1/wizard", status_code=status.HTTP_201_CREATED)
async def create_wizard(registry: WizardSessionRegistry = Depends(get_wizard_registry)):
    """Start a new wizard session."""
    session_id = registry.create_session()
    return _wizard_view(session_id, registry.get_session(session_id))


@router.get("/api/v1/wizard/{session_id}")
async def get_wizard(
    session_id: str,
    registry: WizardSessionRegistry = Depends(get_wizard_registry),
):
    """Current state of a wizard session."""
    return _wizard_view(session_id, _get_wizard(session_id, registry))


@router.delete("/api/v1/wizard/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_wizard(
    session_id: str,
    registry: WizardSessionRegistry = Depends(get_wizard_registry),
):
    """Discard a wizard session."""
    if not registry.discard_session(session_id):
        raise HTTPException(status_code=404, detail="Wizard session not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/api/v1/wizard/{session_id}/fields")
async def change_field(
    session_id: str,
    form: FieldChangeForm,
    registry: WizardSessionRegistry = Depends(get_wizard_registry),
):
    """Set one field and revalidate it."""
    wizard = _get_wizard(session_id, registry)
    try:
        wizard.change_field(form.field, form.value)
    except ValueError as e:
        # FieldShapeError included
        raise HTTPException(status_code=400, detail=str(e))
    return _wizard_view(session_id, wizard)


@router.post("/api/v1/wizard/{session_id}/next")
async def next_section(
    session_id: str,
    registry: WizardSessionRegistry = Depends(get_wizard_registry),
):
    """Advance to the next section."""
    wizard = _get_wizard(session_id, registry)
    wizard.go_next()
    return _wizard_view(session_id, wizard)


@router.post("/api/v1/wizard/{session_id}/previous")
async def previous_section(
    session_id: str,
    registry: WizardSessionRegistry = Depends(get_wizard_registry),
):
    """Go back one section."""
    wizard = _get_wizard(session_id, registry)
    wizard.go_previous()
    return _wizard_view(session_id, wizard)


@router.post("/api/v1/wizard/{session_id}/jump")
async def jump_to_section(
    session_id: str,
    form: JumpForm,
    registry: WizardSessionRegistry = Depends(get_wizard_registry),
):
    """Activate a section directly."""
    wizard = _get_wizard(session_id, registry)
    try:
        wizard.jump_to(form.index)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _wizard_view(session_id, wizard)


@router.post("/api/v1/wizard/{session_id}/clear-section")
async def clear_section(
    session_id: str,
    registry: WizardSessionRegistry = Depends(get_wizard_registry),
):
    """Clear the active section's fields."""
    wizard = _get_wizard(session_id, registry)
    wizard.clear_section()
    return _wizard_view(session_id, wizard)


@router.post("/api/v1/wizard/{session_id}/reset")
async def reset_wizard(
    session_id: str,
    registry: WizardSessionRegistry = Depends(get_wizard_registry),
):
    """Clear the whole form and return to the first section."""
    wizard = _get_wizard(session_id, registry)
    wizard.reset()
    return _wizard_view(session_id, wizard)


@router.post("/api/v1/wizard/{session_id}/submit")
async def submit_wizard(
    session_id: str,
    registry: WizardSessionRegistry = Depends(get_wizard_registry),
    store: InquiryStore = Depends(get_inquiry_store),
):
    """Persist the inquiry.

    The response carries the submitted snapshot so the client can still ask
    for the PDF or the emails after the form has been reset.
    """
    wizard = _get_wizard(session_id, registry)
    form_data, dates = wizard.export_document_payload()

    pipeline = SubmissionPipeline(store)
    try:
        record_id = await pipeline.submit(wizard)
    except ValidationFailed as e:
        return JSONResponse(
            status_code=422,
            content={"success": False, "message": str(e), "errors": e.errors},
        )
    except PersistenceFailed as e:
        return JSONResponse(
            status_code=502,
            content={
                "success": False,
                "message": f"Error saving inquiry: {e.message}",
                "status": e.status,
                "status_text": e.status_text,
            },
        )
    except UnknownResponse as e:
        return JSONResponse(
            status_code=502,
            content={"success": False, "message": e.message},
        )

    return {
        "success": True,
        "message": "Inquiry submitted successfully",
        "id": record_id,
        "formData": form_data,
        "dates": dates,
        "wizard": _wizard_view(session_id, wizard),
    }


# Documents and notifications

@router.post("/download-pdf")
async def download_pdf(
    form: DocumentForm,
    settings: Settings = Depends(get_settings),
    renderer: PdfRenderer = Depends(get_pdf_renderer),
):
    """Render the inquiry PDF for download."""
    if form.strategy:
        renderer = build_pdf_renderer(settings, form.strategy)

    try:
        pdf_bytes = await renderer.render(form.form_data, form.dates)
    except PdfRenderError as e:
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Failed to generate PDF", "error": str(e)},
        )
    except Exception as e:
        logger.error(f"Unexpected error generating PDF: {e}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Failed to generate PDF", "error": str(e)},
        )

    filename = pdf_download_filename(form.form_data.get("Customer Name"))
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/send-inquiry")
async def send_inquiry(
    form: SendInquiryForm,
    settings: Settings = Depends(get_settings),
    renderer: PdfRenderer = Depends(get_pdf_renderer),
    sender: EmailSender = Depends(get_email_sender),
):
    """Email the inquiry PDF to the agency and the customer."""
    if form.strategy:
        renderer = build_pdf_renderer(settings, form.strategy)
    notifier = InquiryNotifier(settings, renderer, sender)

    try:
        report = await notifier.send_inquiry(
            form.form_data,
            form.dates,
            customer_email=form.customer_email,
            agency_email=form.agency_email,
        )
    except NotificationFailed as e:
        logger.error(f"Inquiry emails not sent: {e}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Failed to send inquiry", "error": e.message},
        )

    details = {
        "agencyMessageId": report.agency.message_id,
        "customerMessageId": report.customer.message_id,
    }
    if report.all_sent:
        return {"success": True, "message": "Inquiry sent successfully", "details": details}

    error = "; ".join(f"{channel}: {message}" for channel, message in report.errors().items())
    if report.any_sent:
        return JSONResponse(
            status_code=207,
            content={
                "success": False,
                "message": "Inquiry partially sent",
                "error": error,
                "details": details,
            },
        )
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Failed to send inquiry", "error": error},
    )


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.utcnow().isoformat()}
