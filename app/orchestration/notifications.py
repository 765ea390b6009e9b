"""Inquiry notification fan-out.

Renders the inquiry PDF once, then emails the agency and the customer.
Each channel succeeds or fails on its own: a failed agency email never
stops the customer confirmation, and the reverse.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel

from app.config import Settings
from app.errors import EmailDeliveryError, NotificationFailed, PdfRenderError
from app.providers.email.base import EmailAttachment, EmailSender, OutgoingEmail
from app.providers.pdf.base import PdfRenderer
from app.utils.formatting import NOT_SPECIFIED, format_display_date, name_slug
from app.utils.templates import get_template_env

logger = logging.getLogger(__name__)

AGENCY = "agency"
CUSTOMER = "customer"


class ChannelResult(BaseModel):
    """Outcome of one email channel."""
    channel: str
    message_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.message_id is not None and self.error is None


class NotificationReport(BaseModel):
    agency: ChannelResult
    customer: ChannelResult

    @property
    def all_sent(self) -> bool:
        return self.agency.ok and self.customer.ok

    @property
    def any_sent(self) -> bool:
        return self.agency.ok or self.customer.ok

    def errors(self) -> Dict[str, str]:
        return {
            result.channel: result.error
            for result in (self.agency, self.customer)
            if result.error
        }


def _text(form_data: Dict[str, Any], key: str) -> str:
    value = form_data.get(key)
    if value is None or isinstance(value, (list, dict)):
        return ""
    return str(value).strip()


class InquiryNotifier:
    """Sends agency and customer emails for a submitted inquiry."""

    def __init__(self, settings: Settings, renderer: PdfRenderer, sender: EmailSender):
        self.settings = settings
        self.renderer = renderer
        self.sender = sender

    def _details(self, form_data: Dict[str, Any], dates: Dict[str, Any]) -> Dict[str, str]:
        """Values shown in the email bodies, with fallback text applied."""
        return {
            "customer_name": _text(form_data, "Customer Name"),
            "customer_email": _text(form_data, "Customer Email"),
            "customer_contact": _text(form_data, "Customer Contact"),
            "customer_nationality": _text(form_data, "Customer Nationality"),
            "customer_country": _text(form_data, "Customer Country"),
            "arrival_date": format_display_date(dates.get("Arrival Date") or form_data.get("Arrival Date")),
            "departure_date": format_display_date(dates.get("Departure Date") or form_data.get("Departure Date")),
            "nights": _text(form_data, "No. of Nights") or NOT_SPECIFIED,
            "travelers": _text(form_data, "No of pax") or NOT_SPECIFIED,
            "tour_type": _text(form_data, "Tour type") or NOT_SPECIFIED,
        }

    def build_agency_email(self, details: Dict[str, str], recipient: str,
                           pdf_bytes: bytes, now: datetime) -> OutgoingEmail:
        html = get_template_env().get_template("email_agency.html").render(
            details=details,
            company_name=self.settings.company_name,
            generated_at=now.strftime("%Y-%m-%d %H:%M"),
        )
        stamp = int(now.timestamp() * 1000)
        return OutgoingEmail(
            to=recipient,
            subject=f"New Travel Inquiry from {details['customer_name'] or 'a customer'}",
            html=html,
            attachments=[EmailAttachment(
                filename=f"travel-inquiry-{name_slug(details['customer_name'])}-{stamp}.pdf",
                content=pdf_bytes,
            )],
        )

    def build_customer_email(self, details: Dict[str, str], recipient: str,
                             pdf_bytes: bytes, now: datetime) -> OutgoingEmail:
        html = get_template_env().get_template("email_customer.html").render(
            details=details,
            company_name=self.settings.company_name,
            contact_line=self.settings.company_contact_line,
        )
        stamp = int(now.timestamp() * 1000)
        return OutgoingEmail(
            to=recipient,
            subject="Travel Inquiry Confirmation - We've Received Your Request",
            html=html,
            attachments=[EmailAttachment(
                filename=f"your-travel-inquiry-{stamp}.pdf",
                content=pdf_bytes,
            )],
        )

    async def _send(self, channel: str, recipient: Optional[str],
                    build: Callable[[str], OutgoingEmail]) -> ChannelResult:
        if not recipient:
            logger.warning(f"No recipient for {channel} email, skipping")
            return ChannelResult(channel=channel, error="No recipient address")
        try:
            message_id = await self.sender.send(build(recipient))
        except EmailDeliveryError as e:
            logger.error(f"{channel.capitalize()} email failed: {e}")
            return ChannelResult(channel=channel, error=str(e))
        except Exception as e:
            # Failure stays on this channel
            logger.exception(f"Unexpected error sending {channel} email: {e}")
            return ChannelResult(channel=channel, error=f"Unexpected error: {e}")
        logger.info(f"{channel.capitalize()} email sent: {message_id}")
        return ChannelResult(channel=channel, message_id=message_id)

    async def send_inquiry(
        self,
        form_data: Dict[str, Any],
        dates: Dict[str, Optional[str]],
        customer_email: Optional[str] = None,
        agency_email: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> NotificationReport:
        """Render the PDF and email both parties.
        Args:
            form_data (Dict[str, Any]): Values keyed by form field name.
            dates (Dict[str, Optional[str]]): Date fields keyed by form field name.
            customer_email (Optional[str]): Customer address; defaults to the form's email.
            agency_email (Optional[str]): Agency address; defaults to the configured one.
            now (Optional[datetime]): Send time used in names and timestamps.
        Returns:
            NotificationReport: Per-channel outcome.
        Raises:
            NotificationFailed: If the PDF could not be produced, so nothing was sent.
        """
        now = now or datetime.now()
        dates = dates or {}

        try:
            pdf_bytes = await self.renderer.render(form_data, dates)
        except PdfRenderError as e:
            raise NotificationFailed("pdf", str(e)) from e

        details = self._details(form_data, dates)
        agency_to = agency_email or self.settings.agency_email
        customer_to = customer_email or details["customer_email"]

        agency = await self._send(
            AGENCY,
            agency_to,
            lambda to: self.build_agency_email(details, to, pdf_bytes, now),
        )
        customer = await self._send(
            CUSTOMER,
            customer_to,
            lambda to: self.build_customer_email(details, to, pdf_bytes, now),
        )
        return NotificationReport(agency=agency, customer=customer)
