"""SMTP email sender."""

import asyncio
import logging
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import formatdate, make_msgid

from app.config import Settings
from app.errors import EmailDeliveryError
from app.providers.email.base import EmailSender, OutgoingEmail

logger = logging.getLogger(__name__)


class SmtpEmailSender(EmailSender):
    """Sends email through an SMTP relay (STARTTLS, or implicit TLS on port 465)."""

    def __init__(self, settings: Settings):
        self.host = settings.smtp_host
        self.port = settings.smtp_port
        self.user = settings.smtp_user
        self.password = settings.smtp_pass
        self.default_sender = settings.smtp_from or settings.smtp_user
        self.timeout = settings.smtp_timeout_seconds

    def build_message(self, email: OutgoingEmail) -> EmailMessage:
        """Assemble the MIME message, attachments included."""
        sender = email.sender or self.default_sender
        if not sender:
            raise EmailDeliveryError("No sender address configured (SMTP_FROM or SMTP_USER)")

        message = EmailMessage()
        message["From"] = sender
        message["To"] = email.to
        message["Subject"] = email.subject
        message["Date"] = formatdate(localtime=True)
        message["Message-ID"] = make_msgid(domain=sender.split("@")[-1] if "@" in sender else None)
        message.set_content("This message requires an HTML-capable email client.")
        message.add_alternative(email.html, subtype="html")

        for attachment in email.attachments:
            maintype, _, subtype = attachment.content_type.partition("/")
            message.add_attachment(
                attachment.content,
                maintype=maintype,
                subtype=subtype or "octet-stream",
                filename=attachment.filename,
            )
        return message

    async def send(self, email: OutgoingEmail) -> str:
        """Send one email; blocking SMTP I/O runs in a worker thread."""
        try:
            message = self.build_message(email)
        except (ValueError, TypeError) as e:
            # Header values with CR/LF, malformed addresses
            logger.error(f"Could not build email to {email.to!r}: {e}")
            raise EmailDeliveryError(f"Invalid email content: {e}") from e

        try:
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP delivery to {email.to} failed: {e}")
            raise EmailDeliveryError(str(e)) from e

        logger.info(f"Email '{email.subject}' sent to {email.to}")
        return message["Message-ID"]

    def _deliver(self, message: EmailMessage) -> None:
        context = ssl.create_default_context()
        if self.port == 465:
            smtp = smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout, context=context)
        else:
            smtp = smtplib.SMTP(self.host, self.port, timeout=self.timeout)

        with smtp:
            if self.port != 465:
                smtp.starttls(context=context)
            if self.user and self.password:
                smtp.login(self.user, self.password)
            smtp.send_message(message)

    def get_sender_name(self) -> str:
        """Get the transport name."""
        return "smtp"
