"""Base email sender interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from pydantic import BaseModel, Field


class EmailAttachment(BaseModel):
    """File attached to an outgoing email."""
    filename: str = Field(description="Attachment file name")
    content: bytes = Field(description="Raw file bytes")
    content_type: str = Field(default="application/pdf", description="MIME type")


class OutgoingEmail(BaseModel):
    """A single HTML email."""
    to: str = Field(description="Recipient address")
    subject: str = Field(description="Subject line")
    html: str = Field(description="HTML body")
    sender: Optional[str] = Field(default=None, description="From address; sender default if unset")
    attachments: List[EmailAttachment] = Field(default_factory=list)


class EmailSender(ABC):
    """Abstract base class for email transports."""

    @abstractmethod
    async def send(self, email: OutgoingEmail) -> str:
        """
        Deliver one email.

        Args:
            email: Message to send

        Returns:
            Message identifier assigned to the delivered email

        Raises:
            EmailDeliveryError: If the message could not be delivered
        """
        pass

    @abstractmethod
    def get_sender_name(self) -> str:
        """Get the name of this transport."""
        pass
