"""Error types for the inquiry service."""

from typing import Dict, Optional


class FieldShapeError(ValueError):
    """Raised when a value does not have the shape its catalog entry requires."""

    def __init__(self, field_name: str, message: str):
        super().__init__(f"{field_name}: {message}")
        self.field_name = field_name


class SubmitError(RuntimeError):
    """Base class for submission failures."""


class ValidationFailed(SubmitError):
    """Form is not valid; nothing was sent to the datastore."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("Form validation failed")
        self.errors = dict(errors)


class PersistenceFailed(SubmitError):
    """Datastore rejected the write."""

    def __init__(self, message: str, status: Optional[int] = None, status_text: str = ""):
        super().__init__(message)
        self.message = message
        self.status = status
        self.status_text = status_text


class UnknownResponse(SubmitError):
    """Collaborator answered with a success shape but no usable payload."""

    def __init__(self, message: str = "No data returned from the datastore"):
        super().__init__(message)
        self.message = message


class NotificationFailed(SubmitError):
    """Email or PDF follow-up failed after the inquiry was persisted."""

    def __init__(self, channel: str, message: str):
        super().__init__(f"{channel}: {message}")
        self.channel = channel
        self.message = message


class DatastoreError(RuntimeError):
    """Raised by datastore collaborators when an insert is rejected."""

    def __init__(self, message: str, status: Optional[int] = None, status_text: str = ""):
        super().__init__(message)
        self.message = message
        self.status = status
        self.status_text = status_text


class PdfRenderError(RuntimeError):
    """Raised by PDF renderers when a document cannot be produced."""


class EmailDeliveryError(RuntimeError):
    """Raised by email senders when a message cannot be delivered."""
