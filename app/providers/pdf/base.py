"""Base PDF renderer interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from app.config import Settings


class PdfRenderer(ABC):
    """Abstract base class for inquiry PDF strategies."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @abstractmethod
    async def render(
        self,
        form_data: Dict[str, Any],
        dates: Dict[str, Optional[str]],
    ) -> bytes:
        """
        Render an inquiry summary PDF.

        Args:
            form_data: Values keyed by form field name
            dates: Date fields keyed by form field name (ISO strings)

        Returns:
            PDF document bytes

        Raises:
            PdfRenderError: If the document cannot be produced
        """
        pass

    @abstractmethod
    def get_renderer_name(self) -> str:
        """Get the name of this strategy."""
        pass
