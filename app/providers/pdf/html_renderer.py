"""HTML template PDF strategy.

Fills the inquiry summary template and prints it to A4 pages.
"""

import asyncio
import io
import logging
from datetime import datetime
from typing import Any, Dict, Optional

import pymupdf

from app.errors import PdfRenderError
from app.providers.pdf.base import PdfRenderer
from app.providers.pdf.summary import build_inquiry_summary
from app.utils.templates import get_template_env

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "inquiry_summary.html"
PAGE_MARGIN = 36  # points


class HtmlPdfRenderer(PdfRenderer):
    """Renders the summary through an HTML template and a print step."""

    def render_html(
        self,
        form_data: Dict[str, Any],
        dates: Dict[str, Optional[str]],
        now: Optional[datetime] = None,
    ) -> str:
        """Fill the HTML template; also used for previews.
        Args:
            form_data (Dict[str, Any]): Values keyed by form field name.
            dates (Dict[str, Optional[str]]): Date fields keyed by form field name.
            now (Optional[datetime]): Generation time.
        Returns:
            str: Complete HTML document.
        """
        summary = build_inquiry_summary(form_data, dates, now=now)
        template = get_template_env().get_template(TEMPLATE_NAME)
        return template.render(
            summary=summary,
            company_name=self.settings.company_name,
            contact_line=self.settings.company_contact_line,
        )

    async def render(
        self,
        form_data: Dict[str, Any],
        dates: Dict[str, Optional[str]],
    ) -> bytes:
        """Render the filled template to PDF bytes."""
        try:
            html = self.render_html(form_data, dates)
            pdf_bytes = await asyncio.to_thread(self._print, html)
        except Exception as e:
            logger.error(f"HTML PDF generation failed: {e}")
            raise PdfRenderError(f"PDF generation failed: {e}") from e

        logger.info(f"Generated HTML-template PDF ({len(pdf_bytes)} bytes)")
        return pdf_bytes

    def _print(self, html: str) -> bytes:
        """Lay the HTML out over as many A4 pages as it needs."""
        buffer = io.BytesIO()
        writer = pymupdf.DocumentWriter(buffer)
        story = pymupdf.Story(html=html)

        mediabox = pymupdf.paper_rect("a4")
        where = mediabox + (PAGE_MARGIN, PAGE_MARGIN, -PAGE_MARGIN, -PAGE_MARGIN)

        more = True
        while more:
            device = writer.begin_page(mediabox)
            more, _ = story.place(where)
            story.draw(device)
            writer.end_page()
        writer.close()
        return buffer.getvalue()

    def get_renderer_name(self) -> str:
        """Get the strategy name."""
        return "html"
