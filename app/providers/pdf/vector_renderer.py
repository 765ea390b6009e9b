"""Vector PDF strategy.

Draws the inquiry summary directly onto A4 pages: header band, shaded
section bars, wrapped label/value lines and a footer on the last page.
"""

import asyncio
import logging
import math
from typing import Any, Dict, Optional

import pymupdf

from app.errors import PdfRenderError
from app.providers.pdf.base import PdfRenderer
from app.providers.pdf.summary import InquirySummary, build_inquiry_summary

logger = logging.getLogger(__name__)

_PAGE_W, _PAGE_H = pymupdf.paper_size("a4")
_MARGIN = 40
_BOTTOM = _PAGE_H - 60
_FOOTER_H = 90

_BRAND = (228 / 255, 69 / 255, 70 / 255)
_SHADE = (245 / 255, 245 / 255, 245 / 255)
_MUTED = (0.58, 0.64, 0.72)
_BLACK = (0, 0, 0)
_WHITE = (1, 1, 1)

_BODY_SIZE = 10
_LINE_H = 14


class _Canvas:
    """Cursor over a growing document; starts new pages as text runs out."""

    def __init__(self, doc):
        self.doc = doc
        self.page = doc.new_page(width=_PAGE_W, height=_PAGE_H)
        self.y = _MARGIN

    def ensure(self, height: float) -> None:
        if self.y + height > _BOTTOM:
            self.page = self.doc.new_page(width=_PAGE_W, height=_PAGE_H)
            self.y = _MARGIN

    def text_block(self, text: str, x: float, fontname: str = "helv",
                   fontsize: float = _BODY_SIZE, color=_BLACK) -> None:
        width = _PAGE_W - _MARGIN - x
        length = pymupdf.get_text_length(text, fontname=fontname, fontsize=fontsize)
        lines = max(1, math.ceil(length / width))
        height = lines * _LINE_H + 4
        self.ensure(height)
        rect = pymupdf.Rect(x, self.y, _PAGE_W - _MARGIN, self.y + height)
        rc = self.page.insert_textbox(rect, text, fontsize=fontsize, fontname=fontname, color=color)
        if rc < 0:
            # Estimate was short; give the text the rest of the page
            rect = pymupdf.Rect(x, self.y, _PAGE_W - _MARGIN, _BOTTOM)
            self.page.insert_textbox(rect, text, fontsize=fontsize, fontname=fontname, color=color)
            self.y = _BOTTOM
        else:
            self.y += height


class VectorPdfRenderer(PdfRenderer):
    """Builds the PDF with drawing primitives instead of a template."""

    async def render(
        self,
        form_data: Dict[str, Any],
        dates: Dict[str, Optional[str]],
    ) -> bytes:
        """Draw the summary and return PDF bytes."""
        summary = build_inquiry_summary(form_data, dates)
        try:
            pdf_bytes = await asyncio.to_thread(self.draw, summary)
        except Exception as e:
            logger.error(f"Vector PDF generation failed: {e}")
            raise PdfRenderError(f"PDF generation failed: {e}") from e

        logger.info(f"Generated vector PDF ({len(pdf_bytes)} bytes)")
        return pdf_bytes

    def draw(self, summary: InquirySummary) -> bytes:
        doc = pymupdf.open()
        canvas = _Canvas(doc)

        self._draw_header(canvas, summary)

        for section in summary.sections:
            self._draw_section_bar(canvas, section.title.upper())
            for row in section.rows:
                if row.items:
                    canvas.text_block(f"{row.label}:", _MARGIN + 10, fontname="hebo")
                    for item in row.items:
                        canvas.text_block(item, _MARGIN + 24)
                else:
                    color = _MUTED if row.missing else _BLACK
                    canvas.text_block(f"{row.label}: {row.value}", _MARGIN + 10, color=color)

        self._draw_footer(canvas)

        result = doc.tobytes()
        doc.close()
        return result

    def _draw_header(self, canvas: _Canvas, summary: InquirySummary) -> None:
        page = canvas.page
        page.draw_rect(pymupdf.Rect(0, 0, _PAGE_W, 90), color=None, fill=_BRAND)
        page.insert_textbox(
            pymupdf.Rect(_MARGIN, 24, _PAGE_W / 2, 54),
            self.settings.company_name.upper(),
            fontsize=18, fontname="hebo", color=_WHITE,
        )
        page.insert_textbox(
            pymupdf.Rect(_PAGE_W / 2, 24, _PAGE_W - _MARGIN, 50),
            "TRAVEL INQUIRY",
            fontsize=18, fontname="hebo", color=_WHITE, align=pymupdf.TEXT_ALIGN_RIGHT,
        )
        page.insert_textbox(
            pymupdf.Rect(_PAGE_W / 2, 52, _PAGE_W - _MARGIN, 72),
            "Detailed Travel Proposal",
            fontsize=11, fontname="helv", color=_WHITE, align=pymupdf.TEXT_ALIGN_RIGHT,
        )

        canvas.y = 104
        meta = (
            ("Customer", summary.customer_name),
            ("Inquiry Date", summary.inquiry_date),
            ("Reference ID", summary.reference),
            ("Status", summary.status),
        )
        for label, value in meta:
            canvas.text_block(f"{label}: {value}", _MARGIN, fontsize=9, color=(0.28, 0.33, 0.41))

    def _draw_section_bar(self, canvas: _Canvas, title: str) -> None:
        canvas.y += 8
        canvas.ensure(22 + 2 * _LINE_H)
        page, y = canvas.page, canvas.y
        page.draw_rect(pymupdf.Rect(_MARGIN - 10, y, _PAGE_W - _MARGIN + 10, y + 20), color=None, fill=_SHADE)
        page.draw_line(
            pymupdf.Point(_MARGIN - 10, y),
            pymupdf.Point(_PAGE_W - _MARGIN + 10, y),
            color=_BRAND,
            width=1,
        )
        page.insert_text(pymupdf.Point(_MARGIN, y + 14), title, fontsize=11, fontname="hebo", color=_BRAND)
        canvas.y = y + 26

    def _draw_footer(self, canvas: _Canvas) -> None:
        if canvas.y > _PAGE_H - _FOOTER_H - 10:
            canvas.page = canvas.doc.new_page(width=_PAGE_W, height=_PAGE_H)
        page = canvas.page
        top = _PAGE_H - _FOOTER_H
        page.draw_rect(pymupdf.Rect(0, top, _PAGE_W, _PAGE_H), color=None, fill=_SHADE)

        lines = (
            (self.settings.company_name.upper(), 13, "hebo", _BRAND),
            ("Professional Travel Planning Services", 9, "helv", _BLACK),
            (self.settings.company_contact_line, 8, "helv", _BLACK),
            (
                "This inquiry was generated automatically. Please contact us for any "
                "modifications or additional requirements.",
                7, "helv", (0.4, 0.4, 0.4),
            ),
        )
        y = top + 12
        for text, size, font, color in lines:
            page.insert_textbox(
                pymupdf.Rect(_MARGIN, y, _PAGE_W - _MARGIN, y + size + 8),
                text, fontsize=size, fontname=font, color=color, align=pymupdf.TEXT_ALIGN_CENTER,
            )
            y += size + 8

    def get_renderer_name(self) -> str:
        """Get the strategy name."""
        return "vector"
