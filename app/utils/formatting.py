"""Display formatting shared by documents and emails."""

import re
from datetime import date, datetime
from typing import Any, Iterable, Optional, Union

NOT_PROVIDED = "Not provided"
NOT_SPECIFIED = "Not specified"
INVALID_DATE = "Invalid date"

PDF_FILENAME_PREFIX = "Serendia-Travel-Inquiry"


def parse_any_date(value: Union[str, date, None]) -> Optional[date]:
    """Parse a date or ISO timestamp string; None when it cannot be read."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def format_display_date(value: Union[str, date, None]) -> str:
    """Long US-style date, e.g. "January 5, 2025"."""
    if value is None or value == "":
        return NOT_SPECIFIED
    parsed = parse_any_date(value)
    if parsed is None:
        return INVALID_DATE
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


def join_list(items: Iterable[Any]) -> str:
    return ", ".join(str(item) for item in items if str(item).strip())


def name_slug(name: Optional[str], default: str = "customer") -> str:
    """Whitespace collapsed to dashes, reduced to header-safe characters."""
    slug = re.sub(r"\s+", "-", (name or "").strip())
    slug = re.sub(r"[^A-Za-z0-9._-]", "", slug)
    return slug or default


def pdf_download_filename(customer_name: Optional[str]) -> str:
    return f"{PDF_FILENAME_PREFIX}-{name_slug(customer_name)}.pdf"
