"""Inquiry summary model shared by every PDF strategy.

Both renderers draw from the same summary so section order, labels and
fallback text are identical whichever strategy produced the document.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.form.catalog import NONE_OPTION, OTHER_OPTION
from app.utils.formatting import (
    NOT_PROVIDED,
    NOT_SPECIFIED,
    format_display_date,
    join_list,
)


class SummaryRow(BaseModel):
    """Label/value line; ``items`` holds one entry per line for list rows."""
    label: str
    value: str = ""
    items: List[str] = Field(default_factory=list)
    missing: bool = False


class SummarySection(BaseModel):
    title: str
    rows: List[SummaryRow] = Field(default_factory=list)


class InquirySummary(BaseModel):
    customer_name: str
    inquiry_date: str
    status: str
    generated_at: str
    reference: str
    sections: List[SummarySection] = Field(default_factory=list)


def _scalar(form_data: Dict[str, Any], key: str) -> str:
    value = form_data.get(key)
    if value is None or isinstance(value, (list, dict)):
        return ""
    return str(value).strip()


def _row(label: str, value: str, fallback: str) -> SummaryRow:
    if value:
        return SummaryRow(label=label, value=value)
    return SummaryRow(label=label, value=fallback, missing=True)


def _list_row(label: str, value: Any) -> SummaryRow:
    if isinstance(value, list) and join_list(value):
        return SummaryRow(label=label, value=join_list(value))
    return SummaryRow(label=label, value=NOT_SPECIFIED, missing=True)


def _date_row(label: str, raw: Any) -> SummaryRow:
    text = format_display_date(raw)
    return SummaryRow(label=label, value=text, missing=text == NOT_SPECIFIED)


def _hotel_category_row(form_data: Dict[str, Any]) -> SummaryRow:
    category = _scalar(form_data, "Hotel Category")
    if category == OTHER_OPTION:
        other = _scalar(form_data, "Other Hotel Category")
        if other:
            return SummaryRow(label="Hotel Category", value=f"Other: {other}")
        return SummaryRow(label="Hotel Category", value="Other (not specified)", missing=True)
    return _row("Hotel Category", category, NOT_SPECIFIED)


def _room_row(value: Any) -> SummaryRow:
    if not isinstance(value, list) or not value:
        return SummaryRow(label="Room Selection", value=NOT_SPECIFIED, missing=True)

    lines = []
    for index, room in enumerate(value, start=1):
        room = room if isinstance(room, dict) else {}
        lines.append(
            f"{index}. {room.get('category') or 'N/A'} - {room.get('type') or 'N/A'} "
            f"(Quantity: {room.get('quantity') or 0})"
        )
    return SummaryRow(label="Room Selection", items=lines)


def _date_source(form_data: Dict[str, Any], dates: Dict[str, Any], key: str) -> Any:
    return dates.get(key) or form_data.get(key)


def build_inquiry_summary(
    form_data: Dict[str, Any],
    dates: Dict[str, Any],
    now: Optional[datetime] = None,
) -> InquirySummary:
    """Lay out a form snapshot as titled sections with fallback text.
    Args:
        form_data (Dict[str, Any]): Values keyed by form field name.
        dates (Dict[str, Any]): Date fields keyed by form field name.
        now (Optional[datetime]): Generation time, defaults to the current time.
    Returns:
        InquirySummary: Header metadata plus ordered sections.
    """
    now = now or datetime.now()
    dates = dates or {}

    arrangement = _scalar(form_data, "Special Arrangements")
    arrangement_rows = [_row("Special Arrangements", arrangement, NONE_OPTION)]
    if arrangement and arrangement != NONE_OPTION:
        arrangement_rows.append(
            _date_row("Date", _date_source(form_data, dates, "Special Arrangements Date"))
        )

    sections = [
        SummarySection(title="Customer Information", rows=[
            _row("Full Name", _scalar(form_data, "Customer Name"), NOT_PROVIDED),
            _row("Email", _scalar(form_data, "Customer Email"), NOT_PROVIDED),
            _row("Contact", _scalar(form_data, "Customer Contact"), NOT_PROVIDED),
            _row("Nationality", _scalar(form_data, "Customer Nationality"), NOT_PROVIDED),
            _row("Country of Residence", _scalar(form_data, "Customer Country"), NOT_PROVIDED),
        ]),
        SummarySection(title="Flight Information", rows=[
            _row("Arrival Flight", _scalar(form_data, "Arrival Flight"), NOT_SPECIFIED),
            _row("Departure Flight", _scalar(form_data, "Departure Flight"), NOT_SPECIFIED),
        ]),
        SummarySection(title="Travel Dates", rows=[
            _date_row("Arrival Date", _date_source(form_data, dates, "Arrival Date")),
            _date_row("Departure Date", _date_source(form_data, dates, "Departure Date")),
            _row("Number of Nights", _scalar(form_data, "No. of Nights"), NOT_SPECIFIED),
        ]),
        SummarySection(title="Accommodation Preferences", rows=[
            _hotel_category_row(form_data),
            _room_row(form_data.get("Room Selection")),
            _row("Meal Basis", _scalar(form_data, "Basis"), NOT_SPECIFIED),
        ]),
        SummarySection(title="Group Information", rows=[
            _row("Number of Travelers", _scalar(form_data, "No of pax"), NOT_SPECIFIED),
            _row("Children", _scalar(form_data, "Children"), NOT_SPECIFIED),
        ]),
        SummarySection(title="Tour Preferences", rows=[
            _row("Tour Type", _scalar(form_data, "Tour type"), NOT_SPECIFIED),
            _row("Transport", _scalar(form_data, "Transport"), NOT_SPECIFIED),
            _list_row("Interests", form_data.get("Site / Interests")),
            _list_row("Additional Services", form_data.get("Other service")),
        ]),
        SummarySection(title="Special Arrangements", rows=arrangement_rows),
    ]

    return InquirySummary(
        customer_name=_scalar(form_data, "Customer Name") or "N/A",
        inquiry_date=_scalar(form_data, "Inquiry Date") or now.date().isoformat(),
        status=_scalar(form_data, "Status") or "New Inquiry",
        generated_at=f"{now.strftime('%B')} {now.day}, {now.year} {now.strftime('%I:%M %p')}",
        reference=f"INQ-{int(now.timestamp() * 1000) % 1_000_000:06d}",
        sections=sections,
    )
