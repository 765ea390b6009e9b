"""Mapping from form state to the client_inquiry persistence schema."""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from app.form.catalog import NONE_OPTION, OTHER_OPTION
from app.form.state import FormState
from app.form.validation import parse_iso_date
from app.form.values import RoomSelectionsValue, StringListValue, text_of

# Record fields the datastore refuses to store empty
REQUIRED_RECORD_FIELDS = (
    "full_name",
    "email_address",
    "contact_number",
    "arrival_date",
    "departure_date",
)


def to_timestamp(value: Optional[str]) -> Optional[str]:
    """Normalize a YYYY-MM-DD date to an ISO timestamp at UTC midnight."""
    parsed = parse_iso_date(value)
    if parsed is None:
        return None
    return datetime(parsed.year, parsed.month, parsed.day, tzinfo=timezone.utc).isoformat()


def _to_int(value: str) -> Optional[int]:
    if not value:
        return None
    try:
        return int(float(value))
    except (ValueError, OverflowError):
        return 0


def _string_list(state: FormState, field_name: str) -> Optional[List[str]]:
    value = state.get(field_name)
    if isinstance(value, StringListValue) and value.items:
        return list(value.items)
    return None


def _hotel_category(state: FormState) -> str:
    category = text_of(state.get("Hotel Category"))
    if category == OTHER_OPTION:
        return f"Other: {text_of(state.get('Other Hotel Category'))}"
    return category


def _room_type(state: FormState) -> str:
    value = state.get("Room Selection")
    rooms = value.rooms if isinstance(value, RoomSelectionsValue) else []
    return json.dumps([room.to_plain() for room in rooms], separators=(",", ":"))


def _other_service(state: FormState) -> List[str]:
    services = _string_list(state, "Other service")
    if not services or NONE_OPTION in services:
        return [NONE_OPTION]
    return services


def build_inquiry_record(state: FormState) -> Dict[str, Any]:
    """Flatten a form state into a client_inquiry row.

    Pure and deterministic: the same state always yields the same record.
    Args:
        state (FormState): Form state to transform.
    Returns:
        Dict[str, Any]: Record keyed by datastore column name.
    """
    return {
        "full_name": text_of(state.get("Customer Name")),
        "email_address": text_of(state.get("Customer Email")),
        "contact_number": text_of(state.get("Customer Contact")),
        "nationality": text_of(state.get("Customer Nationality")),
        "country": text_of(state.get("Customer Country")),
        "arrival_date": to_timestamp(text_of(state.get("Arrival Date"))),
        "departure_date": to_timestamp(text_of(state.get("Departure Date"))),
        "no_of_nights": _to_int(text_of(state.get("No. of Nights"))),
        "hotel_category": _hotel_category(state),
        "room_type": _room_type(state),
        "basis": text_of(state.get("Basis")),
        "no_of_pax": _to_int(text_of(state.get("No of pax"))),
        "children": text_of(state.get("Children")),
        "tour_type": text_of(state.get("Tour type")),
        "transport": text_of(state.get("Transport")),
        "site_interests": _string_list(state, "Site / Interests"),
        "other_service": _other_service(state),
        "special_arrangements": text_of(state.get("Special Arrangements")),
        "special_arrangements_date": to_timestamp(text_of(state.get("Special Arrangements Date"))),
        "arrival_flight": text_of(state.get("Arrival Flight")),
        "departure_flight": text_of(state.get("Departure Flight")),
    }


def missing_record_fields(record: Dict[str, Any]) -> Dict[str, str]:
    """Errors for required record fields that came out empty."""
    errors = {}
    for field_name in REQUIRED_RECORD_FIELDS:
        if record.get(field_name) in (None, ""):
            label = field_name.replace("_", " ").title()
            errors[field_name] = f"{label} is required"
    return errors
