"""Validation engine for the inquiry form.

Rules are checked in a fixed order and the first failing rule wins:
required-ness, conditional requirement, field format, then the composite
room selector rule.
"""

import math
import re
from datetime import date
from typing import Any, Dict, List, Optional

from app.form.catalog import FieldKind, NONE_OPTION, OTHER_OPTION, get_field_spec
from app.form.sections import ordered_required_fields, required_fields
from app.form.state import FormState
from app.form.values import (
    RoomSelection,
    RoomSelectionsValue,
    StringListValue,
    is_blank,
    text_of,
    to_field_value,
)

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")
CONTACT_PATTERN = re.compile(r"^[\d\s+\-()]{7,}$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

FLIGHT_FIELDS = ("Arrival Flight", "Departure Flight")
CONDITIONAL_FIELDS = ("Other Hotel Category", "Special Arrangements Date")
REQUIRED_FIELDS = required_fields()

DATE_ORDER_ERROR = "Departure date must be after arrival date"


def parse_iso_date(text: Optional[str]) -> Optional[date]:
    """Parse a strict YYYY-MM-DD string, None if it is not a real date."""
    if not text or not DATE_PATTERN.match(text.strip()):
        return None
    try:
        return date.fromisoformat(text.strip())
    except ValueError:
        return None


def compute_nights(arrival: Optional[str], departure: Optional[str]) -> Optional[int]:
    """Calendar-day difference between departure and arrival.
    Args:
        arrival (Optional[str]): Arrival date as YYYY-MM-DD.
        departure (Optional[str]): Departure date as YYYY-MM-DD.
    Returns:
        Optional[int]: Night count (may be negative), None unless both dates parse.
    """
    arrival_date = parse_iso_date(arrival)
    departure_date = parse_iso_date(departure)
    if arrival_date is None or departure_date is None:
        return None
    return (departure_date - arrival_date).days


def validate_room_selections(rooms: List[RoomSelection]) -> Optional[str]:
    """Check the composite room selector value."""
    if not rooms:
        return "Please add at least one room"

    if any(not room.is_complete for room in rooms):
        return "Please fill all room details"

    seen = set()
    for room in rooms:
        combination = (room.category, room.type)
        if combination in seen:
            return (
                f"Duplicate room combination: {room.category.value} {room.type.value}. "
                "Increase quantity instead of adding the same room type multiple times."
            )
        seen.add(combination)
    return None


def _conditional_error(field_name: str, value, state: FormState) -> Optional[str]:
    if field_name == "Other Hotel Category":
        if text_of(state.get("Hotel Category")) == OTHER_OPTION and is_blank(value):
            return "Please specify the hotel category"
    elif field_name == "Special Arrangements Date":
        arrangement = text_of(state.get("Special Arrangements"))
        if arrangement and arrangement != NONE_OPTION and is_blank(value):
            return "Please specify the date for the special arrangement"
    return None


def _format_error(field_name: str, value, state: FormState) -> Optional[str]:
    spec = get_field_spec(field_name)
    text = text_of(value)

    if field_name == "Customer Email":
        if not EMAIL_PATTERN.match(text):
            return "Please enter a valid email address"
    elif field_name == "Customer Contact":
        if not CONTACT_PATTERN.match(text):
            return "Please enter a valid contact number"
    elif field_name == "No of pax":
        try:
            travelers = float(text)
        except ValueError:
            return "Please enter a valid number of travelers"
        if not math.isfinite(travelers) or travelers <= 0:
            return "Please enter a valid number of travelers"
    elif field_name in FLIGHT_FIELDS:
        if len(text) < 3:
            return f"Please enter a valid {field_name.lower()}"

    if spec.kind == FieldKind.DATE:
        if parse_iso_date(text) is None:
            return "Please select a valid date"
        if field_name == "Departure Date":
            nights = compute_nights(text_of(state.get("Arrival Date")), text)
            if nights is not None and nights < 0:
                return DATE_ORDER_ERROR
    elif spec.kind == FieldKind.SELECT:
        if text not in spec.options:
            return f"Please choose a valid option for {field_name}"
    elif spec.kind == FieldKind.MULTISELECT and not spec.allows_custom_values:
        items = value.items if isinstance(value, StringListValue) else []
        unknown = [item for item in items if item not in spec.options]
        if unknown:
            return f"Please choose valid options for {field_name}: {', '.join(unknown)}"
    return None


def validate_field(field_name: str, value: Any, state: FormState) -> Optional[str]:
    """Validate a candidate value for one field.
    Args:
        field_name (str): Field name.
        value (Any): Candidate value, raw or already typed.
        state (FormState): Current form state, for cross-field rules.
    Returns:
        Optional[str]: Error message, or None if the value is valid.
    """
    value = to_field_value(field_name, value)
    spec = get_field_spec(field_name)

    if field_name in REQUIRED_FIELDS:
        # An explicit empty room list is reported by the room rule instead
        missing = value is None if spec.kind == FieldKind.ROOM_SELECTOR else is_blank(value)
        if missing:
            return f"{field_name} is required"

    conditional = _conditional_error(field_name, value, state)
    if conditional:
        return conditional

    if spec.kind == FieldKind.ROOM_SELECTOR:
        if isinstance(value, RoomSelectionsValue):
            return validate_room_selections(value.rooms)
        return None

    if is_blank(value):
        return None

    return _format_error(field_name, value, state)


def collect_form_errors(state: FormState) -> Dict[str, str]:
    """Every error that keeps the form from being submitted.
    Args:
        state (FormState): Current form state.
    Returns:
        Dict[str, str]: Field name to message; empty when the form is valid.
    """
    errors: Dict[str, str] = {}
    for field_name in ordered_required_fields() + list(CONDITIONAL_FIELDS):
        message = validate_field(field_name, state.get(field_name), state)
        if message:
            errors[field_name] = message

    for field_name, message in state.errors.items():
        if message and field_name not in errors:
            errors[field_name] = message
    return errors


def is_form_valid(state: FormState) -> bool:
    return not collect_form_errors(state)
