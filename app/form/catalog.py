"""Field catalog for the travel inquiry form.
Static metadata describing every field the wizard can render.
"""

from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class FieldKind(str, Enum):
    """Input kind of a form field."""
    TEXT = "text"
    DATE = "date"
    SELECT = "select"
    MULTISELECT = "multiselect"
    ROOM_SELECTOR = "room-selector"
    DISPLAY = "display"


class FieldSpec(BaseModel):
    """Immutable description of a single form field."""
    model_config = ConfigDict(frozen=True)

    kind: FieldKind = Field(default=FieldKind.TEXT, description="Input kind")
    options: Tuple[str, ...] = Field(default=(), description="Valid option set for select kinds")
    placeholder: Optional[str] = Field(default=None, description="Placeholder text")
    help_text: Optional[str] = Field(default=None, description="Help text shown under the control")
    allows_custom_values: bool = Field(
        default=False,
        description="Multiselect only: accept values outside the option set",
    )


ROOM_CATEGORIES: Tuple[str, ...] = ("Standard", "Deluxe", "Superior", "Luxury", "Suite")
ROOM_TYPES: Tuple[str, ...] = ("SGL", "DBL", "TRIP", "QTRP")

# Sentinel option meaning "no special arrangement" / "no extra service"
NONE_OPTION = "None"
OTHER_OPTION = "Other"

FIELD_CATALOG: Dict[str, FieldSpec] = {
    "Customer Name": FieldSpec(placeholder="Your full name"),
    "Customer Email": FieldSpec(placeholder="Your email address"),
    "Customer Contact": FieldSpec(placeholder="Your contact number"),
    "Customer Nationality": FieldSpec(placeholder="Your nationality"),
    "Customer Country": FieldSpec(placeholder="Your country"),
    "Arrival Flight": FieldSpec(placeholder="e.g., AA123, 10:30 AM"),
    "Departure Flight": FieldSpec(placeholder="e.g., AA456, 2:15 PM"),
    "Arrival Date": FieldSpec(kind=FieldKind.DATE, placeholder="Select arrival date"),
    "Departure Date": FieldSpec(kind=FieldKind.DATE, placeholder="Select departure date"),
    "No. of Nights": FieldSpec(kind=FieldKind.DISPLAY),
    "Tour type": FieldSpec(
        kind=FieldKind.SELECT,
        options=(
            "Round trip",
            "Beach stay",
            "City stay",
            "Round trip + Beach",
            "Beach stay + city",
        ),
        help_text="Choose the type of experience you prefer",
    ),
    "Hotel Category": FieldSpec(
        kind=FieldKind.SELECT,
        options=("5 Star", "4 Star", "Boutique Villas", OTHER_OPTION),
        help_text="Select your preferred accommodation standard",
    ),
    "Other Hotel Category": FieldSpec(placeholder="Please specify the Hotel Category type"),
    "Room Selection": FieldSpec(
        kind=FieldKind.ROOM_SELECTOR,
        help_text="(Select your room combinations - Category, Type, and Quantity)",
    ),
    "Basis": FieldSpec(
        kind=FieldKind.SELECT,
        options=("RO", "BB", "HB", "FB", "AI"),
        help_text="RO=Room Only, BB=Bed & Breakfast, HB=Half Board, FB=Full Board, AI=All Inclusive",
    ),
    "Transport": FieldSpec(
        kind=FieldKind.SELECT,
        options=("Car", "Van", "Mini bus", "Coach", "Baggage Van"),
    ),
    "Children": FieldSpec(
        kind=FieldKind.SELECT,
        options=(NONE_OPTION, "0 to 4.9", "5 to 11.9", "Teens"),
    ),
    "Site / Interests": FieldSpec(
        kind=FieldKind.MULTISELECT,
        options=("Culture", "Nature", "Wildlife", "Wellness", "Adventure", "Sun & Sea"),
    ),
    "Other service": FieldSpec(
        kind=FieldKind.MULTISELECT,
        options=(NONE_OPTION, "Jeep 4x4", "Boat Service", "Train Rides", "Village Tours"),
        help_text="(Select 'None' if no additional services are needed)",
        allows_custom_values=True,
    ),
    "No of pax": FieldSpec(placeholder="Total number of travelers"),
    "Special Arrangements": FieldSpec(
        kind=FieldKind.SELECT,
        options=(NONE_OPTION, "B'Day", "Anniversary", "Engagement", "Wedding"),
    ),
    "Special Arrangements Date": FieldSpec(
        kind=FieldKind.DATE,
        placeholder="Select date for the special arrangement",
    ),
}

DEFAULT_FIELD_SPEC = FieldSpec()


def get_field_spec(field_name: str) -> FieldSpec:
    """Look up the spec of a field.
    Args:
        field_name (str): Field name as shown on the form.
    Returns:
        FieldSpec: Catalog entry, or a plain text spec for unknown names.
    """
    return FIELD_CATALOG.get(field_name, DEFAULT_FIELD_SPEC)


def total_field_count() -> int:
    """Number of fields in the catalog."""
    return len(FIELD_CATALOG)
