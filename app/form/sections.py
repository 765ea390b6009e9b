"""Section plan for the inquiry wizard."""

from typing import Dict, FrozenSet, List, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Section(BaseModel):
    """One page of the wizard."""
    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Section title")
    description: str = Field(default="", description="Short subtitle")
    fields: Tuple[str, ...] = Field(description="Fields rendered by the section, in order")
    required: FrozenSet[str] = Field(default=frozenset(), description="Mandatory fields")


SECTIONS: Tuple[Section, ...] = (
    Section(
        title="Customer",
        description="Tell us about yourself",
        fields=(
            "Customer Name",
            "Customer Email",
            "Customer Contact",
            "Customer Nationality",
            "Customer Country",
            "Arrival Flight",
            "Departure Flight",
        ),
        required=frozenset({
            "Customer Name",
            "Customer Email",
            "Customer Contact",
            "Customer Nationality",
            "Customer Country",
        }),
    ),
    Section(
        title="Travel Dates",
        description="When would you like to travel?",
        fields=("Arrival Date", "Departure Date", "No. of Nights"),
        required=frozenset({"Arrival Date", "Departure Date"}),
    ),
    Section(
        title="Accommodation",
        description="Choose your perfect stay",
        fields=("Hotel Category", "Room Selection", "Basis"),
        required=frozenset({"Hotel Category", "Room Selection", "Basis"}),
    ),
    Section(
        title="Group Details",
        description="Tell us about your travel group",
        fields=("No of pax", "Children"),
        required=frozenset({"No of pax", "Children"}),
    ),
    Section(
        title="Experience & Services",
        description="Customize your journey",
        fields=(
            "Tour type",
            "Transport",
            "Site / Interests",
            "Other service",
            "Special Arrangements",
        ),
        required=frozenset({
            "Tour type",
            "Transport",
            "Site / Interests",
            "Other service",
            "Special Arrangements",
        }),
    ),
)

# Fields rendered only when their parent field holds a trigger value.
# Clearing or resetting the parent also clears these.
DEPENDENT_FIELDS: Dict[str, Tuple[str, ...]] = {
    "Hotel Category": ("Other Hotel Category",),
    "Special Arrangements": ("Special Arrangements Date",),
}


def get_sections() -> Tuple[Section, ...]:
    """Return the wizard sections in display order."""
    return SECTIONS


def required_fields(sections: Tuple[Section, ...] = SECTIONS) -> FrozenSet[str]:
    """Union of the required sets of every section."""
    required: FrozenSet[str] = frozenset()
    for section in sections:
        required = required | section.required
    return required


def ordered_required_fields(sections: Tuple[Section, ...] = SECTIONS) -> List[str]:
    """Required fields in wizard order."""
    return [name for section in sections for name in section.fields if name in section.required]


def fields_to_clear(section: Section) -> List[str]:
    """Section fields plus the dependents cascaded from them.
    Args:
        section (Section): Section being cleared.
    Returns:
        List[str]: Field names to drop from values and errors.
    """
    names = list(section.fields)
    for name in section.fields:
        for dependent in DEPENDENT_FIELDS.get(name, ()):
            if dependent not in names:
                names.append(dependent)
    return names
