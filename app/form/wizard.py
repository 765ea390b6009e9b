"""Wizard controller.
Owns a FormState and exposes the commands the UI issues against it.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from app.form.catalog import FieldKind, NONE_OPTION, get_field_spec, total_field_count
from app.form.sections import DEPENDENT_FIELDS, Section, fields_to_clear, get_sections
from app.form.state import FormState
from app.form.validation import (
    collect_form_errors,
    compute_nights,
    validate_field,
)
from app.form.values import TextValue, text_of, to_field_value, to_plain

logger = logging.getLogger(__name__)

NIGHTS_FIELD = "No. of Nights"
DATE_FIELDS = ("Arrival Date", "Departure Date", "Special Arrangements Date")


class WizardController:
    """Section navigation, field changes and derived values for one session."""

    def __init__(self, state: Optional[FormState] = None):
        self.state = state if state is not None else FormState()
        self.sections: Tuple[Section, ...] = get_sections()

    # Navigation

    @property
    def section_count(self) -> int:
        return len(self.sections)

    @property
    def active_section(self) -> Section:
        return self.sections[self.state.active_section]

    @property
    def can_go_next(self) -> bool:
        return self.state.active_section < self.section_count - 1

    @property
    def can_go_previous(self) -> bool:
        return self.state.active_section > 0

    def go_next(self) -> FormState:
        """Move to the next section. Incomplete sections do not block navigation."""
        if self.can_go_next:
            self.state.active_section += 1
        return self.state

    def go_previous(self) -> FormState:
        if self.can_go_previous:
            self.state.active_section -= 1
        return self.state

    def jump_to(self, index: int) -> FormState:
        """Activate any section directly.
        Args:
            index (int): Section index.
        Returns:
            FormState: Updated state.
        Raises:
            ValueError: If the index is outside the section range.
        """
        if not 0 <= index < self.section_count:
            raise ValueError(f"Section index {index} out of range 0..{self.section_count - 1}")
        self.state.active_section = index
        return self.state

    # Mutation

    def change_field(self, field_name: str, raw_value: Any) -> FormState:
        """Write a field value and revalidate it.
        Args:
            field_name (str): Field name.
            raw_value (Any): New value; None removes the field.
        Returns:
            FormState: Updated state.
        Raises:
            FieldShapeError: If the value does not fit the field's kind.
            ValueError: If the field is computed and cannot be set.
        """
        if get_field_spec(field_name).kind == FieldKind.DISPLAY:
            raise ValueError(f"{field_name} is computed and cannot be set")

        value = to_field_value(field_name, raw_value)
        if value is None:
            self.state.values.pop(field_name, None)
        else:
            self.state.values[field_name] = value

        if field_name == "Special Arrangements" and text_of(value) == NONE_OPTION:
            for dependent in DEPENDENT_FIELDS[field_name]:
                self.state.discard(dependent)

        self.state.set_error(field_name, validate_field(field_name, value, self.state))
        for dependent in DEPENDENT_FIELDS.get(field_name, ()):
            # Dependent rules read this field
            if dependent in self.state.values or dependent in self.state.errors:
                self.state.set_error(
                    dependent, validate_field(dependent, self.state.get(dependent), self.state)
                )

        if field_name in ("Arrival Date", "Departure Date"):
            self._refresh_nights()
        return self.state

    def clear_section(self) -> FormState:
        """Drop the active section's fields and their cascaded dependents."""
        for field_name in fields_to_clear(self.active_section):
            self.state.discard(field_name)
        logger.debug(f"Cleared section '{self.active_section.title}'")
        return self.state

    def reset(self) -> FormState:
        self.state.clear()
        return self.state

    def _refresh_nights(self) -> None:
        arrival = text_of(self.state.get("Arrival Date"))
        departure = text_of(self.state.get("Departure Date"))
        nights = compute_nights(arrival, departure)

        # A negative count is never written; the ordering error goes on departure
        if nights is None or nights < 0:
            self.state.values.pop(NIGHTS_FIELD, None)
        else:
            self.state.values[NIGHTS_FIELD] = TextValue(text=str(nights))

        if "Departure Date" in self.state.values:
            self.state.set_error(
                "Departure Date",
                validate_field("Departure Date", self.state.get("Departure Date"), self.state),
            )

    # Derived values

    @property
    def nights(self) -> Optional[int]:
        value = text_of(self.state.get(NIGHTS_FIELD))
        return int(value) if value else None

    @property
    def progress(self) -> float:
        """Share of catalog fields holding a non-blank value, 0.0 to 1.0."""
        return self.state.completed_count() / total_field_count()

    def form_errors(self) -> Dict[str, str]:
        return collect_form_errors(self.state)

    def is_valid(self) -> bool:
        return not self.form_errors()

    def export_document_payload(self) -> Tuple[Dict[str, Any], Dict[str, Optional[str]]]:
        """Snapshot in the shape the PDF and email collaborators take.
        Returns:
            Tuple[Dict[str, Any], Dict[str, Optional[str]]]: ``(form_data, dates)``.
        """
        form_data = {name: to_plain(value) for name, value in self.state.values.items()}
        dates = {name: text_of(self.state.get(name)) or None for name in DATE_FIELDS}
        return form_data, dates
