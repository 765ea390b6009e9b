"""Form state store for one wizard session."""

from dataclasses import dataclass, field
from typing import Dict, Optional

from app.form.values import FieldValue, is_blank


@dataclass
class FormState:
    """Current values, per-field errors and active section of a wizard session.

    An entry in ``errors`` exists only while the field carries a message.
    """
    values: Dict[str, FieldValue] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)
    active_section: int = 0

    def get(self, field_name: str) -> Optional[FieldValue]:
        return self.values.get(field_name)

    def set_error(self, field_name: str, message: Optional[str]) -> None:
        if message:
            self.errors[field_name] = message
        else:
            self.errors.pop(field_name, None)

    def discard(self, field_name: str) -> None:
        """Drop a field's value and error."""
        self.values.pop(field_name, None)
        self.errors.pop(field_name, None)

    def completed_count(self) -> int:
        return sum(1 for value in self.values.values() if not is_blank(value))

    def clear(self) -> None:
        self.values.clear()
        self.errors.clear()
        self.active_section = 0
