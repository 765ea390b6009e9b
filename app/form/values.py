"""Typed field values.

A field value is one of three variants, chosen by the catalog kind of the
field it belongs to. An absent value is simply a missing key (or None).
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from app.errors import FieldShapeError
from app.form.catalog import FieldKind, get_field_spec


class RoomCategory(str, Enum):
    STANDARD = "Standard"
    DELUXE = "Deluxe"
    SUPERIOR = "Superior"
    LUXURY = "Luxury"
    SUITE = "Suite"


class RoomType(str, Enum):
    SGL = "SGL"
    DBL = "DBL"
    TRIP = "TRIP"
    QTRP = "QTRP"


class RoomSelection(BaseModel):
    """One row of the composite room selector.

    Category and type stay unset while the user is still filling the row in.
    """
    model_config = ConfigDict(frozen=True)

    category: Optional[RoomCategory] = Field(default=None, description="Room category")
    type: Optional[RoomType] = Field(default=None, description="Occupancy type")
    quantity: int = Field(default=0, description="Number of rooms")

    @field_validator("category", "type", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_complete(self) -> bool:
        return self.category is not None and self.type is not None and self.quantity > 0

    def to_plain(self) -> Dict[str, Any]:
        return {
            "category": self.category.value if self.category else "",
            "type": self.type.value if self.type else "",
            "quantity": self.quantity,
        }


class TextValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str


class StringListValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["string_list"] = "string_list"
    items: List[str] = Field(default_factory=list)


class RoomSelectionsValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["room_selections"] = "room_selections"
    rooms: List[RoomSelection] = Field(default_factory=list)


FieldValue = Union[TextValue, StringListValue, RoomSelectionsValue]

_VARIANT_FOR_KIND = {
    FieldKind.TEXT: TextValue,
    FieldKind.DATE: TextValue,
    FieldKind.SELECT: TextValue,
    FieldKind.DISPLAY: TextValue,
    FieldKind.MULTISELECT: StringListValue,
    FieldKind.ROOM_SELECTOR: RoomSelectionsValue,
}


def to_field_value(field_name: str, raw: Any) -> Optional[FieldValue]:
    """Coerce a raw payload into the variant the catalog declares for a field.
    Args:
        field_name (str): Field name.
        raw (Any): Raw value (str, list, dicts, date) or an existing variant.
    Returns:
        Optional[FieldValue]: Typed value, or None when raw is None.
    Raises:
        FieldShapeError: If the payload cannot take the declared shape.
    """
    if raw is None:
        return None

    kind = get_field_spec(field_name).kind
    expected = _VARIANT_FOR_KIND[kind]

    if isinstance(raw, (TextValue, StringListValue, RoomSelectionsValue)):
        if not isinstance(raw, expected):
            raise FieldShapeError(field_name, f"expected {expected.__name__}, got {type(raw).__name__}")
        return raw

    if kind == FieldKind.ROOM_SELECTOR:
        if not isinstance(raw, (list, tuple)):
            raise FieldShapeError(field_name, "expected a list of room selections")
        try:
            rooms = [
                room if isinstance(room, RoomSelection) else RoomSelection.model_validate(room)
                for room in raw
            ]
        except ValidationError as e:
            raise FieldShapeError(field_name, f"invalid room selection: {e}") from e
        return RoomSelectionsValue(rooms=rooms)

    if kind == FieldKind.MULTISELECT:
        if isinstance(raw, str):
            return StringListValue(items=[raw] if raw.strip() else [])
        if isinstance(raw, (list, tuple)) and all(isinstance(item, str) for item in raw):
            return StringListValue(items=list(raw))
        raise FieldShapeError(field_name, "expected a list of strings")

    # datetime is a date subclass, check it first
    if isinstance(raw, datetime):
        raw = raw.date().isoformat()
    elif isinstance(raw, date):
        raw = raw.isoformat()
    elif isinstance(raw, (int, float)) and not isinstance(raw, bool):
        raw = str(raw)

    if not isinstance(raw, str):
        raise FieldShapeError(field_name, f"expected text, got {type(raw).__name__}")
    return TextValue(text=raw)


def is_blank(value: Optional[FieldValue]) -> bool:
    """True for absent values, whitespace-only text and empty lists."""
    if value is None:
        return True
    if isinstance(value, TextValue):
        return not value.text.strip()
    if isinstance(value, StringListValue):
        return not value.items
    if isinstance(value, RoomSelectionsValue):
        return not value.rooms
    raise TypeError(f"Unknown field value variant: {type(value).__name__}")


def text_of(value: Optional[FieldValue]) -> str:
    """Stripped text of a text value, empty string otherwise."""
    if isinstance(value, TextValue):
        return value.text.strip()
    return ""


def to_plain(value: FieldValue) -> Any:
    """Plain JSON-compatible form of a value (str, list of str or list of dicts)."""
    if isinstance(value, TextValue):
        return value.text
    if isinstance(value, StringListValue):
        return list(value.items)
    if isinstance(value, RoomSelectionsValue):
        return [room.to_plain() for room in value.rooms]
    raise TypeError(f"Unknown field value variant: {type(value).__name__}")
