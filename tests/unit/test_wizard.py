"""Unit tests for the wizard controller.

Covers:
- Section navigation without a validation gate
- Field changes, cascades and error bookkeeping
- Night calculation and the departure ordering error
- Clearing a section, reset, progress and the document payload
"""

import pytest

from app.errors import FieldShapeError
from app.form.catalog import total_field_count
from app.form.validation import DATE_ORDER_ERROR
from app.form.values import StringListValue, TextValue
from app.form.wizard import NIGHTS_FIELD, WizardController


def test_navigation_is_not_gated_by_validation():
    wizard = WizardController()
    assert not wizard.can_go_previous

    wizard.go_next()
    assert wizard.state.active_section == 1
    assert wizard.state.errors == {}


def test_navigation_bounds():
    wizard = WizardController()
    wizard.go_previous()
    assert wizard.state.active_section == 0

    for _ in range(10):
        wizard.go_next()
    assert wizard.state.active_section == wizard.section_count - 1
    assert not wizard.can_go_next

    wizard.go_previous()
    assert wizard.state.active_section == wizard.section_count - 2


def test_jump_to_any_section():
    wizard = WizardController()
    wizard.jump_to(3)
    assert wizard.active_section.title == "Group Details"

    with pytest.raises(ValueError):
        wizard.jump_to(wizard.section_count)
    with pytest.raises(ValueError):
        wizard.jump_to(-1)
    assert wizard.state.active_section == 3


def test_change_field_sets_and_clears_errors():
    wizard = WizardController()
    wizard.change_field("Customer Email", "not-an-email")
    assert wizard.state.errors["Customer Email"] == "Please enter a valid email address"

    wizard.change_field("Customer Email", "jane@example.com")
    assert "Customer Email" not in wizard.state.errors
    assert wizard.state.get("Customer Email") == TextValue(text="jane@example.com")


def test_blank_text_is_stored_as_given():
    wizard = WizardController()
    wizard.change_field("Customer Name", "")
    assert wizard.state.get("Customer Name") == TextValue(text="")
    assert wizard.state.errors["Customer Name"] == "Customer Name is required"


def test_none_removes_value():
    wizard = WizardController()
    wizard.change_field("Arrival Flight", "UL 225")
    wizard.change_field("Arrival Flight", None)
    assert "Arrival Flight" not in wizard.state.values
    assert "Arrival Flight" not in wizard.state.errors


def test_multiselect_string_becomes_list():
    wizard = WizardController()
    wizard.change_field("Site / Interests", "Culture")
    assert wizard.state.get("Site / Interests") == StringListValue(items=["Culture"])


def test_nights_cannot_be_set_directly():
    wizard = WizardController()
    with pytest.raises(ValueError):
        wizard.change_field(NIGHTS_FIELD, "3")


def test_wrong_shape_is_rejected():
    wizard = WizardController()
    with pytest.raises(FieldShapeError):
        wizard.change_field("Room Selection", {"category": "Standard"})
    assert "Room Selection" not in wizard.state.values


def test_nights_follow_dates():
    wizard = WizardController()
    wizard.change_field("Arrival Date", "2025-03-10")
    assert wizard.nights is None

    wizard.change_field("Departure Date", "2025-03-15")
    assert wizard.nights == 5
    assert wizard.state.get(NIGHTS_FIELD) == TextValue(text="5")

    wizard.change_field("Arrival Date", None)
    assert wizard.nights is None
    assert NIGHTS_FIELD not in wizard.state.values


def test_departure_before_arrival_sets_error_and_no_nights():
    wizard = WizardController()
    wizard.change_field("Arrival Date", "2025-03-10")
    wizard.change_field("Departure Date", "2025-03-05")

    assert wizard.state.errors["Departure Date"] == DATE_ORDER_ERROR
    assert NIGHTS_FIELD not in wizard.state.values

    # Moving arrival earlier fixes both
    wizard.change_field("Arrival Date", "2025-03-01")
    assert "Departure Date" not in wizard.state.errors
    assert wizard.nights == 4


def test_clearing_arrival_drops_stale_ordering_error():
    wizard = WizardController()
    wizard.change_field("Arrival Date", "2025-03-10")
    wizard.change_field("Departure Date", "2025-03-05")
    wizard.change_field("Arrival Date", None)
    assert "Departure Date" not in wizard.state.errors


def test_special_arrangements_none_drops_date():
    wizard = WizardController()
    wizard.change_field("Special Arrangements", "Wedding")
    wizard.change_field("Special Arrangements Date", "2025-03-14")
    assert "Special Arrangements Date" in wizard.state.values

    wizard.change_field("Special Arrangements", "None")
    assert "Special Arrangements Date" not in wizard.state.values
    assert "Special Arrangements Date" not in wizard.state.errors



def test_leaving_other_hotel_category_drops_its_error():
    wizard = WizardController()
    wizard.change_field("Hotel Category", "Other")
    wizard.change_field("Other Hotel Category", "")
    assert "Other Hotel Category" in wizard.state.errors

    wizard.change_field("Hotel Category", "5 Star")

    assert "Other Hotel Category" not in wizard.state.errors
    assert "Other Hotel Category" not in wizard.form_errors()


def test_choosing_other_hotel_category_flags_stored_blank_detail():
    wizard = WizardController()
    wizard.change_field("Other Hotel Category", "")
    wizard.change_field("Hotel Category", "Other")

    assert wizard.state.errors["Other Hotel Category"] == "Please specify the hotel category"


def test_switching_arrangement_keeps_date_requirement():
    wizard = WizardController()
    wizard.change_field("Special Arrangements", "Wedding")
    wizard.change_field("Special Arrangements Date", "")

    wizard.change_field("Special Arrangements", "Anniversary")

    assert wizard.state.errors["Special Arrangements Date"] == (
        "Please specify the date for the special arrangement"
    )

def test_clear_section_only_touches_active_section():
    wizard = WizardController()
    wizard.change_field("Customer Name", "Jane Doe")
    wizard.change_field("Hotel Category", "Other")
    wizard.change_field("Other Hotel Category", "Eco lodge")
    wizard.change_field("Basis", "XX")

    wizard.jump_to(2)
    wizard.clear_section()

    assert "Hotel Category" not in wizard.state.values
    assert "Other Hotel Category" not in wizard.state.values
    assert "Basis" not in wizard.state.errors
    assert wizard.state.get("Customer Name") == TextValue(text="Jane Doe")
    assert wizard.state.active_section == 2


def test_progress_counts_non_blank_values():
    wizard = WizardController()
    assert wizard.progress == 0.0

    wizard.change_field("Customer Name", "Jane Doe")
    wizard.change_field("Customer Country", "  ")
    assert wizard.progress == pytest.approx(1 / total_field_count())


def test_valid_form_and_reset(valid_wizard):
    assert valid_wizard.is_valid()
    assert valid_wizard.nights == 7

    valid_wizard.jump_to(4)
    valid_wizard.reset()
    assert valid_wizard.state.values == {}
    assert valid_wizard.state.errors == {}
    assert valid_wizard.state.active_section == 0
    assert not valid_wizard.is_valid()


def test_export_document_payload(valid_wizard):
    form_data, dates = valid_wizard.export_document_payload()

    assert form_data["Customer Name"] == "Jane Doe"
    assert form_data["No. of Nights"] == "7"
    assert form_data["Room Selection"] == [{"category": "Standard", "type": "DBL", "quantity": 2}]
    assert form_data["Site / Interests"] == ["Culture", "Wildlife"]
    assert dates == {
        "Arrival Date": "2025-03-10",
        "Departure Date": "2025-03-17",
        "Special Arrangements Date": None,
    }
