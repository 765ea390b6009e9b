"""Pytest configuration and helpers.

Ensures the project root is on sys.path for `import app` to work when running tests,
and provides a fully valid inquiry for tests that need one.
"""

import os
import sys

import pytest


def _add_project_root_to_syspath() -> None:
    # tests/ directory -> project root
    this_dir = os.path.dirname(__file__)
    project_root = os.path.abspath(os.path.join(this_dir, os.pardir))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)


_add_project_root_to_syspath()


# Field values of a complete, valid inquiry, in the order a user would enter them
VALID_INQUIRY = {
    "Customer Name": "Jane Doe",
    "Customer Email": "jane.doe@example.com",
    "Customer Contact": "+94 77 123 4567",
    "Customer Nationality": "Canadian",
    "Customer Country": "Canada",
    "Arrival Flight": "UL 225",
    "Departure Flight": "UL 226",
    "Arrival Date": "2025-03-10",
    "Departure Date": "2025-03-17",
    "Hotel Category": "4 Star",
    "Room Selection": [{"category": "Standard", "type": "DBL", "quantity": 2}],
    "Basis": "HB",
    "No of pax": "4",
    "Children": "None",
    "Tour type": "Round trip",
    "Transport": "Van",
    "Site / Interests": ["Culture", "Wildlife"],
    "Other service": ["None"],
    "Special Arrangements": "None",
}


@pytest.fixture()
def valid_inquiry():
    return dict(VALID_INQUIRY)


@pytest.fixture()
def valid_wizard():
    from app.form.wizard import WizardController

    wizard = WizardController()
    for field_name, value in VALID_INQUIRY.items():
        wizard.change_field(field_name, value)
    return wizard
