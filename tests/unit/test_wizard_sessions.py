"""Unit tests for the wizard session registry and renderer selection."""

import uuid

import pytest

from app.config import Settings
from app.deps import build_pdf_renderer
from app.providers.pdf.html_renderer import HtmlPdfRenderer
from app.providers.pdf.vector_renderer import VectorPdfRenderer
from app.repositories.wizard_sessions import WizardSessionRegistry


def test_sessions_are_independent():
    registry = WizardSessionRegistry()
    first = registry.create_session()
    second = registry.create_session()

    registry.get_session(first).change_field("Customer Name", "Jane Doe")

    assert uuid.UUID(first)
    assert len(registry) == 2
    assert registry.get_session(second).state.values == {}


def test_get_unknown_or_malformed_session():
    registry = WizardSessionRegistry()
    assert registry.get_session(str(uuid.uuid4())) is None
    assert registry.get_session("abc") is None


def test_discard_session():
    registry = WizardSessionRegistry()
    session_id = registry.create_session()

    assert registry.discard_session(session_id) is True
    assert registry.discard_session(session_id) is False
    assert registry.get_session(session_id) is None



def test_discard_session_normalizes_id():
    registry = WizardSessionRegistry()
    session_id = registry.create_session()

    assert registry.discard_session(session_id.upper()) is True
    assert registry.get_session(session_id) is None
    assert registry.discard_session("abc") is False

def test_build_pdf_renderer():
    settings = Settings(pdf_strategy="vector")
    assert isinstance(build_pdf_renderer(settings), VectorPdfRenderer)
    assert isinstance(build_pdf_renderer(settings, "html"), HtmlPdfRenderer)

    with pytest.raises(ValueError):
        build_pdf_renderer(settings, "latex")
