"""Dependency injection setup for FastAPI."""

from typing import Generator, Optional

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from app.config import Settings, get_settings
from app.db.base import Base
from app.providers.datastore.base import InquiryStore
from app.providers.datastore.sql_store import SqlInquiryStore
from app.providers.datastore.supabase_store import SupabaseInquiryStore
from app.providers.email.base import EmailSender
from app.providers.email.smtp_sender import SmtpEmailSender
from app.providers.pdf.base import PdfRenderer
from app.providers.pdf.html_renderer import HtmlPdfRenderer
from app.providers.pdf.vector_renderer import VectorPdfRenderer
from app.repositories.wizard_sessions import WizardSessionRegistry

# Database setup
engine = None
SessionLocal = None


def init_database(settings: Settings) -> None:
    """Initialize database connection."""
    global engine, SessionLocal
    engine = create_engine(
        settings.database_url,
        connect_args={"check_same_thread": False} if "sqlite" in settings.database_url else {},
        echo=settings.debug,
    )
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    # Create tables
    Base.metadata.create_all(bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Get database session."""
    if SessionLocal is None:
        raise RuntimeError("Database not initialized")

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_inquiry_store(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Generator[InquiryStore, None, None]:
    """Get the configured inquiry datastore."""
    if settings.datastore_provider == "supabase":
        store: InquiryStore = SupabaseInquiryStore(settings)
    else:
        store = SqlInquiryStore(db)
    try:
        yield store
    finally:
        store.close()


_RENDERERS = {
    "html": HtmlPdfRenderer,
    "vector": VectorPdfRenderer,
}


def build_pdf_renderer(settings: Settings, strategy: Optional[str] = None) -> PdfRenderer:
    """Instantiate a PDF strategy by name; the configured one when unset."""
    name = strategy or settings.pdf_strategy
    if name not in _RENDERERS:
        raise ValueError(f"Unknown PDF strategy: {name}")
    return _RENDERERS[name](settings)


def get_pdf_renderer(settings: Settings = Depends(get_settings)) -> PdfRenderer:
    """Get the configured PDF renderer."""
    return build_pdf_renderer(settings)


def get_email_sender(settings: Settings = Depends(get_settings)) -> EmailSender:
    """Get the email transport."""
    return SmtpEmailSender(settings)


_wizard_registry = WizardSessionRegistry()


def get_wizard_registry() -> WizardSessionRegistry:
    """Get the process-wide wizard session registry."""
    return _wizard_registry
