"""Configuration management for the travel inquiry service."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Datastore: "sql" (SQLAlchemy) or "supabase" (hosted PostgREST)
    datastore_provider: str = "sql"
    database_url: str = "sqlite:///./travel_inquiries.db"

    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    supabase_table: str = "client_inquiry"
    supabase_timeout_seconds: float = 30.0

    # PDF: "html" (template print) or "vector" (direct drawing)
    pdf_strategy: str = "html"

    # SMTP
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: Optional[str] = None
    smtp_pass: Optional[str] = None
    smtp_from: Optional[str] = None
    smtp_timeout_seconds: float = 60.0

    agency_email: Optional[str] = None

    # Branding used in documents and emails
    company_name: str = "Serendia Travel & Tours"
    company_contact_line: str = "info@serendia.com | +94 112 233 444 | www.serendia.com"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
