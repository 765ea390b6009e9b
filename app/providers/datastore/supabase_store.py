"""Supabase (PostgREST) inquiry datastore."""

import logging
from typing import Any, Dict, List

import httpx

from app.config import Settings
from app.errors import DatastoreError
from app.providers.datastore.base import InquiryStore

logger = logging.getLogger(__name__)


class SupabaseInquiryStore(InquiryStore):
    """Inserts inquiries into a hosted Supabase table over its REST API."""

    def __init__(self, settings: Settings):
        if not settings.supabase_url or not settings.supabase_key:
            raise ValueError("SUPABASE_URL and SUPABASE_KEY are required for the supabase datastore")

        self.table = settings.supabase_table
        self.base_url = f"{settings.supabase_url.rstrip('/')}/rest/v1"

        # HTTP client with timeout and headers
        self.client = httpx.Client(
            timeout=settings.supabase_timeout_seconds,
            headers={
                "apikey": settings.supabase_key,
                "Authorization": f"Bearer {settings.supabase_key}",
                "Content-Type": "application/json",
                # Ask PostgREST to echo the inserted rows back
                "Prefer": "return=representation",
            },
        )

    async def insert(self, record: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Insert a record via POST /rest/v1/<table>."""
        url = f"{self.base_url}/{self.table}"

        try:
            response = self.client.post(url, json=[record])
        except httpx.HTTPError as e:
            logger.error(f"Supabase request error for table {self.table}: {e}")
            raise DatastoreError(str(e), status=None, status_text="Network Error") from e

        if response.status_code >= 400:
            message = self._error_message(response)
            logger.error(
                f"Supabase rejected insert into {self.table}: {message} "
                f"(Status: {response.status_code} {response.reason_phrase})"
            )
            raise DatastoreError(message, status=response.status_code, status_text=response.reason_phrase)

        try:
            data = response.json()
        except ValueError:
            data = None

        if not isinstance(data, list):
            logger.warning(f"Supabase returned no rows for insert into {self.table}")
            return []

        logger.info(f"Supabase stored {len(data)} row(s) in {self.table}")
        return data

    def _error_message(self, response: httpx.Response) -> str:
        """Pull the PostgREST error message out of a failed response."""
        try:
            payload = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        if isinstance(payload, dict):
            return payload.get("message") or payload.get("error") or str(payload)
        return str(payload)

    def get_provider_name(self) -> str:
        """Get the provider name."""
        return "supabase"

    def close(self):
        """Close the HTTP client."""
        self.client.close()
