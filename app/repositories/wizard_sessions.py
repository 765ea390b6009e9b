"""In-memory registry of wizard sessions."""

import logging
import threading
import uuid
from typing import Dict, Optional

from app.form.wizard import WizardController

logger = logging.getLogger(__name__)


class WizardSessionRegistry:
    """Holds one WizardController per session id for the life of the process."""

    def __init__(self):
        self._sessions: Dict[str, WizardController] = {}
        self._lock = threading.Lock()

    def create_session(self) -> str:
        """Start a fresh wizard.
        Returns:
            str: New session identifier.
        """
        session_id = str(uuid.uuid4())
        with self._lock:
            self._sessions[session_id] = WizardController()
        logger.info(f"Wizard session {session_id} created")
        return session_id

    def get_session(self, session_id: str) -> Optional[WizardController]:
        """Get a wizard by session id.
        Args:
            session_id (str): Session identifier.
        Returns:
            Optional[WizardController]: Wizard, or None if unknown or malformed.
        """
        try:
            key = str(uuid.UUID(session_id))
        except ValueError:
            return None
        with self._lock:
            return self._sessions.get(key)

    def discard_session(self, session_id: str) -> bool:
        try:
            session_id = str(uuid.UUID(session_id))
        except ValueError:
            return False
        with self._lock:
            removed = self._sessions.pop(session_id, None) is not None
        if removed:
            logger.info(f"Wizard session {session_id} discarded")
        return removed

    def __len__(self) -> int:
        return len(self._sessions)
