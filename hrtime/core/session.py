"""
Session state for signed-in users.

Sessions are keyed by the upstream bearer token. Each one carries the user's
identity and the timesheet board the views read from. The store has an
explicit lifecycle: init() on application start, teardown() on shutdown.
"""

import json
import os
from dataclasses import dataclass, field
from typing import Dict, Optional

from hrtime.core.config import settings
from hrtime.core.logging import get_logger
from hrtime.schemas.auth import Identity
from hrtime.services.board import TimesheetBoard

logger = get_logger("session")


@dataclass
class Session:
    token: str
    user: Identity
    board: TimesheetBoard = field(default_factory=TimesheetBoard)


class SessionStore:
    """In-memory session registry, optionally mirrored to a JSON file."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.sessions: Dict[str, Session] = {}

    def init(self) -> None:
        """Read persisted sessions, if a session file is configured."""
        self.sessions = {}
        if not self.path or not os.path.isfile(self.path):
            return
        try:
            with open(self.path, encoding="utf-8") as f:
                stored = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Could not read session file {self.path}: {str(e)}")
            return
        for token, user in (stored or {}).items():
            self.sessions[token] = Session(token=token, user=Identity.model_validate(user))
        logger.info(f"Restored {len(self.sessions)} session(s) from {self.path}")

    def teardown(self) -> None:
        """Persist, then forget every session."""
        self._persist()
        self.sessions = {}
        logger.info("Session store cleared")

    def open(self, token: str, user: Identity) -> Session:
        session = Session(token=token, user=user)
        self.sessions[token] = session
        self._persist()
        logger.info(f"Opened session for user {user.id} ({user.role})")
        return session

    def get(self, token: str) -> Optional[Session]:
        return self.sessions.get(token)

    def close(self, token: str) -> bool:
        session = self.sessions.pop(token, None)
        if session is None:
            return False
        self._persist()
        logger.info(f"Closed session for user {session.user.id}")
        return True

    def _persist(self) -> None:
        if not self.path:
            return
        data = {token: s.user.model_dump() for token, s in self.sessions.items()}
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f)
        except OSError as e:
            logger.error(f"Could not write session file {self.path}: {str(e)}")


# Process-wide session store
session_store = SessionStore(settings.SESSION_FILE or None)
