"""
=============================================================================
SESSION MANAGER
=============================================================================

The in-memory registry of active sessions, shared by every request cycle.

=============================================================================
CONCURRENCY
=============================================================================

Each connection is handled on its own worker thread, so add/find/remove can
race. All access goes through one lock:

    worker 1: add(Session("a"))  ──┐
    worker 2: find_session("a")  ──┼──► [ RLock ] ──► _sessions dict
    worker 3: remove("b")        ──┘

A reader never sees a half-inserted entry, and two writers never interleave.

=============================================================================
LIFETIME
=============================================================================

There is no TTL and no capacity bound: a session lives until it is removed
by logout. The manager is constructed explicitly and handed to AuthService,
so tests get a fresh registry each time.

=============================================================================
"""

from typing import Dict, Optional
import logging
import threading

from .session import Session


logger = logging.getLogger(__name__)


class SessionManager:
    """Thread-safe session id → Session registry."""

    def __init__(self):
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.RLock()  # Protects _sessions

    def add(self, session: Session) -> None:
        """Register a session. An existing entry with the same id is replaced."""
        with self._lock:
            if session.id in self._sessions:
                logger.debug("Replacing existing session entry")
            self._sessions[session.id] = session

    def find_session(self, session_id: Optional[str]) -> Optional[Session]:
        """Session for `session_id`, or None for unknown, empty or None ids."""
        if not session_id:
            return None
        with self._lock:
            return self._sessions.get(session_id)

    def remove(self, session_id: Optional[str]) -> Optional[Session]:
        """Unregister and return the session, or None if it was not there."""
        if not session_id:
            return None
        with self._lock:
            return self._sessions.pop(session_id, None)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
