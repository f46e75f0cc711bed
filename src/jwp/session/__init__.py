"""
Server-side sessions: the Session record and the SessionManager registry.
"""

from .manager import SessionManager
from .session import Session, generate_session_id

__all__ = [
    "Session",
    "SessionManager",
    "generate_session_id",
]
