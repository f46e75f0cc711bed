"""
Server-side session record.

A Session is what a JSESSIONID cookie points at. It holds an attribute bag;
the login flow stores the authenticated account under "account".
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import time
import uuid


def generate_session_id() -> str:
    """
    New opaque session id.

    uuid4 carries 122 random bits, which is enough to make ids unguessable
    and, in practice, unique across the process.
    """
    return str(uuid.uuid4())


@dataclass
class Session:
    """
    One browser's server-side state.

        session = Session(generate_session_id())
        session.set_attribute("account", account)
        session.get_attribute("account")   # → account
        session.invalidate()               # attributes cleared, is_valid False
    """

    id: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    created_at: float = field(default_factory=time.time)
    _valid: bool = field(default=True, repr=False)

    def get_attribute(self, name: str, default: Optional[Any] = None) -> Any:
        return self.attributes.get(name, default)

    def set_attribute(self, name: str, value: Any) -> None:
        self.attributes[name] = value

    def remove_attribute(self, name: str) -> None:
        self.attributes.pop(name, None)

    def invalidate(self) -> None:
        """Drop all attributes. The registry entry is removed by SessionManager."""
        self.attributes.clear()
        self._valid = False

    @property
    def is_valid(self) -> bool:
        return self._valid
