"""
=============================================================================
HTTP RESPONSE
=============================================================================

A mutable builder for one outgoing response. The processor creates an empty
HttpResponse per request, a controller mutates it, and the processor
serializes it with `to_bytes()`.

=============================================================================
TERMINAL ACTIONS
=============================================================================

Every response ends in exactly one of three ways:

    ┌────────────────────────┬─────────────────────────────────────────────┐
    │ Terminal action        │ Effect                                      │
    ├────────────────────────┼─────────────────────────────────────────────┤
    │ set_response_redirect  │ status (302) + Location header              │
    │ set_response_resource  │ status + static resource loaded at send time│
    │ set_response_body      │ status + inline body and Content-Type       │
    └────────────────────────┴─────────────────────────────────────────────┘

Repeating the same action with the same arguments is a no-op. Choosing a
different one after the first is a bug in the controller and raises
ResponseStateError.

Headers that are not terminal (Set-Cookie, Cache-Control, ...) can be added
at any time.

=============================================================================
HEADER ORDER
=============================================================================

Headers are kept in insertion order and serialized in that order. The login
flow relies on it:

    response.set_response_redirect(HTTPStatus.FOUND, "/index.html")
    response.set_response_header("Set-Cookie", "JSESSIONID=...")

    HTTP/1.1 302 Found\r\n
    Location: /index.html\r\n          ← set first
    Set-Cookie: JSESSIONID=...\r\n     ← set second
    Content-Length: 0\r\n              ← added at serialization
    ...

The response only records the order it is told; keeping redirect before
cookie is the controller's contract.

=============================================================================
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional, Tuple, Union

from .cookies import format_set_cookie
from .resources import ResourceLoader
from .status_codes import HTTPStatus


DEFAULT_SERVER_NAME = "jwp/1.0"
HTML_CONTENT_TYPE = "text/html; charset=utf-8"

# Header names the controllers write
LOCATION = "Location"
SET_COOKIE = "Set-Cookie"


class ResponseStateError(RuntimeError):
    """A second, different terminal action was set on the same response."""


@dataclass
class HttpResponse:
    """
    Builder for one HTTP response.

        response = HttpResponse()
        response.set_response_resource(HTTPStatus.OK, "/login.html")
        wire = response.to_bytes(loader)
    """

    status: HTTPStatus = HTTPStatus.OK
    headers: Dict[str, str] = field(default_factory=dict)
    resource_path: Optional[str] = None
    body: bytes = b""
    version: str = "HTTP/1.1"

    # The first terminal action, as (kind, *arguments)
    _terminal: Optional[Tuple] = field(default=None, repr=False)

    # =========================================================================
    # TERMINAL ACTIONS
    # =========================================================================

    def set_response_redirect(self, status: HTTPStatus, location: str) -> "HttpResponse":
        """Redirect: status line plus a Location header."""
        if self._commit(("redirect", status, location)):
            self.status = status
            self.set_response_header(LOCATION, location)
        return self

    def set_response_resource(self, status: HTTPStatus, resource_path: str) -> "HttpResponse":
        """Respond with a static resource, loaded when the response is serialized."""
        if self._commit(("resource", status, resource_path)):
            self.status = status
            self.resource_path = resource_path
        return self

    def set_response_body(
        self,
        status: HTTPStatus,
        body: Union[str, bytes],
        content_type: str = HTML_CONTENT_TYPE,
    ) -> "HttpResponse":
        """Respond with an inline body. Strings are encoded as UTF-8."""
        if isinstance(body, str):
            body = body.encode("utf-8")
        if self._commit(("body", status, body, content_type)):
            self.status = status
            self.body = body
            self.set_response_header("Content-Type", content_type)
        return self

    def _commit(self, action: Tuple) -> bool:
        """
        Record a terminal action.

        Returns True if the action should be applied, False if the very same
        action was already applied.
        """
        if self._terminal is None:
            self._terminal = action
            return True
        if self._terminal == action:
            return False
        raise ResponseStateError(
            f"Response already committed to {self._terminal[0]}, "
            f"cannot switch to {action[0]}"
        )

    @property
    def is_committed(self) -> bool:
        return self._terminal is not None

    # =========================================================================
    # HEADERS AND COOKIES
    # =========================================================================

    def set_response_header(self, name: str, value: str) -> "HttpResponse":
        """
        Append a header, or overwrite one with the same name.

        Names compare case-insensitively; an overwritten header keeps its
        original position.
        """
        existing = self._find_header(name)
        self.headers[existing or name] = value
        return self

    def add_cookie(
        self,
        name: str,
        value: str,
        path: Optional[str] = None,
        max_age: Optional[int] = None,
        http_only: bool = False,
    ) -> "HttpResponse":
        """Shorthand for a Set-Cookie header."""
        return self.set_response_header(
            SET_COOKIE,
            format_set_cookie(name, value, path=path, max_age=max_age, http_only=http_only),
        )

    def get_header(self, name: str) -> Optional[str]:
        existing = self._find_header(name)
        return self.headers[existing] if existing else None

    def _find_header(self, name: str) -> Optional[str]:
        lowered = name.lower()
        for key in self.headers:
            if key.lower() == lowered:
                return key
        return None

    @property
    def location(self) -> Optional[str]:
        return self.get_header(LOCATION)

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    @property
    def status_line(self) -> str:
        """e.g. "HTTP/1.1 302 Found"."""
        return f"{self.version} {int(self.status)} {self.status.phrase}"

    def to_bytes(
        self,
        loader: Optional[ResourceLoader] = None,
        server_name: str = DEFAULT_SERVER_NAME,
    ) -> bytes:
        """
        Serialize for the wire.

        A resource body is loaded through `loader` (the bundled pages when
        omitted). Content-Length, Date and Server are added when absent.

        Raises:
            ResourceNotFoundError: The named resource does not exist.
        """
        response_headers = dict(self.headers)
        body = self.body

        if self.resource_path is not None:
            resource = (loader or ResourceLoader()).load(self.resource_path)
            body = resource.content
            if "Content-Type" not in response_headers:
                response_headers["Content-Type"] = resource.content_type

        if "Content-Length" not in response_headers:
            response_headers["Content-Length"] = str(len(body))
        if "Date" not in response_headers:
            response_headers["Date"] = format_http_date(datetime.now(timezone.utc))
        if "Server" not in response_headers:
            response_headers["Server"] = server_name

        lines = [self.status_line]
        for name, value in response_headers.items():
            lines.append(f"{name}: {value}")
        lines.append("")

        return "\r\n".join(lines).encode("utf-8") + b"\r\n" + body


def format_http_date(dt: datetime) -> str:
    """
    Format a UTC datetime as an HTTP-date (RFC 7231).

        Wed, 01 Jan 2026 12:00:00 GMT
    """
    days = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
    return (
        f"{days[dt.weekday()]}, "
        f"{dt.day:02d} {months[dt.month - 1]} {dt.year} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} GMT"
    )
