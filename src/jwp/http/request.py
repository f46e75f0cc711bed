"""
=============================================================================
HTTP REQUEST
=============================================================================

Turns raw HTTP/1.1 request bytes into an immutable HttpRequest that the
controllers can interrogate.

=============================================================================
WHAT A CONTROLLER ASKS OF A REQUEST
=============================================================================

    POST /login HTTP/1.1\r\n
    Host: localhost:8080\r\n
    Cookie: JSESSIONID=5f0c2c1e-...\r\n
    Content-Type: application/x-www-form-urlencoded\r\n
    Content-Length: 30\r\n
    \r\n
    account=gugu&password=password

    ┌──────────────────────────────┬──────────────────────────────────────┐
    │ Question                     │ Answered by                          │
    ├──────────────────────────────┼──────────────────────────────────────┤
    │ Is this POST /login?         │ consists_of(POST, "/login")          │
    │ Was there a "?" in the URI?  │ has_query_string()                   │
    │ Does it carry a session?     │ has_session_id() / session_id()      │
    │ What did the form say?       │ form_parameter("account")            │
    │ What did the URL say?        │ query_parameter("account")           │
    └──────────────────────────────┴──────────────────────────────────────┘

The request is built once per cycle and never changes afterwards, so all
accessors are plain reads.

=============================================================================
PARSING RULES
=============================================================================

1. Size check first (413), then look for the \r\n\r\n header terminator.
2. Request line: METHOD SP TARGET SP VERSION. Unknown method → 405,
   unknown version → 505, ".." in the path → 400.
3. Header names are lowercased. Repeated headers are joined with ", ",
   except Cookie, which is joined with "; ".
4. Body is exactly Content-Length bytes; a short body is a 400.
5. Cookie header → `cookies`; urlencoded body → `form_params`.

=============================================================================
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional
from urllib.parse import parse_qsl, unquote, urlsplit
import re

from .cookies import SESSION_COOKIE, parse_cookie_header


FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Separator for repeated headers whose values are not comma lists
_HEADER_JOINERS = {"cookie": "; "}


class HTTPParseError(Exception):
    """
    Raised when raw bytes cannot be turned into an HttpRequest.

    Carries the HTTP status that should be sent back:

        400 Bad Request                - Malformed syntax
        405 Method Not Allowed         - Unknown method
        413 Payload Too Large          - Over the size limit
        505 HTTP Version Not Supported - Not HTTP/1.0 or HTTP/1.1
    """

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


class HttpMethod(str, Enum):
    """
    Request methods the parser accepts.

    Mixing in `str` keeps `HttpMethod.GET == "GET"` true, so callers may
    pass either form to `HttpRequest.consists_of`.
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class HttpRequest:
    """
    Immutable view over one parsed request.

    =========================================================================
    ATTRIBUTES
    =========================================================================

        method:        HttpMethod of the request line
        path:          Target path without the query component
        query_string:  Raw text after "?", or None when there was no "?"
        query_params:  Decoded query parameters (first value wins)
        headers:       Header values keyed by LOWERCASE name
        cookies:       Cookies from the Cookie header
        form_params:   Decoded urlencoded body parameters
        body:          Raw body bytes (Content-Length bounded)
        version:       "HTTP/1.1" or "HTTP/1.0"
        client_address: (ip, port) of the peer, for logging only

    =========================================================================
    """

    method: HttpMethod
    path: str
    query_string: Optional[str] = None
    query_params: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    cookies: Dict[str, str] = field(default_factory=dict)
    form_params: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    version: str = "HTTP/1.1"
    client_address: tuple[str, int] = ("", 0)

    # =========================================================================
    # ROUTING PREDICATES
    # =========================================================================

    def consists_of(self, method: str, path: str) -> bool:
        """
        True iff both the method and the path match exactly.

        No pattern matching and no trailing-slash normalization:
        "/login/" does not consist of "/login".
        """
        return self.method == method and self.path == path

    def has_query_string(self) -> bool:
        """True iff the request target contained a "?", even an empty one."""
        return self.query_string is not None

    def has_session_id(self) -> bool:
        """True iff a JSESSIONID cookie was sent."""
        return SESSION_COOKIE in self.cookies

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    def query_parameter(self, name: str) -> Optional[str]:
        return self.query_params.get(name)

    def form_parameter(self, name: str) -> Optional[str]:
        return self.form_params.get(name)

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """
        Case-insensitive header lookup.

            request.header("Content-Type") == request.header("content-type")
        """
        return self.headers.get(name.lower(), default)

    def session_id(self) -> Optional[str]:
        return self.cookies.get(SESSION_COOKIE)

    @property
    def content_type(self) -> Optional[str]:
        """Content-Type without parameters, lowercased."""
        value = self.headers.get("content-type", "")
        return value.split(";")[0].strip().lower() or None

    @property
    def content_length(self) -> int:
        try:
            return int(self.headers.get("content-length", 0))
        except ValueError:
            return 0


class RequestParser:
    """
    Parses raw request bytes into HttpRequest objects.

        raw bytes ──► size check ──► split head/body ──► request line
                                                             │
        HttpRequest ◄── cookies/form ◄── body ◄── headers ◄──┘

    One parser can be shared between threads; it keeps no per-request state.
    """

    REQUEST_LINE_PATTERN = re.compile(r"^([A-Z]+) ([^ ]+) (HTTP/\d\.\d)$")
    HEADER_PATTERN = re.compile(r"^([^:]+):\s*(.*)$")
    SUPPORTED_VERSIONS = ("HTTP/1.0", "HTTP/1.1")

    def __init__(self, max_request_size: int = 10 * 1024 * 1024):
        self.max_request_size = max_request_size

    def parse(
        self,
        data: bytes,
        client_address: tuple[str, int] = ("", 0)
    ) -> HttpRequest:
        """
        Parse one complete request.

        Raises:
            HTTPParseError: If the request is malformed or too large.
        """
        if len(data) > self.max_request_size:
            raise HTTPParseError(
                f"Request too large: {len(data)} bytes",
                status_code=413,
            )

        header_end = data.find(b"\r\n\r\n")
        if header_end == -1:
            raise HTTPParseError("Incomplete request: no header terminator")

        header_section = data[:header_end].decode("utf-8", errors="replace")
        body = data[header_end + 4:]

        lines = header_section.split("\r\n")
        method, path, query_string, version = self._parse_request_line(lines[0])
        headers = self._parse_headers(lines[1:])

        # Body is bounded by Content-Length; trailing bytes belong to the
        # next request on a kept-alive connection.
        try:
            content_length = int(headers.get("content-length", 0))
        except ValueError:
            raise HTTPParseError(
                f"Invalid Content-Length: {headers['content-length']}"
            )
        if content_length < 0:
            raise HTTPParseError(f"Invalid Content-Length: {content_length}")
        if len(body) < content_length:
            raise HTTPParseError(
                f"Incomplete body: expected {content_length} bytes, got {len(body)}"
            )
        body = body[:content_length]

        query_params = _parse_params(query_string or "")

        form_params: Dict[str, str] = {}
        content_type = headers.get("content-type", "").split(";")[0].strip().lower()
        if content_type == FORM_CONTENT_TYPE and body:
            form_params = _parse_params(body.decode("utf-8", errors="replace"))

        return HttpRequest(
            method=method,
            path=path,
            query_string=query_string,
            query_params=query_params,
            headers=headers,
            cookies=parse_cookie_header(headers.get("cookie")),
            form_params=form_params,
            body=body,
            version=version,
            client_address=client_address,
        )

    def _parse_request_line(
        self,
        line: str
    ) -> tuple[HttpMethod, str, Optional[str], str]:
        """
        Split "GET /login?account=gugu HTTP/1.1" into its parts.

        Returns:
            (method, decoded path, raw query string or None, version)
        """
        match = self.REQUEST_LINE_PATTERN.match(line)
        if not match:
            raise HTTPParseError(f"Invalid request line: {line}")

        raw_method, target, version = match.groups()

        try:
            method = HttpMethod(raw_method)
        except ValueError:
            raise HTTPParseError(f"Invalid method: {raw_method}", status_code=405)

        if version not in self.SUPPORTED_VERSIONS:
            raise HTTPParseError(
                f"Unsupported HTTP version: {version}",
                status_code=505,
            )

        # urlsplit drops an empty query, so "?" presence is checked on the
        # raw target instead.
        query_string = None
        if "?" in target:
            query_string = target.split("?", 1)[1].split("#", 1)[0]

        path = unquote(urlsplit(target).path) or "/"
        if ".." in path:
            raise HTTPParseError("Invalid path: contains ..", status_code=400)

        return method, path, query_string, version

    def _parse_headers(self, lines: list[str]) -> Dict[str, str]:
        """
        Parse "Name: Value" lines into a dict with lowercase names.

        Continuation lines (leading space/tab) extend the previous header;
        repeated names are joined with ", " (Cookie with "; ", its own pair
        separator); lines that do not look like a header are skipped.
        """
        headers: Dict[str, str] = {}
        current_name = None

        for line in lines:
            if not line:
                continue

            if line[0] in (" ", "\t"):
                if current_name is not None:
                    headers[current_name] += " " + line.strip()
                continue

            match = self.HEADER_PATTERN.match(line)
            if not match:
                continue

            name, value = match.groups()
            name = name.strip().lower()
            value = value.strip()
            current_name = name

            if name in headers:
                headers[name] += _HEADER_JOINERS.get(name, ", ") + value
            else:
                headers[name] = value

        return headers


def _parse_params(text: str) -> Dict[str, str]:
    """Decode "a=1&b=2" into a dict; the first value of a repeated name wins."""
    params: Dict[str, str] = {}
    for name, value in parse_qsl(text, keep_blank_values=True):
        params.setdefault(name, value)
    return params


def parse_request(
    data: bytes,
    client_address: tuple[str, int] = ("", 0),
    max_size: int = 10 * 1024 * 1024
) -> HttpRequest:
    """Parse one request with a throwaway RequestParser."""
    return RequestParser(max_request_size=max_size).parse(data, client_address)
