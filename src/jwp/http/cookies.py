"""
=============================================================================
COOKIES
=============================================================================

Reading the `Cookie` request header and writing `Set-Cookie` values.

    Browser → server:   Cookie: JSESSIONID=5f0c...; theme=dark
    Server → browser:   Set-Cookie: JSESSIONID=5f0c...

Only the parts the session flow needs are implemented. Attributes such as
Domain, Expires or SameSite are out of scope; `Max-Age=0` is enough to make
a browser forget the session cookie on logout.

=============================================================================
"""

from typing import Dict, Optional


# Name of the cookie that carries the server-side session id.
SESSION_COOKIE = "JSESSIONID"


def parse_cookie_header(value: Optional[str]) -> Dict[str, str]:
    """
    Parse a `Cookie` header into a name → value dict.

    Pairs are separated by ";". A pair without "=" is skipped, and the first
    occurrence of a name wins (browsers send the most specific path first).

    Examples:
        >>> parse_cookie_header("JSESSIONID=abc; theme=dark")
        {'JSESSIONID': 'abc', 'theme': 'dark'}
        >>> parse_cookie_header("")
        {}
    """
    cookies: Dict[str, str] = {}
    if not value:
        return cookies

    for pair in value.split(";"):
        name, sep, cookie_value = pair.strip().partition("=")
        if not sep or not name:
            continue
        name = name.strip()
        if name not in cookies:
            cookies[name] = cookie_value.strip().strip('"')

    return cookies


def format_set_cookie(
    name: str,
    value: str,
    path: Optional[str] = None,
    max_age: Optional[int] = None,
    http_only: bool = False,
) -> str:
    """
    Build a `Set-Cookie` header value.

    With no attributes the result is the bare pair, e.g. "JSESSIONID=abc",
    which is exactly what the login flow emits.
    """
    parts = [f"{name}={value}"]
    if path is not None:
        parts.append(f"Path={path}")
    if max_age is not None:
        parts.append(f"Max-Age={max_age}")
    if http_only:
        parts.append("HttpOnly")
    return "; ".join(parts)


def session_cookie(session_id: str, name: str = SESSION_COOKIE) -> str:
    """`Set-Cookie` value handing a session id to the browser."""
    return format_set_cookie(name, session_id)
