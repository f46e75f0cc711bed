"""
=============================================================================
HTTP MODULE
=============================================================================

Protocol-level building blocks shared by every controller:

    request.py       HttpRequest, HttpMethod, RequestParser, HTTPParseError
    response.py      HttpResponse builder, ResponseStateError
    cookies.py       Cookie / Set-Cookie helpers, SESSION_COOKIE
    status_codes.py  HTTPStatus enum with reason phrases
    resources.py     ResourceLoader for the static pages
    mime_types.py    Extension → Content-Type lookup

=============================================================================
"""

from .cookies import SESSION_COOKIE, format_set_cookie, parse_cookie_header, session_cookie
from .mime_types import get_content_type, get_mime_type
from .request import HTTPParseError, HttpMethod, HttpRequest, RequestParser, parse_request
from .resources import Resource, ResourceLoader, ResourceNotFoundError
from .response import LOCATION, SET_COOKIE, HttpResponse, ResponseStateError, format_http_date
from .status_codes import HTTPStatus

__all__ = [
    # Request
    "HttpRequest",
    "HttpMethod",
    "RequestParser",
    "HTTPParseError",
    "parse_request",

    # Response
    "HttpResponse",
    "ResponseStateError",
    "format_http_date",
    "LOCATION",
    "SET_COOKIE",

    # Cookies
    "SESSION_COOKIE",
    "parse_cookie_header",
    "format_set_cookie",
    "session_cookie",

    # Status codes
    "HTTPStatus",

    # Resources
    "Resource",
    "ResourceLoader",
    "ResourceNotFoundError",
    "get_mime_type",
    "get_content_type",
]
