"""
=============================================================================
HTTP STATUS CODES
=============================================================================

Status codes emitted by the login engine and the request processor.

=============================================================================
WHICH CODES DOES THE ENGINE USE?
=============================================================================

    ┌────────┬───────────────────────────────────────────────────────────┐
    │  Code  │ Where it comes from                                       │
    ├────────┼───────────────────────────────────────────────────────────┤
    │  200   │ Login / register page, static resources, home page        │
    │  302   │ Successful login, register, logout, already-logged-in     │
    │  400   │ Malformed request line, path traversal, short body        │
    │  401   │ Wrong credentials, duplicate account                      │
    │  404   │ No controller, missing resource                           │
    │  405   │ Unknown request method                                    │
    │  413   │ Request exceeds the configured size limit                 │
    │  500   │ A controller raised something unexpected                  │
    │  505   │ HTTP version other than 1.0 / 1.1                         │
    └────────┴───────────────────────────────────────────────────────────┘

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes and reason phrases.

    Being an IntEnum, a member compares equal to its number:

        >>> HTTPStatus.FOUND == 302
        True
        >>> HTTPStatus.FOUND.phrase
        'Found'
    """

    # 2xx SUCCESS
    OK = 200

    # 3xx REDIRECTION
    FOUND = 302                 # Used for every post-login redirect

    # 4xx CLIENT ERRORS
    BAD_REQUEST = 400
    UNAUTHORIZED = 401          # Login or registration refused
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    PAYLOAD_TOO_LARGE = 413

    # 5xx SERVER ERRORS
    INTERNAL_SERVER_ERROR = 500
    HTTP_VERSION_NOT_SUPPORTED = 505

    @property
    def phrase(self) -> str:
        """
        Reason phrase for the status line.

            HTTP/1.1 302 Found
                     ─── ─────
                      │    └── phrase
                      └─────── code
        """
        return _STATUS_PHRASES.get(self, "Unknown")

    @property
    def is_client_error(self) -> bool:
        return 400 <= self < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self < 600


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.FOUND: "Found",

    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.UNAUTHORIZED: "Unauthorized",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.METHOD_NOT_ALLOWED: "Method Not Allowed",
    HTTPStatus.PAYLOAD_TOO_LARGE: "Payload Too Large",

    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
    HTTPStatus.HTTP_VERSION_NOT_SUPPORTED: "HTTP Version Not Supported",
}
