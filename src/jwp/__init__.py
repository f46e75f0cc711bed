"""
=============================================================================
JWP - HTTP LOGIN ENGINE
=============================================================================

The request/response/session core of a small HTTP/1.1 server with a login
flow: parse a request, route it to a controller, authenticate against an
in-memory account store, keep server-side sessions keyed by a JSESSIONID
cookie, and serialize the response.

=============================================================================
QUICK START
=============================================================================

    from jwp import AppConfig, create_app, setup_logging

    config = AppConfig.from_env()
    setup_logging(config)
    app = create_app(config)

    raw_response = app.process(raw_request_bytes, ("127.0.0.1", 54321))

The caller owns the socket: it reads one complete request and writes back
whatever `process()` returns.

=============================================================================
"""

from .accounts import Account, AccountRepository
from .config import AppConfig, setup_logging
from .exceptions import AuthError, AuthenticationError, DuplicateAccountError
from .http import HTTPStatus, HttpMethod, HttpRequest, HttpResponse
from .processor import Http11Processor, create_app
from .service import AuthResult, AuthService
from .session import Session, SessionManager

__version__ = "1.0.0"
__all__ = [
    "create_app",
    "Http11Processor",
    "AppConfig",
    "setup_logging",
    "AuthService",
    "AuthResult",
    "AuthError",
    "AuthenticationError",
    "DuplicateAccountError",
    "Account",
    "AccountRepository",
    "Session",
    "SessionManager",
    "HttpRequest",
    "HttpResponse",
    "HttpMethod",
    "HTTPStatus",
]
