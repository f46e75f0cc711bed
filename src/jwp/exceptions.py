"""
=============================================================================
AUTHENTICATION ERRORS
=============================================================================

Expected failures of the account flows. Like HTTPParseError they carry the
status code the caller should answer with, so the controller does not need
a lookup table:

    AuthError                      base, status_code
    ├── AuthenticationError        unknown account or wrong password → 401
    └── DuplicateAccountError      account name already taken        → 401

Both refusals map to the same status; a client can tell them apart only
by the message. A failed login never says whether the account exists.

=============================================================================
"""

from typing import Optional

from .http.status_codes import HTTPStatus


class AuthError(Exception):
    """Base class for refused login or registration attempts."""

    default_message = "authentication failed"

    def __init__(self, message: Optional[str] = None, status_code: int = HTTPStatus.UNAUTHORIZED):
        super().__init__(message or self.default_message)
        self.status_code = status_code


class AuthenticationError(AuthError):
    """No such account, or the password does not match."""

    default_message = "no such account or wrong password"


class DuplicateAccountError(AuthError):
    """Registration for an account name that already exists."""

    default_message = "duplicate account"
