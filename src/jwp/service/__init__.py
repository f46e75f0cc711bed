"""
Business services used by the controllers.
"""

from ..exceptions import AuthError, AuthenticationError, DuplicateAccountError
from .auth import ACCOUNT_ATTRIBUTE, AuthResult, AuthService

__all__ = [
    "AuthService",
    "AuthResult",
    "ACCOUNT_ATTRIBUTE",
    "AuthError",
    "AuthenticationError",
    "DuplicateAccountError",
]
