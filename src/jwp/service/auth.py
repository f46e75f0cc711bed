"""
=============================================================================
AUTH SERVICE
=============================================================================

Authenticates accounts, creates accounts, and issues sessions.

=============================================================================
FLOWS
=============================================================================

    login(account, password)
        │
        ├── account unknown or password wrong ──► AuthenticationError
        │
        └── ok ──► Session(new id, account=...) ──► SessionManager.add ──► id

    register(account, password, email)
        │
        ├── name taken ──► DuplicateAccountError (existing account untouched)
        │
        └── ok ──► AccountRepository.save ──► new session as above ──► id

    is_logged_in(session_id)   True iff the id resolves in SessionManager
    logout(session_id)         remove + invalidate, True if it existed

Every successful login mints a NEW session; two logins with the same
credentials yield two different ids.

=============================================================================
TWO CALLING STYLES
=============================================================================

`login` / `register` raise on refusal. `try_login` / `try_register` return an
AuthResult instead, so a controller can branch on a value:

    result = auth.try_login(account, password)
    if result.ok:
        ...result.session_id...
    else:
        ...result.error...

=============================================================================
"""

from dataclasses import dataclass
from typing import Optional
import logging

from ..accounts import Account, AccountRepository
from ..exceptions import AuthError, AuthenticationError
from ..session import Session, SessionManager, generate_session_id


logger = logging.getLogger(__name__)

# Session attribute holding the authenticated Account.
ACCOUNT_ATTRIBUTE = "account"


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a login or registration attempt: a session id or an error."""

    session_id: Optional[str] = None
    error: Optional[AuthError] = None

    @classmethod
    def success(cls, session_id: str) -> "AuthResult":
        return cls(session_id=session_id)

    @classmethod
    def failure(cls, error: AuthError) -> "AuthResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None


class AuthService:
    """
    Account and session operations behind the login controllers.

    Args:
        session_manager: Registry the new sessions go into.
        accounts: Account store. Defaults to one seeded with the demo account.
    """

    def __init__(
        self,
        session_manager: SessionManager,
        accounts: Optional[AccountRepository] = None,
    ):
        self.session_manager = session_manager
        self.accounts = accounts if accounts is not None else AccountRepository.with_defaults()

    def login(self, account: Optional[str], password: Optional[str]) -> str:
        """
        Authenticate and open a session.

        Returns:
            The new session id.

        Raises:
            AuthenticationError: Unknown account or wrong password. The
                                 message is the same for both.
        """
        found = self.accounts.find_by_account(account)
        if found is None or not found.check_password(password):
            logger.info(f"Login refused for account {account!r}")
            raise AuthenticationError()

        session_id = self._open_session(found)
        logger.info(f"Login succeeded for account {found.account!r}")
        return session_id

    def register(self, account: str, password: str, email: str) -> str:
        """
        Create an account and open a session for it.

        Returns:
            The new session id.

        Raises:
            DuplicateAccountError: The account name is taken.
        """
        try:
            saved = self.accounts.save(account, password, email)
        except AuthError:
            logger.info(f"Registration refused for duplicate account {account!r}")
            raise

        session_id = self._open_session(saved)
        logger.info(f"Registered account {saved.account!r}")
        return session_id

    def is_logged_in(self, session_id: Optional[str]) -> bool:
        """True iff `session_id` names a live session. Never raises."""
        return self.session_manager.find_session(session_id) is not None

    def logout(self, session_id: Optional[str]) -> bool:
        """End a session. Returns False if there was nothing to end."""
        session = self.session_manager.remove(session_id)
        if session is None:
            return False

        account = session.get_attribute(ACCOUNT_ATTRIBUTE)
        session.invalidate()
        if account is not None:
            logger.info(f"Logged out account {account.account!r}")
        return True

    def current_account(self, session_id: Optional[str]) -> Optional[Account]:
        """Account bound to a session, if the session is live."""
        session = self.session_manager.find_session(session_id)
        if session is None:
            return None
        return session.get_attribute(ACCOUNT_ATTRIBUTE)

    # =========================================================================
    # RESULT-RETURNING VARIANTS
    # =========================================================================

    def try_login(self, account: Optional[str], password: Optional[str]) -> AuthResult:
        try:
            return AuthResult.success(self.login(account, password))
        except AuthError as e:
            return AuthResult.failure(e)

    def try_register(
        self,
        account: Optional[str],
        password: Optional[str],
        email: Optional[str],
    ) -> AuthResult:
        # Missing form fields are a refused registration, not a server fault.
        if not account or not password:
            return AuthResult.failure(AuthError("account and password are required"))
        try:
            return AuthResult.success(self.register(account, password, email or ""))
        except AuthError as e:
            return AuthResult.failure(e)

    def _open_session(self, account: Account) -> str:
        session = Session(generate_session_id())
        session.set_attribute(ACCOUNT_ATTRIBUTE, account)
        self.session_manager.add(session)
        return session.id
