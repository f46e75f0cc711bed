"""
In-memory account store.

Accounts are (account, password, email) triples with a numeric id. Nothing
is persisted; the store starts either empty or seeded with the demo account
`gugu / password`.
"""

from dataclasses import dataclass
from typing import Dict, Optional
import hmac
import logging
import threading

from .exceptions import DuplicateAccountError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Account:
    id: int
    account: str
    password: str
    email: str

    def check_password(self, password: Optional[str]) -> bool:
        """Constant-time comparison; None never matches."""
        if password is None:
            return False
        return hmac.compare_digest(self.password.encode("utf-8"), password.encode("utf-8"))


class AccountRepository:
    """
    Account name → Account, safe for concurrent use.

    `save` checks for an existing name and inserts under the same lock, so
    of two concurrent registrations for one name exactly one succeeds.
    """

    def __init__(self):
        self._accounts: Dict[str, Account] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    @classmethod
    def with_defaults(cls) -> "AccountRepository":
        """Store seeded with the demo account."""
        repository = cls()
        repository.save("gugu", "password", "hkkang@woowahan.com")
        return repository

    def find_by_account(self, account: Optional[str]) -> Optional[Account]:
        if account is None:
            return None
        with self._lock:
            return self._accounts.get(account)

    def save(self, account: str, password: str, email: str) -> Account:
        """
        Create an account.

        Raises:
            DuplicateAccountError: The name is already taken. The existing
                                   account is left untouched.
        """
        with self._lock:
            if account in self._accounts:
                raise DuplicateAccountError()

            saved = Account(
                id=self._next_id,
                account=account,
                password=password,
                email=email,
            )
            self._accounts[account] = saved
            self._next_id += 1

        logger.debug(f"Saved account id={saved.id}")
        return saved

    def __len__(self) -> int:
        with self._lock:
            return len(self._accounts)
