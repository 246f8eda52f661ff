"""
Accounts
========
The account persistence boundary used by the auth flows.
"""

import threading
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Dict, Optional


@dataclass
class Account:
    """A patient account as seen by the auth flows."""
    email: str
    password_hash: str
    device_id: str  # the single trusted device
    name: str = ""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    last_login_at: Optional[datetime] = None


class DuplicateAccountError(Exception):
    """Raised by AccountStore.create when the email is already registered."""
    pass


class AccountStore(ABC):
    """
    Account persistence used by login, account creation and password reset.

    Implementations must make each method atomic on its own.
    """

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Account]:
        ...

    @abstractmethod
    def create(self, account: Account) -> Account:
        """Insert an account. Raises DuplicateAccountError if the email is taken."""
        ...

    @abstractmethod
    def save_trusted_device(self, account_id: str, device_id: str) -> None:
        ...

    @abstractmethod
    def update_password_hash(self, email: str, password_hash: str) -> bool:
        """Returns False if no account has this email."""
        ...

    @abstractmethod
    def record_login(self, account_id: str, at: datetime) -> None:
        ...


class InMemoryAccountStore(AccountStore):
    """
    Dict-backed account store for development and testing.

    Use a database-backed store in production.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._by_email: Dict[str, Account] = {}

    @staticmethod
    def _key(email: str) -> str:
        return email.strip().lower()

    def get_by_email(self, email: str) -> Optional[Account]:
        with self._lock:
            account = self._by_email.get(self._key(email))
            return replace(account) if account else None

    def create(self, account: Account) -> Account:
        with self._lock:
            key = self._key(account.email)
            if key in self._by_email:
                raise DuplicateAccountError(account.email)
            self._by_email[key] = replace(account)
            return replace(account)

    def _find_by_id(self, account_id: str) -> Optional[Account]:
        for account in self._by_email.values():
            if account.id == account_id:
                return account
        return None

    def save_trusted_device(self, account_id: str, device_id: str) -> None:
        with self._lock:
            account = self._find_by_id(account_id)
            if account is not None:
                account.device_id = device_id

    def update_password_hash(self, email: str, password_hash: str) -> bool:
        with self._lock:
            account = self._by_email.get(self._key(email))
            if account is None:
                return False
            account.password_hash = password_hash
            return True

    def record_login(self, account_id: str, at: datetime) -> None:
        with self._lock:
            account = self._find_by_id(account_id)
            if account is not None:
                account.last_login_at = at
