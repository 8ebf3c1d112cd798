"""
Credential storage for back-office logins.

The authenticator only needs to look a login up, so stores implement a
single find() operation over the username and password pair. InMemoryCredentialStore is the placeholder store
the back office ships with; it is not a security boundary (plain-text
passwords, no hashing).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..models.entities import User, UserRole
from ..utils.config import SecureString


@dataclass(frozen=True)
class CredentialRecord:
    """
    A stored login: the user's profile plus their password.

    Attributes:
        id: User identifier
        username: Login name (matched case-sensitively)
        password: Password, wrapped so it never shows up in logs or reprs
        name: Display name
        role: "admin" or "teacher"
    """

    id: int
    username: str
    password: SecureString
    name: str
    role: UserRole

    def matches_password(self, password: str) -> bool:
        return self.password.get_value() == password

    def to_user(self) -> User:
        """Strip the password and return the public user record."""
        return User(id=self.id, username=self.username, name=self.name, role=self.role)


class CredentialStore(ABC):
    """Lookup of credential records by login."""

    @abstractmethod
    def find(self, username: str, password: str) -> Optional[CredentialRecord]:
        """
        Find the credential record matching both username and password.

        Usernames need not be unique; a later record with the same
        username still matches when its password does.

        Returns:
            The first record matching both, or None
        """
        pass


class InMemoryCredentialStore(CredentialStore):
    """
    Credential store holding a fixed list of records in process memory.

    Examples:
        >>> store = InMemoryCredentialStore.with_defaults()
        >>> store.find("sogon", "sogonsogon").role
        'admin'
    """

    def __init__(self, records: Iterable[CredentialRecord] = ()):
        self._records: List[CredentialRecord] = list(records)

    @classmethod
    def with_defaults(cls) -> 'InMemoryCredentialStore':
        """Store seeded with the academy's built-in admin and teacher logins."""
        return cls(default_credentials())

    def find(self, username: str, password: str) -> Optional[CredentialRecord]:
        return next(
            (r for r in self._records
             if r.username == username and r.matches_password(password)),
            None,
        )

    def __len__(self) -> int:
        return len(self._records)


def default_credentials() -> List[CredentialRecord]:
    return [
        CredentialRecord(
            id=1,
            username="sogon",
            password=SecureString("sogonsogon"),
            name="관리자",
            role="admin",
        ),
        CredentialRecord(
            id=2,
            username="teacher1",
            password=SecureString("1234"),
            name="박선생",
            role="teacher",
        ),
    ]
