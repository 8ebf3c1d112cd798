"""
Username/password check for the back office.
"""

import logging
from typing import Optional

from ..models.entities import User
from .credentials import CredentialStore


logger = logging.getLogger(__name__)


class Authenticator:
    """
    Checks a submitted username/password pair against a credential store.

    Matching is exact and case-sensitive. There is no hashing, lockout or
    rate limiting. Persisting the returned user across requests is the
    caller's job.

    Examples:
        >>> auth = Authenticator(InMemoryCredentialStore.with_defaults())
        >>> user = auth.login("sogon", "sogonsogon")
        >>> user.role
        'admin'
        >>> auth.login("sogon", "wrong") is None
        True
    """

    def __init__(self, credentials: CredentialStore):
        self.credentials = credentials

    def login(self, username: str, password: str) -> Optional[User]:
        """
        Authenticate a user.

        Args:
            username: Submitted login name
            password: Submitted password

        Returns:
            The user without any password field, or None if the pair does
            not match a stored record exactly
        """
        logger.info(f"Login attempt for user: {username}")

        record = self.credentials.find(username, password)
        if record is None:
            logger.warning(f"Login rejected for user: {username}")
            return None

        user = record.to_user()
        logger.info(f"Login succeeded for user: {username} (role={user.role})")
        return user
