"""
Back-office authentication.

Usage:
    >>> from academy.auth import Authenticator, InMemoryCredentialStore
    >>> auth = Authenticator(InMemoryCredentialStore.with_defaults())
    >>> user = auth.login("sogon", "sogonsogon")
"""

from .authenticator import Authenticator
from .credentials import (
    CredentialRecord,
    CredentialStore,
    InMemoryCredentialStore,
    default_credentials,
)

__all__ = [
    "Authenticator",
    "CredentialRecord",
    "CredentialStore",
    "InMemoryCredentialStore",
    "default_credentials",
]
