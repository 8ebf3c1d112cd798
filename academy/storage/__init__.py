"""
Remote document storage.

Usage:
    >>> from academy.storage import GitHubFileStore
    >>> store = GitHubFileStore.from_config(config)
    >>> store.read("data/students.json")
"""

from .github_store import GitHubFileStore, VersionedDocument, decode_content, encode_content
from .interfaces import DocumentStore

__all__ = [
    "DocumentStore",
    "GitHubFileStore",
    "VersionedDocument",
    "decode_content",
    "encode_content",
]
