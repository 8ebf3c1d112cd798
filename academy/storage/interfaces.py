"""
Abstract interface for document storage.

Repositories depend on this abstraction rather than on the GitHub client.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class DocumentStore(ABC):
    """
    Read and whole-document overwrite of JSON documents by path.

    Implementations raise ConfigurationError when they cannot reach the
    host for lack of settings, RemoteFetchError on failed reads and
    RemoteWriteError on failed writes.
    """

    @abstractmethod
    def read(self, path: str) -> Any:
        """
        Fetch and parse the document at path.

        Args:
            path: Document path

        Returns:
            Parsed JSON value
        """
        pass

    @abstractmethod
    def write(self, path: str, content: Any) -> Dict[str, Any]:
        """
        Replace the document at path with content, creating it if absent.

        Args:
            path: Document path
            content: JSON-serializable value

        Returns:
            Host response metadata
        """
        pass
