"""
Exception hierarchy for the academy back office.

Infrastructure failures (configuration, remote host) are raised as
exceptions. Expected business outcomes such as validation failures are
reported through Result objects instead (see models.result).
"""

from typing import Optional


class AcademyError(Exception):
    """Base class for all academy errors."""
    pass


class ConfigurationError(AcademyError):
    """Raised when a required setting is missing or invalid."""
    pass


class RemoteStoreError(AcademyError):
    """
    Base class for remote file host failures.

    Attributes:
        path: Document path the request targeted
        status_code: HTTP status returned by the host, if any
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message)
        self.path = path
        self.status_code = status_code

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code is not None:
            return f"{base} (path={self.path}, status={self.status_code})"
        if self.path is not None:
            return f"{base} (path={self.path})"
        return base


class RemoteFetchError(RemoteStoreError):
    """Raised when a document cannot be fetched or decoded."""
    pass


class RemoteWriteError(RemoteStoreError):
    """Raised when a document cannot be written."""
    pass
