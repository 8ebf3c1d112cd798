"""
Result<T> for expected service outcomes.

Record services return a Result when the caller is expected to act on
the outcome: a record was stored, a record was rejected by validation,
or there was nothing to change. Failures of the remote store are raised
as exceptions and never wrapped here.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar


T = TypeVar('T')


class ResultStatus(Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a record service call.

    Attributes:
        status: SUCCESS or FAILURE
        value: Stored record (or id) on success; may be None when nothing
            changed
        message: Text for the user, e.g. "Added with id 4" or the
            validation summary
        error: Exception behind a failure, if there was one

    Examples:
        >>> result = service.add({"name": "김민지", ...})
        >>> if result.is_success:
        ...     print(f"Stored with id {result.value.id}")
        ... else:
        ...     print(f"Rejected: {result.message}")
    """

    status: ResultStatus
    value: Optional[T] = None
    message: Optional[str] = None
    error: Optional[Exception] = None

    @classmethod
    def success(cls, value: Optional[T], message: Optional[str] = None) -> 'Result[T]':
        return cls(ResultStatus.SUCCESS, value=value, message=message)

    @classmethod
    def failure(cls, message: str, error: Optional[Exception] = None) -> 'Result[T]':
        return cls(ResultStatus.FAILURE, message=message, error=error)

    @property
    def is_success(self) -> bool:
        return self.status is ResultStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.status is ResultStatus.FAILURE

    def unwrap(self) -> Optional[T]:
        """
        Return the value of a successful result.

        Raises:
            ValueError: If the result is a failure
        """
        if self.is_failure:
            raise ValueError(f"Cannot unwrap failure result: {self.message}")
        return self.value

    def unwrap_or(self, default: T) -> Optional[T]:
        """Return the value, or default for a failure."""
        return self.value if self.is_success else default
