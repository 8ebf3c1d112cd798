"""
Create, update and delete operations over the academy documents.

Every change is a full read-modify-write of one document: read the
current list, change it in memory, write the whole list back. New ids
are assigned here, from the list just read, rather than from whatever
copy the caller happens to hold.
"""

import logging
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from ..models.entities import ClassSession, Payment, Student, Teacher
from ..models.result import Result
from ..repositories.base import DocumentRepository
from ..repositories.entities import (
    ClassRepository,
    PaymentRepository,
    StudentRepository,
    TeacherRepository,
)
from ..validation.record_validators import (
    ClassSessionValidator,
    PaymentValidator,
    StudentValidator,
    TeacherValidator,
)
from ..validation.validators import Validator


logger = logging.getLogger(__name__)


R = TypeVar('R')


def next_id(records: List[Any]) -> int:
    """
    Identifier for a record appended to records.

    Examples:
        >>> next_id([])
        1
        >>> next_id([Student(id=3, ...), Student(id=7, ...)])
        8
    """
    return max((r.id for r in records), default=0) + 1


def with_added(records: List[R], record: R) -> List[R]:
    """Return a new list with record appended under the next id."""
    return records + [record.with_id(next_id(records))]


def with_replaced(records: List[R], record: R) -> List[R]:
    """Return a new list with the element sharing record's id replaced."""
    return [record if r.id == record.id else r for r in records]


def without(records: List[R], record_id: int) -> List[R]:
    """Return a new list without the element whose id is record_id."""
    return [r for r in records if r.id != record_id]


class RecordService(Generic[R]):
    """
    Validated record lifecycle for one repository.

    Validation problems and missing ids come back as Results. Store
    failures are raised: a failed read aborts the change before anything
    is written, and a failed write reaches the caller unchanged.

    Examples:
        >>> service = student_service(StudentRepository(store))
        >>> result = service.add({"name": "김민지", "instrument": "피아노",
        ...                       "phone": "010-1234-5678"})
        >>> if result.is_success:
        ...     print(f"Stored with id {result.value.id}")
    """

    def __init__(
        self,
        repository: DocumentRepository[R],
        validator: Validator,
        from_dict: Callable[[Dict[str, Any]], R],
        prepare: Optional[Callable[[R], R]] = None
    ):
        """
        Initialize the service.

        Args:
            repository: Repository for the document to change
            validator: Validator applied to the persisted dict form
            from_dict: Builds a record from field values
            prepare: Optional hook deriving computed fields before saving
        """
        self.repository = repository
        self.validator = validator
        self._from_dict = from_dict
        self._prepare = prepare or (lambda record: record)

    @property
    def label(self) -> str:
        return self.repository.entity_label

    def list(self) -> List[R]:
        """All records, or an empty list if the document cannot be read."""
        return self.repository.get_all()

    def get(self, record_id: int) -> Optional[R]:
        """Find one record by id in the current list."""
        for record in self.list():
            if record.id == record_id:
                return record
        return None

    def _check(self, record: R, fields: Optional[Dict[str, Any]] = None) -> Optional[str]:
        # Values as submitted are checked, not their int() conversions
        validation = self.validator.validate({**record.to_dict(), **(fields or {})})
        for warning in validation.warnings:
            logger.warning(f"{self.label}: {warning}")
        if not validation.is_valid:
            return validation.get_summary()
        return None

    def add(self, fields: Dict[str, Any]) -> Result[R]:
        """
        Validate and append a new record.

        Args:
            fields: Field values in persisted (camelCase) form; any "id"
                is ignored

        Returns:
            Result holding the stored record with its assigned id

        Raises:
            ConfigurationError, RemoteFetchError, RemoteWriteError
        """
        data = {k: v for k, v in fields.items() if k != "id"}
        record = self._prepare(self._from_dict(data))

        problems = self._check(record, data)
        if problems:
            return Result.failure(f"Invalid {self.label} data:\n{problems}")

        records = self.repository.load()
        updated = with_added(records, record)
        stored = updated[-1]

        self.repository.save(updated)
        logger.info(f"Added {self.label} record with id {stored.id}")
        return Result.success(stored, f"Added with id {stored.id}")

    def update(self, record: R) -> Result[R]:
        """
        Validate and replace the record with the same id.

        Returns:
            Result holding the stored record; if no record has that id,
            a successful Result with value None and nothing written

        Raises:
            ConfigurationError, RemoteFetchError, RemoteWriteError
        """
        record = self._prepare(record)

        problems = self._check(record)
        if problems:
            return Result.failure(f"Invalid {self.label} data:\n{problems}")

        records = self.repository.load()
        if not any(r.id == record.id for r in records):
            logger.info(f"No {self.label} record with id {record.id}; nothing to update")
            return Result.success(None, f"No record with id {record.id}; nothing changed")

        self.repository.save(with_replaced(records, record))
        logger.info(f"Updated {self.label} record {record.id}")
        return Result.success(record, f"Updated record {record.id}")

    def update_fields(self, record_id: int, fields: Dict[str, Any]) -> Result[R]:
        """
        Change some fields of the stored record with record_id.

        The current record comes from a strict read, so a failed read is
        raised rather than reported as a missing id.

        Args:
            record_id: Id of the record to change
            fields: Field values in persisted (camelCase) form; any "id"
                is ignored

        Returns:
            Result holding the stored record; if no record has that id,
            a successful Result with value None and nothing written

        Raises:
            ConfigurationError, RemoteFetchError, RemoteWriteError
        """
        changes = {k: v for k, v in fields.items() if k != "id"}

        records = self.repository.load()
        current = next((r for r in records if r.id == record_id), None)
        if current is None:
            logger.info(f"No {self.label} record with id {record_id}; nothing to update")
            return Result.success(None, f"No record with id {record_id}; nothing changed")

        record = self._prepare(self._from_dict({**current.to_dict(), **changes, "id": record_id}))

        problems = self._check(record, changes)
        if problems:
            return Result.failure(f"Invalid {self.label} data:\n{problems}")

        self.repository.save(with_replaced(records, record))
        logger.info(f"Updated {self.label} record {record_id}")
        return Result.success(record, f"Updated record {record_id}")

    def delete(self, record_id: int) -> Result[int]:
        """
        Remove the record with record_id.

        Related records in other documents are left untouched.

        Returns:
            Result holding the id; if it was not found the Result is
            still successful and nothing is written

        Raises:
            ConfigurationError, RemoteFetchError, RemoteWriteError
        """
        records = self.repository.load()
        remaining = without(records, record_id)

        if len(remaining) == len(records):
            logger.info(f"No {self.label} record with id {record_id}; nothing to delete")
            return Result.success(record_id, f"No record with id {record_id}; nothing changed")

        self.repository.save(remaining)
        logger.info(f"Deleted {self.label} record {record_id}")
        return Result.success(record_id, f"Deleted record {record_id}")


def student_service(repository: StudentRepository) -> RecordService:
    return RecordService(repository, StudentValidator(), Student.from_dict)


def teacher_service(repository: TeacherRepository) -> RecordService:
    return RecordService(repository, TeacherValidator(), Teacher.from_dict)


def class_service(repository: ClassRepository) -> RecordService:
    return RecordService(
        repository,
        ClassSessionValidator(),
        ClassSession.from_dict,
        prepare=ClassSession.with_derived_day,
    )


def payment_service(repository: PaymentRepository) -> RecordService:
    return RecordService(repository, PaymentValidator(), Payment.from_dict)
