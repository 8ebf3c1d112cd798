"""
Repositories for the four academy documents.
"""

from ..models.entities import ClassSession, Payment, Student, Teacher
from ..storage.interfaces import DocumentStore
from .base import DocumentRepository


def _document_path(data_dir: str, filename: str) -> str:
    data_dir = data_dir.strip('/')
    return f"{data_dir}/{filename}" if data_dir else filename


class StudentRepository(DocumentRepository[Student]):
    """Students, stored under "students" in data/students.json."""

    entity_label = "students"
    FILENAME = "students.json"

    def __init__(self, store: DocumentStore, data_dir: str = "data"):
        super().__init__(
            store,
            _document_path(data_dir, self.FILENAME),
            Student.PROPERTY,
            Student.from_dict,
            Student.to_dict,
        )


class TeacherRepository(DocumentRepository[Teacher]):
    """Teachers, stored under "teachers" in data/teachers.json."""

    entity_label = "teachers"
    FILENAME = "teachers.json"

    def __init__(self, store: DocumentStore, data_dir: str = "data"):
        super().__init__(
            store,
            _document_path(data_dir, self.FILENAME),
            Teacher.PROPERTY,
            Teacher.from_dict,
            Teacher.to_dict,
        )


class ClassRepository(DocumentRepository[ClassSession]):
    """Class sessions, stored under "classes" in data/classes.json."""

    entity_label = "classes"
    FILENAME = "classes.json"

    def __init__(self, store: DocumentStore, data_dir: str = "data"):
        super().__init__(
            store,
            _document_path(data_dir, self.FILENAME),
            ClassSession.PROPERTY,
            ClassSession.from_dict,
            ClassSession.to_dict,
        )


class PaymentRepository(DocumentRepository[Payment]):
    """Payments, stored under "payments" in data/payments.json."""

    entity_label = "payments"
    FILENAME = "payments.json"

    def __init__(self, store: DocumentStore, data_dir: str = "data"):
        super().__init__(
            store,
            _document_path(data_dir, self.FILENAME),
            Payment.PROPERTY,
            Payment.from_dict,
            Payment.to_dict,
        )
