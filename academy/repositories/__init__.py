"""
Entity repositories.

Usage:
    >>> from academy.repositories import StudentRepository
    >>> students = StudentRepository(store).get_all()
"""

from .base import DocumentRepository
from .entities import (
    ClassRepository,
    PaymentRepository,
    StudentRepository,
    TeacherRepository,
)

__all__ = [
    "DocumentRepository",
    "ClassRepository",
    "PaymentRepository",
    "StudentRepository",
    "TeacherRepository",
]
