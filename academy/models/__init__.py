"""
Academy data models.

Record types persisted in the remote documents, the enumerations their
fields draw from, and the Result type returned by record services.
"""

from .entities import (
    ClassDuration,
    ClassSession,
    Payment,
    PaymentMethod,
    PaymentStatus,
    Student,
    Teacher,
    User,
    WEEKDAY_LABELS,
    day_of_week_label,
)
from .result import Result, ResultStatus

__all__ = [
    "ClassDuration",
    "ClassSession",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
    "Student",
    "Teacher",
    "User",
    "WEEKDAY_LABELS",
    "day_of_week_label",
    "Result",
    "ResultStatus",
]
