"""
Academy record types.

Each record is a flat value object persisted as one element of a JSON
array. Python attributes are snake_case; the persisted keys keep the
camelCase names used by the existing documents (studentId, bankAccount,
dayOfWeek, ...) so stored data round-trips unchanged.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Dict, Any, Literal


UserRole = Literal["admin", "teacher"]


class ClassDuration(Enum):
    """Lesson length labels offered when scheduling a class."""
    MIN_30 = "30분"
    MIN_40 = "40분"
    MIN_50 = "50분"
    MIN_60 = "60분"
    MIN_90 = "90분"
    MIN_120 = "120분"


class PaymentMethod(Enum):
    """How a payment was made."""
    CASH = "현금"
    CARD = "카드"
    BANK_TRANSFER = "계좌이체"


class PaymentStatus(Enum):
    """Settlement state of a payment."""
    COMPLETED = "완료"
    PENDING = "대기"
    CANCELLED = "취소"


# Sunday first, matching the labels stored in existing class documents
WEEKDAY_LABELS = ("일", "월", "화", "수", "목", "금", "토")


def day_of_week_label(date_str: str) -> str:
    """
    Derive the weekday label for a YYYY-MM-DD date.

    Args:
        date_str: Calendar date string

    Returns:
        One of WEEKDAY_LABELS, or "" if the date cannot be parsed

    Examples:
        >>> day_of_week_label("2024-03-01")
        '금'
    """
    try:
        parsed = datetime.strptime(date_str, "%Y-%m-%d")
    except (TypeError, ValueError):
        return ""
    # datetime.weekday() is Monday=0
    return WEEKDAY_LABELS[(parsed.weekday() + 1) % 7]


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _str(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass
class Student:
    """A student enrolled at the academy."""

    id: int
    name: str
    instrument: str
    phone: str

    PROPERTY = "students"
    FIELDS = ("id", "name", "instrument", "phone")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "instrument": self.instrument,
            "phone": self.phone,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Student':
        return cls(
            id=_int(d.get("id")),
            name=_str(d.get("name")),
            instrument=_str(d.get("instrument")),
            phone=_str(d.get("phone")),
        )

    def with_id(self, new_id: int) -> 'Student':
        return replace(self, id=new_id)


@dataclass
class Teacher:
    """A teacher, including the account their salary is paid into."""

    id: int
    name: str
    instrument: str
    phone: str
    bank_account: str

    PROPERTY = "teachers"
    FIELDS = ("id", "name", "instrument", "phone", "bankAccount")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "instrument": self.instrument,
            "phone": self.phone,
            "bankAccount": self.bank_account,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Teacher':
        return cls(
            id=_int(d.get("id")),
            name=_str(d.get("name")),
            instrument=_str(d.get("instrument")),
            phone=_str(d.get("phone")),
            bank_account=_str(d.get("bankAccount")),
        )

    def with_id(self, new_id: int) -> 'Teacher':
        return replace(self, id=new_id)


@dataclass
class ClassSession:
    """
    A scheduled lesson between one student and one teacher.

    student_id and teacher_id are unchecked references; a session may
    outlive the student or teacher it points at.

    Attributes:
        date: Lesson date (YYYY-MM-DD)
        day_of_week: Weekday label derived from date
        time: Start time as entered (e.g. "15:30")
        duration: One of the ClassDuration labels
        content: Free-text lesson notes
    """

    id: int
    date: str
    day_of_week: str
    time: str
    student_id: int
    teacher_id: int
    instrument: str
    duration: str
    content: str

    PROPERTY = "classes"
    FIELDS = (
        "id", "date", "dayOfWeek", "time", "studentId", "teacherId",
        "instrument", "duration", "content",
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "dayOfWeek": self.day_of_week,
            "time": self.time,
            "studentId": self.student_id,
            "teacherId": self.teacher_id,
            "instrument": self.instrument,
            "duration": self.duration,
            "content": self.content,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'ClassSession':
        return cls(
            id=_int(d.get("id")),
            date=_str(d.get("date")),
            day_of_week=_str(d.get("dayOfWeek")),
            time=_str(d.get("time")),
            student_id=_int(d.get("studentId")),
            teacher_id=_int(d.get("teacherId")),
            instrument=_str(d.get("instrument")),
            duration=_str(d.get("duration")),
            content=_str(d.get("content")),
        )

    def with_id(self, new_id: int) -> 'ClassSession':
        return replace(self, id=new_id)

    def with_derived_day(self) -> 'ClassSession':
        """Return a copy whose day_of_week matches date."""
        return replace(self, day_of_week=day_of_week_label(self.date))


@dataclass
class Payment:
    """
    A tuition payment made by a student.

    Attributes:
        amount: Non-negative whole won
        method: One of the PaymentMethod values
        status: One of the PaymentStatus values
    """

    id: int
    date: str
    student_id: int
    amount: int
    method: str
    status: str
    memo: str

    PROPERTY = "payments"
    FIELDS = ("id", "date", "studentId", "amount", "method", "status", "memo")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "studentId": self.student_id,
            "amount": self.amount,
            "method": self.method,
            "status": self.status,
            "memo": self.memo,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Payment':
        return cls(
            id=_int(d.get("id")),
            date=_str(d.get("date")),
            student_id=_int(d.get("studentId")),
            amount=_int(d.get("amount")),
            method=_str(d.get("method")),
            status=_str(d.get("status")),
            memo=_str(d.get("memo")),
        )

    def with_id(self, new_id: int) -> 'Payment':
        return replace(self, id=new_id)


@dataclass(frozen=True)
class User:
    """
    An authenticated back-office user.

    Never carries a password; see auth.credentials for the stored form.
    """

    id: int
    username: str
    name: str
    role: UserRole

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "role": self.role,
        }
