"""
Validators for the academy record types.

Checks mirror what the entry forms require before a record is saved.
Enumerated fields (duration, payment method and status) only warn on
unknown values so records written by older versions stay editable.
"""

from typing import Dict, Any

from ..models.entities import ClassDuration, PaymentMethod, PaymentStatus
from .validators import Validator, ValidationResult


MAX_NAME_LENGTH = 100
MAX_PHONE_LENGTH = 30
MAX_TEXT_LENGTH = 2000


class StudentValidator(Validator):
    """
    Validator for student data.

    Examples:
        >>> StudentValidator().validate(
        ...     {"name": "김민지", "instrument": "피아노", "phone": "010-1234-5678"}
        ... ).is_valid
        True
    """

    REQUIRED_FIELDS = ["name", "instrument", "phone"]
    LENGTH_LIMITS = {
        "name": MAX_NAME_LENGTH,
        "instrument": MAX_NAME_LENGTH,
        "phone": MAX_PHONE_LENGTH,
    }

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        result.collect(self.validate_required_fields(data, self.REQUIRED_FIELDS))
        if not result.is_valid:
            return result

        return result.collect(
            self.validate_string_length(data[name], name, min_length=1, max_length=limit)
            for name, limit in self.LENGTH_LIMITS.items()
        )


class TeacherValidator(StudentValidator):
    """Validator for teacher data: student fields plus a bank account."""

    REQUIRED_FIELDS = ["name", "instrument", "phone", "bankAccount"]
    LENGTH_LIMITS = dict(StudentValidator.LENGTH_LIMITS, bankAccount=MAX_NAME_LENGTH)


class ClassSessionValidator(Validator):
    """
    Validator for class session data.

    Validates:
    - Required fields (date, time, studentId, teacherId)
    - Date format
    - Student and teacher references are positive ids
    - Duration label (warning only)
    """

    REQUIRED_FIELDS = ["date", "time", "studentId", "teacherId"]
    VALID_DURATIONS = [d.value for d in ClassDuration]

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        result.collect(self.validate_required_fields(data, self.REQUIRED_FIELDS))
        if not result.is_valid:
            return result

        # Foreign keys are not checked against the other documents
        result.collect([
            self.validate_date_format(data["date"]),
            self.validate_positive_number(data["studentId"], "studentId", integer_only=True),
            self.validate_positive_number(data["teacherId"], "teacherId", integer_only=True),
        ])

        if data.get("content"):
            result.collect([
                self.validate_string_length(data["content"], "content", max_length=MAX_TEXT_LENGTH)
            ])

        if data.get("duration"):
            result.collect(
                [self.validate_choice(data["duration"], "duration", self.VALID_DURATIONS)],
                as_warnings=True,
            )

        return result


class PaymentValidator(Validator):
    """
    Validator for payment data.

    Validates:
    - Required fields (date, studentId, amount)
    - Date format
    - Amount is a positive whole number of won
    - Method and status labels (warning only)
    """

    REQUIRED_FIELDS = ["date", "studentId", "amount"]
    VALID_METHODS = [m.value for m in PaymentMethod]
    VALID_STATUSES = [s.value for s in PaymentStatus]

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        result.collect(self.validate_required_fields(data, self.REQUIRED_FIELDS))
        if not result.is_valid:
            return result

        result.collect([
            self.validate_date_format(data["date"]),
            self.validate_positive_number(data["studentId"], "studentId", integer_only=True),
            self.validate_positive_number(data["amount"], "amount", integer_only=True),
        ])

        if data.get("memo"):
            result.collect([
                self.validate_string_length(data["memo"], "memo", max_length=MAX_TEXT_LENGTH)
            ])

        result.collect(
            [
                self.validate_choice(data[name], name, choices)
                for name, choices in (
                    ("method", self.VALID_METHODS),
                    ("status", self.VALID_STATUSES),
                )
                if data.get(name)
            ],
            as_warnings=True,
        )

        return result
