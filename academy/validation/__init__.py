from .validators import ValidationResult, Validator
from .record_validators import (
    ClassSessionValidator,
    PaymentValidator,
    StudentValidator,
    TeacherValidator,
)

__all__ = [
    "ValidationResult",
    "Validator",
    "ClassSessionValidator",
    "PaymentValidator",
    "StudentValidator",
    "TeacherValidator",
]
