"""
Record validation before writes.

Each record type has a Validator that checks the persisted dict form of a
record before it is written. Errors block the write; warnings are logged
and the record is written anyway.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional


DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')


@dataclass
class ValidationResult:
    """
    Outcome of checking one record.

    Attributes:
        is_valid: False once any error has been added
        errors: Problems that block saving
        warnings: Problems that are only reported
    """

    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> 'ValidationResult':
        """Record a blocking problem; returns self for chaining."""
        self.errors.append(message)
        self.is_valid = False
        return self

    def add_warning(self, message: str) -> 'ValidationResult':
        """Record a non-blocking problem; returns self for chaining."""
        self.warnings.append(message)
        return self

    def collect(self, messages: Iterable[Optional[str]], as_warnings: bool = False) -> 'ValidationResult':
        """
        Add the outcome of several field checks at once.

        None entries (checks that passed) are skipped.

        Examples:
            >>> result.collect([
            ...     validator.validate_date_format(data["date"]),
            ...     validator.validate_positive_number(data["amount"], "amount"),
            ... ])
        """
        add = self.add_warning if as_warnings else self.add_error
        for message in messages:
            if message:
                add(message)
        return self

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def get_summary(self) -> str:
        """
        Human-readable listing of errors then warnings.

        Examples:
            >>> print(result.get_summary())
            Errors (1):
              - Missing required field: phone
        """
        lines: List[str] = []
        for title, messages in (("Errors", self.errors), ("Warnings", self.warnings)):
            if messages:
                lines.append(f"{title} ({len(messages)}):")
                lines.extend(f"  - {message}" for message in messages)
        return "\n".join(lines) if lines else "Validation passed"


class Validator(ABC):
    """
    Abstract base class for record validators.

    Subclasses implement validate() for one record type. The field checks
    below return an error message, or None when the value is acceptable,
    so they can be fed straight into ValidationResult.collect().
    """

    @abstractmethod
    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        """
        Check a record in its persisted (camelCase) dict form.

        Returns:
            ValidationResult with errors and warnings
        """
        pass

    def validate_required_fields(
        self,
        data: Dict[str, Any],
        required_fields: Iterable[str]
    ) -> List[str]:
        """
        Report fields that are absent, None or blank text.

        Returns:
            One message per missing field
        """
        return [
            f"Missing required field: {name}"
            for name in required_fields
            if _is_blank(data.get(name))
        ]

    def validate_date_format(
        self,
        value: Any,
        field_name: str = "date"
    ) -> Optional[str]:
        """Require a YYYY-MM-DD string."""
        if isinstance(value, str) and DATE_PATTERN.match(value):
            return None
        return f"Invalid {field_name} format: {value} (expected YYYY-MM-DD)"

    def validate_positive_number(
        self,
        value: Any,
        field_name: str,
        integer_only: bool = False
    ) -> Optional[str]:
        """
        Require a number greater than zero.

        Booleans are rejected even though bool is an int subclass.
        """
        accepted = (int,) if integer_only else (int, float)
        if isinstance(value, bool) or not isinstance(value, accepted):
            kind = "an integer" if integer_only else "a number"
            return f"{field_name} must be {kind}, got {type(value).__name__}"
        if value <= 0:
            return f"{field_name} must be positive, got {value}"
        return None

    def validate_string_length(
        self,
        value: Any,
        field_name: str,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None
    ) -> Optional[str]:
        """Require text whose length lies within the given bounds."""
        if not isinstance(value, str):
            return f"{field_name} must be a string, got {type(value).__name__}"
        if min_length is not None and len(value) < min_length:
            return f"{field_name} must be at least {min_length} characters, got {len(value)}"
        if max_length is not None and len(value) > max_length:
            return f"{field_name} must be at most {max_length} characters, got {len(value)}"
        return None

    def validate_choice(
        self,
        value: Any,
        field_name: str,
        choices: Iterable[str]
    ) -> Optional[str]:
        """Require one of a fixed set of labels."""
        choices = list(choices)
        if value in choices:
            return None
        return f"Unknown {field_name}: {value} (expected one of: {', '.join(choices)})"


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
