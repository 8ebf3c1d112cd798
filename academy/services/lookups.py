"""
Display-name lookups across documents.

References between documents are unchecked, so a class or payment may
point at a student or teacher that no longer exists. Lookups then fall
back to UNKNOWN_LABEL instead of failing.
"""

from typing import Any, Dict, Iterable, Optional


UNKNOWN_LABEL = "알 수 없음"


def display_name(records: Iterable[Any], record_id: Optional[int]) -> str:
    """
    Name of the record with record_id, or UNKNOWN_LABEL.

    Examples:
        >>> display_name(students, 3)
        '김민지'
        >>> display_name(students, 999)
        '알 수 없음'
    """
    for record in records:
        if record.id == record_id:
            return record.name
    return UNKNOWN_LABEL


def name_index(records: Iterable[Any]) -> Dict[int, str]:
    """Map of id to name, for resolving many references at once."""
    return {record.id: record.name for record in records}


def student_name(students: Iterable[Any], student_id: Optional[int]) -> str:
    return display_name(students, student_id)


def teacher_name(teachers: Iterable[Any], teacher_id: Optional[int]) -> str:
    return display_name(teachers, teacher_id)
