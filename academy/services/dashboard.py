"""
Home-screen summary across all four documents.

The documents are independent, so they are fetched concurrently and the
summary is computed once all reads have finished. Reads go through
get_all(), so a document that cannot be fetched counts as empty.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional

from ..models.entities import ClassSession, Payment, Student, Teacher
from ..repositories.base import DocumentRepository
from .lookups import name_index, UNKNOWN_LABEL


logger = logging.getLogger(__name__)


RECENT_PAYMENT_COUNT = 5


def load_collections(
    repositories: Mapping[str, DocumentRepository]
) -> Dict[str, List[Any]]:
    """
    Read several documents concurrently.

    Args:
        repositories: Repositories keyed by the name to return results under

    Returns:
        Record lists keyed like repositories

    Examples:
        >>> data = load_collections({"students": student_repo,
        ...                          "payments": payment_repo})
        >>> len(data["students"])
    """
    if not repositories:
        return {}

    with ThreadPoolExecutor(max_workers=len(repositories)) as executor:
        futures = {
            key: executor.submit(repo.get_all)
            for key, repo in repositories.items()
        }
        return {key: future.result() for key, future in futures.items()}


@dataclass
class DashboardSummary:
    """
    Summary figures for the home screen.

    Attributes:
        today: Reference date the summary was computed for (YYYY-MM-DD)
        total_students: Number of students
        total_teachers: Number of teachers
        total_classes: Number of scheduled classes (all dates)
        monthly_revenue: Sum of payment amounts dated in today's month
        today_classes: Classes dated today
        recent_payments: Last stored payments, most recent first
        student_names: Student id to name, for rendering the lists
    """

    today: str
    total_students: int
    total_teachers: int
    total_classes: int
    monthly_revenue: int
    today_classes: List[ClassSession] = field(default_factory=list)
    recent_payments: List[Payment] = field(default_factory=list)
    student_names: Dict[int, str] = field(default_factory=dict)

    def student_name(self, student_id: int) -> str:
        return self.student_names.get(student_id, UNKNOWN_LABEL)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "today": self.today,
            "total_students": self.total_students,
            "total_teachers": self.total_teachers,
            "total_classes": self.total_classes,
            "monthly_revenue": self.monthly_revenue,
            "today_classes": [c.to_dict() for c in self.today_classes],
            "recent_payments": [p.to_dict() for p in self.recent_payments],
        }


def _in_month(date_str: str, year: int, month: int) -> bool:
    try:
        parsed = datetime.strptime(date_str, "%Y-%m-%d")
    except (TypeError, ValueError):
        return False
    return parsed.year == year and parsed.month == month


def build_dashboard(
    students: List[Student],
    teachers: List[Teacher],
    classes: List[ClassSession],
    payments: List[Payment],
    today: date
) -> DashboardSummary:
    """
    Compute the home-screen summary.

    Payments with unparseable dates are left out of the revenue figure.
    """
    monthly_revenue = sum(
        p.amount for p in payments
        if _in_month(p.date, today.year, today.month)
    )

    today_iso = today.isoformat()

    return DashboardSummary(
        today=today_iso,
        total_students=len(students),
        total_teachers=len(teachers),
        total_classes=len(classes),
        monthly_revenue=monthly_revenue,
        today_classes=[c for c in classes if c.date == today_iso],
        recent_payments=list(reversed(payments[-RECENT_PAYMENT_COUNT:])),
        student_names=name_index(students),
    )


class DashboardService:
    """
    Loads all documents and builds the DashboardSummary.

    Examples:
        >>> service = DashboardService(students, teachers, classes, payments)
        >>> summary = service.summary()
        >>> print(f"{summary.monthly_revenue:,}원")
    """

    def __init__(
        self,
        students: DocumentRepository[Student],
        teachers: DocumentRepository[Teacher],
        classes: DocumentRepository[ClassSession],
        payments: DocumentRepository[Payment]
    ):
        self.repositories = {
            "students": students,
            "teachers": teachers,
            "classes": classes,
            "payments": payments,
        }

    def summary(self, today: Optional[date] = None) -> DashboardSummary:
        """Build the summary for today (or the given reference date)."""
        today = today or date.today()
        data = load_collections(self.repositories)

        logger.debug(
            "Dashboard data loaded: "
            + ", ".join(f"{key}={len(items)}" for key, items in data.items())
        )

        return build_dashboard(
            data["students"],
            data["teachers"],
            data["classes"],
            data["payments"],
            today,
        )
