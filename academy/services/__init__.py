"""
Application services built on the repositories.
"""

from .dashboard import DashboardService, DashboardSummary, build_dashboard, load_collections
from .lookups import UNKNOWN_LABEL, display_name, name_index, student_name, teacher_name
from .records import (
    RecordService,
    class_service,
    next_id,
    payment_service,
    student_service,
    teacher_service,
    with_added,
    with_replaced,
    without,
)

__all__ = [
    "DashboardService",
    "DashboardSummary",
    "build_dashboard",
    "load_collections",
    "UNKNOWN_LABEL",
    "display_name",
    "name_index",
    "student_name",
    "teacher_name",
    "RecordService",
    "class_service",
    "next_id",
    "payment_service",
    "student_service",
    "teacher_service",
    "with_added",
    "with_replaced",
    "without",
]
