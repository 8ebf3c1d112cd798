"""
Unit tests for the dashboard summary and name lookups.
"""

import threading
from datetime import date

import pytest

from academy.models.entities import ClassSession, Payment, Student, Teacher
from academy.services.dashboard import (
    DashboardService,
    build_dashboard,
    load_collections,
)
from academy.services.lookups import (
    UNKNOWN_LABEL,
    display_name,
    name_index,
    student_name,
    teacher_name,
)


def _payment(payment_id, day, amount, student_id=1):
    return Payment(
        id=payment_id, date=day, student_id=student_id, amount=amount,
        method="카드", status="완료", memo="",
    )


def _session(session_id, day, student_id=1):
    return ClassSession(
        id=session_id, date=day, day_of_week="", time="15:00",
        student_id=student_id, teacher_id=1, instrument="피아노",
        duration="60분", content="",
    )


class TestLookups:
    """Test cases for reference resolution."""

    @pytest.fixture
    def students(self):
        return [
            Student(id=1, name="김민지", instrument="피아노", phone=""),
            Student(id=3, name="이서준", instrument="바이올린", phone=""),
        ]

    def test_display_name_found(self, students):
        assert display_name(students, 3) == "이서준"

    def test_display_name_missing_falls_back(self, students):
        """Test a dangling reference resolves to the unknown label."""
        assert display_name(students, 2) == UNKNOWN_LABEL
        assert display_name([], 1) == UNKNOWN_LABEL
        assert display_name(students, None) == UNKNOWN_LABEL

    def test_typed_helpers(self, students):
        teachers = [Teacher(id=1, name="박선생", instrument="", phone="", bank_account="")]

        assert student_name(students, 1) == "김민지"
        assert teacher_name(teachers, 1) == "박선생"
        assert teacher_name(teachers, 9) == "알 수 없음"

    def test_name_index(self, students):
        assert name_index(students) == {1: "김민지", 3: "이서준"}


class TestBuildDashboard:
    """Test cases for the summary computation."""

    def test_counts(self):
        summary = build_dashboard(
            students=[Student(id=1, name="a", instrument="", phone="")],
            teachers=[],
            classes=[_session(1, "2024-03-01"), _session(2, "2024-03-02")],
            payments=[],
            today=date(2024, 3, 15),
        )

        assert summary.total_students == 1
        assert summary.total_teachers == 0
        assert summary.total_classes == 2
        assert summary.monthly_revenue == 0

    def test_monthly_revenue_only_counts_current_month(self):
        """Test payments from other months and other years are excluded."""
        payments = [
            _payment(1, "2024-03-01", 100000),
            _payment(2, "2024-03-31", 50000),
            _payment(3, "2024-02-29", 70000),
            _payment(4, "2023-03-10", 90000),
            _payment(5, "not a date", 10000),
        ]

        summary = build_dashboard([], [], [], payments, date(2024, 3, 15))

        assert summary.monthly_revenue == 150000

    def test_today_classes(self):
        classes = [
            _session(1, "2024-03-14"),
            _session(2, "2024-03-15"),
            _session(3, "2024-03-15"),
        ]

        summary = build_dashboard([], [], classes, [], date(2024, 3, 15))

        assert [c.id for c in summary.today_classes] == [2, 3]

    def test_recent_payments_last_five_newest_first(self):
        """Test the last five stored payments are shown in reverse order."""
        payments = [_payment(i, "2024-03-01", 1000) for i in range(1, 8)]

        summary = build_dashboard([], [], [], payments, date(2024, 3, 15))

        assert [p.id for p in summary.recent_payments] == [7, 6, 5, 4, 3]

    def test_recent_payments_fewer_than_five(self):
        payments = [_payment(1, "2024-03-01", 1000), _payment(2, "2024-03-02", 1000)]

        summary = build_dashboard([], [], [], payments, date(2024, 3, 15))

        assert [p.id for p in summary.recent_payments] == [2, 1]

    def test_student_name_fallback(self):
        """Test summary resolves payment students and tolerates dangling ids."""
        students = [Student(id=1, name="김민지", instrument="", phone="")]

        summary = build_dashboard(
            students, [], [], [_payment(1, "2024-03-01", 1000, student_id=9)],
            date(2024, 3, 15),
        )

        assert summary.student_name(1) == "김민지"
        assert summary.student_name(9) == UNKNOWN_LABEL

    def test_to_dict(self):
        summary = build_dashboard([], [], [_session(1, "2024-03-15")], [], date(2024, 3, 15))

        data = summary.to_dict()

        assert data["today"] == "2024-03-15"
        assert data["today_classes"][0]["studentId"] == 1
        assert data["recent_payments"] == []


class TestDashboardService:
    """Test cases for loading the summary from the store."""

    def test_summary_from_store(self, seeded_host, student_repo, teacher_repo,
                                class_repo, payment_repo):
        service = DashboardService(student_repo, teacher_repo, class_repo, payment_repo)

        summary = service.summary(date(2024, 3, 15))

        assert summary.total_students == 2
        assert summary.total_teachers == 1
        assert summary.total_classes == 2
        assert summary.monthly_revenue == 380000
        assert [c.id for c in summary.today_classes] == [1]
        assert [p.id for p in summary.recent_payments] == [3, 2, 1]

    def test_summary_with_failed_document(self, seeded_host, student_repo, teacher_repo,
                                          class_repo, payment_repo):
        """Test an unreadable document counts as empty."""
        del seeded_host.files["data/payments.json"]
        service = DashboardService(student_repo, teacher_repo, class_repo, payment_repo)

        summary = service.summary(date(2024, 3, 15))

        assert summary.total_students == 2
        assert summary.monthly_revenue == 0
        assert summary.recent_payments == []

    def test_documents_fetched_concurrently(self, seeded_host, student_repo, teacher_repo,
                                            class_repo, payment_repo):
        """Test all four reads are in flight at the same time."""
        seeded_host.get_barrier = threading.Barrier(4, timeout=5)

        data = load_collections({
            "students": student_repo,
            "teachers": teacher_repo,
            "classes": class_repo,
            "payments": payment_repo,
        })

        assert {key: len(items) for key, items in data.items()} == {
            "students": 2, "teachers": 1, "classes": 2, "payments": 3,
        }

    def test_load_collections_empty(self):
        assert load_collections({}) == {}
