"""
Command-line front end for the academy back office.

Usage:
    academy-admin [--username USER] [--password PASS] COMMAND ...

Examples:
    # Show the home-screen summary
    academy-admin --username sogon --password "..." dashboard

    # List classes with student and teacher names resolved
    academy-admin list classes

    # Add a student
    academy-admin add students name=김민지 instrument=피아노 phone=010-1234-5678

    # Change a payment's status
    academy-admin update payments 12 status=완료

    # Delete a teacher (classes that reference them are kept)
    academy-admin delete teachers 3

    # Export payments to CSV under OUTPUT_DIR/exports
    academy-admin export payments --format csv

    # Credentials can come from the environment instead of flags
    export ACADEMY_USERNAME=sogon ACADEMY_PASSWORD="..."
"""

import argparse
import logging
import os
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .auth import Authenticator
from .errors import ConfigurationError, RemoteStoreError
from .models.entities import ClassSession, Payment, Student, Teacher, User
from .repositories import (
    ClassRepository,
    PaymentRepository,
    StudentRepository,
    TeacherRepository,
)
from .services.dashboard import DashboardService
from .services.lookups import UNKNOWN_LABEL, name_index
from .services.records import (
    RecordService,
    class_service,
    payment_service,
    student_service,
    teacher_service,
)
from .utils.config import Config, SecureString
from .utils.di_container import DIContainer, configure_default_services
from .utils.file_utils import EXPORT_FORMATS, export_records
from .utils.logger import setup_logger


ENTITIES: Dict[str, Any] = {
    "students": (StudentRepository, student_service, Student),
    "teachers": (TeacherRepository, teacher_service, Teacher),
    "classes": (ClassRepository, class_service, ClassSession),
    "payments": (PaymentRepository, payment_service, Payment),
}

INT_FIELDS = {"id", "studentId", "teacherId", "amount"}

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="academy-admin",
        description="Manage students, teachers, classes and payments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "--username",
        help="Back-office login (overrides ACADEMY_USERNAME env var)"
    )
    parser.add_argument(
        "--password",
        help="Back-office password (overrides ACADEMY_PASSWORD env var)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)"
    )
    parser.add_argument(
        "--log-file",
        help="Also write logs to this file (rotated at 10MB)"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("login", help="Check credentials and show the user")

    list_parser = commands.add_parser("list", help="List records")
    list_parser.add_argument("entity", choices=sorted(ENTITIES))

    add_parser = commands.add_parser("add", help="Add a record")
    add_parser.add_argument("entity", choices=sorted(ENTITIES))
    add_parser.add_argument("fields", nargs="*", metavar="FIELD=VALUE")

    update_parser = commands.add_parser("update", help="Change fields of a record")
    update_parser.add_argument("entity", choices=sorted(ENTITIES))
    update_parser.add_argument("id", type=int)
    update_parser.add_argument("fields", nargs="+", metavar="FIELD=VALUE")

    delete_parser = commands.add_parser("delete", help="Delete a record")
    delete_parser.add_argument("entity", choices=sorted(ENTITIES))
    delete_parser.add_argument("id", type=int)

    dashboard_parser = commands.add_parser("dashboard", help="Show the summary")
    dashboard_parser.add_argument(
        "--date",
        help="Reference date in YYYY-MM-DD format (default: today)"
    )

    export_parser = commands.add_parser("export", help="Export records to a file")
    export_parser.add_argument("entity", choices=sorted(ENTITIES))
    export_parser.add_argument("--format", choices=EXPORT_FORMATS, default="csv")
    export_parser.add_argument(
        "--output-dir",
        help="Directory to write to (default: OUTPUT_DIR/exports)"
    )

    return parser.parse_args(argv)


def parse_fields(pairs: List[str]) -> Dict[str, Any]:
    """
    Parse FIELD=VALUE arguments into a record dict.

    Numeric fields are converted to int when possible; anything else is
    left as text for validation to report.

    Raises:
        ValueError: If an argument has no "="

    Examples:
        >>> parse_fields(["studentId=3", "amount=150000", "memo=3월분"])
        {'studentId': 3, 'amount': 150000, 'memo': '3월분'}
    """
    fields: Dict[str, Any] = {}
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Expected FIELD=VALUE, got: {pair}")
        key, value = pair.split("=", 1)
        key = key.strip()
        if key in INT_FIELDS:
            try:
                fields[key] = int(value)
                continue
            except ValueError:
                pass
        fields[key] = value
    return fields


def parse_reference_date(date_str: Optional[str]) -> date:
    """
    Parse the --date option.

    Raises:
        ValueError: If format is invalid
    """
    if not date_str:
        return date.today()
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Invalid date '{date_str}' (expected YYYY-MM-DD)")


def authenticate(container: DIContainer, args: argparse.Namespace) -> Optional[User]:
    """
    Log in with the credentials from flags or environment.

    Returns:
        The user, or None if credentials are missing or wrong
    """
    username = args.username or os.getenv("ACADEMY_USERNAME")

    if args.password:
        password = SecureString(args.password)
    elif os.getenv("ACADEMY_PASSWORD"):
        password = SecureString(os.getenv("ACADEMY_PASSWORD"))
    else:
        password = None

    if not username or password is None:
        print("ERROR: Login required. Use --username/--password or set "
              "ACADEMY_USERNAME/ACADEMY_PASSWORD")
        return None

    user = container.resolve(Authenticator).login(username, password.get_value())
    if user is None:
        print("ERROR: Invalid username or password")
    return user


def _service(container: DIContainer, entity: str) -> RecordService:
    repository_type, factory, _ = ENTITIES[entity]
    return factory(container.resolve(repository_type))


def _format_row(entity: str, record: Any, names: Dict[str, Dict[int, str]]) -> str:
    if entity == "students":
        return f"{record.id:4d} | {record.name:10s} | {record.instrument:8s} | {record.phone}"
    if entity == "teachers":
        return (
            f"{record.id:4d} | {record.name:10s} | {record.instrument:8s} | "
            f"{record.phone:14s} | {record.bank_account}"
        )
    if entity == "classes":
        student = names["students"].get(record.student_id, UNKNOWN_LABEL)
        teacher = names["teachers"].get(record.teacher_id, UNKNOWN_LABEL)
        return (
            f"{record.id:4d} | {record.date} ({record.day_of_week}) {record.time:5s} | "
            f"{student:10s} | {teacher:10s} | {record.instrument:8s} | "
            f"{record.duration:5s} | {record.content}"
        )
    student = names["students"].get(record.student_id, UNKNOWN_LABEL)
    return (
        f"{record.id:4d} | {record.date} | {student:10s} | {record.amount:>10,}원 | "
        f"{record.method:6s} | {record.status:4s} | {record.memo}"
    )


def cmd_login(container: DIContainer, args: argparse.Namespace, user: User) -> int:
    print(f"✓ Logged in as {user.name} ({user.username}, role={user.role})")
    return EXIT_OK


def cmd_list(container: DIContainer, args: argparse.Namespace, user: User) -> int:
    records = _service(container, args.entity).list()

    names: Dict[str, Dict[int, str]] = {"students": {}, "teachers": {}}
    if args.entity in ("classes", "payments"):
        names["students"] = name_index(container.resolve(StudentRepository).get_all())
    if args.entity == "classes":
        names["teachers"] = name_index(container.resolve(TeacherRepository).get_all())

    print("=" * 60)
    print(f"{args.entity.upper()} ({len(records)})")
    print("=" * 60)
    for record in records:
        print(_format_row(args.entity, record, names))
    return EXIT_OK


def cmd_add(container: DIContainer, args: argparse.Namespace, user: User) -> int:
    fields = parse_fields(args.fields)
    result = _service(container, args.entity).add(fields)

    if result.is_failure:
        print(f"ERROR: {result.message}")
        return EXIT_FAILURE

    print(f"✓ {result.message}")
    return EXIT_OK


def cmd_update(container: DIContainer, args: argparse.Namespace, user: User) -> int:
    result = _service(container, args.entity).update_fields(args.id, parse_fields(args.fields))

    if result.is_failure:
        print(f"ERROR: {result.message}")
        return EXIT_FAILURE

    if result.value is None:
        print(f"No {args.entity} record with id {args.id}; nothing changed")
        return EXIT_OK

    print(f"✓ {result.message}")
    return EXIT_OK


def cmd_delete(container: DIContainer, args: argparse.Namespace, user: User) -> int:
    result = _service(container, args.entity).delete(args.id)
    print(f"✓ {result.message}")
    return EXIT_OK


def cmd_dashboard(container: DIContainer, args: argparse.Namespace, user: User) -> int:
    today = parse_reference_date(args.date)
    summary = container.resolve(DashboardService).summary(today)

    print("\n" + "=" * 60)
    print(f"DASHBOARD ({summary.today})")
    print("=" * 60)
    print(f"Students:                 {summary.total_students}")
    print(f"Teachers:                 {summary.total_teachers}")
    print(f"Classes:                  {summary.total_classes}")
    print(f"Revenue this month:       {summary.monthly_revenue:,}원")
    print("=" * 60)

    print("\nToday's classes:")
    print("-" * 60)
    if not summary.today_classes:
        print("  (none)")
    for cls in summary.today_classes:
        print(f"  {cls.time:5s} | {summary.student_name(cls.student_id):10s} | "
              f"{cls.instrument:8s} | {cls.duration}")

    print("\nRecent payments:")
    print("-" * 60)
    if not summary.recent_payments:
        print("  (none)")
    for payment in summary.recent_payments:
        print(f"  {payment.date} | {summary.student_name(payment.student_id):10s} | "
              f"{payment.amount:>10,}원 | {payment.status}")
    return EXIT_OK


def cmd_export(container: DIContainer, args: argparse.Namespace, user: User) -> int:
    records = _service(container, args.entity).list()

    output_dir = Path(args.output_dir) if args.output_dir \
        else container.resolve(Config).output_dir / "exports"
    _, _, record_type = ENTITIES[args.entity]

    filepath = export_records(records, record_type, output_dir, args.format)
    if filepath is None:
        print(f"ERROR: Could not write export to {output_dir}")
        return EXIT_FAILURE

    print(f"✓ Exported {len(records)} {args.entity} to: {filepath}")
    return EXIT_OK


COMMANDS: Dict[str, Callable[[DIContainer, argparse.Namespace, User], int]] = {
    "login": cmd_login,
    "list": cmd_list,
    "add": cmd_add,
    "update": cmd_update,
    "delete": cmd_delete,
    "dashboard": cmd_dashboard,
    "export": cmd_export,
}


def main(argv: Optional[List[str]] = None, container: Optional[DIContainer] = None) -> int:
    """
    Main execution function.

    Args:
        argv: Arguments (sys.argv[1:] if None)
        container: Pre-configured services (default wiring if None)

    Returns:
        Process exit code
    """
    args = parse_arguments(argv)

    logger = setup_logger(
        "academy",
        level=getattr(logging, args.log_level),
        log_file=args.log_file
    )

    try:
        if container is None:
            container = DIContainer()
            configure_default_services(container)

            # Reads degrade to empty lists, so check settings before any
            # data command rather than showing an empty academy
            if args.command != "login":
                logger.info("Validating configuration")
                container.resolve(Config).validate()

        user = authenticate(container, args)
        if user is None:
            return EXIT_FAILURE

        return COMMANDS[args.command](container, args, user)

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print(f"\nERROR: {e}")
        return EXIT_CONFIG

    except RemoteStoreError as e:
        logger.error(f"Remote store error: {e}")
        print(f"\nERROR: {e}")
        return EXIT_FAILURE

    except ValueError as e:
        print(f"\nERROR: {e}")
        return EXIT_FAILURE

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        logger.info("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
