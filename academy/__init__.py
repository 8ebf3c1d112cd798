"""
Music academy back office.

Students, teachers, class schedules and payments kept as JSON documents in
a GitHub repository, plus the login check for back-office users.

Usage:
    >>> from academy.utils.di_container import DIContainer, configure_default_services
    >>> from academy.repositories import StudentRepository
    >>>
    >>> container = DIContainer()
    >>> configure_default_services(container)
    >>> students = container.resolve(StudentRepository).get_all()
"""

__version__ = "0.1.0"
