"""
Service wiring for the back office.

The CLI and the tests resolve collaborators from a DIContainer instead of
constructing them by hand.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Type


logger = logging.getLogger(__name__)


@dataclass
class _Registration:
    factory: Callable[[], Any]
    singleton: bool
    instance: Any = None
    created: bool = False


class DIContainer:
    """
    Maps a type to the factory that builds it.

    Singleton registrations are built on first resolve and cached;
    transient ones are rebuilt on every resolve. Registering a type again
    replaces the factory and forgets any cached instance.

    Examples:
        >>> container = DIContainer()
        >>> container.register(Config, Config, singleton=True)
        >>> container.register(
        ...     DocumentStore,
        ...     lambda: GitHubFileStore.from_config(container.resolve(Config)),
        ...     singleton=True
        ... )
        >>> store = container.resolve(DocumentStore)
    """

    def __init__(self):
        self._registrations: Dict[Type, _Registration] = {}

    def register(
        self,
        interface: Type,
        factory: Callable[[], Any],
        singleton: bool = False
    ):
        """
        Register (or replace) the factory for interface.

        Args:
            interface: Type callers resolve by
            factory: Zero-argument callable building the service
            singleton: Build once and share the instance
        """
        self._registrations[interface] = _Registration(factory, singleton)
        logger.debug(f"Registered {interface.__name__} (singleton={singleton})")

    def register_instance(self, interface: Type, instance: Any):
        """Register an already built object; resolve always returns it."""
        self._registrations[interface] = _Registration(
            lambda: instance, singleton=True, instance=instance, created=True
        )
        logger.debug(f"Registered instance of {interface.__name__}")

    def resolve(self, interface: Type) -> Any:
        """
        Build or fetch the service registered for interface.

        Raises:
            ValueError: If nothing is registered for interface
        """
        registration = self._registrations.get(interface)
        if registration is None:
            known = ", ".join(sorted(t.__name__ for t in self._registrations))
            raise ValueError(
                f"Service not registered: {interface.__name__}. Registered: {known}"
            )

        if not registration.singleton:
            return registration.factory()

        if not registration.created:
            logger.debug(f"Building shared {interface.__name__}")
            registration.instance = registration.factory()
            registration.created = True
        return registration.instance

    def is_registered(self, interface: Type) -> bool:
        return interface in self._registrations


def configure_default_services(
    container: DIContainer,
    app_config: Optional[Any] = None,
    store: Optional[Any] = None
):
    """
    Register the back office's services.

    Args:
        container: DI container to configure
        app_config: Config to use (module-level config if None)
        store: DocumentStore to use (GitHub store built from config if None)

    Examples:
        >>> container = DIContainer()
        >>> configure_default_services(container)
        >>> students = container.resolve(StudentRepository).get_all()
    """
    from .config import Config, config as default_config
    from ..auth import Authenticator, CredentialStore, InMemoryCredentialStore
    from ..repositories import (
        ClassRepository,
        PaymentRepository,
        StudentRepository,
        TeacherRepository,
    )
    from ..services.dashboard import DashboardService
    from ..storage import DocumentStore, GitHubFileStore

    cfg = app_config or default_config
    container.register_instance(Config, cfg)

    if store is not None:
        container.register_instance(DocumentStore, store)
    else:
        container.register(
            DocumentStore,
            lambda: GitHubFileStore.from_config(container.resolve(Config)),
            singleton=True
        )

    for repository_type in (
        StudentRepository,
        TeacherRepository,
        ClassRepository,
        PaymentRepository,
    ):
        container.register(
            repository_type,
            lambda rt=repository_type: rt(
                container.resolve(DocumentStore),
                data_dir=container.resolve(Config).data_dir
            ),
            singleton=True
        )

    container.register(
        CredentialStore,
        InMemoryCredentialStore.with_defaults,
        singleton=True
    )
    container.register(
        Authenticator,
        lambda: Authenticator(container.resolve(CredentialStore)),
        singleton=True
    )
    container.register(
        DashboardService,
        lambda: DashboardService(
            container.resolve(StudentRepository),
            container.resolve(TeacherRepository),
            container.resolve(ClassRepository),
            container.resolve(PaymentRepository),
        )
    )

    logger.info("Default services configured")
