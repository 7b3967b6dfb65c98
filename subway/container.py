"""Wiring of repositories, solver and services.

Every binding is created lazily on first resolve and then reused, so the
services of one container share the same network.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from .config import AppConfig, get_config

if TYPE_CHECKING:
    from .adapters.repository import InMemoryNetworkRepository


@dataclass
class Container:
    """Lazy registry of shared instances keyed by type.

    Usage:
        container = Container.create_default()
        paths = container.resolve(PathService)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _instances: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(self, port_type: type[Any], factory: Callable[[], Any]) -> None:
        """Bind a type (usually a Protocol) to the factory building it."""
        with self._lock:
            self._factories[port_type] = factory
            self._instances.pop(port_type, None)

    def resolve(self, port_type: type[Any]) -> Any:
        """Return the shared instance of a type, building it on first use.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._instances:
                if port_type not in self._factories:
                    raise KeyError(f"Type not registered: {port_type}")
                self._instances[port_type] = self._factories[port_type]()
            return self._instances[port_type]

    @classmethod
    def create_default(
        cls,
        config: Optional[AppConfig] = None,
        network: Optional[InMemoryNetworkRepository] = None,
    ) -> Container:
        """Create a container with default production bindings.

        Args:
            config: Optional configuration override.
            network: Optional network to serve; by default the network is
                loaded from the CSV files named in the graph config.

        Returns:
            A configured Container instance.
        """
        from .adapters.graph import DijkstraRouteSolver
        from .adapters.repository import CSVNetworkRepository, InMemoryNetworkRepository
        from .ports.graph import RouteSolverPort
        from .ports.repository import (
            LineRepositoryPort,
            SectionRepositoryPort,
            StationRepositoryPort,
        )
        from .services import PathService, SectionService

        config = config or get_config()
        container = cls(config=config)

        # Network storage
        if network is not None:
            container.register(InMemoryNetworkRepository, lambda: network)
        else:
            container.register(
                InMemoryNetworkRepository,
                lambda: CSVNetworkRepository(config.graph).load(),
            )
        container.register(
            StationRepositoryPort,
            lambda: container.resolve(InMemoryNetworkRepository).stations,
        )
        container.register(
            LineRepositoryPort,
            lambda: container.resolve(InMemoryNetworkRepository).lines,
        )
        container.register(
            SectionRepositoryPort,
            lambda: container.resolve(InMemoryNetworkRepository).sections,
        )

        # Routing
        container.register(
            RouteSolverPort,
            lambda: DijkstraRouteSolver(config.path),
        )

        # Services
        def create_path_service() -> PathService:
            return PathService(
                station_repository=container.resolve(StationRepositoryPort),
                section_repository=container.resolve(SectionRepositoryPort),
                line_repository=container.resolve(LineRepositoryPort),
                route_solver=container.resolve(RouteSolverPort),
                fare_config=config.fare,
            )

        def create_section_service() -> SectionService:
            return SectionService(
                station_repository=container.resolve(StationRepositoryPort),
                line_repository=container.resolve(LineRepositoryPort),
                section_repository=container.resolve(SectionRepositoryPort),
            )

        container.register(PathService, create_path_service)
        container.register(SectionService, create_section_service)

        return container


# Global default container (lazy initialized)
_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get the default application container.

    Returns:
        The default Container instance (creates one if needed).
    """
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Reset the default container.

    Call this in tests to ensure a fresh container.
    """
    global _default_container
    with _container_lock:
        _default_container = None
