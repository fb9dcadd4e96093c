"""
Service Container - Dependency Injection Container for RPS Arena
Builds the session directory and its collaborators in dependency order.
"""

from typing import Dict, Any, List, Optional, Callable
import inspect
from enum import Enum


class ServiceLifecycle(Enum):
    """Service lifecycle management options"""
    SINGLETON = "singleton"  # One instance per container
    TRANSIENT = "transient"  # New instance every time


class ServiceDefinition:
    """Definition of how a service should be created"""

    def __init__(
        self,
        name: str,
        factory: Callable,
        dependencies: List[str] = None,
        lifecycle: ServiceLifecycle = ServiceLifecycle.SINGLETON,
        config: Dict[str, Any] = None
    ):
        self.name = name
        self.factory = factory
        self.dependencies = dependencies or []
        self.lifecycle = lifecycle
        self.config = config or {}


class CircularDependencyError(Exception):
    """Raised when circular dependency is detected"""
    pass


class ServiceNotFoundError(Exception):
    """Raised when requested service is not registered"""
    pass


class ServiceContainer:
    """
    Dependency Injection Container for managing services and their dependencies.

    Dependencies are declared by name at registration time and passed to the
    factory positionally, in declaration order. External objects such as the
    Flask-SocketIO instance are injected with set_external_dependency().
    """

    def __init__(self):
        self._services: Dict[str, ServiceDefinition] = {}
        self._instances: Dict[str, Any] = {}
        self._creating: List[str] = []  # creation stack, for cycle reporting
        self._config: Dict[str, Any] = {}

    def register(
        self,
        name: str,
        factory: Callable,
        dependencies: List[str] = None,
        lifecycle: ServiceLifecycle = ServiceLifecycle.SINGLETON,
        config: Dict[str, Any] = None
    ) -> 'ServiceContainer':
        """
        Register a service with the container.

        Args:
            name: Service name for retrieval
            factory: Class or function to create the service
            dependencies: Names of services passed to the factory, in order
            lifecycle: How the service instance should be managed
            config: Keyword arguments for function factories

        Returns:
            Self for method chaining
        """
        if name in self._services:
            raise ValueError(f"Service '{name}' is already registered")

        if not callable(factory):
            raise ValueError(f"Factory for '{name}' must be callable")

        self._services[name] = ServiceDefinition(
            name=name,
            factory=factory,
            dependencies=dependencies,
            lifecycle=lifecycle,
            config=config
        )
        return self

    def configure_services(self) -> 'ServiceContainer':
        """
        Register all RPS Arena services with their dependencies.
        This method contains the service configuration for the application.
        """
        from config_factory import ConfigurationFactory
        from rps_arena.config.game_settings import GameSettings
        from rps_arena.core.outcome_resolver import RockPaperScissorsResolver
        from rps_arena.session_directory import SessionDirectory
        from rps_arena.services.bot_directory import BotDirectory
        from rps_arena.services.concurrency_control_service import ConcurrencyControlService
        from rps_arena.services.connection_registry import ConnectionRegistry
        from rps_arena.services.game_flow_service import GameFlowService
        from rps_arena.services.matchmaker import Matchmaker
        from rps_arena.services.notifier import SocketIONotifier
        from rps_arena.services.validation_service import ValidationService

        # Configuration (highest priority - no dependencies)
        self.register('ConfigurationFactory', ConfigurationFactory)
        self.register('GameSettings', GameSettings)

        # Stateless helpers and owned registries - no dependencies
        self.register('ValidationService', ValidationService)
        self.register('ConcurrencyControlService', ConcurrencyControlService)
        self.register('ConnectionRegistry', ConnectionRegistry)
        self.register('OutcomeResolver', RockPaperScissorsResolver)
        self.register('Matchmaker', Matchmaker)

        # Notifier - socketio is injected as external dependency
        self.register('Notifier', SocketIONotifier, dependencies=['socketio', 'ConnectionRegistry'])

        # Session directory - owns sessions, the player index and the queue
        self.register('SessionDirectory', SessionDirectory, dependencies=[
            'OutcomeResolver', 'Notifier', 'Matchmaker', 'ConcurrencyControlService', 'GameSettings'
        ])

        self.register('BotDirectory', BotDirectory, dependencies=['GameSettings'])
        self.register('GameFlowService', GameFlowService, dependencies=['SessionDirectory', 'ValidationService'])

        return self

    def set_external_dependency(self, name: str, instance: Any) -> 'ServiceContainer':
        """
        Set an external dependency that's created outside the container.
        Useful for Flask-SocketIO and similar framework objects.
        """
        self._instances[name] = instance
        return self

    def set_config(self, config: Dict[str, Any]) -> 'ServiceContainer':
        """Set global configuration for the container"""
        self._config.update(config)
        return self

    def get_config(self, key: str, default: Any = None) -> Any:
        return self._config.get(key, default)

    def get(self, name: str) -> Any:
        """
        Get a service instance, creating it if necessary.

        Raises:
            ServiceNotFoundError: If service is not registered
            CircularDependencyError: If circular dependency detected
        """
        if name in self._instances:
            return self._instances[name]

        if name not in self._services:
            raise ServiceNotFoundError(f"Service '{name}' is not registered")

        return self._create_service(name)

    def _create_service(self, name: str) -> Any:
        """Create a service instance with its dependencies resolved."""
        if name in self._creating:
            cycle = ' -> '.join(self._creating + [name])
            raise CircularDependencyError(f"Circular dependency detected: {cycle}")

        self._creating.append(name)
        try:
            service_def = self._services[name]
            dependencies = [self.get(dep_name) for dep_name in service_def.dependencies]

            if inspect.isclass(service_def.factory):
                instance = service_def.factory(*dependencies)
            else:
                instance = service_def.factory(*dependencies, **service_def.config)

            if service_def.lifecycle == ServiceLifecycle.SINGLETON:
                self._instances[name] = instance

            return instance
        finally:
            self._creating.remove(name)

    def has_service(self, name: str) -> bool:
        """Check if a service is registered"""
        return name in self._services

    def get_service_names(self) -> List[str]:
        """Get list of all registered service names"""
        return list(self._services.keys())

    def validate_dependencies(self) -> Dict[str, List[str]]:
        """
        Validate all service dependencies can be resolved.

        Returns:
            Dictionary mapping service names to lists of missing dependencies
        """
        issues = {}
        for name, service_def in self._services.items():
            missing = [dep for dep in service_def.dependencies
                       if not self.has_service(dep) and dep not in self._instances]
            if missing:
                issues[name] = missing
        return issues

    def clear(self) -> 'ServiceContainer':
        """Clear all services and instances (useful for testing)"""
        self._services.clear()
        self._instances.clear()
        self._creating.clear()
        self._config.clear()
        return self

    def __repr__(self) -> str:
        return f"ServiceContainer(services={len(self._services)}, instances={len(self._instances)})"


# Global container instance for the application
_app_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """Get the global application service container"""
    global _app_container
    if _app_container is None:
        _app_container = ServiceContainer()
    return _app_container


def reset_container() -> None:
    """Drop the global container (mainly for testing)."""
    global _app_container
    _app_container = None


def configure_container(socketio=None, config=None) -> ServiceContainer:
    """
    Configure the global service container with RPS Arena services.

    Args:
        socketio: Flask-SocketIO instance
        config: Application configuration

    Returns:
        Configured service container
    """
    container = get_container()
    container.clear()  # Clear any existing configuration

    if socketio is not None:
        container.set_external_dependency('socketio', socketio)

    if config is not None:
        container.set_config(config)

    container.configure_services()

    return container
