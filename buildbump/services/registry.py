"""Registries for the build-service and version-control backends.

Backends register themselves with a decorator keyed by their settings enum, and the
entry point instantiates whichever one the settings select.
"""

from typing import Dict, List, Type

from buildbump.config.environment_settings import EnvironmentSettings
from buildbump.config.service_settings import EBuildBackend, EVersionControlBackend
from buildbump.config.settings import AppSettings
from buildbump.core.logging.logging_manager import logging_manager
from buildbump.services.base import BuildService, VersionControlClient

logger = logging_manager.get_session("ServiceRegistry")


class BuildServiceRegistry:
    """Registry of ``BuildService`` implementations."""

    _backends: Dict[EBuildBackend, Type[BuildService]] = {}

    @classmethod
    def register(cls, backend: EBuildBackend):
        """Decorator to register a build service class.

        Example:
            @BuildServiceRegistry.register(EBuildBackend.REST)
            class RestBuildService(BuildService):
                pass
        """
        def decorator(service_class: Type[BuildService]):
            if not issubclass(service_class, BuildService):
                raise ValueError(f"Class {service_class.__name__} must inherit from BuildService")
            cls._backends[backend] = service_class
            logger.debug(f"Registered build backend '{backend}' -> {service_class.__name__}")
            return service_class
        return decorator

    @classmethod
    def create(cls, backend: EBuildBackend, environment: EnvironmentSettings, settings: AppSettings) -> BuildService:
        """Instantiate the build service registered for ``backend``.

        Raises:
            ValueError: If no service is registered for ``backend``.
        """
        if backend not in cls._backends:
            raise ValueError(f"Unknown build backend: '{backend}'. Available backends: {list(cls._backends.keys())}")
        return cls._backends[backend](environment, settings)

    @classmethod
    def list_backends(cls) -> List[EBuildBackend]:
        return list(cls._backends.keys())


class VersionControlRegistry:
    """Registry of ``VersionControlClient`` implementations."""

    _backends: Dict[EVersionControlBackend, Type[VersionControlClient]] = {}

    @classmethod
    def register(cls, backend: EVersionControlBackend):
        """Decorator to register a version-control client class."""
        def decorator(client_class: Type[VersionControlClient]):
            if not issubclass(client_class, VersionControlClient):
                raise ValueError(f"Class {client_class.__name__} must inherit from VersionControlClient")
            cls._backends[backend] = client_class
            logger.debug(f"Registered version control backend '{backend}' -> {client_class.__name__}")
            return client_class
        return decorator

    @classmethod
    def create(cls, backend: EVersionControlBackend, environment: EnvironmentSettings,
               settings: AppSettings) -> VersionControlClient:
        """Instantiate the client registered for ``backend``.

        Raises:
            ValueError: If no client is registered for ``backend``.
        """
        if backend not in cls._backends:
            raise ValueError(f"Unknown version control backend: '{backend}'. Available backends: {list(cls._backends.keys())}")
        return cls._backends[backend](environment, settings)

    @classmethod
    def list_backends(cls) -> List[EVersionControlBackend]:
        return list(cls._backends.keys())
