"""Build-server and version-control backends."""

from .base import BuildRecord, BuildService, VersionControlClient, ServiceError
from .registry import BuildServiceRegistry, VersionControlRegistry

# Importing the backends registers them.
from . import rest_build_service  # noqa: F401
from . import tf_client  # noqa: F401

__all__ = [
    "BuildRecord",
    "BuildService",
    "VersionControlClient",
    "ServiceError",
    "BuildServiceRegistry",
    "VersionControlRegistry",
]
