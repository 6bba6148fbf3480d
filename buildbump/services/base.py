"""Abstract capabilities buildbump needs from the build server and version control.

The pipeline only ever talks to these interfaces, so it can run against the real
servers or against in-memory fakes.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel

from buildbump.config.settings import AppSettings
from buildbump.config.environment_settings import EnvironmentSettings


class ServiceError(RuntimeError):
    """Raised when a build-server or version-control call fails."""


class BuildRecord(BaseModel):
    """The build fields buildbump reads and rewrites."""

    uri: str
    number: str = ""
    label: Optional[str] = None
    drop_location: Optional[str] = None


class BuildService(ABC):
    """Read and save the metadata of a build."""

    def __init__(self, environment: EnvironmentSettings, settings: AppSettings):
        self._environment = environment
        self._settings = settings

    @abstractmethod
    def get_build(self, build_uri: str) -> BuildRecord:
        """Fetch the build identified by ``build_uri``.

        Raises:
            ServiceError: If the build cannot be read.
        """
        pass

    @abstractmethod
    def save_build(self, record: BuildRecord) -> None:
        """Persist number, label and drop location of ``record`` in one call.

        Raises:
            ServiceError: If the build cannot be saved.
        """
        pass


class VersionControlClient(ABC):
    """Workspace, check-out and check-in operations on the version-control server."""

    def __init__(self, environment: EnvironmentSettings, settings: AppSettings):
        self._environment = environment
        self._settings = settings

    @abstractmethod
    def create_workspace(self, name: str, comment: str = "") -> str:
        """Create a workspace and return its name."""
        pass

    @abstractmethod
    def delete_workspace(self, workspace: str) -> None:
        """Delete the workspace and any mappings left in it."""
        pass

    @abstractmethod
    def map_folder(self, workspace: str, server_path: str, local_path: str) -> None:
        """Map ``server_path`` to ``local_path`` in ``workspace``."""
        pass

    @abstractmethod
    def unmap_folder(self, workspace: str, local_path: str) -> None:
        """Remove the mapping of ``local_path`` from ``workspace``."""
        pass

    @abstractmethod
    def get_and_checkout(self, workspace: str, local_path: str) -> None:
        """Get the latest version of ``local_path`` and pend an edit, non-recursively."""
        pass

    @abstractmethod
    def check_in_pending(self, workspace: str, comment: str) -> Optional[int]:
        """Check in every pending change of ``workspace``.

        Returns:
            Optional[int]: The changeset number, when the server reports one.
        """
        pass
