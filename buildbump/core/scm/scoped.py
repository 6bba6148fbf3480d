"""Context managers for the temporary resources used during check-in.

Each one releases its resource on every exit path. When the block is already
failing, a failure to release is logged so the original error is the one raised.
"""

import os
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator

from buildbump.core.files import make_writable
from buildbump.core.logging.logging_manager import logging_manager
from buildbump.services.base import ServiceError, VersionControlClient

logger = logging_manager.get_session("ScopedResources")


def _release_quietly(release: Callable[[], None], what: str) -> None:
    try:
        release()
    except (ServiceError, OSError) as e:
        logger.error(f"Failed to release {what}: {e}")


def _remove_file(path: Path) -> None:
    if path.exists():
        make_writable(path)
        os.remove(path)


@contextmanager
def temporary_workspace(client: VersionControlClient, prefix: str, comment: str = "") -> Iterator[str]:
    """Create a uniquely named workspace and delete it on exit."""
    workspace = client.create_workspace(f"{prefix}_{uuid.uuid4().hex[:12]}", comment)
    try:
        yield workspace
    except BaseException:
        _release_quietly(lambda: client.delete_workspace(workspace), f"workspace {workspace}")
        raise
    client.delete_workspace(workspace)


@contextmanager
def working_folder_mapping(client: VersionControlClient, workspace: str,
                           server_path: str, local_path: str) -> Iterator[str]:
    """Map ``server_path`` to ``local_path`` and remove the mapping on exit."""
    client.map_folder(workspace, server_path, local_path)
    try:
        yield local_path
    except BaseException:
        _release_quietly(lambda: client.unmap_folder(workspace, local_path),
                         f"mapping {server_path} -> {local_path}")
        raise
    client.unmap_folder(workspace, local_path)


@contextmanager
def temporary_file(path: Path) -> Iterator[Path]:
    """Delete ``path`` on exit, clearing its read-only attribute first."""
    try:
        yield path
    except BaseException:
        _release_quietly(lambda: _remove_file(path), f"temporary file {path}")
        raise
    _remove_file(path)
