"""Version control through the ``tf`` command-line client.

Every operation is one ``tf`` invocation. Commands that act on local items run from
the item's folder so that ``tf`` resolves the temporary workspace from its mapping.
"""

import re
import subprocess
from pathlib import Path
from typing import List, Optional

from buildbump.config.service_settings import EVersionControlBackend
from buildbump.core.logging.logging_manager import logging_manager
from buildbump.services.base import ServiceError, VersionControlClient
from buildbump.services.registry import VersionControlRegistry

logger = logging_manager.get_session("TfClient")

CHANGESET_PATTERN = re.compile(r"[Cc]hangeset\s+#?(\d+)")


@VersionControlRegistry.register(EVersionControlBackend.TF)
class TfCommandLineClient(VersionControlClient):
    """Drives ``tf workspace``, ``workfold``, ``get``, ``checkout`` and ``checkin``."""

    @property
    def _collection_arg(self) -> str:
        return f"/collection:{self._environment.collection_uri}"

    def _run(self, args: List[str], cwd: Optional[str] = None) -> str:
        command = [self._settings.services.tf_executable] + args
        logger.debug(f"Running: {' '.join(command)}")
        try:
            result = subprocess.run(command, capture_output=True, text=True, check=True, cwd=cwd)
        except FileNotFoundError as e:
            raise ServiceError(f"tf client not found: {command[0]}") from e
        except subprocess.CalledProcessError as e:
            output = (e.stderr or e.stdout or "").strip()
            raise ServiceError(f"'tf {args[0]}' failed with exit code {e.returncode}: {output}") from e
        return result.stdout

    def create_workspace(self, name: str, comment: str = "") -> str:
        args = ["workspace", "/new", name, self._collection_arg, "/noprompt"]
        if comment:
            args.append(f"/comment:{comment}")
        self._run(args)
        logger.info(f"Created workspace {name}")
        return name

    def delete_workspace(self, workspace: str) -> None:
        self._run(["workspace", "/delete", workspace, self._collection_arg, "/noprompt"])
        logger.info(f"Deleted workspace {workspace}")

    def map_folder(self, workspace: str, server_path: str, local_path: str) -> None:
        self._run(["workfold", "/map", server_path, local_path,
                   f"/workspace:{workspace}", self._collection_arg])

    def unmap_folder(self, workspace: str, local_path: str) -> None:
        self._run(["workfold", "/unmap", local_path,
                   f"/workspace:{workspace}", self._collection_arg])

    def get_and_checkout(self, workspace: str, local_path: str) -> None:
        folder = str(Path(local_path).parent)
        self._run(["get", local_path, "/overwrite", "/noprompt"], cwd=folder)
        self._run(["checkout", local_path], cwd=folder)

    def check_in_pending(self, workspace: str, comment: str) -> Optional[int]:
        output = self._run(["checkin", f"/comment:{comment}", "/noprompt"],
                           cwd=str(self._environment.temp_dir))
        match = CHANGESET_PATTERN.search(output)
        if match is None:
            logger.warning(f"Checked in workspace {workspace}, but no changeset number was reported")
            return None
        return int(match.group(1))

