"""Checking stamped files back into version control.

Each file goes through its own cycle inside one temporary workspace: map its server
path onto a temporary local file, get and check it out, write the stamped content,
check in, unmap, delete the temporary file. Every cycle therefore produces its own
changeset.
"""

import os
from pathlib import Path
from typing import List, Optional, Sequence, Union

from buildbump.config.check_in_settings import CheckInSettings
from buildbump.config.mapping_settings import WorkspaceMapping
from buildbump.core.files import write_text
from buildbump.core.logging.logging_manager import logging_manager
from buildbump.core.scm.scoped import temporary_file, temporary_workspace, working_folder_mapping
from buildbump.core.version.rewriter import RewrittenFile
from buildbump.services.base import VersionControlClient

logger = logging_manager.get_session("SourceControlCommitter")


def _normalize(path: Union[str, Path]) -> str:
    return os.path.normpath(os.path.abspath(str(path)))


def resolve_server_path(local_path: Union[str, Path], mappings: Sequence[WorkspaceMapping]) -> Optional[str]:
    """Translate a local path into its server path.

    The mapping with the longest local root containing ``local_path`` wins. Roots
    only match on whole path components, case-insensitively where the platform is.

    Args:
        local_path (Union[str, Path]): Local file path.
        mappings (Sequence[WorkspaceMapping]): Candidate mappings.

    Returns:
        Optional[str]: The server path, or None when no mapping covers the file.
    """
    local = _normalize(local_path)
    local_key = os.path.normcase(local)

    best_root = None
    best_mapping = None
    for mapping in mappings:
        root = _normalize(mapping.local_root)
        root_key = os.path.normcase(root)
        if local_key != root_key and not local_key.startswith(root_key.rstrip(os.sep) + os.sep):
            continue
        if best_root is None or len(root) > len(best_root):
            best_root, best_mapping = root, mapping

    if best_mapping is None:
        return None

    relative = local[len(best_root):].lstrip(os.sep)
    if not relative:
        return best_mapping.server_root
    return best_mapping.server_root.rstrip("/") + "/" + relative.replace(os.sep, "/")


def format_comment(settings: CheckInSettings, version: str) -> str:
    return settings.comment_template.replace("{version}", version)


def commit_rewritten_files(client: VersionControlClient,
                           files: Sequence[RewrittenFile],
                           version: str,
                           mappings: Sequence[WorkspaceMapping],
                           temp_dir: Union[str, Path],
                           settings: CheckInSettings) -> List[int]:
    """Check every rewritten file into version control.

    Files no mapping covers are skipped with a warning; their local copy stays
    modified.

    Args:
        client (VersionControlClient): Version-control backend.
        files (Sequence[RewrittenFile]): Files produced by the rewriter.
        version (str): The stamped version, used in the changeset comment.
        mappings (Sequence[WorkspaceMapping]): Local-to-server mappings.
        temp_dir (Union[str, Path]): Folder the temporary files are mapped into.
        settings (CheckInSettings): Comment template and workspace prefix.

    Returns:
        List[int]: Changeset numbers reported by the server.
    """
    if not files:
        logger.info("No rewritten files to check in")
        return []

    comment = format_comment(settings, version)
    changesets = []

    with temporary_workspace(client, settings.workspace_prefix, comment) as workspace:
        for rewritten in files:
            server_path = resolve_server_path(rewritten.path, mappings)
            if server_path is None:
                logger.warning(f"No workspace mapping covers {rewritten.path}; skipping check-in for this file")
                continue

            temp_path = Path(temp_dir) / rewritten.path.name
            with temporary_file(temp_path):
                with working_folder_mapping(client, workspace, server_path, str(temp_path)):
                    client.get_and_checkout(workspace, str(temp_path))
                    write_text(temp_path, rewritten.content, rewritten.encoding)
                    changeset = client.check_in_pending(workspace, comment)

            if changeset is not None:
                changesets.append(changeset)
            logger.info(f"Checked in {server_path}" + (f" as changeset {changeset}" if changeset is not None else ""))

    return changesets
