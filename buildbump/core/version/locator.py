"""Finding the current version number in the shared version file."""

from pathlib import Path
from typing import Optional, Union

from buildbump.core.files import find_files, read_text
from buildbump.core.logging.logging_manager import logging_manager
from buildbump.core.version.declarations import DECLARATIONS, LOCATOR_KINDS

logger = logging_manager.get_session("VersionLocator")


def find_version_in_text(text: str) -> Optional[str]:
    """Return the version of the highest-priority declaration present in ``text``."""
    for kind in LOCATOR_KINDS:
        version = DECLARATIONS[kind].find(text)
        if version is not None:
            return version
    return None


def locate_current_version(root: Union[str, Path], shared_version_file: str) -> Optional[str]:
    """Search ``root`` recursively for the shared version file and read its version.

    Candidate files are examined in sorted order; the first one holding a recognised
    declaration wins.

    Args:
        root (Union[str, Path]): Root of the source tree.
        shared_version_file (str): File name pattern of the shared version file.

    Returns:
        Optional[str]: The current version, or None when no candidate declares one.
    """
    candidates = find_files(root, [shared_version_file])
    if not candidates:
        logger.warning(f"No file matching '{shared_version_file}' found under {root}")
        return None

    for path in candidates:
        text, _ = read_text(path)
        version = find_version_in_text(text)
        if version is not None:
            logger.info(f"Found version {version} in {path}")
            return version
        logger.debug(f"No version declaration in {path}")

    logger.warning(f"None of the {len(candidates)} '{shared_version_file}' file(s) declares a version")
    return None
