"""Stamping a version into every file that declares one."""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Union

from buildbump.core.files import find_files, read_text, write_text
from buildbump.core.logging.logging_manager import logging_manager
from buildbump.core.version.declarations import DECLARATIONS

logger = logging_manager.get_session("FileRewriter")


@dataclass
class RewrittenFile:
    """A file whose declarations were rewritten, with the content written to it."""
    path: Path
    content: str
    encoding: str = "utf-8"


def contains_version(text: str) -> bool:
    """Check whether ``text`` holds any recognised version declaration."""
    return any(declaration.matches(text) for declaration in DECLARATIONS.values())


def rewrite_text(text: str, version: str) -> str:
    """Replace the version of every recognised declaration in ``text``.

    The declaration kinds are independent, so a file mixing several of them has all
    of them rewritten in one pass. Applying the same version twice is a no-op.
    """
    for declaration in DECLARATIONS.values():
        text = declaration.render(text, version)
    return text


def rewrite_version_files(root: Union[str, Path], patterns: Iterable[str], version: str) -> List[RewrittenFile]:
    """Rewrite every versioned file under ``root`` in place.

    Files are overwritten even when their content does not change, and whether or
    not they are later checked in.

    Args:
        root (Union[str, Path]): Root of the source tree.
        patterns (Iterable[str]): File name patterns to scan, in order.
        version (str): Version to stamp.

    Returns:
        List[RewrittenFile]: The rewritten files, in discovery order.
    """
    rewritten = []
    for path in find_files(root, patterns):
        text, encoding = read_text(path)
        if not contains_version(text):
            logger.debug(f"Skipping {path}: no version declaration")
            continue

        new_text = rewrite_text(text, version)
        write_text(path, new_text, encoding)
        logger.info(f"Stamped version {version} into {path}")
        rewritten.append(RewrittenFile(path=path, content=new_text, encoding=encoding))
    return rewritten
