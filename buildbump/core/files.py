"""File helpers shared by the rewriter and the committer.

Version files come in whatever encoding the IDE saved them in (resource scripts are
frequently UTF-16), so text is read and written back in the encoding its byte order
mark announces, with line endings left untouched. Files without a BOM are UTF-8
or, failing that, the Windows ANSI code page.
"""

import codecs
import os
import stat
from pathlib import Path
from typing import Iterable, List, Tuple, Union

PathLike = Union[str, Path]

_BOMS = [
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
]

# Encodings whose codec neither reads nor writes the BOM itself.
_EXPLICIT_BOMS = {
    "utf-16-le": codecs.BOM_UTF16_LE,
    "utf-16-be": codecs.BOM_UTF16_BE,
}

# Files saved without a BOM in the Windows ANSI code page.
FALLBACK_ENCODING = "cp1252"


def detect_encoding(raw: bytes) -> str:
    """Pick an encoding from the byte order mark.

    Without a BOM the content is UTF-8 when it decodes as such, and the ANSI code
    page otherwise.
    """
    for bom, encoding in _BOMS:
        if raw.startswith(bom):
            return encoding
    try:
        raw.decode("utf-8")
    except UnicodeDecodeError:
        return FALLBACK_ENCODING
    return "utf-8"


def read_text(path: PathLike) -> Tuple[str, str]:
    """Read a text file.

    Returns:
        Tuple[str, str]: The text and the encoding it was decoded with.

    Raises:
        UnicodeDecodeError: If the content fits neither the detected encoding nor
            the ANSI code page. The message names the file.
    """
    raw = Path(path).read_bytes()
    encoding = detect_encoding(raw)
    bom = _EXPLICIT_BOMS.get(encoding, b"")
    try:
        text = raw[len(bom):].decode(encoding)
    except UnicodeDecodeError as e:
        raise UnicodeDecodeError(e.encoding, e.object, e.start, e.end, f"{e.reason} in {path}") from e
    return text, encoding


def make_writable(path: PathLike) -> None:
    """Clear the read-only attribute source control leaves on files it manages."""
    mode = os.stat(path).st_mode
    if not mode & stat.S_IWRITE:
        os.chmod(path, mode | stat.S_IWRITE)


def write_text(path: PathLike, text: str, encoding: str = "utf-8") -> None:
    """Overwrite ``path`` with ``text``, clearing the read-only attribute first."""
    path = Path(path)
    if path.exists():
        make_writable(path)
    path.write_bytes(_EXPLICIT_BOMS.get(encoding, b"") + text.encode(encoding))


def find_files(root: PathLike, patterns: Iterable[str]) -> List[Path]:
    """Recursively find files under ``root`` whose names match any of ``patterns``.

    Files are grouped by pattern, in pattern order, and sorted within a group. A file
    matched by several patterns is listed once, at its first position.
    """
    root = Path(root)
    seen = set()
    found = []
    for pattern in patterns:
        for path in sorted(p for p in root.rglob(pattern) if p.is_file()):
            if path not in seen:
                seen.add(path)
                found.append(path)
    return found

