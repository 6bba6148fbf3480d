"""Table of the version declaration forms buildbump understands.

Each entry pairs a compiled pattern, whose ``version`` group holds the numeric part,
with the separator used when the version is written back. Every consumer iterates
this table instead of carrying its own regular expressions.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

DOTTED_VERSION = r"\d+\.\d+\.\d+\.\d+"
COMMA_VERSION = r"\d+\s*,\s*\d+\s*,\s*\d+\s*,\s*\d+"

# A dotted version must not be followed by more digits or dots.
_END = r"(?![\d.])"


class EDeclarationKind(Enum):
    ASSEMBLY_VERSION = "assembly_version"
    ASSEMBLY_FILE_VERSION = "assembly_file_version"
    ASSEMBLY_INFORMATIONAL_VERSION = "assembly_informational_version"
    FILE_VERSION_VALUE = "file_version_value"
    PRODUCT_VERSION_VALUE = "product_version_value"
    VERSION_DIRECTIVE = "version_directive"


@dataclass(frozen=True)
class Declaration:
    """One declaration form: how to find it and how to render a version into it."""
    kind: EDeclarationKind
    pattern: re.Pattern
    separator: str = "."

    def find(self, text: str) -> Optional[str]:
        """Return the first declared version in ``text`` as a dotted string, or None."""
        match = self.pattern.search(text)
        if match is None:
            return None
        return re.sub(r"\s*,\s*", ".", match.group("version"))

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None

    def render(self, text: str, version: str) -> str:
        """Replace the numeric part of every occurrence in ``text`` with ``version``."""
        rendered = version.replace(".", self.separator)

        def _substitute(match):
            offset = match.start()
            start, end = match.span("version")
            whole = match.group(0)
            return whole[:start - offset] + rendered + whole[end - offset:]

        return self.pattern.sub(_substitute, text)


def _attribute(name: str) -> re.Pattern:
    return re.compile(r"\b" + name + r"(?:Attribute)?\s*\(\s*\"(?P<version>" + DOTTED_VERSION + r")" + _END)


def _string_value(key: str) -> re.Pattern:
    return re.compile(r"\"" + key + r"\"\s*,\s*\"(?P<version>" + DOTTED_VERSION + r")" + _END)


DECLARATIONS: Dict[EDeclarationKind, Declaration] = {
    EDeclarationKind.ASSEMBLY_VERSION: Declaration(
        EDeclarationKind.ASSEMBLY_VERSION, _attribute("AssemblyVersion")),
    EDeclarationKind.ASSEMBLY_FILE_VERSION: Declaration(
        EDeclarationKind.ASSEMBLY_FILE_VERSION, _attribute("AssemblyFileVersion")),
    EDeclarationKind.ASSEMBLY_INFORMATIONAL_VERSION: Declaration(
        EDeclarationKind.ASSEMBLY_INFORMATIONAL_VERSION, _attribute("AssemblyInformationalVersion")),
    EDeclarationKind.FILE_VERSION_VALUE: Declaration(
        EDeclarationKind.FILE_VERSION_VALUE, _string_value("FileVersion")),
    EDeclarationKind.PRODUCT_VERSION_VALUE: Declaration(
        EDeclarationKind.PRODUCT_VERSION_VALUE, _string_value("ProductVersion")),
    EDeclarationKind.VERSION_DIRECTIVE: Declaration(
        EDeclarationKind.VERSION_DIRECTIVE,
        re.compile(r"\b(?:FILEVERSION|PRODUCTVERSION)\s+(?P<version>" + COMMA_VERSION + r")\b"),
        separator=","),
}

# Priority order used when reading the current version.
LOCATOR_KINDS: List[EDeclarationKind] = [
    EDeclarationKind.ASSEMBLY_VERSION,
    EDeclarationKind.ASSEMBLY_FILE_VERSION,
    EDeclarationKind.ASSEMBLY_INFORMATIONAL_VERSION,
    EDeclarationKind.FILE_VERSION_VALUE,
]
