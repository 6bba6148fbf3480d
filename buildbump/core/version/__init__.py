"""Version discovery, increment and rewriting."""

from .declarations import EDeclarationKind, Declaration, DECLARATIONS, LOCATOR_KINDS
from .locator import locate_current_version
from .transformer import transform_version
from .rewriter import RewrittenFile, rewrite_text, rewrite_version_files

__all__ = [
    "EDeclarationKind",
    "Declaration",
    "DECLARATIONS",
    "LOCATOR_KINDS",
    "locate_current_version",
    "transform_version",
    "RewrittenFile",
    "rewrite_text",
    "rewrite_version_files",
]
