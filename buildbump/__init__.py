"""
buildbump - Shared version stamping for CI builds

This package provides a pre-build step that locates the shared version
declaration of a source tree, increments it, stamps it into every metadata and
resource file, and optionally checks the result back into source control.
"""

import os

def _read_version():
    version_file = os.path.join(os.path.dirname(__file__), '..', 'VERSION')
    try:
        with open(version_file, 'r', encoding='utf-8') as f:
            return f.read().strip()
    except OSError:
        return "unknown"

__version__ = _read_version()
