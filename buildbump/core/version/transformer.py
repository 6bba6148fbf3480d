"""Incrementing the build and revision components of a four-part version."""

from buildbump.config.options import ResolvedOptions

BUILD_INDEX = 2
REVISION_INDEX = 3


def _increment(token: str) -> str:
    # int() would also accept signs, underscores, whitespace and non-ASCII digits.
    if not (token.isascii() and token.isdigit()):
        return token
    return str(int(token) + 1)


def transform_version(version: str, options: ResolvedOptions) -> str:
    """Compute the new version from the current one.

    Strings that do not have exactly four dot-separated parts are returned unchanged,
    as are parts that are not integers.

    Args:
        version (str): Current version, e.g. "1.2.3.4".
        options (ResolvedOptions): Which components to increment.

    Returns:
        str: The new version.
    """
    parts = version.split(".")
    if len(parts) != 4:
        return version

    if options.increment_build:
        parts[BUILD_INDEX] = _increment(parts[BUILD_INDEX])
    if options.increment_revision:
        parts[REVISION_INDEX] = _increment(parts[REVISION_INDEX])
    return ".".join(parts)
