"""Rewriting the running build's number, label and drop location."""

import re
from typing import Optional

from buildbump.core.logging.logging_manager import logging_manager
from buildbump.core.version.declarations import DOTTED_VERSION
from buildbump.services.base import BuildRecord, BuildService

logger = logging_manager.get_session("BuildMetadataUpdater")

VERSION_IN_TEXT = re.compile(DOTTED_VERSION)


def replace_version(value: Optional[str], version: str) -> Optional[str]:
    """Replace the first dotted four-part number in ``value`` with ``version``."""
    if not value:
        return value
    return VERSION_IN_TEXT.sub(version, value, count=1)


def update_build_metadata(service: BuildService, build_uri: str, version: str) -> BuildRecord:
    """Stamp ``version`` into the build's number, label and drop location and save it.

    This is plain text substitution: the old version is expected to appear verbatim
    in each field. Fields without a four-part number are saved unchanged.

    Args:
        service (BuildService): Build service holding the build.
        build_uri (str): URI of the running build.
        version (str): New version.

    Returns:
        BuildRecord: The record as saved.
    """
    record = service.get_build(build_uri)
    updated = record.model_copy(update={
        "number": replace_version(record.number, version),
        "label": replace_version(record.label, version),
        "drop_location": replace_version(record.drop_location, version),
    })
    service.save_build(updated)
    logger.info(f"Build number changed from '{record.number}' to '{updated.number}'")
    return updated
