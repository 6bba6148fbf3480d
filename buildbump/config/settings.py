"""Aggregated configuration for buildbump.

Combines the per-concern settings models. Unlike the environment, these values can
come from a configuration file and from command-line options.
"""

from typing import List

from pydantic import BaseModel, Field

from .file_settings import FileNameSettings
from .check_in_settings import CheckInSettings
from .service_settings import ServiceSettings
from .mapping_settings import WorkspaceMapping


class AppSettings(BaseModel):
    """Root settings model that aggregates all setting categories."""

    files: FileNameSettings = Field(default_factory=FileNameSettings)
    check_in: CheckInSettings = Field(default_factory=CheckInSettings)
    services: ServiceSettings = Field(default_factory=ServiceSettings)
    mappings: List[WorkspaceMapping] = Field(default_factory=list)

    def with_mappings(self, extra: List[WorkspaceMapping]) -> 'AppSettings':
        """Return a copy with ``extra`` appended to the configured mappings."""
        return self.model_copy(update={"mappings": list(self.mappings) + list(extra)})

    class Config:
        extra = "forbid"
