"""Settings for the file names that carry version declarations."""

from pydantic import BaseModel, Field


class FileNameSettings(BaseModel):
    """Glob patterns (matched against file names) for each family of versioned files."""

    shared_version_file: str = Field(
        default="SharedAssemblyInfo.*",
        description="Shared version file holding the authoritative version number.",
    )

    project_version_file: str = Field(
        default="AssemblyInfo.*",
        description="Per-project metadata files.",
    )

    resource_file: str = Field(
        default="*.rc",
        description="Native resource scripts.",
    )

    @property
    def rewrite_patterns(self):
        """Patterns scanned by the file rewriter, in scan order."""
        return [self.shared_version_file, self.project_version_file, self.resource_file]

    class Config:
        extra = "forbid"
