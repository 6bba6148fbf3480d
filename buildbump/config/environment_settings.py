"""Settings read from the build agent's environment.

The build server exports the location of the sources, the identity of the running
build and the collection it belongs to. All four required variables must be present
before anything is touched.
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field


class MissingEnvironmentError(ValueError):
    """Raised when a required environment variable is missing or invalid."""


# field name -> environment variable
REQUIRED_VARIABLES = {
    "sources_dir": "TF_BUILD_SOURCESDIRECTORY",
    "build_uri": "TF_BUILD_BUILDURI",
    "collection_uri": "TF_BUILD_COLLECTIONURI",
    "temp_dir": "TEMP",
}

OPTIONAL_VARIABLES = {
    "access_token": "SYSTEM_ACCESSTOKEN",
    "team_project": "SYSTEM_TEAMPROJECT",
}


class EnvironmentSettings(BaseModel):
    """Values the build agent provides through environment variables."""

    sources_dir: Path = Field(description="Root of the source tree checked out for this build.")
    build_uri: str = Field(description="URI of the running build, e.g. vstfs:///Build/Build/42.")
    collection_uri: str = Field(description="URI of the team project collection.")
    temp_dir: Path = Field(description="System temporary directory.")
    access_token: Optional[str] = Field(
        default=None,
        repr=False,
        description="Bearer token used by the REST build service.",
    )
    team_project: Optional[str] = Field(
        default=None,
        description="Team project name, used to build REST URLs.",
    )

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> 'EnvironmentSettings':
        """Build the settings from an environment mapping.

        Args:
            environ (Mapping[str, str], optional): Environment to read. Defaults to ``os.environ``.

        Returns:
            EnvironmentSettings: The validated settings.

        Raises:
            MissingEnvironmentError: If a required variable is missing or the sources
                directory does not exist.
        """
        if environ is None:
            environ = os.environ

        missing = [name for name in REQUIRED_VARIABLES.values() if not environ.get(name)]
        if missing:
            raise MissingEnvironmentError(
                f"Required environment variable(s) not set: {', '.join(missing)}"
            )

        values = {field: environ[name] for field, name in REQUIRED_VARIABLES.items()}
        values.update({field: environ[name] for field, name in OPTIONAL_VARIABLES.items() if environ.get(name)})

        sources_dir = Path(values["sources_dir"])
        if not sources_dir.is_dir():
            raise MissingEnvironmentError(
                f"Sources directory '{sources_dir}' ({REQUIRED_VARIABLES['sources_dir']}) does not exist"
            )

        return cls(**values)

    class Config:
        extra = "forbid"
