"""Settings selecting and configuring the build and version-control backends."""

import os
from enum import Enum

from pydantic import BaseModel, Field


class EBuildBackend(Enum):
    REST = "rest"


class EVersionControlBackend(Enum):
    TF = "tf"


class ServiceSettings(BaseModel):
    """Backends used to talk to the build server and to version control."""

    build_backend: EBuildBackend = Field(
        default=EBuildBackend.REST,
        description="Backend used to read and save build metadata.",
    )

    version_control_backend: EVersionControlBackend = Field(
        default=EVersionControlBackend.TF,
        description="Backend used for workspaces, check-out and check-in.",
    )

    tf_executable: str = Field(
        default_factory=lambda: os.environ.get("BUILDBUMP_TF_EXE", "tf"),
        description="Path of the tf command-line client.",
    )

    api_version: str = Field(
        default="2.0",
        description="api-version sent to the build REST endpoint.",
    )

    class Config:
        extra = "forbid"
