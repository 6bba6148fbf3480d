"""Settings for checking stamped files back into source control."""

from pydantic import BaseModel, Field, field_validator


class CheckInSettings(BaseModel):
    """Settings for the temporary workspace and the changeset comment."""

    comment_template: str = Field(
        default="***NO_CI*** Version number updated to {version} by build server",
        description="Changeset comment. '{version}' is replaced by the new version.",
    )

    workspace_prefix: str = Field(
        default="buildbump",
        description="Prefix of the temporary workspace name.",
    )

    @field_validator("comment_template")
    @classmethod
    def _template_names_version(cls, v):
        if "{version}" not in v:
            raise ValueError("comment_template must contain '{version}'")
        return v

    class Config:
        extra = "forbid"
