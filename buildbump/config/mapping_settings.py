"""Local-to-server path mappings used to find a file's repository path."""

from pydantic import BaseModel, Field, field_validator


class WorkspaceMapping(BaseModel):
    """Pairs a local root folder with the server folder it is mapped to."""

    local_root: str = Field(description="Local folder, e.g. C:\\Builds\\1\\Sources.")
    server_root: str = Field(description="Server folder, e.g. $/Project/Main.")

    @field_validator("server_root")
    @classmethod
    def _server_root_is_server_path(cls, v):
        if not v.startswith("$/"):
            raise ValueError(f"server_root must start with '$/', got '{v}'")
        return v

    @classmethod
    def parse(cls, value: str) -> 'WorkspaceMapping':
        """Parse a ``LOCAL=SERVER`` pair as given on the command line.

        Raises:
            ValueError: If the value does not contain '='.
        """
        local_root, sep, server_root = value.partition("=")
        if not sep or not local_root or not server_root:
            raise ValueError(f"Mapping must look like LOCAL=SERVER, got '{value}'")
        return cls(local_root=local_root.strip(), server_root=server_root.strip())

    class Config:
        frozen = True
        extra = "forbid"
