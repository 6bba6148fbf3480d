from .committer import commit_rewritten_files, resolve_server_path
from .scoped import temporary_workspace, working_folder_mapping, temporary_file

__all__ = [
    "commit_rewritten_files",
    "resolve_server_path",
    "temporary_workspace",
    "working_folder_mapping",
    "temporary_file",
]
