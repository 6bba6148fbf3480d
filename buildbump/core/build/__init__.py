from .build_updater import update_build_metadata, replace_version

__all__ = ["update_build_metadata", "replace_version"]
