"""The pre-build pipeline: locate, increment, stamp the build, rewrite, check in."""

from dataclasses import dataclass, field
from typing import List, Optional

from buildbump.config.environment_settings import EnvironmentSettings
from buildbump.config.options import ResolvedOptions
from buildbump.config.settings import AppSettings
from buildbump.core.build.build_updater import update_build_metadata
from buildbump.core.logging.logging_manager import logging_manager
from buildbump.core.scm.committer import commit_rewritten_files
from buildbump.core.version.locator import locate_current_version
from buildbump.core.version.rewriter import RewrittenFile, rewrite_version_files
from buildbump.core.version.transformer import transform_version
from buildbump.services.base import BuildRecord, BuildService, VersionControlClient

logger = logging_manager.get_session("Pipeline")


@dataclass
class PipelineResult:
    """What one run changed."""
    current_version: str
    new_version: str
    build: BuildRecord
    rewritten: List[RewrittenFile] = field(default_factory=list)
    changesets: List[int] = field(default_factory=list)


def run_pipeline(environment: EnvironmentSettings,
                 settings: AppSettings,
                 options: ResolvedOptions,
                 build_service: BuildService,
                 version_control: Optional[VersionControlClient] = None) -> Optional[PipelineResult]:
    """Run every stage in order.

    Args:
        environment (EnvironmentSettings): Values provided by the build agent.
        settings (AppSettings): File patterns, mappings and check-in settings.
        options (ResolvedOptions): Effective switches.
        build_service (BuildService): Backend holding the running build.
        version_control (VersionControlClient, optional): Backend used for check-in.
            Required when ``options.check_in`` is set.

    Returns:
        Optional[PipelineResult]: The outcome, or None when no version number was
        found and nothing was changed.

    Raises:
        ValueError: If check-in is enabled without a version-control client.
        ServiceError: If a backend call fails.
    """
    if options.check_in and version_control is None:
        raise ValueError("Check-in is enabled but no version control client was given")

    current_version = locate_current_version(environment.sources_dir, settings.files.shared_version_file)
    if not current_version:
        logger.error(f"No version number found in any '{settings.files.shared_version_file}' "
                     f"under {environment.sources_dir}; nothing was changed")
        return None

    new_version = transform_version(current_version, options)
    logger.info(f"Current version {current_version}, new version {new_version}")

    build = update_build_metadata(build_service, environment.build_uri, new_version)

    rewritten = rewrite_version_files(environment.sources_dir, settings.files.rewrite_patterns, new_version)
    logger.info(f"Rewrote {len(rewritten)} file(s)")

    changesets = []
    if options.check_in:
        changesets = commit_rewritten_files(version_control, rewritten, new_version,
                                            settings.mappings, environment.temp_dir, settings.check_in)
    else:
        logger.info("Check-in disabled; modified files stay local")

    return PipelineResult(
        current_version=current_version,
        new_version=new_version,
        build=build,
        rewritten=rewritten,
        changesets=changesets,
    )
