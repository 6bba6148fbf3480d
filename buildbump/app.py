"""Command-line entry point for the buildbump pre-build step."""

import argparse
import logging
import sys
from typing import List, Optional

from buildbump.config.environment_settings import EnvironmentSettings, MissingEnvironmentError
from buildbump.config.mapping_settings import WorkspaceMapping
from buildbump.config.options import resolve_options
from buildbump.config.settings import AppSettings
from buildbump.config.settings_loader import export_settings, load_settings_file
from buildbump.core.logging.logging_config import configure_logging
from buildbump.core.logging.logging_manager import logging_manager
from buildbump.pipeline import run_pipeline
from buildbump.services import BuildServiceRegistry, ServiceError, VersionControlRegistry

log = logging_manager.get_session("AppMain")

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="buildbump",
        description="Increment the shared version number and stamp it into the build and the source tree",
    )
    parser.add_argument("-DoNotIncrement", "--do-not-increment", action="store_true", default=None,
                        help="Keep the current version; also disables check-in")
    parser.add_argument("-IncrementBuildNumber", "--increment-build-number", action="store_true", default=None,
                        help="Increment the build component (default unless only the revision is incremented)")
    parser.add_argument("-IncrementRevisionNumber", "--increment-revision-number", action="store_true", default=None,
                        help="Increment the revision component")
    parser.add_argument("-DoNotCheckIn", "--do-not-check-in", action="store_true", default=None,
                        help="Only modify the local files")
    parser.add_argument("--mapping", action="append", default=[], metavar="LOCAL=SERVER",
                        help="Local folder to server folder mapping (repeatable)")
    parser.add_argument("--config", metavar="FILE",
                        help="Settings file (.toml, .yaml, .yml or .json)")
    parser.add_argument("--log-level", choices=list(LOG_LEVELS.keys()), default="info",
                        help="Log verbosity")
    parser.add_argument("--show-config", choices=["toml", "json", "yaml"],
                        help="Print the effective settings and exit")
    return parser


def load_app_settings(config: Optional[str], mappings: List[str]) -> AppSettings:
    """Load the settings file, if any, and append command-line mappings.

    Raises:
        ValueError: If the file or a mapping is invalid.
        OSError: If the file cannot be read.
    """
    settings = load_settings_file(config) if config else AppSettings()
    return settings.with_mappings([WorkspaceMapping.parse(m) for m in mappings])


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point.

    Returns:
        int: Exit code - 0 on success or when no version was found, 1 on errors.
    """
    args = build_parser().parse_args(argv)
    configure_logging(enable_styling=sys.stdout.isatty(), level=LOG_LEVELS[args.log_level])

    try:
        settings = load_app_settings(args.config, args.mapping)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.show_config:
        print(export_settings(settings, args.show_config))
        return 0

    options = resolve_options(
        do_not_increment=args.do_not_increment,
        increment_build_number=args.increment_build_number,
        increment_revision_number=args.increment_revision_number,
        do_not_check_in=args.do_not_check_in,
    )
    log.info(f"Options: increment build={options.increment_build}, "
             f"increment revision={options.increment_revision}, check in={options.check_in}")

    try:
        environment = EnvironmentSettings.from_environ()
    except MissingEnvironmentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        build_service = BuildServiceRegistry.create(settings.services.build_backend, environment, settings)
        version_control = None
        if options.check_in:
            version_control = VersionControlRegistry.create(
                settings.services.version_control_backend, environment, settings)

        result = run_pipeline(environment, settings, options, build_service, version_control)
    except ServiceError as e:
        log.error(f"Pre-build versioning failed: {e}")
        return 1
    except (OSError, UnicodeError) as e:
        log.error(f"Pre-build versioning failed on a version file: {e}")
        return 1

    if result is not None:
        log.info(f"Build '{result.build.number}' stamped with version {result.new_version}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
