"""modver - version comparison and dependency checks for mod packages.

    Returns:
        int: Exit code
"""
import logging
import sys

import yaml

from constants import Constants, ExitCodes, _load_yaml_config, apply_config
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args

# Support both source/tests (src.versioning.*) and installed (versioning.*) modes.
try:
    from src.versioning.errors import VersioningError
    from src.versioning.models import ExternalReference
    from src.versioning.parser import parse_cli_token
    from src.versioning.semver import PrereleaseOrdering, compare_versions, parse_version, sort_versions
except ImportError:
    from versioning.errors import VersioningError
    from versioning.models import ExternalReference
    from versioning.parser import parse_cli_token
    from versioning.semver import PrereleaseOrdering, compare_versions, parse_version, sort_versions

logger = logging.getLogger(__name__)

_SYMBOLS = {-1: "<", 0: "=", 1: ">"}


def _ordering(args):
    if getattr(args, "LEGACY_PRERELEASE", False):
        return PrereleaseOrdering.LEGACY
    return PrereleaseOrdering(Constants.PRERELEASE_ORDERING)


def cmd_compare(args):
    """Print <, = or > for LEFT against RIGHT."""
    left = parse_version(args.LEFT)
    right = parse_version(args.RIGHT)
    result = compare_versions(left, right, _ordering(args))
    print(f"{left} {_SYMBOLS[result]} {right}")
    return ExitCodes.SUCCESS.value


def cmd_sort(args):
    """Print the versions one per line in precedence order."""
    for version in sort_versions(args.VERSIONS, _ordering(args), reverse=args.REVERSE):
        print(version)
    return ExitCodes.SUCCESS.value


def cmd_check(args):
    """Check INSTALLED against REQUIREMENT (NAME:SPEC)."""
    name, spec = parse_cli_token(args.REQUIREMENT)
    if spec is None:
        logger.error("Requirement %r has no version spec; expected NAME:SPEC", args.REQUIREMENT)
        return ExitCodes.INVALID_INPUT.value
    installed = parse_version(args.INSTALLED)
    if spec.is_satisfied_by(installed):
        print(f"dependency '{name}' satisfied by installed version '{installed}'")
        return ExitCodes.SUCCESS.value
    print(f"dependency '{name}' requires version '{spec}' but installed version is '{installed}'")
    return ExitCodes.UNSATISFIED.value


def cmd_reference(args):
    """Print the display name and link of an external reference."""
    reference = ExternalReference.parse(args.RAW)
    print(reference.display_name())
    if reference.link:
        print(reference.link)
    return ExitCodes.SUCCESS.value


COMMANDS = {
    "compare": cmd_compare,
    "sort": cmd_sort,
    "check": cmd_check,
    "reference": cmd_reference,
}


def run(argv=None):
    """Parse arguments, apply configuration and run one command.

    Returns:
        int: Exit code
    """
    args = parse_args(argv)

    try:
        apply_config(_load_yaml_config(getattr(args, "CONFIG", None)))
    except (OSError, yaml.YAMLError) as exc:
        configure_logging(args.LOG_LEVEL, args.LOG_FILE)
        logger.error("Failed to load config: %s", exc)
        return ExitCodes.FILE_ERROR.value

    # CLI flag wins over config and environment.
    configure_logging(args.LOG_LEVEL or Constants.LOG_LEVEL, args.LOG_FILE)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.COMMAND),
        )

    try:
        return COMMANDS[args.COMMAND](args)
    except VersioningError as exc:
        logger.error("%s", exc)
        return ExitCodes.INVALID_INPUT.value


def main():
    """Main function of the program."""
    sys.exit(run())


if __name__ == "__main__":
    main()
