"""Argument parsing functionality for modver."""

import argparse

from constants import Constants


def _add_common_options(parser):
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="modver",
        description="modver - mod package version comparison and dependency checks",
        add_help=True,
    )
    _add_common_options(parser)
    subparsers = parser.add_subparsers(dest="COMMAND", metavar="COMMAND")
    subparsers.required = True

    compare = subparsers.add_parser("compare", help="Compare two versions by precedence")
    compare.add_argument("LEFT", help="First version")
    compare.add_argument("RIGHT", help="Second version")
    compare.add_argument("--legacy-prerelease",
                         dest="LEGACY_PRERELEASE",
                         help="Order prerelease tags the way the legacy manager did",
                         action="store_true")

    sort = subparsers.add_parser("sort", help="Sort versions by precedence")
    sort.add_argument("VERSIONS", nargs="+", help="Versions to sort")
    sort.add_argument("-r", "--reverse",
                      dest="REVERSE",
                      help="Sort highest first",
                      action="store_true")
    sort.add_argument("--legacy-prerelease",
                      dest="LEGACY_PRERELEASE",
                      help="Order prerelease tags the way the legacy manager did",
                      action="store_true")

    check = subparsers.add_parser("check", help="Check an installed version against a dependency spec")
    check.add_argument("REQUIREMENT", help="Dependency as NAME:SPEC, e.g. mymod:~1.2.0")
    check.add_argument("INSTALLED", help="Installed version")

    reference = subparsers.add_parser("reference", help="Show an external dependency reference")
    reference.add_argument("RAW", help="Reference as identifier|display_name|link")

    return parser.parse_args(argv)
