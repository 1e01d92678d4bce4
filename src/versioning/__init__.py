"""Version parsing, precedence ordering and dependency constraints."""

from .errors import InvalidDependencyVersion, InvalidVersionFormat, MalformedReference, VersioningError
from .semver import (
    PrereleaseOrdering,
    Version,
    compare_versions,
    identity_equals,
    parse_version,
    precedence_equals,
    sort_versions,
)
from .models import ConstraintKind, DependencyRequirement, DependencySpec, ExternalReference
from .packages import DeclaredDetails, InstalledDetails, Package, PackageIdentity, PackageKind, sort_packages
from .checker import DependencyCheck, DependencyStatus, check_dependencies

__all__ = [
    "VersioningError",
    "InvalidVersionFormat",
    "InvalidDependencyVersion",
    "MalformedReference",
    "PrereleaseOrdering",
    "Version",
    "compare_versions",
    "identity_equals",
    "parse_version",
    "precedence_equals",
    "sort_versions",
    "ConstraintKind",
    "DependencyRequirement",
    "DependencySpec",
    "ExternalReference",
    "DeclaredDetails",
    "InstalledDetails",
    "Package",
    "PackageIdentity",
    "PackageKind",
    "sort_packages",
    "DependencyCheck",
    "DependencyStatus",
    "check_dependencies",
]
