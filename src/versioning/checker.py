"""Per-constraint dependency checks against an installed package listing.

Each declared dependency is evaluated on its own against whatever is
installed under that name; nothing here walks the dependency graph.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Mapping, Optional, Tuple

from common.logging_utils import extra_context, is_debug_enabled

from .errors import InvalidDependencyVersion, InvalidVersionFormat
from .models import DependencyRequirement, DependencySpec
from .packages import Package, PackageKind, index_installed
from .parser import parse_manifest_entry
from .semver import Version, parse_version

logger = logging.getLogger(__name__)


class DependencyStatus(Enum):
    """Outcome of checking one dependency."""
    SATISFIED = "satisfied"
    MISSING = "missing"
    UNSATISFIED = "unsatisfied"
    INVALID = "invalid"


@dataclass(frozen=True)
class DependencyCheck:
    """Result of checking one declared dependency."""
    name: str
    raw_spec: str
    status: DependencyStatus
    installed_version: Optional[Version]
    message: str

    @property
    def ok(self) -> bool:
        return self.status is DependencyStatus.SATISFIED


def check_requirement(
    requirement: DependencyRequirement,
    installed_index: Mapping[str, Package],
) -> DependencyCheck:
    """Check one parsed requirement against an index from ``index_installed``."""
    raw_spec = str(requirement.spec)
    installed = installed_index.get(requirement.name)
    if installed is None:
        return DependencyCheck(
            name=requirement.name,
            raw_spec=raw_spec,
            status=DependencyStatus.MISSING,
            installed_version=None,
            message=f"dependency '{requirement.name}' requires version '{raw_spec}' but it is not installed",
        )
    if requirement.spec.is_satisfied_by(installed.version):
        return DependencyCheck(
            name=requirement.name,
            raw_spec=raw_spec,
            status=DependencyStatus.SATISFIED,
            installed_version=installed.version,
            message=f"dependency '{requirement.name}' satisfied by installed version '{installed.version}'",
        )
    return DependencyCheck(
        name=requirement.name,
        raw_spec=raw_spec,
        status=DependencyStatus.UNSATISFIED,
        installed_version=installed.version,
        message=(
            f"dependency '{requirement.name}' requires version '{raw_spec}' "
            f"but installed version is '{installed.version}'"
        ),
    )


def check_dependencies(declared: Package, installed: Iterable[Package]) -> List[DependencyCheck]:
    """Check every dependency of ``declared`` against the installed packages.

    Malformed specs are reported as INVALID results rather than raised, so
    one bad declaration does not hide the state of the others.

    Args:
        declared: A declared package (its dependency map is evaluated).
        installed: Installed packages; only read.

    Returns:
        One DependencyCheck per dependency, ordered by dependency name.
    """
    if declared.kind is not PackageKind.DECLARED:
        raise ValueError(f"{declared} is not a declared package")
    index = index_installed(installed)
    results: List[DependencyCheck] = []
    for name, raw_spec in sorted(declared.dependencies.items(), key=lambda item: str(item[0])):
        try:
            requirement = parse_manifest_entry(name, raw_spec)
        except InvalidDependencyVersion as exc:
            logger.warning("%s: %s", declared.name, exc)
            installed_pkg = index.get(name)
            results.append(DependencyCheck(
                name=name,
                raw_spec=raw_spec,
                status=DependencyStatus.INVALID,
                installed_version=installed_pkg.version if installed_pkg else None,
                message=str(exc),
            ))
            continue
        results.append(check_requirement(requirement, index))

    if is_debug_enabled(logger):
        logger.debug(
            "Checked dependencies",
            extra=extra_context(
                event="decision",
                component="checker",
                action="check_dependencies",
                package=declared.name,
                count=len(results),
                unmet=len(unmet(results)),
            ),
        )
    return results


def unmet(results: Iterable[DependencyCheck]) -> List[DependencyCheck]:
    """Return the results that are not satisfied."""
    return [r for r in results if not r.ok]


def pick_candidate(
    spec: DependencySpec, candidates: List[str]
) -> Tuple[Optional[Version], int, Optional[str]]:
    """Pick the highest candidate version that satisfies ``spec``.

    Args:
        spec: Parsed constraint.
        candidates: Available version strings; unparseable ones are skipped.

    Returns:
        Tuple of (picked_version, candidate_count, error_message)
    """
    if not candidates:
        return None, 0, "No versions available"

    matching: List[Version] = []
    for candidate in candidates:
        try:
            version = parse_version(candidate)
        except InvalidVersionFormat:
            logger.debug("Skipping invalid candidate version %r", candidate)
            continue
        if spec.is_satisfied_by(version):
            matching.append(version)

    if not matching:
        return None, len(candidates), f"No versions match spec '{spec}'"

    matching.sort(key=lambda v: (v.precedence_key(), v.build))
    return matching[-1], len(candidates), None
