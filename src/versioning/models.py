"""Data models for dependency constraints and external references."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import InvalidDependencyVersion, InvalidVersionFormat, MalformedReference
from .semver import Version, VersionLike, as_version, compare_versions, identity_equals, parse_version

logger = logging.getLogger(__name__)

AT_LEAST_MARKER = "~"
REFERENCE_DELIMITER = "|"
REFERENCE_PLACEHOLDER = "[Mod Name Not Provided]"


class ConstraintKind(Enum):
    """Constraint mode derived from a dependency's version spec."""
    EXACT = "exact"
    AT_LEAST = "at_least"


@dataclass(frozen=True)
class DependencySpec:
    """Parsed form of a declared dependency's version requirement."""
    kind: ConstraintKind
    version: Version

    @classmethod
    def parse(cls, raw: str, dependency: Optional[str] = None) -> "DependencySpec":
        """Parse a raw spec such as ``"1.2.3"`` or ``"~1.2.0"``.

        A leading ``~`` means "this version or newer"; anything else is an
        exact pin on the whole string. No other operators are recognised.

        Args:
            raw: The spec string as declared in the manifest.
            dependency: Name of the dependency, used only for diagnostics.

        Raises:
            InvalidDependencyVersion: If the version part does not parse.
        """
        if not isinstance(raw, str):
            raise InvalidDependencyVersion(raw, dependency)
        if raw.startswith(AT_LEAST_MARKER):
            kind = ConstraintKind.AT_LEAST
            text = raw[len(AT_LEAST_MARKER):]
        else:
            kind = ConstraintKind.EXACT
            text = raw
        try:
            version = parse_version(text)
        except InvalidVersionFormat as exc:
            logger.debug("Dependency %s has unparseable spec %r", dependency or "<unnamed>", raw)
            raise InvalidDependencyVersion(raw, dependency) from exc
        return cls(kind=kind, version=version)

    @classmethod
    def exact(cls, version: VersionLike) -> "DependencySpec":
        return cls(kind=ConstraintKind.EXACT, version=as_version(version))

    @classmethod
    def at_least(cls, version: VersionLike) -> "DependencySpec":
        return cls(kind=ConstraintKind.AT_LEAST, version=as_version(version))

    def is_satisfied_by(self, candidate: VersionLike) -> bool:
        """Return True if ``candidate`` meets this constraint.

        An exact pin requires identity equality, build metadata included. An
        at-least constraint compares by precedence and is inclusive.
        """
        candidate = as_version(candidate)
        if self.kind is ConstraintKind.EXACT:
            return identity_equals(candidate, self.version)
        return compare_versions(candidate, self.version) >= 0

    def __str__(self) -> str:
        if self.kind is ConstraintKind.AT_LEAST:
            return f"{AT_LEAST_MARKER}{self.version}"
        return str(self.version)


@dataclass(frozen=True)
class DependencyRequirement:
    """A dependency name bound to its parsed constraint."""
    name: str
    spec: DependencySpec


@dataclass(frozen=True)
class ExternalReference:
    """Informational pointer to a dependency hosted elsewhere.

    Carries no ordering semantics; equality is structural.
    """
    identifier: str
    name: str
    link: str

    @classmethod
    def parse(cls, raw: str) -> "ExternalReference":
        """Parse ``identifier|display_name|link``.

        Fields past the third are ignored.

        Raises:
            MalformedReference: If fewer than three fields are present.
        """
        if not isinstance(raw, str):
            raise MalformedReference(raw)
        fields = raw.split(REFERENCE_DELIMITER)
        if len(fields) < 3:
            raise MalformedReference(raw, len(fields))
        if len(fields) > 3:
            logger.debug("Ignoring %d extra field(s) in reference %r", len(fields) - 3, raw)
        return cls(identifier=fields[0], name=fields[1], link=fields[2])

    def display_name(self) -> str:
        if self.name:
            return self.name
        if self.identifier:
            return self.identifier
        return REFERENCE_PLACEHOLDER

    def __str__(self) -> str:
        return REFERENCE_DELIMITER.join((self.identifier, self.name, self.link))
