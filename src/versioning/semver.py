"""SemVer 2.0.0 version values: strict parsing and precedence ordering.

Parsing is two-staged: a grammar gate compiled once at import time rejects
anything outside ``MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]`` (ASCII only, no
surrounding whitespace, no ``v`` prefix), then ``semantic_version`` splits the
accepted text into its fields. SemVer precedence comes from the
``semantic_version`` precedence key; only the legacy ordering is computed here.

Two notions of equality are kept apart:

* identity equality (``==``, ``identity_equals``) compares all five fields,
  build metadata included;
* precedence equality (``precedence_equals``) ignores build metadata and is
  what ordering, sorting and at-least constraints use.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Tuple, Union

import semantic_version

from .errors import InvalidVersionFormat

logger = logging.getLogger(__name__)

_NUMERIC = r"0|[1-9][0-9]*"
_PRERELEASE_ID = r"0|[1-9][0-9]*|[0-9]*[A-Za-z-][0-9A-Za-z-]*"
_BUILD_ID = r"[0-9A-Za-z-]+"

_VERSION_RE = re.compile(
    rf"(?P<major>{_NUMERIC})\.(?P<minor>{_NUMERIC})\.(?P<patch>{_NUMERIC})"
    rf"(?:-(?P<prerelease>(?:{_PRERELEASE_ID})(?:\.(?:{_PRERELEASE_ID}))*))?"
    rf"(?:\+(?P<build>{_BUILD_ID}(?:\.{_BUILD_ID})*))?",
    re.ASCII,
)


class PrereleaseOrdering(Enum):
    """How prerelease tags are ordered when comparing versions.

    SEMVER follows the SemVer 2.0.0 identifier-by-identifier rules. LEGACY
    reproduces the ordering of the previous manager: prerelease text compared
    as one ordinal string, and a release sorting before its prereleases.
    """
    SEMVER = "semver"
    LEGACY = "legacy"


@dataclass(frozen=True, eq=False)
class Version:
    """Immutable semantic version.

    The matching ``semantic_version.Version`` is built once at construction
    and supplies the SemVer precedence key.
    """

    major: int
    minor: int
    patch: int
    prerelease: Tuple[str, ...] = ()
    build: Tuple[str, ...] = ()
    _semantic: Optional[semantic_version.Version] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        for field_name in ("major", "minor", "patch"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidVersionFormat(value, f"{field_name} must be a non-negative integer")
        for field_name in ("prerelease", "build"):
            value = getattr(self, field_name)
            if isinstance(value, str):
                value = tuple(value.split(".")) if value else ()
            value = tuple(value)
            if not all(isinstance(item, str) for item in value):
                raise InvalidVersionFormat(value, f"{field_name} identifiers must be text")
            object.__setattr__(self, field_name, value)
        text = str(self)
        if _VERSION_RE.fullmatch(text) is None:
            raise InvalidVersionFormat(text, "invalid prerelease or build identifier")
        try:
            object.__setattr__(self, "_semantic", semantic_version.Version(text))
        except ValueError as exc:
            raise InvalidVersionFormat(text, str(exc)) from exc

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse ``text`` strictly; raise InvalidVersionFormat on any deviation."""
        return parse_version(text)

    @classmethod
    def from_semantic(cls, value: semantic_version.Version) -> "Version":
        """Build from a ``semantic_version.Version``; partial versions are rejected."""
        return parse_version(str(value))

    def to_semantic(self) -> semantic_version.Version:
        """Return the equivalent ``semantic_version.Version``."""
        return semantic_version.Version(str(self))

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def precedence_key(self, ordering: PrereleaseOrdering = PrereleaseOrdering.SEMVER) -> tuple:
        """Return a sort key consistent with ``compare_versions`` for ``ordering``."""
        if ordering is PrereleaseOrdering.LEGACY:
            return (self.major, self.minor, self.patch, bool(self.prerelease), ".".join(self.prerelease))
        # major, minor, patch and the prerelease key; build never takes part.
        return tuple(self._semantic.precedence_key[:4])

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text

    def __repr__(self) -> str:
        return f"Version({str(self)!r})"

    def __eq__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return identity_equals(self, other)

    def __hash__(self):
        return hash((self.major, self.minor, self.patch, self.prerelease, self.build))

    def __lt__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return compare_versions(self, other) < 0

    def __le__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return compare_versions(self, other) <= 0

    def __gt__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return compare_versions(self, other) > 0

    def __ge__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return compare_versions(self, other) >= 0


VersionLike = Union[Version, str]


def parse_version(text: str) -> Version:
    """Parse a version string.

    Args:
        text: Candidate version text, e.g. ``"1.2.3-beta.1+build.5"``.

    Returns:
        The parsed Version.

    Raises:
        InvalidVersionFormat: If ``text`` is not a string or does not match the
            version grammar exactly.
    """
    if not isinstance(text, str):
        raise InvalidVersionFormat(text, "expected a string")
    if _VERSION_RE.fullmatch(text) is None:
        logger.debug("Rejected version string %r", text)
        raise InvalidVersionFormat(text)
    try:
        parsed = semantic_version.Version(text)
    except ValueError as exc:
        logger.debug("semantic_version rejected %r: %s", text, exc)
        raise InvalidVersionFormat(text, str(exc)) from exc
    return Version(
        major=parsed.major,
        minor=parsed.minor,
        patch=parsed.patch,
        prerelease=tuple(parsed.prerelease or ()),
        build=tuple(parsed.build or ()),
    )


def as_version(value: VersionLike) -> Version:
    """Return ``value`` as a Version, parsing it when given text."""
    if isinstance(value, Version):
        return value
    return parse_version(value)


def compare_versions(
    a: Version,
    b: Version,
    ordering: PrereleaseOrdering = PrereleaseOrdering.SEMVER,
) -> int:
    """Compare two versions by precedence.

    Major, minor and patch are compared numerically. With equal cores a
    release outranks any prerelease, and prereleases are compared identifier
    by identifier: a shorter list with an equal prefix is lower, numeric
    identifiers are lower than alphanumeric ones, numeric identifiers compare
    numerically and alphanumeric ones by code point. Build metadata is never
    considered.

    Returns:
        -1, 0 or 1 as ``a`` is lower than, precedence-equal to, or higher than ``b``.
    """
    key_a = a.precedence_key(ordering)
    key_b = b.precedence_key(ordering)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def identity_equals(a: Version, b: Version) -> bool:
    """True when all fields, build metadata included, are equal."""
    return (
        a.major == b.major
        and a.minor == b.minor
        and a.patch == b.patch
        and a.prerelease == b.prerelease
        and a.build == b.build
    )


def precedence_equals(a: Version, b: Version) -> bool:
    """True when the versions have the same precedence (build metadata ignored)."""
    return compare_versions(a, b) == 0


def sort_versions(
    versions: Iterable[VersionLike],
    ordering: PrereleaseOrdering = PrereleaseOrdering.SEMVER,
    reverse: bool = False,
) -> List[Version]:
    """Return the versions sorted by precedence; text entries are parsed first."""
    parsed = [as_version(v) for v in versions]
    return sorted(parsed, key=lambda v: v.precedence_key(ordering), reverse=reverse)
