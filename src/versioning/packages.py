"""Package identities and the declared/installed package variant.

A ``Package`` is a ``PackageIdentity`` plus a tagged details payload: either
``DeclaredDetails`` (authors and a dependency map, as authored in a manifest)
or ``InstalledDetails`` (whether it is only present because something else
depends on it). Value equality covers identity, kind and details; ordering
always uses the identity alone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple, Union

from .semver import Version, VersionLike, as_version, compare_versions

logger = logging.getLogger(__name__)


class PackageKind(Enum):
    """Discriminator for the package details payload."""
    DECLARED = "declared"
    INSTALLED = "installed"


@dataclass(frozen=True, eq=False)
class PackageIdentity:
    """A (name, version) pair.

    Equal when the names match exactly and the versions are identity-equal.
    Ordered by name (code point order), then by version precedence.
    """
    name: str
    version: Version

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise ValueError(f"Package name must be non-empty text, got {self.name!r}")
        object.__setattr__(self, "version", as_version(self.version))

    def compare(self, other: "PackageIdentity") -> int:
        """Return -1, 0 or 1; build metadata does not take part."""
        if self.name != other.name:
            return -1 if self.name < other.name else 1
        return compare_versions(self.version, other.version)

    def __eq__(self, other):
        if not isinstance(other, PackageIdentity):
            return NotImplemented
        return self.name == other.name and self.version == other.version

    def __hash__(self):
        return hash((self.name, self.version))

    def __lt__(self, other):
        if not isinstance(other, PackageIdentity):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other):
        if not isinstance(other, PackageIdentity):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other):
        if not isinstance(other, PackageIdentity):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other):
        if not isinstance(other, PackageIdentity):
            return NotImplemented
        return self.compare(other) >= 0

    def __str__(self) -> str:
        return f"{self.name} {self.version}"


@dataclass(frozen=True)
class DeclaredDetails:
    """Manifest data of a declared package.

    ``dependencies`` maps dependency name to its raw version spec. It is
    stored as a sorted tuple of pairs so the value stays hashable.
    """
    authors: FrozenSet[str] = frozenset()
    dependency_items: Tuple[Tuple[str, str], ...] = ()

    @property
    def dependencies(self) -> Dict[str, str]:
        return dict(self.dependency_items)


@dataclass(frozen=True)
class InstalledDetails:
    """Install-time data of a package present on disk."""
    as_dependency: bool = False


Details = Union[DeclaredDetails, InstalledDetails]


@dataclass(frozen=True, eq=False)
class Package:
    """A package identity tagged with declared or installed details."""
    identity: PackageIdentity
    details: Details = field(default_factory=InstalledDetails)

    @classmethod
    def declared(
        cls,
        name: str,
        version: VersionLike,
        authors: Optional[Iterable[str]] = None,
        dependencies: Optional[Mapping[str, str]] = None,
    ) -> "Package":
        """Create a declared package; missing authors or dependencies become empty."""
        details = DeclaredDetails(
            authors=frozenset(authors or ()),
            dependency_items=tuple(sorted((dependencies or {}).items(), key=lambda item: str(item[0]))),
        )
        return cls(identity=PackageIdentity(name, as_version(version)), details=details)

    @classmethod
    def installed(cls, name: str, version: VersionLike, as_dependency: bool = False) -> "Package":
        """Create an installed package."""
        return cls(
            identity=PackageIdentity(name, as_version(version)),
            details=InstalledDetails(as_dependency=bool(as_dependency)),
        )

    @property
    def kind(self) -> PackageKind:
        if isinstance(self.details, DeclaredDetails):
            return PackageKind.DECLARED
        return PackageKind.INSTALLED

    @property
    def name(self) -> str:
        return self.identity.name

    @property
    def version(self) -> Version:
        return self.identity.version

    @property
    def authors(self) -> FrozenSet[str]:
        if isinstance(self.details, DeclaredDetails):
            return self.details.authors
        return frozenset()

    @property
    def dependencies(self) -> Dict[str, str]:
        if isinstance(self.details, DeclaredDetails):
            return self.details.dependencies
        return {}

    @property
    def as_dependency(self) -> bool:
        if isinstance(self.details, InstalledDetails):
            return self.details.as_dependency
        return False

    def __eq__(self, other):
        if not isinstance(other, Package):
            return NotImplemented
        return (
            self.kind is other.kind
            and self.identity == other.identity
            and self.details == other.details
        )

    def __hash__(self):
        return hash((self.kind, self.identity, self.details))

    def __lt__(self, other):
        if not isinstance(other, Package):
            return NotImplemented
        return self.identity < other.identity

    def __le__(self, other):
        if not isinstance(other, Package):
            return NotImplemented
        return self.identity <= other.identity

    def __gt__(self, other):
        if not isinstance(other, Package):
            return NotImplemented
        return self.identity > other.identity

    def __ge__(self, other):
        if not isinstance(other, Package):
            return NotImplemented
        return self.identity >= other.identity

    def __str__(self) -> str:
        return str(self.identity)


def _details_key(details: Details) -> tuple:
    if isinstance(details, DeclaredDetails):
        return (tuple(sorted(details.authors)), details.dependency_items)
    return (details.as_dependency,)


def _sort_key(item: Union[Package, PackageIdentity]) -> tuple:
    if isinstance(item, Package):
        identity, kind, details = item.identity, item.kind.value, _details_key(item.details)
    else:
        identity, kind, details = item, "", ()
    # Build text, kind and details only break ties the precedence order leaves open.
    return (identity.name, identity.version.precedence_key(), identity.version.build, kind, details)


def sort_packages(
    packages: Iterable[Union[Package, PackageIdentity]],
    reverse: bool = False,
) -> List[Union[Package, PackageIdentity]]:
    """Return packages ordered by name then version precedence.

    The result does not depend on the input order: packages that tie on
    name and precedence are further ordered by build metadata and kind.
    """
    return sorted(packages, key=_sort_key, reverse=reverse)


def index_installed(packages: Iterable[Package]) -> Dict[str, Package]:
    """Map each package name to its highest-precedence installed entry.

    The caller's collection is only read.
    """
    index: Dict[str, Package] = {}
    for package in packages:
        current = index.get(package.name)
        if current is None:
            index[package.name] = package
            continue
        logger.debug("Multiple installed entries for %s: %s and %s", package.name, current.version, package.version)
        if _sort_key(package) > _sort_key(current):
            index[package.name] = package
    return index
