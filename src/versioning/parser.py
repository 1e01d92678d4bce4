"""String parsing entry points for manifests, CLI tokens and references."""

from typing import List, Optional, Tuple

from .errors import InvalidDependencyVersion
from .models import DependencyRequirement, DependencySpec, ExternalReference
from .packages import Package, PackageKind


def tokenize_rightmost_colon(s: str) -> Tuple[str, Optional[str]]:
    """Split ``name:spec`` at the last colon; a bare name has no spec."""
    head, colon, tail = s.strip().rpartition(":")
    if not colon:
        return tail, None
    return head.strip(), tail.strip() or None


def parse_dependency_spec(raw: str, dependency: Optional[str] = None) -> DependencySpec:
    """Parse a raw dependency spec (``"1.2.3"`` or ``"~1.2.0"``)."""
    return DependencySpec.parse(raw, dependency)


def parse_manifest_entry(name: str, raw_spec: str) -> DependencyRequirement:
    """Construct a DependencyRequirement from one manifest dependency entry.

    Surrounding whitespace in the manifest value is dropped; the spec itself
    is parsed strictly.
    """
    if name is not None and not isinstance(name, str):
        raise InvalidDependencyVersion(raw_spec, str(name))
    name = (name or "").strip()
    if not name:
        raise InvalidDependencyVersion(raw_spec, name)
    spec = raw_spec.strip() if isinstance(raw_spec, str) else raw_spec
    return DependencyRequirement(name=name, spec=DependencySpec.parse(spec, name))


def parse_dependencies(package: Package) -> List[DependencyRequirement]:
    """Parse every dependency of a declared package, ordered by name.

    Raises:
        InvalidDependencyVersion: On the first malformed spec, naming the
            offending dependency.
    """
    if package.kind is not PackageKind.DECLARED:
        return []
    return [
        parse_manifest_entry(name, raw_spec)
        for name, raw_spec in sorted(package.dependencies.items(), key=lambda item: str(item[0]))
    ]


def parse_cli_token(token: str) -> Tuple[str, Optional[DependencySpec]]:
    """Parse ``name`` or ``name:spec`` from the command line."""
    name, spec = tokenize_rightmost_colon(token)
    if spec is None:
        return name, None
    return name, DependencySpec.parse(spec, name)


def parse_reference(raw: str) -> ExternalReference:
    """Parse an ``identifier|display_name|link`` reference."""
    return ExternalReference.parse(raw)
