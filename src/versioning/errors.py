"""Typed failures raised by the versioning core."""

from __future__ import annotations

from typing import Optional


class VersioningError(ValueError):
    """Base class for all parse and validation failures in this package."""


class InvalidVersionFormat(VersioningError):
    """Raised when text does not match MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]."""

    def __init__(self, text: object, reason: Optional[str] = None):
        self.text = text
        self.reason = reason
        message = f"Invalid version format: {text!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidDependencyVersion(VersioningError):
    """Raised when the version part of a dependency spec cannot be parsed.

    Kept distinct from InvalidVersionFormat so callers can attribute the
    failure to a specific dependency declaration. The underlying parse error
    is available as ``__cause__``.
    """

    def __init__(self, raw_spec: object, dependency: Optional[str] = None):
        self.raw_spec = raw_spec
        self.dependency = dependency
        if dependency:
            message = f"Dependency {dependency!r} declares an invalid version: {raw_spec!r}"
        else:
            message = f"Invalid dependency version: {raw_spec!r}"
        super().__init__(message)


class MalformedReference(VersioningError):
    """Raised when an external reference has fewer than three delimited fields."""

    def __init__(self, raw: object, field_count: int = 0):
        self.raw = raw
        self.field_count = field_count
        super().__init__(
            f"Malformed external reference {raw!r}: expected 3 fields, got {field_count}"
        )
