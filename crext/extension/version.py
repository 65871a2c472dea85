"""
Semantic Versions.

This module parses version directory names and orders semantic versions.

Key features:
- Semantic version parsing (major.minor.patch[-prerelease][+build])
- Precedence ordering with pre-release rules
- Version directory name splitting into version + revision
"""

import functools
import re
from dataclasses import dataclass, field

_SEMVER_RE = re.compile(
    r"^[v=\s]*"
    r"(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$",
    re.ASCII,
)

REVISION_DELIMITER = "_"


@functools.total_ordering
@dataclass(frozen=True)
class SemanticVersion:
    """
    A parsed semantic version.

    Equality and ordering follow semver precedence, so build metadata is
    ignored when comparing.

    Attributes:
        major: Major version
        minor: Minor version
        patch: Patch version
        prerelease: Pre-release identifiers (empty for a release)
        build: Build metadata identifiers
    """

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = field(default=(), compare=False)

    def __str__(self) -> str:
        return self.canonical

    @property
    def canonical(self) -> str:
        """Canonical form used for manifest matching (no build metadata)."""
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        return text

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return compare_versions(self, other) < 0


class InvalidVersion(ValueError):
    """Raised when a string is not a valid semantic version."""

    pass


def parse_version(text: str) -> SemanticVersion:
    """
    Parse a semantic version string.

    A leading ``v`` or ``=`` and surrounding whitespace are accepted.

    Args:
        text: Version string (e.g., "1.2.3-beta.1")

    Returns:
        SemanticVersion object

    Raises:
        InvalidVersion: If the string is not a valid semantic version
    """
    match = _SEMVER_RE.match(text.strip()) if isinstance(text, str) else None
    if not match:
        raise InvalidVersion(f"Invalid semantic version: {text!r}")

    major, minor, patch, prerelease, build = match.groups()
    return SemanticVersion(
        major=int(major),
        minor=int(minor),
        patch=int(patch),
        prerelease=tuple(prerelease.split(".")) if prerelease else (),
        build=tuple(build.split(".")) if build else (),
    )


def _compare_identifiers(a: str, b: str) -> int:
    a_numeric = a.isdigit()
    b_numeric = b.isdigit()

    # Numeric identifiers always have lower precedence than alphanumeric
    if a_numeric and b_numeric:
        a_value, b_value = int(a), int(b)
    elif a_numeric:
        return -1
    elif b_numeric:
        return 1
    else:
        a_value, b_value = a, b

    if a_value < b_value:
        return -1
    if a_value > b_value:
        return 1
    return 0


def compare_versions(v1: SemanticVersion, v2: SemanticVersion) -> int:
    """
    Compare two semantic versions by precedence.

    Args:
        v1: First version
        v2: Second version

    Returns:
        -1 if v1 < v2, 0 if v1 == v2, 1 if v1 > v2
    """
    core1 = (v1.major, v1.minor, v1.patch)
    core2 = (v2.major, v2.minor, v2.patch)
    if core1 != core2:
        return -1 if core1 < core2 else 1

    # A release outranks any of its pre-releases
    if not v1.prerelease or not v2.prerelease:
        if v1.prerelease == v2.prerelease:
            return 0
        return 1 if not v1.prerelease else -1

    for p1, p2 in zip(v1.prerelease, v2.prerelease):
        result = _compare_identifiers(p1, p2)
        if result:
            return result

    if len(v1.prerelease) == len(v2.prerelease):
        return 0
    return -1 if len(v1.prerelease) < len(v2.prerelease) else 1


def split_version_string(version_string: str) -> tuple[SemanticVersion, str]:
    """
    Split a version directory name into its version and revision.

    The name has the form ``<semver>_<revision>``; the revision is
    everything after the first delimiter and may contain more delimiters.

    Args:
        version_string: Version directory name (e.g., "1.2.0_r4")

    Returns:
        Tuple of (version, revision)

    Raises:
        InvalidVersion: If the leading segment is not a semantic version
    """
    head, _, revision = version_string.partition(REVISION_DELIMITER)
    return parse_version(head), revision
