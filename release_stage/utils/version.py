"""Version and tag parsing utilities.

Tags follow the release naming used for Spring-style projects: an optional
leading 'v', a MAJOR.MINOR.PATCH core and an optional qualifier such as
'.RELEASE', '-rc.2' or '-SNAPSHOT'.

Parsing never raises for a non-matching string; callers receive
``NO_MATCH`` and check ``matched``.
"""

import re
from dataclasses import dataclass
from typing import Literal

from release_stage.exceptions import ConfigurationError

BumpType = Literal["major", "minor", "patch"]
VersionTuple = tuple[int, int, int]

RELEASE_SUFFIX = ".RELEASE"

# v1.2.3, 1.2.3.RELEASE, v1.2.3-rc.1, 1.2.3-dev.4.abc1234
TAG_PATTERN = re.compile(
    r"^v?(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
    r"(?P<qualifier>[-.+][0-9A-Za-z][0-9A-Za-z.+-]*)?$"
)

CANDIDATE_QUALIFIER_PATTERN = re.compile(r"^-rc\.(\d+)$")


@dataclass(frozen=True)
class TagMatch:
    """Outcome of matching a tag against TAG_PATTERN.

    Attributes:
        matched: Whether the tag is a version tag
        major: Major component
        minor: Minor component
        patch: Patch component
        qualifier: Everything after MAJOR.MINOR.PATCH ('' if none)
        version: The tag with any leading 'v' removed
    """

    matched: bool
    major: int = 0
    minor: int = 0
    patch: int = 0
    qualifier: str = ""
    version: str = ""

    @property
    def core(self) -> str:
        """MAJOR.MINOR.PATCH without qualifier."""
        return f"{self.major}.{self.minor}.{self.patch}"

    @property
    def version_tuple(self) -> VersionTuple:
        return (self.major, self.minor, self.patch)

    @property
    def is_release(self) -> bool:
        """True for plain and '.RELEASE' tags, False for pre-releases."""
        return self.matched and self.qualifier in ("", RELEASE_SUFFIX)

    @property
    def candidate_number(self) -> int | None:
        """N for a '-rc.N' tag, None otherwise."""
        match = CANDIDATE_QUALIFIER_PATTERN.match(self.qualifier)
        return int(match.group(1)) if match else None


NO_MATCH = TagMatch(matched=False)


def parse_tag(tag: str | None) -> TagMatch:
    """Parse a git tag into its version components.

    Args:
        tag: Tag name (e.g. 'v0.1.0.RELEASE')

    Returns:
        TagMatch with captured groups, or NO_MATCH

    Examples:
        >>> parse_tag('v0.1.0.RELEASE').version
        '0.1.0.RELEASE'
        >>> parse_tag('nightly').matched
        False
    """
    if not tag or not tag.strip():
        return NO_MATCH

    match = TAG_PATTERN.match(tag.strip())
    if not match:
        return NO_MATCH

    qualifier = match.group("qualifier") or ""
    major, minor, patch = (
        int(match.group("major")),
        int(match.group("minor")),
        int(match.group("patch")),
    )
    return TagMatch(
        matched=True,
        major=major,
        minor=minor,
        patch=patch,
        qualifier=qualifier,
        version=f"{major}.{minor}.{patch}{qualifier}",
    )


def parse_version(version_str: str) -> VersionTuple:
    """Parse the MAJOR.MINOR.PATCH core of a version string.

    Args:
        version_str: Version string (e.g. '1.2.3', 'v1.2.3.RELEASE')

    Returns:
        Tuple of (major, minor, patch)

    Raises:
        ConfigurationError: If the string is not a version
    """
    match = parse_tag(version_str)
    if not match.matched:
        raise ConfigurationError(
            f"Invalid version format: '{version_str}'",
            details="Version must follow semantic versioning: MAJOR.MINOR.PATCH",
            fix_hint="Use format like '1.2.3' or '1.2.3.RELEASE'",
        )
    return match.version_tuple


def bump_version(current: str, bump_type: BumpType | str) -> str:
    """Bump a version according to semantic versioning rules.

    Qualifiers are dropped: bumping '0.1.0.RELEASE' by 'minor' gives '0.2.0'.

    Args:
        current: Current version string
        bump_type: 'major', 'minor' or 'patch'

    Returns:
        New MAJOR.MINOR.PATCH version string

    Raises:
        ConfigurationError: If current version or bump_type is invalid

    Examples:
        >>> bump_version('1.2.3', 'patch')
        '1.2.4'
        >>> bump_version('v1.2.3.RELEASE', 'minor')
        '1.3.0'
    """
    if bump_type not in ("major", "minor", "patch"):
        raise ConfigurationError(
            f"Invalid version scope: '{bump_type}'",
            details="Scope must be 'major', 'minor' or 'patch'",
            fix_hint="Set release.scope to major, minor or patch",
        )

    major, minor, patch = parse_version(current)

    if bump_type == "major":
        return f"{major + 1}.0.0"
    elif bump_type == "minor":
        return f"{major}.{minor + 1}.0"
    else:
        return f"{major}.{minor}.{patch + 1}"


def has_release_suffix(version: str) -> bool:
    return version.endswith(RELEASE_SUFFIX)


def add_release_suffix(version: str) -> str:
    """Append '.RELEASE' unless already present.

    Examples:
        >>> add_release_suffix('0.1.0')
        '0.1.0.RELEASE'
        >>> add_release_suffix('0.1.0.RELEASE')
        '0.1.0.RELEASE'
    """
    if has_release_suffix(version):
        return version
    return f"{version}{RELEASE_SUFFIX}"


def remove_tag_prefix(tag: str, prefix: str = "v") -> str:
    """Remove a tag prefix, keeping the rest of the tag verbatim.

    Examples:
        >>> remove_tag_prefix('v0.1.0.RELEASE')
        '0.1.0.RELEASE'
        >>> remove_tag_prefix('0.1.0')
        '0.1.0'
    """
    stripped = tag.strip()
    if prefix and stripped.startswith(prefix):
        stripped = stripped[len(prefix) :]
    return stripped


__all__ = [
    "BumpType",
    "VersionTuple",
    "TagMatch",
    "NO_MATCH",
    "RELEASE_SUFFIX",
    "TAG_PATTERN",
    "parse_tag",
    "parse_version",
    "bump_version",
    "has_release_suffix",
    "add_release_suffix",
    "remove_tag_prefix",
]
