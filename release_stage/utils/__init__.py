"""Utility modules for release-stage."""

from release_stage.utils.shell import ShellError, is_command_available, run, strip_ansi
from release_stage.utils.version import (
    NO_MATCH,
    RELEASE_SUFFIX,
    TAG_PATTERN,
    BumpType,
    TagMatch,
    VersionTuple,
    add_release_suffix,
    bump_version,
    has_release_suffix,
    parse_tag,
    parse_version,
    remove_tag_prefix,
)

__all__ = [
    # Shell utilities
    "run",
    "strip_ansi",
    "is_command_available",
    "ShellError",
    # Version utilities
    "parse_tag",
    "parse_version",
    "bump_version",
    "has_release_suffix",
    "add_release_suffix",
    "remove_tag_prefix",
    "TagMatch",
    "NO_MATCH",
    "BumpType",
    "VersionTuple",
    "RELEASE_SUFFIX",
    "TAG_PATTERN",
]
