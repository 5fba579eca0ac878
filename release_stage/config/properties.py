"""Key/value build property handling.

Build tools pass overrides as flat properties (``-Prelease.useLastTag=true``
on the command line, or lines in ``gradle.properties``). This module parses
them and maps the ones release-stage understands onto the nested
ReleaseConfig structure.
"""

from pathlib import Path
from typing import Any

from release_stage.exceptions import ConfigurationError

# property name -> (config section, field, is boolean)
PROPERTY_MAP: dict[str, tuple[str, str, bool]] = {
    "release.version": ("release", "version", False),
    "release.useLastTag": ("release", "use_last_tag", True),
    "release.scope": ("release", "scope", False),
    "githubToken": ("docs", "github_token", False),
}

_TRUE_VALUES = {"true", "yes", "1"}
_FALSE_VALUES = {"false", "no", "0"}


def parse_bool(key: str, value: str) -> bool:
    """Parse a boolean property value.

    Raises:
        ConfigurationError: If the value is not a recognized boolean
    """
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"Invalid boolean for property '{key}': '{value}'",
        fix_hint=f"Use {key}=true or {key}=false",
    )


def parse_properties(text: str) -> dict[str, str]:
    """Parse Java-style properties text.

    Supports '#' and '!' comments, '=' or ':' separators and blank lines.
    Line continuations are not supported.
    """
    properties: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line[0] in "#!":
            continue
        separators = [i for i in (line.find("="), line.find(":")) if i >= 0]
        if separators:
            idx = min(separators)
            key, value = line[:idx].strip(), line[idx + 1 :].strip()
        else:
            key, value = line, ""
        if key:
            properties[key] = value
    return properties


def parse_assignments(assignments: list[str]) -> dict[str, str]:
    """Parse KEY=VALUE command-line assignments.

    Raises:
        ConfigurationError: If an assignment has no '=' or an empty key
    """
    properties: dict[str, str] = {}
    for assignment in assignments:
        key, sep, value = assignment.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigurationError(
                f"Invalid property assignment: '{assignment}'",
                fix_hint="Use -P key=value, e.g. -P release.useLastTag=true",
            )
        properties[key] = value.strip()
    return properties


def read_properties_file(path: Path) -> dict[str, str]:
    """Read a properties file; a missing file yields no properties."""
    if not path.is_file():
        return {}
    try:
        return parse_properties(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read {path}",
            details=str(e),
        ) from e


def properties_to_overrides(properties: dict[str, str]) -> dict[str, Any]:
    """Map known properties onto nested config data.

    Unknown properties are ignored; they belong to the build tool.

    Examples:
        >>> properties_to_overrides({'release.useLastTag': 'true'})
        {'release': {'use_last_tag': True}}
    """
    overrides: dict[str, Any] = {}
    for key, value in properties.items():
        target = PROPERTY_MAP.get(key)
        if target is None:
            continue
        section, field, is_bool = target
        parsed: Any = parse_bool(key, value) if is_bool else value
        overrides.setdefault(section, {})[field] = parsed
    return overrides


def merge_config_data(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Merge section dictionaries; override values win."""
    merged = dict(base)
    for section, values in overrides.items():
        existing = merged.get(section)
        if isinstance(existing, dict) and isinstance(values, dict):
            merged[section] = {**existing, **values}
        else:
            merged[section] = values
    return merged
