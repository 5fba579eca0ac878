"""Configuration file loading.

release_stage.yml (or .toml) is optional. Whatever it sets is overlaid
with build properties: gradle.properties in the root project first, then
-P assignments from the command line.
"""

import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from release_stage.config.models import ReleaseConfig
from release_stage.config.properties import (
    merge_config_data,
    properties_to_overrides,
    read_properties_file,
)
from release_stage.exceptions import ConfigurationError
from release_stage.log import get_logger

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = get_logger("config")

SEARCH_PATHS = [
    "config/release_stage.yml",
    "config/release_stage.yaml",
    "release_stage.yml",
    "release_stage.yaml",
    "config/release_stage.toml",
    "release_stage.toml",
]

GRADLE_PROPERTIES = "gradle.properties"

YAML_SUFFIXES = (".yml", ".yaml")


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse a YAML or TOML config file, chosen by extension.

    Args:
        path: Config file path

    Returns:
        Top-level mapping ({} for an empty YAML file)

    Raises:
        ConfigurationError: If the file is missing, unsupported or malformed
    """
    if path.suffix not in (*YAML_SUFFIXES, ".toml"):
        raise ConfigurationError(
            f"Unsupported config format: {path.suffix or path.name}",
            fix_hint="Use .yml, .yaml, or .toml extension",
        )

    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        raise ConfigurationError(
            f"Configuration file not found: {path}",
            fix_hint="Create the file or use 'release-stage init-config' to generate one",
        ) from None

    kind = "YAML" if path.suffix in YAML_SUFFIXES else "TOML"
    try:
        if kind == "YAML":
            data = yaml.safe_load(raw)
        else:
            data = tomllib.loads(raw.decode("utf-8"))
    except (yaml.YAMLError, tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ConfigurationError(
            f"Invalid {kind} in {path}",
            details=str(e),
            fix_hint=f"Check {kind} syntax at the indicated line",
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration in {path}",
            details=f"Expected a mapping at the top level, got {type(data).__name__}",
        )
    return data


def find_config_file(project_root: Path) -> Path | None:
    """Return the first existing file from SEARCH_PATHS."""
    for search_path in SEARCH_PATHS:
        candidate = project_root / search_path
        if candidate.is_file():
            return candidate
    return None


def load_config(
    path: Path | None = None,
    project_root: Path | None = None,
    properties: dict[str, str] | None = None,
) -> ReleaseConfig:
    """Load release configuration.

    Without an explicit path the SEARCH_PATHS are tried and model
    defaults are used when none exists. An explicit path must exist.

    Precedence, highest first:
    1. ``properties`` (command-line -P assignments)
    2. gradle.properties in the project root
    3. The config file
    4. RELEASE_* environment variables
    5. Model defaults

    Args:
        path: Explicit path to config file, relative to project_root
        project_root: Project root directory (defaults to cwd)
        properties: Build properties from the command line

    Returns:
        Validated ReleaseConfig instance

    Raises:
        ConfigurationError: If the file cannot be read or a value is invalid
    """
    if project_root is None:
        project_root = Path.cwd()

    if path:
        config_path: Path | None = path if path.is_absolute() else project_root / path
    else:
        config_path = find_config_file(project_root)

    data: dict[str, Any] = {}
    if config_path is not None:
        logger.debug("Loading configuration from %s", config_path)
        data = read_config_file(config_path)

    for overrides in (
        read_properties_file(project_root / GRADLE_PROPERTIES),
        properties or {},
    ):
        data = merge_config_data(data, properties_to_overrides(overrides))

    try:
        return ReleaseConfig(**data)
    except ValidationError as e:
        source = config_path if config_path is not None else "build properties"
        raise ConfigurationError(
            f"Invalid configuration in {source}",
            details=str(e),
            fix_hint="Check the configuration values match expected types",
        ) from e
