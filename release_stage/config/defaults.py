"""Default configuration generation.

Writes a commented release_stage.yml built from the model defaults, with
the project name taken from the root directory.
"""

from pathlib import Path
from typing import Any

import yaml

from release_stage.config.models import ReleaseConfig
from release_stage.exceptions import ConfigurationError

SECTIONS = [
    ("project", "Project Layout"),
    ("release", "Version Overrides (release.* properties take precedence)"),
    ("publishing", "Artifact Publishing"),
    ("license", "License Header Checks"),
    ("docs", "Asciidoctor & GitHub Pages"),
]


def generate_default_config(project_root: Path) -> dict[str, Any]:
    """Build default config data for a project.

    Args:
        project_root: Project root directory

    Returns:
        Config dictionary ready for YAML serialization
    """
    # Model defaults only, RELEASE_* variables are not read
    config = ReleaseConfig.model_construct().model_dump(mode="json")
    config["project"]["name"] = project_root.resolve().name
    # Credentials belong in gradle.properties or the environment
    config["docs"].pop("github_token", None)
    return config


def write_default_config(output_path: Path, project_root: Path | None = None) -> None:
    """Write a default configuration file with section comments.

    Args:
        output_path: Destination path
        project_root: Project root (defaults to cwd)

    Raises:
        ConfigurationError: If the file cannot be written
    """
    if project_root is None:
        project_root = Path.cwd()
    config = generate_default_config(project_root)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            f.write("# release-stage configuration\n")
            f.write("# Generated by 'release-stage init-config'\n\n")

            for section_key, section_title in SECTIONS:
                f.write(f"# {'-' * 76}\n")
                f.write(f"# {section_title}\n")
                f.write(f"# {'-' * 76}\n")
                yaml_str = yaml.safe_dump(
                    {section_key: config[section_key]},
                    default_flow_style=False,
                    sort_keys=False,
                    allow_unicode=True,
                )
                f.write(yaml_str)
                f.write("\n")

    except PermissionError:
        raise ConfigurationError(
            f"Permission denied writing config to {output_path}",
            fix_hint="Check file permissions or use a different location",
        ) from None
    except OSError as e:
        raise ConfigurationError(
            f"Failed to write config to {output_path}",
            details=str(e),
            fix_hint="Check disk space and path validity",
        ) from e
