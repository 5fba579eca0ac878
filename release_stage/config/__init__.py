"""Configuration management for release-stage."""

from release_stage.config.loader import load_config
from release_stage.config.models import (
    DocsConfig,
    LicenseConfig,
    ProjectConfig,
    PublishingConfig,
    ReleaseConfig,
    ReleaseSettings,
)

__all__ = [
    "load_config",
    "ReleaseConfig",
    "ProjectConfig",
    "ReleaseSettings",
    "PublishingConfig",
    "LicenseConfig",
    "DocsConfig",
]
