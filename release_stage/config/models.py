"""Pydantic v2 configuration models for release_stage.yml.

These models provide:
- Type-safe configuration loading
- Automatic validation
- Default values matching the Spring project conventions
- Environment variable override support
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from release_stage.utils.version import TAG_PATTERN


class ProjectConfig(BaseModel):
    """Project identification and layout."""

    name: str | None = Field(
        default=None,
        description="Project name (defaults to the root directory name)",
    )
    modules: list[str] | None = Field(
        default=None,
        description="Module paths; read from settings.gradle when unset",
    )


class ReleaseSettings(BaseModel):
    """Version overrides, mirroring the release.* build properties."""

    version: str | None = Field(
        default=None,
        description="Explicit version (release.version)",
    )
    use_last_tag: bool = Field(
        default=False,
        description="Reuse the most recent tag as the version (release.useLastTag)",
    )
    scope: Literal["major", "minor", "patch"] = Field(
        default="minor",
        description="Component bumped after the last release (release.scope)",
    )
    initial_version: str | None = Field(
        default="0.1.0",
        description="Base version when no release tag exists",
    )

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        if not v:
            return None
        if not TAG_PATTERN.match(v):
            raise ValueError(f"release version '{v}' is not a semantic version")
        return v

    @field_validator("initial_version")
    @classmethod
    def validate_initial_version(cls, v: str | None) -> str | None:
        if v is not None and not TAG_PATTERN.match(v):
            raise ValueError(f"initial_version '{v}' is not a semantic version")
        return v


class PublishingConfig(BaseModel):
    """Artifact repository metadata for published modules."""

    repo: str = Field(default="jars", description="Binary repository name")
    user_org: str = Field(default="spring", description="Repository organization")


class LicenseConfig(BaseModel):
    """License header check configuration."""

    header: str = Field(
        default="gradle/licenseHeader.txt",
        description="Header file, relative to the root project",
    )
    strict_check: bool = Field(default=True, description="Fail on header mismatch")
    mapping: dict[str, str] = Field(
        default_factory=lambda: {"kt": "JAVADOC_STYLE"},
        description="Extension to comment style mapping",
    )


class DocsConfig(BaseModel):
    """Asciidoctor and GitHub Pages configuration."""

    source_dir: str = Field(
        default="src/docs/asciidoc",
        description="Asciidoc sources; docs are only configured when present",
    )
    output_dir: str = Field(
        default="build/asciidoc",
        description="Asciidoctor output directory",
    )
    asciidoctorj_version: str = Field(default="1.5.4")
    attributes: dict[str, str] = Field(
        default_factory=lambda: {
            "source-highlighter": "coderay",
            "imagesdir": "images",
            "toc": "left",
            "icons": "font",
            "setanchors": "true",
            "idprefix": "",
            "idseparator": "-",
            "docinfo1": "true",
        },
        description="Asciidoctor attributes",
    )
    github_token: str | None = Field(
        default=None,
        description="GitHub Pages credentials user (githubToken property)",
    )


class ReleaseConfig(BaseSettings):
    """Root configuration model for release_stage.yml.

    Supports environment variable overrides with RELEASE_ prefix.
    Example: RELEASE_RELEASE__USE_LAST_TAG=true
    """

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    release: ReleaseSettings = Field(default_factory=ReleaseSettings)
    publishing: PublishingConfig = Field(default_factory=PublishingConfig)
    license: LicenseConfig = Field(default_factory=LicenseConfig)
    docs: DocsConfig = Field(default_factory=DocsConfig)

    model_config = {
        "env_prefix": "RELEASE_",
        "env_nested_delimiter": "__",
    }
