"""Build plan: which plugins each module gets, and with which settings.

A build plan is computed once per build invocation and is immutable. It
carries the resolved stage and version together with one ModulePlan per
module, so every consumer reads the same values without shared state.

Java, publication, license and docs configuration applies to leaf
modules: every subproject, or the root of a single-module build.
Release features (version, publishing metadata, the release.stage
property) require a GitHub remote and are otherwise left disabled.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from release_stage.config.models import DocsConfig, LicenseConfig, ReleaseConfig
from release_stage.git.remote import NO_REMOTE, GithubRemote, find_github_remote
from release_stage.license import license_header_path
from release_stage.log import get_logger
from release_stage.stage import Stage, resolve_stage, stage_properties
from release_stage.versioning import RepositoryState, infer_version, read_repository_state

logger = get_logger("project")

SETTINGS_FILES = ("settings.gradle", "settings.gradle.kts")

_INCLUDE = re.compile(r"^include(?:Flat)?\b")
_QUOTED = re.compile(r"['\"]([^'\"]+)['\"]")
_ROOT_NAME = re.compile(r"rootProject\.name\s*=\s*['\"]([^'\"]+)['\"]")


@dataclass(frozen=True)
class Module:
    """A build module.

    Attributes:
        name: Gradle-style project path without the leading ':' ('' for root)
        path: Directory relative to the root project
    """

    name: str
    path: Path

    @property
    def is_root(self) -> bool:
        return self.name == ""


@dataclass(frozen=True)
class PublishingPlan:
    repo: str
    user_org: str
    website_url: str
    vcs_url: str
    issue_tracker_url: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "repo": self.repo,
            "userOrg": self.user_org,
            "websiteUrl": self.website_url,
            "vcsUrl": self.vcs_url,
            "issueTrackerUrl": self.issue_tracker_url,
        }


@dataclass(frozen=True)
class LicensePlan:
    header: Path
    strict_check: bool
    mapping: Mapping[str, str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "header": str(self.header),
            "strictCheck": self.strict_check,
            "mapping": dict(self.mapping),
        }


@dataclass(frozen=True)
class DocsPlan:
    """Asciidoctor rendering plus GitHub Pages deployment of its HTML output."""

    asciidoctorj_version: str
    attributes: Mapping[str, str]
    pages_from: Path
    repo_uri: str | None
    credentials_username: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "asciidoctorjVersion": self.asciidoctorj_version,
            "attributes": dict(self.attributes),
            "pagesFrom": str(self.pages_from),
            "repoUri": self.repo_uri,
            "credentials": {"username": self.credentials_username, "password": ""},
        }


@dataclass(frozen=True)
class ModulePlan:
    module: Module
    java: bool
    publishing: PublishingPlan | None = None
    license: LicensePlan | None = None
    docs: DocsPlan | None = None
    properties: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def plugins(self) -> list[str]:
        """Names of the plugin groups applied to the module."""
        plugins = []
        if self.java:
            plugins.extend(["java", "maven-publish", "javadoc-jar", "source-jar", "info", "contacts"])
        if self.license is not None:
            plugins.append("license")
        if self.publishing is not None:
            plugins.append("bintray")
        if self.docs is not None:
            plugins.extend(["asciidoctor", "github-pages"])
        return plugins

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.module.name,
            "path": self.module.path.as_posix(),
            "root": self.module.is_root,
            "plugins": self.plugins,
            "publishing": self.publishing.to_dict() if self.publishing else None,
            "license": self.license.to_dict() if self.license else None,
            "docs": self.docs.to_dict() if self.docs else None,
            "properties": dict(self.properties),
        }


@dataclass(frozen=True)
class BuildPlan:
    """Stage, version and per-module configuration for one build invocation."""

    project_name: str
    stage: Stage
    version: str | None
    remote: GithubRemote
    modules: tuple[ModulePlan, ...]

    @property
    def status(self) -> str | None:
        return self.stage.status

    @property
    def release_enabled(self) -> bool:
        return self.remote.matched

    def module(self, name: str) -> ModulePlan:
        for plan in self.modules:
            if plan.module.name == name:
                return plan
        raise KeyError(name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "project": self.project_name,
            "stage": self.stage.label,
            "status": self.status,
            "version": self.version,
            "releaseEnabled": self.release_enabled,
            "github": (
                {"org": self.remote.org, "project": self.remote.project}
                if self.remote.matched
                else None
            ),
            "modules": [plan.to_dict() for plan in self.modules],
        }


def parse_settings_includes(text: str) -> list[str]:
    """Extract included project paths from a Gradle settings script.

    Handles both 'include "a", ":b:c"' and 'include("a")' forms;
    includeBuild (composite builds) is not a subproject.

    Returns:
        Project paths without the leading ':', in declaration order
    """
    includes: list[str] = []
    for line in text.splitlines():
        stripped = line.split("//", 1)[0].strip()
        if not _INCLUDE.match(stripped):
            continue
        for name in _QUOTED.findall(stripped):
            name = name.strip().lstrip(":")
            if name and name not in includes:
                includes.append(name)
    return includes


def read_settings(project_root: Path) -> str:
    for filename in SETTINGS_FILES:
        settings = project_root / filename
        if settings.is_file():
            return settings.read_text(encoding="utf-8", errors="replace")
    return ""


def discover_modules(project_root: Path, config: ReleaseConfig) -> list[Module]:
    """List the root project followed by its subprojects.

    Subprojects come from config.project.modules when set, otherwise from
    the include statements of settings.gradle(.kts).
    """
    if config.project.modules is not None:
        names = [m.strip("/").replace("/", ":") for m in config.project.modules if m.strip("/")]
    else:
        names = parse_settings_includes(read_settings(project_root))

    modules = [Module(name="", path=Path("."))]
    modules.extend(Module(name=name, path=Path(*name.split(":"))) for name in names)
    return modules


def project_name(project_root: Path, config: ReleaseConfig) -> str:
    if config.project.name:
        return config.project.name
    match = _ROOT_NAME.search(read_settings(project_root))
    if match:
        return match.group(1)
    return project_root.resolve().name


def plan_license(project_root: Path, config: LicenseConfig) -> LicensePlan:
    return LicensePlan(
        header=license_header_path(project_root, config),
        strict_check=config.strict_check,
        mapping=MappingProxyType(dict(config.mapping)),
    )


def plan_docs(project_root: Path, config: DocsConfig, remote: GithubRemote) -> DocsPlan | None:
    """Docs are configured only when the asciidoc source directory exists."""
    if not (project_root / config.source_dir).is_dir():
        return None
    return DocsPlan(
        asciidoctorj_version=config.asciidoctorj_version,
        attributes=MappingProxyType(dict(config.attributes)),
        pages_from=project_root / config.output_dir / "html5",
        repo_uri=remote.vcs_url if remote.matched else None,
        credentials_username=config.github_token or "",
    )


def plan_build(
    project_root: Path,
    invoked_commands: Iterable[str],
    config: ReleaseConfig,
    state: RepositoryState | None = None,
    remote: GithubRemote | None = None,
) -> BuildPlan:
    """Compute the build plan for one invocation.

    Args:
        project_root: Root project directory
        invoked_commands: Command names requested for this run
        config: Loaded release configuration
        state: Repository state (read from git when None)
        remote: GitHub remote (detected when None)

    Returns:
        Immutable BuildPlan

    Raises:
        ConfigurationError: If stage commands conflict or no version can be
            determined for a release-enabled project
    """
    stage = resolve_stage(invoked_commands)
    if remote is None:
        remote = find_github_remote(project_root)

    version: str | None = None
    properties: Mapping[str, str] = MappingProxyType({})
    if remote.matched:
        if state is None:
            state = read_repository_state(project_root)
        version = infer_version(config.release, stage, state)
        properties = stage_properties(stage)

    modules = discover_modules(project_root, config)
    single_module = len(modules) == 1
    name = project_name(project_root, config)

    plans = []
    for module in modules:
        display_name = name if module.is_root else module.name
        if not module.is_root or single_module:
            logger.info("Project %s is being configured as a Java project", display_name)
            publishing = None
            if remote.matched:
                logger.info("Project %s is being configured to be published", display_name)
                publishing = PublishingPlan(
                    repo=config.publishing.repo,
                    user_org=config.publishing.user_org,
                    website_url=remote.website_url,
                    vcs_url=remote.vcs_url,
                    issue_tracker_url=remote.issue_tracker_url,
                )
            plans.append(
                ModulePlan(
                    module=module,
                    java=True,
                    publishing=publishing,
                    license=plan_license(project_root, config.license),
                    docs=plan_docs(project_root, config.docs, remote) if module.is_root else None,
                    properties=properties,
                )
            )
        else:
            plans.append(ModulePlan(module=module, java=False, properties=properties))

    return BuildPlan(
        project_name=name,
        stage=stage,
        version=version,
        remote=remote,
        modules=tuple(plans),
    )
