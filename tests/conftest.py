"""Pytest fixtures for release-stage tests.

Provides common fixtures for:
- Temporary project directories
- Git repository setup (with and without a GitHub remote)
- Multi-module Gradle project layouts
"""

import os
import subprocess
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import yaml


def run_git(cwd: Path, *args: str) -> str:
    """Run a git command in cwd and return its stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture(autouse=True)
def clean_env() -> Generator[None, None, None]:
    """Temporarily clean environment variables.

    Removes RELEASE_* environment variables during test.
    """
    old_env = {}
    for key in list(os.environ.keys()):
        if key.startswith("RELEASE_"):
            old_env[key] = os.environ.pop(key)

    yield

    os.environ.update(old_env)


@pytest.fixture
def temp_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary directory for tests.

    Yields:
        Path to temporary directory
    """
    yield tmp_path


@pytest.fixture
def project_dir(temp_dir: Path) -> Path:
    """Create a temporary project directory.

    Returns:
        Path to project directory
    """
    project = temp_dir / "demo-project"
    project.mkdir()
    return project


@pytest.fixture
def git_repo(project_dir: Path) -> Path:
    """Create a git repository with one commit in the project directory.

    Returns:
        Path to git repository
    """
    run_git(project_dir, "init")
    run_git(project_dir, "config", "user.email", "test@test.com")
    run_git(project_dir, "config", "user.name", "Test User")
    run_git(project_dir, "config", "commit.gpgsign", "false")
    run_git(project_dir, "config", "tag.gpgsign", "false")

    (project_dir / ".gitignore").write_text("build/\n")
    run_git(project_dir, "add", ".")
    run_git(project_dir, "commit", "-m", "initial commit")
    return project_dir


@pytest.fixture
def github_repo(git_repo: Path) -> Path:
    """Git repository with an SSH GitHub remote named origin.

    Returns:
        Path to git repository
    """
    run_git(
        git_repo,
        "remote",
        "add",
        "origin",
        "git@github.com:spring-gradle-plugins/gradle-project-plugin.git",
    )
    return git_repo


@pytest.fixture
def commit() -> Callable[[Path, str], str]:
    """Return a helper that adds a commit and returns its short hash."""

    def _commit(repo: Path, message: str) -> str:
        marker = repo / "CHANGES.txt"
        with open(marker, "a", encoding="utf-8") as f:
            f.write(f"{message}\n")
        run_git(repo, "add", "CHANGES.txt")
        run_git(repo, "commit", "-m", message)
        return run_git(repo, "rev-parse", "--short", "HEAD")

    return _commit


@pytest.fixture
def git() -> Callable[..., str]:
    """Return a helper running git in a directory: git(cwd, *args)."""
    return run_git


@pytest.fixture
def multi_module_project(github_repo: Path) -> Path:
    """GitHub-hosted Gradle build with two subprojects.

    Returns:
        Path to root project
    """
    (github_repo / "settings.gradle").write_text(
        "rootProject.name = 'spring-demo'\n"
        "include 'core', ':web'\n"
        "// include 'disabled'\n"
        "includeBuild 'build-logic'\n"
    )
    for module in ("core", "web"):
        (github_repo / module / "src" / "main" / "java").mkdir(parents=True)
    return github_repo


@pytest.fixture
def release_config(project_dir: Path) -> Path:
    """Create a release configuration file.

    Returns:
        Path to config file
    """
    config = {
        "project": {"name": "configured-name"},
        "release": {"scope": "patch", "initial_version": "1.0.0"},
        "publishing": {"repo": "libs", "user_org": "acme"},
    }

    config_dir = project_dir / "config"
    config_dir.mkdir()
    config_path = config_dir / "release_stage.yml"
    config_path.write_text(yaml.safe_dump(config))

    return config_path
