"""Tests for git query operations against temporary repositories."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from release_stage.exceptions import GitError
from release_stage.git.queries import (
    count_commits,
    get_latest_tag,
    get_remote_urls,
    get_short_sha,
    get_tags,
    has_commits,
    is_git_repository,
)
from release_stage.utils.shell import ShellError


class TestRepositoryChecks:
    def test_git_repository(self, git_repo: Path) -> None:
        assert is_git_repository(git_repo)
        assert has_commits(git_repo)

    def test_plain_directory(self, project_dir: Path) -> None:
        assert not is_git_repository(project_dir)

    def test_missing_directory(self, temp_dir: Path) -> None:
        assert not is_git_repository(temp_dir / "missing")

    def test_repository_without_commits(self, project_dir: Path, git: Callable[..., str]) -> None:
        git(project_dir, "init")
        assert is_git_repository(project_dir)
        assert not has_commits(project_dir)
        assert get_short_sha(cwd=project_dir) is None
        assert get_latest_tag(cwd=project_dir) is None


class TestTags:
    def test_no_tags(self, git_repo: Path) -> None:
        assert get_tags(cwd=git_repo) == []
        assert get_latest_tag(cwd=git_repo) is None

    def test_tags_sorted_by_version(
        self, git_repo: Path, git: Callable[..., str], commit: Callable[[Path, str], str]
    ) -> None:
        git(git_repo, "tag", "v0.10.0")
        commit(git_repo, "next")
        git(git_repo, "tag", "v0.9.0")
        assert get_tags(cwd=git_repo) == ["v0.9.0", "v0.10.0"]
        assert get_latest_tag(cwd=git_repo) == "v0.9.0"

    def test_tags_pointing_at_head(
        self, git_repo: Path, git: Callable[..., str], commit: Callable[[Path, str], str]
    ) -> None:
        git(git_repo, "tag", "v0.1.0")
        commit(git_repo, "next")
        git(git_repo, "tag", "v0.2.0-rc.1")
        assert get_tags(cwd=git_repo, points_at="HEAD") == ["v0.2.0-rc.1"]
        assert get_tags(cwd=git_repo) == ["v0.1.0", "v0.2.0-rc.1"]


class TestCommits:
    def test_count_all_commits(
        self, git_repo: Path, commit: Callable[[Path, str], str]
    ) -> None:
        commit(git_repo, "second")
        assert count_commits(cwd=git_repo) == 2

    def test_count_since_tag(
        self, git_repo: Path, git: Callable[..., str], commit: Callable[[Path, str], str]
    ) -> None:
        git(git_repo, "tag", "v1.0.0")
        assert count_commits("v1.0.0", cwd=git_repo) == 0
        commit(git_repo, "after tag")
        assert count_commits("v1.0.0", cwd=git_repo) == 1

    def test_unknown_ref(self, git_repo: Path) -> None:
        with pytest.raises(GitError):
            count_commits("does-not-exist", cwd=git_repo)


class TestRemotes:
    def test_remote_urls(self, github_repo: Path, git: Callable[..., str]) -> None:
        git(github_repo, "remote", "add", "backup", "https://gitlab.com/acme/demo.git")
        assert get_remote_urls(cwd=github_repo) == [
            ("backup", "https://gitlab.com/acme/demo.git"),
            ("origin", "git@github.com:spring-gradle-plugins/gradle-project-plugin.git"),
        ]

    def test_not_a_repository(self, project_dir: Path) -> None:
        with pytest.raises(GitError):
            get_remote_urls(cwd=project_dir)


class TestTimeouts:
    def test_unanswered_query_raises_git_error(self, git_repo: Path) -> None:
        """A hung git process becomes a GitError instead of a traceback."""
        hung = ShellError("git describe --tags --abbrev=0", -1, "", "", timeout=30)
        with patch("release_stage.git.queries.run", side_effect=hung):
            with pytest.raises(GitError) as exc_info:
                get_latest_tag(cwd=git_repo)
        assert exc_info.value.exit_code == 4
        assert "timed out after 30s" in str(exc_info.value)
