"""GitHub remote detection.

Remote URLs are formatted like one of these:
    https://github.com/spring-gradle-plugins/spring-project-plugin.git
    git@github.com:spring-gradle-plugins/spring-release-plugin.git

A project without a GitHub remote is not an error: release related
features are simply left disabled.
"""

import re
from dataclasses import dataclass
from pathlib import Path

from release_stage.git.queries import get_remote_urls, is_git_repository
from release_stage.log import get_logger
from release_stage.utils.shell import is_command_available

logger = get_logger("git")

GITHUB_REMOTE_PATTERN = re.compile(r"github\.com[/:]([^/]+)/(.+)\.git")


@dataclass(frozen=True)
class GithubRemote:
    """Outcome of matching a remote URL against GITHUB_REMOTE_PATTERN."""

    matched: bool
    org: str = ""
    project: str = ""

    @property
    def website_url(self) -> str:
        return f"https://github.com/{self.org}/{self.project}"

    @property
    def vcs_url(self) -> str:
        return f"https://github.com/{self.org}/{self.project}.git"

    @property
    def issue_tracker_url(self) -> str:
        return f"https://github.com/{self.org}/{self.project}/issues"


NO_REMOTE = GithubRemote(matched=False)


def parse_github_remote(url: str) -> GithubRemote:
    """Extract organization and project from a GitHub remote URL.

    Examples:
        >>> parse_github_remote('git@github.com:spring/demo.git').org
        'spring'
        >>> parse_github_remote('https://gitlab.com/a/b.git').matched
        False
    """
    match = GITHUB_REMOTE_PATTERN.search(url.strip())
    if not match:
        return NO_REMOTE
    return GithubRemote(matched=True, org=match.group(1), project=match.group(2))


def find_github_remote(project_root: Path) -> GithubRemote:
    """Return the first configured GitHub remote of the repository.

    Returns NO_REMOTE (with a warning) when git is unavailable, the
    directory is not a repository, or no remote points at GitHub.
    """
    if not is_command_available("git") or not is_git_repository(project_root):
        logger.warning("No git repository found, not enabling release related tasks")
        return NO_REMOTE

    for name, url in get_remote_urls(cwd=project_root):
        remote = parse_github_remote(url)
        if remote.matched:
            logger.debug("Using remote '%s' (%s/%s)", name, remote.org, remote.project)
            return remote

    logger.warning("No git remote configured, not enabling release related tasks")
    return NO_REMOTE
