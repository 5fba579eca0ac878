"""Git queries and remote detection.

All operations are read-only and run git through
release_stage.utils.shell.run().
"""

from release_stage.git.queries import (
    count_commits,
    get_latest_tag,
    get_remote_urls,
    get_short_sha,
    get_tags,
    has_commits,
    is_git_repository,
)
from release_stage.git.remote import (
    NO_REMOTE,
    GithubRemote,
    find_github_remote,
    parse_github_remote,
)

__all__ = [
    # Query operations
    "is_git_repository",
    "has_commits",
    "get_remote_urls",
    "get_tags",
    "get_latest_tag",
    "get_short_sha",
    "count_commits",
    # Remote detection
    "GithubRemote",
    "NO_REMOTE",
    "parse_github_remote",
    "find_github_remote",
]
