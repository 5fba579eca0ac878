"""Version computation for a resolved release stage.

normalize_version() applies the suffix policy of a stage to an explicit
version, the last tag, or a base version:

    final                   0.1.0.RELEASE
    candidate               0.1.0-rc.2
    candidate + useLastTag  <last tag>.RELEASE
    snapshot                0.1.0-SNAPSHOT
    dev                     0.1.0-dev.5.a1b2c3d

infer_version() gathers the inputs (base version, candidate and dev
counters, short hash) from the repository state.
"""

from dataclasses import dataclass, field
from pathlib import Path

from release_stage.config.models import ReleaseSettings
from release_stage.exceptions import ConfigurationError
from release_stage.git import queries as git_queries
from release_stage.log import get_logger
from release_stage.stage import Stage
from release_stage.utils.version import (
    add_release_suffix,
    bump_version,
    parse_tag,
    remove_tag_prefix,
)

logger = get_logger("versioning")


@dataclass(frozen=True)
class RepositoryState:
    """Facts read from git once per build invocation.

    Attributes:
        tags: All tags, sorted by version
        last_tag: Most recent tag reachable from HEAD
        short_hash: Abbreviated HEAD hash (None without commits)
        commits_since_tag: Commits after last_tag (all commits when untagged)
        head_tags: Tags pointing at HEAD, sorted by version
    """

    tags: tuple[str, ...] = field(default_factory=tuple)
    last_tag: str | None = None
    short_hash: str | None = None
    commits_since_tag: int = 0
    head_tags: tuple[str, ...] = field(default_factory=tuple)


EMPTY_STATE = RepositoryState()


def requires_release_suffix(stage: Stage, use_last_tag: bool = False) -> bool:
    """Final releases, and candidates built from the last tag, end in '.RELEASE'."""
    return stage is Stage.FINAL or (stage is Stage.CANDIDATE and use_last_tag)


def apply_suffix_policy(version: str, stage: Stage, use_last_tag: bool = False) -> str:
    """Append '.RELEASE' when the stage requires it and it is missing."""
    if requires_release_suffix(stage, use_last_tag):
        return add_release_suffix(version)
    return version


def normalize_version(
    explicit_version: str | None,
    stage: Stage,
    last_tag: str | None = None,
    *,
    use_last_tag: bool = False,
    base_version: str | None = None,
    candidate_number: int = 1,
    dev_number: int = 0,
    short_hash: str | None = None,
) -> str:
    """Compute the final version string for a stage.

    Args:
        explicit_version: Externally supplied version; wins over everything
        stage: Resolved release stage
        last_tag: Most recent version control tag
        use_last_tag: Use last_tag verbatim instead of computing a version
        base_version: MAJOR.MINOR.PATCH the stage suffix is appended to
        candidate_number: N in '-rc.N'
        dev_number: N in '-dev.N.<hash>'
        short_hash: Abbreviated commit hash for dev versions

    Returns:
        Version string

    Raises:
        ConfigurationError: If use_last_tag is set without a version tag,
            or no base version is available

    Examples:
        >>> normalize_version('0.2.0.RELEASE', Stage.FINAL)
        '0.2.0.RELEASE'
        >>> normalize_version(None, Stage.FINAL, base_version='0.1.0')
        '0.1.0.RELEASE'
        >>> normalize_version(None, Stage.FINAL, 'v0.1.0.RELEASE', use_last_tag=True)
        '0.1.0.RELEASE'
    """
    if explicit_version:
        return apply_suffix_policy(explicit_version.strip(), stage, use_last_tag)

    if use_last_tag:
        tag = parse_tag(last_tag)
        if not tag.matched:
            raise ConfigurationError(
                "release.useLastTag is set but no version tag was found",
                details=f"Last tag: {last_tag!r}" if last_tag else "The repository has no tags",
                fix_hint="Tag the current commit (e.g. v0.1.0.RELEASE) or drop release.useLastTag",
            )
        return apply_suffix_policy(remove_tag_prefix(last_tag or ""), stage, use_last_tag)

    if not base_version:
        raise ConfigurationError(
            "Unable to determine a version",
            details="No explicit release.version, no version tag and no initial version",
            fix_hint="Set release.version, tag the repository, or configure release.initial_version",
        )

    parsed_base = parse_tag(base_version)
    base = parsed_base.core if parsed_base.matched else base_version
    if stage is Stage.FINAL:
        return add_release_suffix(base)
    elif stage is Stage.CANDIDATE:
        return f"{base}-rc.{candidate_number}"
    elif stage is Stage.SNAPSHOT:
        return f"{base}-SNAPSHOT"
    else:
        if short_hash:
            return f"{base}-dev.{dev_number}.{short_hash}"
        return f"{base}-dev.{dev_number}"


def infer_base_version(
    tags: tuple[str, ...] | list[str],
    scope: str = "minor",
    initial_version: str | None = "0.1.0",
) -> str | None:
    """Version the next build works towards.

    A pre-release tag above the highest release (e.g. v1.0.0-rc.1 after
    v0.9.0) means that line is still open: its MAJOR.MINOR.PATCH is reused
    unchanged. Otherwise the highest release tag is bumped by scope.

    Returns:
        Base version, initial_version when there are no version tags
    """
    versions = [match for match in map(parse_tag, tags) if match.matched]
    latest_release = max(
        (match for match in versions if match.is_release),
        key=lambda match: match.version_tuple,
        default=None,
    )
    pending = [
        match
        for match in versions
        if not match.is_release
        and (latest_release is None or match.version_tuple > latest_release.version_tuple)
    ]
    if pending:
        return max(pending, key=lambda match: match.version_tuple).core
    if latest_release is None:
        return initial_version
    return bump_version(latest_release.core, scope)


def next_candidate_number(tags: tuple[str, ...] | list[str], base_version: str) -> int:
    """One more than the highest existing '-rc.N' tag for base_version."""
    base = parse_tag(base_version)
    numbers = [
        match.candidate_number
        for match in map(parse_tag, tags)
        if match.matched
        and match.candidate_number is not None
        and match.version_tuple == base.version_tuple
    ]
    return max(numbers, default=0) + 1


def read_repository_state(project_root: Path) -> RepositoryState:
    """Read tags, last tag, HEAD hash and commit count from git.

    A directory that is not a git repository, or a repository without
    commits, yields an (almost) empty state.
    """
    if not git_queries.is_git_repository(project_root):
        return EMPTY_STATE

    tags = tuple(git_queries.get_tags(cwd=project_root))
    if not git_queries.has_commits(cwd=project_root):
        return RepositoryState(tags=tags)

    last_tag = git_queries.get_latest_tag(cwd=project_root)
    return RepositoryState(
        tags=tags,
        last_tag=last_tag,
        short_hash=git_queries.get_short_sha(cwd=project_root),
        commits_since_tag=git_queries.count_commits(since=last_tag, cwd=project_root),
        head_tags=tuple(git_queries.get_tags(cwd=project_root, points_at="HEAD")),
    )


def select_last_tag(
    state: RepositoryState, stage: Stage, use_last_tag: bool = False
) -> str | None:
    """The tag a useLastTag build takes its version from.

    Stages that publish a '.RELEASE' version prefer the highest release tag
    on HEAD, so promoting a candidate by tagging its commit again picks the
    release tag. Otherwise, or without one, the most recent tag is used.
    """
    if requires_release_suffix(stage, use_last_tag):
        releases = [tag for tag in state.head_tags if parse_tag(tag).is_release]
        if releases:
            return max(releases, key=lambda tag: parse_tag(tag).version_tuple)
    return state.last_tag


def infer_version(settings: ReleaseSettings, stage: Stage, state: RepositoryState) -> str:
    """Compute the version for a stage from settings and repository state.

    Raises:
        ConfigurationError: If no version can be determined
    """
    base_version = infer_base_version(
        state.tags, scope=settings.scope, initial_version=settings.initial_version
    )
    candidate_number = next_candidate_number(state.tags, base_version) if base_version else 1
    last_tag = select_last_tag(state, stage, settings.use_last_tag)
    logger.debug(
        "Version inputs: stage=%s base=%s last_tag=%s rc=%d dev=%d hash=%s",
        stage.label,
        base_version,
        last_tag,
        candidate_number,
        state.commits_since_tag,
        state.short_hash,
    )
    return normalize_version(
        settings.version,
        stage,
        last_tag,
        use_last_tag=settings.use_last_tag,
        base_version=base_version,
        candidate_number=candidate_number,
        dev_number=state.commits_since_tag,
        short_hash=state.short_hash,
    )
