"""Release stage resolution.

Maps the command names invoked for a build run to exactly one release
stage. The stage determines the publication status and the version
suffix policy applied by release_stage.versioning.
"""

from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType

from release_stage.exceptions import ConfigurationError

SNAPSHOT_TASK_NAME = "snapshot"
DEV_SNAPSHOT_TASK_NAME = "devSnapshot"
CANDIDATE_TASK_NAME = "candidate"
FINAL_TASK_NAME = "final"

STAGE_TASK_NAMES = (
    SNAPSHOT_TASK_NAME,
    DEV_SNAPSHOT_TASK_NAME,
    CANDIDATE_TASK_NAME,
    FINAL_TASK_NAME,
)

RELEASE_STAGE_PROPERTY = "release.stage"


class Stage(Enum):
    """Lifecycle phase of a release.

    The value is the qualifier shared with every module as the
    'release.stage' property.
    """

    FINAL = "final"
    CANDIDATE = "rc"
    SNAPSHOT = "SNAPSHOT"
    DEV = "dev"

    @property
    def status(self) -> str | None:
        """Publication status: 'release', 'candidate' or None."""
        return _STATUS.get(self)

    @property
    def qualifier(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return self.name.lower()


_STATUS = {
    Stage.FINAL: "release",
    Stage.CANDIDATE: "candidate",
}


def resolve_stage(invoked_commands: Iterable[str]) -> Stage:
    """Pick the release stage for a build invocation.

    Args:
        invoked_commands: Command names requested for the current run

    Returns:
        FINAL, CANDIDATE or SNAPSHOT when the matching command was
        invoked, DEV otherwise (including an explicit devSnapshot)

    Raises:
        ConfigurationError: If more than one stage command was invoked

    Examples:
        >>> resolve_stage(['clean', 'final'])
        <Stage.FINAL: 'final'>
        >>> resolve_stage(['build'])
        <Stage.DEV: 'dev'>
    """
    commands = set(invoked_commands)
    requested = [name for name in STAGE_TASK_NAMES if name in commands]

    if len(requested) > 1:
        raise ConfigurationError(
            "Only one of snapshot, devSnapshot, candidate, or final can be specified.",
            details=f"Invoked stage commands: {', '.join(requested)}",
            fix_hint="Run the build with a single release stage command",
        )

    if FINAL_TASK_NAME in commands:
        return Stage.FINAL
    elif CANDIDATE_TASK_NAME in commands:
        return Stage.CANDIDATE
    elif SNAPSHOT_TASK_NAME in commands:
        return Stage.SNAPSHOT
    else:
        return Stage.DEV


def stage_properties(stage: Stage) -> Mapping[str, str]:
    """Read-only properties every module of the build receives."""
    return MappingProxyType({RELEASE_STAGE_PROPERTY: stage.qualifier})


__all__ = [
    "Stage",
    "resolve_stage",
    "stage_properties",
    "STAGE_TASK_NAMES",
    "SNAPSHOT_TASK_NAME",
    "DEV_SNAPSHOT_TASK_NAME",
    "CANDIDATE_TASK_NAME",
    "FINAL_TASK_NAME",
    "RELEASE_STAGE_PROPERTY",
]
