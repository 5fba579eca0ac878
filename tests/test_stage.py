"""Unit tests for release stage resolution.

Tests cover:
- Each stage command resolving to its stage
- The default dev stage (devSnapshot or no stage command)
- Conflicting stage commands
- Status and qualifier of each stage
"""

from itertools import combinations
from types import MappingProxyType

import pytest

from release_stage.exceptions import ConfigurationError
from release_stage.stage import (
    RELEASE_STAGE_PROPERTY,
    STAGE_TASK_NAMES,
    Stage,
    resolve_stage,
    stage_properties,
)


class TestResolveStage:
    """Tests for resolve_stage."""

    @pytest.mark.parametrize(
        ("command", "expected"),
        [
            ("final", Stage.FINAL),
            ("candidate", Stage.CANDIDATE),
            ("snapshot", Stage.SNAPSHOT),
            ("devSnapshot", Stage.DEV),
        ],
    )
    def test_single_stage_command(self, command: str, expected: Stage) -> None:
        """A single stage command resolves to its stage."""
        assert resolve_stage(["clean", "build", command]) is expected

    def test_no_stage_command_defaults_to_dev(self) -> None:
        """Builds without a stage command are dev builds."""
        assert resolve_stage(["clean", "build"]) is Stage.DEV

    def test_empty_invocation_defaults_to_dev(self) -> None:
        """An empty invocation is a dev build."""
        assert resolve_stage([]) is Stage.DEV

    def test_repeated_command_counts_once(self) -> None:
        """Repeating the same stage command is not a conflict."""
        assert resolve_stage(["final", "final"]) is Stage.FINAL

    @pytest.mark.parametrize("pair", list(combinations(STAGE_TASK_NAMES, 2)))
    def test_two_stage_commands_conflict(self, pair: tuple[str, str]) -> None:
        """Any two stage commands raise ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_stage(["build", *pair])
        assert "Only one of" in exc_info.value.message
        for name in pair:
            assert name in str(exc_info.value)

    def test_all_stage_commands_conflict(self) -> None:
        """All four stage commands together raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            resolve_stage(list(STAGE_TASK_NAMES))

    def test_conflict_exit_code(self) -> None:
        """Stage conflicts are configuration errors (exit code 2)."""
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_stage(["final", "candidate"])
        assert exc_info.value.exit_code == 2

    def test_command_names_are_case_sensitive(self) -> None:
        """'Final' is not the final command."""
        assert resolve_stage(["Final"]) is Stage.DEV


class TestStage:
    """Tests for Stage status and qualifiers."""

    def test_status(self) -> None:
        """Only final and candidate carry a publication status."""
        assert Stage.FINAL.status == "release"
        assert Stage.CANDIDATE.status == "candidate"
        assert Stage.SNAPSHOT.status is None
        assert Stage.DEV.status is None

    def test_qualifier(self) -> None:
        """Qualifiers match the release.stage property values."""
        assert [s.qualifier for s in Stage] == ["final", "rc", "SNAPSHOT", "dev"]

    def test_label(self) -> None:
        """Labels are lower-case stage names."""
        assert Stage.CANDIDATE.label == "candidate"


class TestStageProperties:
    """Tests for stage_properties."""

    def test_release_stage_property(self) -> None:
        """The qualifier is shared as release.stage."""
        assert stage_properties(Stage.CANDIDATE) == {RELEASE_STAGE_PROPERTY: "rc"}

    def test_properties_are_read_only(self) -> None:
        """The shared properties cannot be mutated."""
        properties = stage_properties(Stage.FINAL)
        assert isinstance(properties, MappingProxyType)
        with pytest.raises(TypeError):
            properties["release.stage"] = "dev"  # type: ignore[index]
