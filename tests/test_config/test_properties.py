"""Tests for build property parsing and mapping."""

from pathlib import Path

import pytest

from release_stage.config.properties import (
    merge_config_data,
    parse_assignments,
    parse_bool,
    parse_properties,
    properties_to_overrides,
    read_properties_file,
)
from release_stage.exceptions import ConfigurationError


class TestParseProperties:
    """Tests for parse_properties."""

    def test_separators_and_comments(self) -> None:
        text = (
            "# comment\n"
            "! another comment\n"
            "\n"
            "release.useLastTag=true\n"
            "githubToken : abc123\n"
            "org.gradle.jvmargs=-Xmx1g -Dfile.encoding=UTF-8\n"
            "flag\n"
        )
        assert parse_properties(text) == {
            "release.useLastTag": "true",
            "githubToken": "abc123",
            "org.gradle.jvmargs": "-Xmx1g -Dfile.encoding=UTF-8",
            "flag": "",
        }

    def test_first_separator_wins(self) -> None:
        """Values may contain separators."""
        assert parse_properties("url=https://repo.spring.io") == {"url": "https://repo.spring.io"}


class TestParseAssignments:
    """Tests for parse_assignments."""

    def test_assignments(self) -> None:
        result = parse_assignments(["release.version=1.0.0.RELEASE", "release.useLastTag = true"])
        assert result == {"release.version": "1.0.0.RELEASE", "release.useLastTag": "true"}

    @pytest.mark.parametrize("assignment", ["release.useLastTag", "=true"])
    def test_invalid_assignment(self, assignment: str) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_assignments([assignment])
        assert assignment in exc_info.value.message


class TestParseBool:
    """Tests for parse_bool."""

    @pytest.mark.parametrize(("value", "expected"), [("true", True), ("YES", True), ("0", False)])
    def test_values(self, value: str, expected: bool) -> None:
        assert parse_bool("release.useLastTag", value) is expected

    def test_invalid(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_bool("release.useLastTag", "maybe")
        assert exc_info.value.exit_code == 2


class TestPropertiesToOverrides:
    """Tests for properties_to_overrides."""

    def test_known_properties(self) -> None:
        overrides = properties_to_overrides(
            {
                "release.version": "0.2.0",
                "release.useLastTag": "false",
                "release.scope": "major",
                "githubToken": "octocat",
            }
        )
        assert overrides == {
            "release": {"version": "0.2.0", "use_last_tag": False, "scope": "major"},
            "docs": {"github_token": "octocat"},
        }

    def test_unknown_properties_ignored(self) -> None:
        assert properties_to_overrides({"org.gradle.daemon": "false"}) == {}


class TestMergeConfigData:
    """Tests for merge_config_data."""

    def test_sections_merged(self) -> None:
        base = {"release": {"scope": "patch", "version": "1.0.0"}, "publishing": {"repo": "libs"}}
        merged = merge_config_data(base, {"release": {"version": "2.0.0"}})
        assert merged == {
            "release": {"scope": "patch", "version": "2.0.0"},
            "publishing": {"repo": "libs"},
        }

    def test_base_not_modified(self) -> None:
        base = {"release": {"scope": "patch"}}
        merge_config_data(base, {"release": {"scope": "major"}})
        assert base == {"release": {"scope": "patch"}}


class TestReadPropertiesFile:
    """Tests for read_properties_file."""

    def test_missing_file(self, temp_dir: Path) -> None:
        assert read_properties_file(temp_dir / "gradle.properties") == {}

    def test_reads_file(self, temp_dir: Path) -> None:
        path = temp_dir / "gradle.properties"
        path.write_text("release.scope=patch\n")
        assert read_properties_file(path) == {"release.scope": "patch"}
