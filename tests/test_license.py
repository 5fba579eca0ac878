"""Tests for license header preparation."""

from pathlib import Path

import pytest

from release_stage.config.models import LicenseConfig
from release_stage.exceptions import ConfigurationError
from release_stage.license import default_license_header, prepare_license_header


def test_default_header_is_apache() -> None:
    header = default_license_header()
    assert "${year}" in header
    assert "Apache License, Version 2.0" in header


def test_writes_default_header(project_dir: Path) -> None:
    path = prepare_license_header(project_dir)
    assert path == project_dir / "gradle" / "licenseHeader.txt"
    assert path.read_text(encoding="utf-8") == default_license_header()


def test_existing_header_untouched(project_dir: Path) -> None:
    header = project_dir / "gradle" / "licenseHeader.txt"
    header.parent.mkdir()
    header.write_text("Copyright ACME\n")

    assert prepare_license_header(project_dir) == header
    assert header.read_text() == "Copyright ACME\n"


def test_configured_location(project_dir: Path) -> None:
    config = LicenseConfig(header="etc/HEADER")
    path = prepare_license_header(project_dir, config)
    assert path == project_dir / "etc" / "HEADER"
    assert path.is_file()


def test_unwritable_location(project_dir: Path) -> None:
    # A file where the header directory should be
    (project_dir / "gradle").write_text("not a directory")
    with pytest.raises(ConfigurationError) as exc_info:
        prepare_license_header(project_dir)
    assert "Failed to write license header" in exc_info.value.message
