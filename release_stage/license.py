"""License header preparation.

The license check plugin reads its header from a file in the root
project. When the project does not ship one, the bundled Apache 2.0
header is written in its place.
"""

from importlib import resources
from pathlib import Path

from release_stage.config.models import LicenseConfig
from release_stage.exceptions import ConfigurationError
from release_stage.log import get_logger

logger = get_logger("license")

HEADER_RESOURCE = "resources/licenseHeader.txt"


def default_license_header() -> str:
    """Return the bundled license header template."""
    return resources.files("release_stage").joinpath(HEADER_RESOURCE).read_text(
        encoding="utf-8"
    )


def license_header_path(project_root: Path, config: LicenseConfig) -> Path:
    header = Path(config.header)
    return header if header.is_absolute() else project_root / header


def prepare_license_header(project_root: Path, config: LicenseConfig | None = None) -> Path:
    """Write the default header unless the project already has one.

    Args:
        project_root: Root project directory
        config: License settings (defaults apply when None)

    Returns:
        Path of the header file

    Raises:
        ConfigurationError: If the header file cannot be written
    """
    config = config or LicenseConfig()
    path = license_header_path(project_root, config)
    if path.exists():
        logger.debug("License header %s already exists", path)
        return path

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(default_license_header(), encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Failed to write license header to {path}",
            details=str(e),
            fix_hint="Check file permissions or configure license.header",
        ) from e

    logger.info("Wrote default license header to %s", path)
    return path
