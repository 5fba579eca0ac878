"""Release stage and version resolution for multi-module Java builds."""

__version__ = "0.1.0"

from release_stage.exceptions import ConfigurationError, GitError, ReleaseError
from release_stage.stage import Stage, resolve_stage
from release_stage.versioning import normalize_version

__all__ = [
    "__version__",
    "ReleaseError",
    "ConfigurationError",
    "GitError",
    "Stage",
    "resolve_stage",
    "normalize_version",
]
