"""
Process-wide diagnostics configuration.

The only setting is the path prefix stripped from file names in `called in` diagnostics, so that
`/path/to/app/src/models.py` is reported as `src/models.py`. The default comes from the
`UNIONTYPES_PATH_TO_APP` environment variable and can be replaced once at start-up:

    >>> from uniontypes.config import configure
    >>> configure(path_prefix=os.getcwd() + os.sep)
"""

# Standard library -----------------------------------------------------------------------------------------------------
import os

from dataclasses import dataclass

# Local ----------------------------------------------------------------------------------------------------------------
from .abc import get_type
from .sentinels import UNSET, UnsetType

__all__ = ["DiagnosticsConfig", "configure", "get_config", "PATH_TO_APP_ENV"]

PATH_TO_APP_ENV = "UNIONTYPES_PATH_TO_APP"


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class DiagnosticsConfig:
    """
    Diagnostics formatting options.

    Attributes:
        path_prefix: Absolute path prefix removed from file names in diagnostics,
            e.g. `'/path/to/app/'`. None keeps absolute file names.

    Raises:
        TypeError: If path_prefix is neither a str nor None.
    """
    path_prefix: str | None = None

    def __post_init__(self):
        if self.path_prefix is not None and not isinstance(self.path_prefix, str):
            raise TypeError(f"path_prefix must be of the union type `string|null`, "
                            f"`{get_type(self.path_prefix)}` given")

    @classmethod
    def from_env(cls) -> "DiagnosticsConfig":
        """Build configuration from the `UNIONTYPES_PATH_TO_APP` environment variable."""
        return cls(path_prefix=os.environ.get(PATH_TO_APP_ENV) or None)

    def merge(self, path_prefix: str | None | UnsetType = UNSET) -> "DiagnosticsConfig":
        """
        Create a new DiagnosticsConfig, options not provided (UNSET) are inherited from the current instance.
        """
        path_prefix = self.path_prefix if path_prefix is UNSET else path_prefix
        return DiagnosticsConfig(path_prefix=path_prefix)


# Methods --------------------------------------------------------------------------------------------------------------

_config: DiagnosticsConfig = DiagnosticsConfig.from_env()


def configure(path_prefix: str | None | UnsetType = UNSET) -> DiagnosticsConfig:
    """
    Replace the process-wide diagnostics configuration.

    Called without arguments, resets the configuration to the environment default.

    Args:
        path_prefix: Absolute path prefix removed from diagnostic file names, None to disable.

    Returns:
        DiagnosticsConfig: The configuration now in effect.
    """
    global _config

    if path_prefix is UNSET:
        _config = DiagnosticsConfig.from_env()
    else:
        _config = _config.merge(path_prefix=path_prefix)
    return _config


def get_config() -> DiagnosticsConfig:
    """Return the process-wide diagnostics configuration."""
    return _config
