"""Path management for the rlx binary install location.

Handles the ~/.rlx directory structure and path resolution.
Each release version is installed under ~/.rlx/bin/{name}/{version}/.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, List

# Default directory name under user home
DEFAULT_HOME_DIR_NAME = ".rlx"

# Environment variable to override home directory
RLX_HOME_ENV = "RLX_HOME"


def get_rlx_home() -> Path:
    """Get the rlx home directory path.

    Resolution order:
    1. RLX_HOME environment variable (if set)
    2. ~/.rlx (default)

    Returns:
        Path to the rlx home directory.
    """
    env_home = os.environ.get(RLX_HOME_ENV)
    if env_home:
        return Path(env_home)
    return Path.home() / DEFAULT_HOME_DIR_NAME


@dataclass
class RlxPaths:
    """Manages paths within the rlx home directory.

    Directory structure:
        ~/.rlx/
            bin/
                rlx/{version}/rlx   - Installed release binary
            config/
                config.yml          - Global configuration
            installed.json          - Record of the last successful install
    """

    home: Path

    _BIN_DIR: ClassVar[str] = "bin"
    _CONFIG_DIR: ClassVar[str] = "config"
    _INSTALL_RECORD: ClassVar[str] = "installed.json"

    @classmethod
    def default(cls) -> "RlxPaths":
        """Create paths from the default rlx home."""
        return cls(get_rlx_home())

    @property
    def bin_dir(self) -> Path:
        """Directory containing installed binaries."""
        return self.home / self._BIN_DIR

    @property
    def config_dir(self) -> Path:
        """Directory for configuration files."""
        return self.home / self._CONFIG_DIR

    @property
    def install_record_path(self) -> Path:
        """File recording the version and directory of the last install."""
        return self.home / self._INSTALL_RECORD

    def binary_dir(self, name: str, version: str) -> Path:
        """Get the install directory for a specific binary version.

        Args:
            name: Program name (e.g., 'rlx').
            version: Release version string.

        Returns:
            Path to the version-specific install directory.
        """
        return self.bin_dir / name / version

    def ensure_directories(self) -> None:
        """Create all required directories if they don't exist."""
        for directory in (self.home, self.bin_dir, self.config_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def installed_versions(self, name: str) -> List[str]:
        """List versions of ``name`` that have an install directory."""
        name_dir = self.bin_dir / name
        if not name_dir.is_dir():
            return []
        return sorted(p.name for p in name_dir.iterdir() if p.is_dir())
