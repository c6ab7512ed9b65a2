"""Install command implementation."""

from __future__ import annotations

import sys
from argparse import Namespace
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from rlx.config.models import ShimConfig

from rlx import entrypoints
from rlx.bootstrap.binary import BinaryManager, DownloadOrInstallError
from rlx.bootstrap.install_record import InstallRecord, write_install_record
from rlx.bootstrap.paths import RlxPaths
from rlx.bootstrap.platform import PlatformTableError, UnsupportedPlatformError
from rlx.cli.commands import Command
from rlx.cli.exit_codes import (
    EXIT_INSTALL_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SUCCESS,
    EXIT_UNSUPPORTED_PLATFORM,
)
from rlx.config.models import ShimConfig
from rlx.core.logging import get_logger

LOGGER = get_logger(__name__)


class InstallCommand(Command):
    """Downloads and installs the rlx binary for this platform."""

    def __init__(self, manager: Optional[BinaryManager] = None):
        """Initialize InstallCommand.

        Args:
            manager: Binary manager to install with (default: ReleaseBinary).
        """
        self._manager = manager

    @property
    def name(self) -> str:
        """Command identifier."""
        return "install"

    def execute(self, args: Namespace, config: "ShimConfig | None" = None) -> int:
        """Execute the install command.

        Args:
            args: Parsed command-line arguments.
            config: rlx configuration (CLI overrides already applied).

        Returns:
            Exit code.
        """
        config = config or ShimConfig.default()

        try:
            binary_path = entrypoints.install(config, manager=self._manager)
        except UnsupportedPlatformError as e:
            print(str(e), file=sys.stderr)
            return EXIT_UNSUPPORTED_PLATFORM
        except PlatformTableError as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE
        except DownloadOrInstallError as e:
            LOGGER.error(str(e))
            return EXIT_INSTALL_FAILURE

        install_dir = config.install_dir.resolve() if config.install_dir else None
        record = InstallRecord(config.name, config.version, install_dir)
        try:
            write_install_record(RlxPaths.default(), record)
        except OSError as e:
            LOGGER.warning(f"Could not record the install; 'run' may not find it: {e}")

        print(f"{config.name} v{config.version} installed at {binary_path}")
        return EXIT_SUCCESS
