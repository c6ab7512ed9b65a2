"""Status command implementation."""

from __future__ import annotations

from argparse import Namespace
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from rlx.config.models import ShimConfig

from rlx import __version__
from rlx.bootstrap.binary import ReleaseBinary
from rlx.bootstrap.install_record import read_install_record
from rlx.bootstrap.platform import (
    PlatformTableError,
    UnsupportedPlatformError,
    get_host_platform,
)
from rlx.bootstrap.validation import ToolStatus, validate_binary
from rlx.cli.commands import Command
from rlx.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from rlx.config.models import ShimConfig
from rlx.core.logging import get_logger
from rlx.entrypoints import build_download_url, resolve_for_config

LOGGER = get_logger(__name__)

_STATUS_TEXT = {
    ToolStatus.PRESENT: "installed",
    ToolStatus.MISSING: "not installed",
    ToolStatus.NOT_EXECUTABLE: "present but not executable",
}


class StatusCommand(Command):
    """Shows the detected platform and whether rlx is installed."""

    def __init__(self, manager: Optional[ReleaseBinary] = None):
        self._manager = manager

    @property
    def name(self) -> str:
        """Command identifier."""
        return "status"

    def execute(self, args: Namespace, config: "ShimConfig | None" = None) -> int:
        """Execute the status command.

        Reports versions, the host platform, the resolved release build and
        the install state. An unsupported platform is reported, not treated
        as a failure.

        Returns:
            Exit code.
        """
        config = config or ShimConfig.default()
        manager = self._manager or ReleaseBinary(name=config.name)
        host = get_host_platform()

        print(f"rlx-shim version: {__version__}")
        print(f"{config.name} release: v{config.version}")
        print(f"Repository: {config.repository_url}")
        print(f"Platform: {host.os_type}/{host.architecture}")

        try:
            descriptor = resolve_for_config(config, host)
        except UnsupportedPlatformError:
            print("Release build: unsupported platform")
            return EXIT_SUCCESS
        except PlatformTableError as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE

        note = " (emulated)" if descriptor.emulated else ""
        print(f"Release build: {descriptor.release_target}{note}")
        print(
            "Download URL: "
            + build_download_url(
                config.repository_url, config.name, config.version, descriptor.release_target
            )
        )

        binary_path = manager.binary_path(descriptor, config.version, config.install_dir)
        status = validate_binary(binary_path)
        print(f"Binary: {binary_path} ({_STATUS_TEXT[status]})")

        record = read_install_record(manager.paths, config.name)
        if record is not None:
            where = record.install_dir or manager.paths.binary_dir(record.name, record.version)
            print(f"Last install (used by run): v{record.version} in {where}")

        others = [
            v for v in manager.paths.installed_versions(config.name) if v != config.version
        ]
        if others:
            print(f"Other installed versions: {', '.join(others)}")

        if config.sources:
            print(f"Config sources: {', '.join(config.sources)}")

        return EXIT_SUCCESS
