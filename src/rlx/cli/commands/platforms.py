"""Platforms command implementation."""

from __future__ import annotations

from argparse import Namespace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rlx.config.models import ShimConfig

from rlx.bootstrap.platform import (
    SUPPORTED_PLATFORMS,
    PlatformTableError,
    apply_target_overrides,
    format_platform_table,
    shared_release_targets,
)
from rlx.cli.commands import Command
from rlx.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from rlx.config.models import ShimConfig
from rlx.core.logging import get_logger

LOGGER = get_logger(__name__)


class PlatformsCommand(Command):
    """Lists the supported platforms and the release build each one gets."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "platforms"

    def execute(self, args: Namespace, config: "ShimConfig | None" = None) -> int:
        """Execute the platforms command.

        Prints the platform table with configured target overrides applied,
        then any release build shared by several platforms.

        Returns:
            Exit code.
        """
        config = config or ShimConfig.default()

        try:
            platforms = apply_target_overrides(SUPPORTED_PLATFORMS, config.targets)
        except PlatformTableError as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE

        print(f"Supported platforms for {config.name} v{config.version}:")
        print()
        print(format_platform_table(platforms))

        shared = shared_release_targets(platforms)
        if shared:
            print()
            for target, keys in sorted(shared.items()):
                print(f"Note: {target} is served to {', '.join(keys)}")

        return EXIT_SUCCESS
