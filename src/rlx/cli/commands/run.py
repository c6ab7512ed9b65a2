"""Run command implementation."""

from __future__ import annotations

import sys
from argparse import Namespace
from dataclasses import replace
from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from rlx.config.models import ShimConfig

from rlx import entrypoints
from rlx.bootstrap.binary import BinaryError, BinaryManager
from rlx.bootstrap.install_record import read_install_record
from rlx.bootstrap.paths import RlxPaths
from rlx.bootstrap.platform import PlatformTableError, UnsupportedPlatformError
from rlx.cli.commands import Command
from rlx.cli.exit_codes import (
    EXIT_BINARY_NOT_FOUND,
    EXIT_INVALID_USAGE,
    EXIT_UNSUPPORTED_PLATFORM,
)
from rlx.config.models import ShimConfig
from rlx.core.logging import get_logger

LOGGER = get_logger(__name__)


def _strip_separator(args: Sequence[str]) -> List[str]:
    args = list(args)
    if args and args[0] == "--":
        return args[1:]
    return args


def apply_install_record(config: ShimConfig, paths: Optional[RlxPaths] = None) -> ShimConfig:
    """Point ``config`` at the binary placed by the last install, if any."""
    paths = paths or RlxPaths.default()
    record = read_install_record(paths, config.name)
    if record is None:
        return config

    LOGGER.debug(f"Using {config.name} v{record.version} from the last install")
    return replace(
        config,
        version=record.version,
        install_dir=record.install_dir,
        _config_sources=config.sources + [f"installed:{paths.install_record_path}"],
    )


class RunCommand(Command):
    """Runs the installed rlx binary with the given arguments."""

    def __init__(self, manager: Optional[BinaryManager] = None):
        """Initialize RunCommand.

        Args:
            manager: Binary manager to run with (default: ReleaseBinary).
        """
        self._manager = manager

    @property
    def name(self) -> str:
        """Command identifier."""
        return "run"

    def execute(self, args: Namespace, config: "ShimConfig | None" = None) -> int:
        """Execute the run command.

        An explicit ``--release-version`` or ``--install-dir`` selects the
        binary; otherwise the last install does.

        Args:
            args: Parsed command-line arguments; ``args.args`` is forwarded.
            config: rlx configuration (CLI overrides already applied).

        Returns:
            The binary's exit code, or a shim exit code if it could not run.
        """
        forwarded = _strip_separator(getattr(args, "args", None) or [])
        pinned = bool(
            getattr(args, "release_version", None) or getattr(args, "install_dir", None)
        )
        return self.run_with(forwarded, config, use_install_record=not pinned)

    def run_with(
        self,
        forwarded: Sequence[str],
        config: "ShimConfig | None" = None,
        use_install_record: bool = True,
    ) -> int:
        """Run the binary with ``forwarded`` exactly as given."""
        config = config or ShimConfig.default()
        if use_install_record:
            config = apply_install_record(config)

        try:
            return entrypoints.run(forwarded, config, manager=self._manager)
        except UnsupportedPlatformError as e:
            print(str(e), file=sys.stderr)
            return EXIT_UNSUPPORTED_PLATFORM
        except PlatformTableError as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE
        except BinaryError as e:
            LOGGER.error(str(e))
            print(
                f"Run 'rlx-shim install' to install {config.name} v{config.version}.",
                file=sys.stderr,
            )
            return EXIT_BINARY_NOT_FOUND
