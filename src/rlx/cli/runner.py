"""CLI runner: parses arguments, loads configuration and dispatches commands."""

from __future__ import annotations

from argparse import Namespace
from importlib.metadata import PackageNotFoundError, version
from typing import Any, Dict, Iterable, Optional, Sequence

from rlx.cli.arguments import build_parser
from rlx.cli.commands import (
    Command,
    InstallCommand,
    PlatformsCommand,
    RunCommand,
    StatusCommand,
)
from rlx.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from rlx.config.loader import ConfigError, load_config
from rlx.config.models import ShimConfig
from rlx.core.logging import configure_logging, get_logger

LOGGER = get_logger(__name__)


def get_version() -> str:
    try:
        return version("rlx")
    except PackageNotFoundError:
        # Fallback for editable installs that have not yet built metadata.
        from rlx import __version__

        return __version__


def cli_args_to_config_overrides(args: Namespace) -> Dict[str, Any]:
    """Convert CLI arguments to config override dict.

    CLI arguments take precedence over config file values.
    """
    overrides: Dict[str, Any] = {}

    release_version = getattr(args, "release_version", None)
    if release_version:
        overrides["version"] = release_version

    install_dir = getattr(args, "install_dir", None)
    if install_dir:
        overrides["install_dir"] = str(install_dir)

    return overrides


class CLIRunner:
    """Runs one rlx-shim invocation."""

    def __init__(self) -> None:
        self._commands: Dict[str, Command] = {
            command.name: command
            for command in (
                InstallCommand(),
                RunCommand(),
                StatusCommand(),
                PlatformsCommand(),
            )
        }

    def run(self, argv: Optional[Iterable[str]] = None) -> int:
        """Parse ``argv`` and execute the selected command.

        Args:
            argv: Command-line arguments (defaults to sys.argv[1:]).

        Returns:
            Exit code.
        """
        parser = build_parser()
        argv_list = list(argv) if argv is not None else None

        try:
            args, extras = parser.parse_known_args(argv_list)
        except SystemExit as e:
            # argparse exits on --help (0) and on usage errors (2)
            return EXIT_SUCCESS if e.code in (0, None) else EXIT_INVALID_USAGE

        if extras:
            if args.command != "run":
                parser.print_usage()
                LOGGER.error(f"Unrecognized arguments: {' '.join(extras)}")
                return EXIT_INVALID_USAGE
            # Option-like arguments ahead of the first positional land here
            args.args = extras + list(args.args or [])

        configure_logging(debug=args.debug, verbose=args.verbose, quiet=args.quiet)

        if args.version:
            print(get_version())
            return EXIT_SUCCESS

        if not args.command:
            parser.print_help()
            return EXIT_SUCCESS

        try:
            config = load_config(
                cli_config_path=args.config,
                cli_overrides=cli_args_to_config_overrides(args),
            )
        except ConfigError as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE

        return self._commands[args.command].execute(args, config)


def forward(argv: Sequence[str]) -> int:
    """Run the installed binary with ``argv``, parsing nothing.

    Backs the ``rlx`` console script, so every argument (including
    ``--help`` and ``--version``) belongs to the binary.
    """
    configure_logging()

    try:
        config: ShimConfig = load_config()
    except ConfigError as e:
        LOGGER.error(str(e))
        return EXIT_INVALID_USAGE

    return RunCommand().run_with(argv, config)
