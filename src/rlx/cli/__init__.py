"""rlx CLI package.

This package provides the command-line interfaces for rlx:

- ``rlx-shim``: install / run / status / platforms commands.
- ``rlx``: runs the installed binary, forwarding every argument.
"""

from __future__ import annotations

import sys
from typing import Iterable, Optional

from rlx.cli.runner import CLIRunner, forward, get_version
from rlx.cli.arguments import build_parser
from rlx.cli.exit_codes import (
    EXIT_SUCCESS,
    EXIT_UNSUPPORTED_PLATFORM,
    EXIT_INSTALL_FAILURE,
    EXIT_BINARY_NOT_FOUND,
    EXIT_INVALID_USAGE,
)


def main(argv: Optional[Iterable[str]] = None) -> int:
    """CLI entrypoint.

    Returns an exit code suitable for use as a console script.

    Args:
        argv: Command-line arguments (defaults to sys.argv).

    Returns:
        Exit code.
    """
    runner = CLIRunner()
    return runner.run(argv)


def forward_main(argv: Optional[Iterable[str]] = None) -> int:
    """``rlx`` console script: run the installed binary with all arguments."""
    args = list(argv) if argv is not None else sys.argv[1:]
    return forward(args)


__all__ = [
    "main",
    "forward_main",
    "build_parser",
    "get_version",
    "CLIRunner",
    "EXIT_SUCCESS",
    "EXIT_UNSUPPORTED_PLATFORM",
    "EXIT_INSTALL_FAILURE",
    "EXIT_BINARY_NOT_FOUND",
    "EXIT_INVALID_USAGE",
]


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
