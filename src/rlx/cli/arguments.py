"""Argument parser for the rlx-shim CLI."""

from __future__ import annotations

import argparse
from pathlib import Path


def _add_global_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show rlx-shim version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (info-level) logging.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Reduce logging output to errors only.",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        type=Path,
        help="Path to config file (default: ~/.rlx/config/config.yml).",
    )


def _add_location_options(parser: argparse.ArgumentParser, verb: str) -> None:
    parser.add_argument(
        "--release-version",
        metavar="VERSION",
        help=f"rlx release to {verb}.",
    )
    parser.add_argument(
        "--install-dir",
        metavar="DIR",
        type=Path,
        help="Directory holding the rlx binary (default: ~/.rlx/bin/rlx/<version>).",
    )


def build_parser() -> argparse.ArgumentParser:
    # Option-like arguments meant for rlx (e.g. --he) must never match a
    # shim option by prefix.
    parser = argparse.ArgumentParser(
        prog="rlx-shim",
        description="Install and run the prebuilt rlx binary for this platform.",
        allow_abbrev=False,
    )
    _add_global_options(parser)

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    install_parser = subparsers.add_parser(
        "install",
        help="Download and install the rlx binary for this platform.",
        allow_abbrev=False,
    )
    _add_location_options(install_parser, "install")

    run_parser = subparsers.add_parser(
        "run",
        help="Run the installed rlx binary, forwarding all arguments.",
        description=(
            "Run the installed rlx binary. Without --release-version or "
            "--install-dir, the binary from the last 'rlx-shim install' is "
            "used. Put '--' before arguments that should reach rlx as-is."
        ),
        allow_abbrev=False,
    )
    _add_location_options(run_parser, "run")
    run_parser.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        help="Arguments passed to rlx unchanged.",
    )

    subparsers.add_parser(
        "status",
        help="Show the detected platform and install status.",
    )
    subparsers.add_parser(
        "platforms",
        help="List supported platforms and their release builds.",
    )

    return parser
