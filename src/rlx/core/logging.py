"""Logging setup for rlx.

All modules log through loggers under the ``rlx`` namespace:

    LOGGER = get_logger(__name__)

The CLI calls ``configure_logging`` once, as early as possible.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

ROOT_LOGGER_NAME = "rlx"

_LOG_FORMAT = "[rlx] %(levelname)s %(message)s"
_DEBUG_FORMAT = "[rlx] %(levelname)s %(name)s: %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``rlx`` namespace.

    Args:
        name: Module name, usually ``__name__``. Names outside the
            ``rlx`` package are nested under it.

    Returns:
        Configured logger instance.
    """
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def _resolve_level(debug: bool, verbose: bool, quiet: bool) -> int:
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    if quiet:
        return logging.ERROR
    return logging.WARNING


def configure_logging(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Configure the ``rlx`` root logger.

    Debug wins over verbose, verbose over quiet. Calling this again
    replaces the previous handler, so tests and repeated CLI invocations
    in one process do not stack handlers.

    Args:
        debug: Enable debug-level output.
        verbose: Enable info-level output.
        quiet: Only report errors.
        stream: Destination stream (defaults to stderr).

    Returns:
        The ``rlx`` root logger.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    level = _resolve_level(debug, verbose, quiet)

    for handler in list(logger.handlers):
        if getattr(handler, "_rlx_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(_DEBUG_FORMAT if debug else _LOG_FORMAT))
    handler._rlx_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level)

    return logger
