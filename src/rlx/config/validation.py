"""Configuration validation for rlx.

Validates known configuration keys and warns on unknown ones.
Does not raise: problems are reported as warnings and logged.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import get_close_matches
from typing import Any, Dict, List, Optional, Set

from rlx.core.logging import get_logger

LOGGER = get_logger(__name__)

VALID_TOP_LEVEL_KEYS: Set[str] = {
    "version",
    "repository",
    "install_dir",
    "download_timeout",
    "targets",
}

_STRING_KEYS = ("version", "repository", "install_dir")


@dataclass
class ConfigValidationWarning:
    """A validation warning for configuration."""

    message: str
    source: str
    key: Optional[str] = None
    suggestion: Optional[str] = None


def validate_config(
    data: Dict[str, Any],
    source: str,
) -> List[ConfigValidationWarning]:
    """Validate configuration dictionary.

    Args:
        data: Config dictionary to validate.
        source: Source file path for warning messages.

    Returns:
        List of validation warnings.
    """
    warnings: List[ConfigValidationWarning] = []

    if not isinstance(data, dict):
        warning = ConfigValidationWarning(
            message=f"Config must be a mapping, got {type(data).__name__}",
            source=source,
        )
        _log_warning(warning)
        return [warning]

    for key in data.keys():
        if key not in VALID_TOP_LEVEL_KEYS:
            warnings.append(ConfigValidationWarning(
                message=f"Unknown top-level key '{key}'",
                source=source,
                key=key,
                suggestion=_suggest_key(str(key), VALID_TOP_LEVEL_KEYS),
            ))

    for key in _STRING_KEYS:
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            warnings.append(ConfigValidationWarning(
                message=f"'{key}' must be a string, got {type(value).__name__}",
                source=source,
                key=key,
            ))

    timeout = data.get("download_timeout")
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            warnings.append(ConfigValidationWarning(
                message=f"'download_timeout' must be a number, got {type(timeout).__name__}",
                source=source,
                key="download_timeout",
            ))
        elif timeout <= 0:
            warnings.append(ConfigValidationWarning(
                message="'download_timeout' must be positive",
                source=source,
                key="download_timeout",
            ))

    targets = data.get("targets")
    if targets is not None:
        if not isinstance(targets, dict):
            warnings.append(ConfigValidationWarning(
                message=f"'targets' must be a mapping, got {type(targets).__name__}",
                source=source,
                key="targets",
            ))
        else:
            for platform_key, target in targets.items():
                if not isinstance(target, str) or "/" not in str(platform_key):
                    warnings.append(ConfigValidationWarning(
                        message=(
                            f"Invalid target override '{platform_key}': expected "
                            "'<os_type>/<architecture>: <release target>'"
                        ),
                        source=source,
                        key="targets",
                    ))

    for warning in warnings:
        _log_warning(warning)

    return warnings


def _suggest_key(key: str, valid_keys: Set[str]) -> Optional[str]:
    matches = get_close_matches(key, sorted(valid_keys), n=1, cutoff=0.6)
    return matches[0] if matches else None


def _log_warning(warning: ConfigValidationWarning) -> None:
    message = f"{warning.source}: {warning.message}"
    if warning.suggestion:
        message += f" (did you mean '{warning.suggestion}'?)"
    LOGGER.warning(message)
