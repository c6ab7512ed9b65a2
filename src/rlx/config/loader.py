"""Configuration file loading and merging.

Handles loading configuration from YAML files with:
- Global config (~/.rlx/config/config.yml)
- Custom config file (--config flag)
- Environment variable expansion (${VAR})
- Config merging with proper precedence
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from rlx.bootstrap.paths import get_rlx_home
from rlx.config.models import ShimConfig
from rlx.config.validation import validate_config
from rlx.core.logging import get_logger

LOGGER = get_logger(__name__)

GLOBAL_CONFIG_NAME = "config.yml"

# Environment variable pattern: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


class ConfigError(Exception):
    """Configuration loading or parsing error."""

    pass


def load_config(
    cli_config_path: Optional[Path] = None,
    cli_overrides: Optional[Dict[str, Any]] = None,
) -> ShimConfig:
    """Load configuration with proper precedence.

    Precedence (highest to lowest):
    1. CLI flags (cli_overrides)
    2. Custom config file (cli_config_path) OR global config
       (~/.rlx/config/config.yml)
    3. Packaged release metadata

    Args:
        cli_config_path: Optional path to custom config file (--config flag).
        cli_overrides: Dict of CLI flag overrides.

    Returns:
        Merged ShimConfig instance.

    Raises:
        ConfigError: If the custom config file doesn't exist, or a config
            file has parse errors.
    """
    sources: List[str] = []
    merged: Dict[str, Any] = {}

    if cli_config_path:
        if not cli_config_path.exists():
            raise ConfigError(f"Config file not found: {cli_config_path}")
        merged = merge_configs(merged, _load_layer(cli_config_path))
        sources.append(f"custom:{cli_config_path}")
        LOGGER.debug(f"Loaded custom config from {cli_config_path}")
    else:
        global_path = find_global_config()
        if global_path is not None:
            merged = merge_configs(merged, _load_layer(global_path))
            sources.append(f"global:{global_path}")
            LOGGER.debug(f"Loaded global config from {global_path}")

    if cli_overrides:
        merged = merge_configs(merged, cli_overrides)
        sources.append("cli")
        LOGGER.debug("Applied CLI overrides")

    config = dict_to_config(merged)
    config._config_sources = sources

    LOGGER.debug(f"Config loaded from sources: {sources}")
    return config


def _load_layer(path: Path) -> Dict[str, Any]:
    try:
        data = load_yaml_file(path)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    validate_config(data, source=str(path))
    return data


def find_global_config() -> Optional[Path]:
    """Find global config at ~/.rlx/config/config.yml.

    Returns:
        Path to global config if it exists, None otherwise.
    """
    config_path = get_rlx_home() / "config" / GLOBAL_CONFIG_NAME
    if config_path.exists():
        return config_path
    return None


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML config file.

    Performs environment variable expansion on string values.

    Args:
        path: Path to YAML file.

    Returns:
        Parsed dictionary.

    Raises:
        yaml.YAMLError: If YAML parsing fails.
        ConfigError: If the document is not a mapping.
    """
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()

    data = yaml.safe_load(content)

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a YAML mapping, got {type(data).__name__}")

    return expand_env_vars(data)


def expand_env_vars(data: Any) -> Any:
    """Recursively expand environment variables in config values.

    Supports ${VAR} and ${VAR:-default} syntax.
    """
    if isinstance(data, dict):
        return {k: expand_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        return ENV_VAR_PATTERN.sub(_env_var_replacer, data)
    else:
        return data


def _env_var_replacer(match: re.Match[str]) -> str:
    """Replace environment variable reference with its value."""
    var_name = match.group(1)
    default_value = match.group(2)

    value = os.environ.get(var_name)
    if value is not None:
        return value
    if default_value is not None:
        return default_value

    LOGGER.warning(f"Environment variable ${var_name} is not set and has no default")
    return ""


def merge_configs(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two config dicts, with overlay taking precedence.

    Rules:
    - Scalar values: overlay replaces base
    - Lists: overlay replaces base (no merging)
    - Dicts: recursive merge
    """
    result = base.copy()

    for key, overlay_value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(overlay_value, dict):
            result[key] = merge_configs(result[key], overlay_value)
        else:
            result[key] = overlay_value

    return result


def dict_to_config(data: Dict[str, Any]) -> ShimConfig:
    """Convert a merged config dict to a typed ShimConfig.

    Missing or ill-typed values fall back to the packaged defaults;
    validation has already warned about them.
    """
    config = ShimConfig.default()

    version = data.get("version")
    if isinstance(version, str) and version:
        config.version = version.removeprefix("v")

    repository = data.get("repository")
    if isinstance(repository, str) and repository:
        config.repository_url = repository.rstrip("/")

    install_dir = data.get("install_dir")
    if isinstance(install_dir, (str, Path)) and str(install_dir):
        config.install_dir = Path(install_dir).expanduser()

    timeout = data.get("download_timeout")
    if isinstance(timeout, (int, float)) and not isinstance(timeout, bool) and timeout > 0:
        config.download_timeout = float(timeout)

    targets = data.get("targets")
    if isinstance(targets, dict):
        config.targets = {
            str(key): value
            for key, value in targets.items()
            if isinstance(value, str) and "/" in str(key)
        }

    return config
