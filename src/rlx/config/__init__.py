"""Configuration module for rlx.

Provides configuration file loading, parsing, and validation with support for:
- Global config (~/.rlx/config/config.yml)
- Custom config file (--config)
- Environment variable expansion
"""

from rlx.config.models import ShimConfig
from rlx.config.loader import ConfigError, load_config, find_global_config
from rlx.config.validation import validate_config, ConfigValidationWarning

__all__ = [
    "ShimConfig",
    "ConfigError",
    "load_config",
    "find_global_config",
    "validate_config",
    "ConfigValidationWarning",
]
