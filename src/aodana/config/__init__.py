"""Configuration loading system.

Configuration files are YAML files which support:
- Including other files, at the top level or inside a block
- Overriding nested parameters with dot notation
- Command-line overrides of the form `key.path=value`

Main Entry Point
----------------
load_config : Load a configuration file to a dictionary
"""

from .errors import (
    ConfigCycleError,
    ConfigError,
    ConfigIncludeError,
    ConfigPathError,
    ConfigTypeError,
    ConfigValidationError,
    ConfigValueError,
)
from .loader import load_config, parse_value, resolve_config_path, set_nested_value

__all__ = [
    "load_config",
    "parse_value",
    "resolve_config_path",
    "set_nested_value",
    "ConfigError",
    "ConfigIncludeError",
    "ConfigCycleError",
    "ConfigPathError",
    "ConfigTypeError",
    "ConfigValidationError",
    "ConfigValueError",
]
