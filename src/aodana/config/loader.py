"""Module in charge of loading configuration files."""

import os
import re
from copy import deepcopy

import yaml

from .errors import ConfigCycleError, ConfigIncludeError, ConfigPathError, ConfigTypeError

__all__ = ["load_config", "parse_value", "resolve_config_path", "set_nested_value"]

# Pattern to match: "key.path.here" for dot notation keys
DOTTED_KEY_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*(?:\.[a-zA-Z_][a-zA-Z0-9_]*)+$")


class ConfigLoader(yaml.SafeLoader):
    """Configuration loader class.

    Extends the safe YAML loader with an `!include` tag which loads another
    YAML file (relative to the including file) in place of a block.
    """

    def __init__(self, stream):
        """Initialize the loader.

        Parameters
        ----------
        stream : _io.TextIOWrapper
            Output of python's `open` function on a yaml file
        """
        # Fetch the parent directory where the configuration file lives
        self._root = os.path.split(stream.name)[0]

        # Initialize the base loader
        super().__init__(stream)

    def include(self, node):
        """Load and include a YAML file that is requested in the base config.

        Parameters
        ----------
        node : yaml.ScalarNode
            Node which contains the path to the file to include
        """
        # Look for the file in the same directory as the main config file
        filename = os.path.join(self._root, self.construct_scalar(node))
        if not os.path.isfile(filename):
            raise ConfigIncludeError(f"Included file not found: {filename}")

        # Load the file within the base configuration
        with open(filename, "r", encoding="utf-8") as f:
            return yaml.load(f, Loader=ConfigLoader)


# Add the include constructor
ConfigLoader.add_constructor("!include", ConfigLoader.include)


def deep_merge(base_dict, override_dict):
    """Recursively merge `override_dict` into a copy of `base_dict`.

    Parameters
    ----------
    base_dict : dict
        Base dictionary to merge into
    override_dict : dict
        Dictionary with values to override

    Returns
    -------
    dict
        Merged dictionary
    """
    result = deepcopy(base_dict)
    for key, value in override_dict.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def set_nested_value(config, key_path, value):
    """Set a nested value in a dictionary using dot notation.

    Parameters
    ----------
    config : dict
        Configuration dictionary to modify in place
    key_path : str
        Dot-separated path to the key (e.g. "ana.tpc_spectra.nsigma_cut")
    value : any
        Value to set

    Returns
    -------
    dict
        Modified configuration dictionary
    """
    keys = key_path.split(".")
    current = config

    # Navigate to the parent of the target key
    for key in keys[:-1]:
        if key not in current or current[key] is None:
            current[key] = {}
        elif not isinstance(current[key], dict):
            raise ConfigTypeError(
                f"Cannot set '{key_path}': '{key}' is not a dictionary"
            )
        current = current[key]

    # Set the final value
    current[keys[-1]] = value

    return config


def parse_value(value_str):
    """Parse a string value into the appropriate Python type.

    Parameters
    ----------
    value_str : str
        String representation of the value

    Returns
    -------
    any
        Parsed value
    """
    if not isinstance(value_str, str):
        return value_str

    # YAML handles strings, numbers, booleans, lists, etc.
    try:
        return yaml.safe_load(value_str)
    except yaml.YAMLError:
        return value_str


def resolve_config_path(cfg_path, current_dir=None):
    """Resolve a configuration file path.

    Parameters
    ----------
    cfg_path : str
        Absolute path, or path relative to `current_dir`
    current_dir : str, optional
        Directory to resolve relative paths from (default: working directory)

    Returns
    -------
    str
        Absolute path to an existing configuration file
    """
    if not os.path.isabs(cfg_path):
        cfg_path = os.path.join(current_dir or os.getcwd(), cfg_path)

    if not os.path.isfile(cfg_path):
        raise ConfigPathError(f"Configuration file not found: {cfg_path}")

    return os.path.abspath(cfg_path)


def _extract_includes_and_overrides(config_dict):
    """Extract include directives and dot-notation overrides from a config dict.

    Parameters
    ----------
    config_dict : dict
        Loaded YAML configuration dictionary

    Returns
    -------
    tuple
        (list of included files, dict of overrides, cleaned config dict)
    """
    if not isinstance(config_dict, dict):
        return [], {}, config_dict

    includes, overrides, cleaned_config = [], {}, {}
    for key, value in config_dict.items():
        if key == "include":
            if isinstance(value, str):
                includes.append(value)
            elif isinstance(value, list):
                includes.extend(value)
            else:
                raise ConfigTypeError(
                    f"'include' must be a string or list of strings, got {type(value)}"
                )
        elif DOTTED_KEY_PATTERN.match(key):
            overrides[key] = value
        else:
            cleaned_config[key] = value

    return includes, overrides, cleaned_config


def load_config(cfg_path, _stack=None):
    """Load a configuration file to a dictionary.

    This function supports:
    - Including other YAML files: "include: base.yaml" or
      "include: [base.yaml, other.yaml]"
    - Including files within blocks: "key: !include file.yaml"
    - Overriding nested parameters with dot notation:
      "ana.tpc_spectra.nsigma_cut: 2.5"

    Parameters
    ----------
    cfg_path : str
        Path to the configuration file

    Returns
    -------
    dict
        Loaded and merged configuration dictionary
    """
    # Keep track of the chain of includes to detect cycles
    cfg_path = os.path.abspath(cfg_path)
    stack = list(_stack or [])
    if cfg_path in stack:
        raise ConfigCycleError(stack[stack.index(cfg_path) :] + [cfg_path])
    stack.append(cfg_path)

    # Load the YAML file (with !include support for inline includes)
    if not os.path.isfile(cfg_path):
        raise ConfigPathError(f"Configuration file not found: {cfg_path}")
    with open(cfg_path, "r", encoding="utf-8") as f:
        main_config = yaml.load(f, Loader=ConfigLoader)

    # Handle empty file
    if main_config is None:
        return {}

    # Load all included files first (in order), then the main config
    includes, overrides, cleaned_config = _extract_includes_and_overrides(main_config)
    root_dir = os.path.dirname(cfg_path)
    config = {}
    for include_file in includes:
        include_path = os.path.join(root_dir, include_file)
        if not os.path.exists(include_path):
            raise ConfigIncludeError(f"Included file not found: {include_path}")

        config = deep_merge(config, load_config(include_path, stack))

    if cleaned_config:
        config = deep_merge(config, cleaned_config)

    # Apply overrides using dot notation
    for key_path, value in overrides.items():
        config = set_nested_value(config, key_path, parse_value(value))

    return config
