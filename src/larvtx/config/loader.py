"""Module in charge of loading larvtx configuration files.

Supported configuration language:

.. code-block:: yaml

    include: base.yaml                  # Single file
    include: [base.yaml, other.yaml]    # Multiple files (order matters)

    geo: !include geo.yaml              # Inline include of a block

    algo.vertex_selection.max_top_score_candidates: 3   # Dot-notation override

Included files are merged first (in order), the content of the including file
is merged on top of them and dot-notation overrides are applied last.
"""

import os
import re
from copy import deepcopy

import yaml

from .errors import ConfigCycleError, ConfigIncludeError

__all__ = [
    "ConfigLoader",
    "load_config",
    "load_config_file",
    "deep_merge",
    "parse_value",
    "set_nested_value",
]

# Pattern to match: "key.path.here" for dot notation keys
DOTTED_KEY_PATTERN = re.compile(
    r"^[a-zA-Z_][a-zA-Z0-9_]*(?:\.[a-zA-Z_][a-zA-Z0-9_]*)+$"
)


class ConfigLoader(yaml.SafeLoader):
    """Configuration loader class.

    This class extends the standard safe loader in order to support the
    inclusion of YAML configuration files into another YAML configuration
    file through the `!include` tag.
    """

    def __init__(self, stream, root_dir=None):
        """Initialize the loader.

        Parameters
        ----------
        stream : Union[str, _io.TextIOWrapper]
            YAML string or output of python's `open` function on a yaml file
        root_dir : str, optional
            Directory in which to look for included files. If not specified,
            uses the directory of the stream, or the current directory.
        """
        # Fetch the parent directory where the configuration file lives
        if root_dir is None:
            name = getattr(stream, "name", None)
            root_dir = os.path.dirname(name) if name else os.getcwd()
        self._root = root_dir

        # Initialize the base loader
        super().__init__(stream)

    def include(self, node):
        """Load and include a YAML file that is requested in the base config.

        Parameters
        ----------
        node : yaml.Node
            YAML node which contains the name of the file to include
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
    """Recursively merge override_dict into base_dict.

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
        Configuration dictionary to modify
    key_path : str
        Dot-separated path to the key (e.g., "io.reader.file_keys")
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
            raise ValueError(f"Cannot set '{key_path}': '{key}' is not a dictionary")
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
    # If it's already not a string, return as-is
    if not isinstance(value_str, str):
        return value_str

    # Try to parse as YAML (handles strings, numbers, booleans, lists, etc.)
    try:
        return yaml.safe_load(value_str)
    except yaml.YAMLError:
        return value_str


def _split_directives(config_dict):
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
                raise ConfigIncludeError(
                    f"'include' must be a string or list of strings, got {type(value)}"
                )

        elif DOTTED_KEY_PATTERN.match(key):
            overrides[key] = value

        else:
            cleaned_config[key] = value

    return includes, overrides, cleaned_config


def _load(stream, root_dir, include_stack):
    """Recursively load a configuration with include cycle detection.

    Parameters
    ----------
    stream : Union[str, _io.TextIOWrapper]
        YAML string or open configuration file
    root_dir : str
        Directory relative to which included files are resolved
    include_stack : List[str]
        Stack of files currently being loaded

    Returns
    -------
    dict
        Loaded and merged configuration dictionary
    """
    # Create a custom loader class with the specified root_dir
    class CustomConfigLoader(ConfigLoader):
        def __init__(self, stream):
            super().__init__(stream, root_dir)

    main_config = yaml.load(stream, Loader=CustomConfigLoader)
    if main_config is None:
        return {}

    includes, overrides, cleaned_config = _split_directives(main_config)

    # Load all included files first (in order)
    config = {}
    for include_file in includes:
        include_path = os.path.abspath(os.path.join(root_dir, include_file))
        if include_path in include_stack:
            raise ConfigCycleError(include_stack + [include_path])
        if not os.path.isfile(include_path):
            raise ConfigIncludeError(f"Included file not found: {include_path}")

        with open(include_path, "r", encoding="utf-8") as f:
            included_config = _load(
                f, os.path.dirname(include_path), include_stack + [include_path]
            )
        config = deep_merge(config, included_config)

    # Merge the main config (without include/override directives)
    if cleaned_config:
        config = deep_merge(config, cleaned_config)

    # Apply overrides using dot notation
    for key_path, value in overrides.items():
        config = set_nested_value(config, key_path, parse_value(value))

    return config


def load_config(config_str, root_dir=None):
    """Load a configuration from a YAML string.

    Parameters
    ----------
    config_str : str
        YAML configuration string
    root_dir : str, optional
        Directory relative to which included files are resolved. If not
        specified, the current working directory is used.

    Returns
    -------
    dict
        Loaded and merged configuration dictionary
    """
    root_dir = os.getcwd() if root_dir is None else root_dir

    return _load(config_str, root_dir, [])


def load_config_file(cfg_path):
    """Load a configuration file to a dictionary.

    Parameters
    ----------
    cfg_path : str
        Path to the configuration file

    Returns
    -------
    dict
        Loaded and merged configuration dictionary
    """
    cfg_path = os.path.abspath(cfg_path)
    if not os.path.isfile(cfg_path):
        raise ConfigIncludeError(f"Configuration file not found: {cfg_path}")

    with open(cfg_path, "r", encoding="utf-8") as f:
        return _load(f, os.path.dirname(cfg_path), [cfg_path])
