"""larvtx configuration loading system.

Main Entry Points
-----------------
load_config : Load a configuration from a YAML string
load_config_file : Load a configuration from a YAML file
"""

from .errors import (
    ConfigCycleError,
    ConfigError,
    ConfigIncludeError,
    ConfigValidationError,
)
from .loader import load_config, load_config_file, parse_value, set_nested_value

__all__ = [
    "load_config",
    "load_config_file",
    "parse_value",
    "set_nested_value",
    "ConfigError",
    "ConfigIncludeError",
    "ConfigCycleError",
    "ConfigValidationError",
]
