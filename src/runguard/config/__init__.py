"""Configuration loading for runguard.

Configuration is layered from built-in defaults, the user config file,
an explicit ``--config`` file, ``RUNGUARD_*`` environment variables and CLI
flags, in increasing order of precedence.

Example config file::

    [timeout]
    grace = "5s"
    signal = "INT"

    [logging]
    level = "info"
    format = "json"
    file = "/var/log/runguard.log"
"""

from ._defaults import DEFAULT_CONFIG
from ._discovery import discover_sources, get_user_config_path
from ._load import safe_load_config
from ._loader import deep_merge, parse_env_vars, read_toml_file
from ._models import (
    Config,
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LoggingConfig,
    LogLevel,
    TimeoutConfig,
)

__all__ = [
    "DEFAULT_CONFIG",
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "TimeoutConfig",
    "deep_merge",
    "discover_sources",
    "get_user_config_path",
    "parse_env_vars",
    "read_toml_file",
    "safe_load_config",
]
