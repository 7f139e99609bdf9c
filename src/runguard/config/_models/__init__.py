"""Configuration models."""

from runguard.config._models._config import Config
from runguard.config._models._logging import LogFormat, LoggingConfig, LogLevel
from runguard.config._models._source import ConfigSource, ConfigSourceName
from runguard.config._models._timeout import TimeoutConfig

__all__ = [
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "TimeoutConfig",
]
