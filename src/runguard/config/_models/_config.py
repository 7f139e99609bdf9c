# pyright: reportExplicitAny=false, reportAny=false
"""Configuration container with typed access.

This module provides the main Config class that serves as the primary
interface for accessing runguard configuration values.
"""

import dataclasses
from pathlib import Path  # noqa: TC003 - Used in runtime type annotations
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from runguard.config._defaults import DEFAULT_CONFIG
from runguard.config._loader import deep_merge, read_toml_file
from runguard.config._models._source import ConfigSource, ConfigSourceName
from runguard.config._models._logging import LoggingConfig
from runguard.config._models._timeout import TimeoutConfig
from runguard.exceptions import ConfigValidationError


class Config(BaseModel):
    """Configuration container with typed access.

    This class provides immutable, type-safe access to runguard
    configuration. Use factory methods to create instances rather than the
    constructor.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    timeout: TimeoutConfig = Field(default_factory=TimeoutConfig)

    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())

    @classmethod
    def _validate(
        cls,
        data: dict[str, Any],
        *,
        source: str | None = None,
    ) -> Self:
        """Validate a merged configuration dictionary.

        Raises:
            ConfigValidationError: On the first invalid value.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            error = e.errors()[0]
            key = ".".join(str(part) for part in error["loc"])
            origin = f" in {source}" if source else ""
            msg = f"Invalid configuration value for '{key}'{origin}: {error['msg']}"
            raise ConfigValidationError(
                msg,
                key=key,
                value=error.get("input"),
                expected=error["type"],
                source=source,
            ) from e

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create configuration from a dictionary.

        Args:
            data: Dictionary of configuration values, merged over defaults.

        Returns:
            Configuration object from the dictionary.

        Raises:
            ConfigValidationError: If validation fails.
        """
        return cls._validate(deep_merge(DEFAULT_CONFIG, data))

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Load configuration from a specific file.

        Args:
            path: Path to the TOML config file.

        Returns:
            Configuration object from the specified file only.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        data = read_toml_file(path)
        config = cls._validate(deep_merge(DEFAULT_CONFIG, data), source=str(path))
        config._sources = (
            ConfigSource(
                name=ConfigSourceName.FILE,
                path=path,
                exists=True,
                values=data,
            ),
        )
        return config

    @classmethod
    def load(
        cls,
        *,
        config_path: Path | None = None,
        include_env: bool = True,
        cli_overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Load configuration from all discovered sources.

        Sources are merged from lowest to highest precedence: defaults, the
        user config file, the explicit config file, environment variables
        and CLI overrides.

        Args:
            config_path: Explicit config file (--config). Must exist if given.
            include_env: Whether to read RUNGUARD_* environment variables.
            cli_overrides: Values from CLI flags, in config layout.

        Returns:
            The merged configuration.

        Raises:
            FileNotFoundError: If config_path does not exist.
            ConfigLoadError: If a config file cannot be parsed.
            ConfigValidationError: If any source holds an invalid value.
        """
        # Deferred import to avoid circular dependency
        from runguard.config._discovery import discover_sources  # noqa: PLC0415

        sources = discover_sources(
            config_path,
            include_env=include_env,
            cli_overrides=cli_overrides,
        )

        merged: dict[str, Any] = {}
        used: list[ConfigSource] = []
        for discovered in reversed(sources):
            if not discovered.exists:
                continue
            source = discovered
            if source.path is not None:
                source = dataclasses.replace(source, values=read_toml_file(source.path))
            # Every layer must be valid on its own
            layer = deep_merge(DEFAULT_CONFIG, source.values)
            cls._validate(layer, source=source.label)
            merged = deep_merge(merged, source.values)
            used.append(source)

        config = cls._validate(merged)
        config._sources = tuple(reversed(used))
        return config

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the sources that contributed to this configuration.

        Sources are ordered from highest to lowest precedence.
        """
        return list(self._sources)
