"""Logging configuration model."""

import os
from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, field_validator


class LogLevel(StrEnum):
    """Log level threshold, from most to least verbose."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log line rendering."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """The ``[logging]`` section.

    Supervisor events go to stderr by default, next to the child's own
    output. Set ``file`` to keep them out of the terminal.

    Attributes:
        level: Events below this level are dropped.
        format: ``text`` for people, ``json`` for log shippers.
        file: Log file path, opened for appending. ``~`` is expanded.
            Empty means stderr.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.WARNING
    format: LogFormat = LogFormat.TEXT
    file: str = ""

    @field_validator("level", "format", mode="before")
    @classmethod
    def _lowercase(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("file")
    @classmethod
    def _expand_user(cls, value: str) -> str:
        value = value.strip()
        return os.path.expanduser(value) if value else value
