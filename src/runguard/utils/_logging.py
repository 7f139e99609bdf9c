"""Structured logging for supervisor events.

runguard shares the terminal with the command it supervises, so its own
events are quiet by default (WARNING) and go to stderr or to a log file,
never to stdout. Each logger is built with ``structlog.wrap_logger`` and
leaves the global structlog configuration alone, so applications that
embed runguard keep their own setup.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Literal, TextIO, cast

import structlog
from structlog.typing import FilteringBoundLogger, Processor

LogFormatType = Literal["json", "text"]

DEFAULT_LOG_LEVEL = logging.WARNING
DEBUG_ENV_VAR = "RUNGUARD_DEBUG"
LEVEL_ENV_VAR = "RUNGUARD_LOG_LEVEL"


def resolve_log_level(level: str | None = None) -> int:
    """Work out the effective log level.

    RUNGUARD_DEBUG, when set to anything non-empty, forces DEBUG. Otherwise
    ``level`` is used, then RUNGUARD_LOG_LEVEL. Unknown names fall back to
    WARNING.

    Args:
        level: Level name such as ``"info"``, case-insensitive.

    Returns:
        A ``logging`` level number.
    """
    if os.environ.get(DEBUG_ENV_VAR):
        return logging.DEBUG
    if level is None:
        level = os.environ.get(LEVEL_ENV_VAR, "")
    return logging.getLevelNamesMapping().get(level.strip().upper(), DEFAULT_LOG_LEVEL)


def _open_log_file(log_file: str) -> TextIO:
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return path.open("a", encoding="utf-8")


def _processors(log_format: LogFormatType) -> list[Processor]:
    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if log_format == "json":
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    return processors


def create_logger(
    *,
    level: str | None = None,
    log_format: LogFormatType = "text",
    log_file: str = "",
) -> FilteringBoundLogger:
    """Create a standalone logger for supervisor events.

    Args:
        level: Level name. See resolve_log_level() for how it combines
            with the environment.
        log_format: ``"text"`` renders ``timestamp [level] event key=value``
            lines, ``"json"`` one JSON object per line.
        log_file: File to append to. Empty means stderr.

    Returns:
        A bound logger that drops events below the effective level.
    """
    stream = _open_log_file(log_file) if log_file else sys.stderr

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            structlog.WriteLogger(stream),
            processors=_processors(log_format),
            wrapper_class=structlog.make_filtering_bound_logger(
                resolve_log_level(level)
            ),
            context_class=dict,
        ),
    )
