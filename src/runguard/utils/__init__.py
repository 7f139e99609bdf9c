"""Shared utilities for runguard."""

from ._duration import format_duration, parse_duration
from ._logging import LogFormatType, create_logger
from ._signals import parse_signal

__all__ = [
    "LogFormatType",
    "create_logger",
    "format_duration",
    "parse_duration",
    "parse_signal",
]
