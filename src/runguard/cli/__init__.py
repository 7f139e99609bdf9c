"""Utilities used by the runguard CLI."""

from ._app import app, create_app, isolate_command, main, retry_main, timeout_main
from ._commands import CLIContext

__all__ = [
    "CLIContext",
    "app",
    "create_app",
    "isolate_command",
    "main",
    "retry_main",
    "timeout_main",
]
