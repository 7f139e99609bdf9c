"""runguard CLI commands."""
# pyright: reportUnusedCallResult=false

from typing import TYPE_CHECKING

from ._context import CLIContext
from ._retry import app as retry_app
from ._shared import (
    SIGNAL_EXIT_BASE,
    ExitCode,
    exit_code_for,
    exit_with_error,
    exit_with_result,
    get_error_console,
)
from ._timeout import app as timeout_app

if TYPE_CHECKING:
    from cyclopts import App

__all__ = [
    "SIGNAL_EXIT_BASE",
    "CLIContext",
    "ExitCode",
    "exit_code_for",
    "exit_with_error",
    "exit_with_result",
    "get_error_console",
    "register_commands",
    "retry_app",
    "timeout_app",
]


def register_commands(app: "App") -> None:
    app.command(retry_app)
    app.command(timeout_app)
