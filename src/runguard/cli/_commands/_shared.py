"""Exit handling shared by the retry and timeout commands.

Both commands end the same way: they translate a RunResult into the exit
code runguard itself exits with, printing the failure reason to stderr
when the command did not run to completion.
"""

from enum import IntEnum
from typing import Never

from rich.console import Console
from rich.markup import escape

from runguard.supervisor import RunResult

__all__ = [
    "SIGNAL_EXIT_BASE",
    "ExitCode",
    "exit_code_for",
    "exit_with_error",
    "exit_with_result",
    "get_error_console",
]

SIGNAL_EXIT_BASE = 128
"""Shell convention: a child killed by signal N exits with 128 + N."""


class ExitCode(IntEnum):
    """Exit codes used by runguard itself.

    Any other exit code is passed through from the supervised command.
    """

    SUCCESS = 0
    FAILURE = 1


def get_error_console() -> Console:
    """Return a console for error messages on stderr.

    Highlighting is off so paths and numbers in messages print plainly.
    """
    return Console(stderr=True, highlight=False)


def exit_with_error(
    message: str,
    code: int = ExitCode.FAILURE,
    *,
    console: Console | None = None,
) -> Never:
    """Print ``Error: <message>`` to stderr and exit.

    The message is printed literally; square brackets in it are not treated
    as Rich markup.

    Args:
        message: What went wrong.
        code: Exit code for runguard.
        console: Console to print on. Defaults to get_error_console().

    Raises:
        SystemExit: Always.
    """
    if console is None:
        console = get_error_console()

    console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)
    raise SystemExit(code)


def exit_code_for(result: RunResult) -> int:
    """Map a run result to the exit code runguard should exit with.

    Returns 1 when the command could not be run or timed out, 128 + N when
    it was terminated by signal N, and its own exit code otherwise.
    """
    if result.error is not None:
        return ExitCode.FAILURE
    if result.exit_code < 0:
        return SIGNAL_EXIT_BASE - result.exit_code
    return result.exit_code


def exit_with_result(
    result: RunResult,
    *,
    console: Console | None = None,
) -> Never:
    """Exit with the code for a run result, printing its error if any.

    Raises:
        SystemExit: Always raised with exit_code_for(result).
    """
    if result.error is not None:
        exit_with_error(str(result.error), exit_code_for(result), console=console)
    raise SystemExit(exit_code_for(result))
