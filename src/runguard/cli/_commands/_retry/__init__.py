"""runguard retry command."""

from typing import Annotated

from cyclopts import App, Parameter

from runguard.exceptions import ConfigurationError
from runguard.supervisor import run_with_retry_sync

from .._context import CLIContext
from .._shared import ExitCode, exit_with_error, exit_with_result

app = App(
    name="retry",
    help="Re-run a command until it succeeds.",
    help_on_error=True,
)

USAGE = "usage: runguard retry <count> <command> [args...]"


@app.default
def retry(
    count: Annotated[
        int,
        Parameter(help="Retries allowed after the first attempt. Must be >= 0."),
    ],
    /,
    *command: Annotated[
        str,
        Parameter(help="Command and arguments to run.", allow_leading_hyphen=True),
    ],
) -> None:
    """Run a command, re-running it up to COUNT times while it fails.

    The exit code is that of the last run of the command, or 1 if the
    command could not be started. The command is executed directly, never
    through a shell; a name without a path separator is looked up on PATH.
    """
    ctx = CLIContext.get_current()

    if not command:
        exit_with_error(USAGE, ExitCode.FAILURE)

    try:
        result = run_with_retry_sync(count, command, runner=ctx.runner())
    except ConfigurationError as e:
        exit_with_error(str(e), ExitCode.FAILURE)

    exit_with_result(result)
