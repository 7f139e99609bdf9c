"""runguard timeout command."""

from typing import Annotated

from cyclopts import App, Parameter

from runguard.exceptions import ConfigurationError
from runguard.supervisor import TimeoutSpec, run_with_timeout_sync
from runguard.utils import parse_duration, parse_signal

from .._context import CLIContext
from .._shared import ExitCode, exit_with_error, exit_with_result

app = App(
    name="timeout",
    help="Run a command with a time limit.",
    help_on_error=True,
)

USAGE = "usage: runguard timeout <duration> <command> [args...]"


@app.default
def timeout(
    duration: Annotated[
        str,
        Parameter(help="Time the command may run, e.g. 500ms, 30s or 1m30s."),
    ],
    /,
    *command: Annotated[
        str,
        Parameter(help="Command and arguments to run.", allow_leading_hyphen=True),
    ],
    grace: Annotated[
        str | None,
        Parameter(
            name=["--grace", "-g"],
            help="Grace period after the signal before the command is killed.",
        ),
    ] = None,
    sig: Annotated[
        str | None,
        Parameter(
            name=["--signal", "-s"],
            help="Signal to send on timeout, by name (TERM) or number (15).",
        ),
    ] = None,
) -> None:
    """Run a command, signalling it if it is still running after DURATION.

    If the command has not exited by the end of the grace period, it is
    killed. The exit code is the command's own, or 1 if it could not be
    started or timed out. Defaults for the grace period and signal come from
    the [timeout] section of the configuration.
    """
    ctx = CLIContext.get_current()
    defaults = ctx.config.timeout

    if not command:
        exit_with_error(USAGE, ExitCode.FAILURE)

    try:
        spec = TimeoutSpec(
            deadline=parse_duration(duration),
            signal=parse_signal(sig) if sig is not None else defaults.signal,
            grace=parse_duration(grace) if grace is not None else defaults.grace,
        )
        result = run_with_timeout_sync(spec, command, runner=ctx.runner())
    except ConfigurationError as e:
        exit_with_error(str(e), ExitCode.FAILURE)

    exit_with_result(result)
