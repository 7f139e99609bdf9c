"""Process runner for launching and awaiting a single command.

This module provides the ProcessRunner class that spawns a child process
with the parent's standard streams and waits for its terminal status.
"""

import os
import shutil
from collections.abc import Sequence
from typing import final

import anyio
import anyio.abc
from structlog.typing import FilteringBoundLogger

from runguard.exceptions import (
    CommandNotFoundError,
    EmptyCommandError,
    LaunchError,
    ProcessStartError,
)
from runguard.utils import create_logger

from ._models import RunResult


def normalize_command(command: Sequence[str]) -> tuple[str, ...]:
    """Return the command as a tuple of strings.

    Raises:
        EmptyCommandError: If the command is empty or a bare string.
    """
    if isinstance(command, str):
        msg = "command must be a sequence of arguments, not a string"
        raise EmptyCommandError(msg)
    argv = tuple(command)
    if not argv or not argv[0]:
        msg = "command must name a program to run"
        raise EmptyCommandError(msg)
    return argv


def resolve_executable(name: str, *, command: tuple[str, ...] | None = None) -> str:
    """Resolve a program name to the path that will be executed.

    Names containing a path separator are used as given. Other names are
    looked up on PATH.

    Args:
        name: Program name or path.
        command: Full command for error context. Defaults to ``(name,)``.

    Returns:
        The path to execute.

    Raises:
        CommandNotFoundError: If the name is not found on PATH.
    """
    if os.sep in name or (os.altsep is not None and os.altsep in name):
        return name

    path = shutil.which(name)
    if path is None:
        msg = f"{name}: executable file not found in $PATH"
        raise CommandNotFoundError(msg, command=command or (name,))
    return path


@final
class ProcessRunner:
    """Launches a command and waits for it to exit.

    The child inherits stdin, stdout and stderr from the parent; nothing is
    piped or buffered. No shell is involved, so arguments are passed to the
    program exactly as given.
    """

    __slots__ = ("_logger",)

    def __init__(self, logger: FilteringBoundLogger | None = None) -> None:
        """Initialize the runner.

        Args:
            logger: Logger for process lifecycle events. Uses a stderr
                logger configured from the environment if None.
        """
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else create_logger()
        )

    @property
    def logger(self) -> FilteringBoundLogger:
        """Return the logger used for process lifecycle events."""
        return self._logger

    async def start(self, command: Sequence[str]) -> anyio.abc.Process:
        """Start the command without waiting for it.

        The caller owns the returned process and must wait for it, typically
        with ``async with process:`` so that it is killed and reaped if the
        caller is cancelled.

        Args:
            command: Program followed by its arguments.

        Returns:
            The running process.

        Raises:
            EmptyCommandError: If the command is empty.
            CommandNotFoundError: If the program cannot be found.
            ProcessStartError: If the operating system fails to start it.
        """
        argv = normalize_command(command)

        try:
            executable = resolve_executable(argv[0], command=argv)
            try:
                process = await anyio.open_process(
                    [executable, *argv[1:]],
                    stdin=None,
                    stdout=None,
                    stderr=None,
                )
            except OSError as e:
                msg = f"failed to start {argv[0]}: {e}"
                raise ProcessStartError(msg, command=argv, cause=e) from e
        except LaunchError as e:
            self._logger.warning("launch_failed", argv=list(argv), error=str(e))
            raise

        self._logger.info("process_started", pid=process.pid, argv=list(argv))
        return process

    async def wait(self, process: anyio.abc.Process) -> int:
        """Wait for a started process to exit and return its exit code."""
        exit_code = await process.wait()
        self._logger.info("process_exited", pid=process.pid, exit_code=exit_code)
        return exit_code

    async def run(self, command: Sequence[str]) -> RunResult:
        """Run the command to completion.

        Launch failures are reported in the result rather than raised. If
        the calling task is cancelled, the child is killed and reaped before
        the cancellation propagates.

        Args:
            command: Program followed by its arguments.

        Returns:
            The exit code of the process, or the launch failure.

        Raises:
            EmptyCommandError: If the command is empty.
        """
        try:
            process = await self.start(command)
        except LaunchError as e:
            return RunResult.from_error(e)

        async with process:
            exit_code = await self.wait(process)
        return RunResult(exit_code=exit_code)


async def run_process(
    command: Sequence[str],
    *,
    logger: FilteringBoundLogger | None = None,
) -> RunResult:
    """Run a command once with inherited standard streams.

    Args:
        command: Program followed by its arguments.
        logger: Optional logger for lifecycle events.

    Returns:
        The outcome of the run.
    """
    return await ProcessRunner(logger).run(command)
