"""Time-bounded execution policy.

Runs a command once under a deadline. When the deadline expires the
process receives the configured signal; if it is still alive after the
grace period it is killed. Both stages are cancelled as soon as the
process is seen to exit, and neither touches a process that has already
been reaped.
"""

import functools
from collections.abc import Callable, Sequence
from typing import final

import anyio
import anyio.abc
from structlog.typing import FilteringBoundLogger

from runguard.exceptions import LaunchError, TimeoutExpiredError
from runguard.utils import format_duration

from ._models import RunResult, SupervisionState, TimeoutSpec
from ._process import ProcessRunner, normalize_command


@final
class Escalation:
    """Deadline watcher for one running process.

    Moves the process through RUNNING -> SIGNALED -> KILLED as timers expire,
    or RUNNING -> COMPLETED when ``complete()`` is called first. The
    completion event is set once and checked immediately before every
    signal or kill, with no await in between, so a stage that wakes after
    the process exited does nothing.

    Attributes:
        spec: Deadline, signal and grace period being enforced.
        state: Current supervision state.
    """

    __slots__ = ("_done", "_logger", "_process", "_started_at", "spec", "state")

    def __init__(
        self,
        process: anyio.abc.Process,
        spec: TimeoutSpec,
        logger: FilteringBoundLogger,
    ) -> None:
        """Initialize the watcher.

        The deadline is measured from construction, so create the watcher
        right after the process has been started.

        Args:
            process: The running process to watch.
            spec: Deadline policy to enforce.
            logger: Logger for escalation events.
        """
        self._process = process
        self._logger = logger
        self._done = anyio.Event()
        self._started_at = anyio.current_time()
        self.spec = spec
        self.state = SupervisionState.RUNNING

    @property
    def timed_out(self) -> bool:
        """Return True if the deadline expired while the process was alive."""
        return self.state in (SupervisionState.SIGNALED, SupervisionState.KILLED)

    def complete(self) -> None:
        """Mark the process as exited and stop any pending stage."""
        if self.state is SupervisionState.RUNNING:
            self.state = SupervisionState.COMPLETED
        self._done.set()

    def _is_alive(self) -> bool:
        return not self._done.is_set() and self._process.returncode is None

    async def _call_at(self, when: float, stage: Callable[[], bool]) -> bool:
        """Run ``stage`` at time ``when`` unless the process completes first.

        Returns:
            The stage's return value, or False if the process completed.
        """
        with anyio.CancelScope(deadline=when):
            await self._done.wait()
            return False
        return stage()

    def _send_signal(self) -> bool:
        self._logger.info("deadline_expired")
        if not self._is_alive():
            self._logger.debug("escalation_skipped", stage="signal")
            return False
        try:
            self._process.send_signal(self.spec.signal)
        except ProcessLookupError:
            self._logger.debug("escalation_skipped", stage="signal")
            return False
        self.state = SupervisionState.SIGNALED
        self._logger.info("signal_sent", signal=self.spec.signal.name)
        return True

    def _kill(self) -> bool:
        self._logger.info("grace_expired", grace=self.spec.grace)
        if not self._is_alive():
            self._logger.debug("escalation_skipped", stage="kill")
            return False
        try:
            self._process.kill()
        except ProcessLookupError:
            self._logger.debug("escalation_skipped", stage="kill")
            return False
        self.state = SupervisionState.KILLED
        self._logger.warning("process_killed")
        return True

    async def watch(self) -> None:
        """Run the escalation stages until they finish or the process exits."""
        deadline = self._started_at + self.spec.deadline
        if await self._call_at(deadline, self._send_signal):
            await self._call_at(anyio.current_time() + self.spec.grace, self._kill)


async def run_with_timeout(
    spec: TimeoutSpec,
    command: Sequence[str],
    *,
    runner: ProcessRunner | None = None,
) -> RunResult:
    """Run a command once, enforcing a deadline with escalating signals.

    If the process exits before the deadline, its own exit code is returned
    and no signal is ever sent. Otherwise the configured signal is sent, and
    after the grace period a kill. A run that hit the deadline is always
    reported as a timeout with exit code 1, however the process then ended.
    The process is always reaped before this function returns.

    Args:
        spec: Deadline, signal and grace period.
        command: Program followed by its arguments.
        runner: Process runner to use. Creates a default runner if None.

    Returns:
        The process exit code, a launch failure, or a TimeoutExpiredError.

    Raises:
        EmptyCommandError: If the command is empty. Nothing is spawned.
    """
    argv = normalize_command(command)
    runner = runner or ProcessRunner()
    logger = runner.logger.bind(
        policy="timeout",
        deadline=spec.deadline,
        grace=spec.grace,
    )

    try:
        process = await runner.start(argv)
    except LaunchError as e:
        return RunResult.from_error(e)

    async with process:
        escalation = Escalation(process, spec, logger.bind(pid=process.pid))
        async with anyio.create_task_group() as tg:
            tg.start_soon(escalation.watch)
            try:
                exit_code = await runner.wait(process)
            finally:
                escalation.complete()

    if escalation.timed_out:
        msg = f"timeout ({format_duration(spec.deadline)})"
        logger.warning("timed_out", state=escalation.state.value)
        return RunResult.from_error(TimeoutExpiredError(msg, deadline=spec.deadline))

    return RunResult(exit_code=exit_code)


def run_with_timeout_sync(
    spec: TimeoutSpec,
    command: Sequence[str],
    *,
    runner: ProcessRunner | None = None,
) -> RunResult:
    """Run run_with_timeout() in a new event loop.

    Blocks until the process has exited. Must not be called from a running
    event loop.
    """
    return anyio.run(functools.partial(run_with_timeout, spec, command, runner=runner))
