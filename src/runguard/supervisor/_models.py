"""Data models for the supervisor system.

This module defines the core data types for running supervised commands:
- SupervisionState: Lifecycle states of a process under a deadline
- TimeoutSpec: Deadline, signal and grace period for a timed run
- RunResult: Immutable outcome of a supervised run
"""

from dataclasses import dataclass
from enum import StrEnum
from signal import Signals
from typing import Self

from runguard.exceptions import (
    CommandFailedError,
    InvalidDurationError,
    LaunchError,
    TimeoutExpiredError,
)
from runguard.utils import parse_signal

DEFAULT_GRACE_PERIOD: float = 3.0
"""Seconds to wait after the first signal before killing the process."""

DEFAULT_SIGNAL: Signals = Signals.SIGTERM


class SupervisionState(StrEnum):
    """Lifecycle states of a process running under a deadline.

    - RUNNING: Process is running and no signal has been sent
    - COMPLETED: Process exited on its own before the deadline
    - SIGNALED: Deadline expired and the configured signal was delivered
    - KILLED: Grace period expired and the process was force killed
    """

    RUNNING = "running"
    COMPLETED = "completed"
    SIGNALED = "signaled"
    KILLED = "killed"


@dataclass(frozen=True, slots=True)
class TimeoutSpec:
    """Deadline policy for a timed run.

    Attributes:
        deadline: Seconds the command may run before it is signalled.
        signal: Signal delivered when the deadline expires.
        grace: Seconds to wait after the signal before a forced kill.

    Raises:
        InvalidDurationError: If deadline or grace is negative.
        InvalidSignalError: If signal does not name a valid signal.
    """

    deadline: float
    signal: Signals = DEFAULT_SIGNAL
    grace: float = DEFAULT_GRACE_PERIOD

    def __post_init__(self) -> None:
        for name in ("deadline", "grace"):
            value: float = getattr(self, name)
            if value < 0:
                msg = f"invalid {name} {value!r}: must not be negative"
                raise InvalidDurationError(msg, value=value)
        if not isinstance(self.signal, Signals):
            object.__setattr__(self, "signal", parse_signal(self.signal))


@dataclass(frozen=True, slots=True)
class RunResult:
    """Immutable outcome of a supervised run.

    Either the process produced an exit code and ``error`` is None, or it
    could not be run to completion (launch failure, timeout) and ``error``
    holds the reason with ``exit_code`` set to 1.

    Attributes:
        exit_code: Exit code of the process. Negative values mean the
            process was terminated by that signal number.
        error: Why the command could not be run to completion, if it couldn't.
        attempts: Number of times the command was started.
        timed_out: Whether the command overran its deadline.
    """

    exit_code: int
    error: Exception | None = None
    attempts: int = 1
    timed_out: bool = False

    @classmethod
    def from_error(cls, error: Exception, *, attempts: int = 1) -> Self:
        """Create a failed result for a run that produced no exit code."""
        return cls(
            exit_code=1,
            error=error,
            attempts=attempts,
            timed_out=isinstance(error, TimeoutExpiredError),
        )

    @property
    def success(self) -> bool:
        """Return True if the command ran and exited with code 0."""
        return self.error is None and self.exit_code == 0

    @property
    def launch_failed(self) -> bool:
        """Return True if the command could not be started."""
        return isinstance(self.error, LaunchError)

    @property
    def terminating_signal(self) -> Signals | None:
        """Return the signal that terminated the process, if any."""
        if self.error is not None or self.exit_code >= 0:
            return None
        try:
            return Signals(-self.exit_code)
        except ValueError:
            return None

    def raise_for_status(self) -> None:
        """Raise the run's error, or CommandFailedError for a nonzero exit."""
        if self.error is not None:
            raise self.error
        if self.exit_code != 0:
            msg = f"Command failed with exit code {self.exit_code}"
            raise CommandFailedError(msg, exit_code=self.exit_code)
