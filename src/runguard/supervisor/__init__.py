"""Supervisor package for running commands under a policy.

This package runs an external program to completion and reports a single
outcome, using anyio for the concurrency between the process and its
timers.

Key Components:
    - ProcessRunner: Launch a command with inherited streams and await it
    - run_with_retry: Re-run a failing command up to a retry budget
    - run_with_timeout: Run a command under a deadline with signal escalation
    - TimeoutSpec: Deadline, signal and grace period for a timed run
    - RunResult: Immutable outcome of a supervised run
    - SupervisionState: Lifecycle states of a process under a deadline

Example:
    >>> from runguard.supervisor import TimeoutSpec, run_with_timeout
    >>> spec = TimeoutSpec(deadline=5.0, grace=1.0)
    >>> result = await run_with_timeout(spec, ["make", "test"])
    >>> result.exit_code
    0
"""

from ._models import (
    DEFAULT_GRACE_PERIOD,
    DEFAULT_SIGNAL,
    RunResult,
    SupervisionState,
    TimeoutSpec,
)
from ._process import ProcessRunner, normalize_command, resolve_executable, run_process
from ._retry import run_with_retry, run_with_retry_sync
from ._timeout import Escalation, run_with_timeout, run_with_timeout_sync

__all__ = [
    "DEFAULT_GRACE_PERIOD",
    "DEFAULT_SIGNAL",
    "Escalation",
    "ProcessRunner",
    "RunResult",
    "SupervisionState",
    "TimeoutSpec",
    "normalize_command",
    "resolve_executable",
    "run_process",
    "run_with_retry",
    "run_with_retry_sync",
    "run_with_timeout",
    "run_with_timeout_sync",
]
