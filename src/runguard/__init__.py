"""Run external commands under a retry or timeout policy.

runguard launches a program with the caller's standard streams and reports
a single outcome for it: re-running it while it fails, or enforcing a
deadline by escalating from a polite signal to a forced kill.

Example:
    >>> from runguard import TimeoutSpec, run_with_timeout_sync
    >>> result = run_with_timeout_sync(TimeoutSpec(deadline=10), ["make"])
    >>> result.exit_code
    0
"""

from runguard.exceptions import (
    CommandNotFoundError,
    ConfigurationError,
    LaunchError,
    NegativeRetriesError,
    ProcessStartError,
    RunguardError,
    TimeoutExpiredError,
)
from runguard.supervisor import (
    ProcessRunner,
    RunResult,
    SupervisionState,
    TimeoutSpec,
    run_process,
    run_with_retry,
    run_with_retry_sync,
    run_with_timeout,
    run_with_timeout_sync,
)
from runguard.utils import format_duration, parse_duration, parse_signal

__all__ = [
    "CommandNotFoundError",
    "ConfigurationError",
    "LaunchError",
    "NegativeRetriesError",
    "ProcessRunner",
    "ProcessStartError",
    "RunResult",
    "RunguardError",
    "SupervisionState",
    "TimeoutExpiredError",
    "TimeoutSpec",
    "format_duration",
    "parse_duration",
    "parse_signal",
    "run_process",
    "run_with_retry",
    "run_with_retry_sync",
    "run_with_timeout",
    "run_with_timeout_sync",
]
