"""runguard exceptions."""

from pathlib import Path  # noqa: TC003 - Used in runtime type annotations
from typing import Any


class RunguardError(Exception):
    """Base exception for runguard errors."""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(RunguardError, ValueError):
    """Raised when a supervisor is configured with invalid arguments.

    Configuration errors are detected before any process is spawned and are
    never retried.
    """


class NegativeRetriesError(ConfigurationError):
    """Raised when a negative retry budget is given.

    Attributes:
        budget: The rejected retry budget.
    """

    def __init__(self, message: str = "", *, budget: int) -> None:
        """Initialize with error message and the rejected budget.

        Args:
            message: Human-readable error message.
            budget: The rejected retry budget.
        """
        super().__init__(message or "negative retries are not allowed")
        self.budget: int = budget


class InvalidDurationError(ConfigurationError):
    """Raised when a duration cannot be parsed or is negative.

    Attributes:
        value: The rejected duration value.
    """

    def __init__(self, message: str, *, value: object) -> None:
        """Initialize with error message and the rejected value."""
        super().__init__(message)
        self.value: object = value


class InvalidSignalError(ConfigurationError):
    """Raised when a signal specification is not valid on this platform.

    Attributes:
        value: The rejected signal value.
    """

    def __init__(self, message: str, *, value: object) -> None:
        """Initialize with error message and the rejected value."""
        super().__init__(message)
        self.value: object = value


class EmptyCommandError(ConfigurationError):
    """Raised when a command has no program to run."""


class ConfigError(RunguardError):
    """Base exception for configuration file errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source


# =============================================================================
# Execution Exceptions
# =============================================================================


class LaunchError(RunguardError):
    """Base exception for a command that could not be started.

    Attributes:
        command: The command that failed to launch.
        cause: The underlying OS error, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        command: tuple[str, ...],
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and launch context.

        Args:
            message: Human-readable error message.
            command: The command that failed to launch.
            cause: The underlying OS error, if any.
        """
        super().__init__(message)
        self.command: tuple[str, ...] = command
        self.cause: Exception | None = cause


class CommandNotFoundError(LaunchError):
    """Raised when the program cannot be found on the search path."""


class ProcessStartError(LaunchError):
    """Raised when the operating system refuses to start the process."""


class TimeoutExpiredError(RunguardError):
    """Raised when a command overruns its deadline.

    Attributes:
        deadline: The deadline in seconds that was exceeded.
    """

    def __init__(self, message: str, *, deadline: float) -> None:
        """Initialize with error message and the exceeded deadline.

        Args:
            message: Human-readable error message.
            deadline: The deadline in seconds that was exceeded.
        """
        super().__init__(message)
        self.deadline: float = deadline


class CommandFailedError(RunguardError):
    """Raised by RunResult.raise_for_status() for an unsuccessful run.

    Attributes:
        exit_code: The exit code reported for the run.
    """

    def __init__(self, message: str, *, exit_code: int) -> None:
        """Initialize with error message and exit code."""
        super().__init__(message)
        self.exit_code: int = exit_code
