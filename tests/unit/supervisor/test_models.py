"""Tests for supervisor data models."""

import signal
import typing

import pytest

from runguard.exceptions import (
    CommandFailedError,
    CommandNotFoundError,
    InvalidDurationError,
    InvalidSignalError,
    TimeoutExpiredError,
)
from runguard.supervisor import (
    DEFAULT_GRACE_PERIOD,
    DEFAULT_SIGNAL,
    RunResult,
    SupervisionState,
    TimeoutSpec,
)


class TestTimeoutSpec:
    def test_defaults(self) -> None:
        spec = TimeoutSpec(deadline=5.0)

        assert spec.signal is DEFAULT_SIGNAL is signal.SIGTERM
        assert spec.grace == DEFAULT_GRACE_PERIOD == 3.0

    def test_zero_values_are_allowed(self) -> None:
        spec = TimeoutSpec(deadline=0, grace=0)

        assert spec.deadline == 0
        assert spec.grace == 0

    @pytest.mark.parametrize("field", ["deadline", "grace"])
    def test_rejects_negative_durations(self, field: str) -> None:
        kwargs = {"deadline": 1.0, field: -0.5}

        with pytest.raises(InvalidDurationError, match=f"invalid {field}"):
            TimeoutSpec(**kwargs)

    def test_coerces_signal_names_and_numbers(self) -> None:
        assert TimeoutSpec(deadline=1, signal="INT").signal is signal.SIGINT  # pyright: ignore[reportArgumentType]
        assert TimeoutSpec(deadline=1, signal=9).signal is signal.SIGKILL  # pyright: ignore[reportArgumentType]

    def test_rejects_invalid_signal(self) -> None:
        with pytest.raises(InvalidSignalError):
            TimeoutSpec(deadline=1, signal="NOPE")  # pyright: ignore[reportArgumentType]

    def test_field_annotations_resolve(self) -> None:
        hints = typing.get_type_hints(TimeoutSpec)

        assert hints == {"deadline": float, "signal": signal.Signals, "grace": float}

    def test_is_frozen(self) -> None:
        spec = TimeoutSpec(deadline=1)

        with pytest.raises(AttributeError):
            spec.deadline = 2  # pyright: ignore[reportAttributeAccessIssue]


class TestRunResult:
    def test_success(self) -> None:
        result = RunResult(exit_code=0)

        assert result.success
        assert not result.launch_failed
        assert not result.timed_out
        assert result.attempts == 1
        result.raise_for_status()

    def test_nonzero_exit(self) -> None:
        result = RunResult(exit_code=3)

        assert not result.success
        with pytest.raises(CommandFailedError) as exc_info:
            result.raise_for_status()
        assert exc_info.value.exit_code == 3

    def test_from_launch_error(self) -> None:
        error = CommandNotFoundError("nope: not found", command=("nope",))

        result = RunResult.from_error(error, attempts=2)

        assert result.exit_code == 1
        assert result.error is error
        assert result.attempts == 2
        assert result.launch_failed
        assert not result.timed_out
        assert not result.success
        with pytest.raises(CommandNotFoundError):
            result.raise_for_status()

    def test_from_timeout_error(self) -> None:
        result = RunResult.from_error(TimeoutExpiredError("timeout (1s)", deadline=1))

        assert result.timed_out
        assert result.exit_code == 1
        assert not result.launch_failed
        assert str(result.error) == "timeout (1s)"

    def test_terminating_signal(self) -> None:
        assert RunResult(exit_code=-signal.SIGTERM).terminating_signal is signal.SIGTERM
        assert RunResult(exit_code=0).terminating_signal is None
        assert RunResult(exit_code=143).terminating_signal is None

    def test_exit_code_of_zero_with_error_is_not_success(self) -> None:
        result = RunResult(exit_code=0, error=RuntimeError("boom"))

        assert not result.success


class TestSupervisionState:
    def test_values(self) -> None:
        assert [state.value for state in SupervisionState] == [
            "running",
            "completed",
            "signaled",
            "killed",
        ]
