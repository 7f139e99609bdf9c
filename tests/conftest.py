"""Shared test fixtures for runguard tests."""

import logging
import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import pytest
import structlog
from structlog.testing import CapturingLogger
from structlog.typing import FilteringBoundLogger

from runguard.cli import CLIContext
from runguard.supervisor import RunResult


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@dataclass(frozen=True, slots=True)
class CapturedLogs:
    """A debug-level logger whose events are recorded in memory."""

    logger: FilteringBoundLogger
    capture: CapturingLogger

    @property
    def events(self) -> list[str]:
        return [str(call.kwargs["event"]) for call in self.capture.calls]

    def find(self, event: str) -> list[dict[str, object]]:
        return [
            dict(call.kwargs)
            for call in self.capture.calls
            if call.kwargs["event"] == event
        ]


@pytest.fixture
def captured_logs() -> CapturedLogs:
    capture = CapturingLogger()
    logger = structlog.wrap_logger(
        capture,
        processors=[],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        context_class=dict,
    )
    return CapturedLogs(logger=logger, capture=capture)


@dataclass(slots=True)
class ScriptedRunner:
    """Stand-in for ProcessRunner that replays canned results.

    The last result repeats once the script runs out.
    """

    results: list[RunResult]
    logger: FilteringBoundLogger
    calls: list[tuple[str, ...]] = field(default_factory=list)

    async def run(self, command: Sequence[str]) -> RunResult:
        self.calls.append(tuple(command))
        index = min(len(self.calls), len(self.results)) - 1
        return self.results[index]


ScriptedRunnerFactory = Callable[..., ScriptedRunner]


@pytest.fixture
def scripted_runner(captured_logs: CapturedLogs) -> ScriptedRunnerFactory:
    """Return a factory building a ScriptedRunner from exit codes or results."""

    def _make(*outcomes: int | RunResult) -> ScriptedRunner:
        results = [
            outcome if isinstance(outcome, RunResult) else RunResult(exit_code=outcome)
            for outcome in outcomes
        ]
        return ScriptedRunner(results=results, logger=captured_logs.logger)

    return _make


@pytest.fixture(autouse=True)
def reset_cli_context() -> None:
    CLIContext.reset()


@pytest.fixture(autouse=True)
def clean_runguard_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's RUNGUARD_* settings out of the tests."""
    for key in list(os.environ):
        if key.startswith("RUNGUARD_"):
            monkeypatch.delenv(key)
