import sys
from typing import TYPE_CHECKING

import pytest

from runguard.supervisor import ProcessRunner, run_process

if TYPE_CHECKING:
    from tests.conftest import CapturedLogs

pytestmark = pytest.mark.anyio

_PRINT_BOTH = "import sys; print('out'); print('err', file=sys.stderr)"


async def test_reports_exit_code(captured_logs: "CapturedLogs") -> None:
    result = await run_process(["sh", "-c", "exit 5"], logger=captured_logs.logger)

    assert result.exit_code == 5
    assert result.error is None
    assert captured_logs.events == ["process_started", "process_exited"]


async def test_arguments_are_not_shell_interpreted(
    capfd: pytest.CaptureFixture[str], captured_logs: "CapturedLogs"
) -> None:
    result = await ProcessRunner(captured_logs.logger).run(
        ["sh", "-c", 'printf "%s\\n" "$1"', "sh", "$HOME; echo injected"]
    )

    assert result.success
    assert capfd.readouterr().out == "$HOME; echo injected\n"


async def test_child_inherits_standard_streams(
    capfd: pytest.CaptureFixture[str], captured_logs: "CapturedLogs"
) -> None:
    result = await run_process(
        [sys.executable, "-c", _PRINT_BOTH],
        logger=captured_logs.logger,
    )

    captured = capfd.readouterr()
    assert result.success
    assert captured.out == "out\n"
    assert captured.err == "err\n"


async def test_killed_child_reports_negative_signal(
    captured_logs: "CapturedLogs",
) -> None:
    result = await run_process(["sh", "-c", "kill -9 $$"], logger=captured_logs.logger)

    assert result.exit_code == -9
    assert result.terminating_signal is not None
    assert result.terminating_signal.name == "SIGKILL"
