import os
import shutil
import sys
from collections.abc import Callable
from pathlib import Path

import pytest


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)
            if sys.platform == "win32" or shutil.which("sh") is None:
                item.add_marker(pytest.mark.skip(reason="requires a POSIX shell"))


def _is_alive(pid: int) -> bool:
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    return True


@pytest.fixture
def is_alive() -> Callable[[int], bool]:
    """Return a function reporting whether a PID exists."""
    return _is_alive


@pytest.fixture
def pid_file(tmp_path: Path) -> Path:
    """Path where a child shell writes its PID with ``echo $$``."""
    return tmp_path / "child.pid"


@pytest.fixture
def read_pid(pid_file: Path) -> Callable[[], int]:
    def _read() -> int:
        return int(pid_file.read_text().strip())

    return _read
