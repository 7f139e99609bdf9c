import signal
from collections.abc import Callable

import anyio
import pytest


class FakeProcess:
    """In-memory stand-in for anyio.abc.Process.

    Exits on the first signal unless ``ignore_signals`` is set, and always
    exits on kill.
    """

    def __init__(self, *, pid: int = 4242, ignore_signals: bool = False) -> None:
        self.pid = pid
        self.returncode: int | None = None
        self.ignore_signals = ignore_signals
        self.signals: list[signal.Signals] = []
        self.killed = False
        self.signal_error: Exception | None = None
        self._exited = anyio.Event()

    def exit(self, code: int) -> None:
        if self.returncode is None:
            self.returncode = code
            self._exited.set()

    def send_signal(self, sig: signal.Signals) -> None:
        if self.signal_error is not None:
            raise self.signal_error
        self.signals.append(sig)
        if not self.ignore_signals:
            self.exit(-sig)

    def terminate(self) -> None:
        self.send_signal(signal.SIGTERM)

    def kill(self) -> None:
        self.killed = True
        self.exit(-signal.SIGKILL)

    async def wait(self) -> int:
        await self._exited.wait()
        assert self.returncode is not None
        return self.returncode

    async def aclose(self) -> None:
        if self.returncode is None:
            self.kill()
        with anyio.CancelScope(shield=True):
            await self.wait()

    async def __aenter__(self) -> "FakeProcess":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


FakeProcessFactory = Callable[..., FakeProcess]


@pytest.fixture
def fake_process() -> FakeProcessFactory:
    """Return a factory for FakeProcess. Call it inside a running event loop."""
    return FakeProcess
