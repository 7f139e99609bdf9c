"""Per-invocation state shared by the CLI commands.

The meta launcher loads configuration and builds the logger once, then
publishes them here for the ``retry`` and ``timeout`` commands to pick up.
"""

import contextvars
from dataclasses import dataclass, field
from typing import Self

from structlog.typing import FilteringBoundLogger

from runguard.config import Config
from runguard.supervisor import ProcessRunner

_active: contextvars.ContextVar["CLIContext | None"] = contextvars.ContextVar(
    "runguard_cli_context", default=None
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Configuration and logger for one CLI invocation.

    Attributes:
        config: Effective configuration.
        logger: Logger for supervisor events. None means a logger
            configured from the environment is created on demand.
    """

    config: Config = field(repr=False)
    logger: FilteringBoundLogger | None = field(default=None, repr=False)

    def runner(self) -> ProcessRunner:
        """Return a process runner that logs through this context's logger."""
        return ProcessRunner(self.logger)

    @classmethod
    def get_current(cls) -> Self:
        """Return the published context, or one built from default config.

        Commands called directly, without the launcher, get the fallback.
        """
        ctx = _active.get()
        if ctx is None:
            return cls(config=Config.from_dict({}))
        return ctx

    @classmethod
    def set_current(cls, ctx: "CLIContext") -> None:
        _active.set(ctx)

    @classmethod
    def reset(cls) -> None:
        _active.set(None)
