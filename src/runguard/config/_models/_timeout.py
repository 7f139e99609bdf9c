"""Timeout configuration model.

This module provides the TimeoutConfig Pydantic model holding the defaults
used by `runguard timeout` when no flags are given.
"""

from signal import Signals
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, field_validator

from runguard.supervisor import DEFAULT_GRACE_PERIOD, DEFAULT_SIGNAL
from runguard.utils import parse_duration, parse_signal


class TimeoutConfig(BaseModel):
    """Timeout configuration section.

    Attributes:
        grace: Seconds between the first signal and the forced kill. Accepts
            a duration string such as "500ms" or a number of seconds.
        signal: Signal sent when the deadline expires, by name or number.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    grace: float = DEFAULT_GRACE_PERIOD
    signal: Signals = DEFAULT_SIGNAL

    @field_validator("grace", mode="before")
    @classmethod
    def _parse_grace(cls, value: object) -> float:
        if isinstance(value, bool) or not isinstance(value, str | int | float):
            msg = f"expected a duration, got {type(value).__name__}"
            raise ValueError(msg)  # noqa: TRY004
        return parse_duration(value)

    @field_validator("signal", mode="before")
    @classmethod
    def _parse_signal(cls, value: object) -> Signals:
        if isinstance(value, bool) or not isinstance(value, str | int):
            msg = f"expected a signal name or number, got {type(value).__name__}"
            raise ValueError(msg)  # noqa: TRY004
        return parse_signal(value)
