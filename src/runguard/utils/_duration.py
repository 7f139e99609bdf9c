"""Duration parsing and formatting.

Durations are written as a sequence of decimal numbers, each with an
optional fraction and a unit suffix, such as ``300ms``, ``1.5s`` or
``2h45m``. Valid units are ``ns``, ``us`` (or ``µs``), ``ms``, ``s``, ``m``
and ``h``. A bare number is taken as seconds.
"""

import re

from runguard.exceptions import InvalidDurationError

_UNITS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,  # U+00B5 micro sign
    "μs": 1e-6,  # U+03BC greek small letter mu
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

# Longer units first so "ms" is not read as "m" followed by garbage
_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_BARE_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def parse_duration(value: str | float) -> float:
    """Parse a duration into seconds.

    Args:
        value: A duration string (``"1m30s"``), or a number of seconds.

    Returns:
        The duration in seconds.

    Raises:
        InvalidDurationError: If the value cannot be parsed or is negative.

    Examples:
        >>> parse_duration("1m30s")
        90.0
        >>> parse_duration("250ms")
        0.25
        >>> parse_duration(2)
        2.0
    """
    if isinstance(value, int | float):
        seconds = float(value)
    else:
        seconds = _parse_duration_string(value)

    if seconds < 0:
        msg = f"invalid duration {value!r}: must not be negative"
        raise InvalidDurationError(msg, value=value)
    return seconds


def _parse_duration_string(value: str) -> float:
    text = value.strip()
    original = text

    sign = 1.0
    if text[:1] in ("-", "+"):
        if text[0] == "-":
            sign = -1.0
        text = text[1:]

    if text == "0":
        return 0.0

    if not text:
        msg = f"invalid duration {original!r}"
        raise InvalidDurationError(msg, value=value)

    if _BARE_NUMBER.fullmatch(text):
        return sign * float(text)

    total = 0.0
    pos = 0
    while pos < len(text):
        match = _COMPONENT.match(text, pos)
        if match is None:
            msg = f"invalid duration {original!r}"
            raise InvalidDurationError(msg, value=value)
        number, unit = match.groups()
        total += float(number) * _UNITS[unit]
        pos = match.end()

    return sign * total


def _trim(number: float) -> str:
    return f"{number:.6f}".rstrip("0").rstrip(".")


def format_duration(seconds: float) -> str:
    """Format a number of seconds as a duration string.

    The output uses the same notation that parse_duration() accepts.

    Examples:
        >>> format_duration(0.05)
        '50ms'
        >>> format_duration(90)
        '1m30s'
        >>> format_duration(3600)
        '1h0m0s'
    """
    if seconds == 0:
        return "0s"

    sign = "-" if seconds < 0 else ""
    total = abs(seconds)

    if total < 1:
        for unit, scale in (("ms", 1e-3), ("µs", 1e-6)):
            if total >= scale:
                return f"{sign}{_trim(total / scale)}{unit}"
        return f"{sign}{_trim(total / 1e-9)}ns"

    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    text = f"{_trim(secs)}s"
    if hours:
        text = f"{int(hours)}h{int(minutes)}m{text}"
    elif minutes:
        text = f"{int(minutes)}m{text}"
    return sign + text
