"""Signal name and number parsing."""

import signal

from runguard.exceptions import InvalidSignalError


def parse_signal(value: str | int | signal.Signals) -> signal.Signals:
    """Parse a signal given by name or number.

    Names are case-insensitive and may omit the ``SIG`` prefix, so ``term``,
    ``TERM`` and ``SIGTERM`` are equivalent.

    Args:
        value: Signal name, number, or an existing ``signal.Signals`` member.

    Returns:
        The matching ``signal.Signals`` member.

    Raises:
        InvalidSignalError: If the value does not name a signal on this platform.
    """
    if isinstance(value, signal.Signals):
        return value

    if isinstance(value, bool):
        msg = f"invalid signal: {value!r}"
        raise InvalidSignalError(msg, value=value)

    if isinstance(value, int):
        try:
            return signal.Signals(value)
        except ValueError:
            msg = f"invalid signal: {value}"
            raise InvalidSignalError(msg, value=value) from None

    text = value.strip()
    if text.isdigit():
        return parse_signal(int(text))

    name = text.upper()
    if not name.startswith("SIG"):
        name = f"SIG{name}"

    try:
        return signal.Signals[name]
    except KeyError:
        msg = f"invalid signal: {value!r}"
        raise InvalidSignalError(msg, value=value) from None
