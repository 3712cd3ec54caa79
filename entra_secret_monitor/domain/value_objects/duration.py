"""Duration parsing for Go-style interval strings such as ``1h30m``."""

import re
from datetime import timedelta

from ..exceptions import InvalidDurationError

_UNITS = {
    "h": timedelta(hours=1),
    "m": timedelta(minutes=1),
    "s": timedelta(seconds=1),
    "ms": timedelta(milliseconds=1),
}

# "ms" must be tried before "m"
_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ms|h|m|s)")


def parse_duration(value: str) -> timedelta:
    """
    Parse a positive duration such as ``1h``, ``90s``, ``1h30m`` or ``1.5h``.

    Args:
        value: Duration string made of one or more ``<number><unit>`` groups.

    Returns:
        The parsed duration.

    Raises:
        InvalidDurationError: If the string is malformed or not positive.
    """
    text = value.strip()
    if not text:
        msg = "Duration must not be empty"
        raise InvalidDurationError(msg)

    total = timedelta()
    position = 0
    for match in _COMPONENT.finditer(text):
        if match.start() != position:
            break
        total += float(match.group(1)) * _UNITS[match.group(2)]
        position = match.end()

    if position != len(text):
        msg = f"Invalid duration {value!r} (expected e.g. 1h, 30m, 90s, 1h30m)"
        raise InvalidDurationError(msg)

    if total <= timedelta():
        msg = f"Duration must be positive, got {value!r}"
        raise InvalidDurationError(msg)

    return total


def format_duration(duration: timedelta) -> str:
    """Render a duration in the same notation accepted by parse_duration."""
    remaining = int(duration.total_seconds())
    hours, remaining = divmod(remaining, 3600)
    minutes, seconds = divmod(remaining, 60)

    parts: list[str] = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if seconds or not parts:
        parts.append(f"{seconds}s")
    return "".join(parts)
