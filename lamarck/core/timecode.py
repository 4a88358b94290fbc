"""SRT timecode conversion: float seconds <-> ``HH:MM:SS,mmm``.

WHY: Every cue line in an SRT file needs two timecodes, and player
tolerance for malformed ones varies wildly. One exact conversion shared
by all formatters keeps output consistent.

HOW: Seconds are truncated (never rounded) to whole milliseconds, then
split with integer division into hours, minutes, seconds and millis. The
truncation goes through ``Decimal(repr(seconds))`` so that a value like
3661.234 yields 3661234 ms; plain ``seconds * 1000`` can land one ulp
below the integer and floor to 3661233.

RULES:
- Hours are at least two digits and otherwise unbounded
- Minutes and seconds are exactly two digits, millis exactly three
- 59.9999 formats as 00:00:59,999 (truncation)
- Negative, non-finite, non-numeric or float-overflowing input raises
  InvalidTimestampError
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_FLOOR, Decimal

_MS_PER_HOUR = 3_600_000
_MS_PER_MINUTE = 60_000
_MS_PER_SECOND = 1_000

_TIMECODE_RE = re.compile(r"^(\d{2,}):([0-5]\d):([0-5]\d),(\d{3})$")


class InvalidTimestampError(ValueError):
    """Raised for a timestamp that cannot become a valid SRT timecode.

    WHY: Emitting a corrupt timecode silently breaks the whole subtitle
    file in most players. Failing loudly lets the caller drop the
    document instead.

    RULES:
    - Raised by to_milliseconds / format_timecode for negative, NaN,
      infinite or non-numeric seconds
    - Raised by parse_timecode for strings not in HH:MM:SS,mmm form
    """


def to_milliseconds(seconds: float) -> int:
    """Truncate a non-negative seconds value to whole milliseconds."""
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        raise InvalidTimestampError(
            "Timestamp must be a number of seconds, got {!r}".format(seconds)
        )
    try:
        finite = math.isfinite(seconds)
    except OverflowError as exc:
        raise InvalidTimestampError("Timestamp is out of range: {!r}".format(seconds)) from exc
    if not finite:
        raise InvalidTimestampError("Timestamp is not finite: {!r}".format(seconds))
    if seconds < 0:
        raise InvalidTimestampError("Timestamp is negative: {!r}".format(seconds))

    millis = (Decimal(repr(seconds)) * _MS_PER_SECOND).to_integral_value(rounding=ROUND_FLOOR)
    return int(millis)


def format_timecode(seconds: float) -> str:
    """Convert float seconds to an SRT timecode.

    Args:
        seconds: Offset from the start of the media, >= 0.

    Returns:
        The timecode string, e.g. ``"01:01:01,234"`` for 3661.234.

    Raises:
        InvalidTimestampError: If seconds is negative, non-finite or not
            a number.
    """
    total_ms = to_milliseconds(seconds)

    hours, remainder = divmod(total_ms, _MS_PER_HOUR)
    minutes, remainder = divmod(remainder, _MS_PER_MINUTE)
    secs, millis = divmod(remainder, _MS_PER_SECOND)
    return "{:02d}:{:02d}:{:02d},{:03d}".format(hours, minutes, secs, millis)


def format_timerange(start: float, end: float) -> str:
    """Format the ``START --> END`` line of an SRT cue."""
    return "{} --> {}".format(format_timecode(start), format_timecode(end))


def parse_timecode(timecode: str) -> int:
    """Parse an SRT timecode back into total milliseconds.

    Inverse of format_timecode for every string it produces.

    Raises:
        InvalidTimestampError: If the string is not ``HH:MM:SS,mmm``.
    """
    match = _TIMECODE_RE.match(timecode.strip())
    if match is None:
        raise InvalidTimestampError("Not an SRT timecode: {!r}".format(timecode))

    hours, minutes, secs, millis = (int(part) for part in match.groups())
    return (
        hours * _MS_PER_HOUR
        + minutes * _MS_PER_MINUTE
        + secs * _MS_PER_SECOND
        + millis
    )
