"""Reading and formatting competition clock values."""

import re
from datetime import date, datetime, time, timedelta

from biathlon.errors import InvalidTimeFormatError

_CLOCK = re.compile(r"([0-9]{1,2}):([0-9]{2}):([0-9]{2})\.([0-9]{3})")
_MICROS_PER_HOUR = 3_600_000_000
_MICROS_PER_MINUTE = 60_000_000
_MICROS_PER_SECOND = 1_000_000
_MICROS_PER_MILLI = 1_000


def _trunc_divmod(value, unit):
    quotient = abs(value) // unit
    if value < 0:
        quotient = -quotient
    return quotient, value - quotient * unit


def format_time(moment):
    """Format the time of day of a datetime or time as HH:MM:SS.mmm."""
    return (
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
        f".{moment.microsecond // 1000:03d}"
    )


def format_duration(duration):
    """Format a timedelta as HH:MM:SS.mmm, hours not wrapping at a day."""
    remaining = duration // timedelta(microseconds=1)
    hours, remaining = _trunc_divmod(remaining, _MICROS_PER_HOUR)
    minutes, remaining = _trunc_divmod(remaining, _MICROS_PER_MINUTE)
    seconds, remaining = _trunc_divmod(remaining, _MICROS_PER_SECOND)
    millis, _ = _trunc_divmod(remaining, _MICROS_PER_MILLI)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"


def parse_clock(text):
    """Read an HH:MM:SS.mmm clock value as the time elapsed since midnight."""
    match = _CLOCK.fullmatch(text)
    if match is None:
        raise InvalidTimeFormatError(f"invalid time format: {text!r}")
    hours, minutes, seconds, millis = (int(part) for part in match.groups())
    if hours > 23 or minutes > 59 or seconds > 59:
        raise InvalidTimeFormatError(f"clock value out of range: {text!r}")
    return timedelta(hours=hours, minutes=minutes, seconds=seconds, milliseconds=millis)


def parse_competition_time(text):
    """Read an HH:MM:SS.mmm clock value as that moment of the current local day."""
    offset = parse_clock(text)
    return datetime.combine(date.today(), time()) + offset