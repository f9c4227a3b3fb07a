"""Reading competition events from an event log."""

import re

from biathlon.errors import InvalidEventFormatError, InvalidTimeFormatError
from biathlon.model import Event
from biathlon.timeutil import parse_competition_time

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _split_time(line):
    """Return the bracketed time stamp and the trimmed text after it."""
    start = line.find("[")
    end = line.find("]")
    if start == -1 or end == -1 or start >= end:
        raise InvalidTimeFormatError()
    return line[start + 1 : end], line[end + 1 :].strip()


def _to_int(text, what):
    if _INTEGER.fullmatch(text) is None:
        raise InvalidEventFormatError(f"invalid {what}: {text!r}")
    return int(text)


def parse_event(line):
    """Parse one line of the form "[HH:MM:SS.mmm] eventID competitorID [extra...]".

    The time is placed on the current local day. Extra parameters are the
    remaining fields joined by single spaces.
    """
    stamp, rest = _split_time(line)
    moment = parse_competition_time(stamp)

    parts = rest.split()
    if len(parts) < 2:
        raise InvalidEventFormatError()
    event_id = _to_int(parts[0], "event ID")
    competitor_id = _to_int(parts[1], "competitor ID")
    return Event(
        time=moment,
        event_id=event_id,
        competitor_id=competitor_id,
        extra_params=" ".join(parts[2:]),
    )


def load_events(filename):
    """Read all events from a file, warning about and skipping invalid lines."""
    with open(filename, encoding="utf-8") as handle:
        text = handle.read()

    events = []
    for raw in text.split("\n"):
        line = raw.strip()
        if not line:
            continue
        try:
            events.append(parse_event(line))
        except ValueError as error:
            print(f"Warning: Skipping invalid event line: {line}, error: {error}")
    return events