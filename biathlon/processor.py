"""Applying events to competitors, sequentially or per competitor in parallel."""

import math
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import datetime, timedelta

from biathlon.errors import InvalidTimeFormatError
from biathlon.model import (
    MISSED_TARGET,
    Competitor,
    Event,
    EventType,
    LapInfo,
    Status,
)
from biathlon.timeutil import parse_clock

# Clock values read on their own (drawn start times) carry no date of their own.
_DATELESS = datetime.min
_INTEGER = re.compile(r"[+-]?[0-9]+")


def start_delta(config):
    """The allowed lateness of a start; an unreadable value allows none."""
    try:
        return parse_clock(config.start_delta)
    except InvalidTimeFormatError:
        return timedelta()


def _speed(length, duration):
    seconds = duration.total_seconds()
    if seconds == 0:
        return math.nan if length == 0 else math.copysign(math.inf, length)
    return length / seconds


def _new_competitor(competitor_id, laps):
    return Competitor(id=competitor_id, lap_times=[LapInfo() for _ in range(laps)])


def _on_registration(competitor, event, config, delta, log):
    competitor.registered_time = event.time


def _on_set_start_time(competitor, event, config, delta, log):
    try:
        offset = parse_clock(event.extra_params)
    except InvalidTimeFormatError:
        return
    competitor.planned_start = _DATELESS + offset


def _on_start_line(competitor, event, config, delta, log):
    pass


def _on_started(competitor, event, config, delta, log):
    competitor.actual_start = event.time
    competitor.status = Status.RUNNING
    planned = competitor.planned_start if competitor.planned_start is not None else _DATELESS
    if event.time - planned > delta:
        competitor.status = Status.DISQUALIFIED
        log.append(
            Event(
                time=event.time,
                event_id=EventType.DISQUALIFIED,
                competitor_id=competitor.id,
                processed=True,
            )
        )


def _on_firing_range(competitor, event, config, delta, log):
    competitor.on_firing_range = True
    text = event.extra_params
    competitor.current_firing = int(text) if _INTEGER.fullmatch(text) else 0


def _on_shot(competitor, event, config, delta, log):
    if event.extra_params == MISSED_TARGET:
        competitor.missed_shot = True
    else:
        competitor.shots_hit += 1
    competitor.total_shots += 1


def _on_leave_firing(competitor, event, config, delta, log):
    competitor.on_firing_range = False


def _on_enter_penalty(competitor, event, config, delta, log):
    competitor.in_penalty = True
    competitor.penalty_lap_info.start_time = event.time


def _on_leave_penalty(competitor, event, config, delta, log):
    competitor.in_penalty = False
    if competitor.is_running():
        penalty = competitor.penalty_lap_info
        entered = penalty.start_time if penalty.start_time is not None else _DATELESS
        duration = event.time - entered
        penalty.duration = duration
        penalty.speed = _speed(config.penalty_len, duration)


def _on_lap_end(competitor, event, config, delta, log):
    if not competitor.is_running():
        return
    if competitor.current_lap == 1:
        lap_time = event.time - competitor.actual_start
    else:
        lap_time = event.time - competitor.lap_times[competitor.current_lap - 2].finish

    competitor.lap_times[competitor.current_lap - 1] = LapInfo(
        time=lap_time,
        speed=_speed(config.lap_len, lap_time),
        finish=event.time,
    )
    competitor.current_lap += 1

    if competitor.current_lap > config.laps:
        competitor.status = Status.FINISHED
        log.append(
            Event(
                time=event.time,
                event_id=EventType.FINISHED,
                competitor_id=competitor.id,
                processed=True,
            )
        )


def _on_lost(competitor, event, config, delta, log):
    competitor.status = Status.NOT_FINISHED
    competitor.status_comment = event.extra_params


_HANDLERS = {
    EventType.REGISTRATION: _on_registration,
    EventType.SET_START_TIME: _on_set_start_time,
    EventType.START_LINE: _on_start_line,
    EventType.STARTED: _on_started,
    EventType.FIRING_RANGE: _on_firing_range,
    EventType.SHOT: _on_shot,
    EventType.LEAVE_FIRING: _on_leave_firing,
    EventType.ENTER_PENALTY: _on_enter_penalty,
    EventType.LEAVE_PENALTY: _on_leave_penalty,
    EventType.LAP_END: _on_lap_end,
    EventType.LOST_IN_FOREST: _on_lost,
}


def _apply(competitor, event, config, delta, log):
    handler = _HANDLERS.get(event.event_id)
    if handler is not None:
        handler(competitor, event, config, delta, log)


def _sort_by_time(events):
    events.sort(key=lambda event: event.time)


def process_events(events, config):
    """Apply all events in time order and return competitors by ID.

    The list is sorted in place and then overwritten with the processed log,
    in which generated disqualification and finish events precede the event
    that caused them; the log is cut to the list's original length.
    """
    delta = start_delta(config)
    _sort_by_time(events)

    competitors = {}
    log = []
    for event in events:
        if event.processed:
            continue
        event = replace(event, processed=True)
        competitor = competitors.get(event.competitor_id)
        if competitor is None:
            competitor = _new_competitor(event.competitor_id, config.laps)
            competitors[event.competitor_id] = competitor
        _apply(competitor, event, config, delta, log)
        log.append(event)

    events[:] = log[: len(events)]
    return competitors


def process_competitor_events(competitor, events, config):
    """Apply one competitor's events in order and return the processed log."""
    delta = start_delta(config)
    log = []
    for event in events:
        if event.processed:
            continue
        event = replace(event, processed=True)
        _apply(competitor, event, config, delta, log)
        log.append(event)
    return log


def process_events_parallel(events, config):
    """Sort events in place, then process each competitor's events concurrently."""
    _sort_by_time(events)

    grouped = {}
    for event in events:
        grouped.setdefault(event.competitor_id, []).append(event)

    competitors = {cid: _new_competitor(cid, config.laps) for cid in grouped}
    with ThreadPoolExecutor() as pool:
        futures = [
            pool.submit(process_competitor_events, competitors[cid], own, config)
            for cid, own in grouped.items()
        ]
        for future in futures:
            future.result()
    return competitors