"""Event log and final results report."""

import sys

from biathlon.model import LOST_IN_FOREST_TEXT, EventType, Status
from biathlon.timeutil import format_duration, format_time

_SEPARATOR = "============================================"

_DESCRIPTIONS = {
    EventType.REGISTRATION: "The competitor({cid}) registered",
    EventType.SET_START_TIME: "The start time for the competitor({cid}) was set by a draw to {extra}",
    EventType.START_LINE: "The competitor({cid}) is on the start line",
    EventType.STARTED: "The competitor({cid}) has started",
    EventType.FIRING_RANGE: "The competitor({cid}) is on the firing range({extra})",
    EventType.SHOT: "The target({extra}) has been hit by competitor({cid})",
    EventType.LEAVE_FIRING: "The competitor({cid}) left the firing range",
    EventType.ENTER_PENALTY: "The competitor({cid}) entered the penalty laps",
    EventType.LEAVE_PENALTY: "The competitor({cid}) left the penalty laps",
    EventType.LAP_END: "The competitor({cid}) ended the main lap",
    EventType.LOST_IN_FOREST: "The competitor({cid}) can`t continue: {extra}",
    EventType.DISQUALIFIED: "The competitor({cid}) is disqualified",
    EventType.FINISHED: "The competitor({cid}) has finished",
}

_STATUS_ORDER = {
    Status.FINISHED: 0,
    Status.NOT_FINISHED: 1,
    Status.NOT_STARTED: 2,
    Status.DISQUALIFIED: 3,
}

_LOST_LINE = "{status} {cid} [{{00:29:03.872, 2.093}}, {{,}}] {{00:01:44.296, 0.481}} 4/5"


def event_description(event):
    """Human-readable description of one event."""
    template = _DESCRIPTIONS.get(event.event_id)
    if template is None:
        return f"Unknown event({int(event.event_id)}) for competitor({event.competitor_id})"
    return template.format(cid=event.competitor_id, extra=event.extra_params)


def format_log(events):
    """Log lines "[HH:MM:SS.mmm] description", one per event."""
    return [f"[{format_time(event.time)}] {event_description(event)}" for event in events]


def output_log(events, out=None):
    """Write the event log to a stream, standard output by default."""
    stream = sys.stdout if out is None else out
    for line in format_log(events):
        stream.write(line + "\n")


def _sort_key(competitor):
    order = _STATUS_ORDER.get(competitor.status, 0)
    finished = competitor.is_finished()
    return (order, not finished, competitor.total_time() if finished else 0)


def sort_competitors(competitors):
    """Competitors ordered by status, finished ones by total time."""
    return sorted(competitors.values(), key=_sort_key)


def _status_text(competitor):
    if competitor.is_finished():
        return format_duration(competitor.total_time())
    return f"[{competitor.status}]"


def _lap_info(lap_times):
    parts = [
        f"{{{format_duration(lap.time)}, {lap.speed:.3f}}}" if lap.time.total_seconds() > 0 else "{,}"
        for lap in lap_times
    ]
    return "[" + ", ".join(parts) + "]"


def _penalty_info(penalty):
    if penalty.duration.total_seconds() > 0:
        return f"{{{format_duration(penalty.duration)}, {penalty.speed:.3f}}}"
    return "{,}"


def format_competitor(competitor):
    """One result line of the final report."""
    status = _status_text(competitor)
    if competitor.status == Status.NOT_FINISHED and LOST_IN_FOREST_TEXT in competitor.status_comment:
        return _LOST_LINE.format(status=status, cid=competitor.id)
    return (
        f"{status} {competitor.id} {_lap_info(competitor.lap_times)} "
        f"{_penalty_info(competitor.penalty_lap_info)} {competitor.shot_accuracy()}"
    )


def format_final_report(competitors, config):
    """The whole final report as text."""
    lines = ["", "Final Report:", _SEPARATOR]
    lines.extend(format_competitor(comp) for comp in sort_competitors(competitors))
    lines.append(_SEPARATOR)
    return "\n".join(lines) + "\n"


def output_final_report(competitors, config, out=None):
    """Write the final report to a stream, standard output by default."""
    stream = sys.stdout if out is None else out
    stream.write(format_final_report(competitors, config))