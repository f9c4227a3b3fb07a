from datetime import datetime, timedelta

import pytest

from biathlon.model import (
    Competitor,
    Event,
    EventType,
    LapInfo,
    Status,
)


@pytest.mark.parametrize(
    "number, expected",
    [
        (1, EventType.REGISTRATION),
        (11, EventType.LOST_IN_FOREST),
        (32, EventType.DISQUALIFIED),
        (33, EventType.FINISHED),
    ],
)
def test_event_type_identifiers_fixed_by_format(number, expected):
    assert EventType(number) is expected


def test_event_type_rejects_unknown_identifier():
    with pytest.raises(ValueError):
        EventType(99)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("NotFinished", Status.NOT_FINISHED),
        ("Disqualified", Status.DISQUALIFIED),
    ],
)
def test_status_renders_as_its_value(text, expected):
    status = Status(text)
    assert status is expected
    assert str(status) == text
    assert f"[{status}]" == f"[{text}]"


def test_new_competitor_defaults():
    competitor = Competitor(id=5)
    assert competitor.status is Status.NOT_STARTED
    assert competitor.current_lap == 1
    assert competitor.total_time() == timedelta()


def test_total_time_sums_laps():
    first = LapInfo(time=timedelta(minutes=15), speed=3.89)
    second = LapInfo(time=timedelta(minutes=14), speed=4.17)
    competitor = Competitor(id=1, lap_times=[first, second])
    assert competitor.total_time() == first.time + second.time


def test_total_time_ignores_unrecorded_laps():
    lap = LapInfo(time=timedelta(minutes=15))
    competitor = Competitor(id=1, lap_times=[lap, LapInfo()])
    assert competitor.total_time() == lap.time


@pytest.mark.parametrize(
    "status, finished, running, disqualified",
    [
        (Status.FINISHED, True, False, False),
        (Status.RUNNING, False, True, False),
        (Status.DISQUALIFIED, False, False, True),
        (Status.NOT_STARTED, False, False, False),
        (Status.NOT_FINISHED, False, False, False),
    ],
)
def test_status_predicates(status, finished, running, disqualified):
    competitor = Competitor(id=1, status=status)
    assert competitor.is_finished() is finished
    assert competitor.is_running() is running
    assert competitor.is_disqualified() is disqualified


def test_shot_accuracy():
    competitor = Competitor(id=1, shots_hit=4, total_shots=5)
    assert competitor.shot_accuracy() == "4/5"


def test_lap_lists_are_not_shared():
    first = Competitor(id=1)
    second = Competitor(id=2)
    first.lap_times.append(LapInfo())
    assert second.lap_times == []


def test_event_defaults():
    moment = datetime(2025, 1, 1, 10, 0)
    event = Event(time=moment, event_id=EventType.SHOT, competitor_id=3)
    assert event.extra_params == ""
    assert event.processed is False
    assert event.event_id == EventType.SHOT