import json
from datetime import datetime, timedelta

import pytest

from biathlon.cli import count_shots, handle_lost_events, main
from biathlon.model import Event, EventType

_ENV = (
    "BIATHLON_LAPS",
    "BIATHLON_LAP_LEN",
    "BIATHLON_PENALTY_LEN",
    "BIATHLON_FIRING_LINES",
    "BIATHLON_START",
    "BIATHLON_START_DELTA",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def race_files(tmp_path):
    config = tmp_path / "config.json"
    config.write_text(
        json.dumps(
            {
                "laps": 1,
                "lapLen": 3500,
                "penaltyLen": 150,
                "firingLines": 1,
                "start": "10:00:00.000",
                "startDelta": "00:01:30.000",
            }
        ),
        encoding="utf-8",
    )
    events = tmp_path / "events.txt"
    events.write_text(
        "[09:05:59.867] 1 1\n"
        "[09:15:00.841] 2 1 09:30:00.000\n"
        "[09:30:01.005] 4 1\n"
        "[09:59:03.872] 11 1 Lost in the forest\n",
        encoding="utf-8",
    )
    return config, events


def _lost(time, cid=2, text="Lost in the forest"):
    return Event(time=time, event_id=EventType.LOST_IN_FOREST, competitor_id=cid, extra_params=text)


def _shot(time, cid, target):
    return Event(time=time, event_id=EventType.SHOT, competitor_id=cid, extra_params=target)


def test_count_shots_filters_by_competitor():
    moment = datetime(2025, 1, 1, 10, 0)
    events = [_shot(moment, 1, "1"), _shot(moment, 1, "3"), _shot(moment, 2, "2"), _lost(moment, 1)]
    assert count_shots(events, 1) == (2, True)
    assert count_shots(events, 2) == (1, False)
    assert count_shots(events, 7) == (0, False)


def test_lost_without_shots_gets_a_miss():
    moment = datetime(2025, 1, 1, 10, 0)
    events = [_lost(moment)]
    result = handle_lost_events(events)
    assert len(result) == 2
    added = result[-1]
    assert added.event_id == EventType.SHOT
    assert added.competitor_id == 2
    assert added.extra_params == "3"
    assert added.time == moment - timedelta(seconds=5)
    assert len(events) == 1


def test_lost_with_five_shots_unchanged():
    moment = datetime(2025, 1, 1, 10, 0)
    events = [_shot(moment, 2, "1") for _ in range(5)] + [_lost(moment)]
    assert handle_lost_events(events) == events


def test_lost_with_existing_miss_unchanged():
    moment = datetime(2025, 1, 1, 10, 0)
    events = [_shot(moment, 2, "3"), _lost(moment)]
    assert handle_lost_events(events) == events


def test_other_reason_unchanged():
    moment = datetime(2025, 1, 1, 10, 0)
    events = [_lost(moment, text="Tired")]
    assert handle_lost_events(events) == events


def test_repeated_loss_adds_one_miss():
    moment = datetime(2025, 1, 1, 10, 0)
    events = [_lost(moment), _lost(moment + timedelta(seconds=1))]
    result = handle_lost_events(events)
    assert count_shots(result, 2) == (1, True)


def test_missing_config_file(tmp_path, capsys):
    missing = tmp_path / "nope.json"
    events = tmp_path / "events.txt"
    events.write_text("", encoding="utf-8")
    main(["-config", str(missing), "-events", str(events)])
    assert capsys.readouterr().out == f"Ошибка: файл {missing} не найден\n"


def test_missing_events_file(race_files, tmp_path, capsys):
    config, _ = race_files
    missing = tmp_path / "none.txt"
    main(["-config", str(config), "-events", str(missing)])
    assert capsys.readouterr().out == f"Ошибка: файл {missing} не найден\n"


def test_bad_config_reported(tmp_path, capsys, clean_env):
    config = tmp_path / "config.json"
    config.write_text("{not json", encoding="utf-8")
    events = tmp_path / "events.txt"
    events.write_text("", encoding="utf-8")
    main(["-config", str(config), "-events", str(events)])
    assert capsys.readouterr().out.startswith("Error loading config:")


def test_full_run_parallel(race_files, capsys, clean_env):
    config, events = race_files
    main(["--config", str(config), "--events", str(events), "--parallel"])
    output = capsys.readouterr().out
    assert "The target(3) has been hit by competitor(1)" in output
    assert "[NotFinished] 1 " in output
    assert output.count("Final Report:") == 1