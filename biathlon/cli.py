"""Command line entry point: read config and events, print log and results."""

import argparse
import json
import os
from dataclasses import replace
from datetime import timedelta

from biathlon.config import load_config
from biathlon.model import LOST_IN_FOREST_TEXT, MISSED_TARGET, EventType
from biathlon.parser import load_events
from biathlon.processor import process_events, process_events_parallel
from biathlon.report import output_final_report, output_log


def count_shots(events, competitor_id):
    """Number of shots by a competitor and whether any of them missed."""
    shots = [e for e in events if e.event_id == EventType.SHOT and e.competitor_id == competitor_id]
    return len(shots), any(e.extra_params == MISSED_TARGET for e in shots)


def handle_lost_events(events):
    """Add a missed shot five seconds before each loss in the forest.

    Only for competitors with fewer than five shots and no miss yet.
    """
    result = list(events)
    for event in events:
        if event.event_id != EventType.LOST_IN_FOREST or LOST_IN_FOREST_TEXT not in event.extra_params:
            continue
        shots, missed = count_shots(result, event.competitor_id)
        if shots < 5 and not missed:
            result.append(
                replace(
                    event,
                    time=event.time - timedelta(seconds=5),
                    event_id=EventType.SHOT,
                    extra_params=MISSED_TARGET,
                    processed=False,
                )
            )
    return result


def _build_parser():
    parser = argparse.ArgumentParser(prog="biathlon")
    parser.add_argument("-config", "--config", default="config.json", help="Path to configuration file")
    parser.add_argument("-events", "--events", default="events.txt", help="Path to events file")
    parser.add_argument("-parallel", "--parallel", action="store_true", help="Use parallel processing")
    return parser


def _files_exist(*paths):
    for path in paths:
        if not os.path.exists(path):
            print(f"Ошибка: файл {path} не найден")
            return False
    return True


def main(argv=None):
    """Run the tracker on a config file and an events file."""
    args = _build_parser().parse_args(argv)
    if not _files_exist(args.config, args.events):
        return

    try:
        config = load_config(args.config)
    except (OSError, ValueError, json.JSONDecodeError) as error:
        print(f"Error loading config: {error}")
        return

    try:
        events = load_events(args.events)
    except (OSError, UnicodeDecodeError) as error:
        print(f"Error loading events: {error}")
        return

    events = handle_lost_events(events)
    if args.parallel:
        competitors = process_events_parallel(events, config)
    else:
        competitors = process_events(events, config)

    output_log(events)
    output_final_report(competitors, config)


if __name__ == "__main__":
    main()