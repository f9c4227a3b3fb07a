# biathlon

`biathlon` reads a biathlon race configuration and a log of race events. It works out what happened to each competitor and prints two things: the event log written out in words, and a final results table.

## Installation

```
pip install .
```

## Usage

```
biathlon --config config.json --events events.txt
```

Options (each may also be written with a single dash, e.g. `-config`):

- `--config PATH`: the race configuration file (default `config.json`)
- `--events PATH`: the event log (default `events.txt`)
- `--parallel`: group the events by competitor and process each competitor's events in a separate thread

If either file does not exist, an error message is printed and nothing else is done.

### Configuration

```json
{
  "laps": 2,
  "lapLen": 3651,
  "penaltyLen": 50,
  "firingLines": 1,
  "start": "09:30:00.000",
  "startDelta": "00:00:30.000"
}
```

Keys are matched without regard to case. `startDelta` is the allowed lateness of a start, written as `HH:MM:SS.mmm`; a value that cannot be read allows no lateness at all.

The following environment variables override the values in the file. Integer overrides that are not valid integers are ignored.

- `BIATHLON_LAPS`
- `BIATHLON_LAP_LEN`
- `BIATHLON_PENALTY_LEN`
- `BIATHLON_FIRING_LINES`
- `BIATHLON_START`
- `BIATHLON_START_DELTA`

### Event log

Each line holds one event. The format is `[HH:MM:SS.mmm] eventID competitorID [extra params]`. For example:

```
[09:05:59.867] 1 1
[09:15:00.841] 2 1 09:30:00.000
[09:29:45.734] 3 1
[09:30:01.005] 4 1
[09:49:31.659] 5 1 1
[09:49:33.123] 6 1 1
[09:59:03.872] 11 1 Lost in the forest
```

Event identifiers:

| ID | Event |
|----|-------|
| 1 | registration |
| 2 | start time set by draw (extra: `HH:MM:SS.mmm`) |
| 3 | on the start line |
| 4 | started |
| 5 | on the firing range (extra: range number) |
| 6 | shot at a target (extra: target; target `3` counts as a miss) |
| 7 | left the firing range |
| 8 | entered the penalty laps |
| 9 | left the penalty laps |
| 10 | ended a main lap |
| 11 | cannot continue (extra: comment) |

The processor also produces events 32 (disqualified, for a start later than the planned start plus `startDelta`) and 33 (finished, after the last configured lap). Lines that cannot be read are reported with a warning and skipped.

## Library use

```python
from biathlon.config import load_config
from biathlon.parser import load_events
from biathlon.processor import process_events
from biathlon.report import format_log, format_final_report

config = load_config("config.json")
events = load_events("events.txt")
competitors = process_events(events, config)
print("\n".join(format_log(events)))
print(format_final_report(competitors, config))
```

`process_events` sorts the list in place and replaces its contents with the processed log. `process_events_parallel` takes the same arguments and returns the same kind of mapping from competitor ID to `Competitor`. `output_log` and `output_final_report` write the same text to a stream, standard output by default.

## Running the tests

```
pip install .[test]
pytest
```