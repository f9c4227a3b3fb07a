"""Race configuration read from JSON with environment overrides."""

import json
import os
import re
from dataclasses import dataclass, replace

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_JSON_FIELDS = {
    "laps": ("laps", int),
    "laplen": ("lap_len", int),
    "penaltylen": ("penalty_len", int),
    "firinglines": ("firing_lines", int),
    "start": ("start", str),
    "startdelta": ("start_delta", str),
}

_INT_OVERRIDES = (
    ("BIATHLON_LAPS", "laps"),
    ("BIATHLON_LAP_LEN", "lap_len"),
    ("BIATHLON_PENALTY_LEN", "penalty_len"),
    ("BIATHLON_FIRING_LINES", "firing_lines"),
)
_STR_OVERRIDES = (
    ("BIATHLON_START", "start"),
    ("BIATHLON_START_DELTA", "start_delta"),
)


@dataclass
class Config:
    """Parameters of a race: lap counts and lengths, start plan."""

    laps: int = 0
    lap_len: int = 0
    penalty_len: int = 0
    firing_lines: int = 0
    start: str = ""
    start_delta: str = ""


def _in_int64(value):
    return _INT64_MIN <= value <= _INT64_MAX


def _parse_int(text):
    if _INTEGER.fullmatch(text) is None:
        return None
    value = int(text)
    return value if _in_int64(value) else None


def _check_value(key, value, kind):
    if kind is int:
        if isinstance(value, bool) or not isinstance(value, int) or not _in_int64(value):
            raise ValueError(f"config field {key!r} must be an integer, got {value!r}")
    elif not isinstance(value, str):
        raise ValueError(f"config field {key!r} must be a string, got {value!r}")
    return value


def _from_json(data):
    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ValueError("config must be a JSON object")
    values = {}
    for key, value in data.items():
        known = _JSON_FIELDS.get(key.lower())
        if known is None or value is None:
            continue
        name, kind = known
        values[name] = _check_value(key, value, kind)
    return Config(**values)


def load_config(filename, environ=None):
    """Read the JSON config file, then apply BIATHLON_* environment overrides.

    Integer overrides that are not valid integers are ignored.
    """
    env = os.environ if environ is None else environ
    with open(filename, encoding="utf-8") as handle:
        config = _from_json(json.load(handle))

    overrides = {}
    for variable, name in _INT_OVERRIDES:
        if variable in env:
            value = _parse_int(env[variable])
            if value is not None:
                overrides[name] = value
    for variable, name in _STR_OVERRIDES:
        if variable in env:
            overrides[name] = env[variable]
    return replace(config, **overrides)