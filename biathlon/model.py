"""Events, competitors and the constants that describe a race."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum, IntEnum


class EventType(IntEnum):
    """Identifiers of incoming and outgoing events."""

    REGISTRATION = 1
    SET_START_TIME = 2
    START_LINE = 3
    STARTED = 4
    FIRING_RANGE = 5
    SHOT = 6
    LEAVE_FIRING = 7
    ENTER_PENALTY = 8
    LEAVE_PENALTY = 9
    LAP_END = 10
    LOST_IN_FOREST = 11
    DISQUALIFIED = 32
    FINISHED = 33


class Status(str, Enum):
    """State of a competitor in the race."""

    FINISHED = "Finished"
    NOT_FINISHED = "NotFinished"
    NOT_STARTED = "NotStarted"
    RUNNING = "Running"
    DISQUALIFIED = "Disqualified"

    def __str__(self):
        return self.value


SHOT_TARGETS = ("1", "2", "3", "4", "5")
MISSED_TARGET = SHOT_TARGETS[2]
TIME_FORMAT = "HH:MM:SS.mmm"
ZERO_TIME = "00:00:00.000"
LOST_IN_FOREST_TEXT = "Lost in the forest"


@dataclass
class LapInfo:
    """Time, speed and finishing moment of one main lap."""

    time: timedelta = field(default_factory=timedelta)
    speed: float = 0.0
    finish: datetime | None = None


@dataclass
class PenaltyInfo:
    """Entry moment, time spent and speed on the penalty laps."""

    start_time: datetime | None = None
    duration: timedelta = field(default_factory=timedelta)
    speed: float = 0.0


@dataclass
class Event:
    """One line of the event log."""

    time: datetime
    event_id: int
    competitor_id: int
    extra_params: str = ""
    processed: bool = False


@dataclass
class Competitor:
    """Everything known about one competitor during the race."""

    id: int
    current_lap: int = 1
    current_firing: int = 0
    shots_hit: int = 0
    total_shots: int = 0
    in_penalty: bool = False
    on_firing_range: bool = False
    missed_shot: bool = False
    status: Status = Status.NOT_STARTED
    status_comment: str = ""
    registered_time: datetime | None = None
    planned_start: datetime | None = None
    actual_start: datetime | None = None
    lap_times: list[LapInfo] = field(default_factory=list)
    penalty_lap_info: PenaltyInfo = field(default_factory=PenaltyInfo)

    def total_time(self):
        """Sum of the recorded main lap times."""
        return sum((lap.time for lap in self.lap_times), timedelta())

    def is_finished(self):
        return self.status == Status.FINISHED

    def is_running(self):
        return self.status == Status.RUNNING

    def is_disqualified(self):
        return self.status == Status.DISQUALIFIED

    def shot_accuracy(self):
        """Hits over shots, as "hits/total"."""
        return f"{self.shots_hit}/{self.total_shots}"