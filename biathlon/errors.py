"""Exceptions raised while reading configuration and competition events."""


class BiathlonError(Exception):
    """Base class for all errors raised by the package."""

    default_message = "biathlon error"

    def __init__(self, message=None):
        super().__init__(message if message is not None else self.default_message)


class InvalidTimeFormatError(BiathlonError, ValueError):
    """A clock value or an event's time stamp could not be read."""

    default_message = "invalid time format"


class InvalidEventFormatError(BiathlonError, ValueError):
    """An event line lacks the event and competitor identifiers."""

    default_message = "invalid event format"


class ProcessingError(BiathlonError):
    """An event could not be applied to a competitor."""

    def __init__(self, competitor_id, event_id, message):
        self.competitor_id = competitor_id
        self.event_id = event_id
        self.message = message
        super().__init__(
            f"error processing event {event_id} for competitor {competitor_id}: {message}"
        )