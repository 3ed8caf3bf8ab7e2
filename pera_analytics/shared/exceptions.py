"""
Exceptions raised by the scoring engine.

All validation failures are local: a failed operation leaves the club
state untouched.
"""


class PeraAnalyticsError(Exception):
    """Base error for the scoring engine."""


class InvalidTimeFormat(PeraAnalyticsError, ValueError):
    """Race clock text could not be parsed into seconds."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Invalid time format: {text!r}")


class UnknownEventError(PeraAnalyticsError):
    """A session references an event id missing from the standards."""

    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__(f"Unknown event: {event_id}")


class NotFoundError(PeraAnalyticsError, LookupError):
    """An athlete, session, route or standard id does not resolve."""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} not found: {entity_id}")
