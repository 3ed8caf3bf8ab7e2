"""Distance resolution from free-text event names."""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from pera_analytics.shared.constants import DISTANCE_FALLBACKS, DISTANCE_PATTERN, KM_TO_M

from .models import EventStandard

_DISTANCE_RE = re.compile(DISTANCE_PATTERN)
_DIGITS_RE = re.compile(r"(\d+)")


def get_event_distance(name: str) -> float:
    """Resolve an event name to meters.

    "10km"          → 10000
    "1500m"         → 1500
    "Half Marathon" → 21097.5
    "Relay"         → 0
    """
    lower = name.lower()

    match = _DISTANCE_RE.search(lower)
    if match:
        value = float(match.group(1))
        if match.group(3) == "km":
            return value * KM_TO_M
        return value

    for marker, meters in DISTANCE_FALLBACKS:
        if marker in lower:
            return meters
    return 0


def natural_key(name: str) -> list:
    """Case-insensitive, numeric-aware sort key ("Run 2" < "Run 10")."""
    # re.split with a capture group alternates text/digits, so positions
    # always compare str with str and int with int
    parts = _DIGITS_RE.split(name.casefold())
    return [int(part) if idx % 2 else part for idx, part in enumerate(parts)]


def sort_events_by_distance(events: Iterable[EventStandard]) -> list[EventStandard]:
    """Ascending by resolved distance; equal distances fall back to name order."""
    return sorted(events, key=lambda e: (get_event_distance(e.name), natural_key(e.name)))


def total_distance(event_ids: Sequence[str], standards: Iterable[EventStandard]) -> float:
    """Sum the distances of the given events; unknown ids count as 0."""
    by_id = {s.id: s for s in standards}
    total = 0.0
    for event_id in event_ids:
        event = by_id.get(event_id)
        if event is not None:
            total += get_event_distance(event.name)
    return total
