"""Event standards module: gold standards, routes and distance resolution."""

from .models import EventStandard, Route
from .distance import get_event_distance, sort_events_by_distance, total_distance
from .catalog import StandardsCatalog

__all__ = [
    "EventStandard",
    "Route",
    "get_event_distance",
    "sort_events_by_distance",
    "total_distance",
    "StandardsCatalog",
]
