"""Data models for event standards and routes (dataclasses, no I/O)."""

from __future__ import annotations

from dataclasses import dataclass

from pera_analytics.shared.constants import DEFAULT_K_VALUE


@dataclass
class EventStandard:
    """A race distance and its elite benchmark."""

    id: str
    name: str  # "1500m", "10km"; distance is derived from the name
    gold_time: float  # seconds, scores exactly 1000 points
    k_value: float = DEFAULT_K_VALUE


@dataclass
class Route:
    """A course that sessions can be run on, used for course records."""

    id: str
    name: str  # "Campus Loop"
    distance: str  # free text: "5km"
    elevation: str | None = None  # free text: "120m"
    description: str | None = None
