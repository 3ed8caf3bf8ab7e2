"""Data models for records leaderboards (dataclasses, no I/O)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pera_analytics.features.athletes.models import Athlete


class RecordSource(str, Enum):
    """Where a record row came from."""
    SESSION = "session"
    MANUAL_PB = "manual_pb"


@dataclass
class RecordRow:
    """One performance on a records leaderboard."""

    athlete: Athlete
    time: float  # seconds
    date: str | None
    venue: str | None  # session venue (or name) / PB venue
    points: int | None
    source: RecordSource
    session_id: str | None = None
    session_name: str | None = None


@dataclass
class RecordFilters:
    """Display filters, applied after the records are computed."""

    faculty: str | None = None
    batch: str | None = None
    athlete_id: str | None = None
    year: str | None = None  # "2025"


@dataclass
class FilterOptions:
    """Values available to the records filters."""

    faculties: list[str] = field(default_factory=list)
    batches: list[str] = field(default_factory=list)
    years: list[str] = field(default_factory=list)  # newest first
