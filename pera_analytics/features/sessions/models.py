"""Data models for race sessions and results (dataclasses, no I/O)."""

from __future__ import annotations

from dataclasses import dataclass, field

from pera_analytics.features.athletes.models import Athlete
from pera_analytics.shared.constants import Tag
from pera_analytics.shared.dates import date_year


@dataclass
class RaceResult:
    """One athlete's line in a session."""

    athlete_id: str
    time: float  # seconds; 0 = did not start (penalty row)
    points: int
    rank: int  # manual place or 1-based finish order
    tags: list[str] = field(default_factory=list)  # "PB", "SB", "CR", "Penalty"
    notes: str | None = None

    @property
    def finished(self) -> bool:
        return self.time > 0

    @property
    def is_penalty(self) -> bool:
        return Tag.PENALTY.value in self.tags


@dataclass
class RaceSession:
    """A recorded race. Immutable once created, except for deletion."""

    id: str
    date: str  # "2025-03-01"
    name: str  # "Season Opener"
    event_id: str
    is_mandatory: bool = False
    results: list[RaceResult] = field(default_factory=list)
    venue: str | None = None
    route_id: str | None = None
    notes: str | None = None

    @property
    def year(self) -> str | None:
        return date_year(self.date)

    def result_for(self, athlete_id: str) -> RaceResult | None:
        return next((r for r in self.results if r.athlete_id == athlete_id), None)


@dataclass
class EntryDraft:
    """A validated finish submitted for scoring."""

    athlete_id: str
    time: float  # seconds
    place: int | None = None  # explicit finishing place, overrides time order


@dataclass
class SessionOutcome:
    """Result of recording a session: the new session and the updated roster."""

    session: RaceSession
    athletes: list[Athlete]
    updated_athlete_ids: list[str] = field(default_factory=list)


@dataclass
class AthleteResult:
    """A result joined with its session, as seen from one athlete's history."""

    result: RaceResult
    session_id: str
    session_name: str
    date: str
    event_id: str
    route_id: str | None = None

    @property
    def athlete_id(self) -> str:
        return self.result.athlete_id

    @property
    def time(self) -> float:
        return self.result.time

    @property
    def points(self) -> int:
        return self.result.points

    @property
    def rank(self) -> int:
        return self.result.rank

    @property
    def tags(self) -> list[str]:
        return self.result.tags
