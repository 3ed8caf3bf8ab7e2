"""Data models for athletes and personal bests (dataclasses, no I/O)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable


@dataclass
class PersonalBest:
    """Fastest known time for one event."""

    event_id: str
    time: float  # seconds
    date: str | None = None  # "2025-03-01"
    venue: str | None = None


@dataclass
class Athlete:
    """Club member.

    Retired athletes (is_active=False) keep their history but drop out of
    the live leaderboard.
    """

    id: str
    name: str
    faculty: str | None = None
    batch: str | None = None
    photo_url: str | None = None
    personal_bests: list[PersonalBest] = field(default_factory=list)
    is_active: bool = True

    def __post_init__(self):
        self.personal_bests = _one_per_event(self.personal_bests)

    def get_pb(self, event_id: str) -> PersonalBest | None:
        return next((pb for pb in self.personal_bests if pb.event_id == event_id), None)

    def with_pb(self, pb: PersonalBest) -> Athlete:
        """Return a copy holding `pb` as the only PB for its event."""
        return replace(self, personal_bests=[*self.personal_bests, pb])


def _one_per_event(personal_bests: Iterable[PersonalBest]) -> list[PersonalBest]:
    """Collapse to one PB per event. A later PB replaces an earlier one and moves to the end."""
    kept: list[PersonalBest] = []
    for pb in personal_bests:
        kept = [existing for existing in kept if existing.event_id != pb.event_id]
        kept.append(pb)
    return kept
