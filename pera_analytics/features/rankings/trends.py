"""Points trends over time for charting."""

from __future__ import annotations

from typing import Iterable, Sequence

from pera_analytics.features.athletes.models import Athlete
from pera_analytics.features.sessions.models import RaceSession
from pera_analytics.shared.dates import chronological_key

from .models import TimelinePoint


def points_timeline(sessions: Iterable[RaceSession]) -> list[TimelinePoint]:
    """One point per session, oldest first.

    Penalty rows are included: they are part of the score history.
    """
    timeline = []
    for session in sorted(sessions, key=lambda s: chronological_key(s.date)):
        timeline.append(
            TimelinePoint(
                session_id=session.id,
                date=session.date,
                race_name=session.name,
                points={r.athlete_id: r.points for r in session.results},
            )
        )
    return timeline


def most_active(
    athletes: Iterable[Athlete], sessions: Sequence[RaceSession], limit: int = 5
) -> list[Athlete]:
    """Athletes appearing in the most sessions (default selection for charts)."""
    def appearances(athlete: Athlete) -> int:
        return sum(1 for s in sessions if s.result_for(athlete.id) is not None)

    return sorted(athletes, key=appearances, reverse=True)[:limit]
