"""
RankingService: leaderboards, historical replay and athlete profiles.

Everything is recomputed from the full session history on each call.
Cost is O(sessions x athletes) per query.

Averages divide by every entry, penalty rows included, so a missed
mandatory race drags the average down.
Ties on average points are broken by athlete name (case-insensitive),
then by athlete id.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from pera_analytics.features.athletes.models import Athlete
from pera_analytics.features.events.distance import total_distance
from pera_analytics.features.events.models import EventStandard
from pera_analytics.features.sessions.models import AthleteResult, RaceSession
from pera_analytics.shared.constants import PODIUM_MAX_RANK
from pera_analytics.shared.dates import chronological_key
from pera_analytics.shared.exceptions import NotFoundError
from pera_analytics.shared.formulas import round_half_up

from .badges import get_badges
from .models import AthleteStats, Badge, CareerStats, LeaderboardRow

logger = logging.getLogger(__name__)

UNRANKED = 0


class RankingService:
    """Derives ranks and statistics from in-memory club data."""

    def __init__(
        self,
        athletes: Iterable[Athlete],
        sessions: Iterable[RaceSession],
        standards: Iterable[EventStandard] = (),
    ):
        self.athletes = list(athletes)
        self.sessions = list(sessions)
        self.standards = list(standards)
        self._athletes_by_id = {a.id: a for a in self.athletes}

    # -------------------------------------------------------------------------
    # Current standings
    # -------------------------------------------------------------------------

    def totals(self, athlete_id: str, sessions: Sequence[RaceSession] | None = None) -> tuple[int, int]:
        """(total points, entries) across sessions, penalties included."""
        sessions = self.sessions if sessions is None else sessions
        total = 0
        count = 0
        for session in sessions:
            for result in session.results:
                if result.athlete_id == athlete_id:
                    total += result.points
                    count += 1
        return total, count

    def average_points(self, athlete_id: str, sessions: Sequence[RaceSession] | None = None) -> int:
        total, count = self.totals(athlete_id, sessions)
        return round_half_up(total / count) if count else 0

    def current_rank(self, athlete_id: str, sessions: Sequence[RaceSession] | None = None) -> int:
        """
        Position on the live leaderboard.

        Args:
            athlete_id: Athlete to rank
            sessions: History to rank over (default: all sessions)

        Returns:
            1-based rank among active athletes, 0 if retired or unknown
        """
        subject = self._athletes_by_id.get(athlete_id)
        if subject is None or not subject.is_active:
            return UNRANKED

        standings = sorted(
            (a for a in self.athletes if a.is_active),
            key=lambda a: self._standing_key(a.id, self.average_points(a.id, sessions)),
        )
        return next(idx for idx, a in enumerate(standings, start=1) if a.id == athlete_id)

    def leaderboard(self) -> list[LeaderboardRow]:
        """Active athletes ordered by average points."""
        rows = []
        for athlete in self.athletes:
            if not athlete.is_active:
                continue
            results = [r for s in self.sessions for r in s.results if r.athlete_id == athlete.id]
            total = sum(r.points for r in results)
            rows.append(
                LeaderboardRow(
                    rank=UNRANKED,
                    athlete=athlete,
                    total_points=total,
                    average_points=round_half_up(total / len(results)) if results else 0,
                    races_run=sum(1 for r in results if r.finished),
                    entries=len(results),
                )
            )

        rows.sort(key=lambda row: self._standing_key(row.athlete.id, row.average_points))
        for rank, row in enumerate(rows, start=1):
            row.rank = rank
        return rows

    # -------------------------------------------------------------------------
    # Historical replay
    # -------------------------------------------------------------------------

    def chronological_sessions(self) -> list[RaceSession]:
        """Sessions oldest first; same-day sessions keep recording order."""
        return sorted(self.sessions, key=lambda s: chronological_key(s.date))

    def career_stats(self, athlete_id: str) -> CareerStats:
        """
        Peak rank and peak average by replaying every session in date order.

        Historical snapshots rank everyone with data at that point, retired
        athletes and deleted ids included.
        """
        running: dict[str, list[int]] = {}  # athlete_id -> [total, count]
        best_rank = None
        highest_avg = 0

        for session in self.chronological_sessions():
            for result in session.results:
                acc = running.setdefault(result.athlete_id, [0, 0])
                acc[0] += result.points
                acc[1] += 1

            if athlete_id not in running:
                continue

            averages = {
                aid: round_half_up(total / count) for aid, (total, count) in running.items()
            }
            highest_avg = max(highest_avg, averages[athlete_id])

            snapshot = sorted(averages, key=lambda aid: self._standing_key(aid, averages[aid]))
            rank = snapshot.index(athlete_id) + 1
            if best_rank is None or rank < best_rank:
                best_rank = rank

        return CareerStats(best_rank=best_rank or UNRANKED, highest_avg=highest_avg)

    # -------------------------------------------------------------------------
    # Athlete profile
    # -------------------------------------------------------------------------

    def athlete_results(self, athlete_id: str) -> list[AthleteResult]:
        """The athlete's results joined with their sessions, latest first."""
        joined = [
            AthleteResult(
                result=r,
                session_id=s.id,
                session_name=s.name,
                date=s.date,
                event_id=s.event_id,
                route_id=s.route_id,
            )
            for s in self.sessions
            for r in s.results
            if r.athlete_id == athlete_id
        ]
        return sorted(joined, key=lambda r: chronological_key(r.date), reverse=True)

    def badges(self, athlete_id: str) -> list[Badge]:
        return get_badges(
            athlete_id,
            self.athlete_results(athlete_id),
            standards=self.standards,
            sessions=self.sessions,
            rank_fn=self.current_rank,
        )

    def athlete_stats(self, athlete_id: str) -> AthleteStats:
        """
        Full profile statistics for one athlete.

        Raises:
            NotFoundError: athlete id does not resolve
        """
        athlete = self._athletes_by_id.get(athlete_id)
        if athlete is None:
            raise NotFoundError("Athlete", athlete_id)

        results = self.athlete_results(athlete_id)
        finished = [r for r in results if r.result.finished]
        total_points = sum(r.points for r in results)

        return AthleteStats(
            athlete=athlete,
            rank=self.current_rank(athlete_id),
            races_run=len(finished),
            wins=sum(1 for r in finished if r.rank == 1),
            podiums=sum(1 for r in finished if 0 < r.rank <= PODIUM_MAX_RANK),
            total_points=total_points,
            average_points=round_half_up(total_points / len(results)) if results else 0,
            total_distance_m=total_distance([r.event_id for r in finished], self.standards),
            career=self.career_stats(athlete_id),
            recent_results=results,
            badges=self.badges(athlete_id),
        )

    def roster(self, query: str | None = None) -> list[Athlete]:
        """
        Roster ordering for the athletes view.

        Active athletes first by current rank, then retired athletes by
        peak average (descending); name breaks ties in both groups.
        """
        athletes = self.athletes
        if query and query.strip():
            needle = query.strip().lower()
            athletes = [
                a for a in athletes
                if needle in a.name.lower()
                or (a.faculty and needle in a.faculty.lower())
                or (a.batch and needle in a.batch.lower())
            ]

        ranks = {a.id: self.current_rank(a.id) for a in athletes if a.is_active}
        peaks = {a.id: self.career_stats(a.id).highest_avg for a in athletes if not a.is_active}

        def key(a: Athlete) -> tuple:
            if a.is_active:
                return (0, ranks[a.id], a.name.casefold())
            return (1, -peaks[a.id], a.name.casefold())

        return sorted(athletes, key=key)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _standing_key(self, athlete_id: str, average: int) -> tuple:
        """Average descending, then name, then id."""
        athlete = self._athletes_by_id.get(athlete_id)
        if athlete is None:
            logger.debug("Dangling athlete id %s in standings", athlete_id)
            name = ""
        else:
            name = athlete.name.casefold()
        return (-average, name, athlete_id)
