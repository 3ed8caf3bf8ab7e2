"""
Records aggregation: event and course leaderboards.

Two data sources feed the event view: session results and manually
entered personal bests. The same real performance can exist in both
(recording a session also writes the PB), so in "all" mode a manual PB
is dropped when a session result shares its (athlete, time, date)
signature.

Course records come from session results only; manual PBs carry no
route.
"""

from __future__ import annotations

import logging
from typing import Iterable

from pera_analytics.features.athletes.models import Athlete
from pera_analytics.features.events.models import EventStandard, Route
from pera_analytics.features.sessions.models import RaceSession
from pera_analytics.shared.constants import RecordMode
from pera_analytics.shared.dates import date_year
from pera_analytics.shared.formulas import calculate_points

from .models import FilterOptions, RecordFilters, RecordRow, RecordSource

logger = logging.getLogger(__name__)


class RecordsAggregator:
    """Builds records leaderboards from in-memory club data."""

    def __init__(
        self,
        athletes: Iterable[Athlete],
        sessions: Iterable[RaceSession],
        standards: Iterable[EventStandard] = (),
        routes: Iterable[Route] = (),
    ):
        self.athletes = list(athletes)
        self.sessions = list(sessions)
        self.standards = {s.id: s for s in standards}
        self.routes = {r.id: r for r in routes}
        self._athletes_by_id = {a.id: a for a in self.athletes}

    def event_records(self, event_id: str, mode: RecordMode = RecordMode.BEST) -> list[RecordRow]:
        """
        Leaderboard for one event.

        BEST: each athlete's tracked PB.
        ALL: every finished session result plus manual PBs not already
        represented by a session result.
        """
        pb_rows = self._pb_rows(event_id)
        if mode == RecordMode.BEST:
            return sorted(pb_rows, key=lambda row: row.time)

        session_rows = self._session_rows(s for s in self.sessions if s.event_id == event_id)
        signatures = {self._signature(row) for row in session_rows}
        manual_rows = [row for row in pb_rows if self._signature(row) not in signatures]
        return sorted([*session_rows, *manual_rows], key=lambda row: row.time)

    def course_records(self, route_id: str, mode: RecordMode = RecordMode.BEST) -> list[RecordRow]:
        """
        Leaderboard for one route.

        BEST: each athlete's fastest run on the route.
        ALL: every run.
        """
        if route_id not in self.routes:
            logger.debug("Course records requested for unknown route %s", route_id)
        rows = self._session_rows(s for s in self.sessions if s.route_id == route_id)
        if mode == RecordMode.ALL:
            return sorted(rows, key=lambda row: row.time)

        bests: dict[str, RecordRow] = {}
        for row in rows:
            existing = bests.get(row.athlete.id)
            if existing is None or row.time < existing.time:
                bests[row.athlete.id] = row
        return sorted(bests.values(), key=lambda row: row.time)

    def filter_options(self) -> FilterOptions:
        """Distinct faculties, batches and years present in the data."""
        years = {date_year(s.date) for s in self.sessions}
        years |= {date_year(pb.date) for a in self.athletes for pb in a.personal_bests}
        years.discard(None)
        return FilterOptions(
            faculties=sorted({a.faculty for a in self.athletes if a.faculty}),
            batches=sorted({a.batch for a in self.athletes if a.batch}),
            years=sorted(years, reverse=True),
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _pb_rows(self, event_id: str) -> list[RecordRow]:
        event = self.standards.get(event_id)
        rows = []
        for athlete in self.athletes:
            pb = athlete.get_pb(event_id)
            if pb is None:
                continue
            rows.append(
                RecordRow(
                    athlete=athlete,
                    time=pb.time,
                    date=pb.date,
                    venue=pb.venue,
                    points=calculate_points(pb.time, event.gold_time, event.k_value) if event else None,
                    source=RecordSource.MANUAL_PB,
                )
            )
        return rows

    def _session_rows(self, sessions: Iterable[RaceSession]) -> list[RecordRow]:
        """Finished results whose athlete still resolves."""
        rows = []
        for session in sessions:
            for result in session.results:
                if not result.finished:
                    continue
                athlete = self._athletes_by_id.get(result.athlete_id)
                if athlete is None:
                    logger.debug(
                        "Skipping result for unknown athlete %s in session %s",
                        result.athlete_id, session.id,
                    )
                    continue
                rows.append(
                    RecordRow(
                        athlete=athlete,
                        time=result.time,
                        date=session.date,
                        venue=session.venue or session.name,
                        points=result.points,
                        source=RecordSource.SESSION,
                        session_id=session.id,
                        session_name=session.name,
                    )
                )
        return rows

    @staticmethod
    def _signature(row: RecordRow) -> tuple[str, float, str]:
        return (row.athlete.id, row.time, row.date or "")


def filter_records(rows: Iterable[RecordRow], filters: RecordFilters) -> list[RecordRow]:
    """
    Narrow an already-computed leaderboard.

    Filtering only hides rows; it never changes which performance counts
    as an athlete's best.
    """
    filtered = []
    for row in rows:
        athlete = row.athlete
        if filters.faculty and athlete.faculty != filters.faculty:
            continue
        if filters.batch and athlete.batch != filters.batch:
            continue
        if filters.athlete_id and athlete.id != filters.athlete_id:
            continue
        if filters.year and date_year(row.date) != filters.year:
            continue
        filtered.append(row)
    return filtered
