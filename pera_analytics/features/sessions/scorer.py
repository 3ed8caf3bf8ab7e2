"""
Session Scorer

Turns a draft set of finishes into a ranked, tagged race session.

Pipeline for one session:
1. Resolve the event standard (unknown event aborts everything)
2. Score every finisher with the power-law points formula
3. Tag PB / SB against the athlete's existing bests
4. Rank by time, honouring explicit places
5. Tag the course record on the fastest finisher
6. Append penalty rows for active athletes who skipped a mandatory race
7. Roll new personal bests into the roster

Nothing is persisted here: the scorer returns a new session and a new
roster, and never mutates the collections it was given.
"""

from __future__ import annotations

import logging
import math
import uuid
from typing import Callable, Iterable, Sequence

from pera_analytics.features.athletes.models import Athlete, PersonalBest
from pera_analytics.features.events.models import EventStandard
from pera_analytics.shared.constants import MISSED_MANDATORY_NOTE, PENALTY_MARGIN, Tag
from pera_analytics.shared.dates import chronological_key, date_year
from pera_analytics.shared.exceptions import UnknownEventError
from pera_analytics.shared.formulas import calculate_points, penalty_points

from .models import EntryDraft, RaceResult, RaceSession, SessionOutcome
from .schemas import SessionMeta

logger = logging.getLogger(__name__)


def _new_session_id() -> str:
    return str(uuid.uuid4())


class SessionScorer:
    """
    Scores a race against the club's current state.

    Args:
        standards: Known event standards
        athletes: Current roster (PBs are read from here)
        sessions: Sessions recorded so far (for SB, CR and penalty history)
        penalty_margin: Points below the reference score for absentees
        id_factory: Generates the new session id
    """

    def __init__(
        self,
        standards: Iterable[EventStandard],
        athletes: Iterable[Athlete],
        sessions: Iterable[RaceSession],
        penalty_margin: int = PENALTY_MARGIN,
        id_factory: Callable[[], str] = _new_session_id,
    ):
        self.standards = {s.id: s for s in standards}
        self.athletes = list(athletes)
        self.sessions = list(sessions)
        self.penalty_margin = penalty_margin
        self.id_factory = id_factory
        self._athletes_by_id = {a.id: a for a in self.athletes}

    def record(self, meta: SessionMeta, entries: Sequence[EntryDraft]) -> SessionOutcome:
        """
        Build a finished session from metadata and validated entries.

        Raises:
            UnknownEventError: meta.event_id is not a known standard

        Returns:
            SessionOutcome with the new session and the roster after PB updates
        """
        event = self.standards.get(meta.event_id)
        if event is None:
            raise UnknownEventError(meta.event_id)

        finishers = []
        for draft in entries:
            if draft.time <= 0:
                logger.warning(
                    "Ignoring non-positive time %s for athlete %s", draft.time, draft.athlete_id
                )
                continue
            finishers.append(draft)

        scored = [(draft, self._score_entry(draft, event, meta.date)) for draft in finishers]
        scored.sort(key=lambda pair: pair[0].time)

        results: list[RaceResult] = []
        for position, (draft, result) in enumerate(scored, start=1):
            result.rank = draft.place if draft.place else position
            results.append(result)

        if meta.route_id and results:
            if results[0].time < self.course_record_time(meta.route_id):
                results[0].tags.append(Tag.CR.value)

        if meta.is_mandatory:
            participating = {draft.athlete_id for draft in finishers}
            results.extend(self._penalty_rows(participating, results, meta.date))

        athletes, updated_ids = self._apply_personal_bests(results, event, meta)

        session = RaceSession(
            id=self.id_factory(),
            date=meta.date,
            name=meta.name,
            event_id=event.id,
            is_mandatory=meta.is_mandatory,
            results=results,
            venue=meta.venue,
            route_id=meta.route_id,
            notes=meta.notes,
        )
        logger.info(
            "Recorded session %r (%s): %d finishers, %d penalties, %d new PBs",
            session.name, event.name, len(finishers),
            len(results) - len(finishers), len(updated_ids),
        )
        return SessionOutcome(session=session, athletes=athletes, updated_athlete_ids=updated_ids)

    def calculate_penalty(self, last_place_points: int, athlete_id: str, session_date: str) -> int:
        """
        Penalty for an athlete absent from a mandatory race.

        The cap comes from the athlete's most recent recorded points on or
        before the session date, looking only at sessions recorded so far.
        """
        cutoff = chronological_key(session_date)
        history = sorted(
            (s for s in self.sessions if chronological_key(s.date) <= cutoff),
            key=lambda s: chronological_key(s.date),
            reverse=True,
        )

        history_points = None
        for session in history:
            result = session.result_for(athlete_id)
            if result is not None and result.points is not None:
                history_points = result.points
                break

        return penalty_points(last_place_points, history_points, self.penalty_margin)

    def course_record_time(self, route_id: str) -> float:
        """Fastest finish ever recorded on a route (inf when none)."""
        times = [
            r.time
            for s in self.sessions if s.route_id == route_id
            for r in s.results if r.finished
        ]
        return min(times, default=math.inf)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _score_entry(self, draft: EntryDraft, event: EventStandard, date: str) -> RaceResult:
        """Points plus PB/SB tags for one finisher."""
        points = calculate_points(draft.time, event.gold_time, event.k_value)
        athlete = self._athletes_by_id.get(draft.athlete_id)
        tags: list[str] = []

        if athlete is not None:
            pb = athlete.get_pb(event.id)
            is_pb = pb is None or draft.time < pb.time
            if is_pb:
                tags.append(Tag.PB.value)
            if is_pb or draft.time < self._season_best(athlete, pb, event.id, date):
                tags.append(Tag.SB.value)
        else:
            logger.debug("Entry for unknown athlete %s scored without tags", draft.athlete_id)

        return RaceResult(athlete_id=draft.athlete_id, time=draft.time, points=points, rank=0, tags=tags)

    def _season_best(
        self, athlete: Athlete, pb: PersonalBest | None, event_id: str, date: str
    ) -> float:
        """Best same-year time so far from sessions and a same-year manual PB."""
        year = date_year(date)
        if year is None:
            return math.inf

        session_best = min(
            (
                r.time
                for s in self.sessions if s.year == year and s.event_id == event_id
                for r in s.results if r.athlete_id == athlete.id and r.finished
            ),
            default=math.inf,
        )
        manual_best = math.inf
        if pb is not None and date_year(pb.date) == year:
            manual_best = pb.time
        return min(session_best, manual_best)

    def _penalty_rows(
        self, participating: set[str], results: list[RaceResult], date: str
    ) -> list[RaceResult]:
        """Synthetic rows for active athletes missing from a mandatory race."""
        last_place_points = results[-1].points if results else 0
        penalties: list[RaceResult] = []
        for athlete in self.athletes:
            if not athlete.is_active or athlete.id in participating:
                continue
            penalties.append(
                RaceResult(
                    athlete_id=athlete.id,
                    time=0,
                    points=self.calculate_penalty(last_place_points, athlete.id, date),
                    rank=len(results) + len(penalties) + 1,
                    tags=[Tag.PENALTY.value],
                    notes=MISSED_MANDATORY_NOTE,
                )
            )
        return penalties

    def _apply_personal_bests(
        self, results: list[RaceResult], event: EventStandard, meta: SessionMeta
    ) -> tuple[list[Athlete], list[str]]:
        """Roll faster finishes into athletes' PBs; returns (roster, changed ids)."""
        roster = dict(self._athletes_by_id)
        updated: list[str] = []
        for result in results:
            if not result.finished:
                continue
            athlete = roster.get(result.athlete_id)
            if athlete is None:
                continue
            pb = athlete.get_pb(event.id)
            if pb is None or result.time < pb.time:
                roster[athlete.id] = athlete.with_pb(
                    PersonalBest(
                        event_id=event.id,
                        time=result.time,
                        date=meta.date,
                        venue=meta.venue or meta.name,
                    )
                )
                if athlete.id not in updated:
                    updated.append(athlete.id)

        return [roster[a.id] for a in self.athletes], updated
