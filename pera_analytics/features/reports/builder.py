"""
Report builders for the coaching assistant.

Produce plain-text context blocks (team, session, athlete) that are handed
to an external text generator. Building the text is pure; nothing here
talks to the network.
"""

from __future__ import annotations

import logging
from typing import Iterable

from pera_analytics.features.athletes.models import Athlete
from pera_analytics.features.events.models import EventStandard
from pera_analytics.features.rankings.service import RankingService
from pera_analytics.features.sessions.models import RaceSession
from pera_analytics.shared.constants import RECENT_SESSIONS_IN_REPORT, UNKNOWN_NAME
from pera_analytics.shared.dates import chronological_key
from pera_analytics.shared.exceptions import NotFoundError
from pera_analytics.shared.formatters import format_time, to_markdown_table

logger = logging.getLogger(__name__)

RESULTS_HEADERS = ("Rank", "Athlete", "Time", "Points", "Tags")


class ReportBuilder:
    """Builds report context text from in-memory club data."""

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
        self._standards_by_id = {s.id: s for s in self.standards}
        self._rankings = RankingService(self.athletes, self.sessions, self.standards)

    def team_summary(self) -> str:
        """Standards, active roster averages and the most recent sessions."""
        roster_lines = []
        for athlete in self.athletes:
            if not athlete.is_active:
                continue
            _, entries = self._rankings.totals(athlete.id)
            avg = self._rankings.average_points(athlete.id)
            roster_lines.append(
                f"- {self._label(athlete)}: Avg {avg} pts over {entries} events."
            )

        recent = sorted(self.sessions, key=lambda s: chronological_key(s.date), reverse=True)
        session_lines = []
        for session in recent[:RECENT_SESSIONS_IN_REPORT]:
            winner = self._athlete_name(session.results[0].athlete_id) if session.results else "N/A"
            session_lines.append(
                f"* {session.name} ({self._event_name(session.event_id)}) on {session.date}: "
                f"Winner {winner}, {len(session.results)} participants."
            )

        lines = [
            "STAKEHOLDER: TEAM OVERVIEW",
            "",
            f"STANDARDS: {self._standards_line()}",
            "",
            "ACTIVE ROSTER:",
            *roster_lines,
            "",
            "RECENT COMPETITIONS:",
            *session_lines,
        ]
        return "\n".join(lines)

    def session_summary(self, session_id: str) -> str:
        """
        Results table for one session.

        Raises:
            NotFoundError: session id does not resolve
        """
        session = next((s for s in self.sessions if s.id == session_id), None)
        if session is None:
            raise NotFoundError("Session", session_id)

        rows = [
            (
                r.rank,
                self._athlete_name(r.athlete_id),
                format_time(r.time),
                r.points,
                ", ".join(r.tags),
            )
            for r in session.results
        ]
        lines = [
            "STAKEHOLDER: RACE SESSION ANALYSIS",
            f"EVENT: {session.name} ({self._event_name(session.event_id)})",
            f"DATE: {session.date}",
            "",
            "RESULTS TABLE:",
            to_markdown_table(RESULTS_HEADERS, rows),
        ]
        return "\n".join(lines)

    def athlete_summary(self, athlete_id: str) -> str:
        """
        Personal bests and full race history, latest first.

        Raises:
            NotFoundError: athlete id does not resolve
        """
        athlete = self._athletes_by_id.get(athlete_id)
        if athlete is None:
            raise NotFoundError("Athlete", athlete_id)

        pbs = ", ".join(
            f"{self._event_name(pb.event_id)}: {format_time(pb.time)}"
            for pb in athlete.personal_bests
        )
        history = [
            f"- {r.date}: {r.session_name} ({self._event_name(r.event_id)}) -> "
            f"{format_time(r.time)} ({r.points} pts, Rank #{r.rank})"
            for r in self._rankings.athlete_results(athlete_id)
        ]

        details = ", ".join(
            part for part in (athlete.faculty, f"Batch {athlete.batch}" if athlete.batch else None) if part
        )
        lines = [
            "STAKEHOLDER: INDIVIDUAL ATHLETE PERFORMANCE",
            f"ATHLETE: {athlete.name} ({details})" if details else f"ATHLETE: {athlete.name}",
            f"PERSONAL BESTS: {pbs or 'none recorded'}",
            "",
            "COMPETITION HISTORY (Latest First):",
            *history,
        ]
        return "\n".join(lines)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _standards_line(self) -> str:
        return "; ".join(
            f"{s.name}: Gold={format_time(s.gold_time)} (k={s.k_value:g})" for s in self.standards
        )

    def _athlete_name(self, athlete_id: str) -> str:
        athlete = self._athletes_by_id.get(athlete_id)
        if athlete is None:
            logger.debug("Dangling athlete id %s in report", athlete_id)
            return UNKNOWN_NAME
        return athlete.name

    def _event_name(self, event_id: str) -> str:
        event = self._standards_by_id.get(event_id)
        return event.name if event else UNKNOWN_NAME

    @staticmethod
    def _label(athlete: Athlete) -> str:
        return f"{athlete.name} ({athlete.faculty})" if athlete.faculty else athlete.name
