"""
ClubRepository: the single owner of the club's collections.

Holds athletes, event standards, sessions and routes. Commands replace
whole collections with new lists; read-side services (rankings, records,
reports) are built on demand from the current state.

Usage:
    club = ClubRepository.load(Path("backup.json"))
    session = club.record_session(meta, parse_entries(rows))
    board = club.rankings().leaderboard()
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Sequence

from pera_analytics.config import Settings, settings
from pera_analytics.features.athletes.models import Athlete, PersonalBest
from pera_analytics.features.events.catalog import StandardsCatalog
from pera_analytics.features.events.models import EventStandard, Route
from pera_analytics.features.rankings.service import RankingService
from pera_analytics.features.records.aggregator import RecordsAggregator
from pera_analytics.features.reports.builder import ReportBuilder
from pera_analytics.features.sessions.models import EntryDraft, RaceSession
from pera_analytics.features.sessions.schemas import SessionMeta
from pera_analytics.features.sessions.scorer import SessionScorer
from pera_analytics.shared.repository import BaseRepository

from .schemas import AthleteSchema, ClubSnapshot, RouteSchema, SessionSchema, StandardSchema

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


class ClubRepository:
    """
    In-memory club state with command methods.

    Args:
        athletes, standards, sessions, routes: Initial collections
        config: Settings (k-value default, penalty margin, standards file)
        id_factory: Generates ids for new entities
    """

    def __init__(
        self,
        athletes: Iterable[Athlete] = (),
        standards: Iterable[EventStandard] = (),
        sessions: Iterable[RaceSession] = (),
        routes: Iterable[Route] = (),
        *,
        config: Settings = settings,
        id_factory: Callable[[], str] = _new_id,
    ):
        self.config = config
        self.id_factory = id_factory
        self._athletes: BaseRepository[Athlete] = BaseRepository(athletes, "Athlete")
        self._standards: BaseRepository[EventStandard] = BaseRepository(standards, "Event standard")
        self._sessions: BaseRepository[RaceSession] = BaseRepository(sessions, "Session")
        self._routes: BaseRepository[Route] = BaseRepository(routes, "Route")

    @classmethod
    def load(cls, path: Optional[Path] = None, config: Settings = settings) -> ClubRepository:
        """
        Build a repository from a JSON snapshot file.

        Without a path (or with a snapshot that has no standards key) the
        packaged default standards are used. An explicit empty standards
        list is kept empty.
        """
        club = cls(config=config)
        snapshot = None
        if path is not None:
            with open(path, encoding="utf-8") as f:
                snapshot = club.import_snapshot(json.load(f))
        if snapshot is None or snapshot.standards is None:
            club.load_default_standards()
        return club

    # -------------------------------------------------------------------------
    # Collections (read-only snapshots)
    # -------------------------------------------------------------------------

    @property
    def athletes(self) -> list[Athlete]:
        return self._athletes.get_all()

    @property
    def standards(self) -> list[EventStandard]:
        return self._standards.get_all()

    @property
    def sessions(self) -> list[RaceSession]:
        return self._sessions.get_all()

    @property
    def routes(self) -> list[Route]:
        return self._routes.get_all()

    def get_athlete(self, athlete_id: str) -> Athlete:
        return self._athletes.require(athlete_id)

    def get_session(self, session_id: str) -> RaceSession:
        return self._sessions.require(session_id)

    # -------------------------------------------------------------------------
    # Athletes
    # -------------------------------------------------------------------------

    def add_athlete(
        self,
        name: str,
        faculty: Optional[str] = None,
        batch: Optional[str] = None,
        photo_url: Optional[str] = None,
        personal_bests: Sequence[PersonalBest] = (),
    ) -> Athlete:
        athlete = Athlete(
            id=self.id_factory(),
            name=name,
            faculty=faculty,
            batch=batch,
            photo_url=photo_url or None,
            personal_bests=list(personal_bests),
            is_active=True,
        )
        return self._athletes.create(athlete)

    def delete_athlete(self, athlete_id: str) -> Athlete:
        """Remove an athlete. Their session results stay behind as dangling ids."""
        return self._athletes.delete(athlete_id)

    def toggle_athlete_status(self, athlete_id: str) -> Athlete:
        athlete = self._athletes.require(athlete_id)
        return self._athletes.update(athlete, is_active=not athlete.is_active)

    # -------------------------------------------------------------------------
    # Standards & routes
    # -------------------------------------------------------------------------

    def add_standard(self, name: str, gold_time: float, k_value: Optional[float] = None) -> EventStandard:
        if gold_time <= 0:
            raise ValueError(f"Gold time must be positive, got {gold_time}")
        standard = EventStandard(
            id=self.id_factory(),
            name=name,
            gold_time=gold_time,
            k_value=self.config.default_k_value if k_value is None else k_value,
        )
        return self._standards.create(standard)

    def update_standard(self, standard: EventStandard) -> EventStandard:
        """
        Replace a standard by id.

        Existing session points are not recomputed.
        """
        if standard.gold_time <= 0:
            raise ValueError(f"Gold time must be positive, got {standard.gold_time}")
        current = self._standards.require(standard.id)
        return self._standards.update(
            current, name=standard.name, gold_time=standard.gold_time, k_value=standard.k_value
        )

    def load_default_standards(self) -> list[EventStandard]:
        defaults = StandardsCatalog(self.config.standards_file).standards
        logger.info("Using %d default event standards from %s", len(defaults), self.config.standards_file)
        self._standards.replace_all(defaults)
        return defaults

    def add_route(
        self,
        name: str,
        distance: str,
        elevation: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Route:
        route = Route(
            id=self.id_factory(),
            name=name,
            distance=distance,
            elevation=elevation or None,
            description=description or None,
        )
        return self._routes.create(route)

    def delete_route(self, route_id: str) -> Route:
        """Remove a route. Sessions keep their routeId."""
        return self._routes.delete(route_id)

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    def record_session(self, meta: SessionMeta, entries: Sequence[EntryDraft]) -> RaceSession:
        """
        Score and store a new session.

        The roster (new PBs) and the session list are committed together,
        and only after scoring succeeded.

        Raises:
            UnknownEventError: meta.event_id is not a known standard
        """
        scorer = SessionScorer(
            standards=self.standards,
            athletes=self.athletes,
            sessions=self.sessions,
            penalty_margin=self.config.penalty_margin,
            id_factory=self.id_factory,
        )
        outcome = scorer.record(meta, entries)

        self._athletes.replace_all(outcome.athletes)
        return self._sessions.create(outcome.session)

    def delete_session(self, session_id: str) -> RaceSession:
        """Remove a session. PBs it produced are kept."""
        return self._sessions.delete(session_id)

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def import_snapshot(self, data: dict[str, Any] | ClubSnapshot) -> ClubSnapshot:
        """
        Replace the collections present in a snapshot.

        Collections missing from the snapshot keep their current contents.

        Raises:
            pydantic.ValidationError: malformed snapshot
        """
        snapshot = data if isinstance(data, ClubSnapshot) else ClubSnapshot.model_validate(data)

        replaced = []
        if snapshot.athletes is not None:
            self._athletes.replace_all(a.to_model() for a in snapshot.athletes)
            replaced.append(f"{len(snapshot.athletes)} athletes")
        if snapshot.standards is not None:
            self._standards.replace_all(s.to_model() for s in snapshot.standards)
            replaced.append(f"{len(snapshot.standards)} standards")
        if snapshot.routes is not None:
            self._routes.replace_all(r.to_model() for r in snapshot.routes)
            replaced.append(f"{len(snapshot.routes)} routes")
        if snapshot.sessions is not None:
            self._sessions.replace_all(s.to_model() for s in snapshot.sessions)
            replaced.append(f"{len(snapshot.sessions)} sessions")

        logger.info("Imported snapshot: %s", ", ".join(replaced) or "nothing")
        return snapshot

    def export_snapshot(self) -> dict[str, Any]:
        """Full backup in the camelCase JSON format, stamped with exportDate."""
        snapshot = ClubSnapshot(
            athletes=[AthleteSchema.from_model(a) for a in self.athletes],
            standards=[StandardSchema.from_model(s) for s in self.standards],
            routes=[RouteSchema.from_model(r) for r in self.routes],
            sessions=[SessionSchema.from_model(s) for s in self.sessions],
            export_date=datetime.now(timezone.utc).isoformat(),
        )
        return snapshot.model_dump(by_alias=True, exclude_none=True)

    def save(self, path: Path) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.export_snapshot(), f, indent=2, ensure_ascii=False)
        logger.info("Saved snapshot to %s", path)

    # -------------------------------------------------------------------------
    # Read-side services
    # -------------------------------------------------------------------------

    def rankings(self) -> RankingService:
        return RankingService(self.athletes, self.sessions, self.standards)

    def records(self) -> RecordsAggregator:
        return RecordsAggregator(self.athletes, self.sessions, self.standards, self.routes)

    def reports(self) -> ReportBuilder:
        return ReportBuilder(self.athletes, self.sessions, self.standards)
