"""
Club snapshot schemas.

Pydantic models for the JSON backup format: camelCase keys, missing
collections default to empty, unknown keys are ignored.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pera_analytics.features.athletes.models import Athlete, PersonalBest
from pera_analytics.features.events.models import EventStandard, Route
from pera_analytics.features.sessions.models import RaceResult, RaceSession
from pera_analytics.shared.constants import DEFAULT_K_VALUE


class SnapshotModel(BaseModel):
    """Base for snapshot schemas."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


class PersonalBestSchema(SnapshotModel):
    event_id: str
    time: float
    date: Optional[str] = None
    venue: Optional[str] = None

    def to_model(self) -> PersonalBest:
        return PersonalBest(event_id=self.event_id, time=self.time, date=self.date, venue=self.venue)

    @classmethod
    def from_model(cls, pb: PersonalBest) -> PersonalBestSchema:
        return cls(event_id=pb.event_id, time=pb.time, date=pb.date, venue=pb.venue)


class AthleteSchema(SnapshotModel):
    id: str
    name: str
    faculty: Optional[str] = None
    batch: Optional[str] = None
    photo_url: Optional[str] = None
    personal_bests: list[PersonalBestSchema] = Field(default_factory=list)
    is_active: bool = True

    def to_model(self) -> Athlete:
        return Athlete(
            id=self.id,
            name=self.name,
            faculty=self.faculty,
            batch=self.batch,
            photo_url=self.photo_url,
            personal_bests=[pb.to_model() for pb in self.personal_bests],
            is_active=self.is_active,
        )

    @classmethod
    def from_model(cls, athlete: Athlete) -> AthleteSchema:
        return cls(
            id=athlete.id,
            name=athlete.name,
            faculty=athlete.faculty,
            batch=athlete.batch,
            photo_url=athlete.photo_url,
            personal_bests=[PersonalBestSchema.from_model(pb) for pb in athlete.personal_bests],
            is_active=athlete.is_active,
        )


class StandardSchema(SnapshotModel):
    id: str
    name: str
    gold_time: float = Field(..., gt=0)
    k_value: float = DEFAULT_K_VALUE

    def to_model(self) -> EventStandard:
        return EventStandard(id=self.id, name=self.name, gold_time=self.gold_time, k_value=self.k_value)

    @classmethod
    def from_model(cls, standard: EventStandard) -> StandardSchema:
        return cls(
            id=standard.id,
            name=standard.name,
            gold_time=standard.gold_time,
            k_value=standard.k_value,
        )


class RouteSchema(SnapshotModel):
    id: str
    name: str
    distance: str = ""
    elevation: Optional[str] = None
    description: Optional[str] = None

    def to_model(self) -> Route:
        return Route(
            id=self.id,
            name=self.name,
            distance=self.distance,
            elevation=self.elevation,
            description=self.description,
        )

    @classmethod
    def from_model(cls, route: Route) -> RouteSchema:
        return cls(
            id=route.id,
            name=route.name,
            distance=route.distance,
            elevation=route.elevation,
            description=route.description,
        )


class ResultSchema(SnapshotModel):
    athlete_id: str
    time: float = 0
    points: int = 0
    rank: int = 0
    tags: list[str] = Field(default_factory=list)
    notes: Optional[str] = None

    def to_model(self) -> RaceResult:
        return RaceResult(
            athlete_id=self.athlete_id,
            time=self.time,
            points=self.points,
            rank=self.rank,
            tags=list(self.tags),
            notes=self.notes,
        )

    @classmethod
    def from_model(cls, result: RaceResult) -> ResultSchema:
        return cls(
            athlete_id=result.athlete_id,
            time=result.time,
            points=result.points,
            rank=result.rank,
            tags=list(result.tags),
            notes=result.notes,
        )


class SessionSchema(SnapshotModel):
    id: str
    date: str
    name: str
    event_id: str
    is_mandatory: bool = False
    results: list[ResultSchema] = Field(default_factory=list)
    venue: Optional[str] = None
    route_id: Optional[str] = None
    notes: Optional[str] = None

    def to_model(self) -> RaceSession:
        return RaceSession(
            id=self.id,
            date=self.date,
            name=self.name,
            event_id=self.event_id,
            is_mandatory=self.is_mandatory,
            results=[r.to_model() for r in self.results],
            venue=self.venue,
            route_id=self.route_id,
            notes=self.notes,
        )

    @classmethod
    def from_model(cls, session: RaceSession) -> SessionSchema:
        return cls(
            id=session.id,
            date=session.date,
            name=session.name,
            event_id=session.event_id,
            is_mandatory=session.is_mandatory,
            results=[ResultSchema.from_model(r) for r in session.results],
            venue=session.venue,
            route_id=session.route_id,
            notes=session.notes,
        )


class ClubSnapshot(SnapshotModel):
    """
    Full or partial club backup.

    A collection that is absent from the source document stays None, so
    an import can tell "not provided" apart from "provided and empty".
    """

    athletes: Optional[list[AthleteSchema]] = None
    standards: Optional[list[StandardSchema]] = None
    routes: Optional[list[RouteSchema]] = None
    sessions: Optional[list[SessionSchema]] = None
    export_date: Optional[str] = None
