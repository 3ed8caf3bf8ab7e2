"""Data models for leaderboards and athlete statistics (dataclasses, no I/O)."""

from __future__ import annotations

from dataclasses import dataclass, field

from pera_analytics.features.athletes.models import Athlete
from pera_analytics.features.sessions.models import AthleteResult


@dataclass
class LeaderboardRow:
    """One active athlete on the live leaderboard."""

    rank: int
    athlete: Athlete
    total_points: int  # races + penalties
    average_points: int  # total / entries, rounded
    races_run: int  # time > 0 only
    entries: int  # races + penalties


@dataclass
class CareerStats:
    """Peak values from replaying the whole history (0 = never ranked)."""

    best_rank: int = 0
    highest_avg: int = 0


@dataclass
class Badge:
    """An achievement tag."""

    name: str  # "Streak Wins"
    description: str


@dataclass
class AthleteStats:
    """Everything the athlete profile shows."""

    athlete: Athlete
    rank: int  # 0 = unranked (retired or unknown)
    races_run: int
    wins: int
    podiums: int
    total_points: int
    average_points: int
    total_distance_m: float
    career: CareerStats
    recent_results: list[AthleteResult] = field(default_factory=list)  # latest first
    badges: list[Badge] = field(default_factory=list)


@dataclass
class TimelinePoint:
    """Points scored by each athlete in one session, for trend charts."""

    session_id: str
    date: str
    race_name: str
    points: dict[str, int] = field(default_factory=dict)  # athlete_id -> points
