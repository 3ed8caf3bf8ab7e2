"""
Achievement badges.

Badges are derived on demand from an athlete's results; nothing is stored.
Thresholds live in shared.constants as rule tables.
"""

from __future__ import annotations

from typing import Callable, Iterable, Sequence

from pera_analytics.features.events.models import EventStandard
from pera_analytics.features.sessions.models import AthleteResult, RaceSession
from pera_analytics.shared.constants import (
    DOMINANCE_POINTS,
    EMERGING_MAX_RACES,
    EMERGING_MIN_AVG,
    LONG_EVENT_MARKERS,
    LONG_EVENT_MIN_GOLD_S,
    PODIUM_MAX_RANK,
    PODIUM_MIN_COUNT,
    POINTS_TIERS,
    SHORT_EVENT_MARKERS,
    SHORT_EVENT_MAX_GOLD_S,
    STREAK_MIN_WINS,
)
from pera_analytics.shared.dates import chronological_key

from .models import Badge

RankFn = Callable[[str, Sequence[RaceSession]], int]


def is_short_event(event: EventStandard) -> bool:
    return any(m in event.name for m in SHORT_EVENT_MARKERS) or event.gold_time < SHORT_EVENT_MAX_GOLD_S


def is_long_event(event: EventStandard) -> bool:
    return any(m in event.name for m in LONG_EVENT_MARKERS) or event.gold_time > LONG_EVENT_MIN_GOLD_S


def tier_badge(max_points: int) -> Badge | None:
    """Highest points tier reached, if any."""
    for threshold, name, description in POINTS_TIERS:
        if max_points >= threshold:
            return Badge(name, description)
    return None


def win_streak(results: Sequence[AthleteResult]) -> int:
    """Consecutive wins counting back from the latest finish.

    Penalty rows (time 0) are skipped; the first finish that is not a win
    ends the streak.
    """
    streak = 0
    for r in results:
        if not r.result.finished:
            continue
        if r.rank != 1:
            break
        streak += 1
    return streak


def get_badges(
    athlete_id: str,
    results: Sequence[AthleteResult],
    *,
    standards: Iterable[EventStandard],
    sessions: Sequence[RaceSession],
    rank_fn: RankFn,
) -> list[Badge]:
    """
    Derive achievement badges for one athlete.

    Args:
        athlete_id: Athlete to evaluate
        results: The athlete's results, latest first
        standards: Event standards (to classify short/long events)
        sessions: Full session history (for the Climber badge)
        rank_fn: current-rank function evaluated over a session subset

    Returns:
        Badges in display order
    """
    by_id = {s.id: s for s in standards}
    badges: list[Badge] = []

    max_points = max((r.points or 0 for r in results), default=0)
    runs = sum(1 for r in results if r.result.finished)
    total_points = sum(r.points or 0 for r in results)
    avg_points = total_points / len(results) if results else 0

    tier = tier_badge(max_points)
    if tier:
        badges.append(tier)

    def dominated(predicate: Callable[[EventStandard], bool]) -> bool:
        for r in results:
            event = by_id.get(r.event_id)
            if event is not None and predicate(event) and r.points > DOMINANCE_POINTS:
                return True
        return False

    if dominated(is_short_event):
        badges.append(Badge("Speedster", "Elite speed in short distances"))
    if dominated(is_long_event):
        badges.append(Badge("Endurance Beast", "Dominance in long distance events"))

    if win_streak(results) >= STREAK_MIN_WINS:
        badges.append(Badge("Streak Wins", "Won consecutive races"))

    if 0 < runs <= EMERGING_MAX_RACES and avg_points > EMERGING_MIN_AVG:
        badges.append(Badge("Emerging Star", "Outstanding start to the season"))

    podiums = sum(1 for r in results if r.result.finished and r.rank <= PODIUM_MAX_RANK)
    if podiums >= PODIUM_MIN_COUNT:
        badges.append(Badge("Podium Regular", f"Consistent: {PODIUM_MIN_COUNT}+ podium finishes"))

    climber = climber_badge(athlete_id, sessions, rank_fn)
    if climber:
        badges.append(climber)

    return badges


def climber_badge(athlete_id: str, sessions: Sequence[RaceSession], rank_fn: RankFn) -> Badge | None:
    """Rank improvement caused by the latest session."""
    if len(sessions) < 2:
        return None

    latest = max(sessions, key=lambda s: chronological_key(s.date))
    previous = [s for s in sessions if s.id != latest.id]
    if not previous:
        return None
    if not any(s.result_for(athlete_id) is not None for s in previous):
        return None

    current_rank = rank_fn(athlete_id, sessions)
    if current_rank <= 0:
        return None
    previous_rank = rank_fn(athlete_id, previous)
    if previous_rank > 0 and current_rank < previous_rank:
        return Badge("Climber", f"Moved up from #{previous_rank} to #{current_rank} this week")
    return None
