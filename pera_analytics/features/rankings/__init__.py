"""
Rankings module: live leaderboard, historical replay, badges and trends.

Usage:
    from pera_analytics.features.rankings import RankingService

    service = RankingService(athletes, sessions, standards)
    service.current_rank("a1")
    service.career_stats("a1")
"""

from .models import AthleteStats, Badge, CareerStats, LeaderboardRow, TimelinePoint
from .badges import get_badges, tier_badge, win_streak
from .service import RankingService
from .trends import most_active, points_timeline

__all__ = [
    # Models
    "AthleteStats",
    "Badge",
    "CareerStats",
    "LeaderboardRow",
    "TimelinePoint",
    # Badges
    "get_badges",
    "tier_badge",
    "win_streak",
    # Service
    "RankingService",
    # Trends
    "most_active",
    "points_timeline",
]
