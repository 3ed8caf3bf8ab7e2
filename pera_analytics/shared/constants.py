"""
Scoring constants and rule tables.

Single source of truth for tag names, badge thresholds and the
distance fallback table. Extend behaviour by adding rows, not branches.
"""

from enum import Enum


class Tag(str, Enum):
    """Tags attached to a race result."""
    PB = "PB"
    SB = "SB"
    CR = "CR"
    PENALTY = "Penalty"


class RecordMode(str, Enum):
    """Records leaderboard policy."""
    BEST = "best"
    ALL = "all"


# === Scoring ===
DEFAULT_K_VALUE = 1.1
BASE_POINTS = 1000
PENALTY_MARGIN = 20  # one rank-equivalent below the reference score
MISSED_MANDATORY_NOTE = "Missed Mandatory Race"


# === Distance resolution ===
# Pattern: number followed by km or m, e.g. "10km", "1500 m", "21.1km"
DISTANCE_PATTERN = r"(\d+(\.\d+)?)\s*(km|m)"
KM_TO_M = 1000

# (substring, meters) checked in order when the pattern does not match
DISTANCE_FALLBACKS: tuple[tuple[str, float], ...] = (
    ("1500", 1500),
    ("3000", 3000),
    ("5000", 5000),
    ("10000", 10000),
    ("half", 21097.5),
    ("marathon", 42195),
)


# === Badges ===
# (min points, name, description), highest first; only the first match is awarded
POINTS_TIERS: tuple[tuple[int, str, str], ...] = (
    (950, "The GOAT", "Legendary Status: 950+ points in a race"),
    (900, "900 Club", "Elite Performance: 900+ points in a race"),
    (800, "800 Club", "High Performance: 800+ points in a race"),
    (700, "700 Club", "Strong Performance: 700+ points in a race"),
    (600, "600 Club", "Solid Performance: 600+ points in a race"),
    (500, "500 Club", "Breaking Through: 500+ points in a race"),
)

DOMINANCE_POINTS = 850  # strictly above, for Speedster / Endurance Beast

SHORT_EVENT_MARKERS = ("1500", "3000")
SHORT_EVENT_MAX_GOLD_S = 600

LONG_EVENT_MARKERS = ("7km", "10km")
LONG_EVENT_MIN_GOLD_S = 1200

STREAK_MIN_WINS = 2
EMERGING_MAX_RACES = 5
EMERGING_MIN_AVG = 700
PODIUM_MAX_RANK = 3
PODIUM_MIN_COUNT = 3


# === Reports ===
RECENT_SESSIONS_IN_REPORT = 5
UNKNOWN_NAME = "Unknown"
