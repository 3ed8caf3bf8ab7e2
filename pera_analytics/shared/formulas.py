"""
Scoring formulas.

Points are a power-law ratio against the event's gold standard:

    points = 1000 * (gold_time / time) ^ k

A time equal to the gold standard scores exactly 1000. Faster times score
more, with no upper bound.
"""

import math
from typing import Optional

from pera_analytics.shared.constants import BASE_POINTS, DEFAULT_K_VALUE, PENALTY_MARGIN


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves towards +infinity.

    Unlike round(), which rounds halves to even: 2.5 -> 3, -2.5 -> -2.
    """
    return int(math.floor(value + 0.5))


def calculate_points(time: float, gold_time: float, k_value: float = DEFAULT_K_VALUE) -> int:
    """
    Calculate normalized points for a finish time.

    Args:
        time: Finish time in seconds (0 or less = did not finish)
        gold_time: Event gold standard in seconds (scores 1000)
        k_value: Power-law exponent; higher = steeper drop-off

    Returns:
        Integer points, 0 for non-finishers

    Notes:
        - Monotonically decreasing in time
        - Exceeds 1000 when time < gold_time
    """
    if time <= 0:
        return 0
    raw_points = BASE_POINTS * math.pow(gold_time / time, k_value)
    return round_half_up(raw_points)


def penalty_points(
    last_place_points: int,
    history_points: Optional[int] = None,
    margin: int = PENALTY_MARGIN,
) -> int:
    """
    Penalty score for an athlete who missed a mandatory race.

    Base penalty sits one margin below the last finisher of the race.
    When the athlete has a previous score, the penalty is capped one margin
    below that score, so it follows their own form rather than the field's.

    Args:
        last_place_points: Points of the slowest finisher in this race
        history_points: Athlete's most recent recorded points, if any
        margin: Points deducted from the reference score

    Returns:
        Non-negative penalty points
    """
    penalty = max(0, last_place_points - margin)
    if history_points is not None:
        penalty = min(penalty, max(0, history_points - margin))
    return penalty
