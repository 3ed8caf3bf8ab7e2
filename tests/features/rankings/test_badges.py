"""
Tests for achievement badges.
"""

import pytest

from pera_analytics.features.events import EventStandard
from pera_analytics.features.rankings import RankingService, get_badges, tier_badge, win_streak
from pera_analytics.features.sessions import AthleteResult, RaceResult, RaceSession


SPRINT = EventStandard(id="e1500", name="1500m", gold_time=240, k_value=1.0)
ROAD = EventStandard(id="e10k", name="10km", gold_time=2070, k_value=1.0)
MIDDLE = EventStandard(id="e5k", name="5km", gold_time=970, k_value=1.0)


def _result(points, rank=1, time=300.0, event_id="e5k", date="2025-01-01"):
    tags = ["Penalty"] if time == 0 else []
    return AthleteResult(
        result=RaceResult(athlete_id="a1", time=time, points=points, rank=rank, tags=tags),
        session_id=f"s-{date}",
        session_name="Race",
        date=date,
        event_id=event_id,
    )


def _names(results, standards=(SPRINT, ROAD, MIDDLE)):
    badges = get_badges(
        "a1", results, standards=standards, sessions=[], rank_fn=lambda athlete_id, sessions: 0
    )
    return [b.name for b in badges]


# =============================================================================
# Test Tier Badges
# =============================================================================

class TestTierBadge:
    """Tests for the points tier badges."""

    @pytest.mark.parametrize("points, expected", [
        (1010, "The GOAT"),
        (950, "The GOAT"),
        (949, "900 Club"),
        (899, "800 Club"),
        (500, "500 Club"),
    ])
    def test_highest_tier_only(self, points, expected):
        """Best single score picks exactly one tier."""
        assert tier_badge(points).name == expected

    def test_below_500(self):
        """Nothing below 500 points."""
        assert tier_badge(499) is None

    def test_single_tier_awarded(self):
        """Lower tiers are not stacked under the best one."""
        names = _names([_result(920), _result(610, rank=4)])
        tiers = [n for n in names if n.endswith("Club") or n == "The GOAT"]
        assert tiers == ["900 Club"]


# =============================================================================
# Test Event Dominance
# =============================================================================

class TestDominance:
    """Tests for Speedster and Endurance Beast."""

    def test_speedster(self):
        """Over 850 in a short event earns Speedster."""
        assert "Speedster" in _names([_result(860, rank=5, event_id="e1500")])

    def test_threshold_is_strict(self):
        """Exactly 850 is not enough."""
        assert "Speedster" not in _names([_result(850, rank=5, event_id="e1500")])

    def test_endurance_beast(self):
        """Over 850 in a long event earns Endurance Beast only."""
        names = _names([_result(900, rank=5, event_id="e10k")])
        assert "Endurance Beast" in names
        assert "Speedster" not in names

    def test_gold_time_classifies_unnamed_events(self):
        """Events without a distance are classed by gold time."""
        short = EventStandard(id="x", name="Mile", gold_time=230)
        assert "Speedster" in _names([_result(870, rank=5, event_id="x")], standards=[short])

    def test_middle_distance_earns_neither(self):
        """A 5km sits between both classes."""
        names = _names([_result(900, rank=5, event_id="e5k")])
        assert "Speedster" not in names
        assert "Endurance Beast" not in names


# =============================================================================
# Test Streaks, Emerging Star, Podiums
# =============================================================================

class TestStreaks:
    """Tests for win streaks."""

    def test_win_streak_counts_latest_wins(self):
        """Consecutive wins from the latest result backwards."""
        assert win_streak([_result(900), _result(900), _result(700, rank=2)]) == 2

    def test_penalty_rows_are_skipped(self):
        """Penalty rows neither extend nor break the streak."""
        assert win_streak([_result(400, time=0, rank=4), _result(900), _result(900)]) == 2

    def test_latest_loss_breaks_streak(self):
        """A loss as the latest result means no streak."""
        assert win_streak([_result(700, rank=2), _result(900), _result(900)]) == 0

    def test_streak_badge(self):
        """Two wins in a row earn Streak Wins."""
        assert "Streak Wins" in _names([_result(400), _result(400)])
        assert "Streak Wins" not in _names([_result(400)])


class TestEmergingStar:
    """Tests for the Emerging Star badge."""

    def test_strong_start(self):
        """A high average over few races earns it."""
        assert "Emerging Star" in _names([_result(760, rank=3), _result(740, rank=3)])

    def test_average_must_exceed_threshold(self):
        """A modest average does not."""
        assert "Emerging Star" not in _names([_result(700, rank=3)])

    def test_too_many_races(self):
        """Experienced athletes no longer qualify."""
        results = [_result(800, rank=3) for _ in range(6)]
        assert "Emerging Star" not in _names(results)

    def test_penalties_drag_average(self):
        """Penalty rows count towards the average."""
        results = [_result(800, rank=3), _result(500, rank=4, time=0)]
        assert "Emerging Star" not in _names(results)


class TestPodiumRegular:
    """Tests for the Podium Regular badge."""

    def test_three_podiums(self):
        """Three top-three finishes earn it."""
        results = [_result(600, rank=3), _result(600, rank=2), _result(600, rank=1)]
        assert "Podium Regular" in _names(results)

    def test_penalty_rows_do_not_count(self):
        """Penalty ranks are not podiums."""
        results = [_result(600, rank=3), _result(600, rank=2), _result(400, rank=3, time=0)]
        assert "Podium Regular" not in _names(results)


# =============================================================================
# Test Climber
# =============================================================================

def _session(session_id, date, rows):
    return RaceSession(
        id=session_id,
        date=date,
        name=session_id,
        event_id="e5k",
        results=[
            RaceResult(athlete_id=aid, time=time, points=points, rank=rank)
            for rank, (aid, time, points) in enumerate(rows, start=1)
        ],
    )


class TestClimber:
    """Tests for the Climber badge."""

    def test_moved_up(self, athletes):
        """Rising in rank after the latest session earns Climber."""
        sessions = [
            _session("s1", "2025-01-01", [("a2", 300, 1000), ("a1", 400, 750)]),
            _session("s2", "2025-01-08", [("a1", 300, 1000), ("a2", 600, 500)]),
        ]
        service = RankingService(athletes, sessions)
        climber = next(b for b in service.badges("a1") if b.name == "Climber")
        assert climber.description == "Moved up from #2 to #1 this week"
        assert "Climber" not in [b.name for b in service.badges("a2")]

    def test_needs_history_before_latest(self, athletes):
        """Debuting in the latest session is not climbing."""
        sessions = [
            _session("s1", "2025-01-01", [("a2", 300, 1000)]),
            _session("s2", "2025-01-08", [("a1", 250, 1200)]),
        ]
        service = RankingService(athletes, sessions)
        assert "Climber" not in [b.name for b in service.badges("a1")]

    def test_single_session(self, athletes):
        """One session gives nothing to compare against."""
        sessions = [_session("s1", "2025-01-01", [("a1", 300, 1000)])]
        service = RankingService(athletes, sessions)
        assert "Climber" not in [b.name for b in service.badges("a1")]
