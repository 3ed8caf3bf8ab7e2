"""
Tests for RankingService.

Fixture history (conftest.two_sessions):
    s1 2025-01-10: Alice 1000, Bob 750
    s2 2025-02-10: Bob 1000, Alice 500
Averages: Bob 875, Alice 750, Cara 0.
"""

import pytest

from pera_analytics.features.athletes import Athlete
from pera_analytics.features.rankings import RankingService
from pera_analytics.features.sessions import RaceResult, RaceSession
from pera_analytics.shared.exceptions import NotFoundError


@pytest.fixture
def service(athletes, two_sessions, standards):
    return RankingService(athletes, two_sessions, standards)


def _penalty_session(athlete_id, points, date="2025-03-10"):
    return RaceSession(
        id=f"pen-{date}",
        date=date,
        name="Mandatory",
        event_id="e5k",
        is_mandatory=True,
        results=[
            RaceResult(
                athlete_id=athlete_id, time=0, points=points, rank=1,
                tags=["Penalty"], notes="Missed Mandatory Race",
            )
        ],
    )


# =============================================================================
# Test Current Standings
# =============================================================================

class TestCurrentRank:
    """Tests for averages and current rank."""

    def test_average_points(self, service):
        """Average is total points over entries, zero without any."""
        assert service.average_points("a1") == 750
        assert service.average_points("a2") == 875
        assert service.average_points("a3") == 0

    def test_rank_by_average(self, service):
        """Higher average ranks first."""
        assert service.current_rank("a2") == 1
        assert service.current_rank("a1") == 2
        assert service.current_rank("a3") == 3

    def test_retired_and_unknown_are_unranked(self, athletes, two_sessions):
        """Retired and unknown athletes get rank 0."""
        athletes[1].is_active = False
        service = RankingService(athletes, two_sessions)
        assert service.current_rank("a2") == 0
        assert service.current_rank("ghost") == 0
        assert service.current_rank("a1") == 1

    def test_ties_broken_by_name(self):
        """Equal averages order by name, case-insensitively."""
        athletes = [Athlete(id="x", name="bob"), Athlete(id="y", name="Alice")]
        service = RankingService(athletes, [])
        assert service.current_rank("y") == 1
        assert service.current_rank("x") == 2

    def test_ties_on_name_broken_by_id(self):
        """Equal names fall back to the id."""
        athletes = [Athlete(id="b", name="Sam"), Athlete(id="a", name="Sam")]
        service = RankingService(athletes, [])
        assert service.current_rank("a") == 1

    def test_penalties_count_as_entries(self, athletes, two_sessions):
        """Penalty rows add points and an entry."""
        sessions = [*two_sessions, _penalty_session("a1", 480)]
        service = RankingService(athletes, sessions)
        assert service.totals("a1") == (1980, 3)
        assert service.average_points("a1") == 660

    def test_rank_over_session_subset(self, service, two_sessions):
        """Rank can be computed over part of the history."""
        assert service.current_rank("a1", two_sessions[:1]) == 1


class TestLeaderboard:
    """Tests for the live leaderboard."""

    def test_rows(self, service):
        """Rows carry rank, totals, average and races run."""
        rows = service.leaderboard()
        assert [(r.rank, r.athlete.id) for r in rows] == [(1, "a2"), (2, "a1"), (3, "a3")]

        bob = rows[0]
        assert bob.total_points == 1750
        assert bob.average_points == 875
        assert bob.races_run == 2
        assert bob.entries == 2

    def test_penalty_rows_are_entries_not_races(self, athletes, two_sessions):
        """Penalties count for the average but not as races."""
        sessions = [*two_sessions, _penalty_session("a3", 100)]
        rows = RankingService(athletes, sessions).leaderboard()
        cara = next(r for r in rows if r.athlete.id == "a3")
        assert cara.races_run == 0
        assert cara.entries == 1
        assert cara.average_points == 100

    def test_retired_excluded(self, athletes, two_sessions):
        """Retired athletes are left off."""
        athletes[0].is_active = False
        rows = RankingService(athletes, two_sessions).leaderboard()
        assert [r.athlete.id for r in rows] == ["a2", "a3"]


# =============================================================================
# Test Historical Replay
# =============================================================================

class TestCareerStats:
    """Tests for historical replay."""

    def test_peak_rank_and_average(self, service):
        """Best rank and highest average over the replay."""
        alice = service.career_stats("a1")
        assert alice.best_rank == 1
        assert alice.highest_avg == 1000

        bob = service.career_stats("a2")
        assert bob.best_rank == 1
        assert bob.highest_avg == 875

    def test_no_data(self, service):
        """No results give zeros."""
        stats = service.career_stats("a3")
        assert stats.best_rank == 0
        assert stats.highest_avg == 0

    def test_replay_uses_date_order(self, athletes, two_sessions):
        """Replay follows dates, not list order."""
        service = RankingService(athletes, list(reversed(two_sessions)))
        bob = service.career_stats("a2")
        assert bob.best_rank == 1
        assert bob.highest_avg == 875

    def test_dangling_ids_take_part_in_snapshots(self, athletes, two_sessions):
        """Deleted athletes still occupy ranks in the past."""
        ghost_session = RaceSession(
            id="s0",
            date="2025-01-01",
            name="Ghost Run",
            event_id="e5k",
            results=[RaceResult(athlete_id="ghost", time=250, points=1200, rank=1)],
        )
        service = RankingService(athletes, [ghost_session, *two_sessions])
        assert service.career_stats("a1").best_rank == 2

    def test_retired_athletes_still_have_career(self, athletes, two_sessions):
        """Retirement does not erase career peaks."""
        athletes[0].is_active = False
        service = RankingService(athletes, two_sessions)
        assert service.career_stats("a1").highest_avg == 1000


# =============================================================================
# Test Athlete Profile
# =============================================================================

class TestAthleteStats:
    """Tests for the athlete profile."""

    def test_profile(self, service):
        """Profile aggregates rank, wins, podiums, points and distance."""
        stats = service.athlete_stats("a1")
        assert stats.rank == 2
        assert stats.races_run == 2
        assert stats.wins == 1
        assert stats.podiums == 2
        assert stats.total_points == 1500
        assert stats.average_points == 750
        assert stats.total_distance_m == 10000
        assert stats.career.best_rank == 1

    def test_recent_results_latest_first(self, service):
        """History lists the newest session first."""
        stats = service.athlete_stats("a1")
        assert [r.session_id for r in stats.recent_results] == ["s2", "s1"]
        assert stats.recent_results[0].points == 500

    def test_unknown_athlete(self, service):
        """Unknown ids raise NotFoundError."""
        with pytest.raises(NotFoundError):
            service.athlete_stats("ghost")

    def test_penalty_rows_are_not_races(self, athletes, two_sessions, standards):
        """Penalties add to the average but not to races or distance."""
        sessions = [*two_sessions, _penalty_session("a1", 480)]
        stats = RankingService(athletes, sessions, standards).athlete_stats("a1")
        assert stats.races_run == 2
        assert stats.total_distance_m == 10000
        assert stats.average_points == 660


class TestRoster:
    """Tests for the roster listing."""

    def test_active_by_rank_then_retired_by_peak(self, athletes, two_sessions):
        """Active athletes by rank, then retired by peak rank."""
        athletes.append(Athlete(id="a4", name="Dan", is_active=False))
        athletes[0].is_active = False
        service = RankingService(athletes, two_sessions)
        assert [a.id for a in service.roster()] == ["a2", "a3", "a1", "a4"]

    def test_query_matches_name_faculty_batch(self, service):
        """Search is case-insensitive over name, faculty and batch."""
        assert [a.id for a in service.roster("eng")] == ["a1", "a3"]
        assert [a.id for a in service.roster("BOB")] == ["a2"]
        assert [a.id for a in service.roster("2023")] == ["a2", "a3"]
        assert len(service.roster("  ")) == 3
