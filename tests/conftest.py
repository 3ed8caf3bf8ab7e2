"""
Shared fixtures.

The 5km standard uses k=1 so points are an exact ratio:
    points = 1000 * 300 / time
300s -> 1000, 400s -> 750, 600s -> 500.
"""

import pytest

from pera_analytics.features.athletes import Athlete, PersonalBest
from pera_analytics.features.events import EventStandard
from pera_analytics.features.sessions import RaceResult, RaceSession


@pytest.fixture
def five_k():
    return EventStandard(id="e5k", name="5km", gold_time=300, k_value=1.0)


@pytest.fixture
def standards(five_k):
    return [
        EventStandard(id="e1500", name="1500m", gold_time=240, k_value=1.0),
        five_k,
        EventStandard(id="e10k", name="10km", gold_time=2070, k_value=1.0),
    ]


@pytest.fixture
def athletes():
    return [
        Athlete(id="a1", name="Alice", faculty="Engineering", batch="2022"),
        Athlete(id="a2", name="Bob", faculty="Science", batch="2023"),
        Athlete(id="a3", name="Cara", faculty="Engineering", batch="2023"),
    ]


@pytest.fixture
def two_sessions():
    """Alice wins the opener, Bob wins the second race."""
    return [
        RaceSession(
            id="s1",
            date="2025-01-10",
            name="Opener",
            event_id="e5k",
            route_id="r1",
            results=[
                RaceResult(athlete_id="a1", time=300, points=1000, rank=1, tags=["PB", "SB"]),
                RaceResult(athlete_id="a2", time=400, points=750, rank=2, tags=["PB", "SB"]),
            ],
        ),
        RaceSession(
            id="s2",
            date="2025-02-10",
            name="Second",
            event_id="e5k",
            route_id="r1",
            results=[
                RaceResult(athlete_id="a2", time=300, points=1000, rank=1, tags=["PB", "SB"]),
                RaceResult(athlete_id="a1", time=600, points=500, rank=2),
            ],
        ),
    ]


@pytest.fixture
def athlete_with_pb():
    return Athlete(
        id="a1",
        name="Alice",
        personal_bests=[PersonalBest(event_id="e5k", time=290, date="2024-05-01", venue="Track")],
    )
