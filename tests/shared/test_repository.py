"""
Tests for the in-memory BaseRepository.
"""

import pytest

from pera_analytics.features.events.models import Route
from pera_analytics.shared.dates import chronological_key, date_year, parse_date
from pera_analytics.shared.exceptions import NotFoundError
from pera_analytics.shared.repository import BaseRepository


@pytest.fixture
def repo():
    return BaseRepository(
        [
            Route(id="r1", name="Campus Loop", distance="5km"),
            Route(id="r2", name="Lake Trail", distance="7km", elevation="120m"),
        ],
        "Route",
    )


# =============================================================================
# Test Reads
# =============================================================================

class TestReads:
    """Tests for lookups."""

    def test_get_by_id(self, repo):
        """Lookup by id, None when missing."""
        assert repo.get_by_id("r2").name == "Lake Trail"
        assert repo.get_by_id("missing") is None

    def test_require_raises_not_found(self, repo):
        """require names the entity and the id in its error."""
        with pytest.raises(NotFoundError) as exc:
            repo.require("missing")
        assert str(exc.value) == "Route not found: missing"

    def test_not_found_is_lookup_error(self, repo):
        """NotFoundError can be caught as LookupError."""
        with pytest.raises(LookupError):
            repo.require("missing")

    def test_get_all_filters(self, repo):
        """get_all returns everything or filters by attribute."""
        assert [r.id for r in repo.get_all()] == ["r1", "r2"]
        assert [r.id for r in repo.get_all(distance="7km")] == ["r2"]


# =============================================================================
# Test Writes
# =============================================================================

class TestWrites:
    """Tests for create, update, delete and replace."""

    def test_create_appends(self, repo):
        """New items go to the end."""
        repo.create(Route(id="r3", name="Hill", distance="3km"))
        assert len(repo) == 3
        assert repo.get_all()[-1].id == "r3"

    def test_update_returns_new_instance(self, repo):
        """update stores a copy and leaves the old instance untouched."""
        original = repo.require("r1")
        updated = repo.update(original, name="Campus Loop (new)")
        assert updated.name == "Campus Loop (new)"
        assert original.name == "Campus Loop"
        assert repo.require("r1").name == "Campus Loop (new)"

    def test_delete(self, repo):
        """delete returns the removed item and fails the second time."""
        removed = repo.delete("r1")
        assert removed.id == "r1"
        assert repo.get_by_id("r1") is None
        with pytest.raises(NotFoundError):
            repo.delete("r1")

    def test_earlier_snapshots_do_not_change(self, repo):
        """Lists handed out earlier do not see later writes."""
        snapshot = repo.get_all()
        repo.create(Route(id="r3", name="Hill", distance="3km"))
        repo.delete("r2")
        assert [r.id for r in snapshot] == ["r1", "r2"]

    def test_replace_all(self, repo):
        """replace_all swaps the whole collection."""
        repo.replace_all([])
        assert len(repo) == 0


# =============================================================================
# Test Date Helpers
# =============================================================================

class TestDates:
    """Tests for the date string helpers."""

    def test_date_year(self):
        """Year is the leading four digits, else None."""
        assert date_year("2025-03-01") == "2025"
        assert date_year("") is None
        assert date_year(None) is None
        assert date_year("March 2025") is None

    def test_parse_date_accepts_timestamps(self):
        """Timestamps are cut to their date part."""
        assert parse_date("2025-03-01T10:00:00Z").isoformat() == "2025-03-01"
        assert parse_date("garbage") is None

    def test_unparseable_dates_sort_first(self):
        """Garbage dates sort before every real date."""
        dates = ["2025-02-01", "garbage", "2024-12-31"]
        assert sorted(dates, key=chronological_key) == ["garbage", "2024-12-31", "2025-02-01"]
