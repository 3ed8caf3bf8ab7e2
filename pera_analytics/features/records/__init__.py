"""Records module: event and course leaderboards with display filters."""

from .models import FilterOptions, RecordFilters, RecordRow, RecordSource
from .aggregator import RecordsAggregator, filter_records

__all__ = [
    "FilterOptions",
    "RecordFilters",
    "RecordRow",
    "RecordSource",
    "RecordsAggregator",
    "filter_records",
]
