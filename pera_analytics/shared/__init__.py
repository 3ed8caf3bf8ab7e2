"""
Shared utilities (NOT business logic).

Usage:
    from pera_analytics.shared import parse_time, format_time, calculate_points
    from pera_analytics.shared.constants import Tag
"""
from .formatters import (
    parse_time,
    parse_time_strict,
    format_time,
    format_distance,
    ordinal,
    to_markdown_table,
)
from .formulas import (
    calculate_points,
    penalty_points,
    round_half_up,
)
from .constants import (
    Tag,
    RecordMode,
    DEFAULT_K_VALUE,
    PENALTY_MARGIN,
)
from .exceptions import (
    PeraAnalyticsError,
    InvalidTimeFormat,
    UnknownEventError,
    NotFoundError,
)
from .repository import BaseRepository

__all__ = [
    # formatters
    "parse_time",
    "parse_time_strict",
    "format_time",
    "format_distance",
    "ordinal",
    "to_markdown_table",
    # formulas
    "calculate_points",
    "penalty_points",
    "round_half_up",
    # constants
    "Tag",
    "RecordMode",
    "DEFAULT_K_VALUE",
    "PENALTY_MARGIN",
    # exceptions
    "PeraAnalyticsError",
    "InvalidTimeFormat",
    "UnknownEventError",
    "NotFoundError",
    # repository
    "BaseRepository",
]
