"""
Race sessions module.

Usage:
    from pera_analytics.features.sessions import SessionScorer, SessionMeta, parse_entries

Components:
- parse_entries: Form rows -> validated drafts
- SessionScorer: Points, ranks, PB/SB/CR tags and mandatory-race penalties
"""

from .models import AthleteResult, EntryDraft, RaceResult, RaceSession, SessionOutcome
from .schemas import RawEntry, SessionMeta
from .entries import parse_entries, parse_place
from .scorer import SessionScorer

__all__ = [
    # Models
    "AthleteResult",
    "EntryDraft",
    "RaceResult",
    "RaceSession",
    "SessionOutcome",
    # Schemas
    "RawEntry",
    "SessionMeta",
    # Intake
    "parse_entries",
    "parse_place",
    # Scorer
    "SessionScorer",
]
