"""
Club module: owns the collections and the JSON snapshot format.

Usage:
    from pera_analytics.features.club import ClubRepository

    club = ClubRepository.load(path)
    club.record_session(meta, drafts)
"""

from .schemas import (
    AthleteSchema,
    ClubSnapshot,
    PersonalBestSchema,
    ResultSchema,
    RouteSchema,
    SessionSchema,
    StandardSchema,
)
from .repository import ClubRepository

__all__ = [
    # Schemas
    "AthleteSchema",
    "ClubSnapshot",
    "PersonalBestSchema",
    "ResultSchema",
    "RouteSchema",
    "SessionSchema",
    "StandardSchema",
    # Repository
    "ClubRepository",
]
