"""
Session recording schemas.

Pydantic schemas validating form input at the engine boundary.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SessionMeta(BaseModel):
    """Metadata for a session about to be recorded."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    event_id: str = Field(..., min_length=1)
    venue: Optional[str] = None
    route_id: Optional[str] = None
    is_mandatory: bool = False
    notes: Optional[str] = None

    @field_validator("venue", "route_id", "notes", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Forms send '' for untouched optional fields."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("date")
    @classmethod
    def real_calendar_date(cls, v: str) -> str:
        """Reject well-shaped but impossible dates such as 2025-13-45."""
        try:
            datetime.date.fromisoformat(v)
        except ValueError:
            raise ValueError(f"not a calendar date: {v}")
        return v


class RawEntry(BaseModel):
    """One unvalidated form row: athlete, clock text, optional place."""
    athlete_id: str = ""
    time_text: str = ""
    place_text: Optional[str] = None
