"""Entry intake: turn raw form rows into scoreable drafts."""

from __future__ import annotations

import logging
import re
from typing import Iterable

from pera_analytics.shared.formatters import parse_time

from .models import EntryDraft
from .schemas import RawEntry

logger = logging.getLogger(__name__)

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_place(text: str | None) -> int | None:
    """
    Explicit place from its leading integer, if positive.

    "3" -> 3, "3rd" -> 3, "2.5" -> 2, "0" -> None, "first" -> None
    """
    if text is None:
        return None
    match = _LEADING_INT_RE.match(str(text))
    if not match:
        return None
    place = int(match.group(1))
    return place if place > 0 else None


def parse_entries(raw_entries: Iterable[RawEntry]) -> list[EntryDraft]:
    """
    Validate raw form rows.

    Rows missing an athlete or a time are skipped silently (blank form
    lines). Rows with an unparseable time are dropped with a warning;
    they never abort the whole session.

    Returns:
        Drafts in submission order
    """
    drafts: list[EntryDraft] = []
    for raw in raw_entries:
        if not raw.athlete_id or not raw.time_text:
            continue

        seconds = parse_time(raw.time_text)
        if seconds is None:
            logger.warning(
                "Dropping entry for athlete %s: invalid time %r",
                raw.athlete_id, raw.time_text,
            )
            continue

        drafts.append(
            EntryDraft(
                athlete_id=raw.athlete_id,
                time=seconds,
                place=parse_place(raw.place_text),
            )
        )
    return drafts
