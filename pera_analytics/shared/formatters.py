"""
Race clock codec and display formatting.

Used by the scorer, the records views, reports and the CLI.
"""

import math
import re
from typing import Optional, Sequence

from pera_analytics.shared.exceptions import InvalidTimeFormat
from pera_analytics.shared.formulas import round_half_up

_NUMBER_RE = re.compile(r"^(\d+(\.\d*)?|\.\d+)$")

MAX_TIME_SEGMENTS = 3  # h:mm:ss


def parse_time(text: Optional[str]) -> Optional[float]:
    """
    Parse a race clock string into seconds.

    Accepts 'h:mm:ss[.ff]', 'mm:ss[.ff]' or 'ss[.ff]'.

    Returns:
        Seconds, or None when the text is not a valid clock reading.
        None means "reject this input", never "zero time".
    """
    if text is None:
        return None
    parts = str(text).strip().split(":")
    if len(parts) > MAX_TIME_SEGMENTS:
        return None

    total = 0.0
    for part in parts:
        part = part.strip()
        if not _NUMBER_RE.match(part):
            return None
        total = total * 60 + float(part)
    if not math.isfinite(total):
        return None
    return total


def parse_time_strict(text: Optional[str]) -> float:
    """Same as parse_time, but raises InvalidTimeFormat instead of returning None."""
    seconds = parse_time(text)
    if seconds is None:
        raise InvalidTimeFormat(str(text))
    return seconds


def format_time(seconds: Optional[float]) -> str:
    """
    Format seconds as a race clock string.

    125.4 -> "2:05.40"
    3661  -> "1:01:01"
    0     -> "DNS"
    -5    -> "N/A"
    """
    if not seconds:
        return "DNS"
    if seconds < 0 or not math.isfinite(seconds):
        return "N/A"

    whole = math.floor(seconds)
    if whole >= 3600:
        hours, remainder = divmod(whole, 3600)
        minutes, secs = divmod(remainder, 60)
        return f"{hours}:{minutes:02d}:{secs:02d}"

    hundredths = round_half_up((seconds - whole) * 100)
    if hundredths == 100:
        whole += 1
        hundredths = 0
    minutes, secs = divmod(whole, 60)
    return f"{minutes}:{secs:02d}.{hundredths:02d}"


def format_distance(meters: float) -> str:
    """
    Format a distance total.

    Args:
        meters: Distance in meters

    Returns:
        Formatted string (e.g., '12.5 km' or '800 m')
    """
    if meters >= 1000:
        return f"{meters / 1000:.1f} km"
    return f"{meters:g} m"


def ordinal(n: int) -> str:
    """1 -> '1st', 12 -> '12th', 23 -> '23rd'."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def to_markdown_table(headers: Sequence[str], rows: Sequence[Sequence[object]]) -> str:
    """Render headers and rows as a Markdown table."""
    lines = [
        "| " + " | ".join(headers) + " |",
        "|" + "|".join(["---"] * len(headers)) + "|",
    ]
    for row in rows:
        lines.append("| " + " | ".join(str(cell) for cell in row) + " |")
    return "\n".join(lines)
