"""
Score helpers: bounding, time and duration utilities used by ranking and synthesis.
"""

import re
from datetime import datetime, timezone
from typing import Optional, Union

_ISO_DURATION = re.compile(r"^PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?$")


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    """Bound a score to [low, high]."""
    return max(low, min(high, value))


def days_since(date_str: Optional[str]) -> int:
    """Days since a given ISO date string (999 when missing or unparseable)."""
    if not date_str:
        return 999
    try:
        dt = datetime.fromisoformat(date_str.replace("Z", "+00:00"))
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return (datetime.now(timezone.utc) - dt).days
    except (TypeError, ValueError):
        return 999


def parse_duration_seconds(duration: Union[int, float, str, None]) -> Optional[int]:
    """
    Duration in seconds from an int/float or an ISO-8601 string ("PT1H2M3S").

    Returns None when the value cannot be parsed.
    """
    if duration is None or isinstance(duration, bool):
        return None
    if isinstance(duration, (int, float)):
        return int(duration) if duration >= 0 else None
    text = duration.strip().upper()
    if text.isdigit():
        return int(text)
    match = _ISO_DURATION.match(text)
    if not match or text == "PT":
        return None
    hours, minutes, seconds = (int(g) if g else 0 for g in match.groups())
    return hours * 3600 + minutes * 60 + seconds
