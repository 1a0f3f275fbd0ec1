"""Duration parsing and formatting.

Recipe times arrive as ISO-8601 durations (``PT1H30M``), free text
(``"1 hr 15 min"``, ``"45 minutes"``) or raw minute counts. Everything is
reduced to minutes first and formatted back to display text on demand.
"""

from __future__ import annotations

import re
from typing import Any, Final


DEFAULT_TIME_TEXT: Final = "30 min"

_ISO_DURATION = re.compile(
    r"^P(?:(?P<days>\d+(?:\.\d+)?)D)?"
    r"(?:T(?:(?P<hours>\d+(?:\.\d+)?)H)?"
    r"(?:(?P<minutes>\d+(?:\.\d+)?)M)?"
    r"(?:(?P<seconds>\d+(?:\.\d+)?)S)?)?$",
    re.IGNORECASE,
)
_HOURS = re.compile(r"(\d+(?:\.\d+)?)\s*(?:hours?|hrs?|h)(?![a-z])", re.IGNORECASE)
_MINUTES = re.compile(r"(\d+(?:\.\d+)?)\s*(?:minutes?|mins?|m)(?![a-z])", re.IGNORECASE)
_NUMBER = re.compile(r"\d+(?:\.\d+)?")
_UNIT_WORDS = ("min", "hour", "hr")


def parse_iso8601_duration(value: str | None) -> float | None:
    """Convert an ISO-8601 duration to minutes.

    Days, hours, minutes and seconds are supported; seconds contribute
    fractional minutes.

    Examples:
        >>> parse_iso8601_duration("PT1H30M")
        90.0
        >>> parse_iso8601_duration("PT45M")
        45.0
        >>> parse_iso8601_duration(None) is None
        True
    """
    if not value or not isinstance(value, str):
        return None

    match = _ISO_DURATION.match(value.strip())
    if match is None:
        return None

    parts = match.groupdict()
    if all(part is None for part in parts.values()):
        return None

    days, hours, minutes, seconds = (
        float(parts[key] or 0) for key in ("days", "hours", "minutes", "seconds")
    )
    return days * 1440 + hours * 60 + minutes + seconds / 60


def time_to_minutes(value: Any) -> float | None:
    """Reduce any supported time representation to minutes.

    Accepts numbers (already minutes), ISO-8601 durations and free text
    with hour/minute units. A bare number in text is read as minutes.
    Returns None when nothing numeric can be found.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str) or not value.strip():
        return None

    iso_minutes = parse_iso8601_duration(value)
    if iso_minutes is not None:
        return iso_minutes

    hours = _HOURS.search(value)
    minutes = _MINUTES.search(value)
    if hours or minutes:
        total = 0.0
        if hours:
            total += float(hours.group(1)) * 60
        if minutes:
            total += float(minutes.group(1))
        return total

    number = _NUMBER.search(value)
    if number:
        return float(number.group(0))
    return None


def format_minutes(minutes: float) -> str:
    """Format a minute count as ``"1 hr 15 min"`` style text."""
    total = int(round(minutes))
    if total >= 60:
        hours, remainder = divmod(total, 60)
        return f"{hours} hr {remainder} min" if remainder else f"{hours} hr"
    return f"{total} min"


def parse_time_value(value: Any, default: str = DEFAULT_TIME_TEXT) -> str:
    """Normalize a time value to display text.

    Text that already carries a unit is returned as-is. Missing, zero or
    unparseable values yield ``default``.
    """
    if isinstance(value, str):
        stripped = value.strip()
        if any(unit in stripped.lower() for unit in _UNIT_WORDS):
            return stripped

    minutes = time_to_minutes(value)
    if not minutes:
        return default
    return format_minutes(minutes)
