"""
Utility functions for Daybook.
"""

from datetime import date, datetime
from typing import Iterable, List, Optional, Union
from zoneinfo import ZoneInfo


def normalize_date(value: Union[date, datetime]) -> date:
    """
    Truncate a date or datetime to its calendar day.

    This is the uniqueness key for entries.
    """
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_date(value: Union[str, date, datetime]) -> date:
    """
    Parse an ISO date or datetime string into a calendar day.

    Examples:
        "2024-03-05" -> date(2024, 3, 5)
        "2024-03-05T21:14:00" -> date(2024, 3, 5)

    Raises:
        ValueError: If the string is not ISO 8601
    """
    if isinstance(value, (date, datetime)):
        return normalize_date(value)

    if not isinstance(value, str):
        raise ValueError(f"Not a date: {value!r}")

    text = value.strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    return datetime.fromisoformat(text).date()


def count_words(text: Optional[str]) -> int:
    """Count whitespace-delimited tokens."""
    if not text:
        return 0
    return len(text.split())


def local_today(timezone: Optional[str] = None) -> date:
    """Today's date in the configured timezone (system local if None)."""
    if timezone:
        return datetime.now(ZoneInfo(timezone)).date()
    return date.today()


def format_days_human(days: int) -> str:
    """
    Convert a number of days to human-readable format.

    Examples:
        0 -> "today"
        5 -> "5d"
        45 -> "1mo 15d"
        400 -> "1y 1mo 5d"

    Args:
        days: Span in days

    Returns:
        Human-readable string like "1y 1mo 5d"
    """
    if days <= 0:
        return "today"

    DAYS_PER_MONTH = 30  # Approximate
    DAYS_PER_YEAR = 365

    years = days // DAYS_PER_YEAR
    remaining = days % DAYS_PER_YEAR

    months = remaining // DAYS_PER_MONTH
    remaining = remaining % DAYS_PER_MONTH

    parts = []
    if years > 0:
        parts.append(f"{years}y")
    if months > 0:
        parts.append(f"{months}mo")
    if remaining > 0:
        parts.append(f"{remaining}d")

    return " ".join(parts)


def unique_ignore_case(values: Iterable[str]) -> List[str]:
    """
    De-duplicate strings ignoring case, keeping the first spelling seen.

    Blank values are dropped; the rest are trimmed.
    """
    seen = set()
    result = []

    for value in values:
        clean = (value or "").strip()
        key = clean.lower()
        if not clean or key in seen:
            continue
        seen.add(key)
        result.append(clean)

    return result


def sorted_ignore_case(values: Iterable[str]) -> List[str]:
    """Alphabetical order ignoring case."""
    return sorted(values, key=lambda v: (v.lower(), v))
