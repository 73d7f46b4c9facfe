"""
Journal statistics module.

Provides aggregate counts and writing streaks over the history.
"""

import logging
from collections import Counter
from datetime import date, timedelta
from typing import Dict, Iterable, List, NamedTuple, Optional

from sqlalchemy import func

from daybook.core.db import StorageHandle
from daybook.core.models import EntryTag, JournalEntry, Tag
from daybook.core.moods import MOODS_BY_CATEGORY, get_mood_category
from daybook.core.utils import local_today

logger = logging.getLogger(__name__)


class StreakSummary(NamedTuple):
    """Writing streaks as of a given day."""
    current: int
    longest: int
    missed_days: int


def ranked_counts(labels: Iterable[str]) -> Dict[str, int]:
    """
    Count labels ignoring case.

    Blank labels are skipped. The first spelling seen names the group.
    Ordered by count descending, then label ascending.
    """
    counts: Counter = Counter()
    spelling: Dict[str, str] = {}

    for label in labels:
        clean = (label or "").strip()
        if not clean:
            continue
        key = clean.lower()
        spelling.setdefault(key, clean)
        counts[key] += 1

    ranked = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0], spelling[kv[0]]))
    return {spelling[key]: count for key, count in ranked}


def compute_streaks(dates: Iterable[date], today: date) -> StreakSummary:
    """
    Compute current streak, longest streak and missed days.

    The current streak counts back from today and stops at the first
    gap. A run ending yesterday still counts while today is unwritten.
    Entries dated after today are ignored for the current streak.

    Missed days span from the earliest entry to today, inclusive.
    """
    distinct = sorted(set(dates), reverse=True)

    if not distinct:
        return StreakSummary(0, 0, 0)

    # Current streak
    current = 0
    expected = today
    yesterday = today - timedelta(days=1)
    if today not in distinct and yesterday in distinct:
        expected = yesterday

    for day in distinct:
        if day > expected:
            continue
        if day != expected:
            break
        current += 1
        expected = day - timedelta(days=1)

    # Longest streak
    ascending = list(reversed(distinct))
    longest = 1
    run = 1
    for previous, day in zip(ascending, ascending[1:]):
        if (day - previous).days == 1:
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    longest = max(longest, current)

    # Missed days
    total_days = (today - ascending[0]).days + 1
    missed = max(0, total_days - len(distinct))

    return StreakSummary(current, longest, missed)


class JournalStats:
    """Aggregates and streaks over the whole journal."""

    def __init__(self, handle: StorageHandle):
        self.handle = handle

    def _all_entries(self) -> List[JournalEntry]:
        with self.handle.session_scope() as session:
            entries = session.query(JournalEntry).order_by(JournalEntry.entry_date).all()
        return entries

    def _today(self) -> date:
        return local_today(self.handle.config.timezone)

    def total_entries(self) -> int:
        with self.handle.session_scope() as session:
            count = session.query(func.count(JournalEntry.id)).scalar()

        return count or 0

    def total_words(self) -> int:
        """Sum of stored word counts."""
        with self.handle.session_scope() as session:
            total = session.query(func.sum(JournalEntry.word_count)).scalar()

        return total or 0

    def mood_counts(self) -> Dict[str, int]:
        """Primary mood counts, most frequent first."""
        return ranked_counts(e.primary_mood for e in self._all_entries())

    def category_counts(self) -> Dict[str, int]:
        """Category counts, most frequent first. Blank counts as the default category."""
        default = self.handle.config.default_category
        return ranked_counts(
            (e.category or "").strip() or default for e in self._all_entries()
        )

    def tag_counts(self) -> Dict[str, int]:
        """Number of entries per tag, most frequent first."""
        with self.handle.session_scope() as session:
            names = [
                name
                for (name,) in (
                    session.query(Tag.name)
                    .join(EntryTag, EntryTag.tag_id == Tag.id)
                    .all()
                )
            ]

        return ranked_counts(names)

    def entries_per_month(self) -> Dict[str, int]:
        """Entry counts keyed YYYY-MM, most recent month first."""
        counts = Counter(e.entry_date.strftime("%Y-%m") for e in self._all_entries())
        return dict(sorted(counts.items(), reverse=True))

    def mood_category_counts(self) -> Dict[str, int]:
        """Primary moods grouped into Positive / Neutral / Negative."""
        counts = {category: 0 for category in MOODS_BY_CATEGORY}

        for entry in self._all_entries():
            mood = (entry.primary_mood or "").strip()
            if mood:
                counts[get_mood_category(mood)] += 1

        return counts

    def streaks(self, today: Optional[date] = None) -> StreakSummary:
        """Current streak, longest streak and missed days."""
        if today is None:
            today = self._today()

        with self.handle.session_scope() as session:
            dates = [day for (day,) in session.query(JournalEntry.entry_date).all()]

        summary = compute_streaks(dates, today)
        logger.debug(f"Streaks as of {today}: {summary}")
        return summary

    def get_summary(self, today: Optional[date] = None) -> dict:
        """
        Collect every statistic for the review report.
        """
        if today is None:
            today = self._today()

        entries = self._all_entries()
        streaks = self.streaks(today)

        first_entry = min((e.entry_date for e in entries), default=None)

        return {
            "today": today,
            "total_entries": len(entries),
            "total_words": sum(e.word_count or 0 for e in entries),
            "first_entry": first_entry,
            "current_streak": streaks.current,
            "longest_streak": streaks.longest,
            "missed_days": streaks.missed_days,
            "mood_counts": self.mood_counts(),
            "mood_category_counts": self.mood_category_counts(),
            "category_counts": self.category_counts(),
            "tag_counts": self.tag_counts(),
            "entries_per_month": self.entries_per_month(),
        }
