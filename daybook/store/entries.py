"""
Journal entry storage.

One entry per calendar day. Saving twice for the same day
updates the existing entry in place.
"""

import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from daybook.core.db import StorageHandle
from daybook.core.models import EntryTag, JournalEntry
from daybook.core.utils import (
    count_words,
    normalize_date,
    sorted_ignore_case,
    unique_ignore_case,
)

logger = logging.getLogger(__name__)


class EntryStore:
    """CRUD over journal entries keyed by calendar day."""

    def __init__(self, handle: StorageHandle):
        self.handle = handle

    @property
    def default_category(self) -> str:
        return self.handle.config.default_category

    @staticmethod
    def find_by_date(session: Session, day: date) -> Optional[JournalEntry]:
        """Look up the entry for an already-normalized day inside a session."""
        return (
            session.query(JournalEntry)
            .filter(JournalEntry.entry_date == day)
            .first()
        )

    def get_by_date(self, day: Union[date, datetime]) -> Optional[JournalEntry]:
        """
        Get the entry written for a day.

        Time of day is ignored. Returns None if nothing was written.
        """
        target = normalize_date(day)

        with self.handle.session_scope() as session:
            entry = self.find_by_date(session, target)

        logger.debug(f"Lookup {target}: {'found' if entry else 'none'}")
        return entry

    def upsert(self, entry: JournalEntry) -> JournalEntry:
        """
        Save an entry for its day.

        Creates it on first save; afterwards updates in place, keeping
        the id and creation time. Word count is always recomputed.

        Returns:
            The persisted JournalEntry with id assigned
        """
        with self.handle.session_scope() as session:
            saved = self.upsert_in_session(session, entry)

        return saved

    def upsert_in_session(self, session: Session, entry: JournalEntry) -> JournalEntry:
        """
        Upsert within a caller-owned session.

        Used by the importer so a whole batch shares one transaction.
        """
        if entry.entry_date is None:
            raise ValueError("Entry date is required")

        day = normalize_date(entry.entry_date)
        now = datetime.now()

        existing = self.find_by_date(session, day)

        if existing is None:
            target = JournalEntry(entry_date=day, created_at=now, updated_at=now)
            session.add(target)
        else:
            target = existing
            # updated_at must move forward even within one clock tick
            if existing.updated_at is not None and now <= existing.updated_at:
                now = existing.updated_at + timedelta(microseconds=1)
            target.updated_at = now

        target.title = (entry.title or "").strip()
        target.content = entry.content or ""
        target.primary_mood = (entry.primary_mood or "").strip()
        target.secondary_mood1 = (entry.secondary_mood1 or "").strip() or None
        target.secondary_mood2 = (entry.secondary_mood2 or "").strip() or None
        target.category = (entry.category or "").strip() or self.default_category
        target.word_count = count_words(target.content)

        session.flush()

        logger.info(
            f"{'Created' if existing is None else 'Updated'} entry #{target.id} "
            f"for {day} ({target.word_count} words)"
        )
        return target

    def delete_by_date(self, day: Union[date, datetime]) -> int:
        """
        Delete the entry for a day together with its tag links.

        Returns:
            1 if an entry was deleted, 0 if there was none
        """
        target = normalize_date(day)

        with self.handle.session_scope() as session:
            entry = self.find_by_date(session, target)

            if entry is None:
                logger.debug(f"Nothing to delete for {target}")
                return 0

            links = (
                session.query(EntryTag)
                .filter(EntryTag.entry_id == entry.id)
                .delete(synchronize_session=False)
            )
            session.delete(entry)

            logger.info(f"Deleted entry #{entry.id} for {target} ({links} tag links)")

        return 1

    def list_all_newest_first(self) -> List[JournalEntry]:
        """All entries, most recent day first."""
        with self.handle.session_scope() as session:
            entries = (
                session.query(JournalEntry)
                .order_by(JournalEntry.entry_date.desc())
                .all()
            )

        return entries

    def get_paged(self, page: int, page_size: int) -> List[JournalEntry]:
        """
        One page of entries, newest first.

        Page and page size below 1 are treated as 1.
        """
        page = max(page, 1)
        page_size = max(page_size, 1)

        entries = self.list_all_newest_first()
        start = (page - 1) * page_size

        return entries[start:start + page_size]

    def search(self, text: Optional[str]) -> List[JournalEntry]:
        """
        Case-insensitive substring search over title and content.

        A blank query matches nothing.
        """
        needle = (text or "").strip().lower()
        if not needle:
            return []

        return [
            entry
            for entry in self.list_all_newest_first()
            if needle in (entry.title or "").lower()
            or needle in (entry.content or "").lower()
        ]

    def list_categories(self) -> List[str]:
        """Distinct categories in use, alphabetical."""
        entries = self.list_all_newest_first()
        categories = [
            (entry.category or "").strip() or self.default_category
            for entry in entries
        ]

        return sorted_ignore_case(unique_ignore_case(categories))

    def list_moods(self) -> List[str]:
        """Distinct primary moods in use, alphabetical."""
        entries = self.list_all_newest_first()

        return sorted_ignore_case(
            unique_ignore_case(entry.primary_mood for entry in entries)
        )
