"""
Entry filtering for browsing.

Combines category, mood and tag criteria over the full history.
"""

import logging
from typing import List, Optional

from daybook.core.db import StorageHandle
from daybook.core.models import EntryTag, JournalEntry
from daybook.store.entries import EntryStore
from daybook.store.tags import TagStore

logger = logging.getLogger(__name__)


def _matches(value: Optional[str], wanted: str) -> bool:
    return (value or "").strip().lower() == wanted.strip().lower()


class EntryFilter:
    """Paging, search and multi-criterion filtering over all entries."""

    def __init__(self, handle: StorageHandle):
        self.handle = handle
        self.entries = EntryStore(handle)

    def filter(
        self,
        category: Optional[str] = None,
        mood: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> List[JournalEntry]:
        """
        Filter entries.

        Each criterion is optional and matched ignoring case; given criteria
        must all hold. An unknown tag yields no entries.

        Returns:
            Matching entries, newest first
        """
        with self.handle.session_scope() as session:
            entries = session.query(JournalEntry).all()

            if category and category.strip():
                entries = [e for e in entries if _matches(e.category, category)]

            if mood and mood.strip():
                entries = [e for e in entries if _matches(e.primary_mood, mood)]

            if tag and tag.strip():
                tag_obj = TagStore.find_by_name(session, tag)

                if tag_obj is None:
                    logger.debug(f"Filter: unknown tag {tag!r}")
                    return []

                entry_ids = {
                    entry_id
                    for (entry_id,) in (
                        session.query(EntryTag.entry_id)
                        .filter(EntryTag.tag_id == tag_obj.id)
                        .all()
                    )
                }
                entries = [e for e in entries if e.id in entry_ids]

        logger.debug(
            f"Filter category={category!r} mood={mood!r} tag={tag!r}: {len(entries)} entries"
        )
        return sorted(entries, key=lambda e: e.entry_date, reverse=True)

    def page(self, page: int, page_size: Optional[int] = None) -> List[JournalEntry]:
        """One page of entries, newest first (configured page size by default)."""
        if page_size is None:
            page_size = self.handle.config.page_size
        return self.entries.get_paged(page, page_size)

    def search(self, text: Optional[str]) -> List[JournalEntry]:
        """Substring search over title and content."""
        return self.entries.search(text)
