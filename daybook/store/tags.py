"""
Tag storage.

Tags are created the first time a name is used and matched
ignoring case. Unused tags are left in place.
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from daybook.core.db import StorageHandle
from daybook.core.models import EntryTag, Tag
from daybook.core.utils import sorted_ignore_case, unique_ignore_case

logger = logging.getLogger(__name__)

DEFAULT_TAG = "General"


class TagStore:
    """CRUD over tag names and the entry/tag links."""

    def __init__(self, handle: StorageHandle):
        self.handle = handle

    @staticmethod
    def find_by_name(session: Session, name: str) -> Optional[Tag]:
        """Case-insensitive lookup inside a session."""
        needle = (name or "").strip().lower()

        for tag in session.query(Tag).order_by(Tag.id).all():
            if (tag.name or "").strip().lower() == needle:
                return tag

        return None

    def _get_or_create(self, session: Session, name: str) -> Tag:
        clean = (name or "").strip() or DEFAULT_TAG

        tag = self.find_by_name(session, clean)
        if tag is not None:
            return tag

        tag = Tag(name=clean)
        session.add(tag)
        session.flush()

        logger.info(f"Created tag #{tag.id}: {clean}")
        return tag

    def get_or_create(self, name: str) -> Tag:
        """
        Resolve a tag by name, creating it if needed.

        Blank names resolve to "General".
        """
        with self.handle.session_scope() as session:
            tag = self._get_or_create(session, name)

        return tag

    def set_tags(self, entry_id: int, names: Iterable[str]) -> None:
        """
        Replace the tag set of an entry.

        Names are trimmed; blanks and case-insensitive duplicates are dropped.
        Runs in a single transaction.
        """
        clean_names = unique_ignore_case(names)

        with self.handle.session_scope() as session:
            removed = (
                session.query(EntryTag)
                .filter(EntryTag.entry_id == entry_id)
                .delete(synchronize_session=False)
            )

            for name in clean_names:
                tag = self._get_or_create(session, name)
                session.add(EntryTag(entry_id=entry_id, tag_id=tag.id))

        logger.info(
            f"Entry #{entry_id}: replaced {removed} tag links with {len(clean_names)}"
        )

    def get_tags(self, entry_id: int) -> List[str]:
        """Tag names linked to an entry, alphabetical."""
        with self.handle.session_scope() as session:
            names = [
                name
                for (name,) in (
                    session.query(Tag.name)
                    .join(EntryTag, EntryTag.tag_id == Tag.id)
                    .filter(EntryTag.entry_id == entry_id)
                    .all()
                )
            ]

        return sorted_ignore_case(unique_ignore_case(names))

    def list_all_tag_names(self) -> List[str]:
        """Every known tag name, alphabetical."""
        with self.handle.session_scope() as session:
            names = [name for (name,) in session.query(Tag.name).order_by(Tag.id).all()]

        return sorted_ignore_case(unique_ignore_case(names))
