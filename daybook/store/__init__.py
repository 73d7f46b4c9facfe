"""
Storage module for Daybook.

Handles journal entries, tags and the links between them.
"""

from daybook.store.entries import EntryStore
from daybook.store.tags import TagStore

__all__ = ["EntryStore", "TagStore"]
