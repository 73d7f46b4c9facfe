"""
Shared pytest fixtures for Daybook tests.

Every test gets its own SQLite file under tmp_path.
"""

import sys
from datetime import date
from pathlib import Path

import pytest

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from daybook.core.config import Config
from daybook.core.db import StorageHandle
from daybook.core.models import JournalEntry
from daybook.export import JournalExporter
from daybook.review.filters import EntryFilter
from daybook.review.stats import JournalStats
from daybook.store import EntryStore, TagStore


@pytest.fixture
def config(tmp_path):
    """Config pointing at a throwaway database."""
    return Config(
        database_path=str(tmp_path / "journal.db"),
        export_dir=str(tmp_path / "exports"),
    )


@pytest.fixture
def handle(config):
    storage = StorageHandle(config)
    yield storage
    storage.dispose()


@pytest.fixture
def entry_store(handle):
    return EntryStore(handle)


@pytest.fixture
def tag_store(handle):
    return TagStore(handle)


@pytest.fixture
def entry_filter(handle):
    return EntryFilter(handle)


@pytest.fixture
def stats(handle):
    return JournalStats(handle)


@pytest.fixture
def exporter(handle):
    return JournalExporter(handle)


@pytest.fixture
def make_entry(entry_store):
    """Factory that upserts an entry with sensible defaults."""

    def _make(day: date, **fields) -> JournalEntry:
        fields.setdefault("title", f"Entry {day.isoformat()}")
        fields.setdefault("content", "Some words about the day")
        fields.setdefault("primary_mood", "Calm")
        fields.setdefault("category", "General")
        return entry_store.upsert(JournalEntry(entry_date=day, **fields))

    return _make
