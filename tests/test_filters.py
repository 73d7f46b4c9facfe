"""
Unit tests for entry filtering.

Criteria are optional, case-insensitive and combine as AND.
"""

import pytest
from datetime import date


@pytest.fixture
def journal(make_entry, tag_store):
    """Four entries across categories, moods and tags."""
    a = make_entry(date(2024, 5, 1), category="Work", primary_mood="Stressed")
    b = make_entry(date(2024, 5, 2), category="work", primary_mood="Happy")
    c = make_entry(date(2024, 5, 3), category="Travel", primary_mood="happy")
    d = make_entry(date(2024, 5, 4), category="Travel", primary_mood="Calm")

    tag_store.set_tags(a.id, ["deadline"])
    tag_store.set_tags(b.id, ["Team", "deadline"])
    tag_store.set_tags(c.id, ["beach"])
    tag_store.set_tags(d.id, [])

    return {"a": a, "b": b, "c": c, "d": d}


def _days(entries):
    return [e.entry_date.day for e in entries]


class TestFilter:
    """Test EntryFilter.filter()."""

    def test_no_criteria_returns_all_newest_first(self, journal, entry_filter):
        assert _days(entry_filter.filter()) == [4, 3, 2, 1]

    def test_blank_criteria_ignored(self, journal, entry_filter):
        assert _days(entry_filter.filter(category="  ", mood="", tag=None)) == [4, 3, 2, 1]

    def test_category_ignores_case(self, journal, entry_filter):
        assert _days(entry_filter.filter(category="WORK")) == [2, 1]

    def test_mood_ignores_case(self, journal, entry_filter):
        assert _days(entry_filter.filter(mood="HAPPY")) == [3, 2]

    def test_tag(self, journal, entry_filter):
        assert _days(entry_filter.filter(tag="Deadline")) == [2, 1]

    def test_unknown_tag_returns_nothing(self, journal, entry_filter):
        """An unknown tag short-circuits to an empty result."""
        assert entry_filter.filter(tag="nonexistent") == []

    def test_criteria_combine(self, journal, entry_filter):
        assert _days(entry_filter.filter(category="work", mood="happy", tag="team")) == [2]
        assert entry_filter.filter(category="travel", tag="deadline") == []

    def test_empty_journal(self, entry_filter):
        assert entry_filter.filter() == []


class TestQuerySurface:
    """Test paging and search delegation."""

    def test_page_uses_configured_size(self, journal, entry_filter, handle):
        handle.config.page_size = 3

        assert _days(entry_filter.page(1)) == [4, 3, 2]
        assert _days(entry_filter.page(2)) == [1]

    def test_search(self, make_entry, entry_filter):
        make_entry(date(2024, 5, 1), content="Climbed the hill")

        assert len(entry_filter.search("HILL")) == 1
        assert entry_filter.search("") == []
