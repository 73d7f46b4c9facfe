"""
Unit tests for the entry store.

Covers one-entry-per-day upserts, word counting, deletion
with tag links, paging and search.
"""

import pytest
from datetime import date, datetime

from daybook.core.models import EntryTag, JournalEntry


class TestUpsert:
    """Test creating and updating entries by day."""

    def test_insert_assigns_id_and_timestamps(self, entry_store):
        """First save creates the entry."""
        saved = entry_store.upsert(JournalEntry(
            entry_date=date(2024, 3, 1),
            title="First",
            content="hello world",
            primary_mood="Happy",
        ))

        assert saved.id is not None
        assert saved.created_at is not None
        assert saved.updated_at == saved.created_at

    def test_datetime_is_truncated_to_day(self, entry_store):
        """Time of day is dropped before storing and looking up."""
        entry_store.upsert(JournalEntry(
            entry_date=datetime(2024, 3, 1, 22, 15),
            title="Late",
            content="night thoughts",
        ))

        found = entry_store.get_by_date(datetime(2024, 3, 1, 6, 0))

        assert found is not None
        assert found.entry_date == date(2024, 3, 1)

    def test_word_count_recomputed(self, entry_store):
        """Caller-supplied word counts are ignored."""
        entry_store.upsert(JournalEntry(
            entry_date=date(2024, 3, 1),
            content="one  two\tthree\nfour\r\n five ",
            word_count=999,
        ))

        found = entry_store.get_by_date(date(2024, 3, 1))

        assert found.word_count == 5

    def test_empty_content_has_zero_words(self, entry_store):
        """Blank content counts as zero words."""
        saved = entry_store.upsert(JournalEntry(entry_date=date(2024, 3, 1), content="   "))

        assert saved.word_count == 0

    def test_second_save_updates_in_place(self, entry_store):
        """Saving the same day twice keeps id and creation time."""
        first = entry_store.upsert(JournalEntry(
            entry_date=date(2024, 3, 1), title="Draft", content="a b",
        ))
        second = entry_store.upsert(JournalEntry(
            entry_date=datetime(2024, 3, 1, 18, 30), title="Final", content="a b c",
        ))

        assert second.id == first.id
        assert second.created_at == first.created_at
        assert second.updated_at > first.updated_at
        assert second.title == "Final"
        assert second.word_count == 3
        assert len(entry_store.list_all_newest_first()) == 1

    def test_updated_at_advances_on_every_save(self, entry_store):
        """Rapid saves still move updated_at forward."""
        stamps = [
            entry_store.upsert(JournalEntry(entry_date=date(2024, 3, 1), content=str(i))).updated_at
            for i in range(5)
        ]

        assert stamps == sorted(stamps)
        assert len(set(stamps)) == 5

    def test_blank_category_defaults_to_general(self, entry_store):
        """Missing category becomes General."""
        saved = entry_store.upsert(JournalEntry(entry_date=date(2024, 3, 1), category="  "))

        assert saved.category == "General"

    def test_blank_secondary_moods_stored_as_none(self, entry_store):
        """Empty secondary moods are not stored as empty strings."""
        saved = entry_store.upsert(JournalEntry(
            entry_date=date(2024, 3, 1),
            primary_mood="Happy",
            secondary_mood1="Grateful",
            secondary_mood2="",
        ))

        assert saved.secondary_mood1 == "Grateful"
        assert saved.secondary_mood2 is None

    def test_missing_date_rejected(self, entry_store):
        """An entry needs a day."""
        with pytest.raises(ValueError):
            entry_store.upsert(JournalEntry(title="No date"))


class TestGetByDate:
    """Test lookups by day."""

    def test_returns_none_when_absent(self, entry_store):
        """No entry is a normal outcome."""
        assert entry_store.get_by_date(date(2024, 1, 1)) is None

    def test_returns_entry_for_day(self, make_entry, entry_store):
        make_entry(date(2024, 1, 1), title="New year")

        found = entry_store.get_by_date(date(2024, 1, 1))

        assert found.title == "New year"


class TestDeleteByDate:
    """Test deleting entries together with their tag links."""

    def test_delete_missing_returns_zero(self, make_entry, entry_store):
        """Deleting a day with no entry changes nothing."""
        make_entry(date(2024, 1, 1))

        assert entry_store.delete_by_date(date(2024, 1, 2)) == 0
        assert len(entry_store.list_all_newest_first()) == 1

    def test_delete_removes_entry_and_links(self, make_entry, entry_store, tag_store, handle):
        """Deleting an entry also removes its tag links."""
        entry = make_entry(date(2024, 1, 1))
        tag_store.set_tags(entry.id, ["work", "travel"])

        assert entry_store.delete_by_date(datetime(2024, 1, 1, 9, 0)) == 1

        assert entry_store.get_by_date(date(2024, 1, 1)) is None
        assert tag_store.get_tags(entry.id) == []
        with handle.session_scope() as session:
            assert session.query(EntryTag).count() == 0

    def test_delete_keeps_tags_themselves(self, make_entry, entry_store, tag_store):
        """Orphaned tags stay available."""
        entry = make_entry(date(2024, 1, 1))
        tag_store.set_tags(entry.id, ["work"])

        entry_store.delete_by_date(date(2024, 1, 1))

        assert tag_store.list_all_tag_names() == ["work"]


class TestListingAndPaging:
    """Test newest-first listing and paging."""

    @pytest.fixture
    def five_days(self, make_entry):
        for day in (3, 1, 5, 2, 4):
            make_entry(date(2024, 2, day))

    def test_newest_first(self, five_days, entry_store):
        days = [e.entry_date.day for e in entry_store.list_all_newest_first()]

        assert days == [5, 4, 3, 2, 1]

    def test_paging(self, five_days, entry_store):
        assert [e.entry_date.day for e in entry_store.get_paged(1, 2)] == [5, 4]
        assert [e.entry_date.day for e in entry_store.get_paged(2, 2)] == [3, 2]
        assert [e.entry_date.day for e in entry_store.get_paged(3, 2)] == [1]
        assert entry_store.get_paged(4, 2) == []

    def test_invalid_paging_clamped(self, five_days, entry_store):
        """Page and page size below 1 are treated as 1."""
        assert [e.entry_date.day for e in entry_store.get_paged(0, 0)] == [5]
        assert [e.entry_date.day for e in entry_store.get_paged(-3, 2)] == [5, 4]


class TestSearch:
    """Test substring search."""

    @pytest.fixture
    def entries(self, make_entry):
        make_entry(date(2024, 1, 1), title="Beach day", content="Sun and sand")
        make_entry(date(2024, 1, 2), title="Office", content="Long MEETING about the beach house")
        make_entry(date(2024, 1, 3), title="Quiet", content="Nothing much")

    def test_matches_title_or_content_ignoring_case(self, entries, entry_store):
        results = entry_store.search("BEACH")

        assert [e.entry_date.day for e in results] == [2, 1]

    def test_query_is_trimmed(self, entries, entry_store):
        assert len(entry_store.search("  meeting  ")) == 1

    @pytest.mark.parametrize("query", ["", "   ", None])
    def test_blank_query_returns_nothing(self, entries, entry_store, query):
        """A blank search is not the same as no filter."""
        assert entry_store.search(query) == []


class TestDistinctValues:
    """Test category and mood listings."""

    def test_categories_and_moods(self, make_entry, entry_store):
        make_entry(date(2024, 1, 1), category="work", primary_mood="happy")
        make_entry(date(2024, 1, 2), category="Work", primary_mood="Happy")
        make_entry(date(2024, 1, 3), category="Travel", primary_mood="")
        make_entry(date(2024, 1, 4), category="", primary_mood="Anxious")

        assert [c.lower() for c in entry_store.list_categories()] == ["general", "travel", "work"]
        assert [m.lower() for m in entry_store.list_moods()] == ["anxious", "happy"]
