"""
Unit tests for configuration, helpers, the mood catalogue and the storage handle.
"""

import json
import pytest
from datetime import date, datetime
from unittest.mock import patch

from sqlalchemy import inspect

from daybook.core.config import Config
from daybook.core.db import StorageHandle, init_db
from daybook.core.moods import all_moods, get_mood_category
from daybook.core.utils import (
    count_words,
    format_days_human,
    local_today,
    normalize_date,
    parse_date,
    sorted_ignore_case,
    unique_ignore_case,
)


class TestConfig:
    """Test loading configuration from the environment."""

    def test_defaults(self, monkeypatch):
        for var in ("DAYBOOK_SETTINGS", "DAYBOOK_DB_PATH", "TIMEZONE", "DAYBOOK_PAGE_SIZE",
                    "DAYBOOK_DEFAULT_CATEGORY"):
            monkeypatch.delenv(var, raising=False)

        config = Config.from_env()

        assert config.database_path == "data/daybook.db"
        assert config.timezone is None
        assert config.page_size == 10
        assert config.default_category == "General"

    def test_env_overrides_settings_file(self, monkeypatch, tmp_path):
        settings = tmp_path / "settings.json"
        settings.write_text(json.dumps({"database_path": "from_file.db", "page_size": 5, "pdf_title": "Diary"}))

        monkeypatch.setenv("DAYBOOK_SETTINGS", str(settings))
        monkeypatch.setenv("DAYBOOK_DB_PATH", "from_env.db")
        monkeypatch.delenv("DAYBOOK_PAGE_SIZE", raising=False)
        monkeypatch.delenv("DAYBOOK_PDF_TITLE", raising=False)

        config = Config.from_env()

        assert config.database_path == "from_env.db"
        assert config.page_size == 5
        assert config.pdf_title == "Diary"

    def test_missing_settings_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DAYBOOK_SETTINGS", str(tmp_path / "missing.json"))

        with pytest.raises(FileNotFoundError):
            Config.from_env()

    def test_summary_mentions_database(self):
        assert "journal.db" in Config(database_path="journal.db").summary()


class TestStorageHandle:
    """Test lazy opening and schema creation."""

    def test_acquire_creates_tables_once(self, config):
        handle = StorageHandle(config)

        engine = handle.acquire()

        assert handle.acquire() is engine
        assert set(inspect(engine).get_table_names()) >= {
            "journal_entries", "tags", "entry_tags", "users",
        }
        handle.dispose()

    def test_reopen_after_dispose(self, config):
        handle = StorageHandle(config)
        first = handle.acquire()
        handle.dispose()

        assert handle.acquire() is not first
        handle.dispose()

    def test_session_scope_rolls_back(self, handle):
        from daybook.core.models import Tag

        with pytest.raises(RuntimeError):
            with handle.session_scope() as session:
                session.add(Tag(name="temp"))
                session.flush()
                raise RuntimeError("boom")

        with handle.session_scope() as session:
            assert session.query(Tag).count() == 0

    def test_init_db_creates_file(self, tmp_path):
        config = Config(database_path=str(tmp_path / "nested" / "journal.db"))

        init_db(config)

        assert (tmp_path / "nested" / "journal.db").exists()


class TestHelpers:
    """Test small utility functions."""

    @pytest.mark.parametrize("text,expected", [
        (None, 0),
        ("", 0),
        ("   \n\t ", 0),
        ("one", 1),
        ("  one   two\nthree\r\nfour\tfive  ", 5),
    ])
    def test_count_words(self, text, expected):
        assert count_words(text) == expected

    def test_normalize_date(self):
        assert normalize_date(datetime(2024, 2, 29, 23, 59)) == date(2024, 2, 29)
        assert normalize_date(date(2024, 2, 29)) == date(2024, 2, 29)

    def test_parse_date(self):
        assert parse_date("2024-03-05") == date(2024, 3, 5)
        assert parse_date(" 2024-03-05T21:14:00 ") == date(2024, 3, 5)
        with pytest.raises(ValueError):
            parse_date("05/03/2024")
        with pytest.raises(ValueError):
            parse_date(20240305)

    def test_local_today_with_timezone(self):
        assert isinstance(local_today("Asia/Jakarta"), date)

    def test_local_today_system(self):
        with patch("daybook.core.utils.date") as mock_date:
            mock_date.today.return_value = date(2024, 1, 1)
            assert local_today() == date(2024, 1, 1)

    @pytest.mark.parametrize("days,expected", [
        (0, "today"),
        (5, "5d"),
        (45, "1mo 15d"),
        (400, "1y 1mo 5d"),
        (365, "1y"),
    ])
    def test_format_days_human(self, days, expected):
        assert format_days_human(days) == expected

    def test_unique_and_sorted_ignore_case(self):
        values = unique_ignore_case([" b", "B", "a", "", None, "C "])

        assert values == ["b", "a", "C"]
        assert sorted_ignore_case(values) == ["a", "b", "C"]


class TestMoods:
    """Test the mood catalogue."""

    def test_categories(self):
        assert get_mood_category("happy") == "Positive"
        assert get_mood_category("ANXIOUS") == "Negative"
        assert get_mood_category("Curious") == "Neutral"
        assert get_mood_category("Hangry") == "Neutral"

    def test_all_moods_sorted(self):
        moods = all_moods()

        assert len(moods) == 15
        assert moods == sorted(moods)
