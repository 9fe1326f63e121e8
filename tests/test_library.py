"""Tests for library.py"""

import json
import logging
from datetime import datetime, timedelta, timezone

import pytest

from noteecho.core.highlight_filter import books_with_highlights
from noteecho.core.library import (
    LibraryFileError,
    LibraryStore,
    load_library_file,
    parse_created_date,
    populate_library,
)
from noteecho.core.sample_data import sample_library
from noteecho.core.settings import Settings
from noteecho.providers.content_types import Book, Highlight

NOW = datetime(2025, 3, 1, 12, 0, 0)


def _settings(**overrides) -> Settings:
    values = dict(
        app_env="test",
        library_path="",
        use_sample_data=True,
        notifications_enabled=True,
        notification_hour=9,
        notification_minute=0,
        log_level="INFO",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def store():
    store = LibraryStore()
    books, highlights = sample_library(NOW)
    store.replace(books, highlights)
    return store


@pytest.fixture
def export_file(tmp_path):
    data = {
        "books": [
            {
                "id": "b1",
                "title": "Meditations",
                "author": "Marcus Aurelius",
                "asset_id": "A1",
                "highlights": [
                    {
                        "id": "h1",
                        "content": "Be reasonable",
                        "note": "short",
                        "chapter": "Book 1",
                        "created_date": "2024-05-01T10:00:00",
                    },
                    {
                        "content": "The impediment to action advances action.",
                        "created_date": 0,
                    },
                    {"id": "h3", "content": "", "created_date": "2024-05-02T10:00:00"},
                ],
            },
            {"title": "Empty Book", "author": "Nobody", "asset_id": "A2"},
        ]
    }
    path = tmp_path / "library.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLibraryStore:
    """Tests for the in-memory store."""

    def test_replace_counts_highlights(self, store):
        counts = {b.id: b.highlight_count for b in store.books()}
        assert counts["atomic-habits-001"] == 5
        assert counts["deep-work-004"] == 4
        assert len(store.highlights()) == 21

    def test_books_sorted_by_title(self, store):
        titles = [b.title for b in store.books()]
        assert titles == sorted(titles)

    def test_highlight_book_reference_refreshed(self, store):
        h = store.get_highlight("atomic-habits-001-1")
        assert h.book.highlight_count == 5

    def test_replace_clears_previous_contents(self, store):
        book = Book(id="solo", title="Solo", author="Me")
        store.replace([book], [Highlight(id="s1", content="Only one", created_date=NOW, book=book)])
        assert [b.id for b in store.books()] == ["solo"]
        assert [h.id for h in store.highlights()] == ["s1"]

    def test_replace_skips_invalid_highlights(self, caplog):
        store = LibraryStore()
        book = Book(id="b", title="B", author="A")
        ghost = Book(id="ghost", title="Ghost", author="")
        items = [
            Highlight(id="ok", content="Fine", created_date=NOW, book=book),
            Highlight(id="blank", content="   ", created_date=NOW, book=book),
            Highlight(id="orphan", content="No book", created_date=NOW),
            Highlight(id="unknown", content="Unknown book", created_date=NOW, book=ghost),
        ]
        with caplog.at_level(logging.WARNING):
            assert store.replace([book], items) == 1
        assert "Skipped 3 highlights" in caplog.text

    def test_delete_book_cascades(self, store):
        assert store.delete_book("atomic-habits-001") is True
        assert store.get_book("atomic-habits-001") is None
        assert all(h.book_id != "atomic-habits-001" for h in store.highlights())
        assert len(store.highlights()) == 16

    def test_delete_unknown_book(self, store):
        assert store.delete_book("nope") is False

    def test_delete_highlight_updates_count(self, store):
        for i in range(1, 5):
            assert store.delete_highlight(f"deep-work-004-{i}") is True
        assert store.get_book("deep-work-004").highlight_count == 0
        assert "deep-work-004" not in {b.id for b in books_with_highlights(store.books())}

    def test_delete_unknown_highlight(self, store):
        assert store.delete_highlight("nope") is False

    def test_returns_snapshots(self, store):
        snapshot = store.highlights()
        store.delete_book("sapiens-005")
        assert len(snapshot) == 21

    def test_clear(self, store):
        store.clear()
        assert store.books() == []
        assert store.highlights() == []


class TestLoadLibraryFile:
    """Tests for reading a JSON export."""

    def test_load(self, export_file):
        books, highlights = load_library_file(export_file)

        assert [b.title for b in books] == ["Meditations", "Empty Book"]
        assert books[0].id == "b1"
        assert books[1].id == "A2"
        assert len(highlights) == 3

        first = highlights[0]
        assert first.id == "h1"
        assert first.note == "short"
        assert first.chapter == "Book 1"
        assert first.created_date == datetime(2024, 5, 1, 10, 0, 0)
        assert first.book_id == "b1"

        assert highlights[1].id  # generated uuid
        assert highlights[1].note is None

    def test_store_drops_empty_content(self, export_file):
        store = LibraryStore()
        books, highlights = load_library_file(export_file)
        assert store.replace(books, highlights) == 2
        assert [b.title for b in books_with_highlights(store.books())] == ["Meditations"]

    def test_apple_reference_date(self):
        expected = datetime(2001, 1, 1, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
        assert parse_created_date(0) == expected
        assert parse_created_date(86400.0) == expected + timedelta(days=1)

    def test_aware_iso_converted_to_local(self):
        parsed = parse_created_date("2024-05-01T10:00:00+00:00")
        assert parsed.tzinfo is None

    @pytest.mark.parametrize(
        "value",
        ["yesterday", None, True, ["2024"], 1e20, float("nan"), "0001-01-01T00:00:00+05:00"],
    )
    def test_invalid_dates(self, value):
        with pytest.raises(LibraryFileError):
            parse_created_date(value)

    def test_missing_file(self, tmp_path):
        with pytest.raises(LibraryFileError, match="Cannot read"):
            load_library_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(LibraryFileError, match="Invalid JSON"):
            load_library_file(path)

    @pytest.mark.parametrize(
        "data",
        [
            [],
            {"books": "nope"},
            {"books": [{"author": "No title"}]},
            {"books": [{"title": "T", "highlights": [{"content": "no date"}]}]},
            {"books": ["not an object"]},
        ],
    )
    def test_malformed_structure(self, tmp_path, data):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        with pytest.raises(LibraryFileError):
            load_library_file(path)


class TestPopulateLibrary:
    """Tests for filling the store from settings."""

    def test_sample_data(self):
        store = LibraryStore()
        assert populate_library(store, _settings(), NOW) == 21
        assert len(store.books()) == 5

    def test_library_file(self, export_file):
        store = LibraryStore()
        assert populate_library(store, _settings(library_path=str(export_file)), NOW) == 2

    def test_nothing_configured(self):
        store = LibraryStore()
        assert populate_library(store, _settings(use_sample_data=False), NOW) == 0
        assert store.books() == []

    def test_failure_leaves_empty_state(self, store, tmp_path, caplog):
        settings = _settings(library_path=str(tmp_path / "missing.json"))
        with caplog.at_level(logging.ERROR):
            assert populate_library(store, settings, NOW) == 0
        assert store.highlights() == []
        assert "Failed to load library" in caplog.text

    @pytest.mark.parametrize("created_date", [1e20, float("nan"), "0001-01-01T00:00:00+05:00"])
    def test_out_of_range_date_leaves_empty_state(self, store, tmp_path, caplog, created_date):
        path = tmp_path / "export.json"
        data = {
            "books": [
                {
                    "id": "b1",
                    "title": "Deep Work",
                    "highlights": [{"id": "h1", "content": "Focus.", "created_date": created_date}],
                }
            ]
        }
        path.write_text(json.dumps(data), encoding="utf-8")
        with caplog.at_level(logging.ERROR):
            assert populate_library(store, _settings(library_path=str(path)), NOW) == 0
        assert store.books() == []
        assert store.highlights() == []
        assert "Invalid created_date" in caplog.text
