"""In-memory library of books and highlights.

The store is the single supply the filter pipeline and the daily
selector read from. Every load replaces the previous contents, and
deleting a book removes its highlights with it.
"""

from __future__ import annotations

import json
import logging
import threading
import uuid
from collections import Counter
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Iterable

from noteecho.core.sample_data import sample_library
from noteecho.core.settings import Settings
from noteecho.providers.content_types import Book, Highlight

logger = logging.getLogger(__name__)

# Core Data timestamps count seconds from this date
APPLE_REFERENCE_DATE = datetime(2001, 1, 1, tzinfo=timezone.utc)


class LibraryError(Exception):
    """Base exception for library loading errors."""


class LibraryFileError(LibraryError):
    """Library export is missing, unreadable or malformed."""


class LibraryStore:
    """Store for books and highlights. Thread-safe."""

    def __init__(self) -> None:
        self._books: dict[str, Book] = {}
        self._highlights: list[Highlight] = []
        self._lock = threading.Lock()

    def replace(self, books: Iterable[Book], highlights: Iterable[Highlight]) -> int:
        """Clear the store and load new contents.

        Highlights with empty content or without a known book are
        skipped. Returns the number of highlights stored.
        """
        with self._lock:
            self._books = {book.id: book for book in books}
            kept = []
            skipped = 0
            for highlight in highlights:
                if not highlight.content.strip() or highlight.book_id not in self._books:
                    skipped += 1
                    continue
                kept.append(highlight)
            self._highlights = kept
            self._relink()

        if skipped:
            logger.warning(f"Skipped {skipped} highlights without content or book")
        return len(kept)

    def clear(self) -> None:
        with self._lock:
            self._books = {}
            self._highlights = []

    def _relink(self) -> None:
        """Recount highlights per book and refresh book references. Must be called within lock."""
        counts = Counter(h.book_id for h in self._highlights)
        self._books = {
            book_id: replace(book, highlight_count=counts.get(book_id, 0))
            for book_id, book in self._books.items()
        }
        self._highlights = [
            replace(h, book=self._books.get(h.book_id)) if h.book_id else h
            for h in self._highlights
        ]

    def books(self) -> list[Book]:
        """All books, sorted by title."""
        with self._lock:
            return sorted(self._books.values(), key=lambda b: b.title)

    def highlights(self) -> list[Highlight]:
        """All highlights in load order."""
        with self._lock:
            return list(self._highlights)

    def get_book(self, book_id: str) -> Book | None:
        with self._lock:
            return self._books.get(book_id)

    def get_highlight(self, highlight_id: str) -> Highlight | None:
        with self._lock:
            for highlight in self._highlights:
                if highlight.id == highlight_id:
                    return highlight
            return None

    def delete_book(self, book_id: str) -> bool:
        """Delete a book and all of its highlights. Returns True if deleted."""
        with self._lock:
            if book_id not in self._books:
                return False
            del self._books[book_id]
            self._highlights = [h for h in self._highlights if h.book_id != book_id]
            self._relink()
            return True

    def delete_highlight(self, highlight_id: str) -> bool:
        """Delete a single highlight. Returns True if deleted."""
        with self._lock:
            remaining = [h for h in self._highlights if h.id != highlight_id]
            if len(remaining) == len(self._highlights):
                return False
            self._highlights = remaining
            self._relink()
            return True


def parse_created_date(value: Any) -> datetime:
    """Parse an ISO 8601 string or Core Data seconds into local naive time."""
    if isinstance(value, bool):
        raise LibraryFileError(f"Invalid created_date: {value!r}")
    if isinstance(value, (int, float)):
        try:
            parsed = APPLE_REFERENCE_DATE + timedelta(seconds=value)
        except (OverflowError, ValueError):
            raise LibraryFileError(f"Invalid created_date: {value!r}") from None
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            raise LibraryFileError(f"Invalid created_date: {value!r}") from None
    else:
        raise LibraryFileError(f"Invalid created_date: {value!r}")

    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone().replace(tzinfo=None)
        except (OverflowError, ValueError):
            raise LibraryFileError(f"Invalid created_date: {value!r}") from None
    return parsed


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text or None


def parse_library(data: Any) -> tuple[list[Book], list[Highlight]]:
    """Map an export document to books and highlights."""
    if not isinstance(data, dict) or not isinstance(data.get("books"), list):
        raise LibraryFileError("Library export must be an object with a 'books' list")

    books: list[Book] = []
    highlights: list[Highlight] = []
    for raw_book in data["books"]:
        try:
            asset_id = str(raw_book.get("asset_id") or "")
            book = Book(
                id=str(raw_book.get("id") or asset_id or uuid.uuid4()),
                title=str(raw_book["title"]),
                author=str(raw_book.get("author") or ""),
                asset_id=asset_id,
            )
            raw_highlights = raw_book.get("highlights") or []
            for raw in raw_highlights:
                highlights.append(
                    Highlight(
                        id=str(raw.get("id") or uuid.uuid4()),
                        content=str(raw.get("content") or ""),
                        note=_optional_text(raw.get("note")),
                        chapter=_optional_text(raw.get("chapter")),
                        created_date=parse_created_date(raw["created_date"]),
                        book=book,
                    )
                )
        except (AttributeError, KeyError, TypeError) as e:
            raise LibraryFileError(f"Malformed book entry: {e}") from e
        books.append(book)
    return books, highlights


def load_library_file(path: Path) -> tuple[list[Book], list[Highlight]]:
    """Read a JSON library export from disk."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise LibraryFileError(f"Cannot read library file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise LibraryFileError(f"Invalid JSON in library file {path}: {e}") from e
    return parse_library(data)


def populate_library(store: LibraryStore, settings: Settings, now: datetime) -> int:
    """Fill the store from the configured source.

    On any loading error the store is left empty and the error logged,
    so the app shows an empty state instead of failing.
    """
    try:
        if settings.library_path:
            books, highlights = load_library_file(Path(settings.library_path))
            source = settings.library_path
        elif settings.use_sample_data:
            books, highlights = sample_library(now)
            source = "sample data"
        else:
            books, highlights = [], []
            source = "nothing"
    except LibraryError:
        logger.exception("Failed to load library, continuing with empty state")
        store.clear()
        return 0

    count = store.replace(books, highlights)
    logger.info(f"Loaded {count} highlights from {len(books)} books ({source})")
    return count


# Global store instance
_store: LibraryStore | None = None


def init_library(settings: Settings | None = None) -> LibraryStore:
    """Create the global LibraryStore and populate it."""
    global _store
    s = settings or Settings.from_env()
    _store = LibraryStore()
    populate_library(_store, s, datetime.now())
    return _store


def get_library() -> LibraryStore:
    """Get the global LibraryStore. Must call init_library first."""
    if _store is None:
        raise RuntimeError("LibraryStore not initialized. Call init_library first.")
    return _store
