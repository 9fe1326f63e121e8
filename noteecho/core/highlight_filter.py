"""Filter pipeline producing the displayed highlight list.

Stages run in a fixed order:
1. Content type: keep Words or Highlights (see categorizer.py)
2. Book: keep highlights of the selected book
3. Search: case- and accent-insensitive substring match
4. Sort: by created_date, newest or oldest first (stable)

All functions are pure. They never mutate their inputs and return new
lists, so they can be called on every UI state change.
"""

from __future__ import annotations

import unicodedata
from typing import Iterable, Sequence

from noteecho.core.categorizer import categorize
from noteecho.providers.content_types import Book, ContentType, Highlight


def fold_text(text: str) -> str:
    """Fold text for comparison.

    - Unicode NFKD decomposition
    - Drop combining marks (accents)
    - Case fold
    """
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.casefold()


def matches_search(highlight: Highlight, search_text: str) -> bool:
    """True if content, note or book title contains search_text."""
    needle = fold_text(search_text)
    if not needle:
        return False
    fields = [highlight.content, highlight.note]
    if highlight.book is not None:
        fields.append(highlight.book.title)
    return any(needle in fold_text(value) for value in fields if value)


def filter_by_book(highlights: Iterable[Highlight], selected_book: Book | None) -> list[Highlight]:
    if selected_book is None:
        return list(highlights)
    return [h for h in highlights if h.book_id == selected_book.id]


def filter_by_search_text(highlights: Iterable[Highlight], search_text: str) -> list[Highlight]:
    if not search_text:
        return list(highlights)
    return [h for h in highlights if matches_search(h, search_text)]


def sort_by_date(highlights: Iterable[Highlight], newest: bool) -> list[Highlight]:
    # sorted() is stable for reverse=True as well, so ties keep their order
    return sorted(highlights, key=lambda h: h.created_date, reverse=newest)


def filter_highlights(
    all_highlights: Sequence[Highlight],
    content_type: ContentType,
    selected_book: Book | None,
    search_text: str,
    sort_by_newest: bool,
) -> list[Highlight]:
    """Run the full pipeline over the current highlight collection.

    Args:
        all_highlights: Every highlight in the library
        content_type: Which category to show
        selected_book: Only show this book's highlights (None = all books)
        search_text: Substring to search for (empty = no search)
        sort_by_newest: Newest first if True, oldest first otherwise

    Returns:
        New list of matching highlights in display order
    """
    words, passages = categorize(all_highlights)
    content = words if content_type is ContentType.WORDS else passages

    content = filter_by_book(content, selected_book)
    content = filter_by_search_text(content, search_text)
    return sort_by_date(content, newest=sort_by_newest)


def filtered_highlights(
    all_highlights: Sequence[Highlight],
    selected_book: Book | None,
    search_text: str,
    sort_by_newest: bool,
) -> list[Highlight]:
    """Legacy entry point that only returns regular highlights."""
    return filter_highlights(
        all_highlights,
        content_type=ContentType.HIGHLIGHTS,
        selected_book=selected_book,
        search_text=search_text,
        sort_by_newest=sort_by_newest,
    )


def books_with_highlights(books: Iterable[Book]) -> list[Book]:
    """Books that still own at least one highlight."""
    return [book for book in books if book.highlight_count > 0]


def resolve_selected_book(books: Iterable[Book], selected_book: Book | None) -> Book | None:
    """Drop a book selection that no longer has highlights.

    Returns None (all books) when the selected book was deleted or
    emptied, otherwise the current record for the selected book.
    """
    if selected_book is None:
        return None
    for book in books_with_highlights(books):
        if book.id == selected_book.id:
            return book
    return None
