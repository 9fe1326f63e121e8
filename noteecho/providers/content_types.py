"""Provider-agnostic content types for books and highlights."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ContentType(str, Enum):
    """Display category of a highlight, derived from its text."""

    WORDS = "words"
    HIGHLIGHTS = "highlights"

    @property
    def display_name(self) -> str:
        return "Words" if self is ContentType.WORDS else "Highlights"

    @property
    def icon_name(self) -> str:
        return "textformat" if self is ContentType.WORDS else "highlighter"

    @classmethod
    def parse(cls, value: str) -> ContentType:
        """Parse a content type name, case-insensitive."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown content type: {value!r}") from None


@dataclass(frozen=True)
class Book:
    """A book that owns zero or more highlights."""

    id: str
    title: str
    author: str
    asset_id: str = ""
    highlight_count: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "asset_id": self.asset_id,
            "highlight_count": self.highlight_count,
        }


@dataclass(frozen=True)
class Highlight:
    """A highlighted passage, optionally annotated.

    ``book`` is a lookup reference only. It may be None when the
    highlight was never linked or its book has since been removed.
    """

    id: str
    content: str
    created_date: datetime
    note: str | None = None
    chapter: str | None = None
    book: Book | None = None

    @property
    def book_id(self) -> str | None:
        return self.book.id if self.book else None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "content": self.content,
            "note": self.note,
            "chapter": self.chapter,
            "created_date": self.created_date.isoformat(),
            "book_id": self.book_id,
            "book_title": self.book.title if self.book else None,
            "book_author": self.book.author if self.book else None,
        }
