from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import date, datetime

from fastapi import FastAPI, HTTPException

from noteecho.core.categorizer import count_by_content_type
from noteecho.core.daily_selection import canonical_order, daily_highlight, random_highlight_excluding
from noteecho.core.highlight_filter import books_with_highlights, filter_highlights, resolve_selected_book
from noteecho.core.library import get_library, init_library, populate_library
from noteecho.core.notifications import NotificationSettings, plan_daily_notification
from noteecho.core.settings import Settings
from noteecho.providers.content_types import ContentType

logger = logging.getLogger(__name__)

SORT_ORDERS = {"newest": True, "oldest": False}

_notification_settings: NotificationSettings | None = None


def _startup() -> None:
    global _notification_settings
    s = Settings.from_env()
    logging.basicConfig(level=s.log_level)
    init_library(s)
    _notification_settings = NotificationSettings(
        is_enabled=s.notifications_enabled,
    )
    _notification_settings.update_time(s.notification_hour, s.notification_minute)


@asynccontextmanager
async def lifespan(_: FastAPI):
    _startup()
    yield


app = FastAPI(title="noteecho", lifespan=lifespan)


def get_notification_settings() -> NotificationSettings:
    if _notification_settings is None:
        raise RuntimeError("Notification settings not initialized. Call _startup first.")
    return _notification_settings


@app.get("/api/content-types")
def api_content_types():
    """List content types with the number of highlights in each."""
    counts = count_by_content_type(get_library().highlights())
    return [
        {
            "name": ct.value,
            "display_name": ct.display_name,
            "icon": ct.icon_name,
            "count": counts[ct],
        }
        for ct in ContentType
    ]


@app.get("/api/books")
def api_books():
    """Books that have at least one highlight, sorted by title."""
    return [book.to_dict() for book in books_with_highlights(get_library().books())]


@app.delete("/api/books/{book_id}")
def api_delete_book(book_id: str):
    """Delete a book together with its highlights."""
    if not get_library().delete_book(book_id):
        raise HTTPException(status_code=404, detail="Book not found")
    logger.info(f"Deleted book {book_id} with its highlights")
    return {"deleted": book_id}


@app.get("/api/highlights")
def api_highlights(
    content_type: str = "highlights",
    book_id: str | None = None,
    q: str = "",
    sort: str = "newest",
):
    """Filtered highlight list for the current selection.

    Args:
        content_type: 'words' or 'highlights'
        book_id: Only show highlights of this book
        q: Search text (content, note, book title)
        sort: 'newest' or 'oldest'

    A book that no longer has highlights resets the filter to all books;
    the response reports the book id that was actually applied.
    """
    try:
        ct = ContentType.parse(content_type)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    if sort not in SORT_ORDERS:
        raise HTTPException(status_code=422, detail=f"Unknown sort order: {sort!r}")

    library = get_library()
    selected = library.get_book(book_id) if book_id else None
    selected = resolve_selected_book(library.books(), selected)

    rows = filter_highlights(
        library.highlights(),
        content_type=ct,
        selected_book=selected,
        search_text=q,
        sort_by_newest=SORT_ORDERS[sort],
    )
    return {
        "content_type": ct.value,
        "book_id": selected.id if selected else None,
        "q": q,
        "sort": sort,
        "count": len(rows),
        "highlights": [h.to_dict() for h in rows],
    }


@app.get("/api/daily")
def api_daily(exclude_id: str | None = None, today: date | None = None):
    """Today's Daily Echo.

    With exclude_id, a regenerated random pick that avoids the given
    highlight when any other is available.
    """
    highlights = canonical_order(get_library().highlights())
    if exclude_id is not None:
        highlight = random_highlight_excluding(highlights, exclude_id)
    else:
        highlight = daily_highlight(highlights, today or date.today())
    return {"highlight": highlight.to_dict() if highlight else None}


@app.get("/api/notification")
def api_notification(today: date | None = None):
    """Payload of today's daily notification, or null."""
    settings = get_notification_settings()
    notification = plan_daily_notification(get_library().highlights(), settings, today or date.today())
    return {
        "settings": settings.to_dict(),
        "notification": notification.to_dict() if notification else None,
    }


@app.post("/api/library/reload")
def api_library_reload():
    """Reload the library from the configured source."""
    count = populate_library(get_library(), Settings.from_env(), datetime.now())
    return {"highlights": count, "books": len(get_library().books())}
