"""Daily Echo selection.

The featured highlight changes once per calendar day. The pick is a
pure function of the date and the ordered collection, so callers must
pass the same ordering on every call (see canonical_order).
"""

from __future__ import annotations

import random
from datetime import date
from typing import Iterable, Sequence

from noteecho.providers.content_types import Highlight


def daily_seed(today: date, count: int) -> int:
    """Seed for a day: YYYYMMDD plus the collection size."""
    return today.year * 10000 + today.month * 100 + today.day + count


def canonical_order(highlights: Iterable[Highlight]) -> list[Highlight]:
    """Newest first, stable for equal dates."""
    return sorted(highlights, key=lambda h: h.created_date, reverse=True)


def daily_highlight(highlights: Sequence[Highlight], today: date) -> Highlight | None:
    """Return today's highlight, or None for an empty collection."""
    if not highlights:
        return None
    count = len(highlights)
    index = abs(daily_seed(today, count)) % count
    return highlights[index]


def random_highlight_excluding(
    highlights: Sequence[Highlight],
    exclude_id: str | None,
    rng: random.Random | None = None,
) -> Highlight | None:
    """Pick a random highlight other than exclude_id.

    If excluding leaves nothing (a single highlight was excluded), the
    pick falls back to the full collection and may return the excluded
    highlight again.
    """
    if not highlights:
        return None
    rng = rng or random.Random()

    if exclude_id is None:
        return rng.choice(highlights)

    available = [h for h in highlights if h.id != exclude_id]
    if not available:
        return rng.choice(highlights)
    return rng.choice(available)
