"""Split highlights into short "Words" and longer "Highlights".

The split is recomputed from the content on every call and never
stored on the highlight.
"""

from __future__ import annotations

from typing import Iterable

from noteecho.core.text_classifier import density_metric, is_primarily_cjk
from noteecho.providers.content_types import ContentType, Highlight

# Maximum length (inclusive) of a snippet that still counts as a Word
WORD_MAX_CJK_CHARS = 12  # ideographs are denser than latin words
WORD_MAX_WORDS = 4


def classify_content(content: str) -> ContentType:
    """Classify a single text as WORDS or HIGHLIGHTS."""
    text = content.strip()
    limit = WORD_MAX_CJK_CHARS if is_primarily_cjk(text) else WORD_MAX_WORDS
    if density_metric(text) <= limit:
        return ContentType.WORDS
    return ContentType.HIGHLIGHTS


def categorize(highlights: Iterable[Highlight]) -> tuple[list[Highlight], list[Highlight]]:
    """Partition highlights into (words, highlights).

    Every input appears in exactly one of the two lists, in its original
    relative order.
    """
    words: list[Highlight] = []
    passages: list[Highlight] = []
    for highlight in highlights:
        if classify_content(highlight.content) is ContentType.WORDS:
            words.append(highlight)
        else:
            passages.append(highlight)
    return words, passages


def count_by_content_type(highlights: Iterable[Highlight]) -> dict[ContentType, int]:
    words, passages = categorize(highlights)
    return {ContentType.WORDS: len(words), ContentType.HIGHLIGHTS: len(passages)}
