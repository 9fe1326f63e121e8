"""Script detection and length heuristics for highlight text."""

from __future__ import annotations

# CJK Unified Ideographs, Extension A, Extension B, Compatibility Ideographs
CJK_RANGES = (
    (0x4E00, 0x9FFF),
    (0x3400, 0x4DBF),
    (0x20000, 0x2A6DF),
    (0xF900, 0xFAFF),
)

# Share of CJK characters above which text counts as CJK
CJK_RATIO_THRESHOLD = 0.3


def is_cjk_character(char: str) -> bool:
    code = ord(char)
    return any(start <= code <= end for start, end in CJK_RANGES)


def cjk_character_count(text: str) -> int:
    """Count ideographic characters in text."""
    return sum(1 for char in text if is_cjk_character(char))


def is_primarily_cjk(text: str) -> bool:
    """True if more than 30% of the characters are CJK ideographs.

    The empty string is never CJK.
    """
    if not text:
        return False
    return cjk_character_count(text) / len(text) > CJK_RATIO_THRESHOLD


def word_count(text: str) -> int:
    """Count space-delimited tokens.

    Only the space character separates words; tabs and newlines inside
    the text do not. Runs of spaces do not produce empty tokens.
    """
    return sum(1 for token in text.strip().split(" ") if token)


def density_metric(text: str) -> int:
    """Length of text in its natural unit.

    CJK characters for primarily CJK text, words otherwise.
    """
    if is_primarily_cjk(text):
        return cjk_character_count(text)
    return word_count(text)
