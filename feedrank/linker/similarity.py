"""Headline word-overlap similarity shared by the scorer and the linker."""

import re

from feedrank.linker.constants import MIN_TITLE_WORD_LENGTH, TITLE_STOP_WORDS


_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def title_words(title: str) -> set[str]:
    """Lowercased, punctuation-stripped title words longer than two characters.

    Args:
        title: Headline text.

    Returns:
        Set of normalized words.
    """
    cleaned = _NON_ALNUM.sub("", title.lower())
    return {w for w in _WHITESPACE.split(cleaned) if len(w) > MIN_TITLE_WORD_LENGTH}


def significant_words(title: str) -> set[str]:
    """Title words with common stop words removed.

    Args:
        title: Headline text.

    Returns:
        Set of significant normalized words.
    """
    return {w for w in title_words(title) if w not in TITLE_STOP_WORDS}


def jaccard(a: set[str], b: set[str]) -> float:
    """Jaccard similarity of two word sets.

    Returns 0.0 when either set is empty.
    """
    if not a or not b:
        return 0.0
    intersection = len(a & b)
    return intersection / len(a | b)

