"""Text normalization helpers for search.

All functions are pure. Word characters follow the ASCII definition
(letters, digits and underscore) so that word boundaries behave the same
for every input.
"""
import re
from typing import List

_NON_WORD = re.compile(r"[^\w\s]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")

# Checked in this order; the longest applicable suffix wins.
STEM_SUFFIXES = (
    "ing", "ed", "es", "s", "tion", "ment", "ness", "able",
    "ible", "ful", "less", "ly", "er", "or", "ist", "ism",
)


def normalize(text: str) -> str:
    """Normalize text for comparison.

    Lowercases, replaces punctuation with spaces, collapses whitespace and trims.

    Examples:
        >>> normalize("Visual Studio-Code!")
        'visual studio code'
    """
    if not text:
        return ""
    text = _NON_WORD.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def extract_words(text: str) -> List[str]:
    """Split normalized text into words, dropping single characters."""
    normalized = normalize(text)
    if not normalized:
        return []
    return [word for word in normalized.split(" ") if len(word) > 1]


def stem(word: str) -> str:
    """Strip a common English suffix from a word.

    A suffix is only removed when the word is longer than the suffix plus
    two characters, so short words are returned unchanged (lowercased).

    Examples:
        >>> stem("Running")
        'runn'
        >>> stem("kindness")
        'kind'
    """
    lowered = word.lower()
    best = ""
    for suffix in STEM_SUFFIXES:
        if len(lowered) > len(suffix) + 2 and lowered.endswith(suffix) and len(suffix) > len(best):
            best = suffix
    if not best:
        return lowered
    return lowered[:-len(best)]


def acronym(text: str) -> str:
    """First letter of every extracted word, e.g. "Visual Studio Code" -> "vsc"."""
    return "".join(word[0] for word in extract_words(text))


def ngrams(word: str, n: int = 2) -> List[str]:
    """All contiguous substrings of length n (the word itself if shorter)."""
    if len(word) < n:
        return [word]
    return [word[i:i + n] for i in range(len(word) - n + 1)]
