"""Weighted relevance scoring of a record against a query.

Matching is strict: whole-query and per-term matches are anchored on word
boundaries, so plain substring containment earns nothing except for the
category. A record needs MIN_SCORE points to count as a result.
"""
import re
from typing import List

from bookmark_search.distance import is_fuzzy_match
from bookmark_search.models import Record, ScoredRecord
from bookmark_search.text import acronym

# Whole-query matches
EXACT_TITLE_FULL = 1000
WORD_BOUNDARY_TITLE = 400
EXACT_DESCRIPTION_WORD = 200
EXACT_CATEGORY = 400
CATEGORY_CONTAINS = 200
EXACT_URL_PART = 250
URL_CONTAINS = 100
ACRONYM_MATCH = 350

# Per-term matches
EXACT_TITLE_WORD = 500
PREFIX_TITLE = 300
FUZZY_TITLE = 150
WORD_BOUNDARY_DESC = 150

ALL_TERMS_MATCH = 200
PINNED_BOOST = 50

MIN_SCORE = 150

FUZZY_TITLE_THRESHOLD = 0.75
MIN_FUZZY_LENGTH = 4
MIN_URL_PREFIX_LENGTH = 3
MIN_TERM_LENGTH = 2
ACRONYM_QUERY_LENGTHS = range(2, 5)

_URL_SCHEME = re.compile(r"https?://(www\.)?")
_URL_SEPARATORS = re.compile(r"[/.\-_?&#=]")
_NON_WORD = re.compile(r"\W", re.ASCII)


def is_word_match(term: str, text: str) -> bool:
    """True if term occurs in text bounded by word edges on both sides."""
    return re.search(rf"\b{re.escape(term)}\b", text, re.IGNORECASE | re.ASCII) is not None


def is_word_start_match(term: str, text: str) -> bool:
    """True if term occurs in text starting at a word edge."""
    return re.search(rf"\b{re.escape(term)}", text, re.IGNORECASE | re.ASCII) is not None


def matches_acronym(query: str, text: str) -> bool:
    """True if the initials of text equal or start with the query letters."""
    initials = acronym(text)
    letters = _NON_WORD.sub("", query.lower())
    # A query of only punctuation has no letters to compare
    if not letters:
        return False
    return len(initials) >= 2 and initials.startswith(letters)


def url_parts(url: str) -> List[str]:
    """Split a URL into host and path segments of 2+ characters."""
    stripped = _URL_SCHEME.sub("", url.lower())
    return [part for part in _URL_SEPARATORS.split(stripped) if len(part) > 1]


def score(query: str, record: Record) -> ScoredRecord:
    """Score how well a record matches a query.

    Whole-query and per-term points are additive, so a one-word query that
    is a title word earns both the full-title and the per-term bonus.

    Args:
        query: Raw query text
        record: Record to score

    Returns:
        ScoredRecord with the total score and what matched
    """
    query_lower = query.lower().strip()
    terms = [term for term in query_lower.split() if len(term) >= MIN_TERM_LENGTH]

    result = ScoredRecord(record=record)
    matched_terms = result.matched_terms
    matched_fields = result.matched_fields
    total = 0

    if not query_lower:
        return result

    title_lower = record.title.lower()
    title_words = [word for word in title_lower.split() if len(word) > 1]
    description_lower = record.description.lower()
    category_lower = record.category.lower()
    parts = url_parts(record.url)

    # Whole query
    if is_word_match(query_lower, title_lower):
        total += EXACT_TITLE_FULL
        matched_fields.append("title-exact-word")
        matched_terms.append(query_lower)
    elif is_word_start_match(query_lower, title_lower):
        total += WORD_BOUNDARY_TITLE
        matched_fields.append("title-word-start")
        matched_terms.append(query_lower)

    if is_word_match(query_lower, description_lower):
        total += EXACT_DESCRIPTION_WORD
        matched_fields.append("description-exact-word")

    if category_lower == query_lower or is_word_match(query_lower, category_lower):
        total += EXACT_CATEGORY
        matched_fields.append("category-exact")
        matched_terms.append(query_lower)
    elif query_lower in category_lower:
        total += CATEGORY_CONTAINS
        matched_fields.append("category-contains")

    if query_lower in parts:
        total += EXACT_URL_PART
        matched_fields.append("url-exact-part")
        matched_terms.append(query_lower)
    elif len(query_lower) >= MIN_URL_PREFIX_LENGTH and any(p.startswith(query_lower) for p in parts):
        total += URL_CONTAINS
        matched_fields.append("url-starts")

    if len(query_lower) in ACRONYM_QUERY_LENGTHS and matches_acronym(query_lower, record.title):
        total += ACRONYM_MATCH
        matched_terms.append(f"{query_lower}(acronym)")
        matched_fields.append("title-acronym")

    # Individual terms
    terms_matched = 0
    for term in terms:
        term_matched = False

        if term in title_words:
            total += EXACT_TITLE_WORD
            term_matched = True
            if term not in matched_terms:
                matched_terms.append(term)
            matched_fields.append("title-word")
        elif any(word.startswith(term) for word in title_words):
            total += PREFIX_TITLE
            term_matched = True
            if term not in matched_terms:
                matched_terms.append(term)
            matched_fields.append("title-prefix")
        elif len(term) >= MIN_FUZZY_LENGTH:
            for word in title_words:
                if len(word) >= MIN_FUZZY_LENGTH and is_fuzzy_match(term, word, FUZZY_TITLE_THRESHOLD):
                    total += FUZZY_TITLE
                    term_matched = True
                    if word not in matched_terms:
                        matched_terms.append(word)
                    matched_fields.append("title-fuzzy")
                    break

        if is_word_match(term, description_lower):
            total += WORD_BOUNDARY_DESC
            term_matched = True
            matched_fields.append("desc-word")

        if any(part == term or part.startswith(term) for part in parts):
            total += URL_CONTAINS
            term_matched = True
            matched_fields.append("url-term")

        if term_matched:
            terms_matched += 1

    if len(terms) > 1 and terms_matched == len(terms):
        total += ALL_TERMS_MATCH
        matched_fields.append("all-terms")

    if record.is_pinned and total > 0:
        total += PINNED_BOOST

    result.score = total
    return result
