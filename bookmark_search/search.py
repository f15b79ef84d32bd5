"""Search engine module for bookmarks."""
import logging
import re
from typing import List, Optional, Protocol, Sequence

from bookmark_search.models import Record, ScoredRecord, SearchResult, Vocabulary
from bookmark_search.scoring import MIN_SCORE, score
from bookmark_search.spelling import get_suggestion
from bookmark_search.text import acronym, extract_words, normalize

logger = logging.getLogger(__name__)

# Below this many results a spelling suggestion is attempted
SUGGESTION_RESULT_THRESHOLD = 3

QUICK_ACRONYM_MAX_LENGTH = 4

_QUICK_SEPARATORS = re.compile(r"[\s\-_/.]+")


class SearchEngine(Protocol):
    """Protocol for search engines to allow extensibility."""

    def search(
        self,
        query: str,
        records: Sequence[Record],
        vocabulary: Optional[Vocabulary] = None,
    ) -> SearchResult:
        """Search records based on query.

        Args:
            query: Search query string
            records: Records to search
            vocabulary: Optional snapshot used for spelling suggestions

        Returns:
            SearchResult with matching records, sorted by relevance
        """
        ...


def rank(query: str, records: Sequence[Record]) -> List[ScoredRecord]:
    """Score every record and keep those above the threshold, best first.

    Equal scores keep their input order.
    """
    scored = [score(query, record) for record in records]
    kept = [item for item in scored if item.score >= MIN_SCORE]
    kept.sort(key=lambda item: item.score, reverse=True)
    return kept


def search(
    query: str,
    records: Sequence[Record],
    vocabulary: Optional[Vocabulary] = None,
) -> SearchResult:
    """Search records with weighted relevance scoring.

    Pass a vocabulary only when spelling suggestions are wanted; the
    corrector runs only when fewer than 3 records match.

    Args:
        query: Search query string
        records: Records to search
        vocabulary: Optional snapshot used for "did you mean" suggestions

    Returns:
        SearchResult with matching records sorted by score (highest first)
    """
    trimmed = query.strip()
    if not trimmed:
        return SearchResult(records=list(records), suggestion=None, query="", total_matches=len(records))

    ranked = rank(trimmed, records)

    suggestion = None
    if vocabulary is not None and len(ranked) < SUGGESTION_RESULT_THRESHOLD:
        suggestion = get_suggestion(trimmed, vocabulary)
        if suggestion and normalize(suggestion) == normalize(trimmed):
            suggestion = None

    logger.debug("Query %r matched %d of %d records", trimmed, len(ranked), len(records))

    return SearchResult(
        records=[item.record for item in ranked],
        suggestion=suggestion,
        query=trimmed,
        total_matches=len(ranked),
    )


def quick_filter(query: str, records: Sequence[Record]) -> List[Record]:
    """Cheap as-you-type filter with no scoring, threshold or reordering.

    Args:
        query: Partial query text
        records: Records to filter

    Returns:
        Records that loosely match, in input order
    """
    needle = query.strip().lower()
    if not needle:
        return list(records)

    if len(needle) == 1:
        return [
            record for record in records
            if any(
                word.startswith(needle)
                for word in extract_words(" ".join([record.title, record.description, record.category]))
            )
        ]

    matches = []
    for record in records:
        searchable = " ".join([record.title, record.description, record.category, record.url]).lower()

        if needle in searchable:
            matches.append(record)
        elif any(word.startswith(needle) for word in _QUICK_SEPARATORS.split(searchable)):
            matches.append(record)
        elif len(needle) <= QUICK_ACRONYM_MAX_LENGTH and acronym(record.title).startswith(needle):
            matches.append(record)

    return matches


class SmartSearchEngine:
    """Relevance search engine with typo-tolerant suggestions."""

    def search(
        self,
        query: str,
        records: Sequence[Record],
        vocabulary: Optional[Vocabulary] = None,
    ) -> SearchResult:
        return search(query, records, vocabulary)

    def quick_filter(self, query: str, records: Sequence[Record]) -> List[Record]:
        return quick_filter(query, records)
