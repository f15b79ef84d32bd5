"""Vocabulary building and "did you mean" spelling suggestions."""
import logging
from typing import Iterable, Optional

from bookmark_search.distance import similarity
from bookmark_search.models import Record, Vocabulary
from bookmark_search.phonetic import phonetic_hash
from bookmark_search.text import extract_words, normalize

logger = logging.getLogger(__name__)

MIN_TERM_LENGTH = 3
MAX_LENGTH_DIFFERENCE = 2
MIN_SUGGESTION_SIMILARITY = 0.6
PHONETIC_BONUS = 0.1


def build_vocabulary(records: Iterable[Record], version: int = 0) -> Vocabulary:
    """Collect the searchable terms of a record collection.

    Args:
        records: Records to index
        version: Snapshot version, bump it when the collection changes

    Returns:
        Vocabulary of normalized words with at least 3 characters
    """
    terms = []
    for record in records:
        for text in (record.title, record.description, record.category, record.url):
            terms.extend(word for word in extract_words(text) if len(word) >= MIN_TERM_LENGTH)

    vocabulary = Vocabulary.from_terms(terms, version=version)
    logger.debug("Built vocabulary v%d with %d terms", version, len(vocabulary))
    return vocabulary


def find_best_match(word: str, vocabulary: Vocabulary) -> Optional[str]:
    """Find the closest vocabulary term for a misspelled word.

    Words that sound alike (same phonetic hash) get a small bonus. A
    candidate must beat a similarity of 0.6 and every earlier candidate.

    Args:
        word: Normalized word to correct
        vocabulary: Terms to pick from

    Returns:
        The best correction, or None if the word is known or nothing is close
    """
    if word in vocabulary:
        return None

    best_match = None
    best_similarity = MIN_SUGGESTION_SIMILARITY
    word_hash = phonetic_hash(word)

    for candidate in vocabulary:
        if abs(len(word) - len(candidate)) > MAX_LENGTH_DIFFERENCE:
            continue

        score = similarity(word, candidate)
        if phonetic_hash(candidate) == word_hash:
            score += PHONETIC_BONUS

        if score > best_similarity:
            best_similarity = score
            best_match = candidate

    return best_match


def get_suggestion(query: str, vocabulary: Vocabulary) -> Optional[str]:
    """Suggest a corrected version of a query.

    Returns:
        The corrected phrase, or None when no word changed
    """
    words = extract_words(query)
    if not words:
        return None

    corrected = []
    changed = False
    for word in words:
        correction = find_best_match(word, vocabulary)
        if correction:
            corrected.append(correction)
            changed = True
        else:
            corrected.append(word)

    if not changed:
        return None

    suggestion = " ".join(corrected)
    if normalize(suggestion) == normalize(query):
        return None
    return suggestion
