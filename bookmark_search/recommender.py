"""Content-based "related bookmarks" recommender.

Scoring signals:
  - Same category: +5
  - Same domain (leading "www." ignored): +3
  - Title word overlap: +0..4 (Jaccard similarity, rounded)
  - Description word overlap: +0..3 (only when the target has a description)

Everything is computed locally; identical input gives identical output.
"""
import math
import re
from typing import AbstractSet, List, Sequence
from urllib.parse import urlparse

from bookmark_search.models import Record, ScoredRecord

CATEGORY_POINTS = 5
DOMAIN_POINTS = 3
TITLE_POINTS = 4
DESCRIPTION_POINTS = 3

DEFAULT_LIMIT = 4
MAX_COMMON_KEYWORDS = 3

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")


def get_domain(url: str) -> str:
    """Hostname of a URL without a leading "www.", or "" if there is none."""
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return ""
    if not hostname:
        return ""
    if hostname.startswith("www."):
        hostname = hostname[len("www."):]
    return hostname


def _ordered_tokens(text: str) -> List[str]:
    if not text:
        return []
    words = _NON_ALNUM.sub(" ", text.lower()).split()
    return list(dict.fromkeys(word for word in words if len(word) > 2))


def tokenize(text: str) -> AbstractSet[str]:
    """Lowercased alphanumeric words longer than two characters."""
    return set(_ordered_tokens(text))


def jaccard(a: AbstractSet[str], b: AbstractSet[str]) -> float:
    """|a & b| / |a | b|, or 0.0 when both sets are empty."""
    if not a and not b:
        return 0.0
    return len(a & b) / len(a | b)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_related(target: Record, records: Sequence[Record]) -> List[ScoredRecord]:
    """Score every other record against target.

    Returns:
        Records with a positive score, best first (ties keep input order).
        matched_fields holds short reason tags.
    """
    target_domain = get_domain(target.url)
    target_title = tokenize(target.title)
    target_description = tokenize(target.description)

    scored = []
    for record in records:
        if record.id == target.id:
            continue

        total = 0
        reasons = []

        if record.category == target.category:
            total += CATEGORY_POINTS
            reasons.append("same-category")

        if target_domain and get_domain(record.url) == target_domain:
            total += DOMAIN_POINTS
            reasons.append("same-domain")

        title_points = _round_half_up(jaccard(target_title, tokenize(record.title)) * TITLE_POINTS)
        if title_points > 0:
            total += title_points
            reasons.append("similar-title")

        if target_description:
            description_points = _round_half_up(
                jaccard(target_description, tokenize(record.description)) * DESCRIPTION_POINTS
            )
            if description_points > 0:
                total += description_points
                reasons.append("similar-description")

        if total > 0:
            scored.append(ScoredRecord(record=record, score=total, matched_fields=reasons))

    scored.sort(key=lambda item: item.score, reverse=True)
    return scored


def find_related(target: Record, records: Sequence[Record], limit: int = DEFAULT_LIMIT) -> List[Record]:
    """Find the records most related to target.

    Args:
        target: Record to find neighbours for (never included in the output)
        records: Collection to pick from
        limit: Maximum number of records to return

    Returns:
        Up to limit related records, most related first
    """
    return [item.record for item in score_related(target, records)[:max(limit, 0)]]


def explain_relationship(target: Record, related: Record) -> List[str]:
    """Human-readable reasons why two records are related."""
    reasons = []

    if related.category == target.category:
        reasons.append(f"Same category: {target.category}")

    target_domain = get_domain(target.url)
    if target_domain and get_domain(related.url) == target_domain:
        reasons.append(f"Same website: {target_domain}")

    related_tokens = tokenize(related.title)
    common = [word for word in _ordered_tokens(target.title) if word in related_tokens]
    if common:
        reasons.append(f"Common keywords: {', '.join(common[:MAX_COMMON_KEYWORDS])}")

    return reasons or ["Potentially related content"]
