"""Search modes and the fallback chain around the local engine.

A remote (semantic) search is only ever an upgrade: every failure falls
back to the local relevance search with the original query.
"""
import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Sequence

from bookmark_search.config import RankerConfig
from bookmark_search.models import Record, SearchResult, Vocabulary
from bookmark_search.ranker import Ranker, RankerError
from bookmark_search.search import SearchEngine, SmartSearchEngine

logger = logging.getLogger(__name__)


class SearchMode(str, Enum):
    LOCAL = "local"
    REMOTE = "remote"


class StrategyError(RuntimeError):
    """A search strategy could not produce a result."""


class SearchUnavailableError(RuntimeError):
    """Every strategy in a chain failed."""


class SearchStrategy(Protocol):
    name: str

    async def run(
        self,
        query: str,
        records: Sequence[Record],
        vocabulary: Optional[Vocabulary] = None,
    ) -> SearchResult:
        ...


class LocalStrategy:
    """Local relevance search."""

    name = "local"

    def __init__(self, engine: Optional[SearchEngine] = None):
        self.engine = engine or SmartSearchEngine()

    async def run(
        self,
        query: str,
        records: Sequence[Record],
        vocabulary: Optional[Vocabulary] = None,
    ) -> SearchResult:
        return self.engine.search(query, records, vocabulary)


class RemoteStrategy:
    """Semantic ranking by a remote service, pre-filtered by the local engine."""

    name = "remote"

    def __init__(
        self,
        ranker: Ranker,
        engine: Optional[SearchEngine] = None,
        config: Optional[RankerConfig] = None,
    ):
        self.ranker = ranker
        self.engine = engine or SmartSearchEngine()
        self.config = config or RankerConfig()

    def build_candidates(self, query: str, records: Sequence[Record]) -> List[Record]:
        """Pick the records worth sending to the ranker.

        Uses the local ranking to bound request size; when nothing scores,
        the first records of the collection are sent instead.
        """
        limit = self.config.prefilter_candidates
        ranked = self.engine.search(query, records).records
        if not ranked:
            return list(records[:limit])
        return ranked[:limit]

    def make_context(self, candidates: Sequence[Record]) -> List[Dict[str, Any]]:
        snippet = self.config.description_snippet
        return [
            {
                "id": record.id,
                "title": record.title,
                "url": record.url,
                "category": record.category,
                "description": record.description[:snippet],
            }
            for record in candidates
        ]

    def resolve(self, ids: Sequence[str], records: Sequence[Record]) -> List[Record]:
        """Map ranked ids back to records, skipping unknown and repeated ids."""
        by_id = {record.id: record for record in records}
        seen = set()
        matched = []

        for record_id in ids:
            if record_id in seen or record_id not in by_id:
                continue
            seen.add(record_id)
            matched.append(by_id[record_id])
            if len(matched) >= self.config.max_results:
                break

        return matched

    async def run(
        self,
        query: str,
        records: Sequence[Record],
        vocabulary: Optional[Vocabulary] = None,
    ) -> SearchResult:
        trimmed = query.strip()
        if not trimmed:
            return SearchResult(records=list(records), query="", total_matches=len(records))
        if not records:
            return SearchResult(records=[], query=trimmed)

        candidates = self.build_candidates(trimmed, records)
        logger.info(
            "Remote search for %r (%d records, %d candidates sent)",
            trimmed, len(records), len(candidates),
        )

        ids = await self.ranker.rank(trimmed, self.make_context(candidates))
        matched = self.resolve(ids, records)
        if not matched:
            raise StrategyError("Ranker returned no usable ids")

        return SearchResult(records=matched, query=trimmed, total_matches=len(matched))


class FallbackChain:
    """Try strategies in order and return the first successful result."""

    def __init__(self, strategies: Sequence[SearchStrategy]):
        if not strategies:
            raise ValueError("FallbackChain needs at least one strategy")
        self.strategies = list(strategies)

    async def search(
        self,
        query: str,
        records: Sequence[Record],
        vocabulary: Optional[Vocabulary] = None,
    ) -> SearchResult:
        """Run the chain.

        Raises:
            SearchUnavailableError: If every strategy failed
        """
        errors = []
        for strategy in self.strategies:
            logger.info("Trying %s search strategy", strategy.name)
            try:
                result = await strategy.run(query, records, vocabulary)
            except (StrategyError, RankerError) as e:
                logger.warning("%s search strategy failed: %s", strategy.name, e)
                errors.append(f"{strategy.name}: {e}")
                continue
            logger.info("%s search strategy returned %d records", strategy.name, len(result.records))
            return result

        logger.error("All search strategies failed: %s", "; ".join(errors))
        raise SearchUnavailableError("; ".join(errors))


def build_chain(
    mode: SearchMode,
    engine: Optional[SearchEngine] = None,
    ranker: Optional[Ranker] = None,
    config: Optional[RankerConfig] = None,
) -> FallbackChain:
    """Build the strategy chain for a search mode.

    REMOTE falls back to LOCAL; REMOTE without a ranker is plain LOCAL.
    """
    engine = engine or SmartSearchEngine()
    local = LocalStrategy(engine)

    if mode == SearchMode.REMOTE and ranker is not None:
        return FallbackChain([RemoteStrategy(ranker, engine, config), local])
    return FallbackChain([local])
