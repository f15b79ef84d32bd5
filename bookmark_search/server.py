"""MCP server exposing bookmark smart search."""
import json
import logging
from pathlib import Path
from typing import Any, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from bookmark_search.config import get_config
from bookmark_search.logging_config import setup_logging
from bookmark_search.models import Record, Vocabulary
from bookmark_search.ranker import HttpRanker, Ranker
from bookmark_search.recommender import explain_relationship, score_related
from bookmark_search.records_reader import read_chrome_records, read_json_records
from bookmark_search.search import SmartSearchEngine
from bookmark_search.spelling import build_vocabulary, get_suggestion
from bookmark_search.strategies import SearchMode, SearchUnavailableError, build_chain

logger = logging.getLogger(__name__)

SERVER_NAME = "bookmark-smart-search"

# Global state
_records_cache: Optional[List[Record]] = None
_vocabulary: Optional[Vocabulary] = None
_vocabulary_version = 0
_search_engine = SmartSearchEngine()


def _text(text: str) -> list[TextContent]:
    return [TextContent(type="text", text=text)]


def _json(data: Any) -> list[TextContent]:
    return _text(json.dumps(data, indent=2))


def load_records(records_path: Optional[Path] = None) -> List[Record]:
    """Load records, using cache if available.

    Args:
        records_path: Optional JSON export overriding the configured source

    Returns:
        List of records (empty if the source is missing or unreadable)
    """
    global _records_cache

    if _records_cache is None:
        config = get_config()
        path = records_path or config.records_file
        try:
            if path is not None:
                _records_cache = read_json_records(path)
            else:
                _records_cache = read_chrome_records(profile=config.chrome_profile)
            logger.info("Loaded %d records", len(_records_cache))
        except FileNotFoundError as e:
            logger.warning("Could not find records file: %s", e)
            _records_cache = []
        except (OSError, ValueError) as e:
            logger.error("Error loading records: %s", e)
            _records_cache = []

    return _records_cache


def get_vocabulary() -> Vocabulary:
    """Vocabulary snapshot for the currently loaded records."""
    global _vocabulary

    if _vocabulary is None:
        _vocabulary = build_vocabulary(load_records(), version=_vocabulary_version)

    return _vocabulary


def get_ranker() -> Optional[Ranker]:
    """Remote ranker, or None when no endpoint is configured."""
    ranker_config = get_config().ranker
    if not ranker_config.endpoint:
        return None
    return HttpRanker(ranker_config.endpoint, timeout=ranker_config.timeout)


def _find_record(record_id: str) -> Optional[Record]:
    return next((record for record in load_records() if record.id == record_id), None)


async def search_bookmarks_tool(
    query: str,
    mode: str = "local",
    suggest: bool = True,
    category: Optional[str] = None,
    limit: Optional[int] = None,
) -> list[TextContent]:
    """Tool handler for search_bookmarks.

    Args:
        query: Search query string
        mode: "local" or "remote"
        suggest: Whether to compute a spelling suggestion on few results
        category: Optional exact category to restrict the search to
        limit: Maximum number of records to return

    Returns:
        List of TextContent with the JSON search result
    """
    try:
        search_mode = SearchMode(mode)
    except ValueError:
        return _text(f"Error: unknown mode '{mode}' (expected 'local' or 'remote')")

    records = load_records()
    if not records:
        return _text("No bookmarks available. Please ensure the records source exists.")

    if category:
        records = [record for record in records if record.category == category]

    vocabulary = get_vocabulary() if suggest else None
    chain = build_chain(search_mode, _search_engine, get_ranker(), get_config().ranker)

    try:
        result = await chain.search(query, records, vocabulary)
    except SearchUnavailableError as e:
        return _text(f"Error: search unavailable ({e})")

    limit = limit or get_config().result_limit
    return _json({
        "query": result.query,
        "mode": search_mode.value,
        "total_matches": result.total_matches,
        "suggestion": result.suggestion,
        "results": [record.to_dict() for record in result.records[:limit]],
    })


async def quick_filter_tool(query: str, limit: Optional[int] = None) -> list[TextContent]:
    """Tool handler for quick_filter."""
    matches = _search_engine.quick_filter(query, load_records())
    limit = limit or get_config().result_limit
    return _json({
        "query": query,
        "total_matches": len(matches),
        "results": [record.to_dict() for record in matches[:limit]],
    })


async def related_bookmarks_tool(bookmark_id: str, limit: Optional[int] = None) -> list[TextContent]:
    """Tool handler for related_bookmarks."""
    target = _find_record(bookmark_id)
    if target is None:
        return _text(f"Bookmark not found: {bookmark_id}")

    limit = limit or get_config().related_limit
    related = score_related(target, load_records())[:limit]
    return _json({
        "bookmark": target.to_dict(),
        "related": [
            {
                **item.record.to_dict(),
                "score": item.score,
                "reasons": explain_relationship(target, item.record),
            }
            for item in related
        ],
    })


async def suggest_spelling_tool(query: str) -> list[TextContent]:
    """Tool handler for suggest_spelling."""
    suggestion = get_suggestion(query, get_vocabulary())
    return _json({"query": query, "suggestion": suggestion})


async def reload_bookmarks_tool() -> list[TextContent]:
    """Tool handler for reload_bookmarks: drop caches and rebuild the vocabulary."""
    global _records_cache, _vocabulary, _vocabulary_version

    _records_cache = None
    _vocabulary = None
    _vocabulary_version += 1

    records = load_records()
    vocabulary = get_vocabulary()
    return _json({
        "records": len(records),
        "vocabulary_terms": len(vocabulary),
        "vocabulary_version": vocabulary.version,
    })


def _limit_schema(description: str) -> dict:
    return {"type": "integer", "minimum": 1, "description": description}


def create_server() -> Server:
    """Create and configure the MCP server.

    Returns:
        Configured Server instance
    """
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List available tools."""
        return [
            Tool(
                name="search_bookmarks",
                description="Search bookmarks by relevance with typo tolerance. Returns ranked bookmarks and an optional 'did you mean' suggestion.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "query": {"type": "string", "description": "Search query"},
                        "mode": {
                            "type": "string",
                            "enum": [m.value for m in SearchMode],
                            "description": "'local' relevance search or 'remote' semantic ranking with local fallback",
                        },
                        "suggest": {"type": "boolean", "description": "Compute a spelling suggestion when few results match"},
                        "category": {"type": "string", "description": "Only search bookmarks in this category"},
                        "limit": _limit_schema("Maximum number of results"),
                    },
                    "required": ["query"],
                },
            ),
            Tool(
                name="quick_filter",
                description="Fast unranked filter for partial, as-you-type queries.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "query": {"type": "string", "description": "Partial query"},
                        "limit": _limit_schema("Maximum number of results"),
                    },
                    "required": ["query"],
                },
            ),
            Tool(
                name="related_bookmarks",
                description="Find bookmarks related to a given bookmark by category, domain and shared words.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "bookmark_id": {"type": "string", "description": "Id of the bookmark"},
                        "limit": _limit_schema("Maximum number of related bookmarks"),
                    },
                    "required": ["bookmark_id"],
                },
            ),
            Tool(
                name="suggest_spelling",
                description="Suggest a corrected query based on words that occur in the bookmarks.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "query": {"type": "string", "description": "Query to correct"},
                    },
                    "required": ["query"],
                },
            ),
            Tool(
                name="reload_bookmarks",
                description="Reload bookmarks from disk and rebuild the spelling vocabulary.",
                inputSchema={"type": "object", "properties": {}},
            ),
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: Any) -> list[TextContent]:
        """Handle tool calls."""
        arguments = arguments or {}

        if name == "search_bookmarks":
            query = arguments.get("query", "")
            return await search_bookmarks_tool(
                query,
                mode=arguments.get("mode", "local"),
                suggest=arguments.get("suggest", True),
                category=arguments.get("category"),
                limit=arguments.get("limit"),
            )
        elif name == "quick_filter":
            return await quick_filter_tool(arguments.get("query", ""), limit=arguments.get("limit"))
        elif name == "related_bookmarks":
            bookmark_id = arguments.get("bookmark_id", "")
            if not bookmark_id:
                return _text("Error: 'bookmark_id' parameter is required")
            return await related_bookmarks_tool(bookmark_id, limit=arguments.get("limit"))
        elif name == "suggest_spelling":
            query = arguments.get("query", "")
            if not query:
                return _text("Error: 'query' parameter is required")
            return await suggest_spelling_tool(query)
        elif name == "reload_bookmarks":
            return await reload_bookmarks_tool()
        else:
            raise ValueError(f"Unknown tool: {name}")

    return server


async def main():
    """Main entry point for the MCP server."""
    setup_logging(get_config().log_level)
    server = create_server()

    async with stdio_server() as (read_stream, write_stream):
        initialization_options = server.create_initialization_options()
        await server.run(read_stream, write_stream, initialization_options)
