"""Client for the remote semantic ranking service.

The service receives a query plus a compact list of candidate bookmarks and
answers with the ids of the relevant ones, most relevant first:

    POST <endpoint>  {"query": "...", "websites": [{"id", "title", ...}]}
    200              {"ids": ["id1", "id2"]}

Responses are not always clean JSON, so extract_ids() also accepts raw
model text.
"""
import json
import logging
import re
from typing import Any, Dict, List, Optional, Protocol, Sequence

import httpx

logger = logging.getLogger(__name__)

_CODE_FENCE_START = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_CODE_FENCE_END = re.compile(r"\s*```$")
_JSON_BLOCK = re.compile(r"\{[\s\S]*\}|\[[\s\S]*\]")
_UUID = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE)


class RankerError(RuntimeError):
    """The remote ranker could not produce a usable answer."""

    def __init__(self, message: str, rate_limited: bool = False):
        super().__init__(message)
        self.rate_limited = rate_limited


class Ranker(Protocol):
    """Anything that turns a query and candidate contexts into ranked ids."""

    async def rank(self, query: str, candidates: Sequence[Dict[str, Any]]) -> List[str]:
        ...


def _ids_from_parsed(parsed: Any) -> Optional[List[str]]:
    if isinstance(parsed, list):
        return [value for value in parsed if isinstance(value, str)]
    if isinstance(parsed, dict):
        ids = parsed.get("ids")
        if isinstance(ids, list):
            return [value for value in ids if isinstance(value, str)]
        # Some answers wrap the list under another key
        found = []
        for value in parsed.values():
            if isinstance(value, str):
                found.append(value)
            elif isinstance(value, list):
                found.extend(v for v in value if isinstance(v, str))
        return found
    return None


def extract_ids(payload: Any) -> List[str]:
    """Pull a list of ids out of a ranker response.

    Args:
        payload: Decoded JSON (list or object) or raw response text

    Returns:
        Ids in the order given

    Raises:
        RankerError: If nothing resembling an id list can be found
    """
    if not isinstance(payload, str):
        ids = _ids_from_parsed(payload)
        if ids is None:
            raise RankerError(f"Unexpected ranker response type: {type(payload).__name__}")
        return ids

    text = payload.strip()
    if text.startswith("```"):
        text = _CODE_FENCE_END.sub("", _CODE_FENCE_START.sub("", text))

    block = _JSON_BLOCK.search(text)
    if block:
        try:
            ids = _ids_from_parsed(json.loads(block.group(0)))
        except json.JSONDecodeError:
            ids = None
        if ids is not None:
            return ids

    # Last resort: bookmark ids are UUIDs
    uuids = list(dict.fromkeys(_UUID.findall(payload)))
    if uuids:
        logger.debug("Extracted %d UUIDs from unstructured ranker text", len(uuids))
        return uuids

    raise RankerError("Could not parse ranker response")


class HttpRanker:
    """Ranker backed by an HTTP endpoint."""

    def __init__(self, endpoint: str, timeout: float = 15.0, client: Optional[httpx.AsyncClient] = None):
        """Initialize the ranker.

        Args:
            endpoint: URL accepting the ranking POST request
            timeout: Request timeout in seconds
            client: Optional preconfigured client (used as-is, not closed)
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self._client = client

    async def _post(self, client: httpx.AsyncClient, body: Dict[str, Any]) -> httpx.Response:
        return await client.post(self.endpoint, json=body)

    async def rank(self, query: str, candidates: Sequence[Dict[str, Any]]) -> List[str]:
        """Ask the service to rank candidates.

        Raises:
            RankerError: On transport errors, HTTP errors, rate limiting
                or an unusable body
        """
        body = {"query": query, "websites": list(candidates)}

        try:
            if self._client is not None:
                response = await self._post(self._client, body)
            else:
                async with httpx.AsyncClient(
                    timeout=self.timeout,
                    headers={"User-Agent": "BookmarkSmartSearch/1.0 (semantic ranking)"},
                ) as client:
                    response = await self._post(client, body)
        except httpx.HTTPError as e:
            raise RankerError(f"Ranker request failed: {e}") from e

        if response.status_code == 429:
            raise RankerError("Ranker rate limit exceeded", rate_limited=True)
        if response.is_error:
            raise RankerError(f"Ranker returned HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError:
            return extract_ids(response.text)

        if isinstance(data, dict) and data.get("error"):
            raise RankerError(f"Ranker error: {data['error']}")

        return extract_ids(data)
