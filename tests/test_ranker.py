"""Tests for the remote ranker client."""
import json
import httpx
import pytest

from bookmark_search.ranker import HttpRanker, RankerError, extract_ids

ENDPOINT = "https://ranker.test/api/ai-search"
UUID = "123e4567-e89b-12d3-a456-426614174000"


def _ranker(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpRanker(ENDPOINT, client=client)


class TestExtractIds:
    def test_list(self):
        assert extract_ids(["a", "b", 3]) == ["a", "b"]

    def test_object_with_ids(self):
        assert extract_ids({"ids": ["a", "b"]}) == ["a", "b"]

    def test_object_with_other_key(self):
        assert extract_ids({"results": ["x", "y"]}) == ["x", "y"]

    def test_fenced_text(self):
        assert extract_ids('```json\n["a", "b"]\n```') == ["a", "b"]

    def test_text_with_surrounding_prose(self):
        assert extract_ids('Here you go: {"ids": ["a"]} hope it helps') == ["a"]

    def test_uuids_scraped_as_last_resort(self):
        text = f"Best match is {UUID}, and again {UUID}."
        assert extract_ids(text) == [UUID]

    def test_unparseable_text(self):
        with pytest.raises(RankerError):
            extract_ids("no ids here")

    def test_unexpected_type(self):
        with pytest.raises(RankerError):
            extract_ids(42)


class TestHttpRanker:
    @pytest.mark.asyncio
    async def test_sends_query_and_candidates(self):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"ids": ["2", "1"]})

        ranker = _ranker(handler)
        ids = await ranker.rank("react", [{"id": "1"}, {"id": "2"}])

        assert ids == ["2", "1"]
        assert seen["body"] == {"query": "react", "websites": [{"id": "1"}, {"id": "2"}]}

    @pytest.mark.asyncio
    async def test_rate_limit(self):
        ranker = _ranker(lambda request: httpx.Response(429, json={"error": "slow down"}))
        with pytest.raises(RankerError) as exc_info:
            await ranker.rank("react", [])
        assert exc_info.value.rate_limited

    @pytest.mark.asyncio
    async def test_server_error(self):
        ranker = _ranker(lambda request: httpx.Response(500, json={"error": "boom"}))
        with pytest.raises(RankerError) as exc_info:
            await ranker.rank("react", [])
        assert not exc_info.value.rate_limited

    @pytest.mark.asyncio
    async def test_error_in_body(self):
        ranker = _ranker(lambda request: httpx.Response(200, json={"error": "no key configured"}))
        with pytest.raises(RankerError, match="no key configured"):
            await ranker.rank("react", [])

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(RankerError, match="request failed"):
            await _ranker(handler).rank("react", [])

    @pytest.mark.asyncio
    async def test_plain_text_body(self):
        ranker = _ranker(lambda request: httpx.Response(200, text='```\n["a"]\n```'))
        assert await ranker.rank("react", []) == ["a"]
