"""Tests for GeoResolver lookups."""
import httpx
import pytest

from models.geo_models import Coordinate, PlaceSuggestion
from services.maps.geocoder import GeoResolver


class CountingHandler:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, response: httpx.Response):
        self.response = response
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


BOSTON_HIT = {"display_name": "Boston, Suffolk County, Massachusetts, United States", "lat": "42.3554334", "lon": "-71.060511"}


@pytest.mark.asyncio
class TestResolveOne:
    async def test_returns_first_candidate(self, mock_http_client):
        handler = CountingHandler(httpx.Response(200, json=[BOSTON_HIT]))
        async with mock_http_client(handler) as client:
            result = await GeoResolver(client, user_agent="Wandermap/1.0").resolve_one("Boston, MA")

        assert result == Coordinate(lat=42.3554334, lng=-71.060511)
        request = handler.requests[0]
        assert request.url.path == "/search"
        assert request.url.params["q"] == "Boston, MA"
        assert request.url.params["limit"] == "1"
        assert request.url.params["format"] == "json"
        assert request.headers["User-Agent"] == "Wandermap/1.0"

    async def test_empty_input_makes_no_request(self, mock_http_client):
        handler = CountingHandler(httpx.Response(200, json=[BOSTON_HIT]))
        async with mock_http_client(handler) as client:
            assert await GeoResolver(client).resolve_one("") is None

        assert handler.requests == []

    async def test_no_candidates(self, mock_http_client):
        async with mock_http_client(CountingHandler(httpx.Response(200, json=[]))) as client:
            assert await GeoResolver(client).resolve_one("Atlantis") is None

    async def test_server_error_returns_none(self, mock_http_client):
        async with mock_http_client(CountingHandler(httpx.Response(500))) as client:
            assert await GeoResolver(client).resolve_one("Boston") is None

    async def test_garbage_coordinates_return_none(self, mock_http_client):
        hit = {"display_name": "Nowhere", "lat": "north", "lon": None}
        async with mock_http_client(CountingHandler(httpx.Response(200, json=[hit]))) as client:
            assert await GeoResolver(client).resolve_one("Nowhere") is None

    async def test_transport_error_returns_none(self, mock_http_client):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        async with mock_http_client(handler) as client:
            assert await GeoResolver(client).resolve_one("Boston") is None


@pytest.mark.asyncio
class TestResolveMany:
    @pytest.mark.parametrize("query", ["", "B", None])
    async def test_short_input_makes_no_request(self, mock_http_client, query):
        handler = CountingHandler(httpx.Response(200, json=[BOSTON_HIT]))
        async with mock_http_client(handler) as client:
            assert await GeoResolver(client).resolve_many(query) == []

        assert handler.requests == []

    async def test_failure_looks_like_short_input(self, mock_http_client):
        handler = CountingHandler(httpx.Response(502))
        async with mock_http_client(handler) as client:
            assert await GeoResolver(client).resolve_many("Bo") == []

        assert len(handler.requests) == 1

    async def test_maps_and_caps_suggestions(self, mock_http_client):
        hits = [
            {"display_name": f"Boston {i}", "lat": str(42 + i / 10), "lon": "-71.0"} for i in range(7)
        ]
        handler = CountingHandler(httpx.Response(200, json=hits))
        async with mock_http_client(handler) as client:
            results = await GeoResolver(client).resolve_many("Bost")

        assert len(results) == 5
        assert results[0] == PlaceSuggestion(display_name="Boston 0", lat=42.0, lng=-71.0)
        assert results[0].to_dict() == {"display_name": "Boston 0", "lat": 42.0, "lng": -71.0}
        params = handler.requests[0].url.params
        assert params["limit"] == "5"
        assert params["addressdetails"] == "1"

    async def test_skips_candidates_without_coordinates(self, mock_http_client):
        hits = [{"display_name": "Broken", "lat": "x", "lon": "y"}, BOSTON_HIT]
        async with mock_http_client(CountingHandler(httpx.Response(200, json=hits))) as client:
            results = await GeoResolver(client).resolve_many("Boston")

        assert [r.display_name for r in results] == [BOSTON_HIT["display_name"]]

    async def test_non_list_payload_returns_empty(self, mock_http_client):
        async with mock_http_client(CountingHandler(httpx.Response(200, json={"error": "bad"}))) as client:
            assert await GeoResolver(client).resolve_many("Boston") == []
