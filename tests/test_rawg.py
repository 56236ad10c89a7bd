"""
Tests for the RAWG client, served by an httpx mock transport.
"""

import httpx
import pytest

from gameguessr.integrations.rawg import RawgClient, RawgUnavailable

BASE_URL = "https://rawg.test/api"


def _handler(request: httpx.Request) -> httpx.Response:
    assert request.url.params["key"] == "k"
    path = request.url.path
    if path == "/api/games" and "search" in request.url.params:
        if request.url.params["search"] == "Unknown":
            return httpx.Response(200, json={"results": []})
        return httpx.Response(200, json={"results": [{"id": 22, "name": "Zelda"}]})
    if path == "/api/games":
        return httpx.Response(200, json={"results": [{"name": "Portal 2"}]})
    if path == "/api/games/22":
        return httpx.Response(200, json={
            "released": "1998-11-21",
            "developers": [{"name": "Nintendo EAD"}],
            "publishers": [{"name": "Nintendo"}],
        })
    if path == "/api/games/22/game-series":
        return httpx.Response(200, json={"results": [
            {"name": "Majora's Mask", "released": "2000-04-27"},
        ]})
    return httpx.Response(404)


@pytest.fixture
def rawg() -> RawgClient:
    return RawgClient(api_key="k", base_url=BASE_URL, transport=httpx.MockTransport(_handler))


class TestRawgClient:

    @pytest.mark.asyncio
    async def test_fetch_game_details(self, rawg):
        metadata = await rawg.fetch_game_details("Ocarina of Time")

        assert metadata.developer == "Nintendo EAD"
        assert metadata.publisher == "Nintendo"
        assert metadata.release_year == 1998
        assert metadata.is_branded_in_series is True
        assert metadata.has_direct_sequel is True
        assert metadata.has_direct_prequel is False

    @pytest.mark.asyncio
    async def test_unknown_title(self, rawg):
        metadata = await rawg.fetch_game_details("Unknown")
        assert metadata.is_empty()

    @pytest.mark.asyncio
    async def test_fetch_random_game(self, rawg):
        assert await rawg.fetch_random_game() == "Portal 2"

    @pytest.mark.asyncio
    async def test_series_failure_keeps_details(self):
        def handler(request):
            if request.url.path.endswith("/game-series"):
                return httpx.Response(500)
            return _handler(request)

        rawg = RawgClient(api_key="k", base_url=BASE_URL, transport=httpx.MockTransport(handler))
        metadata = await rawg.fetch_game_details("Ocarina of Time")

        assert metadata.developer == "Nintendo EAD"
        assert metadata.is_branded_in_series is None

    @pytest.mark.asyncio
    async def test_unconfigured(self):
        rawg = RawgClient(api_key="")
        assert not rawg.configured
        with pytest.raises(RawgUnavailable):
            await rawg.fetch_random_game()

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>maintenance</html>"))
        rawg = RawgClient(api_key="k", base_url=BASE_URL, transport=transport)

        with pytest.raises(RawgUnavailable):
            await rawg.fetch_random_game()

    @pytest.mark.asyncio
    async def test_random_game_without_name(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"results": [{"id": 1}]}))
        rawg = RawgClient(api_key="k", base_url=BASE_URL, transport=transport)

        with pytest.raises(RawgUnavailable):
            await rawg.fetch_random_game()
