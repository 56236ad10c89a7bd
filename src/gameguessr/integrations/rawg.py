"""RAWG Video Games Database client.

Docs: https://api.rawg.io/docs
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, Optional

import httpx

from gameguessr.config import settings
from gameguessr.models.metadata import GameMetadata

log = logging.getLogger(__name__)

# RAWG caps page_size at 40; the first 20 pages by "-added" cover ~800
# popular titles across eras and genres.
RANDOM_PAGE_MAX = 20
RANDOM_PAGE_SIZE = 40
SERIES_PAGE_SIZE = 40


class RawgUnavailable(RuntimeError):
    """RAWG is not configured or returned an unusable response."""


def _year(released: Optional[str]) -> Optional[int]:
    if not released:
        return None
    try:
        return int(released.split("-")[0])
    except ValueError:
        return None


class RawgClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = settings.rawg_api_key if api_key is None else api_key
        self._base_url = base_url or settings.rawg_base_url
        self._timeout = timeout or settings.http_timeout_seconds
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def _client(self) -> httpx.AsyncClient:
        if not self._api_key:
            raise RawgUnavailable("RAWG_API_KEY is not configured.")
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            params={"key": self._api_key},
            transport=self._transport,
        )

    @staticmethod
    async def _get_json(client: httpx.AsyncClient, path: str, **params: Any) -> Dict[str, Any]:
        resp = await client.get(path, params=params)
        resp.raise_for_status()
        try:
            data = resp.json()
        except ValueError as exc:
            raise RawgUnavailable(f"RAWG returned a non-JSON body for {path}.") from exc
        if not isinstance(data, dict):
            raise RawgUnavailable(f"RAWG returned an unexpected body for {path}.")
        return data

    async def fetch_random_game(self) -> str:
        """Return the name of a random popular game."""
        async with self._client() as client:
            data = await self._get_json(
                client,
                "/games",
                page=random.randint(1, RANDOM_PAGE_MAX),
                page_size=RANDOM_PAGE_SIZE,
                ordering="-added",
            )
        results = data.get("results") or []
        if not results:
            raise RawgUnavailable("RAWG response contained no games.")
        pick = random.choice(results)
        if not isinstance(pick, dict) or not pick.get("name"):
            raise RawgUnavailable("RAWG returned a game without a name.")
        return pick["name"]

    async def fetch_game_details(self, title: str) -> GameMetadata:
        """Look up developer, publisher, release year and franchise flags.

        Returns an empty ``GameMetadata`` when the title is not found.
        """
        async with self._client() as client:
            search = await self._get_json(client, "/games", search=title, page_size=1)
            results = search.get("results") or []
            if not results:
                return GameMetadata()
            game_id = results[0]["id"]

            detail = await self._get_json(client, f"/games/{game_id}")
            developers = detail.get("developers") or []
            publishers = detail.get("publishers") or []
            metadata = GameMetadata(
                developer=developers[0]["name"] if developers else None,
                publisher=publishers[0]["name"] if publishers else None,
                release_year=_year(detail.get("released")),
            )

            try:
                series = await self._get_json(
                    client, f"/games/{game_id}/game-series", page_size=SERIES_PAGE_SIZE
                )
            except httpx.HTTPError as exc:
                log.warning("RAWG game-series lookup failed for %s: %s", game_id, exc)
                return metadata

        series_games = series.get("results") or []
        metadata.is_branded_in_series = bool(series_games)
        if metadata.release_year and series_games:
            years = [y for y in (_year(g.get("released")) for g in series_games) if y]
            metadata.has_direct_sequel = any(y > metadata.release_year for y in years)
            metadata.has_direct_prequel = any(y < metadata.release_year for y in years)
        return metadata
