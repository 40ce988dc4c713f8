from __future__ import annotations

"""
backend/tmdb_client.py

Cliente TMDb asíncrono (fuente primaria: catálogo).

- Cada método devuelve el JSON parseado o lanza:
    * UpstreamTransportError: red / JSON inválido
    * UpstreamAPIError: status non-2xx (mensaje = status_message de TMDb)
- Sin caché ni reintentos lógicos: eso es cosa de MovieService / transporte httpx.
"""

from collections.abc import Mapping
from typing import Any, Final

import httpx

from backend import logger as logger
from backend.config_tmdb import (
    TMDB_BASE_URL,
    TMDB_DETAILS_APPEND,
    TMDB_HTTP_RETRY_TOTAL,
    TMDB_HTTP_TIMEOUT_SECONDS,
)
from backend.movie_models import RawTmdbGenreList, RawTmdbMovie, RawTmdbPage
from backend.upstream_errors import UpstreamAPIError, UpstreamTransportError

SOURCE: Final[str] = "tmdb"


class TmdbClient:
    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = TMDB_BASE_URL,
        timeout_seconds: float = TMDB_HTTP_TIMEOUT_SECONDS,
        retries: int = TMDB_HTTP_RETRY_TOTAL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        # base_url con "/" final para que httpx concatene "/3" + "movie/popular"
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/",
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport or httpx.AsyncHTTPTransport(retries=max(0, retries)),
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, endpoint: str, params: Mapping[str, object] | None = None) -> Any:
        query: dict[str, str] = {"api_key": self._api_key}
        for k, v in (params or {}).items():
            if v is not None:
                query[k] = str(v)

        path = endpoint.lstrip("/")
        logger.debug_ctx("TMDB", f"GET /{path}")

        try:
            resp = await self._http.get(path, params=query)
        except httpx.HTTPError as exc:
            raise UpstreamTransportError(SOURCE, f"TMDB request failed: {exc!r}") from exc

        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstreamTransportError(SOURCE, f"Failed to parse TMDB response: {exc}") from exc

        if not resp.is_success:
            msg = data.get("status_message") if isinstance(data, dict) else None
            raise UpstreamAPIError(
                SOURCE,
                f"TMDB API Error: {msg or 'Unknown error'}",
                status_code=resp.status_code,
            )

        return data

    async def get_popular_movies(self, page: int = 1) -> RawTmdbPage:
        return await self._request("/movie/popular", {"page": page})

    async def get_top_rated_movies(self, page: int = 1) -> RawTmdbPage:
        return await self._request("/movie/top_rated", {"page": page})

    async def get_now_playing_movies(self, page: int = 1) -> RawTmdbPage:
        return await self._request("/movie/now_playing", {"page": page})

    async def get_upcoming_movies(self, page: int = 1) -> RawTmdbPage:
        return await self._request("/movie/upcoming", {"page": page})

    async def search_movies(self, query: str, page: int = 1) -> RawTmdbPage:
        return await self._request("/search/movie", {"query": query, "page": page})

    async def get_movie_details(self, movie_id: int | str) -> RawTmdbMovie:
        return await self._request(
            f"/movie/{movie_id}",
            {"append_to_response": TMDB_DETAILS_APPEND},
        )

    async def get_genres(self) -> RawTmdbGenreList:
        return await self._request("/genre/movie/list")

    async def discover_movies(self, **params: object) -> RawTmdbPage:
        return await self._request("/discover/movie", params)
