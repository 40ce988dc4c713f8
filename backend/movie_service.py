from __future__ import annotations

"""
backend/movie_service.py

Fachada de agregación (entrypoint del core).

Flujo por operación
-------------------
1) key = cache_key(op, params) -> hit: devuelve tal cual.
2) miss: TMDb -> Enricher (lote o record) -> set en caché -> devuelve.
3) Error TMDb: se loguea y se relanza sin tocar la caché (sin datos primarios
   no hay nada que servir). Los fallos OMDb nunca llegan aquí: los absorbe el
   Enricher record a record.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, Union, cast

from backend import config
from backend import logger as logger
from backend.enrichment import Enricher, OmdbLookup
from backend.movie_models import (
    CanonicalMovie,
    MoviePage,
    RawTmdbGenreList,
    RawTmdbMovie,
    RawTmdbPage,
    TmdbGenre,
)
from backend.omdb_client import OmdbClient
from backend.tmdb_client import TmdbClient
from backend.ttl_cache import TTLCache, cache_key

CachedValue = Union[MoviePage, CanonicalMovie, tuple[TmdbGenre, ...]]


class TmdbCatalog(Protocol):
    async def get_popular_movies(self, page: int = 1) -> RawTmdbPage: ...

    async def get_top_rated_movies(self, page: int = 1) -> RawTmdbPage: ...

    async def get_now_playing_movies(self, page: int = 1) -> RawTmdbPage: ...

    async def get_upcoming_movies(self, page: int = 1) -> RawTmdbPage: ...

    async def search_movies(self, query: str, page: int = 1) -> RawTmdbPage: ...

    async def get_movie_details(self, movie_id: int | str) -> RawTmdbMovie: ...

    async def get_genres(self) -> RawTmdbGenreList: ...


def _int_or(value: object, default: int) -> int:
    return value if isinstance(value, int) and not isinstance(value, bool) else default


class MovieService:
    def __init__(
        self,
        tmdb: TmdbCatalog,
        omdb: OmdbLookup | None = None,
        *,
        cache: TTLCache[CachedValue] | None = None,
    ) -> None:
        self.tmdb = tmdb
        self.omdb = omdb
        self.cache: TTLCache[CachedValue] = (
            cache if cache is not None else TTLCache(config.MOVIE_CACHE_TTL_SECONDS)
        )
        self.enricher = Enricher(omdb)

    @classmethod
    def from_config(cls) -> "MovieService":
        """TMDB_API_KEY obligatoria; sin OMDB_API_KEY no se enriquece nunca."""
        if not config.TMDB_API_KEY:
            logger.warning(
                "TMDB_API_KEY not found. Please add it to your .env file "
                "(https://www.themoviedb.org/settings/api)",
                always=True,
            )
        tmdb = TmdbClient(config.TMDB_API_KEY or "")
        omdb = OmdbClient(config.OMDB_API_KEY) if config.OMDB_API_KEY else None
        if omdb is None:
            logger.info("OMDB_API_KEY not set; OMDb enrichment disabled")
        return cls(tmdb, omdb)

    async def aclose(self) -> None:
        for client in (self.tmdb, self.omdb):
            close = getattr(client, "aclose", None)
            if close is not None:
                await close()

    # ------------------------------------------------------------
    # Núcleo común
    # ------------------------------------------------------------

    async def _cached(
        self,
        operation: str,
        params: dict[str, object],
        label: str,
        produce: Callable[[], Awaitable[CachedValue]],
    ) -> CachedValue:
        key = cache_key(operation, params)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug_ctx("CACHE", f"hit {key}")
            return cached

        try:
            result = await produce()
        except Exception as exc:
            logger.error(f"Error {label}: {exc}")
            raise

        self.cache.set(key, result)
        return result

    async def _page(self, response: RawTmdbPage, page: int) -> MoviePage:
        raws = response.get("results") or []
        movies = await self.enricher.enrich_batch(raws)
        return MoviePage(
            page=_int_or(response.get("page"), page),
            total_pages=_int_or(response.get("total_pages"), 0),
            total_results=_int_or(response.get("total_results"), len(movies)),
            results=tuple(movies),
        )

    async def _list(
        self,
        operation: str,
        label: str,
        fetch: Callable[[], Awaitable[RawTmdbPage]],
        params: dict[str, object],
    ) -> MoviePage:
        page = _int_or(params.get("page"), 1)

        async def produce() -> MoviePage:
            return await self._page(await fetch(), page)

        return cast(MoviePage, await self._cached(operation, params, label, produce))

    # ------------------------------------------------------------
    # Operaciones públicas
    # ------------------------------------------------------------

    async def get_popular_movies(self, page: int = 1) -> MoviePage:
        return await self._list(
            "popular",
            "fetching popular movies",
            lambda: self.tmdb.get_popular_movies(page),
            {"page": page},
        )

    async def get_top_rated_movies(self, page: int = 1) -> MoviePage:
        return await self._list(
            "top_rated",
            "fetching top rated movies",
            lambda: self.tmdb.get_top_rated_movies(page),
            {"page": page},
        )

    async def get_now_playing_movies(self, page: int = 1) -> MoviePage:
        return await self._list(
            "now_playing",
            "fetching now playing movies",
            lambda: self.tmdb.get_now_playing_movies(page),
            {"page": page},
        )

    async def get_upcoming_movies(self, page: int = 1) -> MoviePage:
        return await self._list(
            "upcoming",
            "fetching upcoming movies",
            lambda: self.tmdb.get_upcoming_movies(page),
            {"page": page},
        )

    async def search_movies(self, query: str, page: int = 1) -> MoviePage:
        return await self._list(
            "search",
            "searching movies",
            lambda: self.tmdb.search_movies(query, page),
            {"query": query, "page": page},
        )

    async def get_movie_details(self, movie_id: int | str) -> CanonicalMovie:
        async def produce() -> CanonicalMovie:
            raw = await self.tmdb.get_movie_details(movie_id)
            return await self.enricher.enrich_one(raw)

        result = await self._cached(
            "details", {"movieId": str(movie_id)}, "fetching movie details", produce
        )
        return cast(CanonicalMovie, result)

    async def get_genres(self) -> list[TmdbGenre]:
        async def produce() -> tuple[TmdbGenre, ...]:
            response = await self.tmdb.get_genres()
            genres = response.get("genres") or []
            return tuple(g for g in genres if isinstance(g, dict))

        # En caché queda la tupla; cada llamada recibe copias de los dicts.
        result = await self._cached("genres", {}, "fetching genres", produce)
        return [cast(TmdbGenre, dict(g)) for g in cast(tuple[TmdbGenre, ...], result)]
