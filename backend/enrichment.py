from __future__ import annotations

"""
backend/enrichment.py

Enriquecimiento TMDb -> OMDb por lotes.

- Sin cliente OMDb: todo se transforma y no se hace NINGUNA llamada.
- Con cliente OMDb: un intento por record, todos concurrentes
  (asyncio.gather(return_exceptions=True): se espera a todos, un fallo no
  cancela a los hermanos).
- Un record sin imdb_id no consulta OMDb.
- Un fallo OMDb (o del merge) degrada ESE record a su forma transformada y se
  loguea como warning. El lote nunca falla entero y conserva orden/longitud.
"""

import asyncio
from collections.abc import Sequence
from typing import Protocol

from backend import logger as logger
from backend.movie_merge import merge_omdb_into_movie
from backend.movie_models import CanonicalMovie, RawOmdbRecord, RawTmdbMovie
from backend.movie_transform import imdb_id_of, transform_tmdb_movie


class OmdbLookup(Protocol):
    async def get_movie_by_imdb_id(self, imdb_id: str) -> RawOmdbRecord: ...


def _label(raw: RawTmdbMovie) -> str:
    title = raw.get("title")
    return title if isinstance(title, str) and title else f"tmdb:{raw.get('id')}"


class Enricher:
    def __init__(self, omdb: OmdbLookup | None) -> None:
        self._omdb = omdb

    @property
    def enabled(self) -> bool:
        return self._omdb is not None

    async def _fetch_and_merge(self, raw: RawTmdbMovie) -> CanonicalMovie:
        movie = transform_tmdb_movie(raw)
        imdb_id = imdb_id_of(raw)
        if self._omdb is None or not imdb_id:
            return movie

        omdb_record = await self._omdb.get_movie_by_imdb_id(imdb_id)
        return merge_omdb_into_movie(movie, omdb_record)

    async def enrich_one(self, raw: RawTmdbMovie) -> CanonicalMovie:
        """Camino de un solo record (detalle). Absorbe el fallo OMDb."""
        try:
            return await self._fetch_and_merge(raw)
        except Exception as exc:
            logger.warning(f"Failed to fetch IMDB data for {_label(raw)}: {exc}")
            return transform_tmdb_movie(raw)

    async def enrich_batch(self, raws: Sequence[RawTmdbMovie]) -> list[CanonicalMovie]:
        if self._omdb is None:
            return [transform_tmdb_movie(raw) for raw in raws]

        results = await asyncio.gather(
            *(self._fetch_and_merge(raw) for raw in raws),
            return_exceptions=True,
        )

        movies: list[CanonicalMovie] = []
        for raw, result in zip(raws, results):
            if isinstance(result, CanonicalMovie):
                movies.append(result)
                continue
            if isinstance(result, asyncio.CancelledError):
                raise result
            logger.warning(f"Failed to enrich movie {_label(raw)}: {result!r}")
            movies.append(transform_tmdb_movie(raw))
        return movies
