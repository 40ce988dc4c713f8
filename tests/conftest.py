from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import pytest

from backend.upstream_errors import UpstreamAPIError


def build_tmdb_movie(**overrides: Any) -> dict[str, Any]:
    """Payload de detalle TMDb (con append_to_response) para Pulp Fiction."""
    raw: dict[str, Any] = {
        "id": 680,
        "title": "Pulp Fiction",
        "original_title": "Pulp Fiction",
        "original_language": "en",
        "release_date": "1994-09-10",
        "overview": "A burger-loving hit man...",
        "runtime": 154,
        "adult": False,
        "budget": 8000000,
        "revenue": 213928762,
        "homepage": "",
        "status": "Released",
        "popularity": 64.2,
        "vote_average": 8.5,
        "vote_count": 27000,
        "poster_path": "/d5iIlFn5s0ImszYzBPb8JPIfbXD.jpg",
        "backdrop_path": "/suaEOtk1N1sgg2MTM7oZd2cfVp3.jpg",
        "genres": [{"id": 53, "name": "Thriller"}, {"id": 80, "name": "Crime"}],
        "external_ids": {"imdb_id": "tt0110912"},
        "credits": {
            "cast": [
                {"name": "John Travolta"},
                {"name": "Samuel L. Jackson"},
                {"name": "Uma Thurman"},
                {"name": "Bruce Willis"},
                {"name": "Ving Rhames"},
                {"name": "Harvey Keitel"},
            ],
            "crew": [
                {"job": "Producer", "name": "Lawrence Bender"},
                {"job": "Director", "name": "Quentin Tarantino"},
            ],
        },
        "videos": {
            "results": [
                {"type": "Teaser", "site": "YouTube", "key": "teaser1"},
                {"type": "Trailer", "site": "Vimeo", "key": "vimeo1"},
                {"type": "Trailer", "site": "YouTube", "key": "s7EdQ4FqbhY"},
            ]
        },
        "keywords": {"keywords": [{"name": "nonlinear timeline"}, {"name": "hitman"}]},
    }
    raw.update(overrides)
    return raw


def build_omdb_record(**overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "Title": "Pulp Fiction",
        "Year": "1994",
        "Runtime": "154 min",
        "Director": "Quentin Tarantino",
        "Plot": "The lives of two mob hitmen...",
        "imdbRating": "8.9",
        "imdbVotes": "2,345,678",
        "Metascore": "94",
        "Ratings": [
            {"Source": "Internet Movie Database", "Value": "8.9/10"},
            {"Source": "Rotten Tomatoes", "Value": "92%"},
            {"Source": "Metacritic", "Value": "94/100"},
        ],
        "Response": "True",
    }
    record.update(overrides)
    return record


def build_tmdb_page(movies: list[dict[str, Any]], *, page: int = 1) -> dict[str, Any]:
    return {
        "page": page,
        "total_pages": 10,
        "total_results": 200,
        "results": movies,
    }


@dataclass(slots=True)
class FakeTmdb:
    """Catálogo TMDb en memoria. Registra cada llamada como (método, args)."""

    pages: dict[str, dict[str, Any]] = field(default_factory=dict)
    details: dict[str, dict[str, Any]] = field(default_factory=dict)
    genres: list[dict[str, Any]] = field(default_factory=list)
    fail_with: Exception | None = None
    calls: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if self.fail_with is not None:
            raise self.fail_with

    def _page(self, name: str, page: int) -> dict[str, Any]:
        self._record(name, page)
        return self.pages.get(name, build_tmdb_page([], page=page))

    async def get_popular_movies(self, page: int = 1) -> dict[str, Any]:
        return self._page("popular", page)

    async def get_top_rated_movies(self, page: int = 1) -> dict[str, Any]:
        return self._page("top_rated", page)

    async def get_now_playing_movies(self, page: int = 1) -> dict[str, Any]:
        return self._page("now_playing", page)

    async def get_upcoming_movies(self, page: int = 1) -> dict[str, Any]:
        return self._page("upcoming", page)

    async def search_movies(self, query: str, page: int = 1) -> dict[str, Any]:
        self._record("search", query, page)
        return self.pages.get("search", build_tmdb_page([], page=page))

    async def get_movie_details(self, movie_id: int | str) -> dict[str, Any]:
        self._record("details", movie_id)
        try:
            return self.details[str(movie_id)]
        except KeyError:
            raise UpstreamAPIError(
                "tmdb",
                "TMDB API Error: The resource you requested could not be found.",
                status_code=404,
            ) from None

    async def get_genres(self) -> dict[str, Any]:
        self._record("genres")
        return {"genres": self.genres}


@dataclass(slots=True)
class FakeOmdb:
    """OMDb en memoria: `responder(imdb_id)` devuelve el record o lanza."""

    responder: Callable[[str], dict[str, Any]]
    calls: list[str] = field(default_factory=list)

    async def get_movie_by_imdb_id(self, imdb_id: str) -> dict[str, Any]:
        self.calls.append(imdb_id)
        return self.responder(imdb_id)


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_tmdb() -> FakeTmdb:
    return FakeTmdb()
