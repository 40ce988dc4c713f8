from __future__ import annotations

from typing import Any, Final

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from backend.movie_service import MovieService
from server.api.deps import get_movie_service

router = APIRouter(prefix="/api")

DEFAULT_CATEGORY: Final[str] = "popular"


def _parse_page(raw: str | None) -> int:
    """page inválida o < 1 -> 1."""
    try:
        page = int((raw or "").strip())
    except ValueError:
        return 1
    return page if page >= 1 else 1


@router.get("/movies")
async def list_movies(
    page: str | None = Query(None),
    category: str = Query(DEFAULT_CATEGORY, description="popular | top_rated | now_playing | upcoming"),
    service: MovieService = Depends(get_movie_service),
) -> Any:
    p = _parse_page(page)
    fetchers = {
        "popular": service.get_popular_movies,
        "top_rated": service.get_top_rated_movies,
        "now_playing": service.get_now_playing_movies,
        "upcoming": service.get_upcoming_movies,
    }
    fetch = fetchers.get(category.strip().lower(), service.get_popular_movies)
    result = await fetch(p)
    return [m.to_dict() for m in result.results]


@router.get("/movies/search")
async def search_movies(
    q: str | None = Query(None),
    page: str | None = Query(None),
    service: MovieService = Depends(get_movie_service),
) -> Any:
    query = (q or "").strip()
    if not query:
        return JSONResponse(status_code=400, content={"error": "Search query is required"})

    result = await service.search_movies(query, _parse_page(page))
    return [m.to_dict() for m in result.results]


@router.get("/movies/{movie_id}")
async def movie_details(
    movie_id: int,
    service: MovieService = Depends(get_movie_service),
) -> Any:
    movie = await service.get_movie_details(movie_id)
    return movie.to_dict()


@router.get("/genres")
async def genres(service: MovieService = Depends(get_movie_service)) -> Any:
    return await service.get_genres()
