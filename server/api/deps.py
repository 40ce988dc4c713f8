from __future__ import annotations

from fastapi import Request

from backend.movie_service import MovieService
from server.api.settings import Settings

_SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return _SETTINGS


def get_movie_service(request: Request) -> MovieService:
    """El MovieService (y su TTLCache) vive en app.state durante todo el proceso."""
    service = getattr(request.app.state, "movie_service", None)
    if service is None:
        service = MovieService.from_config()
        request.app.state.movie_service = service
    return service
