from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from backend.movie_service import MovieService
from backend.upstream_errors import UpstreamError
from server.api.deps import get_settings
from server.api.middleware import (
    build_exception_handler,
    build_request_id_middleware,
    build_upstream_exception_handler,
)
from server.api.routers.health import router as health_router
from server.api.routers.movies import router as movies_router

_settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Un único MovieService (clientes httpx + TTLCache) por proceso.
    if getattr(app.state, "movie_service", None) is None:
        app.state.movie_service = MovieService.from_config()
    try:
        yield
    finally:
        service = getattr(app.state, "movie_service", None)
        if service is not None:
            await service.aclose()
            app.state.movie_service = None


def create_app() -> FastAPI:
    app = FastAPI(title="Movie Aggregator API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(GZipMiddleware, minimum_size=max(0, _settings.gzip_min_size))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_settings.cors_allow_origins(),
        allow_credentials=_settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.middleware("http")(build_request_id_middleware(_settings))
    app.add_exception_handler(UpstreamError, build_upstream_exception_handler(_settings))
    app.add_exception_handler(Exception, build_exception_handler(_settings))

    app.include_router(health_router)
    app.include_router(movies_router)

    return app


app = create_app()
