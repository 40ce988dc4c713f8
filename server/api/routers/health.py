from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response

from backend import config
from backend.movie_service import MovieService
from server.api.deps import get_movie_service
from server.api.services import metrics

router = APIRouter()


@router.get("/health")
def health() -> dict[str, Any]:
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/ready")
def ready() -> dict[str, Any]:
    """
    Readiness:
    - sin TMDB_API_KEY no hay datos primarios -> 503.
    - OMDB_API_KEY es opcional (solo informa de si el enriquecimiento está activo).
    """
    if not config.TMDB_API_KEY:
        raise HTTPException(
            status_code=503,
            detail={"ready": False, "issues": {"tmdb": "TMDB_API_KEY not configured"}},
        )

    return {
        "ready": True,
        "omdb_enrichment": bool(config.OMDB_API_KEY),
        "ts": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/metrics")
def metrics_endpoint(service: MovieService = Depends(get_movie_service)) -> Response:
    cache_stats = {
        (f"movie_cache_{k}" if k == "entries" else f"movie_cache_{k}_total"): v
        for k, v in service.cache.stats().items()
    }
    body = metrics.render_prometheus(cache_stats)
    return Response(content=body, media_type="text/plain; version=0.0.4")
