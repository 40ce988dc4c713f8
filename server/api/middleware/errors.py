# exception handlers (error_id)
from __future__ import annotations

import uuid
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from backend.upstream_errors import UpstreamError
from server.api.logging_config import configure_logging
from server.api.services import metrics
from server.api.settings import Settings


def _base_payload(request: Request, error_id: str) -> dict[str, Any]:
    payload: dict[str, Any] = {"error_id": error_id}
    req_id = getattr(request.state, "request_id", None)
    if isinstance(req_id, str) and req_id:
        payload["request_id"] = req_id
    return payload


def build_upstream_exception_handler(settings: Settings):
    """TMDb (fuente primaria) falló: 502 con cuerpo genérico, sin filtrar detalles upstream."""
    logger = configure_logging(settings)

    async def handler(request: Request, exc: Exception) -> JSONResponse:
        error_id = uuid.uuid4().hex
        source = exc.source if isinstance(exc, UpstreamError) else None

        logger.error(
            "upstream_error",
            extra={
                "error_id": error_id,
                "request_id": getattr(request.state, "request_id", None),
                "path": request.url.path,
                "source": source,
                "error": str(exc),
            },
        )
        metrics.inc("http_upstream_errors_total", 1)
        metrics.inc("http_errors_5xx_total", 1)

        payload = _base_payload(request, error_id)
        payload["error"] = "Failed to fetch movie data"
        return JSONResponse(status_code=502, content=payload)

    return handler


def build_exception_handler(settings: Settings):
    logger = configure_logging(settings)

    async def handler(request: Request, exc: Exception) -> JSONResponse:
        error_id = uuid.uuid4().hex
        req_id = getattr(request.state, "request_id", None)

        logger.exception(
            "unhandled_exception",
            extra={"error_id": error_id, "request_id": req_id, "path": request.url.path},
        )
        metrics.inc("http_errors_5xx_total", 1)

        payload = _base_payload(request, error_id)
        payload["detail"] = "Internal Server Error"
        return JSONResponse(status_code=500, content=payload)

    return handler
