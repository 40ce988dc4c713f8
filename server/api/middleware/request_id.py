from __future__ import annotations

"""
server/api/middleware/request_id.py

Middleware HTTP por request:
- Reutiliza el X-Request-ID del cliente si es razonable; si no, genera uno.
- Cuenta requests y respuestas por clase de status (2xx/3xx/4xx/5xx).
- Log de acceso (método, ruta, query, status, duración).
- Devuelve X-Request-ID y X-Response-Time-ms en la respuesta.
"""

import logging
import time
import uuid
from collections.abc import Awaitable, Callable
from typing import Final

from fastapi import Request, Response

from server.api.logging_config import configure_logging
from server.api.services import metrics
from server.api.settings import Settings

CallNext = Callable[[Request], Awaitable[Response]]
Middleware = Callable[[Request, CallNext], Awaitable[Response]]

REQUEST_ID_HEADER: Final[str] = "X-Request-ID"
RESPONSE_TIME_HEADER: Final[str] = "X-Response-Time-ms"

_MAX_REQUEST_ID_LEN: Final[int] = 128


def resolve_request_id(raw: str | None) -> str:
    """Id entrante recortado; vacío, demasiado largo o no imprimible -> uuid4 hex."""
    candidate = (raw or "").strip()
    if candidate and len(candidate) <= _MAX_REQUEST_ID_LEN and candidate.isprintable():
        return candidate
    return uuid.uuid4().hex


def _status_class(status_code: int) -> str:
    return f"{max(1, min(5, status_code // 100))}xx"


def _log_access(
    logger: logging.Logger,
    request: Request,
    *,
    request_id: str,
    status_code: int | None,
    duration_ms: int,
) -> None:
    logger.info(
        "request",
        extra={
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "query": request.url.query,
            # None: la excepción salió del middleware (la respuesta la pone el handler 500)
            "status": status_code,
            "duration_ms": duration_ms,
        },
    )


def build_request_id_middleware(settings: Settings) -> Middleware:
    logger = configure_logging(settings)

    async def middleware(request: Request, call_next: CallNext) -> Response:
        started = time.perf_counter()
        request_id = resolve_request_id(request.headers.get("x-request-id"))
        request.state.request_id = request_id

        metrics.inc("http_requests_total", 1)

        status_code: int | None = None
        try:
            response = await call_next(request)
            status_code = response.status_code
            metrics.inc(f"http_responses_{_status_class(status_code)}_total", 1)

            elapsed_ms = int((time.perf_counter() - started) * 1000)
            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers[RESPONSE_TIME_HEADER] = str(elapsed_ms)
            return response
        finally:
            _log_access(
                logger,
                request,
                request_id=request_id,
                status_code=status_code,
                duration_ms=int((time.perf_counter() - started) * 1000),
            )

    return middleware
