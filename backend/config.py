from __future__ import annotations

"""
backend/config.py

Fachada de configuración del agregador (TMDb + OMDb + caché).

🎯 Principios
-------------
1) "Config as data":
   - Este módulo SOLO re-exporta constantes ya parseadas/validadas en config_*.py.
   - Nada de lógica de negocio.

2) Robusto ante entornos “sucios”:
   - Si una env var viene mal (p.ej. "abc" donde se esperaba int), no rompe.
   - Emite warning always=True (visible incluso en modo SILENT).

3) backend/logger.py lee LOG_LEVEL/DEBUG_MODE/SILENT_MODE/HTTP_DEBUG desde aquí
   (vía sys.modules) sin importarlo, para evitar ciclos.

Caché
-----
MOVIE_CACHE_TTL_SECONDS es fijo (30 minutos) y NO es configurable por env.
"""

from typing import Final

from backend.config_base import (
    DEBUG_MODE,
    HTTP_DEBUG,
    LOG_LEVEL,
    SILENT_MODE,
)
from backend.config_omdb import (
    OMDB_ABSENT,
    OMDB_API_KEY,
    OMDB_BASE_URL,
    OMDB_HTTP_RETRY_TOTAL,
    OMDB_HTTP_TIMEOUT_SECONDS,
)
from backend.config_tmdb import (
    TMDB_API_KEY,
    TMDB_BASE_URL,
    TMDB_DETAILS_APPEND,
    TMDB_HTTP_RETRY_TOTAL,
    TMDB_HTTP_TIMEOUT_SECONDS,
    TMDB_IMAGE_BASE_URL,
)

# ============================================================
# Caché en memoria del MovieService
# ============================================================

MOVIE_CACHE_TTL_SECONDS: Final[float] = 30 * 60.0

__all__ = [
    "DEBUG_MODE",
    "HTTP_DEBUG",
    "LOG_LEVEL",
    "MOVIE_CACHE_TTL_SECONDS",
    "OMDB_ABSENT",
    "OMDB_API_KEY",
    "OMDB_BASE_URL",
    "OMDB_HTTP_RETRY_TOTAL",
    "OMDB_HTTP_TIMEOUT_SECONDS",
    "SILENT_MODE",
    "TMDB_API_KEY",
    "TMDB_BASE_URL",
    "TMDB_DETAILS_APPEND",
    "TMDB_HTTP_RETRY_TOTAL",
    "TMDB_HTTP_TIMEOUT_SECONDS",
    "TMDB_IMAGE_BASE_URL",
]
