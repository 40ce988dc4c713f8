from __future__ import annotations

from typing import Final

from backend.config_base import env_float, env_int, env_str, env_url

# ============================================================
# TMDb (fuente primaria: catálogo)
# ============================================================

TMDB_API_KEY: str | None = env_str("TMDB_API_KEY", None)

TMDB_BASE_URL: Final[str] = env_url("TMDB_BASE_URL", "https://api.themoviedb.org/3")

# Endpoint de imágenes; los anchos (w500/w1280) son fijos en movie_transform.
TMDB_IMAGE_BASE_URL: Final[str] = env_url("TMDB_IMAGE_BASE_URL", "https://image.tmdb.org/t/p")

TMDB_HTTP_TIMEOUT_SECONDS: float = env_float("TMDB_HTTP_TIMEOUT_SECONDS", 10.0, min_v=0.5)

# Reintentos SOLO de conexión (httpx transport). El core no reintenta.
TMDB_HTTP_RETRY_TOTAL: int = env_int("TMDB_HTTP_RETRY_TOTAL", 2, min_v=0, max_v=10)

# Sub-objetos que pide get_movie_details (credits/videos/external_ids/keywords).
TMDB_DETAILS_APPEND: Final[str] = "videos,credits,external_ids,keywords"
