from __future__ import annotations

from typing import Final

from backend.config_base import env_float, env_int, env_str, env_url

# ============================================================
# OMDb (fuente secundaria: ratings)
# ============================================================

# Opcional: sin key, el enriquecimiento queda desactivado durante todo el proceso.
OMDB_API_KEY: str | None = env_str("OMDB_API_KEY", None)

OMDB_BASE_URL: Final[str] = env_url("OMDB_BASE_URL", "https://www.omdbapi.com")

OMDB_HTTP_TIMEOUT_SECONDS: float = env_float("OMDB_HTTP_TIMEOUT_SECONDS", 10.0, min_v=0.5)

OMDB_HTTP_RETRY_TOTAL: int = env_int("OMDB_HTTP_RETRY_TOTAL", 1, min_v=0, max_v=10)

# Centinela OMDb para "sin valor".
OMDB_ABSENT: Final[str] = "N/A"
