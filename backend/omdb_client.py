from __future__ import annotations

"""
backend/omdb_client.py

Cliente OMDb asíncrono (fuente secundaria: ratings) + helpers de parseo.

🧠 Principios
-------------
1) Caja negra request/response:
   - get_movie_by_imdb_id(imdb_id) -> RawOmdbRecord (JSON ya parseado)
   - Fallo de red / JSON inválido -> UpstreamTransportError
   - Response="False" (p.ej. "Movie not found!") -> UpstreamAPIError

2) Sin caché ni reintentos lógicos aquí:
   - La caché vive en MovieService (TTLCache).
   - httpx.AsyncHTTPTransport(retries=N) solo reintenta errores de conexión.

3) Parseo defensivo:
   - OMDb devuelve TODO como string y usa "N/A" como "sin valor".
   - Los helpers nunca lanzan: valor no parseable => None.
"""

import math
import re
from collections.abc import Mapping
from typing import Final, cast

import httpx

from backend import logger as logger
from backend.config_omdb import (
    OMDB_ABSENT,
    OMDB_BASE_URL,
    OMDB_HTTP_RETRY_TOTAL,
    OMDB_HTTP_TIMEOUT_SECONDS,
)
from backend.movie_models import RawOmdbRecord, RawOmdbSearch
from backend.upstream_errors import UpstreamAPIError, UpstreamTransportError

SOURCE: Final[str] = "omdb"
RT_SOURCE_NAME: Final[str] = "Rotten Tomatoes"

_RUNTIME_RE: Final[re.Pattern[str]] = re.compile(r"^\s*(\d+)")


# ============================================================
# AUX: safe parsing / ratings
# ============================================================


def is_absent(value: object) -> bool:
    """None, vacío o el centinela "N/A"."""
    if value is None:
        return True
    if isinstance(value, str):
        s = value.strip()
        return not s or s == OMDB_ABSENT
    return False


def _safe_int(value: object) -> int | None:
    """Cast defensivo a int (None/ValueError/TypeError => None)."""
    try:
        if value is None:
            return None
        return int(value)  # type: ignore[call-overload]
    except (ValueError, TypeError):
        return None


def _safe_float(value: object) -> float | None:
    """Cast defensivo a float finito (None/ValueError/TypeError/nan/inf => None)."""
    try:
        if value is None:
            return None
        f = float(value)  # type: ignore[arg-type]
    except (ValueError, TypeError):
        return None
    return f if math.isfinite(f) else None


def normalize_imdb_votes(votes: object) -> int | None:
    """Convierte imdbVotes ("12,345") a int."""
    if is_absent(votes):
        return None
    if isinstance(votes, (int, float)) and not isinstance(votes, bool):
        return int(votes) if math.isfinite(votes) else None
    s = str(votes).strip().replace(",", "")
    return _safe_int(s)


def parse_imdb_rating_from_omdb(omdb_data: Mapping[str, object]) -> float | None:
    """Extrae imdbRating (float)."""
    raw = omdb_data.get("imdbRating")
    if is_absent(raw):
        return None
    return _safe_float(raw)


def parse_rt_score_from_omdb(omdb_data: Mapping[str, object]) -> int | None:
    """Extrae Rotten Tomatoes (%) de la lista Ratings."""
    ratings_obj = omdb_data.get("Ratings") or []
    if not isinstance(ratings_obj, list):
        return None
    for r in ratings_obj:
        if not isinstance(r, Mapping):
            continue
        if r.get("Source") != RT_SOURCE_NAME:
            continue
        val = r.get("Value")
        if is_absent(val):
            return None
        return _safe_int(str(val).strip().replace("%", ""))
    return None


def parse_metascore_from_omdb(omdb_data: Mapping[str, object]) -> int | None:
    """Extrae Metascore (int)."""
    raw = omdb_data.get("Metascore")
    if is_absent(raw):
        return None
    return _safe_int(str(raw).strip())


def parse_runtime_minutes(value: object) -> int | None:
    """"142 min" -> 142. "N/A" o formato raro -> None."""
    if is_absent(value):
        return None
    m = _RUNTIME_RE.match(str(value))
    if m is None:
        return None
    return _safe_int(m.group(1))


def text_or_none(value: object) -> str | None:
    """Texto OMDb utilizable (descarta "N/A" y vacíos)."""
    if is_absent(value) or not isinstance(value, str):
        return None
    return value.strip()


def _is_error_response(data: Mapping[str, object]) -> bool:
    return data.get("Response") == "False"


# ============================================================
# CLIENTE
# ============================================================


class OmdbClient:
    """
    Cliente OMDb sobre httpx.AsyncClient.

    Usage:
        client = OmdbClient(api_key)
        record = await client.get_movie_by_imdb_id("tt0110912")
        await client.aclose()
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = OMDB_BASE_URL,
        timeout_seconds: float = OMDB_HTTP_TIMEOUT_SECONDS,
        retries: int = OMDB_HTTP_RETRY_TOTAL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport or httpx.AsyncHTTPTransport(retries=max(0, retries)),
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, params: Mapping[str, object]) -> RawOmdbRecord:
        query: dict[str, str] = {"apikey": self._api_key}
        for k, v in params.items():
            if v is not None:
                query[k] = str(v)

        shown = {k: v for k, v in query.items() if k != "apikey"}
        logger.debug_ctx("OMDB", f"GET / params={shown}")

        try:
            resp = await self._http.get("/", params=query)
        except httpx.HTTPError as exc:
            raise UpstreamTransportError(SOURCE, f"OMDb request failed: {exc!r}") from exc

        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstreamTransportError(SOURCE, f"Failed to parse OMDb response: {exc}") from exc

        if not isinstance(data, dict):
            raise UpstreamTransportError(SOURCE, "Failed to parse OMDb response: payload is not an object")

        if _is_error_response(data) or data.get("Response") != "True":
            err = data.get("Error") or "Unknown error"
            raise UpstreamAPIError(SOURCE, f"OMDb API Error: {err}", status_code=resp.status_code)

        return data  # type: ignore[return-value]

    async def get_movie_by_imdb_id(self, imdb_id: str) -> RawOmdbRecord:
        return await self._request({"i": imdb_id, "plot": "full"})

    async def get_movie_by_title(self, title: str, year: int | None = None) -> RawOmdbRecord:
        return await self._request({"t": title, "y": year, "plot": "full"})

    async def search_movies(self, title: str, year: int | None = None) -> RawOmdbSearch:
        """Búsqueda `s=`: lista de coincidencias resumidas (sin ratings)."""
        return cast(RawOmdbSearch, await self._request({"s": title, "y": year}))
