from __future__ import annotations

"""
backend/movie_transform.py

RawTmdbMovie -> CanonicalMovie.

Función pura y total: un payload incompleto nunca lanza; los campos opcionales
ausentes producen None o tupla vacía.
"""

from collections.abc import Mapping
from typing import Final

from backend.config_tmdb import TMDB_IMAGE_BASE_URL
from backend.movie_models import CanonicalMovie, RawTmdbMovie

POSTER_WIDTH: Final[str] = "w500"
BACKDROP_WIDTH: Final[str] = "w1280"
CAST_LIMIT: Final[int] = 5

YOUTUBE_WATCH_URL: Final[str] = "https://youtube.com/watch?v="


# ============================================================
# AUX: accesos defensivos
# ============================================================


def _str_or_none(value: object) -> str | None:
    return value if isinstance(value, str) else None


def _list_of_mappings(value: object) -> list[Mapping[str, object]]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, Mapping)]


def _nested_list(raw: Mapping[str, object], outer: str, inner: str) -> list[Mapping[str, object]]:
    """raw[outer][inner] como lista de dicts (credits.cast, videos.results, ...)."""
    obj = raw.get(outer)
    if not isinstance(obj, Mapping):
        return []
    return _list_of_mappings(obj.get(inner))


def image_url(path: object, width: str) -> str | None:
    if not isinstance(path, str) or not path:
        return None
    return f"{TMDB_IMAGE_BASE_URL}/{width}{path}"


def extract_release_year(release_date: object) -> int | None:
    """Año = primeros 4 caracteres de "YYYY-MM-DD"."""
    if not isinstance(release_date, str):
        return None
    head = release_date.strip()[:4]
    if len(head) == 4 and head.isdigit():
        return int(head)
    return None


def _money_str(value: object) -> str | None:
    # 0 en TMDb significa "desconocido"
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not value:
        return None
    return str(int(value)) if float(value).is_integer() else str(value)


def _positive_int_or_none(value: object) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return None
    return value


def _number_or_none(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _first_director(raw: Mapping[str, object]) -> str | None:
    for person in _nested_list(raw, "credits", "crew"):
        if person.get("job") == "Director":
            return _str_or_none(person.get("name"))
    return None


def _top_cast(raw: Mapping[str, object]) -> tuple[str, ...]:
    cast = _nested_list(raw, "credits", "cast")[:CAST_LIMIT]
    return tuple(name for name in (_str_or_none(a.get("name")) for a in cast) if name)


def _youtube_trailer_key(raw: Mapping[str, object]) -> str | None:
    for video in _nested_list(raw, "videos", "results"):
        if video.get("type") == "Trailer" and video.get("site") == "YouTube":
            key = _str_or_none(video.get("key"))
            return key or None
    return None


def _genre_names(raw: Mapping[str, object]) -> tuple[str, ...]:
    names = (_str_or_none(g.get("name")) for g in _list_of_mappings(raw.get("genres")))
    return tuple(n.lower() for n in names if n)


def _keyword_names(raw: Mapping[str, object]) -> tuple[str, ...]:
    names = (_str_or_none(k.get("name")) for k in _nested_list(raw, "keywords", "keywords"))
    return tuple(n for n in names if n)


def imdb_id_of(raw: Mapping[str, object]) -> str | None:
    """imdb_id de external_ids (solo presente en el detalle); si no, el imdb_id de primer nivel."""
    ext = raw.get("external_ids")
    if isinstance(ext, Mapping):
        found = _str_or_none(ext.get("imdb_id"))
        if found:
            return found
    return _str_or_none(raw.get("imdb_id")) or None


# ============================================================
# API
# ============================================================


def transform_tmdb_movie(raw: RawTmdbMovie) -> CanonicalMovie:
    tmdb_id = raw.get("id")
    if not isinstance(tmdb_id, int) or isinstance(tmdb_id, bool):
        tmdb_id = None

    language = _str_or_none(raw.get("original_language"))
    release_date = _str_or_none(raw.get("release_date"))
    status = _str_or_none(raw.get("status"))
    adult = raw.get("adult")
    vote_count = raw.get("vote_count")

    trailer_key = _youtube_trailer_key(raw)

    return CanonicalMovie(
        id=tmdb_id,
        tmdb_id=tmdb_id,
        imdb_id=imdb_id_of(raw),
        title=_str_or_none(raw.get("title")),
        original_title=_str_or_none(raw.get("original_title")),
        language=language,
        release_year=extract_release_year(release_date),
        release_date=release_date,
        genres=_genre_names(raw),
        plot=_str_or_none(raw.get("overview")),
        runtime=_positive_int_or_none(raw.get("runtime")),
        adult=adult if isinstance(adult, bool) else None,
        budget=_money_str(raw.get("budget")),
        revenue=_money_str(raw.get("revenue")),
        homepage=_str_or_none(raw.get("homepage")),
        status=status.lower() if status else None,
        keywords=_keyword_names(raw),
        cast=_top_cast(raw),
        director=_first_director(raw),
        poster_url=image_url(raw.get("poster_path"), POSTER_WIDTH),
        backdrop_url=image_url(raw.get("backdrop_path"), BACKDROP_WIDTH),
        trailer_url=f"{YOUTUBE_WATCH_URL}{trailer_key}" if trailer_key else None,
        trailer_youtube_id=trailer_key,
        tmdb_popularity=_number_or_none(raw.get("popularity")),
        tmdb_rating=_number_or_none(raw.get("vote_average")),
        tmdb_votes=vote_count if isinstance(vote_count, int) and not isinstance(vote_count, bool) else None,
        foreign=language is not None and language != "en",
    )
