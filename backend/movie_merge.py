from __future__ import annotations

"""
backend/movie_merge.py

(CanonicalMovie, RawOmdbRecord) -> CanonicalMovie

Precedencia campo a campo (TMDb es autoritativo salvo para ratings):

| Campo              | Regla                                                        |
|--------------------|--------------------------------------------------------------|
| imdb_rating        | OMDb si presente y != "N/A"                                  |
| imdb_votes         | OMDb si presente y != "N/A" (sin separadores de miles)       |
| rt_critic_rating   | Ratings[Source="Rotten Tomatoes"], sin "%"                   |
| metacritic_rating  | Metascore si presente y != "N/A"                             |
| plot               | OMDb solo si el plot de TMDb está vacío                      |
| director           | OMDb solo si el director de TMDb está vacío                  |
| runtime            | "<N> min" de OMDb solo si TMDb no trae runtime               |

El resto de campos (title, ids, genres, cast, ...) NUNCA se tocan.
No muta `movie`: devuelve una copia (dataclasses.replace).
"""

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from backend.movie_models import CanonicalMovie, RawOmdbRecord
from backend.omdb_client import (
    normalize_imdb_votes,
    parse_imdb_rating_from_omdb,
    parse_metascore_from_omdb,
    parse_rt_score_from_omdb,
    parse_runtime_minutes,
    text_or_none,
)


def merge_omdb_into_movie(movie: CanonicalMovie, omdb: RawOmdbRecord) -> CanonicalMovie:
    data: Mapping[str, object] = omdb
    changes: dict[str, Any] = {}

    imdb_rating = parse_imdb_rating_from_omdb(data)
    if imdb_rating is not None:
        changes["imdb_rating"] = imdb_rating

    imdb_votes = normalize_imdb_votes(data.get("imdbVotes"))
    if imdb_votes is not None:
        changes["imdb_votes"] = imdb_votes

    rt = parse_rt_score_from_omdb(data)
    if rt is not None:
        changes["rt_critic_rating"] = rt

    metascore = parse_metascore_from_omdb(data)
    if metascore is not None:
        changes["metacritic_rating"] = metascore

    if not movie.plot:
        plot = text_or_none(data.get("Plot"))
        if plot:
            changes["plot"] = plot

    if not movie.director:
        director = text_or_none(data.get("Director"))
        if director:
            changes["director"] = director

    if movie.runtime is None:
        runtime = parse_runtime_minutes(data.get("Runtime"))
        if runtime is not None:
            changes["runtime"] = runtime

    return replace(movie, **changes)
