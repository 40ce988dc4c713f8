from __future__ import annotations

"""
backend/movie_models.py

Esquemas en la frontera con TMDb/OMDb + record canónico servido al cliente.

- RawTmdbMovie / RawOmdbRecord: TypedDict (total=False). Son payloads JSON
  "opacos": solo tipamos los campos que consumimos.
- CanonicalMovie: dataclass congelada. Se construye una vez por población de
  caché y no se muta (el merge devuelve una copia con dataclasses.replace).
- MoviePage: sobre de paginación de los listados TMDb (page/total_*).
"""

from dataclasses import dataclass, field
from typing import Any, TypedDict

# ============================================================
# TMDb (fuente primaria)
# ============================================================


class TmdbGenre(TypedDict):
    id: int
    name: str


class TmdbCastMember(TypedDict, total=False):
    name: str
    character: str
    order: int


class TmdbCrewMember(TypedDict, total=False):
    name: str
    job: str
    department: str


class TmdbCredits(TypedDict, total=False):
    cast: list[TmdbCastMember]
    crew: list[TmdbCrewMember]


class TmdbVideo(TypedDict, total=False):
    key: str
    site: str
    type: str
    name: str


class TmdbVideos(TypedDict, total=False):
    results: list[TmdbVideo]


class TmdbExternalIds(TypedDict, total=False):
    imdb_id: str | None


class TmdbKeyword(TypedDict, total=False):
    id: int
    name: str


class TmdbKeywords(TypedDict, total=False):
    keywords: list[TmdbKeyword]


class RawTmdbMovie(TypedDict, total=False):
    """
    Record de TMDb (listados o detalle).

    credits/videos/external_ids/keywords solo llegan en el detalle
    (append_to_response); en listados no existen.
    """

    id: int
    title: str
    original_title: str
    original_language: str
    release_date: str
    overview: str
    poster_path: str | None
    backdrop_path: str | None
    genres: list[TmdbGenre]
    genre_ids: list[int]
    runtime: int | None
    adult: bool
    budget: int | None
    revenue: int | None
    homepage: str | None
    status: str | None
    popularity: float
    vote_average: float
    vote_count: int
    credits: TmdbCredits
    videos: TmdbVideos
    external_ids: TmdbExternalIds
    keywords: TmdbKeywords
    imdb_id: str | None


class RawTmdbPage(TypedDict, total=False):
    page: int
    total_pages: int
    total_results: int
    results: list[RawTmdbMovie]


class RawTmdbGenreList(TypedDict):
    genres: list[TmdbGenre]


# ============================================================
# OMDb (fuente secundaria). Todo string; "N/A" = ausente.
# ============================================================


class OmdbRatingSource(TypedDict):
    Source: str
    Value: str


class RawOmdbRecord(TypedDict, total=False):
    Title: str
    Year: str
    Plot: str
    Director: str
    Runtime: str
    imdbID: str
    imdbRating: str
    imdbVotes: str
    Metascore: str
    Ratings: list[OmdbRatingSource]
    Response: str
    Error: str


class OmdbSearchHit(TypedDict, total=False):
    Title: str
    Year: str
    imdbID: str
    Type: str
    Poster: str


class RawOmdbSearch(TypedDict, total=False):
    Search: list[OmdbSearchHit]
    totalResults: str
    Response: str
    Error: str


# ============================================================
# Record canónico
# ============================================================


@dataclass(frozen=True)
class CanonicalMovie:
    id: int | None
    tmdb_id: int | None
    imdb_id: str | None
    title: str | None
    original_title: str | None
    language: str | None
    release_year: int | None
    release_date: str | None
    genres: tuple[str, ...]
    plot: str | None
    runtime: int | None
    adult: bool | None
    budget: str | None
    revenue: str | None
    homepage: str | None
    status: str | None
    keywords: tuple[str, ...]
    cast: tuple[str, ...]
    director: str | None
    poster_url: str | None
    backdrop_url: str | None
    trailer_url: str | None
    trailer_youtube_id: str | None
    tmdb_popularity: float | None
    tmdb_rating: float | None
    tmdb_votes: int | None
    foreign: bool
    # Solo presentes tras un merge con OMDb.
    imdb_rating: float | None = None
    imdb_votes: int | None = None
    rt_critic_rating: int | None = None
    metacritic_rating: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Forma JSON (camelCase) que consume el front. Los ratings OMDb no adoptados se omiten."""
        out: dict[str, Any] = {
            "id": self.id,
            "tmdbId": self.tmdb_id,
            "imdbId": self.imdb_id,
            "title": self.title,
            "originalTitle": self.original_title,
            "language": self.language,
            "releaseYear": self.release_year,
            "releaseDate": self.release_date,
            "genres": list(self.genres),
            "plot": self.plot,
            "runtime": self.runtime,
            "adult": self.adult,
            "budget": self.budget,
            "revenue": self.revenue,
            "homepage": self.homepage,
            "status": self.status,
            "keywords": list(self.keywords),
            "cast": list(self.cast),
            "director": self.director,
            "posterUrl": self.poster_url,
            "backdropUrl": self.backdrop_url,
            "trailerUrl": self.trailer_url,
            "trailerYouTubeId": self.trailer_youtube_id,
            "tmdbPopularity": self.tmdb_popularity,
            "tmdbRating": self.tmdb_rating,
            "tmdbVotes": self.tmdb_votes,
            "foreign": self.foreign,
        }
        optional = {
            "imdbRating": self.imdb_rating,
            "imdbVotes": self.imdb_votes,
            "rtCriticRating": self.rt_critic_rating,
            "metacriticRating": self.metacritic_rating,
        }
        for k, v in optional.items():
            if v is not None:
                out[k] = v
        return out


@dataclass(frozen=True)
class MoviePage:
    page: int
    total_pages: int
    total_results: int
    results: tuple[CanonicalMovie, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "total_pages": self.total_pages,
            "total_results": self.total_results,
            "results": [m.to_dict() for m in self.results],
        }
