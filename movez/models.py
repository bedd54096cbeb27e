"""Movie domain types and a service that consults a cache before a remote source."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

log = logging.getLogger(__name__)


@dataclass
class ListItem:
    """A movie as shown in a listing."""

    title_en: str
    overview: str
    vote_average: float
    genres: list[int] = field(default_factory=list)
    poster_src: str = ""
    release_year: int = 0


@dataclass(frozen=True)
class Genre:
    """A movie genre identified by a numeric id."""

    id: int
    name: str


class MovieCache(Protocol):
    def get_genres(self) -> list[Genre]: ...

    def set_genres(self, genres: list[Genre]) -> None: ...

    def get_movies(self) -> list[ListItem]: ...

    def set_movies(self, movies: list[ListItem]) -> None: ...


class MovieSource(Protocol):
    def get_genres(self) -> list[Genre]: ...

    def get_movies(self, search: str) -> list[ListItem]: ...


class CachedMovieService:
    """Serves genres and the default movie list from a cache, filling it on a miss.

    Searches always go to the underlying service and are never cached.
    """

    def __init__(self, service: MovieSource, cache: MovieCache) -> None:
        if cache is None:
            raise ValueError("no cache provided")
        if service is None:
            raise ValueError("no movies service provided")
        self._cache = cache
        self._service = service

    def get_genres(self) -> list[Genre]:
        cached: list[Genre] = []
        try:
            cached = self._cache.get_genres()
        except Exception as exc:  # a cache failure is never fatal
            log.warning("cache err: %s", exc)

        if cached:
            return list(cached)

        genres = list(self._service.get_genres())
        try:
            self._cache.set_genres(genres)
        except Exception as exc:
            log.warning("cache err: %s", exc)
        return genres

    def get_movies(self, search: str = "") -> list[ListItem]:
        if search:
            return self._service.get_movies(search)

        cached: list[ListItem] = []
        try:
            cached = self._cache.get_movies()
        except Exception as exc:
            log.warning("cache err: %s", exc)

        if cached:
            return list(cached)

        movies = self._service.get_movies(search)
        try:
            self._cache.set_movies(movies)
        except Exception as exc:
            log.warning("cache err: %s", exc)
        return movies