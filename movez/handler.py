"""HTML pages for the movie listing."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from movez.models import Genre, ListItem
from movez.server import Route

log = logging.getLogger(__name__)

MOVIES_HTML = "movies.html"
MOVIE_LIST_HTML = "movie_list.html"
APOLOGY = "SORRY! :D"


class HandlerData(Protocol):
    def get_genres(self) -> list[Genre]: ...

    def get_movies(self, search: str) -> list[ListItem]: ...


@dataclass
class MovieView:
    """A movie prepared for display, with genre names."""

    title_en: str
    overview: str
    vote_average: float
    genres: list[str] = field(default_factory=list)
    poster_src: str = ""
    release_year: int = 0


def _round_tenths(value: float) -> float:
    return math.copysign(math.floor(abs(value) * 10 + 0.5), value) / 10


def to_view_items(movies: Iterable[ListItem], genres: Iterable[Genre]) -> list[MovieView]:
    """Resolve genre ids to names and round vote averages to one decimal."""
    names: dict[int, str] = {}
    for genre in genres:
        names.setdefault(genre.id, genre.name)
    return [
        MovieView(
            title_en=movie.title_en,
            overview=movie.overview,
            vote_average=_round_tenths(movie.vote_average),
            genres=[names[g] for g in movie.genres if g in names],
            poster_src=movie.poster_src,
            release_year=movie.release_year,
        )
        for movie in movies
    ]


class MovieHandler:
    """Renders the movie page and the movie list fragment."""

    def __init__(self, data: HandlerData, templates_dir: str | Path) -> None:
        directory = Path(templates_dir)
        if not directory.is_dir() or not any(directory.glob("*.html")):
            raise FileNotFoundError(f"no templates found in {directory}")
        self._env = Environment(
            loader=FileSystemLoader(str(directory)),
            autoescape=select_autoescape(["html"]),
        )
        self._data = data

    def routes(self) -> list[Route]:
        return [
            Route("GET /movies", lambda query: self.render_movies()),
            Route(
                "GET /movie-list",
                lambda query: self.render_movie_list(query.get("search", "")),
            ),
        ]

    def render_movies(self) -> str:
        try:
            return self._env.get_template(MOVIES_HTML).render()
        except TemplateError as exc:
            log.warning("rendering %s failed: %s", MOVIES_HTML, exc)
            return APOLOGY

    def render_movie_list(self, search: str = "") -> str:
        parts: list[str] = []

        movies: list[ListItem] = []
        try:
            movies = self._data.get_movies(search)
        except Exception as exc:
            log.warning("movies unavailable: %s", exc)
            parts.append(APOLOGY)

        genres: list[Genre] = []
        try:
            genres = self._data.get_genres()
        except Exception as exc:
            log.warning("genres unavailable: %s", exc)
            parts.append(APOLOGY)

        try:
            template = self._env.get_template(MOVIE_LIST_HTML)
            parts.append(template.render(movies=to_view_items(movies, genres)))
        except TemplateError as exc:
            log.warning("rendering %s failed: %s", MOVIE_LIST_HTML, exc)
            parts.append(APOLOGY)
        return "".join(parts)