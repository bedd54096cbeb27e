"""SQLite-backed cache of genres and the default movie list."""

from __future__ import annotations

import logging
import sqlite3
import threading
from collections.abc import Iterable

from movez.csvutil import csv_to_ints, ints_to_csv
from movez.models import Genre, ListItem

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


class CacheMiss(LookupError):
    """The cache holds nothing for the requested data."""


class SqliteCache:
    """Stores genres and movies in the `genres` and `movies` tables of a database."""

    def __init__(self, path: str) -> None:
        self._conn = sqlite3.connect(
            path,
            timeout=DEFAULT_TIMEOUT,
            isolation_level=None,
            check_same_thread=False,
        )
        self._lock = threading.Lock()

    def get_genres(self) -> list[Genre]:
        with self._lock:
            try:
                rows = self._conn.execute("select id, name from genres").fetchall()
            except sqlite3.Error as exc:
                log.warning("genre lookup failed: %s", exc)
                rows = []
        if not rows:
            raise CacheMiss("no genres in cache")
        return [Genre(id=int(row[0]), name=str(row[1])) for row in rows]

    def set_genres(self, genres: Iterable[Genre]) -> None:
        with self._lock:
            self._conn.executemany(
                "insert into genres(id, name) values(?, ?)",
                ((g.id, g.name) for g in genres),
            )

    def get_movies(self) -> list[ListItem]:
        query = (
            "select title_en, overview, vote_avg, genre_ids_csv, poster_src, release_year "
            "from movies"
        )
        with self._lock:
            try:
                rows = self._conn.execute(query).fetchall()
            except sqlite3.Error as exc:
                log.warning("movie lookup failed: %s", exc)
                rows = []
        if not rows:
            raise CacheMiss("no movies in cache")
        return [
            ListItem(
                title_en=title or "",
                overview=overview or "",
                vote_average=float(vote or 0.0),
                genres=csv_to_ints(genre_csv or ""),
                poster_src=poster or "",
                release_year=int(year or 0),
            )
            for title, overview, vote, genre_csv, poster, year in rows
        ]

    def set_movies(self, movies: Iterable[ListItem]) -> None:
        with self._lock:
            self._conn.executemany(
                "insert into movies(overview, poster_src, title_en, genre_ids_csv, "
                "release_year, vote_avg) values (?, ?, ?, ?, ?, ?)",
                (
                    (
                        m.overview,
                        m.poster_src,
                        m.title_en,
                        ints_to_csv(m.genres),
                        m.release_year,
                        float(m.vote_average),
                    )
                    for m in movies
                ),
            )

    def close(self) -> None:
        with self._lock:
            self._conn.close()
        log.info("pool closed")

    def __enter__(self) -> SqliteCache:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()