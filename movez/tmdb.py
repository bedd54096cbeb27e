"""Client for the movie database HTTP API."""

from __future__ import annotations

import json
import logging
import re
import urllib.error
import urllib.request
from datetime import date
from typing import Any
from urllib.parse import urlencode

from movez.models import Genre, ListItem

log = logging.getLogger(__name__)

GENRE_URL = "https://api.themoviedb.org/3/genre/movie/list"
TOP_LIST_URL = "https://api.themoviedb.org/3/discover/movie"
SEARCH_URL = "https://api.themoviedb.org/3/search/movie"
REQUEST_TIMEOUT = 5.0

_DATE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")


class TmdbError(Exception):
    """A request to the movie database failed."""


def parse_release_date(s: str) -> date:
    """Parse a YYYY-MM-DD date; raise ValueError otherwise."""
    match = _DATE.fullmatch(s)
    if match is None:
        raise ValueError(f"invalid date {s!r}")
    year, month, day = (int(part) for part in match.groups())
    return date(year, month, day)


def genres_from_response(payload: dict[str, Any]) -> list[Genre]:
    """Build genres from a decoded genre list response."""
    return [
        Genre(id=int(item.get("id") or 0), name=item.get("name") or "")
        for item in payload.get("genres") or []
    ]


def movies_from_response(payload: dict[str, Any]) -> list[ListItem]:
    """Build list items from a decoded movie response, skipping undated entries."""
    movies = []
    for item in payload.get("results") or []:
        raw_date = item.get("release_date") or ""
        try:
            released = parse_release_date(raw_date)
        except ValueError:
            log.info("failed to parse date '%s' for movie id %s", raw_date, item.get("id", 0))
            continue
        movies.append(
            ListItem(
                title_en=item.get("title") or "",
                overview=item.get("overview") or "",
                vote_average=float(item.get("vote_average") or 0.0),
                genres=list(item.get("genre_ids") or []),
                poster_src=item.get("poster_path") or "",
                release_year=released.year,
            )
        )
    return movies


def build_movies_url(search: str) -> str:
    """URL for the top list, or for a search when one is given."""
    params = {
        "page": "1",
        "include_adult": "false",
        "sort_by": "vote_average.desc",
        "vote_count.gte": "1000",
    }
    base = TOP_LIST_URL
    if search:
        base = SEARCH_URL
        params["query"] = search
    return f"{base}?{urlencode(sorted(params.items()))}"


def _decode(body: bytes) -> dict[str, Any]:
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise TmdbError(f"invalid response: {exc}") from exc
    if not isinstance(payload, dict):
        raise TmdbError("invalid response: expected an object")
    return payload


class TmdbService:
    """Fetches genres and movies using a bearer access token."""

    def __init__(self, access_token: str) -> None:
        self._access_token = access_token

    def _request(self, url: str) -> urllib.request.Request:
        return urllib.request.Request(
            url,
            method="GET",
            headers={
                "accept": "application/json",
                "Authorization": f"Bearer {self._access_token}",
            },
        )

    def get_genres(self) -> list[Genre]:
        url = f"{GENRE_URL}?{urlencode({'language': 'en'})}"
        try:
            with urllib.request.urlopen(self._request(url), timeout=REQUEST_TIMEOUT) as res:
                if res.status != 200:
                    raise TmdbError("failed to get genres")
                body = res.read()
        except urllib.error.HTTPError as exc:
            raise TmdbError("failed to get genres") from exc
        except OSError as exc:
            raise TmdbError(str(exc)) from exc
        return genres_from_response(_decode(body))

    def get_movies(self, search: str = "") -> list[ListItem]:
        url = build_movies_url(search)
        try:
            with urllib.request.urlopen(self._request(url), timeout=REQUEST_TIMEOUT) as res:
                body = res.read()
        except urllib.error.HTTPError as exc:
            # The body of an error reply is decoded like any other.
            body = exc.read()
        except OSError as exc:
            raise TmdbError(str(exc)) from exc
        return movies_from_response(_decode(body))