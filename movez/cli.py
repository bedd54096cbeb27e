"""Command that migrates the cache database and serves the movie pages."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading

from movez.cache import SqliteCache
from movez.handler import MovieHandler
from movez.migrate import up
from movez.models import CachedMovieService
from movez.server import ApiServer
from movez.tmdb import TmdbService

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="movez", description="Serve a movie listing.")
    parser.add_argument("-token", "--token", default="", help="themoviedb access_token")
    parser.add_argument(
        "-sqlite_path", "--sqlite_path", default="testar", help="Path to your sqlite db"
    )
    parser.add_argument(
        "-migrations_dir",
        "--migrations_dir",
        default="migrations",
        help="Directory of numbered SQL migration files",
    )
    parser.add_argument(
        "-templates_dir",
        "--templates_dir",
        default="templates",
        help="Directory holding movies.html and movie_list.html",
    )
    return parser


def _wait_for_shutdown() -> None:
    stop = threading.Event()
    previous = {
        sig: signal.signal(sig, lambda *_: stop.set())
        for sig in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        while not stop.wait(0.5):
            pass
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO)
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.token:
        parser.print_usage(sys.stderr)
        log.error("no token flag")
        return 1

    try:
        up(args.sqlite_path, args.migrations_dir)
    except Exception as exc:
        log.error("ruh roh... %s", exc)
        return 1

    cache = SqliteCache(args.sqlite_path)
    try:
        service = CachedMovieService(TmdbService(args.token), cache)
        handler = MovieHandler(service, args.templates_dir)
        server = ApiServer(handler.routes())
        server.run()
    except Exception as exc:
        log.error("ruh roh.. %s", exc)
        cache.close()
        return 1

    try:
        _wait_for_shutdown()
    finally:
        cache.close()
        server.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())