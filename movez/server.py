"""A small threaded HTTP server that dispatches to method-and-path routes."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qs, urlsplit

log = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 1337
SHUTDOWN_TIMEOUT = 5.0

RouteHandler = Callable[[Mapping[str, str]], str]


@dataclass(frozen=True)
class Route:
    """A pattern such as ``"GET /movies"`` and the function that answers it.

    The handler receives the query parameters and returns an HTML body.
    """

    pattern: str
    handler: RouteHandler

    @property
    def method(self) -> str | None:
        method, sep, _ = self.pattern.partition(" ")
        return method if sep else None

    @property
    def path(self) -> str:
        _, sep, path = self.pattern.partition(" ")
        return path.strip() if sep else self.pattern

    def matches_path(self, path: str) -> bool:
        if self.path.endswith("/"):
            return path.startswith(self.path)
        return path == self.path

    def allows(self, method: str) -> bool:
        return (
            self.method is None
            or self.method == method
            or (self.method == "GET" and method == "HEAD")
        )


class _HttpServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address: tuple[str, int], routes: Sequence[Route]) -> None:
        self.routes = list(routes)
        super().__init__(address, _RequestHandler)


class _RequestHandler(BaseHTTPRequestHandler):
    server: _HttpServer

    def do_GET(self) -> None:
        self._dispatch()

    def do_HEAD(self) -> None:
        self._dispatch()

    def do_POST(self) -> None:
        self._dispatch()

    def do_PUT(self) -> None:
        self._dispatch()

    def do_DELETE(self) -> None:
        self._dispatch()

    def do_PATCH(self) -> None:
        self._dispatch()

    def log_message(self, format: str, *args: object) -> None:
        log.debug("%s - %s", self.address_string(), format % args)

    def _dispatch(self) -> None:
        url = urlsplit(self.path)
        candidates = [r for r in self.server.routes if r.matches_path(url.path)]
        if not candidates:
            self._reply(404, "404 page not found\n", "text/plain; charset=utf-8")
            return
        longest = max(len(r.path) for r in candidates)
        candidates = [r for r in candidates if len(r.path) == longest]
        allowed = [r for r in candidates if r.allows(self.command)]
        if not allowed:
            methods = sorted({r.method for r in candidates if r.method})
            self._reply(
                405,
                "Method Not Allowed\n",
                "text/plain; charset=utf-8",
                {"Allow": ", ".join(methods)},
            )
            return
        route = next((r for r in allowed if r.method is not None), allowed[0])
        query = {key: values[0] for key, values in parse_qs(url.query, keep_blank_values=True).items()}
        try:
            body = route.handler(query)
        except Exception:
            log.exception("handler for %s failed", route.pattern)
            self._reply(500, "Internal Server Error\n", "text/plain; charset=utf-8")
            return
        self._reply(200, body, "text/html; charset=utf-8")

    def _reply(
        self,
        status: int,
        body: str,
        content_type: str,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        data = body.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(data)))
        for name, value in (headers or {}).items():
            self.send_header(name, value)
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(data)


class ApiServer:
    """Serves a set of routes in a background thread."""

    def __init__(
        self,
        routes: Sequence[Route],
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
    ) -> None:
        self.routes = list(routes)
        self.host = host
        self.port = port
        self._httpd: _HttpServer | None = None
        self._thread: threading.Thread | None = None

    def run(self) -> None:
        """Bind the socket and start serving; the bound port is kept in ``port``."""
        self._httpd = _HttpServer((self.host, self.port), self.routes)
        self.port = self._httpd.server_address[1]
        self._thread = threading.Thread(target=self._httpd.serve_forever, daemon=True)
        self._thread.start()
        log.info("server running at: %s:%d", self.host, self.port)

    def close(self) -> None:
        """Stop serving and release the socket."""
        if self._httpd is None:
            return
        self._httpd.shutdown()
        self._httpd.server_close()
        if self._thread is not None:
            self._thread.join(timeout=SHUTDOWN_TIMEOUT)
        self._httpd = None
        self._thread = None