"""A WSGI request multiplexer backed by one router per HTTP method."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable

from .router import Params, Record, Router

HandlerFunc = Callable[[dict, Callable[..., Any], Params], Iterable[bytes]]


def not_found(request: dict, start_response: Callable[..., Any], params: Params) -> list[bytes]:
    """Reply with a plain 404 not found response."""
    body = b"404 page not found\n"
    start_response(
        "404 Not Found",
        [
            ("Content-Type", "text/plain; charset=utf-8"),
            ("X-Content-Type-Options", "nosniff"),
            ("Content-Length", str(len(body))),
        ],
    )
    return [body]


@dataclass(frozen=True)
class Handler:
    """A handler function bound to an HTTP method and a routing path."""

    method: str
    path: str
    func: HandlerFunc


class ServeMux:
    """A WSGI application dispatching requests by method and path."""

    def __init__(
        self,
        routers: dict[str, Router] | None = None,
        not_found_handler: HandlerFunc = not_found,
    ) -> None:
        self.routers: dict[str, Router] = routers or {}
        self.not_found_handler = not_found_handler

    def resolve(self, method: str, path: str) -> tuple[HandlerFunc, Params]:
        """Return the handler and path parameters for a request."""
        router = self.routers.get(method)
        if router is not None:
            func, params, found = router.lookup(path)
            if found:
                return func, params
        return self.not_found_handler, Params()

    def __call__(self, environ: dict, start_response: Callable[..., Any]) -> Iterable[bytes]:
        method = environ.get("REQUEST_METHOD", "GET")
        path = environ.get("PATH_INFO") or "/"
        func, params = self.resolve(method, path)
        body = func(environ, start_response, params)
        if method == "HEAD":
            close = getattr(body, "close", None)
            if callable(close):
                close()
            return []
        return body


class Mux:
    """Collects handlers and builds a ServeMux from them."""

    def get(self, path: str, func: HandlerFunc) -> Handler:
        return self.handler("GET", path, func)

    def post(self, path: str, func: HandlerFunc) -> Handler:
        return self.handler("POST", path, func)

    def put(self, path: str, func: HandlerFunc) -> Handler:
        return self.handler("PUT", path, func)

    def head(self, path: str, func: HandlerFunc) -> Handler:
        return self.handler("HEAD", path, func)

    def handler(self, method: str, path: str, func: HandlerFunc) -> Handler:
        return Handler(method, path, func)

    def build(self, handlers: Iterable[Handler]) -> ServeMux:
        """Build the routing tables; raises RouterError on a bad table."""
        records: dict[str, list[Record]] = {}
        for h in handlers:
            records.setdefault(h.method, []).append(Record(h.path, h.func))
        routers = {}
        for method, method_records in records.items():
            router = Router()
            router.build(method_records)
            routers[method] = router
        return ServeMux(routers)