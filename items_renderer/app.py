"""HTTP routing and serving for the renderer handlers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus
from typing import Any, Callable, Iterable, Mapping, Protocol
from wsgiref.simple_server import make_server

from .handlers import CATALOGUE_ENDPOINT, CATEGORY_ENDPOINT, PAGE_ENDPOINT

logger = logging.getLogger(__name__)

DEFAULT_HOST = ""
DEFAULT_PORT = 8080


class Handler(Protocol):
    def handle(self, params: Mapping[str, str]) -> str: ...


class RouteNotFound(LookupError):
    """No registered pattern matches the request path."""


class MethodNotAllowed(LookupError):
    """A pattern matches the path, but not the request method."""

    def __init__(self, allowed: Iterable[str]) -> None:
        self.allowed = tuple(sorted(set(allowed)))
        super().__init__(f"method not allowed; allowed: {', '.join(self.allowed)}")


class _Tail(Enum):
    EXACT = 0
    DOLLAR = 1
    REST = 2
    PREFIX = 3


@dataclass(frozen=True)
class _Pattern:
    text: str
    method: str | None
    segments: tuple[tuple[bool, str], ...]  # (is_wildcard, literal or name)
    tail: _Tail
    rest_name: str | None

    @classmethod
    def parse(cls, text: str) -> _Pattern:
        method, sep, path = text.partition(" ")
        if not sep:
            method, path = "", text
        path = path.strip()
        if not path.startswith("/"):
            raise ValueError(f"pattern {text!r} must have a path starting with '/'")
        parts = path[1:].split("/")
        last = parts[-1]
        rest_name = None
        if last == "{$}":
            tail, parts = _Tail.DOLLAR, parts[:-1]
        elif last == "":
            tail, parts = _Tail.PREFIX, parts[:-1]
        elif last.startswith("{") and last.endswith("...}"):
            tail, rest_name, parts = _Tail.REST, last[1:-4], parts[:-1]
            if not rest_name.isidentifier():
                raise ValueError(f"bad wildcard name in pattern {text!r}")
        else:
            tail = _Tail.EXACT
        segments = []
        names = {rest_name} if rest_name else set()
        for part in parts:
            if part.startswith("{") and part.endswith("}"):
                name = part[1:-1]
                if not name.isidentifier():
                    raise ValueError(f"bad wildcard {part!r} in pattern {text!r}")
                if name in names:
                    raise ValueError(f"duplicate wildcard {name!r} in pattern {text!r}")
                names.add(name)
                segments.append((True, name))
            elif "{" in part or "}" in part:
                raise ValueError(f"bad segment {part!r} in pattern {text!r}")
            else:
                segments.append((False, part))
        return cls(text, method.upper() or None, tuple(segments), tail, rest_name)

    def match_path(self, parts: list[str]) -> dict[str, str] | None:
        count = len(self.segments)
        if self.tail is _Tail.EXACT and len(parts) != count:
            return None
        if self.tail is _Tail.DOLLAR and parts != [*parts[:count], ""]:
            return None
        if self.tail is _Tail.DOLLAR and len(parts) != count + 1:
            return None
        if self.tail in (_Tail.PREFIX, _Tail.REST) and len(parts) < count + 1:
            return None
        params: dict[str, str] = {}
        for (is_wildcard, value), part in zip(self.segments, parts):
            if is_wildcard:
                if not part:
                    return None
                params[value] = part
            elif value != part:
                return None
        if self.rest_name is not None:
            params[self.rest_name] = "/".join(parts[count:])
        return params

    def allows(self, method: str) -> bool:
        if self.method is None:
            return True
        return method == self.method or (self.method == "GET" and method == "HEAD")

    @property
    def specificity(self) -> tuple[Any, ...]:
        return (
            tuple(1 if is_wildcard else 0 for is_wildcard, _ in self.segments),
            self.tail.value,
            0 if self.method else 1,
        )


class Router:
    """A WSGI application dispatching requests by method and path pattern."""

    def __init__(self) -> None:
        self._routes: list[tuple[_Pattern, Handler]] = []

    def handle(self, pattern: str, handler: Handler) -> None:
        """Register ``handler`` for ``pattern`` such as ``"GET /product/{id}"``."""
        parsed = _Pattern.parse(pattern)
        key = (parsed.method, parsed.segments, parsed.tail)
        if any((p.method, p.segments, p.tail) == key for p, _ in self._routes):
            raise ValueError(f"pattern {pattern!r} conflicts with a registered pattern")
        self._routes.append((parsed, handler))

    def match(self, method: str, path: str) -> tuple[Handler, dict[str, str]]:
        """Find the most specific handler for the request and its path values.

        Raises RouteNotFound or MethodNotAllowed.
        """
        if not path.startswith("/"):
            raise RouteNotFound(path)
        parts = path[1:].split("/")
        method = method.upper()
        candidates = []
        allowed: set[str] = set()
        for pattern, handler in self._routes:
            params = pattern.match_path(parts)
            if params is None:
                continue
            if pattern.allows(method):
                candidates.append((pattern.specificity, handler, params))
            elif pattern.method is not None:
                allowed.add(pattern.method)
                if pattern.method == "GET":
                    allowed.add("HEAD")
        if candidates:
            _, handler, params = min(candidates, key=lambda c: c[0])
            return handler, params
        if allowed:
            raise MethodNotAllowed(allowed)
        raise RouteNotFound(path)

    def __call__(
        self, environ: Mapping[str, Any], start_response: Callable[..., Any]
    ) -> list[bytes]:
        method = str(environ.get("REQUEST_METHOD", "GET")).upper()
        path = _request_path(environ)
        try:
            handler, params = self.match(method, path)
        except MethodNotAllowed as exc:
            return _respond(
                start_response,
                HTTPStatus.METHOD_NOT_ALLOWED,
                "Method Not Allowed\n",
                method,
                [("Allow", ", ".join(exc.allowed))],
            )
        except RouteNotFound:
            return _respond(start_response, HTTPStatus.NOT_FOUND, "404 page not found\n", method)
        try:
            body = handler.handle(params)
        except Exception:
            logger.exception("handler failed for %s %s", method, path)
            return _respond(
                start_response, HTTPStatus.INTERNAL_SERVER_ERROR, "Internal Server Error\n", method
            )
        return _respond(
            start_response, HTTPStatus.OK, body, method, content_type="text/html; charset=utf-8"
        )


def _request_path(environ: Mapping[str, Any]) -> str:
    raw = environ.get("PATH_INFO") or "/"
    try:
        path = raw.encode("latin-1").decode("utf-8")
    except UnicodeError:
        path = raw
    return path if path.startswith("/") else "/" + path


def _respond(
    start_response: Callable[..., Any],
    status: HTTPStatus,
    body: str,
    method: str,
    extra_headers: list[tuple[str, str]] | None = None,
    content_type: str = "text/plain; charset=utf-8",
) -> list[bytes]:
    payload = body.encode("utf-8")
    headers = [("Content-Type", content_type), ("Content-Length", str(len(payload)))]
    headers += extra_headers or []
    start_response(f"{status.value} {status.phrase}", headers)
    return [] if method == "HEAD" else [payload]


def compose(catalogue_handler: Handler, category_handler: Handler, page_handler: Handler) -> Router:
    """Build the router serving the catalogue, category and product pages."""
    router = Router()
    router.handle(CATEGORY_ENDPOINT, category_handler)
    router.handle(CATALOGUE_ENDPOINT, catalogue_handler)
    router.handle(PAGE_ENDPOINT, page_handler)
    return router


def serve(app: Callable[..., Any], host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """Serve ``app`` over HTTP until interrupted."""
    with make_server(host, port, app) as server:
        logger.info("listening on %s:%d", host or "*", port)
        server.serve_forever()