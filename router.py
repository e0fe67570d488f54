"""Routing table for exact path/method handlers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import NamedTuple

from response import HTTPResponse

logger = logging.getLogger(__name__)

Handler = Callable[[str], HTTPResponse]

KNOWN_METHODS = frozenset(
    {
        "GET",
        "HEAD",
        "POST",
        "PUT",
        "DELETE",
        "OPTIONS",
        "PATCH",
        "TRACE",
        "CONNECT",
    }
)


class RouteKey(NamedTuple):
    path: str
    method: str


class RouteTableFrozenError(RuntimeError):
    """Raised when a route is added after the table has been frozen."""


class RouteTable:
    """Read-only route mapping shared by every connection thread."""

    __slots__ = ("_routes",)

    def __init__(self, routes: Mapping[RouteKey, Handler]) -> None:
        self._routes: Mapping[RouteKey, Handler] = MappingProxyType(dict(routes))

    def resolve(self, path: str, method: str) -> Handler | None:
        return self._routes.get(RouteKey(path, method))

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, key: object) -> bool:
        return key in self._routes

    def __iter__(self) -> Iterator[RouteKey]:
        return iter(self._routes)


class Router:
    def __init__(self) -> None:
        self._routes: dict[RouteKey, Handler] = {}
        self._frozen = False

    def add_route(self, method: str, path: str, handler: Handler) -> None:
        if self._frozen:
            raise RouteTableFrozenError("routes cannot be added after freeze()")
        if method not in KNOWN_METHODS:
            raise ValueError(f"unsupported method: {method!r}")
        if not path.startswith("/"):
            raise ValueError("path must start with '/'")

        key = RouteKey(path, method)
        if key in self._routes:
            logger.debug("Replacing handler for %s %s", method, path)
        self._routes[key] = handler

    def freeze(self) -> RouteTable:
        self._frozen = True
        return RouteTable(self._routes)


def build_route_table(routes: Iterable[tuple[str, str, Handler]]) -> RouteTable:
    """Build a frozen table from (method, path, handler) triples; later entries win."""
    router = Router()
    for method, path, handler in routes:
        router.add_route(method, path, handler)
    return router.freeze()
