"""Resolve parsed requests to handlers and produce their responses."""

import logging

from handlers.pages import not_found
from request import HTTPRequest
from response import HTTPResponse
from router import Handler, RouteTable

logger = logging.getLogger(__name__)


def find_handler(routes: RouteTable, path: str, method: str) -> Handler | None:
    return routes.resolve(path, method)


def dispatch(routes: RouteTable, request: HTTPRequest) -> HTTPResponse:
    """Run the matching handler, or the fixed 404 handler when nothing matches.

    Handlers receive the raw request text. Exceptions raised by a handler are
    left for the caller to contain.
    """
    handler = find_handler(routes, request.path, request.method)
    if handler is None:
        logger.debug("No route for %s %s", request.method, request.path)
        handler = not_found
    return handler(request.raw_text)
