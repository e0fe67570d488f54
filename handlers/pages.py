"""Page handlers registered on the default route table."""

from response import HTTPResponse, render_page
from router import RouteTable, build_route_table


def hello(raw_request: str) -> HTTPResponse:
    _ = raw_request
    return render_page("Hello Page", "Hello, Python HTTP Server!")


def goodbye(raw_request: str) -> HTTPResponse:
    _ = raw_request
    return render_page("Goodbye Page", "Goodbye, Python HTTP Server!")


def submit(raw_request: str) -> HTTPResponse:
    _ = raw_request
    return render_page("Submission Page", "Data submitted successfully!")


def not_found(raw_request: str) -> HTTPResponse:
    _ = raw_request
    return render_page("404 - Not Found", "Not Found", 404)


def default_routes() -> RouteTable:
    return build_route_table(
        [
            ("GET", "/hello", hello),
            ("GET", "/bye", goodbye),
            ("POST", "/submit", submit),
        ]
    )
