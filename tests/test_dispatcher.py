"""Unit tests for request dispatch and the default page handlers."""

from dispatcher import dispatch, find_handler
from handlers.pages import default_routes, goodbye, hello, not_found, submit
from request import HTTPRequest
from response import HTTPResponse
from router import RouteKey, build_route_table


def _request(raw: bytes) -> HTTPRequest:
    return HTTPRequest.from_bytes(raw)


def test_default_routes_surface() -> None:
    routes = default_routes()

    assert set(routes) == {
        RouteKey("/hello", "GET"),
        RouteKey("/bye", "GET"),
        RouteKey("/submit", "POST"),
    }
    assert find_handler(routes, "/hello", "GET") is hello
    assert find_handler(routes, "/bye", "GET") is goodbye
    assert find_handler(routes, "/submit", "POST") is submit


def test_find_handler_returns_none_without_match() -> None:
    routes = default_routes()

    assert find_handler(routes, "/Hello", "GET") is None
    assert find_handler(routes, "/hello", "POST") is None
    assert find_handler(routes, "/pot", "BREW") is None


def test_dispatch_hello() -> None:
    response = dispatch(default_routes(), _request(b"GET /hello HTTP/1.1\r\nHost: x\r\n\r\n"))

    assert response.status_code == 200
    assert response.content_type == "text/html"
    assert "<title>Hello Page</title>" in response.body
    assert "<h1>Hello, Python HTTP Server!</h1>" in response.body


def test_dispatch_submit() -> None:
    raw = b"POST /submit HTTP/1.1\r\nHost: x\r\nContent-Length: 0\r\n\r\n"

    response = dispatch(default_routes(), _request(raw))

    assert response.status_code == 200
    assert "<h1>Data submitted successfully!</h1>" in response.body


def test_dispatch_falls_back_to_not_found() -> None:
    response = dispatch(default_routes(), _request(b"GET /missing HTTP/1.1\r\n\r\n"))

    assert response == not_found("")
    assert response.status_code == 404
    assert "<h1>Not Found</h1>" in response.body
    assert "<title>404 - Not Found</title>" in response.body


def test_dispatch_wrong_method_is_not_found() -> None:
    response = dispatch(default_routes(), _request(b"POST /hello HTTP/1.1\r\n\r\n"))

    assert response.status_code == 404


def test_handler_receives_raw_request_text() -> None:
    seen: list[str] = []

    def echo(raw_request: str) -> HTTPResponse:
        seen.append(raw_request)
        return HTTPResponse(body="ok", content_type="text/plain", status_code=201)

    raw = b"PUT /echo HTTP/1.1\r\nHost: x\r\n\r\npayload"
    response = dispatch(build_route_table([("PUT", "/echo", echo)]), _request(raw))

    assert response.status_code == 201
    assert seen == [raw.decode("utf-8")]
