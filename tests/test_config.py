"""Sanity checks for default configuration values."""

from config import BUFFER_SIZE, HOST, LOG_FORMAT, MAX_HEADERS, PORT


def test_default_listen_address() -> None:
    assert HOST == "127.0.0.1"
    assert PORT == 8080


def test_request_limits() -> None:
    assert BUFFER_SIZE == 1024
    assert MAX_HEADERS == 16
    assert LOG_FORMAT in {"plain", "json"}
