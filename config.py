"""Configuration constants for the route-table HTTP server."""

HOST: str = "127.0.0.1"
PORT: int = 8080
BUFFER_SIZE: int = 1024
MAX_HEADERS: int = 16
LISTEN_BACKLOG: int = 128
ACCEPT_POLL_SECS: float = 0.2
LOG_FORMAT: str = "plain"
LOG_LEVEL: str = "INFO"
