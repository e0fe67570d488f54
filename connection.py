"""Per-connection read, parse, dispatch and write sequence."""

from __future__ import annotations

import socket
from dataclasses import dataclass
from enum import Enum

from config import BUFFER_SIZE
from dispatcher import dispatch
from request import HTTPRequest, HTTPRequestParseError
from router import RouteTable


class ConnectionStep(Enum):
    READ = "read"
    PARSE = "parse"
    DISPATCH = "dispatch"
    WRITE = "write"


class ConnectionStepError(Exception):
    """Raised when one step of handling a connection fails."""

    def __init__(self, step: ConnectionStep, message: str) -> None:
        super().__init__(message)
        self.step = step


class ConnectionOutcome(Enum):
    RESPONDED = "responded"
    PEER_CLOSED = "peer_closed"


@dataclass(slots=True)
class ConnectionResult:
    outcome: ConnectionOutcome
    method: str = "-"
    path: str = "-"
    status_code: int | None = None
    bytes_in: int = 0
    bytes_out: int = 0


def read_request_bytes(client_socket: socket.socket, buffer_size: int = BUFFER_SIZE) -> bytes:
    """Read once from the socket; an empty result means the peer closed."""
    return client_socket.recv(buffer_size)


def write_response(client_socket: socket.socket, payload: bytes) -> None:
    """Write the complete payload through a buffered writer and flush it."""
    with client_socket.makefile("wb") as writer:
        writer.write(payload)
        writer.flush()


def handle_connection(
    client_socket: socket.socket,
    routes: RouteTable,
    *,
    buffer_size: int = BUFFER_SIZE,
) -> ConnectionResult:
    """Serve exactly one request on an accepted socket.

    Closing the socket is left to the caller. Every failure is raised as a
    ConnectionStepError naming the step that failed; nothing is written
    unless a response was produced.
    """
    try:
        raw_request = read_request_bytes(client_socket, buffer_size)
    except OSError as exc:
        raise ConnectionStepError(ConnectionStep.READ, f"Failed to read request: {exc}") from exc

    if not raw_request:
        return ConnectionResult(outcome=ConnectionOutcome.PEER_CLOSED)

    try:
        request = HTTPRequest.from_bytes(raw_request)
    except HTTPRequestParseError as exc:
        raise ConnectionStepError(ConnectionStep.PARSE, f"Failed to parse request: {exc}") from exc

    try:
        response = dispatch(routes, request)
        payload = response.to_bytes()
    except Exception as exc:
        raise ConnectionStepError(
            ConnectionStep.DISPATCH,
            f"Handler for {request.method} {request.path} failed: {exc!r}",
        ) from exc

    try:
        write_response(client_socket, payload)
    except OSError as exc:
        raise ConnectionStepError(ConnectionStep.WRITE, f"Failed to write response: {exc}") from exc

    return ConnectionResult(
        outcome=ConnectionOutcome.RESPONDED,
        method=request.method,
        path=request.path,
        status_code=response.status_code,
        bytes_in=len(raw_request),
        bytes_out=len(payload),
    )
