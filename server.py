"""Main HTTP server entry point and accept loop."""

from __future__ import annotations

import argparse
import itertools
import json
import logging
import socket
import threading
import time

from config import (
    ACCEPT_POLL_SECS,
    BUFFER_SIZE,
    HOST,
    LISTEN_BACKLOG,
    LOG_FORMAT,
    LOG_LEVEL,
    PORT,
)
from connection import ConnectionOutcome, ConnectionResult, ConnectionStepError, handle_connection
from handlers.pages import default_routes
from router import RouteTable

logger = logging.getLogger(__name__)


class HTTPServer:
    def __init__(
        self,
        host: str = HOST,
        port: int = PORT,
        routes: RouteTable | None = None,
        *,
        buffer_size: int = BUFFER_SIZE,
        log_format: str = LOG_FORMAT,
    ) -> None:
        if routes is None:
            routes = default_routes()
        if not isinstance(routes, RouteTable):
            raise TypeError("routes must be a frozen RouteTable; call Router.freeze() first")

        self.host = host
        self.port = port
        self.routes = routes
        self.buffer_size = buffer_size
        self.log_format = log_format

        self._server_socket: socket.socket | None = None
        self._connection_ids = itertools.count(1)
        self._running = False

    def start(self) -> None:
        """Bind, then accept connections until stop() is called.

        Bind errors propagate to the caller. Each accepted connection is
        served on its own thread.
        """
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server_socket:
            self._server_socket = server_socket
            server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            server_socket.bind((self.host, self.port))
            server_socket.listen(LISTEN_BACKLOG)
            server_socket.settimeout(ACCEPT_POLL_SECS)
            self._running = True
            self.port = server_socket.getsockname()[1]
            logger.info("Listening on %s:%s", self.host, self.port)

            while self._running:
                try:
                    client_socket, address = server_socket.accept()
                except socket.timeout:
                    continue
                except OSError as exc:
                    if not self._running:
                        break
                    logger.error("Error accepting connection: %s", exc)
                    continue

                self._spawn_connection(client_socket, address)

    def stop(self) -> None:
        self._running = False
        if self._server_socket is not None:
            self._server_socket.close()
            self._server_socket = None

    def _spawn_connection(self, client_socket: socket.socket, address: tuple[str, int]) -> None:
        connection_id = next(self._connection_ids)
        worker = threading.Thread(
            target=self._handle_client,
            args=(client_socket, address),
            name=f"http-conn-{connection_id}",
            daemon=True,
        )
        worker.start()

    def _handle_client(self, client_socket: socket.socket, address: tuple[str, int]) -> None:
        started_at = time.perf_counter()
        with client_socket:
            try:
                result = handle_connection(client_socket, self.routes, buffer_size=self.buffer_size)
            except ConnectionStepError as exc:
                logger.error(
                    "Error handling client %s:%s during %s: %s",
                    address[0],
                    address[1],
                    exc.step.value,
                    exc,
                )
                return
            except Exception:
                logger.exception("Unhandled error handling client %s:%s", address[0], address[1])
                return

        if result.outcome is ConnectionOutcome.PEER_CLOSED:
            logger.debug("Client %s:%s closed without sending a request", address[0], address[1])
            return

        self._log_request(address, result, started_at)

    def _log_request(
        self,
        address: tuple[str, int],
        result: ConnectionResult,
        started_at: float,
    ) -> None:
        duration_ms = (time.perf_counter() - started_at) * 1000
        event = {
            "client": address[0],
            "method": result.method,
            "path": result.path,
            "status": result.status_code,
            "bytes_in": result.bytes_in,
            "bytes_out": result.bytes_out,
            "duration_ms": round(duration_ms, 3),
        }
        if self.log_format == "json":
            logger.info(json.dumps(event, sort_keys=True))
            return

        logger.info(
            "client=%s method=%s path=%s status=%s bytes_in=%s bytes_out=%s duration_ms=%.2f",
            event["client"],
            event["method"],
            event["path"],
            event["status"],
            event["bytes_in"],
            event["bytes_out"],
            duration_ms,
        )


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run route-table HTTP server")
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--log-format", choices=["plain", "json"], default=LOG_FORMAT)
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=LOG_LEVEL,
    )
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    logging.basicConfig(level=args.log_level)
    server = HTTPServer(host=args.host, port=args.port, log_format=args.log_format)
    try:
        server.start()
    except KeyboardInterrupt:
        server.stop()


if __name__ == "__main__":
    main()
