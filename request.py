"""HTTP request model and single-pass parser."""

import re
import string
from dataclasses import dataclass, field

from config import MAX_HEADERS

ALLOWED_HTTP_VERSIONS = {"HTTP/1.1", "HTTP/1.0"}
TOKEN_CHARS = frozenset(string.ascii_letters + string.digits + "!#$%&'*+-.^_`|~")
HEAD_TERMINATOR = re.compile(rb"\r?\n\r?\n")
LINE_BREAK = re.compile(r"\r?\n")


class HTTPRequestParseError(ValueError):
    """Raised when a buffer does not hold one complete, well-formed request."""


@dataclass(slots=True)
class HTTPRequest:
    method: str
    path: str
    http_version: str
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: bytes = b""
    raw_text: str = ""

    def header(self, name: str) -> str | None:
        """Return the first header value matching ``name``, ignoring case."""
        wanted = name.lower()
        for header_name, value in self.headers:
            if header_name.lower() == wanted:
                return value
        return None

    @classmethod
    def from_bytes(cls, raw: bytes, *, max_headers: int = MAX_HEADERS) -> "HTTPRequest":
        """Parse one request from a single socket read.

        Undecodable bytes are replaced rather than rejected. The head must be
        fully present in ``raw``; a truncated request is a parse error.
        """
        raw_text = raw.decode("utf-8", errors="replace")

        terminator = HEAD_TERMINATOR.search(raw)
        if terminator is None:
            raise HTTPRequestParseError("Incomplete request: missing blank line after headers")
        body = raw[terminator.end() :]

        head = raw[: terminator.start()].decode("utf-8", errors="replace")
        lines = LINE_BREAK.split(head)
        if not lines[0]:
            raise HTTPRequestParseError("Missing request line")

        first_line_parts = lines[0].split(" ")
        if len(first_line_parts) != 3:
            raise HTTPRequestParseError("Invalid request line")

        method, target, http_version = first_line_parts
        if not _is_token(method):
            raise HTTPRequestParseError(f"Invalid method token: {method!r}")
        if not target or any(ord(char) < 0x21 or ord(char) == 0x7F for char in target):
            raise HTTPRequestParseError("Invalid request target")
        if http_version not in ALLOWED_HTTP_VERSIONS:
            raise HTTPRequestParseError(f"Unsupported HTTP version: {http_version!r}")

        header_lines = lines[1:]
        if len(header_lines) > max_headers:
            raise HTTPRequestParseError(f"Too many headers (limit {max_headers})")

        headers: list[tuple[str, str]] = []
        for line in header_lines:
            if ":" not in line:
                raise HTTPRequestParseError("Malformed header line")
            name, value = line.split(":", 1)
            if not _is_token(name):
                raise HTTPRequestParseError(f"Invalid header name: {name!r}")
            headers.append((name, value.strip()))

        return cls(
            method=method,
            path=target,
            http_version=http_version,
            headers=headers,
            body=body,
            raw_text=raw_text,
        )


def _is_token(value: str) -> bool:
    return bool(value) and all(char in TOKEN_CHARS for char in value)
