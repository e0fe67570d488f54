"""HTML page renderer and HTTP response serializer."""

from dataclasses import dataclass

HTML_TEMPLATE = """
<!DOCTYPE html>
<html>
<head>
    <title>{title}</title>
</head>
<body>
    <h1>{content}</h1>
</body>
</html>
"""

HTML_CONTENT_TYPE = "text/html"


@dataclass(frozen=True, slots=True)
class HTTPResponse:
    body: str
    content_type: str
    status_code: int

    def encoded_body(self) -> bytes:
        return self.body.encode("utf-8")

    def to_bytes(self) -> bytes:
        """Serialize the response into HTTP/1.1 wire format bytes.

        The head carries only the numeric status, Content-Length and
        Content-Type; no reason phrase, charset or Connection header.
        """
        body = self.encoded_body()
        head = (
            f"HTTP/1.1 {self.status_code}\r\n"
            f"Content-Length: {len(body)}\r\n"
            f"Content-Type: {self.content_type}\r\n"
            "\r\n"
        )
        return head.encode("iso-8859-1") + body


def render_page(title: str, content: str, status_code: int = 200) -> HTTPResponse:
    """Fill HTML_TEMPLATE by literal substitution. Input is not escaped."""
    page = HTML_TEMPLATE.replace("{title}", title).replace("{content}", content)
    return HTTPResponse(body=page, content_type=HTML_CONTENT_TYPE, status_code=status_code)
