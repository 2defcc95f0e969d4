"""
=============================================================================
HTTP RESPONSE BUILDER
=============================================================================

Builds the minimal HTTP/1.1 responses this server sends.

=============================================================================
WIRE FORMAT
=============================================================================

The request side only looks at one line and skips the rest, and the
response side is just as small. Lines end in a bare LF:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                     │
    │    HTTP/1.1 200 OK\n                          ← status line         │
    │    Content-Type: text/html; charset=utf-8\n  ← the only header     │
    │    \n                                         ← blank line          │
    │    <html><body><h2>Result: 12</h2></body></html>   ← body           │
    │                                                                     │
    └─────────────────────────────────────────────────────────────────────┘

No Content-Length: the connection is closed after every response, so the
client reads to EOF. The whole thing is encoded as UTF-8.

=============================================================================
"""

from dataclasses import dataclass
from typing import Any
import json

from .status_codes import HTTPStatus


HTML = "text/html; charset=utf-8"
JSON = "application/json; charset=utf-8"


@dataclass
class HTTPResponse:
    """
    Represents an HTTP response to be sent to the client.

    A handler returns one of these, the connection loop serializes it
    exactly once with to_bytes() and writes the result to the socket.

        Handler returns          to_bytes()              Socket sends
        HTTPResponse    ─────►   serializes    ─────►    raw bytes

    The status doubles as the outcome of the request: 2xx means the
    handler succeeded, anything else carries the failure message in body.
    """

    status: HTTPStatus = HTTPStatus.OK
    content_type: str = HTML
    body: str = ""
    version: str = "HTTP/1.1"

    @property
    def status_line(self) -> str:
        """
        Get the HTTP status line.

        Format: HTTP-VERSION SP STATUS-CODE SP REASON-PHRASE
        Example: "HTTP/1.1 200 OK"
        """
        return f"{self.version} {int(self.status)} {self.status.phrase}"

    def to_bytes(self) -> bytes:
        """
        Serialize the response for socket.sendall().

        Returns:
            b"STATUS-LINE\\nContent-Type: ...\\n\\nBODY" as UTF-8.
        """
        head = f"{self.status_line}\nContent-Type: {self.content_type}\n\n"
        return (head + self.body).encode("utf-8")


class ResponseBuilder:
    """
    Fluent builder for constructing HTTP responses.

    Each method returns `self`, so a response reads as one expression:

        response = (ResponseBuilder()
            .status(HTTPStatus.BAD_REQUEST)
            .html("<html><body><h2>Error: nope</h2></body></html>")
            .build())

    Defaults are 200 OK with an empty HTML body.
    """

    def __init__(self):
        self._status = HTTPStatus.OK
        self._content_type = HTML
        self._body = ""

    def status(self, status: HTTPStatus) -> "ResponseBuilder":
        """Set the HTTP status code."""
        self._status = HTTPStatus(status)
        return self

    def html(self, html: str) -> "ResponseBuilder":
        """Set an HTML body (text/html; charset=utf-8)."""
        self._body = html
        self._content_type = HTML
        return self

    def json(self, data: Any) -> "ResponseBuilder":
        """
        Set a compact JSON body.

        Separators are (",", ":") so the output has no padding:
            {"header":"bread","image":"https://..."}
        """
        self._body = json.dumps(data, separators=(",", ":"), ensure_ascii=False)
        self._content_type = JSON
        return self

    def build(self) -> HTTPResponse:
        """Build and return the HTTPResponse object."""
        return HTTPResponse(
            status=self._status,
            content_type=self._content_type,
            body=self._body,
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================
#
# Every error page in this server has the same shape:
#     <html><body><h2>Error: ...</h2></body></html>
# so the helpers below wrap the message for you unless told otherwise.
#
# =============================================================================

def error_page(message: str) -> str:
    """Wrap an error message in the standard error page."""
    return f"<html><body><h2>Error: {message}</h2></body></html>"


def ok_html(html: str) -> HTTPResponse:
    """Create a 200 OK HTML response."""
    return ResponseBuilder().html(html).build()


def bad_request(message: str, wrap: bool = True) -> HTTPResponse:
    """
    Create a 400 Bad Request response.

    Args:
        message: What the client got wrong.
        wrap: Put the message inside the standard error page. Pass False
              for bodies that must go out verbatim.
    """
    body = error_page(message) if wrap else message
    return ResponseBuilder().status(HTTPStatus.BAD_REQUEST).html(body).build()


def not_found(message: str) -> HTTPResponse:
    """Create a 404 Not Found response with a plain message body."""
    return ResponseBuilder().status(HTTPStatus.NOT_FOUND).html(message).build()


def internal_error(message: str, wrap: bool = True) -> HTTPResponse:
    """Create a 500 Internal Server Error response."""
    body = error_page(message) if wrap else message
    return ResponseBuilder().status(HTTPStatus.INTERNAL_SERVER_ERROR).html(body).build()


def error_response(status: HTTPStatus, body: str) -> HTTPResponse:
    """Create an HTML response for an arbitrary status with a ready body."""
    return ResponseBuilder().status(status).html(body).build()
