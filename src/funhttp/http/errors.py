"""
=============================================================================
ERROR TAXONOMY
=============================================================================

Every failure a handler can report carries the HTTP status it maps to,
so the router can turn it into a response without a lookup table:

    ┌───────────────────────┬────────┬──────────────────────────────────┐
    │ Exception             │ Status │ Raised when                      │
    ├───────────────────────┼────────┼──────────────────────────────────┤
    │ ClientInputError      │  400   │ missing/invalid query parameter  │
    │   └ QueryParseError   │  400   │ query pair without '='           │
    │ NotFoundError         │  404   │ /file/... path does not exist    │
    │ UpstreamError         │  500   │ GitHub/weather fetch or decode   │
    │ ServerError           │  500   │ local page could not be read     │
    └───────────────────────┴────────┴──────────────────────────────────┘

Transport problems (socket timeouts, resets, oversize lines) are NOT
handler errors. They surface as OSError or RequestTooLarge in the
connection loop, which logs them and keeps serving.

=============================================================================
"""

from .status_codes import HTTPStatus


class HandlerError(Exception):
    """
    Base class for errors a route handler turns into a response.

    The message is what ends up inside the response body, so it should
    read well to a human looking at the page.
    """

    status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def body(self) -> str:
        """Render the HTML body sent back for this error."""
        return f"<html><body><h2>Error: {self.message}</h2></body></html>"


class ClientInputError(HandlerError):
    """The request is missing a parameter or a parameter is malformed."""

    status_code = HTTPStatus.BAD_REQUEST


class QueryParseError(ClientInputError):
    """A query string could not be decoded into key/value pairs."""


class NotFoundError(HandlerError):
    """The resource named by the request does not exist."""

    status_code = HTTPStatus.NOT_FOUND

    def body(self) -> str:
        return self.message


class UpstreamError(HandlerError):
    """A downstream API failed or returned something we couldn't decode."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR

    def body(self) -> str:
        # message already reads "Error fetching ...: detail"
        return f"<html><body><h2>{self.message}</h2></body></html>"


class ServerError(HandlerError):
    """A local resource the handler depends on could not be read."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR


class FetchError(Exception):
    """Raised by the HTTP client collaborator when a GET fails."""


class RequestTooLarge(ValueError):
    """A single request line exceeded the configured limit."""
