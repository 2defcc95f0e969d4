"""
=============================================================================
HTTP PROTOCOL LAYER
=============================================================================

Everything between "bytes came in" and "bytes go out":

    request.py      → RequestParser: first GET line → target string
    query.py        → parse_query: "a=1&b=2" → {"a": "1", "b": "2"}
    router.py       → Router: ordered first-match dispatch
    response.py     → HTTPResponse / ResponseBuilder: → wire bytes
    status_codes.py → HTTPStatus
    errors.py       → HandlerError family (each carries its status)

=============================================================================
"""

from .status_codes import HTTPStatus
from .errors import (
    HandlerError,
    ClientInputError,
    QueryParseError,
    NotFoundError,
    UpstreamError,
    ServerError,
    FetchError,
    RequestTooLarge,
)
from .request import RequestParser, LineReader, IterableLineReader, extract_target, parse_target
from .query import parse_query
from .response import (
    HTTPResponse,
    ResponseBuilder,
    ok_html,
    bad_request,
    not_found,
    internal_error,
    error_response,
)
from .router import Router, Route, is_empty, equals_ignore_case, contains, starts_with

__all__ = [
    "HTTPStatus",
    # Errors
    "HandlerError",
    "ClientInputError",
    "QueryParseError",
    "NotFoundError",
    "UpstreamError",
    "ServerError",
    "FetchError",
    "RequestTooLarge",
    # Request parsing
    "RequestParser",
    "LineReader",
    "IterableLineReader",
    "extract_target",
    "parse_target",
    "parse_query",
    # Response building
    "HTTPResponse",
    "ResponseBuilder",
    "ok_html",
    "bad_request",
    "not_found",
    "internal_error",
    "error_response",
    # Routing
    "Router",
    "Route",
    "is_empty",
    "equals_ignore_case",
    "contains",
    "starts_with",
]
