"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The handful of status codes this server ever sends, with reason phrases.

    ┌────────┬───────────────────────────────────────────────────────────┐
    │  200   │ OK                  - handler produced a page             │
    │  400   │ Bad Request         - missing/invalid query, unknown path │
    │  404   │ Not Found           - /file/... names nothing on disk     │
    │  500   │ Internal Server Error - upstream API or I/O failure       │
    └────────┴───────────────────────────────────────────────────────────┘

The enum is an IntEnum so a status compares equal to its number:

    >>> HTTPStatus.NOT_FOUND == 404
    True

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """HTTP status codes used by the server."""

    OK = 200                            # Handler succeeded
    BAD_REQUEST = 400                   # Client sent something we can't use
    NOT_FOUND = 404                     # File lookup missed
    INTERNAL_SERVER_ERROR = 500         # Upstream or transport failure

    @property
    def phrase(self) -> str:
        """
        Get the reason phrase for this status code.

            HTTP/1.1 404 Not Found
                     ─── ─────────
                      │      │
                      │      └── Reason phrase
                      └───────── Status code
        """
        return _STATUS_PHRASES.get(self, "Unknown")

    @property
    def is_server_error(self) -> bool:
        """Check if this is a 5xx status code."""
        return 500 <= self < 600


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
}
