"""
=============================================================================
REQUEST LINE PARSER
=============================================================================

This server does not parse HTTP requests in any real sense. It reads
header lines until the blank line, keeps the target of the first GET
line and ignores everything else.

=============================================================================
TARGET EXTRACTION
=============================================================================

    GET /multiply?num1=3&num2=4 HTTP/1.1
       ▲                       ▲
       first space             second space

    target = line[first_space + 2 : second_space]
           = "multiply?num1=3&num2=4"

The "+ 2" skips the space AND the leading '/'. Nothing checks that the
character skipped really is a '/', so "GET xyz HTTP/1.1" yields "yz".
That's the behavior clients of this server see, and we keep it.

A line is only usable when both spaces exist and the second one comes at
least two characters after the first. "GET / HTTP/1.1" gives the empty
target (the root page); "GET  HTTP/1.1" and "GET /" are ignored.

=============================================================================
"""

import logging
from typing import Iterable, Iterator, Optional, Protocol


logger = logging.getLogger(__name__)


class LineReader(Protocol):
    """Anything that hands out request lines one at a time."""

    def read_line(self) -> Optional[str]:
        ...


class IterableLineReader:
    """
    LineReader over an in-memory sequence of lines.

    Useful in tests and for parsing a request that was already read:

        reader = IterableLineReader(["GET /json HTTP/1.1", "Host: x", ""])
        RequestParser().read_target(reader)   # → "json"
    """

    def __init__(self, lines: Iterable[str]):
        self._lines: Iterator[str] = iter(lines)

    def read_line(self) -> Optional[str]:
        return next(self._lines, None)


def extract_target(line: str) -> Optional[str]:
    """
    Pull the target out of a request line.

    Returns:
        The target (possibly empty), or None when the line is not a usable
        GET line.
    """
    if not line.startswith("GET"):
        return None

    first_space = line.find(" ")
    if first_space == -1:
        return None

    second_space = line.find(" ", first_space + 1)
    if second_space == -1 or second_space < first_space + 2:
        return None

    return line[first_space + 2:second_space]


class RequestParser:
    """
    Reads a request off a LineReader and returns its target.

    ┌─────────────────────────────────────────────────────────────────────┐
    │   while True:                                                       │
    │       line = reader.read_line()                                     │
    │       if line is None or line == "":  → stop (EOF / end of headers) │
    │       if no target yet and line is a GET line:  → remember target   │
    │       otherwise:  → discard                                         │
    └─────────────────────────────────────────────────────────────────────┘

    Returns None if no GET line showed up before the blank line; the
    connection loop answers that with the "illegal request" page.
    """

    def read_target(self, reader: LineReader) -> Optional[str]:
        """
        Consume lines up to the end of the headers.

        Args:
            reader: Source of decoded lines (a Connection in production).

        Returns:
            The request target, or None if there was no GET line.
        """
        target: Optional[str] = None

        while True:
            line = reader.read_line()
            if line is None or line == "":
                break

            logger.debug(f"Received: {line}")

            if target is None:
                target = extract_target(line)

        return target


def parse_target(raw: bytes) -> Optional[str]:
    """
    Convenience function to get the target out of raw request bytes.

    Args:
        raw: Bytes of a request, e.g. b"GET /json HTTP/1.1\\r\\n\\r\\n".

    Returns:
        The target, or None if there is no GET line.
    """
    text = raw.decode("utf-8", errors="replace")
    lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
    return RequestParser().read_target(IterableLineReader(lines))
