"""
Unit tests for request line parsing.
"""

import pytest

from funhttp.http.request import (
    IterableLineReader,
    RequestParser,
    extract_target,
    parse_target,
)


class TestExtractTarget:
    """Tests for extract_target()."""

    @pytest.mark.parametrize("line,expected", [
        ("GET / HTTP/1.1", ""),
        ("GET /json HTTP/1.1", "json"),
        ("GET /multiply?num1=3&num2=4 HTTP/1.1", "multiply?num1=3&num2=4"),
        ("GET /file/a/b.txt HTTP/1.0", "file/a/b.txt"),
        ("GET /x HTTP/1.1 trailing", "x"),
    ])
    def test_valid_lines(self, line: str, expected: str):
        """Target is everything between '/' and the second space."""
        assert extract_target(line) == expected

    def test_leading_char_is_skipped_without_check(self):
        """The character after the first space is dropped whatever it is."""
        assert extract_target("GET xyz HTTP/1.1") == "yz"

    @pytest.mark.parametrize("line", [
        "POST /json HTTP/1.1",
        "get /json HTTP/1.1",
        "GET",
        "GET /json",
        "GET  HTTP/1.1",
        "Host: localhost",
        "",
    ])
    def test_unusable_lines(self, line: str):
        """Non-GET or malformed lines yield no target."""
        assert extract_target(line) is None


class TestRequestParser:
    """Tests for RequestParser.read_target()."""

    def test_simple_get(self):
        """Test reading a request with headers."""
        reader = IterableLineReader([
            "GET /json HTTP/1.1",
            "Host: localhost:9000",
            "User-Agent: pytest",
            "",
        ])
        assert RequestParser().read_target(reader) == "json"

    def test_root(self):
        """'GET /' yields the empty target, not None."""
        reader = IterableLineReader(["GET / HTTP/1.1", ""])
        assert RequestParser().read_target(reader) == ""

    def test_first_get_line_wins(self):
        """A second GET line before the blank line is ignored."""
        reader = IterableLineReader([
            "GET /json HTTP/1.1",
            "GET /random HTTP/1.1",
            "",
        ])
        assert RequestParser().read_target(reader) == "json"

    def test_get_line_after_headers(self):
        """The GET line doesn't have to be first."""
        reader = IterableLineReader(["Host: x", "GET /random HTTP/1.1", ""])
        assert RequestParser().read_target(reader) == "random"

    def test_no_get_line(self):
        """Only non-GET lines → None."""
        reader = IterableLineReader(["POST /json HTTP/1.1", "Host: x", ""])
        assert RequestParser().read_target(reader) is None

    def test_malformed_get_then_valid(self):
        """A broken GET line doesn't stop a later valid one."""
        reader = IterableLineReader(["GET /", "GET /json HTTP/1.1", ""])
        assert RequestParser().read_target(reader) == "json"

    def test_end_of_stream(self):
        """EOF before the blank line ends the request too."""
        reader = IterableLineReader(["GET /json HTTP/1.1"])
        assert RequestParser().read_target(reader) == "json"

    def test_empty_stream(self):
        """No lines at all → None."""
        assert RequestParser().read_target(IterableLineReader([])) is None

    def test_stops_at_blank_line(self):
        """Lines after the blank line are not consumed."""
        lines = iter(["Host: x", "", "GET /json HTTP/1.1"])
        reader = IterableLineReader(lines)

        assert RequestParser().read_target(reader) is None
        assert next(lines) == "GET /json HTTP/1.1"


class TestParseTarget:
    """Tests for the parse_target() convenience function."""

    def test_crlf_request(self):
        """Test a CRLF-terminated request."""
        raw = b"GET /countdown?seconds=3&message=hi HTTP/1.1\r\nHost: x\r\n\r\n"
        assert parse_target(raw) == "countdown?seconds=3&message=hi"

    def test_bare_lf_request(self):
        """Test a request with bare LF line endings."""
        assert parse_target(b"GET /random HTTP/1.1\nHost: x\n\n") == "random"

    def test_garbage(self):
        """Binary junk has no target."""
        assert parse_target(b"\x00\xff\xfe not http\r\n\r\n") is None
