"""
Unit tests for query string parsing.
"""

import pytest

from funhttp.http import QueryParseError, ClientInputError, HTTPStatus
from funhttp.http.query import parse_query, query_after_marker, query_after_question_mark


class TestParseQuery:
    """Tests for parse_query()."""

    def test_simple_pairs(self):
        """Test basic key=value pairs."""
        assert parse_query("num1=3&num2=4") == {"num1": "3", "num2": "4"}

    def test_percent_decoding(self):
        """Keys and values are percent-decoded."""
        assert parse_query("key1=value%20with%20spaces&key2=abc") == {
            "key1": "value with spaces",
            "key2": "abc",
        }

    def test_plus_is_space(self):
        """'+' decodes to a space."""
        assert parse_query("message=Time%27s+up") == {"message": "Time's up"}

    def test_utf8(self):
        """Percent escapes are decoded as UTF-8."""
        assert parse_query("city=M%C3%BCnchen") == {"city": "München"}

    def test_order_preserved(self):
        """Keys keep their first-seen order."""
        assert list(parse_query("b=1&a=2&c=3")) == ["b", "a", "c"]

    def test_split_at_first_equals(self):
        """Only the first '=' separates key and value."""
        assert parse_query("a=b=c") == {"a": "b=c"}

    def test_empty_value(self):
        """An empty value is allowed."""
        assert parse_query("a=") == {"a": ""}

    def test_trailing_ampersand(self):
        """Empty pairs at the end are not an error."""
        assert parse_query("a=1&") == {"a": "1"}
        assert parse_query("a=1&&") == {"a": "1"}

    def test_last_duplicate_wins(self):
        """Repeated keys keep the last value."""
        assert parse_query("a=1&a=2") == {"a": "2"}

    @pytest.mark.parametrize("query", [
        "",
        "a",
        "a=1&b",
        "a=1&&b=2",
    ])
    def test_pair_without_equals(self, query: str):
        """Any pair with no '=' is rejected."""
        with pytest.raises(QueryParseError):
            parse_query(query)

    def test_error_is_client_input(self):
        """A malformed query becomes a 400, like other input errors."""
        with pytest.raises(ClientInputError) as exc_info:
            parse_query("oops")

        assert exc_info.value.status_code == HTTPStatus.BAD_REQUEST


class TestQueryExtraction:
    """Tests for the target → query helpers."""

    def test_after_marker(self):
        """The marker is stripped from the target."""
        assert query_after_marker("multiply?num1=3&num2=4", "multiply?") == "num1=3&num2=4"

    def test_after_marker_removes_every_occurrence(self):
        """Every occurrence of the marker is stripped."""
        assert query_after_marker("x/multiply?a=1multiply?", "multiply?") == "x/a=1"

    def test_after_question_mark(self):
        """Everything after '?' is the query."""
        assert query_after_question_mark("weather?city=Phoenix") == "city=Phoenix"

    def test_after_question_mark_keeps_later_marks(self):
        """Only the first '?' splits."""
        assert query_after_question_mark("countdown?message=why?&seconds=1") == \
            "message=why?&seconds=1"

    def test_no_question_mark(self):
        """No '?' means an empty query."""
        assert query_after_question_mark("countdown") == ""
