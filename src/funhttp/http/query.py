"""
=============================================================================
QUERY STRING PARSING
=============================================================================

Turns the part of a target after '?' into an ordered dict:

    "num1=3&num2=4"                      → {"num1": "3", "num2": "4"}
    "key1=value%20with%20spaces&key2=abc" → {"key1": "value with spaces",
                                             "key2": "abc"}

=============================================================================
DECODING RULES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │  1. Split on '&'. Trailing empty pairs are dropped ("a=1&" is OK). │
    │  2. Split each pair at the FIRST '=' ("a=b=c" → a: "b=c").         │
    │  3. Percent-decode key and value, '+' becomes a space (UTF-8).     │
    │  4. A pair without '=' is an error → 400 for the caller.           │
    │  5. Repeated keys: the last value wins.                            │
    └─────────────────────────────────────────────────────────────────────┘

Unlike urllib.parse.parse_qs we don't return lists and we refuse pairs
with no '=' instead of silently dropping them; the handlers rely on a
bad query being reported.

=============================================================================
"""

from typing import Dict
from urllib.parse import unquote_plus

from .errors import QueryParseError


def parse_query(query: str) -> Dict[str, str]:
    """
    Decode a URL-encoded query string into an ordered mapping.

    Args:
        query: The raw query string, without the leading '?'.

    Returns:
        Dict of decoded key → decoded value, in first-seen order.

    Raises:
        QueryParseError: If any pair has no '=' (an empty query counts).
    """
    pairs = query.split("&")

    # "a=1&" splits to ["a=1", ""]; the trailing blank is not a pair
    while len(pairs) > 1 and pairs[-1] == "":
        pairs.pop()

    params: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise QueryParseError(f"Malformed query parameter: '{pair}'")
        params[unquote_plus(key)] = unquote_plus(value)

    return params


def query_after_marker(target: str, marker: str) -> str:
    """
    Remove every occurrence of `marker` from the target.

    Used by routes matched by substring containment, where anything in
    front of the marker stays glued to the first key:

        query_after_marker("multiply?num1=3", "multiply?")   → "num1=3"
        query_after_marker("x/multiply?a=1", "multiply?")    → "x/a=1"
    """
    return target.replace(marker, "")


def query_after_question_mark(target: str) -> str:
    """Return everything after the first '?' (empty if there is none)."""
    _, _, query = target.partition("?")
    return query
