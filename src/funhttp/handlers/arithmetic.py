"""
=============================================================================
ARITHMETIC HANDLERS: /multiply, /countdown
=============================================================================

    /multiply?num1=3&num2=4               → Result: 12
    /countdown?seconds=3&message=Done     → 3, 2, 1, 0, then "Done"

Both take 32-bit signed integers (see params.py). Each failure has its
own message so the page tells the client what to fix:

    ┌──────────────────────────────┬────────────────────────────────────┐
    │ Problem                      │ 400 message                        │
    ├──────────────────────────────┼────────────────────────────────────┤
    │ multiply: num1/num2 missing  │ Missing parameters. Please provide │
    │                              │ both 'num1' and 'num2'.            │
    │ multiply: not an integer     │ Invalid input. Please provide      │
    │                              │ numeric values for 'num1' and      │
    │                              │ 'num2'.                            │
    │ countdown: key missing       │ Missing 'seconds' or 'message'     │
    │                              │ parameter. Example: ...            │
    │ countdown: seconds <= 0 or   │ 'seconds' must be a positive       │
    │ not an integer               │ number.                            │
    └──────────────────────────────┴────────────────────────────────────┘

=============================================================================
"""

import html

from ..http.errors import ClientInputError
from ..http.query import parse_query, query_after_marker, query_after_question_mark
from ..http.response import HTTPResponse, ok_html
from .params import parse_int32, require, wrap_int32


MULTIPLY_MISSING = "Missing parameters. Please provide both 'num1' and 'num2'."
MULTIPLY_INVALID = "Invalid input. Please provide numeric values for 'num1' and 'num2'."

COUNTDOWN_MISSING = (
    "Missing 'seconds' or 'message' parameter. "
    "Example: /countdown?seconds=10&message=Time%27s%20up"
)
COUNTDOWN_INVALID = "'seconds' must be a positive number."


class MultiplyHandler:
    """
    Multiplies num1 by num2.

    The product wraps at 32 bits, so 65536 * 65536 gives 0.
    """

    MARKER = "multiply?"

    def handle(self, target: str) -> HTTPResponse:
        params = parse_query(query_after_marker(target, self.MARKER))
        require(params, ("num1", "num2"), MULTIPLY_MISSING)

        num1 = parse_int32(params["num1"])
        num2 = parse_int32(params["num2"])
        if num1 is None or num2 is None:
            raise ClientInputError(MULTIPLY_INVALID)

        result = wrap_int32(num1 * num2)
        return ok_html(f"<html><body><h2>Result: {result}</h2></body></html>")


class CountdownHandler:
    """
    Lists the numbers from `seconds` down to 0, then shows `message`.

    The message is echoed into the page. With escape_html=False (the
    default) it goes in verbatim, markup and all; set escape_html=True to
    render it as text.
    """

    def __init__(self, escape_html: bool = False):
        self.escape_html = escape_html

    def handle(self, target: str) -> HTTPResponse:
        params = parse_query(query_after_question_mark(target))
        require(params, ("seconds", "message"), COUNTDOWN_MISSING)

        seconds = parse_int32(params["seconds"])
        if seconds is None or seconds <= 0:
            raise ClientInputError(COUNTDOWN_INVALID)

        message = params["message"]
        if self.escape_html:
            message = html.escape(message)

        items = "".join(f"<li>{i}</li>" for i in range(seconds, -1, -1))
        return ok_html(
            "<html><body><h2>Countdown:</h2><ul>"
            f"{items}</ul><h3>{message}</h3></body></html>"
        )
