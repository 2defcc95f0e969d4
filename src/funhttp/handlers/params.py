"""
Query parameter helpers shared by the handlers.

Numbers follow 32-bit signed integer rules: an optional sign followed by
ASCII digits, in the range [-2**31, 2**31 - 1]. Anything else ("1.5",
" 7", "1_000", "99999999999") is rejected, and arithmetic results wrap
around like a 32-bit register.
"""

import re
from typing import Dict, Iterable, Optional

from ..http.errors import ClientInputError


INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_int32(value: str) -> Optional[int]:
    """
    Parse a 32-bit signed integer.

    Returns:
        The integer, or None if the text isn't one or is out of range.
    """
    if not _INTEGER.fullmatch(value):
        return None
    number = int(value)
    if not INT32_MIN <= number <= INT32_MAX:
        return None
    return number


def wrap_int32(number: int) -> int:
    """Reduce an integer to the 32-bit signed range, two's complement style."""
    number &= 0xFFFFFFFF
    return number - 2 ** 32 if number > INT32_MAX else number


def require(params: Dict[str, str], names: Iterable[str], message: str) -> None:
    """
    Ensure every name is present in the query.

    Raises:
        ClientInputError: With `message` if any name is missing.
    """
    if any(name not in params for name in names):
        raise ClientInputError(message)
