"""
=============================================================================
ORDERED ROUTE TABLE
=============================================================================

Routes are (name, matcher, handler) triples checked top to bottom; the
first matcher that accepts the target wins.

    ┌───┬──────────────────────────────┬───────────────────────────────┐
    │ # │ Matcher                      │ Handler                       │
    ├───┼──────────────────────────────┼───────────────────────────────┤
    │ 1 │ is_empty()                   │ root help page                │
    │ 2 │ equals_ignore_case("json")   │ random image as JSON          │
    │ 3 │ equals_ignore_case("random") │ random image page             │
    │ 4 │ contains("file/")            │ file lookup                   │
    │ 5 │ contains("multiply?")        │ multiply                      │
    │ 6 │ contains("github?")          │ GitHub repositories           │
    │ 7 │ starts_with("weather?")      │ weather                       │
    │ 8 │ starts_with("countdown?")    │ countdown                     │
    │ - │ (nothing matched)            │ 400 "not sure what you want"  │
    └───┴──────────────────────────────┴───────────────────────────────┘

=============================================================================
ORDER MATTERS
=============================================================================

Rules 4-6 are substring matches, not path prefixes. A target such as

    x/multiply?num1=1&num2=2&note=file/

contains both "multiply?" and "file/" and goes to the FILE handler,
because rule 4 is checked first. Clients depend on this ordering, so the
table is a plain list and registration order is evaluation order.

=============================================================================
HANDLER BOUNDARY
=============================================================================

dispatch() always returns an HTTPResponse:

    handler returns response        → passed through
    handler raises HandlerError     → error.status_code + error.body()
    handler raises anything else    → logged with traceback, 500

Only transport-level failures (socket errors while reading or writing)
are left to the connection loop.

=============================================================================
"""

from dataclasses import dataclass
from typing import Callable, List, Optional
import logging

from .errors import HandlerError
from .response import HTTPResponse, bad_request, error_response, internal_error


logger = logging.getLogger(__name__)


# A handler takes the raw target and produces a response
Handler = Callable[[str], HTTPResponse]

# A matcher decides whether a route applies to a target
Matcher = Callable[[str], bool]


NOT_SURE_MESSAGE = "I am not sure what you want me to do..."


# =============================================================================
# MATCHERS
# =============================================================================

def is_empty() -> Matcher:
    """Match the empty target (a request for "/")."""
    return lambda target: len(target) == 0


def equals_ignore_case(value: str) -> Matcher:
    """Match a target equal to `value`, ignoring case."""
    folded = value.casefold()
    return lambda target: target.casefold() == folded


def contains(fragment: str) -> Matcher:
    """Match any target containing `fragment` anywhere."""
    return lambda target: fragment in target


def starts_with(prefix: str) -> Matcher:
    """Match targets beginning with `prefix` (case-sensitive)."""
    return lambda target: target.startswith(prefix)


@dataclass(frozen=True)
class Route:
    """
    A registered route.

    Attributes:
        name: Short label used in logs and the endpoint listing.
        matcher: Predicate over the target string.
        handler: Called with the raw target when the matcher accepts it.
    """

    name: str
    matcher: Matcher
    handler: Handler

    def matches(self, target: str) -> bool:
        return self.matcher(target)


class Router:
    """
    First-match router over an ordered list of routes.

    Usage:
        router = Router()
        router.add("json", equals_ignore_case("json"), images.handle)
        router.add("file", contains("file/"), files.handle)

        response = router.dispatch("json")
    """

    def __init__(self, fallback: Optional[Handler] = None):
        """
        Args:
            fallback: Handler for targets nothing matched. Defaults to a
                      400 with the "not sure what you want" text.
        """
        self._routes: List[Route] = []
        self._fallback = fallback or _not_sure

    @property
    def routes(self) -> List[Route]:
        """Registered routes in evaluation order."""
        return list(self._routes)

    def add(self, name: str, matcher: Matcher, handler: Handler) -> Route:
        """
        Append a route to the end of the table.

        Returns:
            The registered Route.
        """
        route = Route(name=name, matcher=matcher, handler=handler)
        self._routes.append(route)
        return route

    def match(self, target: str) -> Optional[Route]:
        """Find the first route accepting this target, or None."""
        for route in self._routes:
            if route.matches(target):
                return route
        return None

    def dispatch(self, target: str) -> HTTPResponse:
        """
        Route a target to its handler and return the response.

        Never raises for handler failures; see the module docstring.
        """
        route = self.match(target)
        handler = route.handler if route else self._fallback
        name = route.name if route else "fallback"

        try:
            return handler(target)
        except HandlerError as e:
            logger.info(f"Route '{name}' rejected '{target}': {e.status_code} {e.message}")
            return error_response(e.status_code, e.body())
        except Exception as e:
            logger.exception(f"Route '{name}' failed on '{target}'")
            return internal_error(f"Internal error: {e}", wrap=False)


def _not_sure(target: str) -> HTTPResponse:
    return bad_request(NOT_SURE_MESSAGE, wrap=False)
