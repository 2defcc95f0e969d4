"""
=============================================================================
UPSTREAM API HANDLERS: /github, /weather
=============================================================================

Both handlers follow the same four steps:

    ┌──────────────┐   ┌──────────────┐   ┌──────────────┐   ┌──────────┐
    │ validate     │──►│ fetch text   │──►│ json.loads + │──►│ render   │
    │ query (400)  │   │ (Fetcher)    │   │ pick fields  │   │ HTML 200 │
    └──────────────┘   └──────┬───────┘   └──────┬───────┘   └──────────┘
                              │                  │
                              └────────┬─────────┘
                                       ▼
                           UpstreamError → 500 page with
                           "Error fetching ...: <detail>"

Nothing is retried. A slow API holds up the whole server for up to the
fetcher's timeout, since connections are handled one at a time.

=============================================================================
"""

import html
import json
import logging
from typing import Any, List
from urllib.parse import quote

from ..external import Fetcher
from ..http.errors import ClientInputError, FetchError, UpstreamError
from ..http.query import parse_query, query_after_marker, query_after_question_mark
from ..http.response import HTTPResponse, ok_html
from .params import require


logger = logging.getLogger(__name__)


GITHUB_ERROR_PREFIX = "Error fetching data from GitHub"
WEATHER_ERROR_PREFIX = "Error fetching weather data"

WEATHER_MISSING = (
    "Missing 'city' or 'units' parameter. "
    "Example: /weather?city=Phoenix&units=metric"
)
WEATHER_BAD_UNITS = "'units' must be 'metric' or 'imperial'."

_UNITS = ("metric", "imperial")


def _describe(error: Exception) -> str:
    """Readable one-line description of a decoding failure."""
    if isinstance(error, KeyError):
        return f"missing field {error}"
    if isinstance(error, IndexError):
        return "empty list in response"
    return str(error)


class GitHubHandler:
    """
    Lists repositories returned by a GitHub API path.

        /github?query=users/amehlhase316/repos
            → GET https://api.github.com/users/amehlhase316/repos

    The query value is appended as-is, so callers can point it at any
    endpoint that returns a JSON array of repository objects.
    """

    MARKER = "github?"

    def __init__(self, fetcher: Fetcher, api_url: str = "https://api.github.com"):
        self.fetcher = fetcher
        self.api_url = api_url.rstrip("/")

    def handle(self, target: str) -> HTTPResponse:
        params = parse_query(query_after_marker(target, self.MARKER))
        query = params.get("query", "")
        if not query.strip():
            raise ClientInputError("Missing 'query' parameter.")

        url = f"{self.api_url}/{query}"
        try:
            repos = self._load(self.fetcher.fetch(url))
            items = [self._render_repo(repo) for repo in repos]
        except FetchError as e:
            raise UpstreamError(f"{GITHUB_ERROR_PREFIX}: {e}") from e
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.warning(f"Unexpected GitHub response for '{query}': {e!r}")
            raise UpstreamError(f"{GITHUB_ERROR_PREFIX}: {_describe(e)}") from e

        return ok_html(
            "<html><body><h2>GitHub Repositories</h2><ul>"
            + "".join(items)
            + "</ul></body></html>"
        )

    @staticmethod
    def _load(text: str) -> List[Any]:
        data = json.loads(text)
        if not isinstance(data, list):
            raise ValueError("expected a JSON array of repositories")
        return data

    @staticmethod
    def _render_repo(repo: Any) -> str:
        full_name = repo["full_name"]
        repo_id = repo["id"]
        owner = repo["owner"]["login"]
        if not isinstance(repo_id, int) or isinstance(repo_id, bool):
            raise ValueError(f"repository id is not an integer: {repo_id!r}")
        return (
            f"<li><b>Repo:</b> {full_name} | <b>ID:</b> {repo_id}"
            f" | <b>Owner:</b> {owner}</li>"
        )


class WeatherHandler:
    """
    Current weather for a city from the OpenWeather API.

        /weather?city=Phoenix&units=metric
            → GET {api_url}?q=Phoenix&appid={key}&units=metric

    `units` must be metric or imperial (any case) and is passed on as
    typed. The city is percent-encoded into the upstream URL.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        api_key: str = "",
        api_url: str = "https://api.openweathermap.org/data/2.5/weather",
        escape_html: bool = False,
    ):
        self.fetcher = fetcher
        self.api_key = api_key
        self.api_url = api_url
        self.escape_html = escape_html

    def handle(self, target: str) -> HTTPResponse:
        params = parse_query(query_after_question_mark(target))
        require(params, ("city", "units"), WEATHER_MISSING)

        city = params["city"]
        units = params["units"]
        if units.lower() not in _UNITS:
            raise ClientInputError(WEATHER_BAD_UNITS)

        url = (
            f"{self.api_url}?q={quote(city)}"
            f"&appid={quote(self.api_key)}&units={quote(units)}"
        )
        try:
            data = json.loads(self.fetcher.fetch(url))
            description = data["weather"][0]["description"]
            temp = float(data["main"]["temp"])
            wind_speed = float(data["wind"]["speed"])
        except FetchError as e:
            raise UpstreamError(f"{WEATHER_ERROR_PREFIX}: {e}") from e
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.warning(f"Unexpected weather response for '{city}': {e!r}")
            raise UpstreamError(f"{WEATHER_ERROR_PREFIX}: {_describe(e)}") from e

        if self.escape_html:
            city = html.escape(city)

        return ok_html(
            "<html><body>"
            f"<h2>Weather in {city} ({units})</h2>"
            f"<p>Temperature: {temp}°</p>"
            f"<p>Conditions: {description}</p>"
            f"<p>Wind Speed: {wind_speed} m/s</p>"
            "</body></html>"
        )
