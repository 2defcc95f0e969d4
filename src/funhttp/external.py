"""
=============================================================================
EXTERNAL COLLABORATORS
=============================================================================

The two system boundaries the handlers talk to:

    ┌──────────────────┐        ┌─────────────────────────────────────┐
    │  Route handlers  │───────►│ FileSystem                          │
    │                  │        │   read_text(name) / exists(name)    │
    │                  │        │   (root.html, index.html, /file/)   │
    │                  │        └─────────────────────────────────────┘
    │                  │        ┌─────────────────────────────────────┐
    │                  │───────►│ Fetcher                             │
    │                  │        │   fetch(url) -> response text       │
    │                  │        │   (GitHub API, OpenWeather API)     │
    └──────────────────┘        └─────────────────────────────────────┘

Handlers depend on the Protocols only, so tests pass in-memory fakes and
never touch the disk or the network.

=============================================================================
"""

import logging
from http.client import HTTPException
from pathlib import Path
from typing import Protocol, Union
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .http.errors import FetchError


logger = logging.getLogger(__name__)


class FileSystem(Protocol):
    """Read-only view of the files the handlers need."""

    def read_text(self, name: str) -> str:
        """Return the file's contents; raise OSError if it can't be read."""
        ...

    def exists(self, name: str) -> bool:
        ...


class Fetcher(Protocol):
    """Issues GET requests to remote HTTP APIs."""

    def fetch(self, url: str) -> str:
        """Return the response body; raise FetchError on any failure."""
        ...


class LocalFileSystem:
    """
    FileSystem backed by a directory on disk.

    Relative names are resolved against `root`. Absolute names are used
    as-is, so /file/ lookups behave like a plain existence check.
    """

    def __init__(self, root: Union[str, Path] = "."):
        self.root = Path(root)

    def path_for(self, name: str) -> Path:
        return self.root / name

    def read_text(self, name: str) -> str:
        return self.path_for(name).read_text(encoding="utf-8")

    def exists(self, name: str) -> bool:
        """
        Whether `name` exists under the root.

        The empty name is never a file, even though it resolves to the
        root directory itself. Names the OS refuses to look up (too long,
        embedded NUL) count as missing.
        """
        if not name:
            return False
        try:
            return self.path_for(name).exists()
        except (OSError, ValueError):
            return False


class UrlFetcher:
    """
    Fetcher using urllib.request.

    =========================================================================
    TIMEOUTS
    =========================================================================

    urlopen(timeout=...) bounds the TCP connect AND every blocking read,
    so an unreachable host can stall a request for at most `timeout`
    seconds per step instead of forever. The server handles one
    connection at a time, so this is what keeps a dead API from freezing
    every other client.

    =========================================================================
    """

    def __init__(self, timeout: float = 20.0, user_agent: str = "FunHTTP/1.0"):
        self.timeout = timeout
        self.user_agent = user_agent

    def fetch(self, url: str) -> str:
        """
        GET a URL and return the body decoded as UTF-8.

        Raises:
            FetchError: Bad URL, connection failure, timeout or a non-2xx
                        status. The message says which.
        """
        shown = _redact(url)
        logger.debug(f"Fetching {shown}")

        try:
            request = Request(url, headers={"User-Agent": self.user_agent})
            with urlopen(request, timeout=self.timeout) as response:
                charset = response.headers.get_content_charset() or "utf-8"
                return response.read().decode(charset, errors="replace")
        except HTTPError as e:
            raise FetchError(f"HTTP {e.code} {e.reason} from {shown}") from e
        except URLError as e:
            raise FetchError(f"Cannot reach {shown}: {e.reason}") from e
        except ValueError as e:
            # urllib rejects malformed URLs with ValueError
            raise FetchError(f"Invalid URL {shown}: {e}") from e
        except (OSError, HTTPException) as e:
            # Timeouts, resets or a truncated body after connecting
            raise FetchError(f"Error reading {shown}: {e}") from e


def _redact(url: str) -> str:
    """Drop the query string, which may carry an API key."""
    base, sep, _ = url.partition("?")
    return f"{base}?..." if sep else base
