"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Centralized configuration for the server.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                     │
    │   Priority (highest to lowest):                                     │
    │                                                                     │
    │   1. Command-line arguments                                         │
    │      └── python -m funhttp --port 9100                              │
    │                                                                     │
    │   2. Environment variables                                          │
    │      └── FUNHTTP_PORT=9100 python -m funhttp                        │
    │                                                                     │
    │   3. Defaults below                                                 │
    │                                                                     │
    └─────────────────────────────────────────────────────────────────────┘

The weather API key is only ever read from the environment or the
command line; it has no usable default.

=============================================================================
"""

import os
from dataclasses import dataclass
from typing import Optional


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ServerConfig:
    """
    Configuration for the server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK
    - host, port, backlog, buffer_size, timeout, max_line_size

    CONTENT
    - document_root (root.html, index.html and /file/ lookups)

    UPSTREAM APIS
    - fetch_timeout, github_api_url, weather_api_url, weather_api_key

    OUTPUT
    - escape_html

    LOGGING
    - log_level

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "127.0.0.1"
    """
    The IP address to bind to.
    - "127.0.0.1" - Localhost only
    - "0.0.0.0" - All interfaces (containers)
    """

    port: int = 9000
    """The port to listen on. Fixed for the life of the process."""

    backlog: int = 128
    """Maximum number of connections queued while one is being handled."""

    buffer_size: int = 8192
    """Bytes requested per recv() call."""

    timeout: Optional[float] = 30.0
    """
    Per-connection read timeout in seconds.
    A client that connects and sends nothing is dropped after this.
    """

    max_line_size: int = 64 * 1024
    """Longest request line (or header line) accepted, in bytes."""

    # ─────────────────────────────────────────────────────────────────────
    # CONTENT
    # ─────────────────────────────────────────────────────────────────────

    document_root: str = "www"
    """
    Directory holding root.html and index.html.
    /file/<path> existence checks are resolved against it too.
    """

    # ─────────────────────────────────────────────────────────────────────
    # UPSTREAM APIS
    # ─────────────────────────────────────────────────────────────────────

    fetch_timeout: float = 20.0
    """
    Timeout for GitHub/weather requests, in seconds.
    Applies to connecting and to each blocking read.
    """

    github_api_url: str = "https://api.github.com"
    """Base URL; the 'query' parameter is appended after a '/'."""

    weather_api_url: str = "https://api.openweathermap.org/data/2.5/weather"
    """Current-weather endpoint of the OpenWeather API."""

    weather_api_key: str = ""
    """OpenWeather API key (FUNHTTP_WEATHER_API_KEY)."""

    # ─────────────────────────────────────────────────────────────────────
    # OUTPUT
    # ─────────────────────────────────────────────────────────────────────

    escape_html: bool = False
    """
    HTML-escape user-supplied text echoed into pages (the countdown
    message). Off by default: the demo pages render the message as-is,
    which lets a client inject markup. Turn this on anywhere real users
    can reach the server.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""

    server_name: str = "FunHTTP/1.0"
    """Name shown in the startup log line."""

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        FUNHTTP_HOST             Server host (default: 127.0.0.1)
        FUNHTTP_PORT             Server port (default: 9000)
        FUNHTTP_DOCUMENT_ROOT    Page directory (default: www)
        FUNHTTP_TIMEOUT          Connection read timeout (default: 30)
        FUNHTTP_FETCH_TIMEOUT    Upstream timeout (default: 20)
        FUNHTTP_WEATHER_API_KEY  OpenWeather key (default: empty)
        FUNHTTP_ESCAPE_HTML      1/true/yes to escape echoed text
        FUNHTTP_LOG_LEVEL        Logging level (default: INFO)

        =====================================================================
        """
        return cls(
            host=os.getenv("FUNHTTP_HOST", "127.0.0.1"),
            port=int(os.getenv("FUNHTTP_PORT", "9000")),
            document_root=os.getenv("FUNHTTP_DOCUMENT_ROOT", "www"),
            timeout=float(os.getenv("FUNHTTP_TIMEOUT", "30")),
            fetch_timeout=float(os.getenv("FUNHTTP_FETCH_TIMEOUT", "20")),
            weather_api_key=os.getenv("FUNHTTP_WEATHER_API_KEY", ""),
            escape_html=_env_flag(os.getenv("FUNHTTP_ESCAPE_HTML", "")),
            log_level=os.getenv("FUNHTTP_LOG_LEVEL", "INFO"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Called once at startup so a typo in the environment fails
        immediately instead of on the first request.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")

        if self.buffer_size < 1024:
            raise ValueError("buffer_size must be >= 1024")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        if self.max_line_size < 1024:
            raise ValueError("max_line_size must be >= 1024")

        if self.fetch_timeout <= 0:
            raise ValueError("fetch_timeout must be > 0")

        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level}")


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")
