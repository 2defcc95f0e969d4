"""
=============================================================================
FUNHTTP CLI ENTRY POINT
=============================================================================

    # Run with defaults (127.0.0.1:9000, pages from ./www)
    python -m funhttp

    # Custom port and page directory
    python -m funhttp --port 8080 --root ./public

    # Weather endpoint needs an OpenWeather key
    python -m funhttp --weather-key abc123

    # Escape user text echoed by /countdown and /weather
    python -m funhttp --escape-html

Every flag falls back to the matching FUNHTTP_* environment variable
(see ServerConfig.from_env), then to the built-in default.

=============================================================================
"""

import argparse
import sys

from . import __version__
from .config import ServerConfig
from .server import HTTPServer


def build_parser(defaults: ServerConfig) -> argparse.ArgumentParser:
    """Create the argument parser with defaults taken from `defaults`."""
    parser = argparse.ArgumentParser(
        prog="funhttp",
        description="Tiny single-threaded HTTP server with a few fun endpoints",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m funhttp                          # Run with defaults
  python -m funhttp --port 8080              # Custom port
  python -m funhttp --host 0.0.0.0           # Listen on all interfaces
  python -m funhttp --root ./www             # Page directory
  python -m funhttp --weather-key KEY        # Enable /weather
        """,
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default=defaults.host,
        help=f"Host to bind to (default: {defaults.host})",
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=defaults.port,
        help=f"Port to listen on (default: {defaults.port})",
    )

    # ─────────────────────────────────────────────────────────────────────
    # CONTENT ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--root", "-r",
        default=defaults.document_root,
        help=f"Directory holding root.html and index.html (default: {defaults.document_root})",
    )

    parser.add_argument(
        "--fetch-timeout",
        type=float,
        default=defaults.fetch_timeout,
        help=f"Seconds to wait on the GitHub/weather APIs (default: {defaults.fetch_timeout:g})",
    )

    parser.add_argument(
        "--weather-key",
        default=defaults.weather_api_key,
        help="OpenWeather API key (default: $FUNHTTP_WEATHER_API_KEY)",
    )

    parser.add_argument(
        "--escape-html",
        action="store_true",
        default=defaults.escape_html,
        help="HTML-escape text echoed back from the query string",
    )

    # ─────────────────────────────────────────────────────────────────────
    # META ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--log-level", "-l",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=defaults.log_level.upper(),
        help=f"Logging level (default: {defaults.log_level.upper()})",
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"FunHTTP {__version__}",
    )

    return parser


def config_from_args(argv=None) -> ServerConfig:
    """Translate command-line arguments into a ServerConfig."""
    defaults = ServerConfig.from_env()
    args = build_parser(defaults).parse_args(argv)

    return ServerConfig(
        host=args.host,
        port=args.port,
        document_root=args.root,
        timeout=defaults.timeout,
        fetch_timeout=args.fetch_timeout,
        weather_api_key=args.weather_key,
        escape_html=args.escape_html,
        log_level=args.log_level,
    )


def main(argv=None):
    """Main CLI entry point."""
    try:
        config = config_from_args(argv)
        server = HTTPServer(config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    try:
        server.run()
    except OSError as e:
        print(f"Error: could not start server on {config.host}:{config.port}: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
