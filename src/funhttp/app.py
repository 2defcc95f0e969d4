"""
=============================================================================
APPLICATION WIRING
=============================================================================

Builds the route table from a ServerConfig and the collaborators:

    build_router(config)                       # real disk + network
    build_router(config, files=fake_fs,        # tests
                 fetcher=fake_fetcher,
                 rng=random.Random(0))

The order of the add() calls below IS the routing order.

=============================================================================
"""

import random
from typing import Optional

from .config import ServerConfig
from .external import FileSystem, Fetcher, LocalFileSystem, UrlFetcher
from .handlers import (
    CountdownHandler,
    FileLookupHandler,
    GitHubHandler,
    ImageCatalog,
    MultiplyHandler,
    RandomImageHandler,
    RandomPageHandler,
    RootPageHandler,
    WeatherHandler,
)
from .http.router import Router, contains, equals_ignore_case, is_empty, starts_with


def build_router(
    config: Optional[ServerConfig] = None,
    files: Optional[FileSystem] = None,
    fetcher: Optional[Fetcher] = None,
    catalog: Optional[ImageCatalog] = None,
    rng: Optional[random.Random] = None,
) -> Router:
    """
    Create the router with all eight endpoints registered.

    Args:
        config: Server configuration (defaults if omitted).
        files: File system for pages and /file/ lookups.
        fetcher: HTTP client for the GitHub and weather APIs.
        catalog: Images served by /json.
        rng: Random source for /json.

    Returns:
        A Router ready for dispatch().
    """
    config = config or ServerConfig()
    files = files or LocalFileSystem(config.document_root)
    fetcher = fetcher or UrlFetcher(timeout=config.fetch_timeout)
    catalog = catalog or ImageCatalog()

    router = Router()
    router.add("root", is_empty(), RootPageHandler(files).handle)
    router.add("json", equals_ignore_case("json"), RandomImageHandler(catalog, rng).handle)
    router.add("random", equals_ignore_case("random"), RandomPageHandler(files).handle)
    router.add("file", contains("file/"), FileLookupHandler(files).handle)
    router.add("multiply", contains("multiply?"), MultiplyHandler().handle)
    router.add(
        "github",
        contains("github?"),
        GitHubHandler(fetcher, api_url=config.github_api_url).handle,
    )
    router.add(
        "weather",
        starts_with("weather?"),
        WeatherHandler(
            fetcher,
            api_key=config.weather_api_key,
            api_url=config.weather_api_url,
            escape_html=config.escape_html,
        ).handle,
    )
    router.add(
        "countdown",
        starts_with("countdown?"),
        CountdownHandler(escape_html=config.escape_html).handle,
    )
    return router
