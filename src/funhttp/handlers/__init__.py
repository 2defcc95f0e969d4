"""
=============================================================================
ROUTE HANDLERS
=============================================================================

One class per endpoint. Each exposes handle(target) -> HTTPResponse and
receives its collaborators (file system, fetcher, catalog) in __init__:

    pages.py       RootPageHandler, RandomPageHandler, FileLookupHandler
    images.py      RandomImageHandler, ImageCatalog
    arithmetic.py  MultiplyHandler, CountdownHandler
    remote.py      GitHubHandler, WeatherHandler

Handlers report failures by raising HandlerError subclasses; the router
turns those into responses.

=============================================================================
USAGE
=============================================================================

    from funhttp.handlers import MultiplyHandler
    from funhttp.http import Router, contains

    router = Router()
    router.add("multiply", contains("multiply?"), MultiplyHandler().handle)

=============================================================================
"""

from .pages import RootPageHandler, RandomPageHandler, FileLookupHandler, build_endpoint_docs
from .images import RandomImageHandler, ImageCatalog
from .arithmetic import MultiplyHandler, CountdownHandler
from .remote import GitHubHandler, WeatherHandler

__all__ = [
    "RootPageHandler",
    "RandomPageHandler",
    "FileLookupHandler",
    "build_endpoint_docs",
    "RandomImageHandler",
    "ImageCatalog",
    "MultiplyHandler",
    "CountdownHandler",
    "GitHubHandler",
    "WeatherHandler",
]
