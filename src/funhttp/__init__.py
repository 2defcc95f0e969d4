"""
=============================================================================
FUNHTTP - A Tiny Single-Threaded HTTP Server on Raw Sockets
=============================================================================

Answers GET requests for a handful of toy endpoints, one connection at a
time, using nothing but the standard library's socket module.

=============================================================================
PROJECT OVERVIEW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        FUNHTTP ARCHITECTURE                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                     │
    │   client ──TCP──► SocketServer ──► HTTPServer.handle_connection     │
    │                                         │                           │
    │                      RequestParser ◄────┤  first GET line → target  │
    │                      Router        ◄────┤  ordered first match      │
    │                      handlers      ◄────┘  page / json / multiply / │
    │                                            github / weather / ...   │
    │                                                                     │
    │   Exactly one response per connection, then close.                  │
    │                                                                     │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    funhttp/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m funhttp)
    ├── server.py            # HTTPServer: the connection loop
    ├── app.py               # build_router(): the eight endpoints
    ├── config.py            # ServerConfig dataclass
    ├── external.py          # FileSystem / Fetcher boundaries
    ├── core/
    │   ├── socket_server.py # bind, listen, accept
    │   └── connection.py    # line reads, one write, close
    ├── http/
    │   ├── request.py       # GET line → target
    │   ├── query.py         # query string → dict
    │   ├── response.py      # HTTPResponse / ResponseBuilder
    │   ├── router.py        # ordered route table
    │   ├── errors.py        # HandlerError family
    │   └── status_codes.py  # HTTPStatus
    └── handlers/
        ├── pages.py         # /, /random, /file/
        ├── images.py        # /json
        ├── arithmetic.py    # /multiply, /countdown
        └── remote.py        # /github, /weather

=============================================================================
QUICK START
=============================================================================

    from funhttp import HTTPServer, ServerConfig

    server = HTTPServer(ServerConfig(port=9000, document_root="www"))
    server.run()

    # then:  curl "http://127.0.0.1:9000/multiply?num1=3&num2=4"

=============================================================================
"""

__version__ = "1.0.0"

from .server import HTTPServer
from .config import ServerConfig
from .app import build_router

__all__ = ["HTTPServer", "ServerConfig", "build_router", "__version__"]
