"""
=============================================================================
HTTP SERVER
=============================================================================

Ties the pieces together into the connection loop:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                     │
    │   SocketServer.accept()                                             │
    │        │                                                            │
    │        ▼                                                            │
    │   HTTPServer.handle_connection(conn)                                │
    │        │                                                            │
    │        ├──► RequestParser.read_target(conn)                         │
    │        │        ├── None         → 400 "Illegal request: no GET"    │
    │        │        ├── OSError      → 500 "ERROR: ..." (logged)        │
    │        │        └── "multiply?…" │                                  │
    │        │                         ▼                                  │
    │        ├──► Router.dispatch(target) → HTTPResponse                  │
    │        │                                                            │
    │        ├──► conn.send_response(response.to_bytes())                 │
    │        │                                                            │
    │        └──► conn.close()   (always, via `with conn`)                │
    │                                                                     │
    └─────────────────────────────────────────────────────────────────────┘

Exactly one response per connection. The next accept() only happens
after the current connection is closed.

=============================================================================
"""

import logging
import time
from typing import Optional

from .config import ServerConfig
from .core import Connection, ConnectionState, SocketServer
from .http import HTTPResponse, RequestParser, RequestTooLarge, Router
from .http.response import bad_request, internal_error


logger = logging.getLogger(__name__)
access_logger = logging.getLogger("funhttp.access")


ILLEGAL_REQUEST_BODY = "<html>Illegal request: no GET</html>"


class HTTPServer:
    """
    Single-threaded HTTP server.

    =========================================================================
    USAGE
    =========================================================================

        from funhttp import HTTPServer, ServerConfig

        server = HTTPServer(ServerConfig(port=9000))
        server.run()           # blocks until Ctrl+C / SIGTERM

    A custom Router can be passed in, e.g. one built by
    funhttp.app.build_router() with fake collaborators.

    =========================================================================
    """

    def __init__(self, config: Optional[ServerConfig] = None, router: Optional[Router] = None):
        """
        Args:
            config: Server configuration. Validated immediately.
            router: Route table. Built from config when omitted.
        """
        self.config = config or ServerConfig()
        self.config.validate()

        if router is None:
            from .app import build_router
            router = build_router(self.config)

        self._router = router
        self._parser = RequestParser()
        self._socket_server = SocketServer(self.config)

    @property
    def router(self) -> Router:
        return self._router

    @property
    def socket_server(self) -> SocketServer:
        return self._socket_server

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def run(self, setup_logging: bool = True):
        """
        Start the server (blocking).

        Raises:
            OSError: If the port can't be bound.
        """
        if setup_logging:
            self._setup_logging()

        logger.info(
            f"Starting {self.config.server_name} on {self.config.host}:{self.config.port}"
            f" (document root: {self.config.document_root})"
        )

        try:
            self._socket_server.start(self.handle_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            logger.info("Server stopped")

    def shutdown(self):
        """Stop the server; safe to call from another thread."""
        self._socket_server.shutdown()

    def _setup_logging(self):
        """Configure logging based on config."""
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        logging.getLogger("funhttp").setLevel(level)

    # =========================================================================
    # REQUEST HANDLING
    # =========================================================================

    def handle_connection(self, conn: Connection):
        """
        Handle one connection from start to finish.

        This is the ConnectionHandler given to SocketServer. It never
        raises for a client's sake: parse problems and I/O failures turn
        into a response (if the socket still works) and a log line.
        """
        started = time.time()
        target: Optional[str] = None

        with conn:
            try:
                target = self._parser.read_target(conn)
            except (OSError, RequestTooLarge) as e:
                logger.warning(f"[{conn.id}] Failed reading request from {conn.client_ip}: {e}")
                response = internal_error(f"<html>ERROR: {e}</html>", wrap=False)
            else:
                conn.state = ConnectionState.PROCESSING
                response = self.respond(target)

            conn.send_response(response.to_bytes())
            self._log_access(conn, target, response, started)

    def respond(self, target: Optional[str]) -> HTTPResponse:
        """
        Produce the response for a parsed target.

        Args:
            target: What RequestParser returned (None if no GET line).
        """
        if target is None:
            return bad_request(ILLEGAL_REQUEST_BODY, wrap=False)
        return self._router.dispatch(target)

    def _log_access(
        self,
        conn: Connection,
        target: Optional[str],
        response: HTTPResponse,
        started: float,
    ):
        duration_ms = (time.time() - started) * 1000
        shown = "-" if target is None else f"/{target}"
        level = logging.WARNING if response.status.is_server_error else logging.INFO
        access_logger.log(
            level,
            f'{conn.client_ip} "GET {shown}" {int(response.status)} '
            f"{len(response.body)} {duration_ms:.2f}ms"
        )
