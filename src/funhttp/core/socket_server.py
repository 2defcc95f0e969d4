"""
=============================================================================
LOW-LEVEL TCP SOCKET SERVER
=============================================================================

Owns the listening socket and the accept loop. It knows nothing about
HTTP: every accepted client is wrapped in a Connection and passed to a
ConnectionHandler callback.

=============================================================================
SOCKET LIFECYCLE
=============================================================================

    1. socket()    Create the listening socket
    2. bind()      Reserve host:port          ← failure here is fatal
    3. listen()    Start queueing clients
    4. accept()    Take the next client (1 s timeout so shutdown is seen)
    5. handler()   Handle that client completely
    6. goto 4
    7. close()     On shutdown

=============================================================================
ONE CONNECTION AT A TIME
=============================================================================

The handler runs on the accept thread, so the next accept() only happens
after the previous client was answered and closed:

    accept ──► handle A ──► accept ──► handle B ──► accept ...

While A is handled, B waits in the kernel's backlog queue. To serve
clients in parallel, pass a handler that hands the Connection off to a
thread or task and returns immediately; nothing else has to change.

=============================================================================
SIGNAL HANDLING
=============================================================================

SIGINT (Ctrl+C) and SIGTERM stop the accept loop after the current
client is done. Python only allows installing signal handlers from the
main thread, so a server started from any other thread (tests) relies
on shutdown() instead.

=============================================================================
"""

import socket
import signal
import logging
import threading
from typing import Callable, Optional, Tuple

from ..config import ServerConfig
from .connection import Connection


logger = logging.getLogger(__name__)


ConnectionHandler = Callable[[Connection], None]


class SocketServer:
    """
    Low-level TCP socket server.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      SocketServer Internals                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    start(handler)                                                    │
    │        ├──► _create_socket()   SO_REUSEADDR, accept timeout          │
    │        ├──► bind() / listen()                                        │
    │        ├──► _setup_signals()   main thread only                      │
    │        └──► _accept_loop()     blocks until shutdown()               │
    │                                                                      │
    │    shutdown()      flag the loop to stop                             │
    │    _cleanup()      restore signals, close the listening socket       │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

    Usage:
        server = SocketServer(config)
        server.start(handle_connection)  # Blocks until shutdown
    """

    def __init__(self, config: ServerConfig):
        self.config = config

        self._socket: Optional[socket.socket] = None
        self._running = False

        # Set once the listening socket is bound; lets other threads wait
        self._ready_event = threading.Event()
        self._shutdown_event = threading.Event()

        self._original_handlers: dict = {}

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def address(self) -> Tuple[str, int]:
        """
        The address actually bound.

        With port=0 the OS picks a free port; this reports which one.
        """
        if self._socket is not None:
            host, port = self._socket.getsockname()[:2]
            return (host, port)
        return (self.config.host, self.config.port)

    def _create_socket(self) -> socket.socket:
        """Create and configure the listening socket."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)

        # Allow an immediate restart while old sockets sit in TIME_WAIT
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        # accept() gives up after a second so the loop can see shutdown()
        sock.settimeout(1.0)

        return sock

    def _setup_signals(self):
        """Install SIGINT/SIGTERM handlers that call shutdown()."""
        if threading.current_thread() is not threading.main_thread():
            logger.debug("Not on the main thread, skipping signal handlers")
            return

        def shutdown_handler(signum, frame):
            signal_name = signal.Signals(signum).name
            logger.info(f"Received {signal_name}, initiating shutdown...")
            self.shutdown()

        self._original_handlers[signal.SIGTERM] = signal.signal(signal.SIGTERM, shutdown_handler)
        self._original_handlers[signal.SIGINT] = signal.signal(signal.SIGINT, shutdown_handler)

    def _restore_signals(self):
        for sig, handler in self._original_handlers.items():
            signal.signal(sig, handler)
        self._original_handlers.clear()

    def start(self, connection_handler: ConnectionHandler):
        """
        Bind, listen and accept connections until shutdown().

        Args:
            connection_handler: Called with each accepted Connection. It
                                owns the connection and must close it.

        Raises:
            OSError: If the address can't be bound. The socket is released
                     before the error propagates.
        """
        self._socket = self._create_socket()

        try:
            self._socket.bind((self.config.host, self.config.port))
        except OSError as e:
            logger.error(f"Failed to bind to {self.config.host}:{self.config.port}: {e}")
            self._socket.close()
            self._socket = None
            raise

        self._socket.listen(self.config.backlog)

        self._running = True
        self._shutdown_event.clear()
        self._setup_signals()

        host, port = self.address
        logger.info(f"Server listening on {host}:{port}")
        self._ready_event.set()

        try:
            self._accept_loop(connection_handler)
        finally:
            self._cleanup()

    def _accept_loop(self, connection_handler: ConnectionHandler):
        """
        Accept and hand off connections until the running flag drops.

        Anything a handler lets escape is logged here and the loop keeps
        going; one bad client must not take the server down.
        """
        while self._running:
            try:
                client_socket, client_address = self._socket.accept()
            except socket.timeout:
                continue
            except OSError as e:
                # Listening socket is gone: fatal unless we're stopping
                if self._running:
                    logger.error(f"Accept error: {e}")
                break

            logger.debug(f"Accepted connection from {client_address[0]}:{client_address[1]}")

            conn = Connection(
                socket=client_socket,
                address=client_address,
                buffer_size=self.config.buffer_size,
                timeout=self.config.timeout,
                max_line_size=self.config.max_line_size,
            )

            try:
                connection_handler(conn)
            except Exception:
                logger.exception(f"[{conn.id}] Unhandled error in connection handler")
                conn.close()

    def shutdown(self):
        """
        Stop accepting connections.

        Safe to call from any thread and more than once. The loop exits
        within about a second.
        """
        if self._running:
            logger.info("Shutting down socket server...")
        self._running = False
        self._shutdown_event.set()

    def _cleanup(self):
        self._restore_signals()

        if self._socket:
            try:
                self._socket.close()
            except OSError:
                pass
            self._socket = None

        self._running = False
        self._shutdown_event.set()
        logger.info("Socket server stopped")

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the socket is listening. Returns False on timeout."""
        return self._ready_event.wait(timeout)

    def wait_for_shutdown(self, timeout: Optional[float] = None) -> bool:
        """Block until the server has stopped. Returns False on timeout."""
        return self._shutdown_event.wait(timeout)
