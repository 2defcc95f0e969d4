"""
=============================================================================
CONNECTION WRAPPER
=============================================================================

Wraps an accepted client socket with the little bit of structure the
server needs: buffered line reading, a single response write and a clean
close.

=============================================================================
WHY READ LINE BY LINE?
=============================================================================

The server only cares about the request line. Everything after it is
read and thrown away until the blank line that ends the headers:

    GET /multiply?num1=3&num2=4 HTTP/1.1\r\n   ← the only line we keep
    Host: localhost:9000\r\n                    ← read, discarded
    User-Agent: curl/8.4.0\r\n                  ← read, discarded
    \r\n                                        ← stop here

TCP delivers bytes in arbitrary chunks, so one recv() may hold half a
line or three lines. _buffer keeps whatever came after the last newline
until the next read_line() call.

=============================================================================
CONNECTION LIFECYCLE
=============================================================================

    NEW ──► READING ──► PROCESSING ──► WRITING ──► CLOSED
                │                                     ▲
                └────────── (error / EOF) ────────────┘

Exactly one response goes out per connection, then it is closed. There
is no keep-alive.

=============================================================================
"""

import socket
import time
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import ClassVar, Optional
import uuid

from ..http.errors import RequestTooLarge


logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Connection lifecycle states, mostly for logging."""
    NEW = "new"                # Just accepted
    READING = "reading"        # Reading request lines
    PROCESSING = "processing"  # Handler is running
    WRITING = "writing"        # Sending the response
    CLOSED = "closed"          # Socket released


@dataclass
class Connection:
    """
    Represents one client connection.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    Connection Responsibilities                       │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │  1. BUFFERED LINE READING                                            │
    │     └── read_line() returns one decoded line, None at EOF            │
    │     └── Lines longer than max_line_size raise RequestTooLarge        │
    │                                                                      │
    │  2. TIMEOUTS                                                         │
    │     └── A silent client raises socket.timeout after `timeout`        │
    │                                                                      │
    │  3. ONE WRITE                                                        │
    │     └── send_response() uses sendall() for the whole response        │
    │                                                                      │
    │  4. GUARANTEED CLOSE                                                 │
    │     └── Use as a context manager; close() is idempotent              │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short connection identifier for log lines.
        state: Current connection state.
        created_at: Timestamp when the connection was accepted.
    """

    socket: socket.socket
    address: tuple

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)

    buffer_size: int = 8192
    timeout: Optional[float] = 30.0
    max_line_size: int = 64 * 1024

    _buffer: bytes = field(default=b"", repr=False)

    # Upper bounds on discarding unread input in close()
    DRAIN_TIMEOUT: ClassVar[float] = 0.5
    DRAIN_LIMIT: ClassVar[int] = 64 * 1024

    def __post_init__(self):
        self.socket.setblocking(True)
        if self.timeout:
            self.socket.settimeout(self.timeout)

    @property
    def client_ip(self) -> str:
        """Get the client IP address (socketpair peers have none)."""
        if isinstance(self.address, tuple) and self.address:
            return str(self.address[0])
        return "-"

    @property
    def age(self) -> float:
        """Get connection age in seconds."""
        return time.time() - self.created_at

    # =========================================================================
    # READING
    # =========================================================================

    def read_line(self) -> Optional[str]:
        """
        Read one line from the socket.

        Accepts both "\\r\\n" and bare "\\n" line endings. A final line with
        no terminator is returned as-is when the client closes its side.

        Returns:
            The decoded line without its terminator, or None at end of stream.

        Raises:
            RequestTooLarge: The line exceeds max_line_size.
            socket.timeout: The client went quiet for longer than timeout.
            OSError: Any other socket failure.
        """
        self.state = ConnectionState.READING

        while b"\n" not in self._buffer:
            if len(self._buffer) > self.max_line_size:
                raise RequestTooLarge(f"Request line too long: {len(self._buffer)} bytes")

            chunk = self._recv()
            if not chunk:
                if not self._buffer:
                    return None
                # Client closed mid-line; hand back what we have
                line, self._buffer = self._buffer, b""
                return self._decode(line)

            self._buffer += chunk

        line, _, self._buffer = self._buffer.partition(b"\n")
        if len(line) > self.max_line_size:
            raise RequestTooLarge(f"Request line too long: {len(line)} bytes")

        return self._decode(line)

    @staticmethod
    def _decode(line: bytes) -> str:
        if line.endswith(b"\r"):
            line = line[:-1]
        return line.decode("utf-8", errors="replace")

    def _recv(self) -> bytes:
        """
        Receive data from the socket.

        A reset from the client is treated like a normal EOF; timeouts
        and other socket errors propagate to the connection loop.
        """
        try:
            return self.socket.recv(self.buffer_size)
        except (ConnectionResetError, BrokenPipeError):
            return b""

    # =========================================================================
    # WRITING
    # =========================================================================

    def send_response(self, data: bytes) -> bool:
        """
        Send the serialized response.

        Returns:
            True if everything was sent, False if the client was gone.
        """
        self.state = ConnectionState.WRITING

        try:
            self.socket.sendall(data)
            return True
        except OSError as e:
            logger.warning(f"[{self.id}] Send failed: {e}")
            return False

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self):
        """
        Close the connection.

        shutdown(SHUT_WR) sends FIN so the client sees end of response,
        then unread request bytes are drained before the descriptor is
        released, so the kernel doesn't answer them with a reset that
        could destroy the response in flight.

        The drain is bounded by DRAIN_TIMEOUT seconds in total and
        DRAIN_LIMIT bytes: the server handles one connection at a time,
        and a client that keeps trickling data must not hold it here.
        """
        if self.state == ConnectionState.CLOSED:
            return

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Peer already gone

        self._drain()

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.age * 1000:.1f}ms")

    def _drain(self):
        deadline = time.monotonic() + self.DRAIN_TIMEOUT
        drained = 0

        try:
            while drained < self.DRAIN_LIMIT:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                self.socket.settimeout(remaining)
                chunk = self.socket.recv(4096)
                if not chunk:
                    break
                drained += len(chunk)
        except OSError:
            pass

        if drained:
            logger.debug(f"[{self.id}] Discarded {drained} unread bytes")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
