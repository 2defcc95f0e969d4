"""
=============================================================================
CORE NETWORKING
=============================================================================

    socket_server.py → SocketServer: bind, listen, accept loop
    connection.py    → Connection: line reads, one write, close

The HTTP layer plugs in through a ConnectionHandler callback; nothing in
here looks at request contents.

=============================================================================
"""

from .connection import Connection, ConnectionState
from .socket_server import SocketServer, ConnectionHandler

__all__ = [
    "Connection",
    "ConnectionState",
    "SocketServer",
    "ConnectionHandler",
]
