"""
=============================================================================
CORE NETWORKING COMPONENTS
=============================================================================

    socket_server.py   Bind, listen, accept; hands out Connections
    connection.py      One client socket: read header blocks, write
                       responses, close

One thread per accepted connection. Connections share nothing, so there
are no locks anywhere in the request path.

=============================================================================
"""

from .socket_server import SocketServer
from .connection import Connection, ConnectionState, HeaderTooLargeError

__all__ = [
    "SocketServer",
    "Connection",
    "ConnectionState",
    "HeaderTooLargeError",
]
