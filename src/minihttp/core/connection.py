"""
=============================================================================
CONNECTION MANAGEMENT
=============================================================================

This module wraps one accepted client socket: it reads header blocks,
writes responses, and closes the socket exactly once.

=============================================================================
TCP IS A BYTE STREAM, NOT A MESSAGE PROTOCOL!
=============================================================================

TCP does NOT preserve message boundaries. A request can arrive split over
several recv() calls, or glued to the next request:

    Client sends:   GET / HTTP/1.1\r\n\r\nGET /a.html HTTP/1.1\r\n\r\n
    Server may see: "GET / HT" + "TP/1.1\r\n\r\nGET /a" + ".html HTTP/1.1\r\n\r\n"

So we accumulate bytes and stop at the header terminator, \r\n\r\n.

=============================================================================
ONE BYTE AT A TIME
=============================================================================

We pull the stream one byte at a time and check the last four bytes after
every append:

    buffer: ... \r  \n  \r  \n
                └──────────────┘
                 buffer[-4:] == b"\r\n\r\n"  → header block complete

The reads go through a buffered reader (socket.makefile), so this is not
one syscall per byte. Because we never look past the terminator, bytes of
a pipelined second request stay in the reader for the next call.

=============================================================================
CONNECTION STATE MACHINE
=============================================================================

    AWAITING_REQUEST ──terminator──► PARSING ──► RESPONDING ──┐
          ▲    │                                      │        │
          │    │ end-of-stream                        │ close  │ keep-alive
          │    ▼                                      ▼        │
          │  CLOSED ◄─────────────────────────────────┘        │
          └────────────────────────────────────────────────────┘

=============================================================================
"""

import socket
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import BinaryIO, Optional
import uuid


logger = logging.getLogger(__name__)


TERMINATOR = b"\r\n\r\n"


class HeaderTooLargeError(ValueError):
    """Raised when a header block grows past the configured bound."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"Request header too large: {size} bytes (limit {limit})")
        self.size = size
        self.limit = limit


class ConnectionState(Enum):
    """
    Connection lifecycle states.

    These mirror the handler loop and are mostly useful in logs.
    """
    AWAITING_REQUEST = "awaiting_request"  # Reading a header block
    PARSING = "parsing"                    # Header block complete, classifying
    RESPONDING = "responding"              # Building and writing the response
    CLOSED = "closed"                      # Socket released


@dataclass
class Connection:
    """
    Represents a client connection.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    Connection Responsibilities                       │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │  1. READING       read_header_block() → bytes up to \r\n\r\n         │
    │  2. WRITING       send_response() → one sendall() per response       │
    │  3. CLOSING       close() → shutdown + close, safe to call twice     │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short identifier used in log lines.
        state: Current connection state.
        requests_handled: Number of header blocks read on this connection.
        max_header_size: Upper bound on a header block, None for no bound.
    """

    # Required parameters
    socket: socket.socket
    address: tuple

    # Generated/default parameters
    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.AWAITING_REQUEST
    requests_handled: int = 0

    # Configuration (passed from ServerConfig)
    timeout: Optional[float] = None
    max_header_size: Optional[int] = None

    # Internal state
    _buffer: bytearray = field(default_factory=bytearray, repr=False)
    _reader: Optional[BinaryIO] = field(default=None, repr=False)

    def __post_init__(self):
        """Configure the socket and open the buffered reader."""
        self.socket.settimeout(self.timeout)
        self._reader = self.socket.makefile("rb")

    @property
    def client_ip(self) -> str:
        return self.address[0] if self.address else "-"

    # =========================================================================
    # READING
    # =========================================================================

    def read_header_block(self) -> Optional[bytes]:
        """
        Read bytes until the buffer ends with \r\n\r\n.

        The buffer is emptied first, so nothing from the previous request
        leaks into this one.

        Returns:
            The header block, terminator included, or None if the client
            closed the stream before a terminator arrived.

        Raises:
            OSError: Any read failure other than a clean end-of-stream
                     (reset, timeout).
            HeaderTooLargeError: max_header_size is set and exceeded.
        """
        self.state = ConnectionState.AWAITING_REQUEST
        self._buffer.clear()

        while len(self._buffer) < 4 or self._buffer[-4:] != TERMINATOR:
            byte = self._reader.read(1)
            if not byte:
                return None  # Connection closed by client

            self._buffer += byte

            if self.max_header_size is not None and len(self._buffer) > self.max_header_size:
                raise HeaderTooLargeError(len(self._buffer), self.max_header_size)

        self.requests_handled += 1
        return bytes(self._buffer)

    # =========================================================================
    # WRITING
    # =========================================================================

    def send_response(self, data: bytes) -> bool:
        """
        Send a complete response.

        Returns:
            True if sent, False if the client went away mid-write.
        """
        self.state = ConnectionState.RESPONDING

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

        shutdown(SHUT_RDWR) sends FIN so the client sees end-of-stream,
        then close() releases the file descriptor. Errors are ignored: a
        client that already vanished leaves nothing to clean up.
        """
        if self.state == ConnectionState.CLOSED:
            return

        try:
            self.socket.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass  # Already disconnected

        try:
            self._reader.close()
        except OSError:
            pass
        finally:
            try:
                self.socket.close()
            except OSError:
                pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.requests_handled} requests")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - ensure connection is closed."""
        self.close()
        return False  # Don't suppress exceptions
