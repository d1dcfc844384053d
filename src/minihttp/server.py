"""
=============================================================================
MAIN HTTP SERVER
=============================================================================

Ties the components together:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   SocketServer ──accept──► HTTPServer._handle_connection            │
    │                                 │                                    │
    │                                 └──► Thread(serve_connection, conn) │
    │                                                                      │
    │   serve_connection(conn):                                           │
    │       loop:                                                          │
    │           raw      = conn.read_header_block()     Byte-Stream Reader│
    │           outcome  = parser.parse(raw)            Header Parser     │
    │           response = builder.build(outcome)       Response Builder  │
    │           conn.send_response(response)                              │
    │           stop if outcome.close                                     │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
CONCURRENCY
=============================================================================

Every accepted connection gets its own thread. Threads share the parser
and builder, which hold no per-request state, and nothing else. There is
no pool and no cap on the number of threads: a flood of idle connections
means a flood of idle threads.

=============================================================================
ERRORS
=============================================================================

    Malformed request        → 400 response, close
    Unsupported method       → 405 response, close
    Missing file             → 404 response, close
    Client hung up           → close quietly
    I/O failure (OSError)    → log, drop this connection only

=============================================================================
"""

import logging
import socket
import threading
import time
from typing import Optional

from .access_log import AccessLog
from .config import ServerConfig
from .core import SocketServer, Connection, ConnectionState, HeaderTooLargeError
from .core.connection import TERMINATOR
from .handlers import FileSystemResources, ResourceResolver
from .http import RequestParser, ResponseBuilder


logger = logging.getLogger(__name__)


class HTTPServer:
    """
    Static file HTTP/1.1 server.

    Usage:
        server = HTTPServer(ServerConfig(root_dir="./public", port=8080))
        server.run()  # Blocks until Ctrl+C

    Args:
        config: Server configuration. Defaults to ServerConfig().
        resources: Resource resolver. Defaults to FileSystemResources over
                   config.root_dir.
    """

    def __init__(
        self,
        config: Optional[ServerConfig] = None,
        resources: Optional[ResourceResolver] = None,
    ):
        self.config = config or ServerConfig()
        self.config.validate()  # Fail-fast on invalid config

        self.resources = resources or FileSystemResources(
            self.config.root_dir,
            strict=self.config.strict_paths,
        )

        self._socket_server = SocketServer(self.config)
        self._parser = RequestParser(self.resources)
        self._builder = ResponseBuilder(self.resources)

    @property
    def address(self):
        return self._socket_server.address

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def run(self, host: Optional[str] = None, port: Optional[int] = None):
        """
        Start the server (blocking).

        Args:
            host: Override config host.
            port: Override config port.
        """
        if host:
            self.config.host = host
        if port is not None:
            self.config.port = port

        self._setup_logging()

        try:
            self._socket_server.start(self._handle_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            logger.info("Server stopped")

    def shutdown(self):
        """Stop accepting connections. Open connections run to completion."""
        self._socket_server.shutdown()

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        return self._socket_server.wait_until_ready(timeout)

    def _setup_logging(self):
        """Configure logging based on config."""
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        logging.getLogger("minihttp").setLevel(level)

    # =========================================================================
    # REQUEST HANDLING
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """Start a thread for a freshly accepted connection."""
        thread = threading.Thread(
            target=self.serve_connection,
            args=(conn,),
            name=f"conn-{conn.id}",
            daemon=True,
        )
        thread.start()

    def serve_connection(self, conn: Connection):
        """
        Run the request loop for one connection until it closes.

        Bare "\\r\\n\\r\\n" blocks are keep-alive probes: they get no
        response and the loop reads again.

        Any OSError (reset, timeout, file vanished between the existence
        check and open) or an oversized header block ends this connection
        and nothing else.
        """
        logger.info(f"[NEW CONNECTION] new connection added at {_format_address(conn.address)}")

        with conn:  # Context manager ensures connection is closed
            try:
                while True:
                    raw = conn.read_header_block()
                    if raw is None:
                        break  # Client closed the stream

                    if raw == TERMINATOR:
                        continue

                    started = time.time()

                    conn.state = ConnectionState.PARSING
                    outcome = self._parser.parse(raw)

                    conn.state = ConnectionState.RESPONDING
                    response = self._builder.build(outcome)

                    if not conn.send_response(response):
                        break

                    if self.config.access_log:
                        AccessLog.from_outcome(
                            outcome,
                            connection_id=conn.id,
                            client_ip=conn.client_ip,
                            response_bytes=len(response),
                            duration_ms=(time.time() - started) * 1000,
                        ).emit(self.config.log_format)

                    if outcome.close:
                        break

            except socket.timeout:
                logger.info(f"[{conn.id}] Read timed out")
            except HeaderTooLargeError as e:
                logger.warning(f"[{conn.id}] {e}")
            except OSError as e:
                logger.exception(f"[{conn.id}] Connection error: {e}")

        logger.info(f"[CLOSED] connection closed at {_format_address(conn.address)}")


def _format_address(address) -> str:
    if isinstance(address, tuple) and len(address) >= 2:
        return f"{address[0]}:{address[1]}"
    return str(address or "-")


def create_app(config: Optional[ServerConfig] = None) -> HTTPServer:
    """
    Create an HTTP server application.

    Example:
        app = create_app(ServerConfig(port=3000, root_dir="./public"))
        app.run()
    """
    return HTTPServer(config)
