"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Centralized configuration for the server.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m minihttp --port 3000                            │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── HTTP_PORT=3000 python -m minihttp                         │
    │                                                                      │
    │   3. Default values (in this dataclass)                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Configuration is validated once at startup; a bad value stops the server
before it binds a socket.

=============================================================================
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


LOG_FORMATS = ("text", "json")


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_optional(name: str, convert):
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return convert(value)


@dataclass
class ServerConfig:
    """
    Configuration for the HTTP server.

    NETWORK SETTINGS
    - host, port, backlog, timeout

    REQUEST SETTINGS
    - root_dir, max_header_size, strict_paths

    LOGGING
    - log_level, log_format, access_log
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "127.0.0.1"
    """The IP address to bind to. "0.0.0.0" for all interfaces."""

    port: int = 12345
    """The port number to listen on. 0 lets the OS pick a free port."""

    backlog: int = 128
    """Maximum number of queued, not yet accepted connections."""

    timeout: Optional[float] = None
    """
    Per-connection socket timeout in seconds.
    None = block forever; a silent client then keeps its thread.
    """

    # ─────────────────────────────────────────────────────────────────────
    # REQUEST SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    root_dir: str = "."
    """Directory request paths are resolved against."""

    max_header_size: Optional[int] = None
    """
    Largest header block accepted, in bytes.
    None = unbounded. A client that never sends \\r\\n\\r\\n can then grow
    its buffer without limit.
    """

    strict_paths: bool = False
    """
    Reject request paths that resolve outside root_dir (answered as 404).
    Off by default: "/../x" is served relative to root_dir as written.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""

    log_format: str = "text"
    """Access log format: 'text' (human readable) or 'json'."""

    access_log: bool = True
    """Emit one access log line per response."""

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        HTTP_HOST             Server host (default: 127.0.0.1)
        HTTP_PORT             Server port (default: 12345)
        HTTP_TIMEOUT          Socket timeout in seconds (default: none)
        HTTP_ROOT_DIR         Document root (default: .)
        HTTP_MAX_HEADER_SIZE  Header block limit in bytes (default: none)
        HTTP_STRICT_PATHS     Confine paths to the root (default: false)
        HTTP_LOG_LEVEL        Logging level (default: INFO)
        HTTP_LOG_FORMAT       text or json (default: text)
        """
        return cls(
            host=os.getenv("HTTP_HOST", "127.0.0.1"),
            port=int(os.getenv("HTTP_PORT", "12345")),
            timeout=_env_optional("HTTP_TIMEOUT", float),
            root_dir=os.getenv("HTTP_ROOT_DIR", "."),
            max_header_size=_env_optional("HTTP_MAX_HEADER_SIZE", int),
            strict_paths=_env_bool(os.getenv("HTTP_STRICT_PATHS", "false")),
            log_level=os.getenv("HTTP_LOG_LEVEL", "INFO"),
            log_format=os.getenv("HTTP_LOG_FORMAT", "text"),
        )

    def validate(self) -> None:
        """Validate configuration values. Raises ValueError on the first problem."""
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        if self.max_header_size is not None and self.max_header_size < 4:
            raise ValueError("max_header_size must be >= 4")

        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {', '.join(LOG_FORMATS)}")

        if not Path(self.root_dir).is_dir():
            raise ValueError(f"root_dir does not exist: {self.root_dir}")
