"""
=============================================================================
CLI ENTRY POINT
=============================================================================

    # Serve the current directory on 127.0.0.1:12345
    python -m minihttp

    # Serve ./public on all interfaces, port 8080
    python -m minihttp --root ./public --host 0.0.0.0 --port 8080

    # Bound header size, confine paths to the root, JSON access log
    python -m minihttp --max-header-size 8192 --strict-paths --log-format json

Defaults come from the environment (see ServerConfig.from_env), so
HTTP_PORT=3000 python -m minihttp works too. Flags win over env vars.

=============================================================================
"""

import argparse
import sys

from . import __version__
from .server import HTTPServer
from .config import ServerConfig, LOG_FORMATS


def build_parser(defaults: ServerConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minihttp",
        description="Minimal static file HTTP/1.1 server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m minihttp                          # Serve . on 127.0.0.1:12345
  python -m minihttp --root ./public          # Serve another directory
  python -m minihttp --host 0.0.0.0 -p 8080   # Listen on all interfaces
        """
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default=defaults.host,
        help=f"Host to bind to (default: {defaults.host})"
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=defaults.port,
        help=f"Port to listen on (default: {defaults.port})"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=defaults.timeout,
        help="Per-connection socket timeout in seconds (default: none)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # REQUEST ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--root", "-r",
        default=defaults.root_dir,
        help=f"Directory to serve files from (default: {defaults.root_dir})"
    )

    parser.add_argument(
        "--max-header-size",
        type=int,
        default=defaults.max_header_size,
        help="Reject header blocks larger than this many bytes (default: unbounded)"
    )

    parser.add_argument(
        "--strict-paths",
        action="store_true",
        default=defaults.strict_paths,
        help="Answer 404 for paths that resolve outside the root directory"
    )

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        default=defaults.log_level.upper(),
        help=f"Logging level (default: {defaults.log_level})"
    )

    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default=defaults.log_format,
        help=f"Access log format (default: {defaults.log_format})"
    )

    parser.add_argument(
        "--no-access-log",
        dest="access_log",
        action="store_false",
        help="Disable per-request access log lines"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"minihttp {__version__}"
    )

    return parser


def config_from_args(argv=None) -> ServerConfig:
    """Build a ServerConfig from environment defaults overridden by argv."""
    args = build_parser(ServerConfig.from_env()).parse_args(argv)

    return ServerConfig(
        host=args.host,
        port=args.port,
        timeout=args.timeout,
        root_dir=args.root,
        max_header_size=args.max_header_size,
        strict_paths=args.strict_paths,
        log_level=args.log_level,
        log_format=args.log_format,
        access_log=args.access_log,
    )


def main(argv=None):
    """Main CLI entry point."""
    try:
        config = config_from_args(argv)
        server = HTTPServer(config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    try:
        server.run()
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
