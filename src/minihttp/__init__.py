"""
=============================================================================
MINIHTTP - Minimal Static File HTTP/1.1 Server
=============================================================================

Serves files from a directory over raw sockets. GET returns the file, HEAD
returns only its headers, everything else gets a small error page.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    minihttp/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m minihttp)
    ├── server.py            # HTTPServer: per-connection request loop
    ├── config.py            # ServerConfig dataclass
    ├── access_log.py        # Structured access log entries
    ├── core/                # Networking
    │   ├── socket_server.py # Bind/listen/accept
    │   └── connection.py    # Header block reading, response writing
    ├── http/                # Protocol
    │   ├── request.py       # Header block → RequestOutcome
    │   ├── response.py      # RequestOutcome → response bytes
    │   └── status_codes.py  # 200/400/404/405
    └── handlers/
        └── static.py        # Filesystem resource lookup

=============================================================================
QUICK START
=============================================================================

    from minihttp import HTTPServer, ServerConfig

    server = HTTPServer(ServerConfig(root_dir="./public", port=8080))
    server.run()

    $ curl -i http://127.0.0.1:8080/
    HTTP/1.1 200 OK
    Content-Type: text/html
    Content-Length: 1234

=============================================================================
"""

__version__ = "1.0.0"

from .server import HTTPServer, create_app
from .config import ServerConfig

__all__ = ["HTTPServer", "ServerConfig", "create_app", "__version__"]
