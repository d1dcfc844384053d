"""
pytest configuration and fixtures.
"""

import io
import socket
import threading
from typing import Generator
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minihttp import HTTPServer, ServerConfig


INDEX_HTML = b"<html><body><h1>Home</h1></body></html>\n"
ABOUT_HTML = b"<html><body><p>About us</p></body></html>\n"


class MemoryResources:
    """In-memory resource resolver for parser and builder tests."""

    def __init__(self, files: dict):
        self.files = dict(files)
        self.opened: list[str] = []

    def exists(self, path: str) -> bool:
        return path in self.files

    def open(self, path: str):
        self.opened.append(path)
        if path not in self.files:
            raise FileNotFoundError(path)
        return io.BytesIO(self.files[path])


@pytest.fixture
def resources() -> MemoryResources:
    """Resolver holding index.html and about.html."""
    return MemoryResources({
        "index.html": INDEX_HTML,
        "about.html": ABOUT_HTML,
    })


@pytest.fixture
def docroot(tmp_path: Path) -> Path:
    """Document root on disk with index.html, about.html and a subdirectory."""
    (tmp_path / "index.html").write_bytes(INDEX_HTML)
    (tmp_path / "about.html").write_bytes(ABOUT_HTML)
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "guide.html").write_bytes(b"<p>guide</p>")
    return tmp_path


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]


class TestServer:
    """Test server helper that runs in a background thread."""

    __test__ = False  # Not a test class

    def __init__(self, server: HTTPServer, port: int):
        self.server = server
        self.port = port
        self._thread: threading.Thread = None

    def start(self):
        """Start server in background thread."""
        self._thread = threading.Thread(
            target=self.server.run,
            kwargs={"port": self.port},
            daemon=True
        )
        self._thread.start()

        if not self.server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def connect(self) -> socket.socket:
        sock = socket.create_connection(('127.0.0.1', self.port), timeout=5.0)
        return sock

    def stop(self):
        """Stop the server."""
        self.server.shutdown()

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)


@pytest.fixture
def server_factory(docroot: Path, free_port: int) -> Generator:
    """Start servers over docroot with config overrides; stopped on teardown."""
    started = []

    def start(**overrides) -> TestServer:
        options = {
            "host": "127.0.0.1",
            "port": free_port,
            "root_dir": str(docroot),
            "log_level": "WARNING",
        }
        options.update(overrides)

        test_srv = TestServer(HTTPServer(ServerConfig(**options)), options["port"])
        test_srv.start()
        started.append(test_srv)
        return test_srv

    yield start

    for test_srv in started:
        test_srv.stop()


@pytest.fixture
def test_server(server_factory) -> TestServer:
    """A running server serving docroot."""
    return server_factory()
