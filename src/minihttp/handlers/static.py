"""
=============================================================================
STATIC FILE RESOURCES
=============================================================================

The parser needs to know whether a file exists BEFORE a response is built
(existence decides between 200 and 404), and the response builder needs to
read the file. Both go through a small resolver object instead of calling
the filesystem directly:

    RequestParser ──exists(path)──►  ResourceResolver  ◄──open(path)── ResponseBuilder
                                           │
                                           ▼
                                FileSystemResources(root_dir)

Tests swap in an in-memory resolver; the server uses FileSystemResources.

=============================================================================
SECURITY: PATH TRAVERSAL
=============================================================================

Request paths are joined onto the document root as-is. A request for
"/../../etc/passwd" therefore looks outside the root. This is the server's
historical behaviour and is kept by default.

Setting strict=True turns on the guard:

    full_path = (root_dir / user_input).resolve()
    full_path.relative_to(root_dir)  # Raises if outside root!

Paths that escape the root are then reported as missing (404).

=============================================================================
"""

import logging
from pathlib import Path
from typing import BinaryIO, Protocol


logger = logging.getLogger(__name__)


class ResourceResolver(Protocol):
    """Capability to look up and read resources by request path."""

    def exists(self, path: str) -> bool:
        ...

    def open(self, path: str) -> BinaryIO:
        ...


class FileSystemResources:
    """
    Resolve request paths against a directory on disk.

    Args:
        root_dir: Directory request paths are relative to.
                  Defaults to the process working directory.
        strict: Reject paths that resolve outside root_dir.
    """

    def __init__(self, root_dir: str = ".", strict: bool = False):
        self.root_dir = Path(root_dir)
        self.strict = strict

    def _full_path(self, path: str) -> Path:
        full_path = self.root_dir / path
        if self.strict:
            root = self.root_dir.resolve()
            try:
                full_path.resolve().relative_to(root)
            except ValueError:
                logger.warning(f"Path traversal attempt: {path}")
                raise FileNotFoundError(path)
        return full_path

    def exists(self, path: str) -> bool:
        """
        Check that path names something on disk.

        Existence only: permissions are not checked here, so a later
        open() can still fail.
        """
        if not path:
            return False
        try:
            return self._full_path(path).exists()
        except (OSError, ValueError):
            # ValueError: embedded NUL byte in the path
            return False

    def open(self, path: str) -> BinaryIO:
        """Open path for binary reading. Raises OSError on failure."""
        return self._full_path(path).open("rb")
