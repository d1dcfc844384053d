"""
Unit tests for filesystem resource lookup.
"""

import pytest

from minihttp.handlers.static import FileSystemResources


class TestFileSystemResources:
    def test_exists(self, docroot):
        resources = FileSystemResources(str(docroot))

        assert resources.exists("index.html")
        assert resources.exists("docs/guide.html")
        assert not resources.exists("missing.html")

    def test_empty_path_does_not_exist(self, docroot):
        assert not FileSystemResources(str(docroot)).exists("")

    def test_nul_byte_does_not_exist(self, docroot):
        assert not FileSystemResources(str(docroot)).exists("index.html\x00")

    def test_directory_exists(self, docroot):
        """Existence only: a directory counts, even though it can't be served."""
        assert FileSystemResources(str(docroot)).exists("docs")

    def test_open_reads_bytes(self, docroot):
        with FileSystemResources(str(docroot)).open("about.html") as f:
            assert f.read() == (docroot / "about.html").read_bytes()

    def test_open_missing_raises(self, docroot):
        with pytest.raises(OSError):
            FileSystemResources(str(docroot)).open("missing.html")

    def test_traversal_allowed_by_default(self, tmp_path):
        root = tmp_path / "public"
        root.mkdir()
        (tmp_path / "secret.txt").write_bytes(b"secret")

        resources = FileSystemResources(str(root))

        assert resources.exists("../secret.txt")

    def test_strict_rejects_traversal(self, tmp_path):
        root = tmp_path / "public"
        root.mkdir()
        (root / "index.html").write_bytes(b"hi")
        (tmp_path / "secret.txt").write_bytes(b"secret")

        resources = FileSystemResources(str(root), strict=True)

        assert resources.exists("index.html")
        assert not resources.exists("../secret.txt")
        with pytest.raises(FileNotFoundError):
            resources.open("../secret.txt")
