"""
=============================================================================
REQUEST HEADER PARSING
=============================================================================

Turns the raw bytes of one request's header block into a RequestOutcome:
what was asked for, which status code it earns, and whether the connection
must be closed afterwards.

=============================================================================
WHAT WE LOOK AT
=============================================================================

    GET /about.html HTTP/1.1\r\n       ← request line: METHOD SP PATH SP ...
    Host: localhost\r\n                ← ignored
    Connection: close\r\n              ← the only header we care about
    \r\n                               ← terminator (already found by reader)

Only the first two words of the request line matter. The HTTP version is
not checked, and every header except "Connection: close" is ignored.

=============================================================================
CLASSIFICATION ORDER
=============================================================================

    request line missing / bad UTF-8 / no path   →  INVALID  400  close
    method not GET or HEAD                       →  INVALID  405  close
    resource does not exist                      →  method   404  close
    otherwise                                    →  method   200  close only if
                                                                 "Connection: close"

The method is checked before the path, so "POST" with a bogus path is still
405, not 400.

Parsing NEVER raises. Malformed input is a normal outcome (400), not an
exception the caller has to remember to catch.

=============================================================================
"""

import logging
from dataclasses import dataclass
from enum import Enum

from .status_codes import HTTPStatus
from ..handlers.static import ResourceResolver


logger = logging.getLogger(__name__)


INDEX_FILE = "index.html"
CONNECTION_PREFIX = "Connection: "


class HTTPParseError(Exception):
    """
    Raised inside the parser when the request cannot be classified as a
    servable request. Carries the status code the client should get.

    RequestParser.parse() converts it into an INVALID outcome; it never
    escapes the parser.
    """

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


class Method(Enum):
    """Request methods the server distinguishes."""
    INVALID = "INVALID"
    HEAD = "HEAD"
    GET = "GET"


_METHODS = {
    "GET": Method.GET,
    "HEAD": Method.HEAD,
}


@dataclass(frozen=True)
class RequestOutcome:
    """
    The classified result of parsing one request.

    Attributes:
        method: GET, HEAD or INVALID.
        status: 200, 400, 404 or 405. Decides how the response is framed.
        close: Whether the connection closes after the response.
        path: Resource identifier relative to the document root.
              Empty for INVALID requests.
    """

    method: Method
    status: HTTPStatus
    close: bool
    path: str = ""

    @property
    def is_ok(self) -> bool:
        return self.status == HTTPStatus.OK

    @classmethod
    def invalid(cls, status: HTTPStatus = HTTPStatus.BAD_REQUEST) -> "RequestOutcome":
        """Outcome for a request we refuse before looking at the path."""
        return cls(method=Method.INVALID, status=status, close=True, path="")


class RequestParser:
    """
    Classifies raw header blocks.

    Usage:
        parser = RequestParser(FileSystemResources("/var/www"))
        outcome = parser.parse(b"GET / HTTP/1.1\\r\\n\\r\\n")
        outcome.path   # "index.html"

    Args:
        resources: Resolver used for the existence check.
    """

    def __init__(self, resources: ResourceResolver):
        self.resources = resources

    def parse(self, raw: bytes) -> RequestOutcome:
        """
        Parse one header block (terminator included).

        Args:
            raw: Accumulated request bytes.

        Returns:
            A RequestOutcome. Never raises for bad input.
        """
        # Tolerate one stray blank line before the request line
        if raw.startswith(b"\r\n"):
            raw = raw[2:]

        lines = raw.split(b"\r\n")

        try:
            method, path = self._parse_request_line(self._decode_request_line(lines[0]))
        except HTTPParseError as e:
            logger.debug(f"Rejected request: {e}")
            return RequestOutcome.invalid(HTTPStatus(e.status_code))

        if not self.resources.exists(path):
            return RequestOutcome(
                method=method,
                status=HTTPStatus.NOT_FOUND,
                close=True,
                path=path,
            )

        return RequestOutcome(
            method=method,
            status=HTTPStatus.OK,
            close=self._wants_close(lines[1:]),
            path=path,
        )

    def _decode_request_line(self, line: bytes) -> str:
        """
        Decode the request line as UTF-8.

        Only the request line is decoded strictly; header lines are
        matched as latin-1 in _wants_close, so odd bytes in headers we
        ignore never affect the outcome.
        """
        try:
            return line.decode("utf-8")
        except UnicodeDecodeError:
            raise HTTPParseError("Request line is not valid UTF-8")

    def _parse_request_line(self, line: str) -> tuple[Method, str]:
        """
        Split "METHOD PATH ..." into a Method and a resource path.

        Raises:
            HTTPParseError: 400 for a missing token, 405 for an
                            unsupported method.
        """
        if not line:
            raise HTTPParseError("Empty request line")

        words = line.split(" ")

        method = _METHODS.get(words[0])
        if method is None:
            raise HTTPParseError(
                f"Unsupported method: {words[0]!r}",
                status_code=HTTPStatus.METHOD_NOT_ALLOWED,
            )

        if len(words) < 2 or not words[1]:
            raise HTTPParseError(f"Missing path in request line: {line!r}")

        return method, self._resolve_path(words[1])

    def _resolve_path(self, target: str) -> str:
        """
        Map the request target to a resource path.

        "/" becomes the index file. Anything else loses its first
        character (the leading slash) and is used verbatim; ".." segments
        are NOT removed.
        """
        if target == "/":
            return INDEX_FILE
        return target[1:]

    def _wants_close(self, header_lines: list[bytes]) -> bool:
        """True if a "Connection: close" header is present."""
        for raw_line in header_lines:
            line = raw_line.decode("latin-1")
            if not line.startswith(CONNECTION_PREFIX):
                continue
            if line[len(CONNECTION_PREFIX):] == "close":
                return True
        return False
