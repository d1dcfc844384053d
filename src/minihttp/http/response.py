"""
=============================================================================
RESPONSE BUILDING
=============================================================================

Turns a RequestOutcome into the exact bytes written to the socket.

=============================================================================
TWO SHAPES OF RESPONSE
=============================================================================

SUCCESS (200):

    HTTP/1.1 200 OK\r\n
    Content-Type: text/html\r\n
    Content-Length: 1234\r\n         ← size of the file on disk
    Connection: close\r\n            ← only if the client asked to close
    \r\n
    <file bytes>                     ← GET only; HEAD stops at the blank line

ERROR (400 / 404 / 405):

    HTTP/1.1 404: NOT FOUND\r\n      ← note the colon after the code
    Content-Type: text/html\r\n
    Content-Length: 187\r\n          ← size of the rendered error page
    Connection: close\r\n            ← always
    \r\n
    <error page>                     ← omitted for HEAD

For HEAD, Content-Length still describes the body a GET would have
received, which is what HTTP expects of HEAD.

=============================================================================
ONE WRITE PER RESPONSE
=============================================================================

build() returns a single bytes object. The connection handler writes it
with one sendall(), so a response is never half-built on the wire.

=============================================================================
"""

import logging
import os

from .request import Method, RequestOutcome
from .status_codes import HTTPStatus
from ..handlers.static import ResourceResolver


logger = logging.getLogger(__name__)


HTTP_VERSION = "HTTP/1.1"
CONTENT_TYPE = "text/html"

ERROR_PAGE = """<!DOCTYPE html>
<html>
<head>
    <title>{code} {reason}</title>
</head>
<body>
    <h1>{code} {reason}</h1>
</body>
</html>
"""


def render_error_page(status: HTTPStatus) -> bytes:
    """Fill the error template with the numeric code and reason phrase."""
    return ERROR_PAGE.format(code=int(status), reason=status.phrase).encode("utf-8")


class ResponseBuilder:
    """
    Builds response bytes for RequestOutcomes.

    Usage:
        builder = ResponseBuilder(FileSystemResources("."))
        data = builder.build(outcome)
        conn.send_response(data)

    Args:
        resources: Resolver used to open files for 200 responses.
    """

    def __init__(self, resources: ResourceResolver):
        self.resources = resources

    def build(self, outcome: RequestOutcome) -> bytes:
        """
        Produce the full response for an outcome.

        Raises:
            OSError: The file passed the existence check but could not be
                     opened or read (deleted in between, a directory, no
                     permission). The caller drops the connection.
        """
        method = outcome.method.value
        if outcome.is_ok:
            logger.info(f"[{method}] successful {method} request to '{outcome.path}'")
            return self.success(outcome.path, outcome.close, outcome.method == Method.GET)

        logger.info(f"[{method}] unsuccessful {method} request with error code {int(outcome.status)}")
        return self.error(outcome.status, outcome.method != Method.HEAD)

    def success(self, path: str, close: bool, include_body: bool) -> bytes:
        """Response for an existing file. Body only when include_body is set."""
        with self.resources.open(path) as f:
            size = f.seek(0, os.SEEK_END)

            lines = [
                f"{HTTP_VERSION} {int(HTTPStatus.OK)} {HTTPStatus.OK.phrase}",
                f"Content-Type: {CONTENT_TYPE}",
                f"Content-Length: {size}",
            ]
            if close:
                lines.append("Connection: close")

            head = _encode_head(lines)
            if not include_body:
                return head

            f.seek(0)
            return head + f.read()

    def error(self, status: HTTPStatus, include_body: bool) -> bytes:
        """Error page response. Always closes the connection."""
        page = render_error_page(status)

        lines = [
            f"{HTTP_VERSION} {int(status)}: {status.phrase}",
            f"Content-Type: {CONTENT_TYPE}",
            f"Content-Length: {len(page)}",
            "Connection: close",
        ]

        head = _encode_head(lines)
        if include_body:
            return head + page
        return head


def _encode_head(lines: list[str]) -> bytes:
    """Join status line and headers, ending with the blank line."""
    return ("\r\n".join(lines) + "\r\n\r\n").encode("ascii")
