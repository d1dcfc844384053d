"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The server only ever answers with four status codes:

    200 OK                   The requested file exists and is served
    400 BAD REQUEST          The request line could not be understood
    404 NOT FOUND            The requested file does not exist
    405 METHOD NOT ALLOWED   The verb was understood but is not GET/HEAD

The reason phrases are upper-case on the wire ("HTTP/1.1 404: NOT FOUND"),
which is why this module keeps its own table instead of reusing
http.HTTPStatus from the standard library.

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes produced by the server.

    IntEnum, so members compare and format as plain integers:

        >>> HTTPStatus.NOT_FOUND == 404
        True
        >>> f"{HTTPStatus.NOT_FOUND:d}"
        '404'
        >>> HTTPStatus.NOT_FOUND.phrase
        'NOT FOUND'
    """

    OK = 200
    BAD_REQUEST = 400           # Request line missing or malformed
    NOT_FOUND = 404             # Resource absent from the document root
    METHOD_NOT_ALLOWED = 405    # Anything other than GET or HEAD

    @property
    def phrase(self) -> str:
        """Reason phrase used in the status line and the error page."""
        return _STATUS_PHRASES[self]


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.BAD_REQUEST: "BAD REQUEST",
    HTTPStatus.NOT_FOUND: "NOT FOUND",
    HTTPStatus.METHOD_NOT_ALLOWED: "METHOD NOT ALLOWED",
}
