"""
=============================================================================
HTTP PROTOCOL COMPONENTS
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │ REQUEST PARSER (request.py)                                         │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Input:   b"GET /about.html HTTP/1.1\r\nConnection: close\r\n\r\n"  │
    │ Output:  RequestOutcome(GET, 200, close=True, path="about.html")    │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ RESPONSE BUILDER (response.py)                                      │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Input:   RequestOutcome                                             │
    │ Output:  b"HTTP/1.1 200 OK\r\nContent-Type: text/html\r\n..."      │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ STATUS CODES (status_codes.py)                                      │
    │ ─────────────────────────────────────────────────────────────────── │
    │ 200 OK, 400 BAD REQUEST, 404 NOT FOUND, 405 METHOD NOT ALLOWED      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .status_codes import HTTPStatus
from .request import (
    HTTPParseError,
    Method,
    RequestOutcome,
    RequestParser,
)
from .response import (
    CONTENT_TYPE,
    ERROR_PAGE,
    ResponseBuilder,
    render_error_page,
)

__all__ = [
    "HTTPStatus",
    "HTTPParseError",
    "Method",
    "RequestOutcome",
    "RequestParser",
    "CONTENT_TYPE",
    "ERROR_PAGE",
    "ResponseBuilder",
    "render_error_page",
]
