"""
Unit tests for request header parsing.
"""

import pytest

from minihttp.http.request import (
    HTTPParseError,
    Method,
    RequestOutcome,
    RequestParser,
)
from minihttp.http.status_codes import HTTPStatus


@pytest.fixture
def parser(resources) -> RequestParser:
    return RequestParser(resources)


class TestRequestParser:
    """Tests for RequestParser.parse()."""

    def test_root_resolves_to_index(self, parser: RequestParser):
        """GET / maps to index.html."""
        outcome = parser.parse(b"GET / HTTP/1.1\r\n\r\n")

        assert outcome == RequestOutcome(
            method=Method.GET,
            status=HTTPStatus.OK,
            close=False,
            path="index.html",
        )

    def test_leading_slash_stripped(self, parser: RequestParser):
        outcome = parser.parse(b"GET /about.html HTTP/1.1\r\nHost: test\r\n\r\n")

        assert outcome.path == "about.html"
        assert outcome.status == HTTPStatus.OK
        assert outcome.close is False

    def test_head_method(self, parser: RequestParser):
        outcome = parser.parse(b"HEAD /about.html HTTP/1.1\r\n\r\n")

        assert outcome.method == Method.HEAD
        assert outcome.status == HTTPStatus.OK

    def test_connection_close_header(self, parser: RequestParser):
        raw = b"GET /about.html HTTP/1.1\r\nHost: x\r\nConnection: close\r\n\r\n"
        outcome = parser.parse(raw)

        assert outcome.close is True
        assert outcome.status == HTTPStatus.OK

    def test_connection_keep_alive_header_keeps_open(self, parser: RequestParser):
        raw = b"GET /about.html HTTP/1.1\r\nConnection: keep-alive\r\n\r\n"

        assert parser.parse(raw).close is False

    def test_connection_header_is_case_sensitive(self, parser: RequestParser):
        """Only the exact "Connection: close" spelling is recognised."""
        raw = b"GET /about.html HTTP/1.1\r\nconnection: close\r\n\r\n"

        assert parser.parse(raw).close is False

    def test_leading_blank_line_tolerated(self, parser: RequestParser):
        outcome = parser.parse(b"\r\nGET / HTTP/1.1\r\n\r\n")

        assert outcome.status == HTTPStatus.OK
        assert outcome.path == "index.html"

    def test_unsupported_method_is_405(self, parser: RequestParser):
        outcome = parser.parse(b"POST /about.html HTTP/1.1\r\n\r\n")

        assert outcome == RequestOutcome.invalid(HTTPStatus.METHOD_NOT_ALLOWED)
        assert outcome.method == Method.INVALID
        assert outcome.close is True
        assert outcome.path == ""

    def test_method_checked_before_path(self, parser: RequestParser):
        """An unsupported verb wins over a missing path token."""
        outcome = parser.parse(b"DELETE\r\n\r\n")

        assert outcome.status == HTTPStatus.METHOD_NOT_ALLOWED

    def test_method_is_case_sensitive(self, parser: RequestParser):
        assert parser.parse(b"get / HTTP/1.1\r\n\r\n").status == HTTPStatus.METHOD_NOT_ALLOWED

    def test_missing_path_is_400(self, parser: RequestParser):
        outcome = parser.parse(b"GET\r\nHost: test\r\n\r\n")

        assert outcome == RequestOutcome.invalid(HTTPStatus.BAD_REQUEST)

    def test_empty_path_token_is_400(self, parser: RequestParser):
        outcome = parser.parse(b"GET  HTTP/1.1\r\n\r\n")

        assert outcome == RequestOutcome.invalid(HTTPStatus.BAD_REQUEST)

    def test_empty_request_line_is_400(self, parser: RequestParser):
        outcome = parser.parse(b"\r\n\r\n\r\n")

        assert outcome.status == HTTPStatus.BAD_REQUEST
        assert outcome.close is True

    def test_non_utf8_is_400(self, parser: RequestParser):
        outcome = parser.parse(b"GET /\xff\xfe HTTP/1.1\r\n\r\n")

        assert outcome.status == HTTPStatus.BAD_REQUEST

    def test_non_utf8_header_ignored(self, parser: RequestParser):
        outcome = parser.parse(
            b"GET /about.html HTTP/1.1\r\n"
            b"User-Agent: caf\xe9\r\n"
            b"Connection: close\r\n\r\n"
        )

        assert outcome == RequestOutcome(Method.GET, HTTPStatus.OK, True, "about.html")

    def test_missing_file_is_404_and_closes(self, parser: RequestParser):
        outcome = parser.parse(b"GET /nope.html HTTP/1.1\r\n\r\n")

        assert outcome.status == HTTPStatus.NOT_FOUND
        assert outcome.method == Method.GET
        assert outcome.close is True
        assert outcome.path == "nope.html"

    def test_missing_file_keeps_head_method(self, parser: RequestParser):
        outcome = parser.parse(b"HEAD /nope.html HTTP/1.1\r\n\r\n")

        assert outcome.status == HTTPStatus.NOT_FOUND
        assert outcome.method == Method.HEAD

    def test_missing_file_closes_despite_keep_alive(self, parser: RequestParser):
        raw = b"GET /nope.html HTTP/1.1\r\nConnection: keep-alive\r\n\r\n"

        assert parser.parse(raw).close is True

    def test_traversal_segments_passed_through(self, resources):
        """Paths are used as written; ".." is not collapsed."""
        resources.files["../secret.txt"] = b"x"
        outcome = RequestParser(resources).parse(b"GET /../secret.txt HTTP/1.1\r\n\r\n")

        assert outcome.path == "../secret.txt"
        assert outcome.status == HTTPStatus.OK

    def test_http_version_not_checked(self, parser: RequestParser):
        assert parser.parse(b"GET /about.html\r\n\r\n").status == HTTPStatus.OK
        assert parser.parse(b"GET /about.html HTTP/9.9\r\n\r\n").status == HTTPStatus.OK


class TestRequestOutcome:
    """Tests for the RequestOutcome dataclass."""

    def test_is_frozen(self):
        outcome = RequestOutcome(Method.GET, HTTPStatus.OK, False, "index.html")

        with pytest.raises(AttributeError):
            outcome.close = True

    def test_invalid_defaults_to_400(self):
        outcome = RequestOutcome.invalid()

        assert outcome.status == HTTPStatus.BAD_REQUEST
        assert outcome.close is True
        assert not outcome.is_ok


class TestHTTPParseError:
    def test_carries_status_code(self):
        err = HTTPParseError("bad", status_code=405)

        assert err.status_code == 405
        assert str(err) == "bad"
