"""Unit tests covering line reading, request line and header parsing."""

import io

import pytest

from strict_http.bootstrap.config import RequestLimits
from strict_http.domain.errors import (
    BodyReadFailure,
    InvalidHeaderFormat,
    InvalidMethod,
    InvalidPath,
    InvalidRequestLine,
    InvalidVersion,
    LineReadFailure,
    LineTooLong,
    StreamEnded,
)
from strict_http.domain.http_types import Method
from strict_http.pipeline.headers import parse_header_line, read_headers
from strict_http.pipeline.io import receive_request
from strict_http.pipeline.line_reader import LineReader
from strict_http.pipeline.request_line import parse_request_line


class FailingStream:
    """Stream stub whose reads raise the configured error."""

    def __init__(self, error: OSError):
        self._error = error

    def readline(self, _limit=-1):
        raise self._error

    def read(self, _size=-1):
        raise self._error


def test_read_line_strips_crlf_and_lf(make_reader):
    reader = make_reader(b"first\r\nsecond\nthird")
    assert reader.read_line() == "first"
    assert reader.read_line() == "second"
    assert reader.read_line() == "third"


def test_read_line_returns_empty_string_for_blank_line(make_reader):
    reader = make_reader(b"\r\n")
    assert reader.read_line() == ""


def test_read_line_on_exhausted_stream_raises_stream_ended(make_reader):
    reader = make_reader(b"only\r\n")
    reader.read_line()
    with pytest.raises(StreamEnded):
        reader.read_line()


def test_read_line_wraps_socket_errors():
    """Timeouts and other socket errors surface as LineReadFailure."""
    reader = LineReader(FailingStream(TimeoutError("timed out")))
    with pytest.raises(LineReadFailure) as excinfo:
        reader.read_line()
    assert not isinstance(excinfo.value, StreamEnded)
    assert "timed out" in str(excinfo.value)


def test_read_line_rejects_invalid_utf8(make_reader):
    reader = make_reader(b"\xff\xfe\r\n")
    with pytest.raises(LineReadFailure):
        reader.read_line()


def test_read_line_enforces_optional_limit(make_reader):
    reader = make_reader(b"12345\r\n123456\r\n", max_line_bytes=5)
    assert reader.read_line() == "12345"
    with pytest.raises(LineTooLong) as excinfo:
        reader.read_line()
    assert excinfo.value.limit == 5


def test_read_exact_counts_consumed_bytes(make_reader):
    reader = make_reader(b"GET\r\nabcdef")
    reader.read_line()
    assert reader.read_exact(4) == b"abcd"
    assert reader.bytes_consumed == 9


def test_read_exact_short_read_raises_body_read_failure(make_reader):
    reader = make_reader(b"abc")
    with pytest.raises(BodyReadFailure) as excinfo:
        reader.read_exact(5)
    assert "3 of 5" in str(excinfo.value)


def test_read_exact_wraps_socket_errors():
    reader = LineReader(FailingStream(ConnectionResetError("reset")))
    with pytest.raises(BodyReadFailure):
        reader.read_exact(1)


def test_parse_request_line_splits_on_whitespace():
    assert parse_request_line("GET  /index\tHTTP/1.1") == ("GET", "/index", "HTTP/1.1")


@pytest.mark.parametrize(
    "line", ["", "GET", "GET /", "GET / HTTP/1.1 extra", "   "]
)
def test_parse_request_line_requires_three_tokens(line):
    with pytest.raises(InvalidRequestLine) as excinfo:
        parse_request_line(line)
    assert str(excinfo.value) == "Invalid request line format"


def test_parse_header_line_lowercases_name_only():
    assert parse_header_line("X-Trace-ID: AbC: d") == ("x-trace-id", "AbC: d")


def test_read_headers_normalizes_keys_until_blank_line(make_reader):
    reader = make_reader(
        b"Host: localhost\r\nContent-Length: 10\r\nX-Custom: Value\r\n\r\nBODY"
    )
    headers = read_headers(reader)
    assert headers == {
        "host": "localhost",
        "content-length": "10",
        "x-custom": "Value",
    }
    assert reader.read_exact(4) == b"BODY"


def test_read_headers_last_duplicate_wins(make_reader):
    reader = make_reader(b"X-Mode: first\r\nx-mode: second\r\n\r\n")
    assert read_headers(reader) == {"x-mode": "second"}


@pytest.mark.parametrize("line", ["invalid-line", "Host:localhost", "Host :x"])
def test_read_headers_rejects_lines_without_separator(make_reader, line):
    reader = make_reader(f"Host: a\r\n{line}\r\n\r\n".encode())
    with pytest.raises(InvalidHeaderFormat) as excinfo:
        read_headers(reader)
    assert excinfo.value.line == line
    assert line in str(excinfo.value)



def test_read_headers_keeps_trailing_whitespace(make_reader):
    reader = make_reader(b"X-Pad: value \t\r\n  \r\n\r\n")
    with pytest.raises(InvalidHeaderFormat) as excinfo:
        read_headers(reader)
    assert excinfo.value.line == "  "

    reader = make_reader(b"X-Pad: value \t\r\n\r\n")
    assert read_headers(reader) == {"x-pad": "value \t"}

def test_read_headers_fails_when_stream_ends_early(make_reader):
    reader = make_reader(b"Host: localhost\r\n")
    with pytest.raises(LineReadFailure) as excinfo:
        read_headers(reader)
    assert not isinstance(excinfo.value, StreamEnded)


def test_receive_request_builds_full_request(make_reader):
    reader = make_reader(
        b"post /echo/hello HTTP/1.1\r\n"
        b"Host: localhost\r\n"
        b"Content-Length: 5\r\n\r\n"
        b"helloEXTRA"
    )
    request = receive_request(reader)
    assert request.method is Method.POST
    assert request.path == "/echo/hello"
    assert request.version == "HTTP/1.1"
    assert request.header("content-length") == "5"
    assert request.body == b"hello"


def test_receive_request_without_body_headers_has_no_body(make_reader):
    reader = make_reader(b"GET / HTTP/1.1\r\nHost: localhost\r\n\r\nignored")
    assert receive_request(reader).body is None


def test_receive_request_rejects_short_request_line_before_headers():
    """Headers are never read once the request line is malformed."""
    stream = io.BytesIO(b"GET /\r\nbroken header line\r\n\r\n")
    reader = LineReader(stream)
    with pytest.raises(InvalidRequestLine):
        receive_request(reader)
    assert stream.read() == b"broken header line\r\n\r\n"


def test_receive_request_on_empty_stream_raises_stream_ended(make_reader):
    with pytest.raises(StreamEnded):
        receive_request(make_reader(b""))


@pytest.mark.parametrize(
    "raw, error",
    [
        (b"PATCH / HTTP/1.1\r\n\r\n", InvalidMethod),
        (b"GET /a/ HTTP/1.1\r\n\r\n", InvalidPath),
        (b"GET /a?x=1 HTTP/1.1\r\n\r\n", InvalidPath),
        (b"GET / FTP/1.0\r\n\r\n", InvalidVersion),
    ],
)
def test_receive_request_reports_validation_failures(make_reader, raw, error):
    with pytest.raises(error):
        receive_request(make_reader(raw))


def test_receive_request_applies_line_limit(make_reader):
    raw = b"GET /" + b"a" * 64 + b" HTTP/1.1\r\n\r\n"
    reader = make_reader(raw, max_line_bytes=32)
    with pytest.raises(LineTooLong):
        receive_request(reader, RequestLimits(max_line_bytes=32))
