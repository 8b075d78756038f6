"""Canned HTTP responses written by the worker."""

from strict_http.domain.http_types import HttpResponse

GREETING_BODY = b"Hello from strict_http!\n"


def _plain_text(status_line: str, body: bytes) -> HttpResponse:
    return HttpResponse(status_line, {"Content-Type": "text/plain"}, body)


def ok_response() -> HttpResponse:
    """Return the fixed 200 response sent for every well-formed request."""
    return _plain_text("HTTP/1.1 200 OK", GREETING_BODY)


def bad_request_response() -> HttpResponse:
    """Return the fixed 400 response sent for every malformed request."""
    return _plain_text("HTTP/1.1 400 Bad Request", b"Bad Request")


def connection_limited_response(limit_type: str) -> HttpResponse:
    """Return a 503 when the global or per-IP connection cap is reached."""
    response = _plain_text(
        "HTTP/1.1 503 Service Unavailable", b"connection limit exceeded"
    )
    response.headers["Retry-After"] = "1"
    response.headers["X-Connection-Limit"] = limit_type
    return response
