"""Request line tokenization."""

from strict_http.domain.errors import InvalidRequestLine


def parse_request_line(request_line: str) -> tuple[str, str, str]:
    """Split the request line into raw method, path and version tokens."""
    parts = request_line.split()
    if len(parts) != 3:
        raise InvalidRequestLine
    method, path, version = parts
    return method, path, version
