"""Request parsing failures."""

from typing import Optional


class ParseError(Exception):
    """Base class for every failure raised while reading a request."""

    message = "Malformed request"

    def __init__(self, detail: Optional[str] = None) -> None:
        self.detail = detail
        text = self.message if detail is None else f"{self.message}: {detail}"
        super().__init__(text)


class MissingMethod(ParseError):
    """Raised when the builder never received a method."""

    message = "Missing HTTP method"


class MissingPath(ParseError):
    """Raised when the builder never received a path."""

    message = "Missing HTTP path"


class MissingVersion(ParseError):
    """Raised when the builder never received a protocol version."""

    message = "Missing HTTP version"


class InvalidMethod(ParseError):
    """Raised for a method token outside GET, POST, DELETE and PUT."""

    message = "Unsupported HTTP method"

    def __init__(self, original: str) -> None:
        self.original = original
        super().__init__(original)


class InvalidPath(ParseError):
    """Raised when the path does not match the segment grammar."""

    message = "Unsupported HTTP path"

    def __init__(self, original: str) -> None:
        self.original = original
        super().__init__(original)


class InvalidVersion(ParseError):
    """Raised when the version token lacks the HTTP/ prefix."""

    message = "Unsupported HTTP version"

    def __init__(self, original: str) -> None:
        self.original = original
        super().__init__(original)


class InvalidRequestLine(ParseError):
    """Raised when the request line does not split into three tokens."""

    message = "Invalid request line format"


class InvalidHeaderFormat(ParseError):
    """Raised for a header line without the ': ' separator."""

    message = "Invalid header format"

    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(line)


class InvalidContentLength(ParseError):
    """Raised when Content-Length is not a run of ASCII digits."""

    message = "Invalid Content-Length header"

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__()


class InvalidChunkSize(ParseError):
    """Raised when a chunk size line is not hexadecimal."""

    message = "Invalid chunk size"

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(text)


class BodyReadFailure(ParseError):
    """Raised when the stream cannot deliver the declared body bytes."""

    message = "Failed to read body"


class BodyTooLarge(ParseError):
    """Raised when a body grows past the configured byte limit."""

    message = "Body exceeds limit"

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"{limit} bytes")


class LineReadFailure(ParseError):
    """Raised when the underlying stream fails while reading a line."""

    message = "Failed to read line"


class LineTooLong(LineReadFailure):
    """Raised when a line grows past the configured byte limit."""

    message = "Line exceeds limit"

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"{limit} bytes")


class StreamEnded(LineReadFailure):
    """Raised when a line is requested from a stream that has no data left."""

    message = "Stream ended with no data"
