"""Header block parsing."""

from strict_http.domain.errors import InvalidHeaderFormat, LineReadFailure, StreamEnded
from strict_http.pipeline.line_reader import LineReader

HEADER_SEPARATOR = ": "


def parse_header_line(line: str) -> tuple[str, str]:
    """Split one header line into a lowercase name and its raw value."""
    if HEADER_SEPARATOR not in line:
        raise InvalidHeaderFormat(line)
    name, value = line.split(HEADER_SEPARATOR, 1)
    return name.lower(), value


def read_headers(reader: LineReader) -> dict[str, str]:
    """Read header lines up to the blank line that ends the block.

    Repeated names keep the value of the last line.
    """
    headers: dict[str, str] = {}
    while True:
        try:
            line = reader.read_line()
        except StreamEnded as exc:
            raise LineReadFailure("stream ended before end of headers") from exc
        if not line:
            return headers
        name, value = parse_header_line(line)
        headers[name] = value
