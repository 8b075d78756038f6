"""Message body framing: Content-Length and chunked Transfer-Encoding."""

import logging
import string
from typing import Mapping, Optional

from strict_http.domain.connection_id import ConnectionLoggerAdapter
from strict_http.domain.errors import (
    BodyReadFailure,
    BodyTooLarge,
    InvalidChunkSize,
    InvalidContentLength,
    StreamEnded,
)
from strict_http.pipeline.line_reader import LineReader

BODY_LOGGER = ConnectionLoggerAdapter(
    logging.getLogger("strict_http.pipeline.body"), {}
)

DECIMAL_DIGITS = frozenset(string.digits)
HEX_DIGITS = frozenset(string.hexdigits)
CHUNK_EXTENSION_SEPARATOR = ";"


def parse_content_length(value: str) -> int:
    """Parse a Content-Length value as a non-negative decimal integer."""
    if not value or not set(value) <= DECIMAL_DIGITS:
        raise InvalidContentLength(value)
    return int(value)


def parse_chunk_size(line: str) -> int:
    """Parse a chunk size line, dropping any chunk extensions."""
    size_text = line.strip().split(CHUNK_EXTENSION_SEPARATOR, 1)[0]
    if not size_text or not set(size_text) <= HEX_DIGITS:
        raise InvalidChunkSize(size_text)
    return int(size_text, 16)


def _check_limit(size: int, max_body_bytes: int) -> None:
    if max_body_bytes and size > max_body_bytes:
        raise BodyTooLarge(max_body_bytes)


def _read_chunked_line(reader: LineReader, stage: str) -> str:
    try:
        return reader.read_line()
    except StreamEnded as exc:
        raise BodyReadFailure(f"stream ended before {stage}") from exc


def read_fixed_length_body(
    reader: LineReader, content_length: int, max_body_bytes: int = 0
) -> Optional[bytes]:
    """Read a body of the declared length; zero length means no body."""
    if content_length == 0:
        return None
    _check_limit(content_length, max_body_bytes)
    return reader.read_exact(content_length)


def read_chunked_body(reader: LineReader, max_body_bytes: int = 0) -> bytes:
    """Decode a chunked body, discarding chunk extensions and trailers."""
    body = bytearray()
    chunk_count = 0
    while True:
        chunk_size = parse_chunk_size(_read_chunked_line(reader, "chunk size"))
        if chunk_size == 0:
            break
        _check_limit(len(body) + chunk_size, max_body_bytes)
        body += reader.read_exact(chunk_size)
        chunk_count += 1
        _read_chunked_line(reader, "chunk terminator")

    trailer_count = 0
    while _read_chunked_line(reader, "end of trailers").strip():
        trailer_count += 1

    BODY_LOGGER.debug(
        "Decoded chunked body",
        extra={
            "event": "chunked_body_decoded",
            "chunks": chunk_count,
            "trailers": trailer_count,
            "body_bytes": len(body),
        },
    )
    return bytes(body)


def read_body(
    reader: LineReader, headers: Mapping[str, str], max_body_bytes: int = 0
) -> Optional[bytes]:
    """Pick the body framing from the headers and read the payload.

    Chunked Transfer-Encoding wins over Content-Length. Without either header
    the request has no body.
    """
    transfer_encoding = headers.get("transfer-encoding")
    if transfer_encoding is not None and transfer_encoding.lower() == "chunked":
        return read_chunked_body(reader, max_body_bytes)

    declared_length = headers.get("content-length")
    if declared_length is not None:
        content_length = parse_content_length(declared_length)
        return read_fixed_length_body(reader, content_length, max_body_bytes)

    return None
