"""Line and exact-length reads over a binary request stream."""

from typing import BinaryIO

from strict_http.domain.errors import (
    BodyReadFailure,
    LineReadFailure,
    LineTooLong,
    StreamEnded,
)

LINE_TERMINATORS = b"\r\n"
# Declared sizes come from the client, so never ask the stream for more.
READ_CHUNK_BYTES = 64 * 1024


class LineReader:
    """Reads CRLF or LF terminated lines and fixed byte counts from a stream.

    The stream is anything with ``readline(limit)`` and ``read(n)``, typically
    the buffered file returned by ``socket.makefile("rb")``. A zero
    ``max_line_bytes`` leaves line length unbounded.
    """

    def __init__(self, stream: BinaryIO, max_line_bytes: int = 0) -> None:
        self._stream = stream
        self._max_line_bytes = max(0, max_line_bytes)
        self.bytes_consumed = 0

    def read_line(self) -> str:
        """Return the next line without its terminator."""
        limit = -1
        if self._max_line_bytes:
            limit = self._max_line_bytes + len(LINE_TERMINATORS)
        try:
            raw = self._stream.readline(limit)
        except OSError as exc:
            raise LineReadFailure(str(exc) or type(exc).__name__) from exc

        if not raw:
            raise StreamEnded
        self.bytes_consumed += len(raw)

        content = raw.rstrip(LINE_TERMINATORS)
        if self._max_line_bytes and len(content) > self._max_line_bytes:
            raise LineTooLong(self._max_line_bytes)

        try:
            return content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise LineReadFailure("line is not valid UTF-8") from exc

    def read_exact(self, size: int) -> bytes:
        """Return exactly ``size`` bytes or raise BodyReadFailure."""
        chunks = []
        remaining = size
        while remaining > 0:
            try:
                chunk = self._stream.read(min(remaining, READ_CHUNK_BYTES))
            except OSError as exc:
                raise BodyReadFailure(str(exc) or type(exc).__name__) from exc
            if not chunk:
                received = size - remaining
                raise BodyReadFailure(
                    f"stream ended after {received} of {size} bytes"
                )
            chunks.append(chunk)
            remaining -= len(chunk)
            self.bytes_consumed += len(chunk)
        return b"".join(chunks)
