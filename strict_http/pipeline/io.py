"""HTTP Input/Output operations."""

import logging
import socket
from typing import Optional

from strict_http.bootstrap.config import RequestLimits
from strict_http.domain.connection_id import ConnectionLoggerAdapter, get_connection_id
from strict_http.domain.http_types import HttpRequest, HttpResponse
from strict_http.domain.request_builder import HttpRequestBuilder
from strict_http.pipeline.body import read_body
from strict_http.pipeline.headers import read_headers
from strict_http.pipeline.line_reader import LineReader
from strict_http.pipeline.request_line import parse_request_line

IO_LOGGER = ConnectionLoggerAdapter(logging.getLogger("strict_http.pipeline.io"), {})


def receive_request(
    reader: LineReader, limits: Optional[RequestLimits] = None
) -> HttpRequest:
    """Read one request from the stream and return it fully validated.

    Raises a ParseError subclass at the first failing stage. StreamEnded on
    the request line means the client sent nothing at all.
    """
    limits = limits or RequestLimits()

    method, path, version = parse_request_line(reader.read_line())
    headers = read_headers(reader)
    body = read_body(reader, headers, limits.max_body_bytes)

    request = (
        HttpRequestBuilder()
        .method(method)
        .path(path)
        .version(version)
        .headers(headers)
        .body(body)
        .build()
    )
    IO_LOGGER.debug(
        "Parsed request",
        extra={"method": request.method.value, "route": request.path},
    )
    return request


def serialize_response(response: HttpResponse) -> bytes:
    """Render the status line, headers and body of a close-delimited response."""
    headers = dict(response.headers)

    connection_id = get_connection_id()
    if connection_id:
        headers["X-Request-ID"] = connection_id

    headers["Content-Length"] = str(len(response.body))
    headers["Connection"] = "close"
    header_lines = [response.status_line]
    header_lines.extend(f"{name}: {value}" for name, value in headers.items())
    return "\r\n".join(header_lines).encode() + b"\r\n\r\n" + response.body


def send_response(client_socket: socket.socket, response: HttpResponse) -> None:
    """Serialize and send the HTTP response over the socket."""
    client_socket.sendall(serialize_response(response))
    IO_LOGGER.debug(
        "Sent response",
        extra={"status": response.status_line, "bytes_out": len(response.body)},
    )
