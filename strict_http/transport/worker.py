"""Worker thread logic for handling individual client connections."""

import logging
import socket
import threading
from dataclasses import dataclass

from strict_http.domain.connection_id import (
    ConnectionLoggerAdapter,
    clear_connection_id,
    generate_connection_id,
    set_connection_id,
)
from strict_http.domain.errors import ParseError, StreamEnded
from strict_http.domain.http_types import HttpResponse
from strict_http.domain.response_builders import bad_request_response, ok_response
from strict_http.pipeline.io import receive_request, send_response
from strict_http.pipeline.line_reader import LineReader
from strict_http.transport.context import WorkerContext

WORKER_LOGGER = ConnectionLoggerAdapter(
    logging.getLogger("strict_http.transport.worker"), {}
)


@dataclass
class _WorkerResources:
    thread: threading.Thread
    client_socket: socket.socket
    client_ip: str
    client_addr_str: str


def _read_and_respond(
    client_socket: socket.socket, context: WorkerContext, client_addr_str: str
) -> None:
    """Parse one request and answer it with the canned 200 or 400 response."""
    limits = context.config.limits
    with client_socket.makefile("rb") as stream:
        reader = LineReader(stream, limits.max_line_bytes)
        try:
            request = receive_request(reader, limits)
        except StreamEnded:
            WORKER_LOGGER.debug(
                "Client closed without sending a request",
                extra={"event": "idle_close", "client": client_addr_str},
            )
            return
        except ParseError as error:
            WORKER_LOGGER.warning(
                "Malformed request received",
                extra={
                    "event": "malformed_request",
                    "client": client_addr_str,
                    "error_type": type(error).__name__,
                    "error": str(error),
                    "bytes_in": reader.bytes_consumed,
                },
            )
            _respond(client_socket, bad_request_response(), client_addr_str)
            return

    WORKER_LOGGER.info(
        "Request parsed",
        extra={
            "event": "request_parsed",
            "client": client_addr_str,
            "method": request.method.value,
            "route": request.path,
            "version": request.version,
            "body_bytes": len(request.body) if request.body is not None else 0,
            "bytes_in": reader.bytes_consumed,
        },
    )
    _respond(client_socket, ok_response(), client_addr_str)


def _respond(
    client_socket: socket.socket, response: HttpResponse, client_addr_str: str
) -> None:
    try:
        send_response(client_socket, response)
    except OSError as error:
        WORKER_LOGGER.error(
            "Failed to send response",
            extra={
                "event": "response_failed",
                "client": client_addr_str,
                "status": response.status_line,
                "error_type": type(error).__name__,
            },
        )


def _cleanup_worker(context: WorkerContext, resources: _WorkerResources) -> None:
    context.connection_limiter.release(resources.client_ip)
    if context.lifecycle is not None:
        context.lifecycle.cleanup_worker(resources.thread)

    try:
        resources.client_socket.shutdown(socket.SHUT_WR)
    except OSError:
        pass
    resources.client_socket.close()

    WORKER_LOGGER.debug(
        "Socket closed",
        extra={"event": "socket_closed", "client": resources.client_addr_str},
    )
    clear_connection_id()


def handle_client(
    client_socket: socket.socket,
    client_address: tuple[str, int],
    context: WorkerContext,
) -> None:
    """Serve exactly one request on the socket, then close it."""
    current_thread = threading.current_thread()
    client_addr_str = f"{client_address[0]}:{client_address[1]}"
    resources = _WorkerResources(
        current_thread, client_socket, client_address[0], client_addr_str
    )
    set_connection_id(generate_connection_id())

    try:
        client_socket.settimeout(context.config.socket_timeout)
        _read_and_respond(client_socket, context, client_addr_str)
    except Exception as error:  # pylint: disable=broad-except
        WORKER_LOGGER.error(
            "Unexpected error in worker",
            extra={
                "event": "worker_error",
                "client": client_addr_str,
                "error_type": type(error).__name__,
                "error": str(error),
            },
            exc_info=True,
        )
    finally:
        _cleanup_worker(context, resources)
