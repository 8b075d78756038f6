"""Main connection acceptance loop."""

import argparse
import logging
import socket
import threading

from strict_http.bootstrap.config import ServerConfig
from strict_http.bootstrap.socket_factory import create_server_socket
from strict_http.domain.connection_id import ConnectionLoggerAdapter
from strict_http.domain.response_builders import connection_limited_response
from strict_http.lifecycle.state import ServerLifecycle
from strict_http.pipeline.io import send_response
from strict_http.transport.connection_limiter import ConnectionLimiter
from strict_http.transport.context import WorkerContext
from strict_http.transport.worker import handle_client

ACCEPT_LOGGER = ConnectionLoggerAdapter(
    logging.getLogger("strict_http.transport.accept"), {}
)


def _reject_connection(
    client_socket: socket.socket, client_addr_str: str, limit_type: str
) -> None:
    ACCEPT_LOGGER.warning(
        "Connection limit reached",
        extra={
            "event": "connection_limit_reached",
            "client": client_addr_str,
            "limit_type": limit_type,
        },
    )
    try:
        send_response(client_socket, connection_limited_response(limit_type))
    except OSError:
        pass
    client_socket.close()


def _handle_accepted_client(
    client_socket: socket.socket,
    client_address: tuple[str, int],
    context: WorkerContext,
) -> None:
    """Spawn a worker thread for the connection unless a limit refuses it."""
    client_addr_str = f"{client_address[0]}:{client_address[1]}"
    ACCEPT_LOGGER.debug(
        "Client connection accepted",
        extra={"event": "client_accepted", "client": client_addr_str},
    )

    allowed, limit_type = context.connection_limiter.acquire(client_address[0])
    if not allowed:
        _reject_connection(client_socket, client_addr_str, limit_type or "global")
        return

    thread = threading.Thread(
        target=handle_client,
        args=(client_socket, client_address, context),
        name=f"worker-{client_addr_str}",
        daemon=False,
    )
    if context.lifecycle is not None:
        context.lifecycle.register_worker(thread)
    thread.start()


def run_server(
    args: argparse.Namespace, config: ServerConfig, lifecycle: ServerLifecycle
) -> None:
    """Accept connections until shutdown, one worker thread per connection."""
    server_socket = create_server_socket(args.host, args.port)

    ACCEPT_LOGGER.info(
        "Server listening for connections",
        extra={
            "event": "server_listening",
            "host": args.host,
            "port": args.port,
            "max_connections": args.max_connections,
            "max_connections_per_ip": args.max_connections_per_ip,
        },
    )

    context = WorkerContext(
        config=config,
        lifecycle=lifecycle,
        connection_limiter=ConnectionLimiter(
            args.max_connections, args.max_connections_per_ip
        ),
    )

    try:
        while not lifecycle.is_draining():
            try:
                client_socket, client_address = server_socket.accept()
            except socket.timeout:
                continue
            except OSError as error:
                if lifecycle.is_draining():
                    break
                ACCEPT_LOGGER.error(
                    "Socket accept failed",
                    extra={"event": "accept_error", "error_type": type(error).__name__},
                )
                continue

            _handle_accepted_client(client_socket, client_address, context)
    finally:
        server_socket.close()
        ACCEPT_LOGGER.info(
            "Waiting for active connections to complete",
            extra={
                "event": "shutdown_waiting",
                "grace_seconds": config.shutdown_grace_seconds,
            },
        )
        lifecycle.wait_for_workers(config.shutdown_grace_seconds)
        ACCEPT_LOGGER.info(
            "Server shutdown complete", extra={"event": "server_stopped"}
        )
