"""Listening socket creation."""

import logging
import socket

from strict_http.domain.connection_id import ConnectionLoggerAdapter

SOCKET_LOGGER = ConnectionLoggerAdapter(
    logging.getLogger("strict_http.bootstrap.socket"), {}
)

ACCEPT_POLL_SECONDS = 0.5


def create_server_socket(host: str, port: int) -> socket.socket:
    """Bind the listening socket; accept() wakes periodically to notice shutdown."""
    try:
        server_socket = socket.create_server((host, port))
    except OSError as error:
        SOCKET_LOGGER.critical(
            "Failed to bind listening socket",
            extra={
                "event": "bind_failed",
                "host": host,
                "port": port,
                "error": str(error),
            },
        )
        raise
    server_socket.settimeout(ACCEPT_POLL_SECONDS)
    return server_socket
