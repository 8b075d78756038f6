"""Threaded HTTP/1.1 server answering each connection after a strict request parse."""

import logging
import signal
import sys
from typing import Optional

from strict_http.bootstrap.config import build_server_config, parse_cli_args
from strict_http.bootstrap.logging_setup import configure_logging
from strict_http.domain.connection_id import ConnectionLoggerAdapter
from strict_http.lifecycle.state import ServerLifecycle
from strict_http.transport.accept_loop import run_server

SERVER_LOGGER = ConnectionLoggerAdapter(logging.getLogger("strict_http.server"), {})


def main(argv: Optional[list[str]] = None) -> None:
    """Parse arguments, configure logging and run the accept loop until shutdown."""
    args = parse_cli_args(sys.argv[1:] if argv is None else argv)
    configure_logging(
        args.log_level, args.log_destination, use_json=args.log_format == "json"
    )

    config = build_server_config(args)
    lifecycle = ServerLifecycle()

    def shutdown_handler(signum: int, _frame) -> None:
        SERVER_LOGGER.info(
            "Received shutdown signal",
            extra={"event": "signal_received", "signal": signum},
        )
        lifecycle.begin_draining()

    signal.signal(signal.SIGTERM, shutdown_handler)
    signal.signal(signal.SIGINT, shutdown_handler)

    SERVER_LOGGER.info(
        "Starting HTTP server",
        extra={
            "event": "server_starting",
            "host": args.host,
            "port": args.port,
            "log_level": args.log_level,
            "socket_timeout": config.socket_timeout,
            "shutdown_grace_seconds": config.shutdown_grace_seconds,
            "max_line_bytes": config.limits.max_line_bytes,
            "max_body_bytes": config.limits.max_body_bytes,
        },
    )
    try:
        run_server(args, config, lifecycle)
    except OSError:
        sys.exit(1)


if __name__ == "__main__":
    main()
