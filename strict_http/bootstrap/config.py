"""Server configuration and CLI argument parsing."""

import argparse
import os
from dataclasses import dataclass, field


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value is not None else default


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value else default


DEFAULT_HOST = _env_str("STRICT_HTTP_HOST", "127.0.0.1")
DEFAULT_PORT = _env_int("STRICT_HTTP_PORT", 8080)
DEFAULT_SOCKET_TIMEOUT = _env_int("STRICT_HTTP_SOCKET_TIMEOUT", 30)
DEFAULT_SHUTDOWN_GRACE_SECONDS = _env_int("STRICT_HTTP_SHUTDOWN_GRACE_SECONDS", 30)
DEFAULT_MAX_CONNECTIONS = _env_int("STRICT_HTTP_MAX_CONNECTIONS", 0)
DEFAULT_MAX_CONNECTIONS_PER_IP = _env_int("STRICT_HTTP_MAX_CONNECTIONS_PER_IP", 0)
DEFAULT_MAX_LINE_BYTES = _env_int("STRICT_HTTP_MAX_LINE_BYTES", 0)
DEFAULT_MAX_BODY_BYTES = _env_int("STRICT_HTTP_MAX_BODY_BYTES", 0)
LOG_FORMATS = ("json", "text")


@dataclass
class RequestLimits:
    """Optional size bounds applied while reading a request; 0 disables a bound."""

    max_line_bytes: int = 0
    max_body_bytes: int = 0


@dataclass
class ServerConfig:
    """Server configuration including timeouts, shutdown and request limits."""

    socket_timeout: float
    shutdown_grace_seconds: int
    limits: RequestLimits = field(default_factory=RequestLimits)


def build_server_config(args: argparse.Namespace) -> ServerConfig:
    """Translate parsed CLI arguments into a ServerConfig."""
    return ServerConfig(
        socket_timeout=args.socket_timeout,
        shutdown_grace_seconds=args.shutdown_grace_seconds,
        limits=RequestLimits(
            max_line_bytes=args.max_line_bytes,
            max_body_bytes=args.max_body_bytes,
        ),
    )


def parse_cli_args(argv: list[str]) -> argparse.Namespace:
    """Return parsed CLI arguments for server configuration."""
    parser = argparse.ArgumentParser(
        description="Threaded HTTP/1.1 server with a strict request reader"
    )
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    default_log_level = os.getenv("STRICT_HTTP_LOG_LEVEL", "INFO").upper()
    default_destination = os.getenv("STRICT_HTTP_LOG_DESTINATION", "stdout")
    default_log_format = os.getenv("STRICT_HTTP_LOG_FORMAT", "json").lower()
    parser.add_argument(
        "--log-level",
        default=default_log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
    )
    parser.add_argument(
        "--log-destination",
        default=default_destination,
        help="stdout or a file path",
    )
    parser.add_argument(
        "--log-format",
        default=default_log_format,
        choices=LOG_FORMATS,
        type=str.lower,
        help="Structured JSON lines or plain text",
    )
    parser.add_argument(
        "--socket-timeout",
        type=float,
        default=DEFAULT_SOCKET_TIMEOUT,
        help="Seconds any single blocking read may take before the request fails",
    )
    parser.add_argument(
        "--shutdown-grace-seconds",
        type=int,
        default=DEFAULT_SHUTDOWN_GRACE_SECONDS,
        help="Grace period in seconds for graceful shutdown",
    )
    parser.add_argument(
        "--max-connections",
        type=int,
        default=DEFAULT_MAX_CONNECTIONS,
        help="Maximum concurrent connections (0 for unlimited)",
    )
    parser.add_argument(
        "--max-connections-per-ip",
        type=int,
        default=DEFAULT_MAX_CONNECTIONS_PER_IP,
        help="Maximum concurrent connections per client IP (0 for unlimited)",
    )
    parser.add_argument(
        "--max-line-bytes",
        type=int,
        default=DEFAULT_MAX_LINE_BYTES,
        help="Longest accepted request, header or chunk line (0 for unlimited)",
    )
    parser.add_argument(
        "--max-body-bytes",
        type=int,
        default=DEFAULT_MAX_BODY_BYTES,
        help="Largest accepted request body (0 for unlimited)",
    )
    return parser.parse_args(argv)
