"""Logging configuration utilities for the server."""

import json
import logging
import re
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from strict_http.domain.connection_id import LOGGER_NAMESPACE, ConnectionLoggerAdapter

LOG_FORMAT = "%(asctime)s %(levelname)s [%(connection_id)s] %(name)s :: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 5

SENSITIVE_PATTERNS = [
    re.compile(r"(?i)(authorization|cookie|token|password|secret|api[_-]?key)"),
    re.compile(r"\b[A-Fa-f0-9]{32,}\b"),
    re.compile(r"\b[A-Za-z0-9+/]{32,}={0,2}\b"),
]

STRUCTURED_FIELDS = (
    "client",
    "method",
    "route",
    "version",
    "status",
    "body_bytes",
    "bytes_in",
    "bytes_out",
    "chunks",
    "trailers",
    "error",
    "error_type",
    "limit_type",
    "host",
    "port",
    "destination",
    "log_level",
    "use_json",
    "socket_timeout",
    "shutdown_grace_seconds",
    "max_connections",
    "max_connections_per_ip",
    "max_line_bytes",
    "max_body_bytes",
    "remaining_workers",
    "grace_seconds",
    "signal",
)

CONFIG_LOGGER = ConnectionLoggerAdapter(
    logging.getLogger(f"{LOGGER_NAMESPACE}.bootstrap.logging"), {}
)


def redact_sensitive(value: str) -> str:
    """Replace values that look like credentials with a placeholder."""
    if not value:
        return value

    for pattern in SENSITIVE_PATTERNS:
        if pattern.search(value):
            return "[REDACTED]"

    return value


class ConnectionIdFilter(logging.Filter):  # pylint: disable=too-few-public-methods
    """Ensure every record has a connection_id and component for formatting."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "connection_id"):
            record.connection_id = "-"
        if not hasattr(record, "component"):
            record.component = record.name
        return True


class JsonFormatter(logging.Formatter):
    """Render records as single-line JSON objects with sorted keys."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "connection_id": getattr(record, "connection_id", "-"),
            "component": getattr(record, "component", "unknown"),
            "message": record.getMessage(),
        }

        if hasattr(record, "event"):
            log_data["event"] = record.event

        for key in STRUCTURED_FIELDS:
            if hasattr(record, key):
                value = getattr(record, key)
                if isinstance(value, str):
                    value = redact_sensitive(value)
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, sort_keys=True)


def _resolve_level(level_name: str) -> int:
    """Translate text level names into logging module numeric levels."""
    level = getattr(logging, level_name.upper(), None)
    if isinstance(level, int):
        return level
    return logging.INFO


def _build_handler(
    destination: Optional[str], level: int, use_json: bool = True
) -> logging.Handler:
    """Create a stdout or rotating file handler for the project logger."""
    if destination and destination.lower() != "stdout":
        target_path = Path(destination)
        target_path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            target_path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT
        )
    else:
        handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    if use_json:
        handler.setFormatter(JsonFormatter(datefmt=DATE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    handler.addFilter(ConnectionIdFilter())
    return handler


def configure_logging(
    level: str = "INFO", destination: Optional[str] = None, use_json: bool = True
) -> ConnectionLoggerAdapter:
    """Install a single handler on the project logger and return an adapter."""
    logger = logging.getLogger(LOGGER_NAMESPACE)
    numeric_level = _resolve_level(level)
    logger.setLevel(numeric_level)
    logger.propagate = False

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    logger.addHandler(_build_handler(destination, numeric_level, use_json))
    CONFIG_LOGGER.info(
        "Logging configured",
        extra={
            "event": "logging_configured",
            "log_level": logging.getLevelName(numeric_level),
            "destination": destination or "stdout",
            "use_json": use_json,
        },
    )
    return ConnectionLoggerAdapter(logger, {})
