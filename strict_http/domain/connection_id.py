"""Per-connection identifiers carried into log records via contextvars."""

import contextvars
import logging
import uuid
from typing import Any, MutableMapping, Optional

LOGGER_NAMESPACE = "strict_http"

_connection_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "connection_id", default=None
)


def generate_connection_id() -> str:
    """Generate a short random identifier for one accepted connection."""
    return uuid.uuid4().hex[:16]


def get_connection_id() -> Optional[str]:
    """Retrieve the connection ID bound to the current thread's context."""
    return _connection_id_var.get()


def set_connection_id(connection_id: str) -> None:
    _connection_id_var.set(connection_id)


def clear_connection_id() -> None:
    _connection_id_var.set(None)


class ConnectionLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that stamps records with the connection ID and component."""

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})

        connection_id = get_connection_id()
        extra["connection_id"] = connection_id if connection_id is not None else "-"

        logger_name = self.logger.name
        prefix = f"{LOGGER_NAMESPACE}."
        if logger_name.startswith(prefix):
            extra["component"] = logger_name[len(prefix) :]
        else:
            extra["component"] = logger_name

        kwargs["extra"] = extra
        return msg, kwargs
