"""Context object shared across worker threads."""

from dataclasses import dataclass, field
from typing import Optional

from strict_http.bootstrap.config import ServerConfig
from strict_http.lifecycle.state import ServerLifecycle
from strict_http.transport.connection_limiter import ConnectionLimiter


@dataclass
class WorkerContext:
    """Read-only dependencies handed to every connection worker."""

    config: ServerConfig
    lifecycle: Optional[ServerLifecycle] = None
    connection_limiter: ConnectionLimiter = field(default_factory=ConnectionLimiter)
