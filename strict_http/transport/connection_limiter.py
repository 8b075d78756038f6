"""Optional admission control for the thread-per-connection model."""

import threading
from typing import Optional


class ConnectionLimiter:
    """Caps concurrent connections globally and per client IP.

    A cap of 0 disables that check, so the default limiter admits everything
    and the server spawns one worker per accepted socket without bound.
    """

    def __init__(self, max_connections: int = 0, max_connections_per_ip: int = 0):
        self._max_connections = max(0, max_connections)
        self._max_connections_per_ip = max(0, max_connections_per_ip)
        self._lock = threading.Lock()
        self._active = 0
        self._active_by_ip: dict[str, int] = {}

    @property
    def enabled(self) -> bool:
        return bool(self._max_connections or self._max_connections_per_ip)

    def acquire(self, client_ip: str) -> tuple[bool, Optional[str]]:
        """Reserve a slot for the client, returning (admitted, limit_type)."""
        with self._lock:
            ip_active = self._active_by_ip.get(client_ip, 0)
            if (
                self._max_connections_per_ip
                and ip_active >= self._max_connections_per_ip
            ):
                return False, "ip"
            if self._max_connections and self._active >= self._max_connections:
                return False, "global"
            self._active += 1
            self._active_by_ip[client_ip] = ip_active + 1
            return True, None

    def release(self, client_ip: str) -> None:
        with self._lock:
            self._active = max(0, self._active - 1)
            ip_active = self._active_by_ip.pop(client_ip, 0)
            if ip_active > 1:
                self._active_by_ip[client_ip] = ip_active - 1
