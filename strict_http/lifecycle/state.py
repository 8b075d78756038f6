"""Server lifecycle state management."""

import logging
import threading
import time

from strict_http.domain.connection_id import ConnectionLoggerAdapter

LIFECYCLE_LOGGER = ConnectionLoggerAdapter(
    logging.getLogger("strict_http.lifecycle"), {}
)


class ServerLifecycle:
    """Tracks live connection workers and the draining flag set on shutdown."""

    def __init__(self) -> None:
        self._workers_changed = threading.Condition()
        self._draining = threading.Event()
        self._workers: set[threading.Thread] = set()

    def is_draining(self) -> bool:
        """Return True once shutdown has been requested."""
        return self._draining.is_set()

    def begin_draining(self) -> None:
        """Stop accepting connections and let in-flight workers finish."""
        self._draining.set()
        LIFECYCLE_LOGGER.info(
            "Beginning graceful shutdown", extra={"event": "shutdown_requested"}
        )

    def register_worker(self, thread: threading.Thread) -> None:
        with self._workers_changed:
            self._workers.add(thread)

    def cleanup_worker(self, thread: threading.Thread) -> None:
        with self._workers_changed:
            self._workers.discard(thread)
            self._workers_changed.notify_all()

    def active_worker_count(self) -> int:
        with self._workers_changed:
            return len(self._workers)

    def wait_for_workers(self, timeout: float) -> bool:
        """Block until every tracked worker is gone or the timeout elapses."""
        deadline = time.monotonic() + timeout
        with self._workers_changed:
            while True:
                self._workers = {w for w in self._workers if w.is_alive()}
                if not self._workers:
                    return True
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    LIFECYCLE_LOGGER.warning(
                        "Shutdown timeout exceeded",
                        extra={
                            "event": "shutdown_timeout",
                            "remaining_workers": len(self._workers),
                        },
                    )
                    return False
                self._workers_changed.wait(min(0.1, remaining))
