"""Start/stop handshake handle shared by the caller and the dispatch loop."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from .logging import log_event


class ShutdownSignal:
    """Bidirectional shutdown handle returned by ``start``.

    The caller sends ``True`` to request shutdown (``False`` is ignored by
    the loop) and then waits; the dispatch loop closes the handle once it
    has fully exited, whatever the reason.
    """

    def __init__(self, deliver: Callable[[bool], None]) -> None:
        self._deliver = deliver
        self._closed = threading.Event()
        self._close_lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def send(self, value: bool) -> None:
        """Post a shutdown request (``True``) or a no-op (``False``).

        Sending after the handle closed has no effect.
        """
        if self._closed.is_set():
            log_event("shutdown_signal_ignored", level=logging.DEBUG, value=bool(value))
            return
        self._deliver(bool(value))

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the dispatch loop has exited.

        Returns:
            True if the handle closed, False if ``timeout`` elapsed first
        """
        return self._closed.wait(timeout)

    def request_shutdown(self, timeout: float | None = None) -> bool:
        """Send ``True`` and wait for the loop to confirm it has exited."""
        self.send(True)
        return self.wait(timeout)

    def close(self) -> bool:
        """Mark the loop as exited. Only the first call has an effect.

        Returns:
            True if this call closed the handle
        """
        with self._close_lock:
            if self._closed.is_set():
                return False
            self._closed.set()
            return True

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<ShutdownSignal {state}>"
