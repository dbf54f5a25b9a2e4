"""Keep-alive pinging while a slow response is being produced."""

from __future__ import annotations

import threading
from typing import Callable, Optional

KEEP_ALIVE_INTERVAL = 30.0


class KeepAlive:
    """Calls ``ping`` every ``interval`` seconds in the background.

    Pinging ends when :meth:`stop` is called or when ``ping`` raises; in the
    latter case :attr:`cancelled` is set and the exception is kept.
    """

    def __init__(
        self, ping: Callable[[], object], interval: float = KEEP_ALIVE_INTERVAL
    ) -> None:
        self._ping = ping
        self._interval = interval
        self._done = threading.Event()
        self.cancelled = threading.Event()
        self._lock = threading.Lock()
        self._error: Optional[BaseException] = None
        self._stopped = False
        self._thread = threading.Thread(
            target=self._run, name="monkit-keepalive", daemon=True
        )
        self._thread.start()

    def _run(self) -> None:
        while not self._done.wait(self._interval):
            with self._lock:
                if self._stopped or self._error is not None:
                    return
                try:
                    self._ping()
                except Exception as exc:  # any failure of the ping ends the loop
                    self._error = exc
                    self.cancelled.set()
                    return

    def stop(self) -> Optional[BaseException]:
        """Stop pinging and return the first error a ping raised, if any.

        No ping is running once this returns. Calling it again is harmless.
        """
        self._done.set()
        with self._lock:
            self._stopped = True
            return self._error

    def __enter__(self) -> "KeepAlive":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        error = self.stop()
        if error is not None and exc is None:
            raise error


def keep_alive(
    ping: Callable[[], object], interval: float = KEEP_ALIVE_INTERVAL
) -> KeepAlive:
    """Start pinging in the background; see :class:`KeepAlive`."""
    return KeepAlive(ping, interval)