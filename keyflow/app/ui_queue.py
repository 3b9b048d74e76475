"""Hand work from background threads to the Tk main loop.

Tk widgets, ``after`` included, may only be touched from the thread running
``mainloop``. Other threads ``post`` callables into a thread-safe queue and
a timer on the Tk thread drains it.
"""

from __future__ import annotations

import logging
import queue
from typing import Callable, Optional

ScheduleFn = Callable[[int, Callable[[], None]], str]
CancelFn = Callable[[str], None]

_log = logging.getLogger(__name__)


class UiCallQueue:
    """Run posted callables on the UI thread, in posting order."""

    def __init__(self, schedule: ScheduleFn, cancel: CancelFn, *, interval_ms: int = 50) -> None:
        """
        Args:
            schedule: ``after(delay_ms, callback)`` of the Tk root.
            cancel: ``after_cancel(token)`` of the Tk root.
            interval_ms: Delay between two drains of the queue.
        """
        self._schedule = schedule
        self._cancel = cancel
        self._interval_ms = max(1, int(interval_ms))
        self._pending: "queue.SimpleQueue[Callable[[], None]]" = queue.SimpleQueue()
        self._token: Optional[str] = None
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def post(self, callback: Callable[[], None]) -> None:
        """Queue ``callback``; safe to call from any thread."""
        self._pending.put(callback)

    def start(self) -> None:
        """Begin draining. Must be called on the UI thread."""
        if self._running:
            return
        self._running = True
        self._token = self._schedule(self._interval_ms, self.pump)

    def stop(self) -> None:
        """Cancel the drain timer; callables still queued are dropped."""
        self._running = False
        token, self._token = self._token, None
        if token is not None:
            try:
                self._cancel(token)
            except Exception:
                _log.debug("UI drain timer already gone", exc_info=True)

    def pump(self) -> int:
        """Run everything queued so far and re-arm the timer.

        Returns:
            How many callables ran.
        """
        ran = 0
        try:
            while True:
                try:
                    callback = self._pending.get_nowait()
                except queue.Empty:
                    break
                callback()
                ran += 1
        finally:
            if self._running:
                self._token = self._schedule(self._interval_ms, self.pump)
        return ran


__all__ = ["UiCallQueue"]
