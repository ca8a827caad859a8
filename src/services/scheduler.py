"""Deferred actions (the automated opponent's reply), keyed by session id so they can be cancelled."""

import threading
from typing import Callable

from src.core.logging import get_logger

logger = get_logger(__name__)


class ThreadingMoveScheduler:
    """Implementation of MoveScheduler using threading.Timer. At most one pending action per key."""

    def __init__(self) -> None:
        self._timers: dict[str, threading.Timer] = {}
        self._lock = threading.Lock()

    def schedule(self, key: str, delay: float, action: Callable[[], None]) -> None:
        def _run() -> None:
            with self._lock:
                # only forget the timer if it was not replaced in the meantime
                if self._timers.get(key) is timer:
                    del self._timers[key]
            action()

        timer = threading.Timer(delay, _run)
        timer.daemon = True
        with self._lock:
            previous = self._timers.pop(key, None)
            if previous is not None:
                previous.cancel()
            self._timers[key] = timer
        timer.start()

    def cancel(self, key: str) -> None:
        with self._lock:
            timer = self._timers.pop(key, None)
        if timer is not None:
            timer.cancel()
            logger.debug("scheduled action cancelled", key=key)

    def pending(self) -> list[str]:
        with self._lock:
            return list(self._timers)

