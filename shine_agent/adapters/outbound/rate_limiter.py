"""Per-minute rate limiter for outbound API calls."""

from __future__ import annotations

import threading
import time
from collections import deque
from collections.abc import Callable

WINDOW_SECONDS = 60.0


class RateLimiter:
    """Sliding-window limiter allowing ``requests_per_minute`` calls per minute.

    ``acquire`` blocks until a slot is free. A limit of ``None`` or ``<= 0``
    disables limiting. Safe to share between threads.
    """

    def __init__(
        self,
        requests_per_minute: int | None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.limit = requests_per_minute if requests_per_minute and requests_per_minute > 0 else None
        self._clock = clock
        self._sleep = sleep
        self._calls: deque[float] = deque()
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.limit is not None

    def acquire(self) -> None:
        """Block until another call is allowed."""
        if self.limit is None:
            return

        while True:
            with self._lock:
                now = self._clock()
                while self._calls and now - self._calls[0] >= WINDOW_SECONDS:
                    self._calls.popleft()
                if len(self._calls) < self.limit:
                    self._calls.append(now)
                    return
                wait_time = WINDOW_SECONDS - (now - self._calls[0])

            # Sleep outside the lock so other threads can check in
            self._sleep(max(wait_time, 0.01))
