"""
Rate limiter for outbound requests.

Two limits are enforced together:

- request starts are spaced at least ``min_interval`` seconds apart
- at most ``max_concurrent`` requests are in flight at once

Usage::

    limiter = RateLimiter(min_interval=1.0, max_concurrent=2)
    with limiter.slot():
        session.get(url)

    # or
    response = limiter.schedule(session.get, url)
"""

import time
import logging
from contextlib import contextmanager
from threading import BoundedSemaphore, Lock
from typing import Any, Callable, Dict, Optional


logger = logging.getLogger(__name__)


class RateLimiter:
    """Thread-safe minimum-interval + bounded-concurrency limiter."""

    def __init__(self, min_interval: float = 1.0, max_concurrent: int = 2):
        if min_interval < 0:
            raise ValueError('min_interval must be >= 0')
        if max_concurrent < 1:
            raise ValueError('max_concurrent must be >= 1')

        self.min_interval = min_interval
        self.max_concurrent = max_concurrent
        self._semaphore = BoundedSemaphore(max_concurrent)
        self._lock = Lock()
        self._last_start: Optional[float] = None
        self.total_waits = 0
        self.total_wait_seconds = 0.0

    def _wait_for_interval(self):
        """Block until *min_interval* has passed since the last start."""
        with self._lock:
            now = time.monotonic()
            if self._last_start is not None:
                wait = self._last_start + self.min_interval - now
                if wait > 0:
                    logger.debug(f"[RateLimiter] Waiting {wait:.2f}s before next request")
                    self.total_waits += 1
                    self.total_wait_seconds += wait
                    time.sleep(wait)
                    now = time.monotonic()
            self._last_start = now

    def acquire(self) -> BoundedSemaphore:
        """Take a concurrency slot and wait out the interval.

        Returns the semaphore that must be handed back to :meth:`release`;
        it may differ from the current one after :meth:`update_settings`.
        """
        semaphore = self._semaphore
        semaphore.acquire()
        try:
            self._wait_for_interval()
        except BaseException:
            semaphore.release()
            raise
        return semaphore

    @staticmethod
    def release(semaphore: BoundedSemaphore):
        semaphore.release()

    @contextmanager
    def slot(self):
        semaphore = self.acquire()
        try:
            yield self
        finally:
            self.release(semaphore)

    def schedule(self, fn: Callable[..., Any], *args, **kwargs) -> Any:
        """Run ``fn(*args, **kwargs)`` inside the limiter and return its result."""
        with self.slot():
            return fn(*args, **kwargs)

    def update_settings(self, min_interval: Optional[float] = None,
                        max_concurrent: Optional[int] = None):
        """Change limits at runtime.

        A new concurrency bound installs a fresh semaphore; requests already
        in flight hand back the one they took.
        """
        if min_interval is not None:
            if min_interval < 0:
                raise ValueError('min_interval must be >= 0')
            self.min_interval = min_interval
        if max_concurrent is not None and max_concurrent != self.max_concurrent:
            if max_concurrent < 1:
                raise ValueError('max_concurrent must be >= 1')
            self.max_concurrent = max_concurrent
            self._semaphore = BoundedSemaphore(max_concurrent)
        logger.debug(f"[RateLimiter] Settings: min_interval={self.min_interval}s, "
                     f"max_concurrent={self.max_concurrent}")

    def get_statistics(self) -> Dict:
        return {
            'min_interval': self.min_interval,
            'max_concurrent': self.max_concurrent,
            'total_waits': self.total_waits,
            'total_wait_seconds': round(self.total_wait_seconds, 3),
        }
