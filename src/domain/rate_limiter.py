"""
Sliding-window rate limiter - Per-key attempt throttling.

Sliding Window
==============

For every key the limiter keeps the timestamps of recently admitted
attempts. On each check:

1. Timestamps with ``now - t >= window_ms`` are discarded
2. If the remaining count is ``>= max_attempts`` the attempt is denied
   (the pruned sequence is still written back)
3. Otherwise ``now`` is appended and the attempt is admitted

Budgets are supplied by the caller on every call; the limiter holds no
per-action configuration. Keys are opaque: callers wanting per-user limits
compose the user identity into the key themselves.

Memory Bound
============

Tracked keys are kept in least-recently-used order and evicted once more
than ``max_keys`` are tracked. ``sweep()`` drops keys with no timestamp
left inside a window; ``sweep_if_due()`` runs it at most once per window
and is called on the request path.
"""

import logging
import threading
from collections import OrderedDict

from .ports import Clock

logger = logging.getLogger(__name__)

DEFAULT_MAX_KEYS = 10_000


class SlidingWindowRateLimiter:
    """
    In-memory sliding-window limiter.

    Thread-safe: the read-prune-compare-append sequence for a key runs
    under a single lock, so concurrent callers cannot both take the last
    slot of a budget.
    """

    def __init__(self, clock: Clock, max_keys: int | None = DEFAULT_MAX_KEYS) -> None:
        """
        Initialize limiter with an injected time source.

        Args:
            clock: Time source returning milliseconds
            max_keys: Cap on tracked keys (None disables eviction)
        """
        if max_keys is not None and max_keys <= 0:
            raise ValueError("max_keys must be positive")
        self._clock = clock
        self._max_keys = max_keys
        self._attempts: OrderedDict[str, list[float]] = OrderedDict()
        self._lock = threading.Lock()
        self._last_sweep_ms: float | None = None

    @property
    def tracked_keys(self) -> int:
        """Number of keys currently holding state."""
        with self._lock:
            return len(self._attempts)

    def is_allowed(self, key: str, max_attempts: int, window_ms: int) -> bool:
        """
        Check and record an attempt for key.

        Args:
            key: Opaque action identifier (e.g. "signup" or "signin:10.0.0.1")
            max_attempts: Attempts admitted per window, > 0
            window_ms: Window length in milliseconds, > 0

        Returns:
            True if the attempt is admitted (and recorded), False if denied
        """
        _check_budget(max_attempts, window_ms)

        with self._lock:
            now = self._clock.now_ms()
            recent = self._recent(key, now, window_ms)

            if len(recent) >= max_attempts:
                self._store(key, recent)
                return False

            recent.append(now)
            self._store(key, recent)
            return True

    def retry_after_ms(self, key: str, max_attempts: int, window_ms: int) -> float:
        """
        Time until an attempt for key would be admitted.

        Does not record anything. Returns 0 when an attempt is admissible now.
        """
        _check_budget(max_attempts, window_ms)

        with self._lock:
            now = self._clock.now_ms()
            recent = self._recent(key, now, window_ms)
            if len(recent) < max_attempts:
                return 0.0
            # The attempt that has to age out before the count drops below the budget
            blocking = recent[len(recent) - max_attempts]
            return max(0.0, blocking + window_ms - now)

    def reset(self, key: str) -> None:
        """
        Forget all recorded attempts for key.

        Operator hook for lifting a block early; the admission pipeline
        never calls it.
        """
        with self._lock:
            self._attempts.pop(key, None)

    def sweep(self, window_ms: int) -> int:
        """
        Evict keys with no attempt inside the trailing window.

        Returns:
            Number of keys evicted
        """
        if window_ms <= 0:
            raise ValueError("window_ms must be positive")

        with self._lock:
            now = self._clock.now_ms()
            stale = [
                key
                for key, stamps in self._attempts.items()
                if not stamps or now - stamps[-1] >= window_ms
            ]
            for key in stale:
                del self._attempts[key]

        if stale:
            logger.debug("Swept %d idle rate limit keys", len(stale))
        return len(stale)

    def sweep_if_due(self, window_ms: int) -> int:
        """
        Sweep idle keys, at most once per window_ms.

        Returns:
            Number of keys evicted (0 when no sweep was due)
        """
        if window_ms <= 0:
            raise ValueError("window_ms must be positive")

        with self._lock:
            now = self._clock.now_ms()
            if self._last_sweep_ms is not None and now - self._last_sweep_ms < window_ms:
                return 0
            self._last_sweep_ms = now
        return self.sweep(window_ms)

    def _recent(self, key: str, now: float, window_ms: int) -> list[float]:
        stamps = self._attempts.get(key, [])
        return [t for t in stamps if now - t < window_ms]

    def _store(self, key: str, stamps: list[float]) -> None:
        self._attempts[key] = stamps
        self._attempts.move_to_end(key)
        if self._max_keys is None:
            return
        while len(self._attempts) > self._max_keys:
            evicted, _ = self._attempts.popitem(last=False)
            logger.debug("Evicted rate limit key %s (cap %d)", evicted, self._max_keys)


def _check_budget(max_attempts: int, window_ms: int) -> None:
    if max_attempts <= 0:
        raise ValueError("max_attempts must be positive")
    if window_ms <= 0:
        raise ValueError("window_ms must be positive")
