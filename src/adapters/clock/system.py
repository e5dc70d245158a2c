"""System clock adapter - Implements Clock protocol."""

import time


class SystemClock:
    """
    Implements Clock protocol via time.monotonic().

    Readings are unaffected by wall-clock adjustments.
    """

    def now_ms(self) -> float:
        return time.monotonic() * 1000
