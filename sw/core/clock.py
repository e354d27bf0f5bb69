"""Clock sources for the stopwatch engine.

Readings are integer milliseconds.  The system clock is wall-clock based
(``time.time_ns()``) rather than monotonic, since a persisted reading has to
stay meaningful after the process restarts.
"""

import time


class SystemClock:
    """Wall-clock milliseconds since the Unix epoch."""

    def now(self) -> int:
        return time.time_ns() // 1_000_000


class ManualClock:
    """A clock that only moves when told to.  Used headless and in tests."""

    def __init__(self, start: int = 0):
        self.current = int(start)

    def now(self) -> int:
        return self.current

    def advance(self, ms: int) -> int:
        self.current += int(ms)
        return self.current

    def set(self, ms: int) -> None:
        self.current = int(ms)
