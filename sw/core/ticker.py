"""Cancellable periodic tick task, independent of any event loop."""


class Ticker:
    """Base interface for a repeating scheduled callback.

    ``start()`` replaces any schedule that is already active, so at most one
    is ever live.  ``cancel()`` must take effect before it returns.
    """

    def start(self, interval_ms, callback):
        raise NotImplementedError

    def cancel(self):
        raise NotImplementedError

    @property
    def active(self):
        raise NotImplementedError


class ManualTicker(Ticker):
    """Ticker that only fires when ``fire()`` is called."""

    def __init__(self):
        self.interval_ms = None
        self._callback = None
        self.starts = 0

    def start(self, interval_ms, callback):
        self.interval_ms = int(interval_ms)
        self._callback = callback
        self.starts += 1

    def cancel(self):
        self._callback = None

    @property
    def active(self):
        return self._callback is not None

    # Delivers `times` ticks. Returns how many actually fired (0 once cancelled).
    def fire(self, times=1):
        fired = 0
        for _ in range(times):
            if self._callback is None:
                break
            self._callback()
            fired += 1
        return fired
