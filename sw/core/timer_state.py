from dataclasses import dataclass
from sw.common.logger import log

# Largest value the HH field can show. Anything beyond is clamped for display only.
MAX_DISPLAY_MS = 100 * 3600 * 1000 - 1

# Splits a millisecond duration into (hours, minutes, seconds, millis), clamped to 0..MAX_DISPLAY_MS.
def split_elapsed(ms):
    ms = min(max(0, int(ms)), MAX_DISPLAY_MS)
    total_seconds, millis = divmod(ms, 1000)
    h, rem = divmod(total_seconds, 3600)
    m, s = divmod(rem, 60)
    return h, m, s, millis

# Formats a millisecond duration as HH:MM:SS.mmm
def format_elapsed(ms):
    h, m, s, millis = split_elapsed(ms)
    return f"{h:02d}:{m:02d}:{s:02d}.{millis:03d}"


# This object is the engine's mutable core. While running, elapsed_ms is derived by subtraction from
# reference_instant instead of adding up tick deltas, so late or skipped ticks never cause drift.
@dataclass
class TimerState:
    running: bool = False
    elapsed_ms: int = 0
    reference_instant: int = 0

    # Returns what elapsed_ms would be at `now`, without mutating anything.
    def reading(self, now):
        if not self.running:
            return self.elapsed_ms
        return max(self.elapsed_ms, now - self.reference_instant)

    # Start and stop methods. Both are no-ops when already in the target state, and report whether
    # they changed anything.
    def start(self, now):
        if self.running:
            return False
        self.reference_instant = now - self.elapsed_ms
        self.running = True
        log.debug(f"Timer started at {now} with reference {self.reference_instant}")
        return True
    def stop(self, now):
        if not self.running:
            return False
        self.freeze(now)
        self.running = False
        log.debug(f"Timer stopped at {now} with elapsed {self.elapsed_ms}")
        return True

    # Folds the current reading into elapsed_ms without stopping the timer. If the clock went backwards,
    # elapsed_ms is kept and the reference is re-anchored so it stays non-decreasing.
    def freeze(self, now):
        if not self.running:
            return self.elapsed_ms
        computed = now - self.reference_instant
        if computed < self.elapsed_ms:
            log.warning(f"Clock went backwards by {self.elapsed_ms - computed} ms, re-anchoring reference")
            self.reference_instant = now - self.elapsed_ms
        else:
            self.elapsed_ms = computed
        return self.elapsed_ms

    # Simply restores the timer to 00:00:00.000
    def reset(self):
        self.running = False
        self.elapsed_ms = 0
        self.reference_instant = 0
        log.debug("Reset timer to 0")
