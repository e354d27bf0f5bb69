"""Stopwatch controller: timer state, lap ledger and theme behind one command surface.

The controller owns its state explicitly and gets every collaborator
injected (clock, store, ticker, render sink, settings), so several
independent instances can coexist and tests can drive time by hand.
"""

from sw.common.logger import log
from sw.core.clock import SystemClock
from sw.core.config import build_default_settings
from sw.core.laps import LapLedger
from sw.core.snapshot import PersistedSnapshot, THEME_DARK, THEME_LIGHT
from sw.core.store import MemoryStore
from sw.core.ticker import ManualTicker
from sw.core.timer_state import TimerState, format_elapsed, split_elapsed


class RenderSink:
    """Receives display updates from a Stopwatch.  Every hook defaults to a no-op."""

    def on_time_update(self, hours, minutes, seconds, millis):
        pass

    def on_lap_added(self, index, label):
        pass

    def on_laps_cleared(self):
        pass

    def on_run_state_changed(self, running):
        pass

    def on_theme_changed(self, theme):
        pass


class Stopwatch:

    def __init__(self, clock=None, store=None, ticker=None, sink=None, settings=None):
        self.clock = clock or SystemClock()
        self.store = store if store is not None else MemoryStore()
        self.ticker = ticker or ManualTicker()
        self.sink = sink or RenderSink()
        self.settings = settings or build_default_settings()

        self.state = TimerState()
        self.laps = LapLedger()
        self.theme = self.settings.default_theme
        self._ticks_since_persist = 0

    # ------------------------------------------------------------------ #
    #  Read-only views                                                     #
    # ------------------------------------------------------------------ #

    @property
    def running(self):
        return self.state.running

    @property
    def elapsed_ms(self):
        return self.state.reading(self.clock.now())

    @property
    def lap_enabled(self):
        return self.state.running or self.settings.allow_lap_while_paused

    def elapsed_fields(self):
        return split_elapsed(self.elapsed_ms)

    def snapshot(self):
        now = self.clock.now()
        return PersistedSnapshot(
            elapsed_ms=self.state.reading(now),
            running=self.state.running,
            reference_instant=now,
            laps=tuple(self.laps.labels()),
            theme=self.theme,
        )

    # ------------------------------------------------------------------ #
    #  Commands                                                            #
    # ------------------------------------------------------------------ #

    def start(self):
        if not self.state.start(self.clock.now()):
            log.debug("Ignoring start, stopwatch is already running")
            return False
        self._ticks_since_persist = 0
        self.ticker.start(self.settings.tick_interval_ms, self.tick)
        self.sink.on_run_state_changed(True)
        self.persist()
        return True

    def stop(self):
        if not self.state.stop(self.clock.now()):
            log.debug("Ignoring stop, stopwatch is not running")
            return False
        self.ticker.cancel()
        self.sink.on_run_state_changed(False)
        self.render()
        self.persist()
        return True

    def toggle(self):
        if self.state.running:
            self.stop()
        else:
            self.start()
        return self.state.running

    def reset(self):
        was_running = self.state.running
        if was_running:
            self.ticker.cancel()
        self.state.reset()
        self.laps.clear()
        self.sink.on_laps_cleared()
        if was_running:
            self.sink.on_run_state_changed(False)
        self.render()
        self.persist()
        log.info("Stopwatch reset")

    # Driven by the ticker. A tick that lands while stopped is dropped rather than touching frozen state.
    def tick(self):
        if not self.state.running:
            log.debug("Dropping tick delivered while stopped")
            return
        self.state.freeze(self.clock.now())
        self.render()
        self._ticks_since_persist += 1
        if self._ticks_since_persist >= self.settings.persist_every_n_ticks:
            self._ticks_since_persist = 0
            self.persist()

    # Records a lap labelled with the elapsed time at this instant. Returns the new LapEntry, or None when
    # the lap was rejected because the stopwatch is paused.
    def record_lap(self):
        if not self.lap_enabled:
            log.debug("Ignoring lap, stopwatch is not running")
            return None
        elapsed = self.state.freeze(self.clock.now())
        entry = self.laps.record(format_elapsed(elapsed))
        self.sink.on_lap_added(entry.index, entry.label)
        self.render()
        self.persist()
        log.info(f"Recorded lap {entry.index} at {entry.label}")
        return entry

    def set_theme(self, dark):
        self.theme = THEME_DARK if dark else THEME_LIGHT
        self.sink.on_theme_changed(self.theme)
        self.persist()

    # ------------------------------------------------------------------ #
    #  Rendering / persistence                                             #
    # ------------------------------------------------------------------ #

    def render(self):
        self.sink.on_time_update(*self.elapsed_fields())

    def persist(self):
        self.store.save(self.snapshot())

    # Connects a render sink and replays the full current state into it.
    def attach(self, sink):
        self.sink = sink
        self.sync_view()

    def sync_view(self):
        self.sink.on_theme_changed(self.theme)
        self.sink.on_laps_cleared()
        for entry in self.laps:
            self.sink.on_lap_added(entry.index, entry.label)
        self.render()
        self.sink.on_run_state_changed(self.state.running)
