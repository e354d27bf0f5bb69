"""Cold-start reconciliation.

Rebuilds a Stopwatch from whatever the durable store holds, accounting for
the time that passed while the process was not running.
"""

from sw.common.logger import log
from sw.core.stopwatch import Stopwatch


def restore_stopwatch(clock=None, store=None, ticker=None, sink=None, settings=None):
    """Build a Stopwatch from the persisted snapshot and return it.

    A snapshot saved while running resumes ticking as if it had never
    stopped: the gap between the snapshot's reference instant and now is
    added to the saved elapsed time.  A stopped snapshot comes back exactly
    as saved.  With no usable snapshot the stopwatch starts at zero.

    The result is already persisted and, if ``sink`` is given, rendered.
    """
    watch = Stopwatch(clock=clock, store=store, ticker=ticker, settings=settings)
    snapshot = watch.store.load()

    if snapshot is None:
        log.info("Restored stopwatch to a fresh zero state.")
    else:
        now = watch.clock.now()
        watch.laps.restore(snapshot.laps)
        watch.theme = snapshot.theme

        if snapshot.running:
            gap = now - snapshot.reference_instant
            if gap < 0:
                log.warning(f"Persisted reference instant is {-gap} ms in the future, ignoring the gap")
                gap = 0
            watch.state.elapsed_ms = snapshot.elapsed_ms + gap
            watch.start()
            log.info(f"Resumed running stopwatch at {watch.state.elapsed_ms} ms ({gap} ms passed while closed), {len(watch.laps)} laps")
        else:
            watch.state.elapsed_ms = snapshot.elapsed_ms
            log.info(f"Restored stopped stopwatch at {snapshot.elapsed_ms} ms, {len(watch.laps)} laps")

    watch.persist()
    if sink is not None:
        watch.attach(sink)
    return watch
