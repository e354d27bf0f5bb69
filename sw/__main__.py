import sys
from sw.common.logger import configure_logging, log
from sw.core.config import load_settings
from sw.ui.app import main

# Entry point for `python -m sw`
def run() -> None:
    try:
        settings = load_settings()
        configure_logging(settings.log_level, console=settings.log_to_console)
        log.info(f"=== STOPWATCH SESSION STARTED (tick {settings.tick_interval_ms} ms, "
                 f"laps while paused: {settings.allow_lap_while_paused}) ===")
        main(settings)
    except SystemExit:
        raise
    except Exception:
        # Full stack trace, always
        log.exception("Uncaught exception in entrypoint, exiting")
        sys.exit(1)

if __name__ == "__main__":
    run()
