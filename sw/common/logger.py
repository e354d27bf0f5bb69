import logging
from pathlib import Path
from logging.handlers import RotatingFileHandler
from sw.common.setup import PATHS

LOGGER_NAME = "stopwatch"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_LOG_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 3

# Shared logger for the whole package. It has no handlers until configure_logging() runs, so the core can be
# imported headless or under test without touching the log folder. Until then WARNING and above still reach
# stderr through logging's last-resort handler.
log = logging.getLogger(LOGGER_NAME)
log.propagate = False

# Attaches (or re-levels) the stopwatch's handlers: a size-rotated stopwatch.log kept across runs, a
# latest.log overwritten each run, and optionally the console. Safe to call more than once.
def configure_logging(level="INFO", console=False, log_dir: Path | None = None) -> logging.Logger:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    log.setLevel(level)

    log_dir = log_dir or PATHS.logs
    log_dir.mkdir(parents=True,exist_ok=True)
    fmt = logging.Formatter(LOG_FORMAT,LOG_DATE_FORMAT)

    def attach(suffix, build):
        handler_name = f"{LOGGER_NAME}:{suffix}"
        existing = next((h for h in log.handlers if h.get_name() == handler_name), None)
        if existing is not None:
            existing.setLevel(level)
            return
        handler = build()
        handler.setLevel(level)
        handler.setFormatter(fmt)
        handler.set_name(handler_name)
        log.addHandler(handler)

    attach("persistent", lambda: RotatingFileHandler(
        filename=log_dir / f"{LOGGER_NAME}.log",
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    ))
    attach("latest", lambda: logging.FileHandler(
        filename=log_dir / "latest.log",
        mode="w",
        encoding="utf-8",
    ))
    if console:
        attach("console", logging.StreamHandler)

    log.debug(f"Logging configured at {logging.getLevelName(level)} into '{log_dir}' (console={console})")
    return log
