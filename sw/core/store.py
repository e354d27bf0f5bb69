"""Durable key-value stores holding the persisted stopwatch snapshot.

Saving is best effort: a failed write is logged and dropped, and the next
save simply overwrites with the current state.  Loading never raises; an
absent or unusable record comes back as ``None``.
"""

import json
import os
from pathlib import Path
from sw.common.logger import log
from sw.common.setup import PATHS
from sw.core.snapshot import encode_snapshot, decode_snapshot

STATE_PATH = PATHS.current / "state.json"


class DurableStore:
    """Base store.  Subclasses move a flat string -> string record in and out."""

    def save(self, snapshot):
        try:
            self._write_record(encode_snapshot(snapshot))
        except (OSError, TypeError, ValueError):
            log.warning(f"Failed to persist stopwatch state to {self}", exc_info=True)

    def load(self):
        try:
            record = self._read_record()
        except (OSError, ValueError, RecursionError):
            log.warning(f"Failed to read stopwatch state from {self}, treating as no prior session", exc_info=True)
            return None
        if record is None:
            log.info(f"No persisted stopwatch state in {self}, starting fresh.")
            return None
        return decode_snapshot(record)

    def _write_record(self, record):
        raise NotImplementedError

    def _read_record(self):
        raise NotImplementedError


class MemoryStore(DurableStore):
    """In-process store, for tests and headless runs."""

    def __init__(self, record=None):
        self.record = dict(record) if record is not None else None
        self.writes = 0

    def _write_record(self, record):
        self.record = dict(record)
        self.writes += 1

    def _read_record(self):
        return None if self.record is None else dict(self.record)

    def __str__(self):
        return "memory store"


class JsonFileStore(DurableStore):
    """Keeps the record as a JSON object in a single file (state.json by default)."""

    def __init__(self, path=None):
        self.path = Path(path) if path is not None else STATE_PATH

    # Writes to a sibling temp file first and swaps it in, so a crash mid-write leaves the old record intact.
    def _write_record(self, record):
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(record, f, indent=2)
        os.replace(tmp_path, self.path)

    def _read_record(self):
        if not self.path.exists():
            return None
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def __str__(self):
        return f"'{self.path}'"
