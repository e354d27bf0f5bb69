import json
import re
from dataclasses import dataclass, field
from sw.common.logger import log

THEME_LIGHT = "light"
THEME_DARK = "dark"
THEMES = (THEME_LIGHT, THEME_DARK)

# Keys of the persisted key-value layout. Every value is stored as a string.
KEY_ELAPSED = "elapsedMs"
KEY_RUNNING = "isRunning"
KEY_REFERENCE = "startReference"
KEY_LAPS = "laps"
KEY_THEME = "theme"
SNAPSHOT_KEYS = (KEY_ELAPSED, KEY_RUNNING, KEY_REFERENCE, KEY_LAPS, KEY_THEME)

# 18 digits of milliseconds is far beyond any real clock reading or elapsed time.
_UNSIGNED = re.compile(r"\d{1,18}")
_SIGNED = re.compile(r"-?\d{1,18}")


class SnapshotDecodeError(ValueError):
    pass


# The complete persisted picture of engine + ledger + theme. reference_instant is the clock reading at
# which elapsed_ms was sampled, so on restore the time spent away is simply now - reference_instant.
@dataclass(frozen=True)
class PersistedSnapshot:
    elapsed_ms: int = 0
    running: bool = False
    reference_instant: int = 0
    laps: tuple = field(default_factory=tuple)
    theme: str = THEME_LIGHT


#region === Encode / Decode ===

# Turns a snapshot into the flat string -> string record the store writes.
def encode_snapshot(snapshot):
    return {
        KEY_ELAPSED: str(int(snapshot.elapsed_ms)),
        KEY_RUNNING: "true" if snapshot.running else "false",
        KEY_REFERENCE: str(int(snapshot.reference_instant)),
        KEY_LAPS: json.dumps(list(snapshot.laps)),
        KEY_THEME: snapshot.theme,
    }

# Strictly parses a stored record. The record is validated as a whole: any missing or malformed field
# rejects the entire thing, so a half-corrupt record can never produce a mixed state.
def parse_snapshot(record):
    if not isinstance(record, dict):
        raise SnapshotDecodeError(f"record is a {type(record).__name__}, expected a dict")

    missing = [key for key in SNAPSHOT_KEYS if key not in record]
    if missing:
        raise SnapshotDecodeError(f"missing keys: {', '.join(missing)}")
    not_strings = [key for key in SNAPSHOT_KEYS if not isinstance(record[key], str)]
    if not_strings:
        raise SnapshotDecodeError(f"non-string values for: {', '.join(not_strings)}")

    elapsed_ms = _parse_int(record, KEY_ELAPSED, _UNSIGNED, "a non-negative integer")

    running = record[KEY_RUNNING].strip()
    if running not in ("true", "false"):
        raise SnapshotDecodeError(f"{KEY_RUNNING} is not 'true'/'false': {_preview(record[KEY_RUNNING])}")

    reference_instant = _parse_int(record, KEY_REFERENCE, _SIGNED, "an integer")

    try:
        laps = json.loads(record[KEY_LAPS])
    except (json.JSONDecodeError, RecursionError) as e:
        raise SnapshotDecodeError(f"{KEY_LAPS} is not valid JSON: {type(e).__name__}") from e
    if not isinstance(laps, list) or not all(isinstance(label, str) for label in laps):
        raise SnapshotDecodeError(f"{KEY_LAPS} is not a list of strings")

    theme = record[KEY_THEME].strip()
    if theme not in THEMES:
        raise SnapshotDecodeError(f"{KEY_THEME} is not one of {THEMES}: {_preview(record[KEY_THEME])}")

    return PersistedSnapshot(
        elapsed_ms=elapsed_ms,
        running=running == "true",
        reference_instant=reference_instant,
        laps=tuple(laps),
        theme=theme,
    )

# Shortened repr of a stored value for log messages; a corrupt value can be arbitrarily long.
def _preview(value, limit=40):
    text = repr(value)
    return text if len(text) <= limit else text[:limit] + f"... ({len(value)} chars)"

def _parse_int(record, key, pattern, description):
    text = record[key].strip()
    if not pattern.fullmatch(text):
        raise SnapshotDecodeError(f"{key} is not {description}: {_preview(record[key])}")
    try:
        return int(text)
    except ValueError as e:
        raise SnapshotDecodeError(f"{key} could not be converted: {e}") from e

# Lenient wrapper around parse_snapshot: anything unusable is logged and treated as "no prior session".
def decode_snapshot(record):
    if record is None:
        return None
    try:
        return parse_snapshot(record)
    except SnapshotDecodeError as e:
        log.warning(f"Discarding persisted stopwatch state, falling back to defaults: {e}")
        return None

#endregion === Encode / Decode ===
