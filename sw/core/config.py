import json
from dataclasses import dataclass, asdict
from sw.common.logger import log
from sw.common.setup import PATHS
from sw.core.snapshot import THEMES, THEME_LIGHT


#region === Helpers and Paths ===

SETTINGS_PATH = PATHS.data / "settings.json"

# Default values for every setting, with the type each one must have.
_SETTINGS_DEFAULTS = {
    "tick_interval_ms": 10,
    "allow_lap_while_paused": False,
    "persist_every_n_ticks": 1,
    "default_theme": THEME_LIGHT,
    "log_level": "INFO",
    "log_to_console": False,
}
_TICK_INTERVAL_RANGE = (1, 1000)
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class Settings:
    tick_interval_ms: int = 10
    allow_lap_while_paused: bool = False
    persist_every_n_ticks: int = 1
    default_theme: str = THEME_LIGHT
    log_level: str = "INFO"
    log_to_console: bool = False

# Helper to return a truly fresh, default settings object.
def build_default_settings():
    return Settings(**_SETTINGS_DEFAULTS)

# bool is a subclass of int, so ints need an explicit exclusion.
def _has_default_type(key, value):
    default = _SETTINGS_DEFAULTS[key]
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, type(default))

#endregion === Helpers and Paths ===

#region === Saving and Loading Settings ===

# Loads settings.json, defaulting any missing, mistyped or out-of-range value. An unreadable file falls back
# to a full set of defaults.
def load_settings(path=None):
    path = path or SETTINGS_PATH
    try:
        # First run: write the defaults out so there is a file to edit.
        if not path.exists():
            log.info(f"No settings file at '{path}', writing default settings.")
            settings = build_default_settings()
            save_settings(settings, path)
            return settings

        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            log.warning(f"Settings file '{path}' does not hold an object, using default settings.")
            return build_default_settings()

        values = {}
        defaulted_values = set()
        for key, default in _SETTINGS_DEFAULTS.items():
            value = raw.get(key, default)
            if not _has_default_type(key, value):
                defaulted_values.add(key)
                value = default
            values[key] = value

        low, high = _TICK_INTERVAL_RANGE
        if not low <= values["tick_interval_ms"] <= high:
            defaulted_values.add("tick_interval_ms")
            values["tick_interval_ms"] = min(high, max(low, values["tick_interval_ms"]))
        if values["persist_every_n_ticks"] < 1:
            defaulted_values.add("persist_every_n_ticks")
            values["persist_every_n_ticks"] = 1
        if values["default_theme"] not in THEMES:
            defaulted_values.add("default_theme")
            values["default_theme"] = THEME_LIGHT
        if values["log_level"].upper() not in _LOG_LEVELS:
            defaulted_values.add("log_level")
            values["log_level"] = _SETTINGS_DEFAULTS["log_level"]
        values["log_level"] = values["log_level"].upper()

        if defaulted_values:
            log.warning(f"Loaded settings from '{path}', but with invalid or missing values that were defaulted: {', '.join(sorted(defaulted_values))}")
        else:
            log.info(f"Successfully loaded settings from '{path}'.")
        return Settings(**values)
    except (json.JSONDecodeError, OSError, TypeError):
        log.warning(f"Ran into an error while trying to load '{path}', falling back to default settings.", exc_info=True)
        return build_default_settings()

# Write the given settings to disk.
def save_settings(settings, path=None):
    path = path or SETTINGS_PATH
    with open(path, "w", encoding="utf-8") as f:
        json.dump(asdict(settings), f, indent=2)
    log.info(f"Successfully saved settings to '{path}'")

#endregion === Saving and Loading Settings ===
