import os
import sys
from pathlib import Path
from dataclasses import dataclass

# Lil helper function to create a directory (and its parents) if it's missing.
def ensure_directory(path: Path):
    path.mkdir(parents=True,exist_ok=True)
    return path

# Works out the per-user data folder. STOPWATCH_HOME always wins, then APPDATA on Windows, then the XDG data dir.
def _user_data_root() -> Path:
    override = os.getenv("STOPWATCH_HOME")
    if override:
        return Path(override)
    if sys.platform == "win32":
        appdata = os.getenv("APPDATA")
        if not appdata:
            raise RuntimeError("Missing APPDATA environment variable, cannot determine data directories.")
        return Path(appdata) / "Stopwatch"
    xdg = os.getenv("XDG_DATA_HOME")
    base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base / "stopwatch"

# Dataclass for accessing paths across program.
@dataclass(frozen=False)
class ProjectPaths:

    data: Path
    logs: Path
    current: Path

    @staticmethod
    def build():
        # Folder for all user-specific stopwatch stuff
        data = ensure_directory(_user_data_root())

        # Folders within the data folder
        logs = ensure_directory(data / "logs")
        current = ensure_directory(data / "current")

        return ProjectPaths(
            data = data,
            logs = logs,
            current = current,
        )
PATHS = ProjectPaths.build()
