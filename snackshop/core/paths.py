from __future__ import annotations

import sys
from pathlib import Path


DEFAULT_DB_FILENAME = "snackshop.db"


def is_frozen() -> bool:
    return bool(getattr(sys, "frozen", False))


def user_writable_dir() -> Path:
    """Directory suitable for user-writable files (settings.json, the database).

    - In PyInstaller onefile, prefer the directory containing the executable.
    - In dev, use the project root.
    """
    if is_frozen():
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[2]


def settings_path() -> Path:
    """Location for settings.json that is readable and writable."""
    return user_writable_dir() / "settings.json"


def db_path(filename: str | Path = DEFAULT_DB_FILENAME) -> Path:
    """Resolve the SQLite file; relative names live next to settings.json."""
    p = Path(filename)
    if p.is_absolute():
        return p
    return user_writable_dir() / p
