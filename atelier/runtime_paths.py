"""Runtime path helpers for source and frozen executable modes."""

from __future__ import annotations

import os
from pathlib import Path
import sys


def is_frozen() -> bool:
    """Return True when running from a PyInstaller bundle."""
    return bool(getattr(sys, "frozen", False))


def package_root() -> Path:
    """Return the root path that contains the `atelier` package resources."""
    if is_frozen():
        meipass = getattr(sys, "_MEIPASS", None)
        if meipass:
            candidate = Path(meipass) / "atelier"
            if candidate.exists():
                return candidate
            return Path(meipass)
    return Path(__file__).resolve().parent


def presets_path() -> Path:
    """Resolve the built-in preset catalogue across source/frozen layouts."""
    return package_root() / "themes" / "builtin" / "presets.yaml"


def app_data_dir() -> Path:
    base = Path(os.environ.get("APPDATA", Path.home() / ".config"))
    path = base / "atelier"
    path.mkdir(parents=True, exist_ok=True)
    return path
