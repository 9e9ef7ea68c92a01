"""Helpers for resolving XDG data locations."""

from __future__ import annotations

import importlib
import os
from pathlib import Path
from typing import Optional

GLib = None
try:  # pragma: no cover - fallback for test environments without GTK
    gi_repository = importlib.import_module("gi.repository")
    GLib = getattr(gi_repository, "GLib")
except (ImportError, AttributeError, ValueError):  # pragma: no cover - test fallback
    GLib = None

APP_NAMESPACE = "toutdo"
NOTES_FILE_NAME = "notes.json"


def _ensure(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def _xdg_data_base() -> Path:
    if GLib is not None:
        return Path(GLib.get_user_data_dir()) / APP_NAMESPACE
    base = os.environ.get("XDG_DATA_HOME")
    if not base:
        base = os.path.join(Path.home(), ".local/share")
    return Path(base) / APP_NAMESPACE


def user_data_dir() -> Path:
    """Application data directory; not created until something is written there."""
    return _xdg_data_base()


def log_dir() -> Path:
    return _ensure(user_data_dir() / "logs")


def notes_path(override: Optional[str] = None) -> Path:
    if override:
        return Path(override).expanduser()
    return user_data_dir() / NOTES_FILE_NAME
