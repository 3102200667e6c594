"""Filesystem locations: session logs live under ``data/sessions/``."""

from __future__ import annotations

from pathlib import Path

PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
DATA_DIR: Path = PROJECT_ROOT / "data"
SESSIONS_DIR: Path = DATA_DIR / "sessions"
