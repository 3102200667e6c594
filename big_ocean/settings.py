"""Project-wide settings and shared scoring constants.

All environment-dependent values are read **lazily** on first access
(not at import time) and cached via ``functools.lru_cache``.  Call
``reset()`` in tests to clear the cache after changing env vars.
"""

from __future__ import annotations

import functools
import os
from typing import TYPE_CHECKING, Final


def _float_env(name: str, default: float) -> float:
    """Parse float environment values with a safe fallback."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    """Parse positive int environment values with a safe fallback."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


# ── Constants (never change at runtime) ──────────────────────────────────
SCORE_MIN: Final[float] = 0.0
SCORE_MAX: Final[float] = 20.0
SCORE_MIDPOINT: Final[float] = 10.0
CONFIDENCE_MIN: Final[float] = 0.0
CONFIDENCE_MAX: Final[float] = 1.0

# Facet scores at or below this map to the facet's "low" level code.
FACET_LEVEL_THRESHOLD: Final[float] = 10.0


# ── Lazy settings cache ──────────────────────────────────────────────────

@functools.lru_cache(maxsize=1)
def _load_settings() -> dict[str, object]:
    """Read env-dependent settings once and cache the result."""
    return {
        "LLM_MODEL_NAME": os.getenv("OPENAI_CHAT_MODEL", "gpt-5.2"),
        "MAX_MESSAGES": _int_env("MAX_MESSAGES", 12),
        "SCORING_BATCH_INTERVAL": _int_env("SCORING_BATCH_INTERVAL", 3),
        "CONTRADICTION_VARIANCE": _float_env("CONTRADICTION_VARIANCE", 15.0),
        "CONTRADICTION_PENALTY": _float_env("CONTRADICTION_PENALTY", 0.3),
    }


def reset() -> None:
    """Clear the cached settings — call from tests after monkeypatching env vars."""
    _load_settings.cache_clear()


# Type declarations for static analysis (not set at runtime so
# ``__getattr__`` is invoked on attribute access).
if TYPE_CHECKING:
    LLM_MODEL_NAME: str
    MAX_MESSAGES: int
    SCORING_BATCH_INTERVAL: int
    CONTRADICTION_VARIANCE: float
    CONTRADICTION_PENALTY: float


def __getattr__(name: str) -> object:
    """PEP 562 module-level ``__getattr__`` — provides lazy env reads."""
    settings = _load_settings()
    if name in settings:
        return settings[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
