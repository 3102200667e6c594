"""Session logger — structured JSON record of each assessment session.

Captures:
  - Per-turn: timestamp, Nerin's message, the user's reply, extracted evidence
  - Session-level: final results (facets, traits, OCEAN code), metadata
  - Saved as one JSON file per session

Output directory: data/sessions/
File format: {session_id}_{timestamp}.json
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from big_ocean import settings
from big_ocean.models.scores import FacetEvidence
from big_ocean.paths import SESSIONS_DIR


def _ensure_dir() -> None:
    SESSIONS_DIR.mkdir(parents=True, exist_ok=True)


class SessionLogger:
    """Accumulates session data and writes a structured JSON log.

    Usage:
        logger = SessionLogger(session_id="abc123")
        logger.log_turn(
            turn_number=1,
            ai_message="Hi! Tell me about...",
            user_message="Well, I usually...",
            evidence=analyze_message(user_text),
        )
        ...
        logger.log_results(session.results())
        logger.save()
    """

    def __init__(self, session_id: str):
        self.session_id = session_id
        self.started_at = datetime.now(timezone.utc).isoformat()
        self.completed_at: str | None = None
        self.turns: list[dict[str, Any]] = []
        self.results: dict[str, Any] = {}
        self.metadata: dict[str, Any] = {
            "model": "Big Five (30 facets)",
            "llm": settings.LLM_MODEL_NAME,
        }

    def log_turn(
        self,
        turn_number: int,
        ai_message: str,
        user_message: str,
        evidence: Iterable[FacetEvidence] | None = None,
        timestamp: str | None = None,
    ) -> None:
        """Record a single interview turn (timestamped now unless given)."""
        self.turns.append(
            {
                "turn_number": turn_number,
                "timestamp": timestamp or datetime.now(timezone.utc).isoformat(),
                "ai_message": ai_message,
                "user_message": user_message,
                "evidence": [e.to_dict() for e in evidence] if evidence else [],
            }
        )

    def log_results(self, results: dict[str, Any]) -> None:
        """Record the final results; marks the log as completed."""
        self.results = results
        self.completed_at = datetime.now(timezone.utc).isoformat()

    def set_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = value

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "started_at": self.started_at,
            "completed_at": self.completed_at,
            "metadata": self.metadata,
            "total_turns": len(self.turns),
            "turns": self.turns,
            "results": self.results,
        }

    def save(self) -> Path:
        """Write the session log to a JSON file and return its path."""
        _ensure_dir()

        if self.completed_at is None:
            self.completed_at = datetime.now(timezone.utc).isoformat()

        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        filepath = SESSIONS_DIR / f"{self.session_id}_{timestamp}.json"

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

        return filepath

    def summary(self) -> str:
        """One-line summary of the session."""
        code = self.results.get("ocean_code", "?")
        confidence = self.results.get("overall_confidence", "?")
        return (
            f"Session {self.session_id}: {len(self.turns)} turns, "
            f"code={code}, confidence={confidence}%"
        )


def load_session(filepath: str | Path) -> dict[str, Any]:
    with open(filepath, encoding="utf-8") as f:
        return json.load(f)


def list_sessions() -> list[Path]:
    """List all session log files, newest first."""
    _ensure_dir()
    files = list(SESSIONS_DIR.glob("*.json"))
    return sorted(files, key=lambda p: p.stat().st_mtime, reverse=True)
