"""Factory helpers for creating workflow state payloads."""

from __future__ import annotations

from typing import Any

from big_ocean import settings
from big_ocean.session.assessment import AssessmentSession


def new_assessment_state(
    session_id: str,
    max_messages: int | None = None,
) -> dict[str, Any]:
    """Return a fresh assessment state dict used by CLI and web entrypoints."""
    state = AssessmentSession(session_id).to_state()
    state.update(
        {
            "evidence": [],
            "trait_scores": {},
            "steering_facet": "",
            "turn_records": [],
            "results": {},
            "ocean_code": "",
            "overall_confidence": 0.0,
            "max_messages": max_messages or settings.MAX_MESSAGES,
            "done": False,
        }
    )
    return state
