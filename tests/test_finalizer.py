"""Tests for the finalizer node and the profile summary."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from big_ocean.agents.finalizer import finalize_node, format_summary
from big_ocean.models.initial_state import new_assessment_state
from big_ocean.session.assessment import STATUS_COMPLETED


def _state_with_evidence() -> dict:
    state = new_assessment_state("fin-1", max_messages=3)
    state["message_count"] = 3
    state["evidence"] = [
        {"facet": "imagination", "score": 16.0, "confidence": 0.7, "quote": "a", "message_index": 1},
        {"facet": "imagination", "score": 14.0, "confidence": 0.6, "quote": "b", "message_index": 2},
        {"facet": "imagination", "score": 18.0, "confidence": 0.9, "quote": "c", "message_index": 3},
    ]
    state["turn_records"] = [{"turn_number": 1, "user_message": "hi", "ai_message": "hello", "evidence": []}]
    return state


@patch("big_ocean.agents.finalizer.SessionLogger.save", return_value=Path("mock-session.json"))
def test_finalize_completes_session(mock_save):
    result = finalize_node(_state_with_evidence())

    assert result["status"] == STATUS_COMPLETED
    assert result["done"] is True
    assert result["ocean_code"] == result["results"]["ocean_code"]
    assert result["facet_scores"]["imagination"]["score"] == pytest.approx(16.63, abs=0.01)
    assert result["results"]["facets"]["imagination"]["confidence"] == 99
    assert "Your Big Five Profile" in result["messages"][0].content
    mock_save.assert_called_once()


@patch("big_ocean.agents.finalizer.SessionLogger.save", return_value=Path("mock-session.json"))
def test_finalize_without_evidence_explains(mock_save):
    result = finalize_node(new_assessment_state("fin-2"))

    assert result["status"] == STATUS_COMPLETED
    assert result["overall_confidence"] == 0.0
    assert "wasn't able to gather enough" in result["messages"][0].content


def test_format_summary_lists_every_trait():
    results = {
        "ocean_code": "GBANT",
        "overall_confidence": 42,
        "traits": {
            "openness": {"score": 20.0, "confidence": 50},
            "neuroticism": {"score": 0.0, "confidence": 10},
        },
    }
    summary = format_summary(results)
    assert "**OCEAN code**: GBANT" in summary
    assert "**Openness**: 20.0/20  ██████████" in summary
    assert "**Neuroticism**: 0.0/20  ░░░░░░░░░░" in summary
    assert "**Overall confidence**: 42%" in summary


def test_finalize_writes_turns_through_session_log(tmp_path, monkeypatch):
    import big_ocean.session.logger as session_logger
    from big_ocean.session.logger import list_sessions, load_session

    monkeypatch.setattr(session_logger, "SESSIONS_DIR", tmp_path)
    state = _state_with_evidence()
    state["turn_records"] = [
        {
            "turn_number": 1,
            "timestamp": "2026-03-01T09:00:00+00:00",
            "ai_message": "What would you build with unlimited time?",
            "user_message": "A floating city.",
            "evidence": [state["evidence"][0]],
        }
    ]

    finalize_node(state)

    [path] = list_sessions()
    log = load_session(path)
    turn = log["turns"][0]
    assert turn["timestamp"] == "2026-03-01T09:00:00+00:00"
    assert turn["evidence"][0]["facet"] == "imagination"
    assert turn["evidence"][0]["message_index"] == 1
    assert log["metadata"]["max_messages"] == 3
    assert log["metadata"]["evidence_items"] == 3
    assert log["results"]["facets"]["imagination"]["level_label"] == "Visionary"
