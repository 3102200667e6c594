"""Tests for the evidence analyzer.

All OpenAI calls are mocked — no API key required.
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest
from langchain_core.messages import AIMessage

from big_ocean.agents.analyzer import (
    EvidenceItem,
    _parse_json,
    _response_text,
    analyze_message,
    parse_evidence,
)

# ── Helpers ───────────────────────────────────────────────────────────────

VALID_JSON = json.dumps({
    "evidence": [
        {"facet": "adventurousness", "score": 17, "confidence": 0.7, "quote": "I booked a one-way ticket"},
        {"facet": "cautiousness", "score": 4, "confidence": 0.4, "quote": "without much planning"},
    ]
})


def _mock_llm(content: str) -> MagicMock:
    llm = MagicMock()
    llm.invoke.return_value = AIMessage(content=content)
    return llm


# ── Parsing ───────────────────────────────────────────────────────────────


class TestParsing:

    def test_parse_json_strips_markdown_fence(self):
        raw = "```json\n" + VALID_JSON + "\n```"
        assert _parse_json(raw)["evidence"][0]["facet"] == "adventurousness"

    def test_response_text_handles_list_content(self):
        assert _response_text("plain") == "plain"
        assert _response_text([{"type": "text"}]) == '[{"type": "text"}]'

    def test_parse_evidence_tags_message_index(self):
        evidence = parse_evidence(VALID_JSON, message_index=4)
        assert [e.facet for e in evidence] == ["adventurousness", "cautiousness"]
        assert all(e.message_index == 4 for e in evidence)
        assert evidence[0].quote == "I booked a one-way ticket"

    def test_invalid_items_are_dropped(self):
        raw = json.dumps({
            "evidence": [
                {"facet": "openness_imagination", "score": 12, "confidence": 0.5},
                {"facet": "imagination", "score": 27, "confidence": 0.5},
                {"facet": "imagination", "score": 12, "confidence": 1.4},
                {"facet": " Imagination ", "score": 12, "confidence": 0.5},
            ]
        })
        evidence = parse_evidence(raw)
        assert len(evidence) == 1
        assert evidence[0].facet == "imagination"

    def test_missing_evidence_key_raises(self):
        with pytest.raises(KeyError):
            parse_evidence('{"facets": []}')

    def test_evidence_item_rejects_unknown_facet(self):
        with pytest.raises(ValueError):
            EvidenceItem(facet="charisma", score=10, confidence=0.5)


# ── analyze_message ───────────────────────────────────────────────────────


class TestAnalyzeMessage:

    @patch("big_ocean.agents.analyzer.get_chat_llm")
    def test_returns_validated_evidence(self, mock_get_llm):
        mock_get_llm.return_value = _mock_llm(VALID_JSON)

        evidence = analyze_message(
            "I booked a one-way ticket to Lisbon without much planning.",
            recent_context="Nerin: What's the last spontaneous thing you did?",
            message_index=2,
        )

        assert len(evidence) == 2
        assert evidence[0].score == 17.0
        assert evidence[1].message_index == 2
        mock_get_llm.assert_called_once_with(temperature=0.0)

        prompt = mock_get_llm.return_value.invoke.call_args[0][0]
        assert "RECENT CONVERSATION" in prompt[1].content
        assert "Lisbon" in prompt[1].content

    @patch("big_ocean.agents.analyzer.get_chat_llm")
    def test_blank_message_skips_llm(self, mock_get_llm):
        assert analyze_message("   ") == []
        mock_get_llm.assert_not_called()

    @patch("big_ocean.agents.analyzer.get_chat_llm")
    def test_unparseable_output_yields_no_evidence(self, mock_get_llm):
        mock_get_llm.return_value = _mock_llm("Sorry, I can't help with that.")
        assert analyze_message("I love hosting dinner parties.") == []

    @patch("big_ocean.agents.analyzer.get_chat_llm")
    def test_llm_error_yields_no_evidence(self, mock_get_llm):
        llm = MagicMock()
        llm.invoke.side_effect = RuntimeError("rate limited")
        mock_get_llm.return_value = llm
        assert analyze_message("I love hosting dinner parties.") == []

    @patch("big_ocean.agents.analyzer.get_chat_llm")
    def test_empty_evidence_list_is_valid(self, mock_get_llm):
        mock_get_llm.return_value = _mock_llm('{"evidence": []}')
        assert analyze_message("ok") == []
