"""Evidence analyzer — extracts facet observations from a user message.

The chat model reads one user message (with a little preceding context)
and returns JSON evidence items.  Each item is validated against the
facet list and the score/confidence ranges; invalid items are dropped.
Failures never interrupt the conversation: they are logged and yield no
evidence.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import BaseModel, Field, ValidationError, field_validator

from big_ocean.llm import get_chat_llm
from big_ocean.models.big_five import FACETS_BY_TRAIT, is_facet_name
from big_ocean.models.scores import FacetEvidence

logger = logging.getLogger(__name__)

ANALYZER_PROMPT = """\
You are an expert personality psychologist analysing one message from a
conversation. Identify evidence for Big Five facets in the USER MESSAGE.

FACETS (use these exact identifiers):
{facet_list}

For every facet the message gives real behavioural evidence for, return:
  - facet: one identifier from the list above
  - score: 0-20 (0 = very low on the facet, 10 = average, 20 = very high)
  - confidence: 0.0-1.0 (how strongly the message supports the score)
  - quote: the exact words from the message that support it

Only report facets with genuine evidence. An empty list is a valid answer.

RESPOND WITH VALID JSON ONLY — no markdown, no commentary:
{{"evidence": [{{"facet": "imagination", "score": 15, "confidence": 0.6, "quote": "..."}}]}}
"""


class EvidenceItem(BaseModel):
    """Schema for one evidence item returned by the model."""

    facet: str
    score: float = Field(ge=0.0, le=20.0)
    confidence: float = Field(ge=0.0, le=1.0)
    quote: str = ""

    @field_validator("facet")
    @classmethod
    def _known_facet(cls, value: str) -> str:
        name = value.strip().lower()
        if not is_facet_name(name):
            raise ValueError(f"unknown facet {value!r}")
        return name


def _facet_list() -> str:
    return "\n".join(f"- {trait}: {', '.join(facets)}" for trait, facets in FACETS_BY_TRAIT.items())


def _parse_json(raw: str) -> dict[str, Any]:
    """Parse JSON from model output, stripping markdown fences if needed."""
    text = raw.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1].rsplit("```", 1)[0]
    return json.loads(text)


def _response_text(content: Any) -> str:
    """Normalize LangChain message content into a text string."""
    if isinstance(content, str):
        return content
    return json.dumps(content)


def parse_evidence(raw: str, message_index: int = 0) -> list[FacetEvidence]:
    """Turn raw model output into validated evidence records.

    Raises ``json.JSONDecodeError`` / ``KeyError`` / ``TypeError`` for
    output that is not the expected JSON object.
    """
    parsed = _parse_json(raw)
    items = parsed["evidence"]

    evidence: list[FacetEvidence] = []
    for raw_item in items:
        try:
            item = EvidenceItem.model_validate(raw_item)
        except ValidationError as e:
            logger.warning("Dropping invalid evidence item %r: %s", raw_item, e.errors()[0]["msg"])
            continue
        evidence.append(
            FacetEvidence(
                facet=item.facet,
                score=item.score,
                confidence=item.confidence,
                quote=item.quote,
                message_index=message_index,
            )
        )
    return evidence


def analyze_message(
    message: str,
    recent_context: str = "",
    message_index: int = 0,
) -> list[FacetEvidence]:
    """Extract facet evidence from one user message."""
    if not message.strip():
        return []

    user_content = f"USER MESSAGE:\n{message}"
    if recent_context:
        user_content = f"RECENT CONVERSATION:\n{recent_context}\n\n{user_content}"

    try:
        llm = get_chat_llm(temperature=0.0)
        response = llm.invoke(
            [
                SystemMessage(content=ANALYZER_PROMPT.format(facet_list=_facet_list())),
                HumanMessage(content=user_content),
            ]
        )
        evidence = parse_evidence(_response_text(response.content), message_index)

    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        logger.warning("Analyzer parse error on message %d: %s", message_index, e)
        return []

    except Exception as e:
        logger.warning("Analyzer failed on message %d: %s", message_index, e)
        return []

    logger.debug("Message %d produced %d evidence items", message_index, len(evidence))
    return evidence
