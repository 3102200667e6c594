"""Finalizer — closes the assessment and produces the results.

Facet aggregates are recomputed from the full evidence list (batch
aggregation, with the contradiction check), the session is marked
completed, and a summary message plus the JSON session log are written.
"""

from __future__ import annotations

import logging

from langchain_core.messages import AIMessage

from big_ocean.models.big_five import display_name
from big_ocean.models.scores import FacetEvidence
from big_ocean.models.state import AssessmentState
from big_ocean.scoring.evidence import aggregate_evidence
from big_ocean.session.assessment import AssessmentSession
from big_ocean.session.logger import SessionLogger

logger = logging.getLogger(__name__)

_BAR_WIDTH = 10


def _bar(score: float) -> str:
    filled = int(round(score / 20 * _BAR_WIDTH))
    return "█" * filled + "░" * (_BAR_WIDTH - filled)


def format_summary(results: dict) -> str:
    """Markdown summary shown to the user at the end of the conversation."""
    lines = ["## Your Big Five Profile\n", f"**OCEAN code**: {results['ocean_code']}\n"]
    for trait, t in results["traits"].items():
        lines.append(
            f"**{display_name(trait)}**: {t['score']:.1f}/20  {_bar(t['score'])}  "
            f"(confidence {t['confidence']}%)"
        )
    lines.append(f"\n**Overall confidence**: {results['overall_confidence']}%")
    return "\n".join(lines)


def finalize_node(state: AssessmentState) -> dict:
    """LangGraph node: complete the session and produce final results."""
    session_id = state.get("session_id", "")
    evidence = [FacetEvidence.from_dict(e) for e in state.get("evidence", [])]

    if not evidence:
        logger.warning("Session %s finished without any evidence", session_id)

    session = AssessmentSession(
        session_id,
        facets=aggregate_evidence(evidence),
        message_count=state.get("message_count", 0),
    )
    session.complete()
    results = session.results()

    session_log = SessionLogger(session_id)
    for record in state.get("turn_records", []):
        session_log.log_turn(
            turn_number=record["turn_number"],
            ai_message=record.get("ai_message", ""),
            user_message=record.get("user_message", ""),
            evidence=[FacetEvidence.from_dict(e) for e in record.get("evidence", [])],
            timestamp=record.get("timestamp"),
        )
    session_log.set_metadata("max_messages", state.get("max_messages", 0))
    session_log.set_metadata("evidence_items", len(evidence))
    session_log.log_results(results)
    path = session_log.save()
    logger.info("%s (log: %s)", session_log.summary(), path)

    if evidence:
        summary = format_summary(results)
    else:
        summary = (
            "I wasn't able to gather enough from our conversation to build a "
            "reliable profile. Feel free to start again."
        )

    return {
        **session.to_state(),
        "trait_scores": {trait: t.to_dict() for trait, t in session.trait_scores().items()},
        "results": results,
        "ocean_code": results["ocean_code"],
        "overall_confidence": session.overall_confidence(),
        "done": True,
        "messages": [AIMessage(content=summary)],
    }
