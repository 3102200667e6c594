"""LangGraph workflow — wires Nerin, the analyzer and the finalizer.

Flow:
    START → router → interviewer → human_turn → analyze → router → …
                  ↘ finalize → END   (when message_count >= max_messages)

The human_turn node uses LangGraph's `interrupt()` to pause execution
and wait for real user input, which the CLI / web entrypoints resume via
`Command(resume=...)`.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from langchain_core.messages import HumanMessage
from langgraph.checkpoint.memory import MemorySaver
from langgraph.graph import END, START, StateGraph
from langgraph.types import Command, interrupt

from big_ocean import settings
from big_ocean.agents.analyzer import analyze_message
from big_ocean.agents.finalizer import finalize_node
from big_ocean.agents.interviewer import interviewer_node
from big_ocean.models.state import AssessmentState
from big_ocean.scoring.evidence import should_trigger_scoring
from big_ocean.session.assessment import AssessmentSession

logger = logging.getLogger(__name__)


# ── Graph nodes ───────────────────────────────────────────────────────────


def router(state: AssessmentState) -> Command:
    """Decide whether to continue the conversation or finalize."""
    done = state.get("done", False)
    message_count = state.get("message_count", 0)
    max_messages = state.get("max_messages", settings.MAX_MESSAGES)

    if done or message_count >= max_messages:
        return Command(update={"done": True}, goto="finalize")
    return Command(goto="interviewer")


def human_turn(state: AssessmentState) -> dict:
    """Pause execution and wait for user input via interrupt()."""
    user_input: str = interrupt("Waiting for user response…")
    return {"user_input": user_input}


def _last_ai_text(messages: list) -> str:
    for msg in reversed(messages):
        if getattr(msg, "type", "") == "ai":
            return msg.content
    return ""


def analyze(state: AssessmentState) -> dict:
    """Process the user's message: extract evidence and fold it in.

    Runs after each human turn and before routing back.  Every
    ``SCORING_BATCH_INTERVAL`` messages the trait snapshot is refreshed.
    """
    user_text: str = state.get("user_input", "")
    session = AssessmentSession.from_state(state)
    message_index = session.record_message()

    last_ai_text = _last_ai_text(state.get("messages", []))
    evidence = analyze_message(
        user_text,
        recent_context=f"Nerin: {last_ai_text}" if last_ai_text else "",
        message_index=message_index,
    )
    session.apply_evidence(evidence)

    new_evidence = [e.to_dict() for e in evidence]
    turn_record = {
        "turn_number": message_index,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "ai_message": last_ai_text,
        "user_message": user_text,
        "evidence": new_evidence,
    }

    max_messages = state.get("max_messages", settings.MAX_MESSAGES)
    updates: dict = {
        **session.to_state(),
        "messages": [HumanMessage(content=user_text)],
        "evidence": state.get("evidence", []) + new_evidence,
        "turn_records": state.get("turn_records", []) + [turn_record],
        "done": state.get("done", False) or message_index >= max_messages,
    }

    if should_trigger_scoring(message_index):
        updates["trait_scores"] = {
            trait: t.to_dict() for trait, t in session.trait_scores().items()
        }
        logger.info(
            "Session %s: trait snapshot after %d messages (confidence %.2f)",
            session.session_id,
            message_index,
            session.overall_confidence(),
        )

    return updates


# ── Build the graph ───────────────────────────────────────────────────────


def build_graph():
    """Construct and compile the assessment StateGraph."""
    graph = StateGraph(AssessmentState)

    graph.add_node("router", router)
    graph.add_node("interviewer", interviewer_node)
    graph.add_node("human_turn", human_turn)
    graph.add_node("analyze", analyze)
    graph.add_node("finalize", finalize_node)

    graph.add_edge(START, "router")
    # router uses Command to go to "interviewer" or "finalize"
    graph.add_edge("interviewer", "human_turn")
    graph.add_edge("human_turn", "analyze")
    graph.add_edge("analyze", "router")
    graph.add_edge("finalize", END)

    checkpointer = MemorySaver()
    return graph.compile(checkpointer=checkpointer)
