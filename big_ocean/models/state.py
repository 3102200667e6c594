"""Shared state definitions for the LangGraph assessment workflow.

Aggregates are stored as plain dicts so the checkpointer can serialize
them; ``AssessmentSession.from_state`` rebuilds the typed view.
"""

from __future__ import annotations

from typing import Any, TypedDict

from langgraph.graph import MessagesState


class TurnRecord(TypedDict, total=False):
    """Record of a single interview turn for session logging."""

    turn_number: int
    timestamp: str  # ISO 8601
    ai_message: str
    user_message: str
    evidence: list[dict[str, Any]]


class AssessmentState(MessagesState):
    """Full shared state for the assessment workflow.

    Extends MessagesState (which provides `messages: list[AnyMessage]`
    with the `add_messages` reducer) with assessment-specific fields.
    """

    # --- Session identity / lifecycle ---
    session_id: str
    status: str  # "active" or "completed"

    # --- Human input (set by interrupt/resume) ---
    user_input: str

    # --- Evidence and aggregates ---
    evidence: list[dict[str, Any]]  # every FacetEvidence, as dicts (overwrite)
    facet_scores: dict[str, dict[str, Any]]  # facet -> FacetAggregate dict
    trait_scores: dict[str, dict[str, Any]]  # trait -> TraitAggregate dict (derived)
    steering_facet: str

    # --- Per-turn data (for session logging) ---
    turn_records: list[TurnRecord]

    # --- Final output ---
    results: dict[str, Any]
    ocean_code: str
    overall_confidence: float

    # --- Control flow ---
    message_count: int  # user messages analysed so far
    max_messages: int
    done: bool
