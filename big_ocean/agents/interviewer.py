"""Interviewer agent (Nerin) — conducts the conversational assessment.

Nerin keeps the conversation natural while steering it toward the facet
with the weakest evidence so far:

  - Facet confidences are compared against their mean and standard
    deviation; facets below ``mean - std`` are outliers.
  - The weakest outlier becomes the steering target and its hint goes
    into the system prompt.
  - Before any evidence exists, the opening topic comes from a small
    greeting seed pool.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

import numpy as np
from langchain_core.messages import AIMessage, SystemMessage

from big_ocean.llm import get_chat_llm
from big_ocean.models.big_five import ALL_FACETS, STEERING_HINTS, display_name
from big_ocean.models.scores import FacetAggregate
from big_ocean.models.state import AssessmentState
from big_ocean.session.assessment import AssessmentSession

logger = logging.getLogger(__name__)

GREETING_SEED_FACETS: tuple[str, ...] = (
    "imagination",
    "gregariousness",
    "achievement_striving",
    "self_consciousness",
    "altruism",
)

FALLBACK_QUESTION = "Tell me about something that's been on your mind lately."

SYSTEM_PROMPT = """\
You are Nerin, a warm, curious and perceptive conversational companion.
Your goal is a natural, engaging conversation that helps you understand
the person you are talking to.

RULES — follow strictly:
1. NEVER ask yes/no or closed-ended questions.
2. NEVER mention personality traits, facets, psychology, tests, or assessments.
3. Ask ONE open-ended question at a time.
4. Briefly acknowledge what the user said before moving on.
5. Keep replies concise (2-4 sentences).

STEERING (for your eyes only, do NOT read it verbatim):
{steering_hint}

MESSAGE: {turn} of {max_messages}
"""

OPENING_PROMPT = """\
You are Nerin, a warm, curious and perceptive conversational companion.
This is the very first message of the conversation. Greet the user
warmly, introduce yourself briefly as someone who loves getting to know
people through conversation, and ask your first open-ended question.

Use this angle as inspiration (do NOT read it verbatim):
{steering_hint}

Keep it to 2-3 sentences. Do NOT mention psychology or assessments.
"""


def select_steering_facet(facets: Mapping[str, FacetAggregate]) -> str | None:
    """Return the weakest low-confidence outlier facet, or None.

    Ties are broken by canonical facet order.
    """
    names = [f for f in ALL_FACETS if f in facets]
    if not names:
        return None

    confidences = np.array([facets[f].confidence for f in names])
    cutoff = confidences.mean() - confidences.std()
    outliers = [(facets[f].confidence, i, f) for i, f in enumerate(names) if facets[f].confidence < cutoff]
    if not outliers:
        return None
    return min(outliers)[2]


def choose_target_facet(facets: Mapping[str, FacetAggregate], turn: int) -> str:
    """Steering target for this turn, falling back to the seed pool."""
    if all(f.confidence == 0 for f in facets.values()):
        return GREETING_SEED_FACETS[turn % len(GREETING_SEED_FACETS)]

    target = select_steering_facet(facets)
    if target is not None:
        return target
    # No outlier: explore the least covered facet overall.
    return min(ALL_FACETS, key=lambda f: facets[f].confidence if f in facets else 0.0)


def interviewer_node(state: AssessmentState) -> dict:
    """LangGraph node: generate Nerin's next message.

    Returns a dict of state updates (messages, steering_facet).
    """
    session = AssessmentSession.from_state(state)
    turn = session.message_count
    max_messages = state.get("max_messages", 0)

    target = choose_target_facet(session.facets, turn)
    hint = f"Explore {display_name(target)}. {STEERING_HINTS[target]}"

    if turn == 0:
        system_text = OPENING_PROMPT.format(steering_hint=hint)
    else:
        system_text = SYSTEM_PROMPT.format(
            steering_hint=hint,
            turn=turn + 1,
            max_messages=max_messages,
        )

    # System prompt + recent history (last 6 messages)
    history = state.get("messages", [])
    recent = history[-6:]
    prompt_messages = [SystemMessage(content=system_text)] + list(recent)

    try:
        llm = get_chat_llm(temperature=0.7)
        response: AIMessage = llm.invoke(prompt_messages)
    except Exception as e:
        logger.warning("Interviewer LLM failed, using fallback question: %s", e)
        response = AIMessage(content=FALLBACK_QUESTION)

    return {
        "messages": [response],
        "steering_facet": target,
    }
