"""Assessment session — the 30 facet aggregates of one conversation.

A session is ``active`` while evidence is being collected and becomes
read-only once ``complete()`` is called.  The workflow stores it as plain
dicts in the graph state (``to_state`` / ``from_state``).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from big_ocean.errors import SessionCompletedError
from big_ocean.models.big_five import facet_level_code, facet_level_label
from big_ocean.models.scores import FacetAggregate, FacetObservation, TraitAggregate
from big_ocean.scoring.ocean_code import generate_ocean_code
from big_ocean.scoring.precision import (
    calculate_all_traits,
    calculate_overall_confidence,
    initialize_all_facets,
    initialize_facet_precision,
    to_percent,
    update_facet_precision,
)

logger = logging.getLogger(__name__)

STATUS_ACTIVE = "active"
STATUS_COMPLETED = "completed"


def _facet_result(facet: str, aggregate: FacetAggregate) -> dict[str, Any]:
    code = facet_level_code(facet, aggregate.score)
    return {
        "score": round(aggregate.score, 2),
        "confidence": to_percent(aggregate.confidence),
        "level_code": code,
        "level_label": facet_level_label(code),
    }


class AssessmentSession:
    """Mutable holder for one session's facet aggregates.

    Usage:
        session = AssessmentSession("abc123")
        session.apply_evidence(analyze_message(text))
        session.complete()
        session.results()
    """

    def __init__(
        self,
        session_id: str,
        facets: dict[str, FacetAggregate] | None = None,
        status: str = STATUS_ACTIVE,
        message_count: int = 0,
    ):
        self.session_id = session_id
        self.facets = initialize_all_facets()
        if facets:
            self.facets.update(facets)
        self.status = status
        self.message_count = message_count

    @property
    def is_completed(self) -> bool:
        return self.status == STATUS_COMPLETED

    def _ensure_active(self) -> None:
        if self.is_completed:
            raise SessionCompletedError(self.session_id)

    def apply_observation(self, observation: FacetObservation) -> FacetAggregate:
        """Fold one observation into its facet and return the new aggregate."""
        self._ensure_active()
        current = self.facets.get(observation.facet, initialize_facet_precision(observation.facet))
        updated = update_facet_precision(current, observation)
        self.facets[observation.facet] = updated
        return updated

    def apply_evidence(self, evidence: Iterable[FacetObservation]) -> int:
        """Fold a batch of observations; returns how many were applied."""
        self._ensure_active()
        applied = 0
        for observation in evidence:
            self.apply_observation(observation)
            applied += 1
        return applied

    def record_message(self) -> int:
        self._ensure_active()
        self.message_count += 1
        return self.message_count

    def complete(self) -> None:
        if not self.is_completed:
            logger.info(
                "Session %s completed after %d messages", self.session_id, self.message_count
            )
        self.status = STATUS_COMPLETED

    # ── Read-only views ───────────────────────────────────────────────

    def trait_scores(self) -> dict[str, TraitAggregate]:
        return calculate_all_traits(self.facets)

    def overall_confidence(self) -> float:
        return calculate_overall_confidence(self.facets)

    def ocean_code(self) -> str:
        return generate_ocean_code(self.facets)

    def results(self) -> dict[str, Any]:
        """Scores for presentation: 0–20 scores, confidences as percentages."""
        return {
            "session_id": self.session_id,
            "status": self.status,
            "ocean_code": self.ocean_code(),
            "overall_confidence": to_percent(self.overall_confidence()),
            "traits": {
                trait: {"score": round(t.score, 2), "confidence": to_percent(t.confidence)}
                for trait, t in self.trait_scores().items()
            },
            "facets": {facet: _facet_result(facet, f) for facet, f in self.facets.items()},
        }

    # ── Graph state conversion ────────────────────────────────────────

    def to_state(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "status": self.status,
            "message_count": self.message_count,
            "facet_scores": {facet: f.to_dict() for facet, f in self.facets.items()},
        }

    @classmethod
    def from_state(cls, state: dict[str, Any]) -> AssessmentSession:
        facets = {
            facet: FacetAggregate.from_dict(data)
            for facet, data in (state.get("facet_scores") or {}).items()
        }
        return cls(
            session_id=state.get("session_id", ""),
            facets=facets,
            status=state.get("status", STATUS_ACTIVE),
            message_count=state.get("message_count", 0),
        )
