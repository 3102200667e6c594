"""Score records shared by the aggregator, the session and the workflow.

Scores live on a 0–20 scale, confidences on 0–1.  All records are
immutable; the aggregator always returns new instances.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class FacetObservation:
    """One piece of evidence for a facet, as produced by the analyzer."""

    facet: str
    score: float  # 0.0 – 20.0
    confidence: float  # 0.0 – 1.0


@dataclass(frozen=True)
class FacetEvidence(FacetObservation):
    """An observation together with the text that supports it."""

    quote: str = ""
    message_index: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FacetEvidence:
        return cls(
            facet=data["facet"],
            score=float(data["score"]),
            confidence=float(data["confidence"]),
            quote=data.get("quote", ""),
            message_index=int(data.get("message_index", 0)),
        )


@dataclass(frozen=True)
class FacetAggregate:
    """Running score and confidence for one facet in one session."""

    facet: str
    score: float = 0.0
    confidence: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FacetAggregate:
        return cls(
            facet=data["facet"],
            score=float(data["score"]),
            confidence=float(data["confidence"]),
        )


@dataclass(frozen=True)
class TraitAggregate:
    """Trait summary derived from the trait's six facet aggregates."""

    trait: str
    score: float
    confidence: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
