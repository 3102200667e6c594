"""Precision aggregator — folds facet evidence into running aggregates.

Facet aggregates are the only stored scores; trait aggregates are always
derived from the six facets of the trait.

Blend policy:
  Each confidence ``c`` is read as an evidence mass ``w = -ln(1 - c)``.
  Combining two pieces of evidence adds their masses, so

      c = 1 - (1 - c_a) * (1 - c_b)

  and the score is the mass-weighted mean of the two scores.  Adding mass
  is commutative and associative, so merge order never changes the
  result, and confidence can only grow as evidence accumulates (it is
  never lower than either input).

Every function here is pure and total over well-typed input: values are
clamped, nothing raises.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

from big_ocean.models.big_five import ALL_FACETS, FACET_TO_TRAIT, FACETS_BY_TRAIT, TRAITS
from big_ocean.models.scores import FacetAggregate, FacetObservation, TraitAggregate
from big_ocean.settings import CONFIDENCE_MAX, CONFIDENCE_MIN, SCORE_MAX, SCORE_MIN

# Confidence of exactly 1.0 would be infinite mass; cap it just below.
_MASS_CONFIDENCE_CAP = 1.0 - 1e-12


def clamp_score(score: float) -> float:
    return max(SCORE_MIN, min(SCORE_MAX, score))


def clamp_confidence(confidence: float) -> float:
    return max(CONFIDENCE_MIN, min(CONFIDENCE_MAX, confidence))


def _evidence_mass(confidence: float) -> float:
    return -math.log1p(-min(clamp_confidence(confidence), _MASS_CONFIDENCE_CAP))


def _confidence_from_mass(mass: float) -> float:
    return clamp_confidence(-math.expm1(-mass))


# ── Core operations ───────────────────────────────────────────────────────


def initialize_facet_precision(facet: str) -> FacetAggregate:
    """Zero state for a facet before any evidence exists."""
    return FacetAggregate(facet=facet, score=0.0, confidence=0.0)


def merge_precision_scores(a: FacetAggregate, b: FacetAggregate) -> FacetAggregate:
    """Combine two independently computed aggregates for the same facet.

    Commutative and associative.  Two zero-confidence aggregates carry no
    evidence, so their scores are averaged plainly.
    """
    mass_a = _evidence_mass(a.confidence)
    mass_b = _evidence_mass(b.confidence)
    total = mass_a + mass_b

    if total > 0:
        score = (a.score * mass_a + b.score * mass_b) / total
    else:
        score = (a.score + b.score) / 2

    return FacetAggregate(
        facet=a.facet,
        score=clamp_score(score),
        confidence=_confidence_from_mass(total),
    )


def update_facet_precision(
    current: FacetAggregate,
    observation: FacetObservation,
) -> FacetAggregate:
    """Fold one new observation into the current aggregate.

    The caller guarantees ``observation.facet == current.facet``.  A
    zero-confidence observation carries no evidence and leaves the
    aggregate unchanged.
    """
    if observation.confidence <= 0:
        return FacetAggregate(
            facet=current.facet,
            score=clamp_score(current.score),
            confidence=clamp_confidence(current.confidence),
        )

    incoming = FacetAggregate(
        facet=current.facet,
        score=clamp_score(observation.score),
        confidence=clamp_confidence(observation.confidence),
    )
    return merge_precision_scores(current, incoming)


def calculate_trait_precision(facet_aggregates: Sequence[FacetAggregate]) -> TraitAggregate:
    """Derive a trait aggregate from the six aggregates of that trait.

    Score and confidence are plain means.  Membership is not validated;
    the trait is read from the first facet.
    """
    count = len(facet_aggregates)
    score = sum(f.score for f in facet_aggregates) / count
    confidence = sum(f.confidence for f in facet_aggregates) / count
    return TraitAggregate(
        trait=FACET_TO_TRAIT[facet_aggregates[0].facet],
        score=clamp_score(score),
        confidence=clamp_confidence(confidence),
    )


# ── Whole-profile helpers ─────────────────────────────────────────────────


def initialize_all_facets() -> dict[str, FacetAggregate]:
    """Zero state for all 30 facets, in canonical order."""
    return {facet: initialize_facet_precision(facet) for facet in ALL_FACETS}


def calculate_all_traits(facets: Mapping[str, FacetAggregate]) -> dict[str, TraitAggregate]:
    """Derive all five trait aggregates; missing facets count as zero state."""
    return {
        trait: calculate_trait_precision(
            [facets.get(f, initialize_facet_precision(f)) for f in FACETS_BY_TRAIT[trait]]
        )
        for trait in TRAITS
    }


def calculate_overall_confidence(facets: Mapping[str, FacetAggregate]) -> float:
    """Mean confidence across the given facets (0.0 when empty)."""
    if not facets:
        return 0.0
    return sum(f.confidence for f in facets.values()) / len(facets)


def to_percent(confidence: float) -> int:
    """Render a 0–1 confidence as a 0–100 integer percentage."""
    return round(clamp_confidence(confidence) * 100)
