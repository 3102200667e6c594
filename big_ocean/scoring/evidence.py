"""Batch aggregation of facet evidence.

Recomputes all 30 facet aggregates from the full list of evidence for a
session.  Each facet's evidence is folded with the precision aggregator
(order-independent), then a contradiction check lowers confidence when the
evidence scores disagree strongly.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable

import numpy as np

from big_ocean import settings
from big_ocean.models.scores import FacetAggregate, FacetEvidence
from big_ocean.scoring.precision import (
    clamp_confidence,
    initialize_all_facets,
    initialize_facet_precision,
    update_facet_precision,
)

logger = logging.getLogger(__name__)


def _aggregate_facet(facet: str, evidence: list[FacetEvidence]) -> FacetAggregate:
    aggregate = initialize_facet_precision(facet)
    for item in evidence:
        aggregate = update_facet_precision(aggregate, item)

    # Population variance of the raw scores; >threshold means contradiction.
    variance = float(np.var([e.score for e in evidence])) if len(evidence) > 1 else 0.0
    if variance > settings.CONTRADICTION_VARIANCE:
        logger.debug(
            "Contradicting evidence for %s (variance=%.2f), lowering confidence",
            facet,
            variance,
        )
        aggregate = FacetAggregate(
            facet=facet,
            score=aggregate.score,
            confidence=clamp_confidence(aggregate.confidence - settings.CONTRADICTION_PENALTY),
        )
    return aggregate


def aggregate_evidence(evidence: Iterable[FacetEvidence]) -> dict[str, FacetAggregate]:
    """Aggregate all evidence into a complete 30-facet map.

    Facets without evidence keep their zero state.
    """
    by_facet: dict[str, list[FacetEvidence]] = defaultdict(list)
    for item in evidence:
        by_facet[item.facet].append(item)

    facets = initialize_all_facets()
    for facet, items in by_facet.items():
        facets[facet] = _aggregate_facet(facet, items)
    return facets


def should_trigger_scoring(message_count: int) -> bool:
    """True every ``SCORING_BATCH_INTERVAL`` user messages (never at 0)."""
    return message_count > 0 and message_count % settings.SCORING_BATCH_INTERVAL == 0
