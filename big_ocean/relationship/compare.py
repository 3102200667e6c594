"""Relationship comparison — how similar are two completed profiles?

Compares the 30 facet scores of two people:
  - Pearson r and Spearman ρ across facets (profile shape)
  - mean absolute facet difference (profile distance)
  - per-trait score differences and both OCEAN codes
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

import numpy as np
from scipy import stats

from big_ocean.errors import SessionNotCompletedError
from big_ocean.models.big_five import ALL_FACETS
from big_ocean.models.scores import FacetAggregate
from big_ocean.scoring.ocean_code import generate_ocean_code
from big_ocean.scoring.precision import calculate_all_traits, initialize_facet_precision
from big_ocean.session.assessment import AssessmentSession


def _scores(facets: Mapping[str, FacetAggregate]) -> np.ndarray:
    return np.array(
        [facets.get(f, initialize_facet_precision(f)).score for f in ALL_FACETS],
        dtype=float,
    )


def _correlation(fn, a: np.ndarray, b: np.ndarray) -> float | None:
    """Correlation coefficient, or None when either profile is flat."""
    if np.ptp(a) == 0 or np.ptp(b) == 0:
        return None
    value = float(fn(a, b)[0])
    return None if math.isnan(value) else round(value, 4)


def interpret_similarity(r: float | None) -> str:
    if r is None:
        return "Not enough variation to compare"
    if r >= 0.7:
        return "Strikingly similar"
    if r >= 0.4:
        return "Similar"
    if r > -0.4:
        return "Different in places"
    return "Complementary opposites"


def compare_profiles(
    facets_a: Mapping[str, FacetAggregate],
    facets_b: Mapping[str, FacetAggregate],
) -> dict[str, Any]:
    """Compute similarity metrics between two facet profiles."""
    a = _scores(facets_a)
    b = _scores(facets_b)

    pearson_r = _correlation(stats.pearsonr, a, b)
    traits_a = calculate_all_traits(facets_a)
    traits_b = calculate_all_traits(facets_b)

    return {
        "pearson_r": pearson_r,
        "spearman_rho": _correlation(stats.spearmanr, a, b),
        "mean_abs_difference": round(float(np.mean(np.abs(a - b))), 4),
        "trait_differences": {
            trait: round(traits_a[trait].score - traits_b[trait].score, 2) for trait in traits_a
        },
        "ocean_codes": (generate_ocean_code(facets_a), generate_ocean_code(facets_b)),
        "similarity": interpret_similarity(pearson_r),
    }


def compare_sessions(a: AssessmentSession, b: AssessmentSession) -> dict[str, Any]:
    """Compare two sessions; both must be completed."""
    for session in (a, b):
        if not session.is_completed:
            raise SessionNotCompletedError(session.session_id)
    result = compare_profiles(a.facets, b.facets)
    result["session_ids"] = (a.session_id, b.session_id)
    return result
