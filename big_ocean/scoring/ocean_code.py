"""OCEAN code generation.

A five-letter code in O, C, E, A, N order.  Each trait's level comes from
the sum of its six facet scores (0–120):

    sum < 40  → Low
    sum < 80  → Mid
    otherwise → High

Letters are unique per trait position:

    Openness:          P (Practical)  G (Grounded)    O (Open-minded)
    Conscientiousness: F (Flexible)   B (Balanced)    D (Disciplined)
    Extraversion:      I (Introvert)  A (Ambivert)    E (Extravert)
    Agreeableness:     C (Candid)     N (Negotiator)  W (Warm)
    Neuroticism:       R (Resilient)  T (Temperate)   S (Sensitive)
"""

from __future__ import annotations

from collections.abc import Mapping

from big_ocean.models.big_five import FACETS_BY_TRAIT, TRAITS
from big_ocean.models.scores import FacetAggregate
from big_ocean.settings import SCORE_MIDPOINT

LOW_UPPER_BOUND = 40.0
MID_UPPER_BOUND = 80.0

TRAIT_LETTERS: dict[str, dict[str, str]] = {
    "openness": {"L": "P", "M": "G", "H": "O"},
    "conscientiousness": {"L": "F", "M": "B", "H": "D"},
    "extraversion": {"L": "I", "M": "A", "H": "E"},
    "agreeableness": {"L": "C", "M": "N", "H": "W"},
    "neuroticism": {"L": "R", "M": "T", "H": "S"},
}


def trait_level(trait_sum: float) -> str:
    """Map a 0–120 trait sum to "L", "M" or "H"."""
    if trait_sum < LOW_UPPER_BOUND:
        return "L"
    if trait_sum < MID_UPPER_BOUND:
        return "M"
    return "H"


def generate_ocean_code(facets: Mapping[str, FacetAggregate]) -> str:
    """Build the five-letter code; missing facets count as the midpoint."""
    letters = []
    for trait in TRAITS:
        trait_sum = sum(
            facets[f].score if f in facets else SCORE_MIDPOINT
            for f in FACETS_BY_TRAIT[trait]
        )
        letters.append(TRAIT_LETTERS[trait][trait_level(trait_sum)])
    return "".join(letters)
