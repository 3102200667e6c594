"""Tests for relationship profile comparison."""

from __future__ import annotations

import pytest

from big_ocean.errors import SessionNotCompletedError
from big_ocean.models.big_five import ALL_FACETS, TRAITS
from big_ocean.models.scores import FacetAggregate
from big_ocean.relationship.compare import compare_profiles, compare_sessions, interpret_similarity
from big_ocean.session.assessment import AssessmentSession


def _profile(scores: list[float]) -> dict[str, FacetAggregate]:
    return {f: FacetAggregate(f, s, 0.6) for f, s in zip(ALL_FACETS, scores)}


RISING = [i * 0.5 for i in range(30)]


def test_identical_profiles():
    result = compare_profiles(_profile(RISING), _profile(RISING))
    assert result["pearson_r"] == pytest.approx(1.0)
    assert result["spearman_rho"] == pytest.approx(1.0)
    assert result["mean_abs_difference"] == 0.0
    assert result["similarity"] == "Strikingly similar"
    assert set(result["trait_differences"]) == set(TRAITS)
    assert result["ocean_codes"][0] == result["ocean_codes"][1]


def test_mirrored_profiles():
    mirrored = [20.0 - s for s in RISING]
    result = compare_profiles(_profile(RISING), _profile(mirrored))
    assert result["pearson_r"] == pytest.approx(-1.0)
    assert result["similarity"] == "Complementary opposites"
    assert result["trait_differences"]["openness"] == pytest.approx(-17.5)


def test_flat_profile_has_no_correlation():
    result = compare_profiles(_profile([10.0] * 30), _profile(RISING))
    assert result["pearson_r"] is None
    assert result["spearman_rho"] is None
    assert result["similarity"] == "Not enough variation to compare"


@pytest.mark.parametrize(
    "r, label",
    [(0.85, "Strikingly similar"), (0.5, "Similar"), (0.0, "Different in places"), (-0.6, "Complementary opposites")],
)
def test_interpret_similarity(r, label):
    assert interpret_similarity(r) == label


def test_compare_sessions_requires_completed():
    done = AssessmentSession("pair-a", facets=_profile(RISING))
    done.complete()
    active = AssessmentSession("pair-b", facets=_profile(RISING))

    with pytest.raises(SessionNotCompletedError):
        compare_sessions(done, active)

    active.complete()
    result = compare_sessions(done, active)
    assert result["session_ids"] == ("pair-a", "pair-b")
