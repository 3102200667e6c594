"""Tests for the precision aggregator (facet folding, merging, trait derivation)."""

from __future__ import annotations

import random

import pytest

from big_ocean.models.big_five import ALL_FACETS, FACETS_BY_TRAIT, TRAITS
from big_ocean.models.scores import FacetAggregate, FacetObservation
from big_ocean.scoring.precision import (
    calculate_all_traits,
    calculate_overall_confidence,
    calculate_trait_precision,
    initialize_all_facets,
    initialize_facet_precision,
    merge_precision_scores,
    to_percent,
    update_facet_precision,
)


def _fold(facet: str, pairs: list[tuple[float, float]]) -> FacetAggregate:
    aggregate = initialize_facet_precision(facet)
    for score, confidence in pairs:
        aggregate = update_facet_precision(
            aggregate, FacetObservation(facet=facet, score=score, confidence=confidence)
        )
    return aggregate


class TestInitialize:

    def test_zero_state(self):
        agg = initialize_facet_precision("imagination")
        assert agg == FacetAggregate(facet="imagination", score=0.0, confidence=0.0)

    def test_all_facets_in_canonical_order(self):
        facets = initialize_all_facets()
        assert tuple(facets) == ALL_FACETS
        assert all(f.confidence == 0.0 for f in facets.values())


class TestUpdate:

    def test_first_observation_becomes_the_aggregate(self):
        agg = _fold("imagination", [(15.0, 0.8)])
        assert agg.score == pytest.approx(15.0)
        assert agg.confidence == pytest.approx(0.8)

    def test_same_observation_twice_raises_confidence(self):
        agg = _fold("imagination", [(15.0, 0.8), (15.0, 0.8)])
        assert agg.score == pytest.approx(15.0)
        assert agg.confidence == pytest.approx(0.96)

    def test_three_observations_weight_by_confidence(self):
        agg = _fold("imagination", [(16.0, 0.7), (14.0, 0.6), (18.0, 0.9)])
        # Pulled toward the most confident observation (18 @ 0.9).
        assert agg.score == pytest.approx(16.63, abs=0.01)
        assert agg.confidence == pytest.approx(0.988)

    def test_zero_confidence_observation_changes_nothing(self):
        current = _fold("trust", [(12.0, 0.5)])
        updated = update_facet_precision(
            current, FacetObservation(facet="trust", score=0.0, confidence=0.0)
        )
        assert updated == current

    def test_confidence_never_decreases(self):
        agg = initialize_facet_precision("anxiety")
        for score, confidence in [(3, 0.4), (19, 0.1), (8, 0.7), (12, 0.05)]:
            updated = update_facet_precision(
                agg, FacetObservation(facet="anxiety", score=score, confidence=confidence)
            )
            assert updated.confidence >= agg.confidence
            agg = updated

    def test_out_of_range_input_is_clamped(self):
        agg = _fold("modesty", [(25.0, 1.5)])
        assert agg.score == 20.0
        assert 0.0 <= agg.confidence <= 1.0

        agg = _fold("modesty", [(-4.0, 0.5)])
        assert agg.score == 0.0

    def test_order_does_not_matter(self):
        pairs = [(4.0, 0.3), (17.0, 0.6), (11.0, 0.45), (9.0, 0.2)]
        forward = _fold("cooperation", pairs)
        backward = _fold("cooperation", list(reversed(pairs)))
        assert forward.score == pytest.approx(backward.score)
        assert forward.confidence == pytest.approx(backward.confidence)


def _random_pairs(count: int, seed: int = 1234) -> list[tuple[FacetAggregate, FacetAggregate]]:
    rng = random.Random(seed)
    edges = [0.0, 1.0]
    pairs = []
    for i in range(count):
        conf_a = edges[i % 2] if i < 4 else rng.random()
        conf_b = edges[(i // 2) % 2] if i < 4 else rng.random()
        pairs.append(
            (
                FacetAggregate("intellect", rng.uniform(0, 20), conf_a),
                FacetAggregate("intellect", rng.uniform(0, 20), conf_b),
            )
        )
    return pairs


class TestMerge:

    @pytest.mark.parametrize("a, b", _random_pairs(200))
    def test_commutative(self, a, b):
        ab = merge_precision_scores(a, b)
        ba = merge_precision_scores(b, a)
        assert abs(ab.score - ba.score) < 1e-9
        assert abs(ab.confidence - ba.confidence) < 1e-9

    def test_associative(self):
        a = FacetAggregate("intellect", 6.0, 0.4)
        b = FacetAggregate("intellect", 17.0, 0.7)
        c = FacetAggregate("intellect", 11.0, 0.25)
        left = merge_precision_scores(merge_precision_scores(a, b), c)
        right = merge_precision_scores(a, merge_precision_scores(b, c))
        assert left.score == pytest.approx(right.score)
        assert left.confidence == pytest.approx(right.confidence)

    def test_result_at_least_as_confident_as_either_input(self):
        a = FacetAggregate("orderliness", 3.0, 0.55)
        b = FacetAggregate("orderliness", 18.0, 0.2)
        merged = merge_precision_scores(a, b)
        assert merged.confidence >= max(a.confidence, b.confidence)
        assert min(a.score, b.score) <= merged.score <= max(a.score, b.score)

    def test_two_empty_aggregates_average_scores(self):
        merged = merge_precision_scores(
            FacetAggregate("anger", 4.0, 0.0), FacetAggregate("anger", 8.0, 0.0)
        )
        assert merged.score == pytest.approx(6.0)
        assert merged.confidence == 0.0

    def test_full_confidence_stays_finite(self):
        merged = merge_precision_scores(
            FacetAggregate("anger", 20.0, 1.0), FacetAggregate("anger", 0.0, 1.0)
        )
        assert merged.score == pytest.approx(10.0)
        assert merged.confidence == pytest.approx(1.0)


class TestTraits:

    def test_trait_is_plain_mean_of_facets(self):
        facets = [
            FacetAggregate(f, score=float(i * 4), confidence=0.1 * (i + 1))
            for i, f in enumerate(FACETS_BY_TRAIT["extraversion"])
        ]
        trait = calculate_trait_precision(facets)
        assert trait.trait == "extraversion"
        assert trait.score == pytest.approx(10.0)
        assert trait.confidence == pytest.approx(0.35)

    def test_trait_of_even_scores(self):
        facets = [
            FacetAggregate(f, score=score, confidence=0.5)
            for f, score in zip(FACETS_BY_TRAIT["openness"], [10, 12, 14, 16, 18, 20])
        ]
        assert calculate_trait_precision(facets).score == pytest.approx(15.0)

    def test_all_traits_from_partial_map(self):
        facets = {"imagination": FacetAggregate("imagination", 12.0, 0.6)}
        traits = calculate_all_traits(facets)
        assert tuple(traits) == TRAITS
        assert traits["openness"].score == pytest.approx(2.0)
        assert traits["openness"].confidence == pytest.approx(0.1)
        assert traits["neuroticism"].score == 0.0


class TestHelpers:

    def test_overall_confidence(self):
        facets = initialize_all_facets()
        facets["trust"] = FacetAggregate("trust", 10.0, 0.9)
        assert calculate_overall_confidence(facets) == pytest.approx(0.03)
        assert calculate_overall_confidence({}) == 0.0

    def test_to_percent(self):
        assert to_percent(0.988) == 99
        assert to_percent(0.0) == 0
        assert to_percent(1.7) == 100
