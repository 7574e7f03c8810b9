"""
Tests for core/distributions.py

Point masses, two-point and categorical distributions.
"""

import random

import numpy as np
import pytest

from generative_pomdp.core.distributions import (
    BoolDistribution,
    Deterministic,
    SparseCat,
    check_probability,
)
from generative_pomdp.exceptions import InvalidParameterError


class ScriptedSource:
    """Random source that replays fixed values and counts draws."""

    def __init__(self, values=()):
        self.values = list(values)
        self.calls = 0

    def random(self):
        value = self.values[self.calls]
        self.calls += 1
        return value


class TestCheckProbability:
    """Tests for the [0, 1] guard."""

    def test_accepts_bounds(self):
        assert check_probability("p", 0) == 0.0
        assert check_probability("p", 1) == 1.0

    @pytest.mark.parametrize("value", [-0.01, 1.01, float("nan")])
    def test_rejects_out_of_range(self, value):
        with pytest.raises(InvalidParameterError):
            check_probability("p", value)

    @pytest.mark.parametrize("value", [None, "abc", [0.5]])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(InvalidParameterError, match="must be a number"):
            check_probability("p", value)

    def test_numeric_strings_are_accepted(self):
        assert check_probability("p", "0.25") == 0.25


class TestDeterministic:
    """Tests for the point-mass distribution."""

    def test_sample_returns_value_without_drawing(self):
        source = ScriptedSource()
        dist = Deterministic("full")
        assert dist.sample(source) == "full"
        assert source.calls == 0

    def test_pdf(self):
        dist = Deterministic(False)
        assert dist.pdf(False) == 1.0
        assert dist.pdf(True) == 0.0

    def test_support(self):
        assert Deterministic(3).support() == [3]

    def test_equality(self):
        assert Deterministic(1) == Deterministic(1)
        assert Deterministic(1) != Deterministic(2)

    def test_hash_follows_equality(self):
        assert hash(Deterministic("full")) == hash(Deterministic("full"))
        assert len({Deterministic(1), Deterministic(1), Deterministic(2)}) == 2

    def test_usable_as_dict_key(self):
        table = {Deterministic("full"): "fed"}
        assert table[Deterministic("full")] == "fed"


class TestBoolDistribution:
    """Tests for the two-point distribution."""

    def test_sample_uses_one_draw(self):
        source = ScriptedSource([0.3])
        BoolDistribution(0.5).sample(source)
        assert source.calls == 1

    def test_sample_compares_strictly_below_p(self):
        dist = BoolDistribution(0.4, "yes", "no")
        assert dist.sample(ScriptedSource([0.39])) == "yes"
        assert dist.sample(ScriptedSource([0.4])) == "no"

    def test_zero_never_true(self):
        dist = BoolDistribution(0.0)
        assert dist.sample(ScriptedSource([0.0])) is False

    def test_one_always_true(self):
        dist = BoolDistribution(1.0)
        assert dist.sample(ScriptedSource([0.999999])) is True

    def test_pdf(self):
        dist = BoolDistribution(0.25, "a", "b")
        assert dist.pdf("a") == pytest.approx(0.25)
        assert dist.pdf("b") == pytest.approx(0.75)
        assert dist.pdf("c") == 0.0

    def test_support_drops_impossible_values(self):
        assert BoolDistribution(0.0).support() == [False]
        assert BoolDistribution(1.0).support() == [True]
        assert BoolDistribution(0.5).support() == [True, False]

    def test_invalid_probability_raises(self):
        with pytest.raises(InvalidParameterError):
            BoolDistribution(1.5)

    def test_none_probability_raises(self):
        with pytest.raises(InvalidParameterError):
            BoolDistribution(None)

    def test_hash_follows_equality(self):
        a = BoolDistribution(0.5, "hungry", "full")
        b = BoolDistribution(0.5, "hungry", "full")
        assert hash(a) == hash(b)
        assert len({a, b, BoolDistribution(0.1, "hungry", "full")}) == 2

    def test_distinct_from_deterministic_in_sets(self):
        members = {Deterministic(True), BoolDistribution(1.0)}
        assert len(members) == 2

    def test_works_with_stdlib_random(self):
        dist = BoolDistribution(0.5)
        assert dist.sample(random.Random(0)) in (True, False)

    def test_empirical_frequency(self):
        rng = np.random.default_rng(42)
        dist = BoolDistribution(0.3)
        samples = [dist.sample(rng) for _ in range(20000)]
        assert np.mean(samples) == pytest.approx(0.3, abs=0.015)


class TestSparseCat:
    """Tests for the categorical distribution."""

    def test_sample_by_cumulative_weight(self):
        dist = SparseCat(["a", "b", "c"], [0.25, 0.5, 0.25])
        assert dist.sample(ScriptedSource([0.1])) == "a"
        assert dist.sample(ScriptedSource([0.25])) == "b"
        assert dist.sample(ScriptedSource([0.5])) == "b"
        assert dist.sample(ScriptedSource([0.8])) == "c"

    def test_sample_uses_one_draw(self):
        source = ScriptedSource([0.6])
        SparseCat([1, 2], [0.5, 0.5]).sample(source)
        assert source.calls == 1

    def test_zero_weight_value_never_sampled(self):
        dist = SparseCat(["never", "always"], [0.0, 1.0])
        assert dist.sample(ScriptedSource([0.0])) == "always"

    def test_pdf_and_support(self):
        dist = SparseCat(["x", "y", "z"], [0.5, 0.5, 0.0])
        assert dist.pdf("x") == pytest.approx(0.5)
        assert dist.pdf("z") == 0.0
        assert dist.pdf("missing") == 0.0
        assert dist.support() == ["x", "y"]

    def test_probabilities_must_sum_to_one(self):
        with pytest.raises(InvalidParameterError):
            SparseCat(["a", "b"], [0.5, 0.6])

    def test_negative_probability_raises(self):
        with pytest.raises(InvalidParameterError):
            SparseCat(["a", "b"], [1.5, -0.5])

    def test_length_mismatch_raises(self):
        with pytest.raises(InvalidParameterError):
            SparseCat(["a", "b"], [1.0])

    def test_empty_raises(self):
        with pytest.raises(InvalidParameterError):
            SparseCat([], [])
