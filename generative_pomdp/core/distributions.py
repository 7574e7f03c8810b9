"""
core/distributions.py

Probability distributions over discrete values.

A generative model never hands out tables. It hands out things
that can be sampled, and asked how likely a value is.

Every distribution here draws from a random source through a single
call, ``rng.random()``, which returns a float in [0, 1). Both
``numpy.random.Generator`` and ``random.Random`` qualify.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Generic, List, Protocol, Sequence, TypeVar

import numpy as np

from generative_pomdp.exceptions import InvalidParameterError

T = TypeVar("T")

# Tolerance when checking that categorical weights sum to one
PROBABILITY_TOLERANCE = 1e-9


class RandomSource(Protocol):
    """Anything that yields uniform floats in [0, 1)."""

    def random(self) -> float:
        ...


def check_probability(name: str, value: float) -> float:
    """Return ``value`` as a float, or raise if it is not in [0, 1]."""
    try:
        value = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"{name} must be a number, got {value!r}") from exc
    if not 0.0 <= value <= 1.0:
        raise InvalidParameterError(f"{name} must be in [0, 1], got {value}")
    return value


class Distribution(ABC, Generic[T]):
    """
    Abstract distribution over values of type T.

    Subclasses must say how to sample, how much mass a value carries,
    and which values carry any mass at all.
    """

    @abstractmethod
    def sample(self, rng: RandomSource) -> T:
        """Draw one value using ``rng``."""
        pass

    @abstractmethod
    def pdf(self, value: Any) -> float:
        """Probability mass of ``value``."""
        pass

    @abstractmethod
    def support(self) -> List[T]:
        """Values with non-zero probability."""
        pass


class Deterministic(Distribution[T]):
    """
    Point-mass distribution.

    Always yields the same value and never touches the random source.
    """

    def __init__(self, value: T):
        self.value = value

    def sample(self, rng: RandomSource) -> T:
        return self.value

    def pdf(self, value: Any) -> float:
        return 1.0 if value == self.value else 0.0

    def support(self) -> List[T]:
        return [self.value]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Deterministic) and other.value == self.value

    def __hash__(self) -> int:
        return hash(("Deterministic", self.value))

    def __repr__(self) -> str:
        return f"Deterministic({self.value!r})"


class BoolDistribution(Distribution[T]):
    """
    Two-point distribution.

    Yields ``true_value`` with probability ``p`` and ``false_value``
    otherwise. Sampling consumes exactly one draw ``u`` and compares
    ``u < p``, so ``p = 0`` never yields true and ``p = 1`` always does.
    """

    def __init__(self, p: float, true_value: Any = True, false_value: Any = False):
        self.p = check_probability("p", p)
        self.true_value = true_value
        self.false_value = false_value

    def sample(self, rng: RandomSource) -> T:
        return self.true_value if rng.random() < self.p else self.false_value

    def pdf(self, value: Any) -> float:
        if value == self.true_value:
            return self.p
        if value == self.false_value:
            return 1.0 - self.p
        return 0.0

    def support(self) -> List[T]:
        values = []
        if self.p > 0.0:
            values.append(self.true_value)
        if self.p < 1.0:
            values.append(self.false_value)
        return values

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, BoolDistribution)
            and other.p == self.p
            and other.true_value == self.true_value
            and other.false_value == self.false_value
        )

    def __hash__(self) -> int:
        return hash(("BoolDistribution", self.p, self.true_value, self.false_value))

    def __repr__(self) -> str:
        return f"BoolDistribution(p={self.p}, true={self.true_value!r}, false={self.false_value!r})"


class SparseCat(Distribution[T]):
    """
    Categorical distribution over an explicit list of values.

    Sampling consumes one draw and walks the cumulative weights.
    """

    def __init__(self, values: Sequence[T], probs: Sequence[float]):
        if len(values) != len(probs):
            raise InvalidParameterError(
                f"SparseCat needs one probability per value "
                f"({len(values)} values, {len(probs)} probabilities)"
            )
        if not values:
            raise InvalidParameterError("SparseCat needs at least one value")

        probs_arr = np.asarray(probs, dtype=np.float64)
        if np.any(probs_arr < 0.0):
            raise InvalidParameterError(f"SparseCat probabilities must be non-negative: {list(probs)}")
        total = float(probs_arr.sum())
        if abs(total - 1.0) > PROBABILITY_TOLERANCE:
            raise InvalidParameterError(f"SparseCat probabilities must sum to 1, got {total}")

        self.values = list(values)
        self.probs = probs_arr
        self._cumulative = np.cumsum(probs_arr)

    def sample(self, rng: RandomSource) -> T:
        u = rng.random()
        index = int(np.searchsorted(self._cumulative, u, side="right"))
        # Guard against rounding leaving u above the last cumulative weight
        index = min(index, len(self.values) - 1)
        return self.values[index]

    def pdf(self, value: Any) -> float:
        return float(sum(p for v, p in zip(self.values, self.probs) if v == value))

    def support(self) -> List[T]:
        return [v for v, p in zip(self.values, self.probs) if p > 0.0]

    def __repr__(self) -> str:
        pairs = ", ".join(f"{v!r}: {p:.3f}" for v, p in zip(self.values, self.probs))
        return f"SparseCat({{{pairs}}})"
