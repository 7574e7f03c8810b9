"""
core/pomdp.py

The generative interface.

A POMDP here is not a set of tables. It is a function:
given where we are, what we do, and a source of chance,
say where we end up, what we see, and what it cost.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterator, List

from .distributions import Distribution, RandomSource


@dataclass(frozen=True)
class Step:
    """
    Outcome of one generative call.

    Unpacks like a tuple: ``next_state, observation, reward = step``.
    """
    next_state: Any
    observation: Any
    reward: float

    def __iter__(self) -> Iterator[Any]:
        return iter((self.next_state, self.observation, self.reward))


class GenerativePOMDP(ABC):
    """
    Abstract POMDP defined by sampling.

    Implementations hold read-only parameters only. All state lives
    with the caller and is passed in by value each step, so a single
    model can serve any number of independent simulations.
    """

    @abstractmethod
    def gen(self, state: Any, action: Any, rng: RandomSource) -> Step:
        """Advance the process by one step."""
        pass

    @abstractmethod
    def initial_state_distribution(self) -> Distribution:
        """Distribution over starting states."""
        pass

    @abstractmethod
    def discount(self) -> float:
        """Discount factor applied when aggregating returns."""
        pass

    @abstractmethod
    def actions(self) -> List[Any]:
        """All actions available to a policy."""
        pass

    def is_terminal(self, state: Any) -> bool:
        """Whether a run should stop at ``state``. Never, by default."""
        return False
