"""
core/policy.py

Policies map what was seen to what is done.

The simulator hands a policy the most recent observation
(``None`` before anything has been observed) and takes back an action.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Sequence

import numpy as np

from generative_pomdp.exceptions import InvalidParameterError


class Policy(ABC):
    """Abstract observation-to-action mapping."""

    @abstractmethod
    def action(self, observation: Any) -> Any:
        """Choose the next action."""
        pass


class FunctionPolicy(Policy):
    """Policy backed by any callable of one argument."""

    def __init__(self, fn: Callable[[Any], Any]):
        self.fn = fn

    def action(self, observation: Any) -> Any:
        return self.fn(observation)

    def __repr__(self) -> str:
        name = getattr(self.fn, "__name__", repr(self.fn))
        return f"FunctionPolicy({name})"


class ConstantPolicy(Policy):
    """Ignores its input and always returns the same action."""

    def __init__(self, fixed_action: Any):
        self.fixed_action = fixed_action

    def action(self, observation: Any) -> Any:
        return self.fixed_action

    def __repr__(self) -> str:
        return f"ConstantPolicy({self.fixed_action!r})"


class RandomPolicy(Policy):
    """
    Picks uniformly among a fixed set of actions.

    Owns its own generator so that its draws never interleave
    with the model's.
    """

    def __init__(
        self,
        actions: Sequence[Any],
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None
    ):
        if not actions:
            raise InvalidParameterError("RandomPolicy needs at least one action")
        self.actions = list(actions)
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def action(self, observation: Any) -> Any:
        return self.actions[int(self.rng.integers(len(self.actions)))]

    def __repr__(self) -> str:
        return f"RandomPolicy(actions={self.actions!r})"
