"""
simulation/simulator.py

The driver loop.

The model does not remember. The simulator does:
it holds the current state, asks the policy for an action,
asks the model for what happens next, and keeps the books.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

import numpy as np

from generative_pomdp.core.distributions import RandomSource
from generative_pomdp.core.policy import Policy
from generative_pomdp.core.pomdp import GenerativePOMDP
from generative_pomdp.exceptions import InvalidParameterError

logger = logging.getLogger(__name__)


def _plain(value: Any) -> Any:
    """Flatten model types into plain Python values for export."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return value


@dataclass(frozen=True)
class StepRecord:
    """One row of a trajectory."""
    t: int
    state: Any
    action: Any
    observation: Any
    next_state: Any
    reward: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "t": self.t,
            "state": _plain(self.state),
            "action": _plain(self.action),
            "observation": _plain(self.observation),
            "next_state": _plain(self.next_state),
            "reward": self.reward,
        }


@dataclass
class SimHistory:
    """
    A recorded trajectory.

    Iterating yields StepRecords in time order.
    """
    discount: float
    steps: List[StepRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[StepRecord]:
        return iter(self.steps)

    def states(self) -> List[Any]:
        return [s.state for s in self.steps]

    def actions(self) -> List[Any]:
        return [s.action for s in self.steps]

    def observations(self) -> List[Any]:
        return [s.observation for s in self.steps]

    def rewards(self) -> List[float]:
        return [s.reward for s in self.steps]

    def undiscounted_reward(self) -> float:
        return float(sum(self.rewards()))

    def discounted_reward(self) -> float:
        """Sum of discount**t * r_t over the trajectory."""
        total = 0.0
        weight = 1.0
        for r in self.rewards():
            total += weight * r
            weight *= self.discount
        return total

    def to_dict(self) -> Dict[str, Any]:
        return {
            "discount": self.discount,
            "steps": [s.to_dict() for s in self.steps],
            "undiscounted_reward": self.undiscounted_reward(),
            "discounted_reward": self.discounted_reward(),
        }


class _Driver:
    """Shared step budget and random source handling."""

    def __init__(
        self,
        max_steps: int,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None
    ):
        if max_steps <= 0:
            raise InvalidParameterError(f"max_steps must be positive, got {max_steps}")
        self.max_steps = max_steps
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def _initial_state(self, pomdp: GenerativePOMDP, initial_state: Any) -> Any:
        if initial_state is not None:
            return initial_state
        return pomdp.initial_state_distribution().sample(self.rng)


class HistoryRecorder(_Driver):
    """
    Runs one simulation and records every step.

    The policy sees the most recent observation, starting from None.
    """

    def simulate(
        self,
        pomdp: GenerativePOMDP,
        policy: Policy,
        initial_state: Any = None
    ) -> SimHistory:
        state = self._initial_state(pomdp, initial_state)
        observation = None
        history = SimHistory(discount=pomdp.discount())

        for t in range(self.max_steps):
            if pomdp.is_terminal(state):
                logger.debug(f"Terminal state {state} reached at t={t}")
                break

            action = policy.action(observation)
            next_state, observation, reward = pomdp.gen(state, action, self.rng)

            history.steps.append(StepRecord(
                t=t,
                state=state,
                action=action,
                observation=observation,
                next_state=next_state,
                reward=reward,
            ))
            logger.debug(
                f"t={t} s={state} a={action} o={observation} r={reward}"
            )
            state = next_state

        logger.info(
            f"Simulated {len(history)} steps, "
            f"discounted reward {history.discounted_reward():.3f}"
        )
        return history


class RolloutSimulator(_Driver):
    """
    Runs one simulation and returns only its discounted return.

    Nothing is recorded, so this is the one to use inside loops.
    """

    def simulate(
        self,
        pomdp: GenerativePOMDP,
        policy: Policy,
        initial_state: Any = None
    ) -> float:
        state = self._initial_state(pomdp, initial_state)
        observation = None
        gamma = pomdp.discount()
        weight = 1.0
        total = 0.0

        for _ in range(self.max_steps):
            if pomdp.is_terminal(state):
                break
            action = policy.action(observation)
            state, observation, reward = pomdp.gen(state, action, self.rng)
            total += weight * reward
            weight *= gamma

        return total
