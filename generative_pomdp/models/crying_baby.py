"""
models/crying_baby.py

The Crying Baby problem.

A baby is either hungry or full. We cannot see which.
We can only hear whether it cries, and decide whether to feed it.

Feeding always settles hunger, but it costs something.
Hunger, left alone, never goes away by itself.
A full baby sometimes grows hungry.
Hungry babies usually cry; full ones occasionally do.
"""

from __future__ import annotations
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Optional

from generative_pomdp.core.distributions import (
    BoolDistribution,
    Deterministic,
    Distribution,
    RandomSource,
    check_probability,
)
from generative_pomdp.core.policy import Policy
from generative_pomdp.core.pomdp import GenerativePOMDP, Step
from generative_pomdp.exceptions import InvalidParameterError


# ==================== Named Types ====================

@dataclass(frozen=True)
class BabyState:
    """Whether the baby is hungry."""
    hungry: bool

    def __bool__(self) -> bool:
        return self.hungry


@dataclass(frozen=True)
class BabyAction:
    """Whether we feed the baby this step."""
    feed: bool

    def __bool__(self) -> bool:
        return self.feed


@dataclass(frozen=True)
class BabyObservation:
    """Whether we hear crying."""
    crying: bool

    def __bool__(self) -> bool:
        return self.crying


FULL = BabyState(hungry=False)
HUNGRY = BabyState(hungry=True)
FEED = BabyAction(feed=True)
IGNORE = BabyAction(feed=False)
CRYING = BabyObservation(crying=True)
QUIET = BabyObservation(crying=False)


# ==================== Parameters ====================

@dataclass(frozen=True)
class CryingBabyParams:
    """
    The fixed nature of a Crying Baby problem.

    Rewards are penalties (negative in the canonical preset).
    Probabilities and the discount are validated on construction.
    """
    r_feed: float = -5.0                  # Cost of feeding
    r_hungry: float = -10.0               # Cost of a step spent hungry
    p_become_hungry: float = 0.1          # Full -> hungry, when not fed
    p_cry_when_hungry: float = 0.8        # P(crying | hungry)
    p_cry_when_not_hungry: float = 0.1    # P(crying | full)
    discount: float = 0.9                 # Return discount factor

    def __post_init__(self):
        for name in ("p_become_hungry", "p_cry_when_hungry", "p_cry_when_not_hungry", "discount"):
            check_probability(name, getattr(self, name))

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CryingBabyParams":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise InvalidParameterError(
                f"Unknown Crying Baby parameters: {sorted(unknown)}"
            )
        values = {}
        for key, value in data.items():
            try:
                values[key] = float(value)
            except (TypeError, ValueError) as exc:
                raise InvalidParameterError(
                    f"Crying Baby parameter '{key}' must be a number, got {value!r}"
                ) from exc
        return cls(**values)


# The canonical configuration
DEFAULT_PARAMS = CryingBabyParams()


# ==================== Model ====================

class CryingBaby(GenerativePOMDP):
    """
    Generative model of the Crying Baby problem.

    Stateless: holds only its parameters. Per step it consumes one
    draw for the transition (only when the baby is full and unfed)
    and always one draw for the observation.
    """

    def __init__(self, params: Optional[CryingBabyParams] = None):
        self.params = params or DEFAULT_PARAMS

    # ---------- Generative step ----------

    def gen(self, state: BabyState, action: BabyAction, rng: RandomSource) -> Step:
        """
        Advance one step.

        The next state is fixed first, then the observation is drawn
        from it. The reward depends only on the state and action we
        started from.
        """
        next_state = self.transition(state, action).sample(rng)
        observation = self.observation(action, next_state).sample(rng)
        return Step(
            next_state=next_state,
            observation=observation,
            reward=self.reward(state, action),
        )

    # ---------- Explicit model ----------

    def transition(self, state: BabyState, action: BabyAction) -> Distribution:
        """Distribution over the next state."""
        if action.feed:
            return Deterministic(FULL)
        if state.hungry:
            return Deterministic(HUNGRY)
        return BoolDistribution(self.params.p_become_hungry, HUNGRY, FULL)

    def observation(self, action: BabyAction, next_state: BabyState) -> BoolDistribution:
        """Distribution over what we hear after arriving in ``next_state``."""
        if next_state.hungry:
            p_cry = self.params.p_cry_when_hungry
        else:
            p_cry = self.params.p_cry_when_not_hungry
        return BoolDistribution(p_cry, CRYING, QUIET)

    def reward(self, state: BabyState, action: BabyAction) -> float:
        r = 0.0
        if state.hungry:
            r += self.params.r_hungry
        if action.feed:
            r += self.params.r_feed
        return r

    # ---------- Problem definition ----------

    def initial_state_distribution(self) -> Deterministic:
        """Every run starts with a full baby."""
        return Deterministic(FULL)

    def discount(self) -> float:
        return self.params.discount

    def states(self) -> List[BabyState]:
        return [FULL, HUNGRY]

    def actions(self) -> List[BabyAction]:
        return [FEED, IGNORE]

    def observations(self) -> List[BabyObservation]:
        return [CRYING, QUIET]

    def __repr__(self) -> str:
        return f"CryingBaby({self.params})"


# ==================== Policies ====================

class FeedWhenCrying(Policy):
    """
    Feed if and only if the last thing we heard was crying.

    Before anything has been heard, do not feed.
    """

    def action(self, observation: Optional[BabyObservation]) -> BabyAction:
        if observation is not None and observation.crying:
            return FEED
        return IGNORE

    def __repr__(self) -> str:
        return "FeedWhenCrying()"
