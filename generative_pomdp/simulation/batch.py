"""
simulation/batch.py

Many trajectories at once.

Each trajectory gets its own generators, spawned from one seed,
so no two runs share mutable random state. The outcome does not
depend on which thread ran which trajectory, or in what order.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Optional

import numpy as np

from generative_pomdp.core.policy import Policy
from generative_pomdp.core.pomdp import GenerativePOMDP
from generative_pomdp.exceptions import InvalidParameterError

from .simulator import HistoryRecorder, SimHistory

logger = logging.getLogger(__name__)

# Builds a fresh policy for one trajectory from that trajectory's generator
PolicyFactory = Callable[[np.random.Generator], Policy]


def spawn_generators(seed: Optional[int], n: int) -> List[np.random.Generator]:
    """Independent generators derived from a single seed."""
    children = np.random.SeedSequence(seed).spawn(n)
    return [np.random.default_rng(child) for child in children]


def simulate_batch(
    pomdp: GenerativePOMDP,
    policy_factory: PolicyFactory,
    n: int,
    max_steps: int = 10,
    seed: Optional[int] = None,
    max_workers: Optional[int] = None,
) -> List[SimHistory]:
    """
    Run ``n`` independent recorded simulations.

    Trajectory ``i`` uses the ``i``-th pair of spawned generators (one
    for the model, one for the policy). With ``max_workers`` set the
    trajectories run on a thread pool; results keep trajectory order.
    """
    if n <= 0:
        raise InvalidParameterError(f"n must be positive, got {n}")

    generators = spawn_generators(seed, 2 * n)
    model_rngs, policy_rngs = generators[:n], generators[n:]

    def run_one(i: int) -> SimHistory:
        recorder = HistoryRecorder(max_steps, rng=model_rngs[i])
        return recorder.simulate(pomdp, policy_factory(policy_rngs[i]))

    if max_workers is None or max_workers <= 1:
        histories = [run_one(i) for i in range(n)]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            histories = list(pool.map(run_one, range(n)))

    logger.info(f"Simulated batch of {n} trajectories ({max_steps} steps each)")
    return histories


def summarize(histories: List[SimHistory]) -> Dict[str, float]:
    """Mean and spread of returns over a batch."""
    if not histories:
        raise InvalidParameterError("Cannot summarize an empty batch")

    discounted = np.array([h.discounted_reward() for h in histories])
    undiscounted = np.array([h.undiscounted_reward() for h in histories])

    return {
        "n": float(len(histories)),
        "mean_discounted": float(discounted.mean()),
        "std_discounted": float(discounted.std()),
        "mean_undiscounted": float(undiscounted.mean()),
        "min_discounted": float(discounted.min()),
        "max_discounted": float(discounted.max()),
    }
