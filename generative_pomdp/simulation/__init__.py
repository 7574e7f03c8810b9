"""
Simulation drivers.

- simulator: Recorded and rollout simulations of a single trajectory
- batch: Independent trajectories from one seed
"""

from .simulator import HistoryRecorder, RolloutSimulator, SimHistory, StepRecord
from .batch import simulate_batch, spawn_generators, summarize

__all__ = [
    "HistoryRecorder",
    "RolloutSimulator",
    "SimHistory",
    "StepRecord",
    "simulate_batch",
    "spawn_generators",
    "summarize",
]
