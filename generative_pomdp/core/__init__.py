"""
Core abstractions of the generative POMDP framework.

- distributions: What can be sampled
- pomdp: The generative step interface
- policy: Observation in, action out
"""

from .distributions import BoolDistribution, Deterministic, Distribution, SparseCat
from .pomdp import GenerativePOMDP, Step
from .policy import ConstantPolicy, FunctionPolicy, Policy, RandomPolicy

__all__ = [
    "Distribution",
    "Deterministic",
    "BoolDistribution",
    "SparseCat",
    "GenerativePOMDP",
    "Step",
    "Policy",
    "FunctionPolicy",
    "ConstantPolicy",
    "RandomPolicy",
]
