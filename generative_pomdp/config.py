"""
generative_pomdp/config.py

Run configuration.

A run is described by a step budget, a seed, a policy name,
how many trajectories to draw, and the model parameters.
It can come from code, a YAML file, or the environment.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import numpy as np
import yaml

from generative_pomdp.core.policy import ConstantPolicy, Policy, RandomPolicy
from generative_pomdp.exceptions import InvalidParameterError
from generative_pomdp.models.crying_baby import (
    DEFAULT_PARAMS,
    FEED,
    IGNORE,
    CryingBaby,
    CryingBabyParams,
    FeedWhenCrying,
)

logger = logging.getLogger(__name__)

CONFIGS_DIR = Path(__file__).parent / "configs"
DEFAULT_CONFIG_PATH = CONFIGS_DIR / "crying_baby.yaml"

# Policy name -> factory taking the trajectory's policy generator
POLICIES: Dict[str, Callable[[np.random.Generator], Policy]] = {
    "always_feed": lambda rng: ConstantPolicy(FEED),
    "feed_when_crying": lambda rng: FeedWhenCrying(),
    "random": lambda rng: RandomPolicy([FEED, IGNORE], rng=rng),
}


def build_policy(name: str, rng: Optional[np.random.Generator] = None) -> Policy:
    """Instantiate a registered policy by name."""
    if name not in POLICIES:
        raise InvalidParameterError(
            f"Unknown policy '{name}'. Choose from: {sorted(POLICIES)}"
        )
    return POLICIES[name](rng if rng is not None else np.random.default_rng())


def _check_int(name: str, value: Any, minimum: int, optional: bool = False) -> None:
    """Raise unless ``value`` is an integer >= ``minimum`` (or None when optional)."""
    if value is None and optional:
        return
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidParameterError(f"{name} must be >= {minimum}, got {value}")


def _env_int(key: str, default: Optional[str]) -> Optional[int]:
    raw = os.environ.get(key, default)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise InvalidParameterError(f"{key} must be an integer, got {raw!r}") from exc


@dataclass
class SimulationConfig:
    """Configuration for a simulation run."""
    max_steps: int = 10                  # Steps per trajectory
    seed: Optional[int] = None           # None = fresh entropy each run
    policy: str = "always_feed"          # Key into POLICIES
    num_trajectories: int = 1            # Independent trajectories
    max_workers: Optional[int] = None    # Thread pool size for batches
    model: CryingBabyParams = field(default_factory=lambda: DEFAULT_PARAMS)

    def __post_init__(self):
        _check_int("max_steps", self.max_steps, minimum=1)
        _check_int("num_trajectories", self.num_trajectories, minimum=1)
        _check_int("seed", self.seed, minimum=0, optional=True)
        _check_int("max_workers", self.max_workers, minimum=1, optional=True)
        if not isinstance(self.policy, str) or self.policy not in POLICIES:
            raise InvalidParameterError(
                f"Unknown policy '{self.policy}'. Choose from: {sorted(POLICIES)}"
            )

    def build_model(self) -> CryingBaby:
        return CryingBaby(self.model)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "max_steps": self.max_steps,
            "seed": self.seed,
            "policy": self.policy,
            "num_trajectories": self.num_trajectories,
            "max_workers": self.max_workers,
            "model": self.model.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SimulationConfig:
        if not isinstance(data, dict):
            raise InvalidParameterError(f"Configuration must be a mapping, got {type(data).__name__}")
        if not isinstance(data.get("model") or {}, dict):
            raise InvalidParameterError("Configuration 'model' must be a mapping of parameters")
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise InvalidParameterError(f"Unknown configuration keys: {sorted(unknown)}")

        kwargs = dict(data)
        if "model" in kwargs:
            kwargs["model"] = CryingBabyParams.from_dict(kwargs["model"] or {})
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> SimulationConfig:
        """Load a config from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        logger.info(f"Loaded simulation config from {path}")
        return cls.from_dict(data)

    @classmethod
    def from_env(cls) -> SimulationConfig:
        """Create config from environment variables."""
        return cls(
            max_steps=_env_int("POMDP_MAX_STEPS", "10"),
            seed=_env_int("POMDP_SEED", None),
            policy=os.environ.get("POMDP_POLICY", "always_feed"),
            num_trajectories=_env_int("POMDP_NUM_TRAJECTORIES", "1"),
        )


def load_packaged_config(name: str) -> SimulationConfig:
    """Load one of the YAML configs shipped in ``configs/``."""
    return SimulationConfig.from_yaml(CONFIGS_DIR / f"{name}.yaml")


def load_default_config() -> SimulationConfig:
    """The packaged canonical configuration."""
    return SimulationConfig.from_yaml(DEFAULT_CONFIG_PATH)
