"""
Concrete POMDP models.

- crying_baby: Hungry or full, crying or quiet, feed or wait
"""

from .crying_baby import (
    CRYING,
    DEFAULT_PARAMS,
    FEED,
    FULL,
    HUNGRY,
    IGNORE,
    QUIET,
    BabyAction,
    BabyObservation,
    BabyState,
    CryingBaby,
    CryingBabyParams,
    FeedWhenCrying,
)

__all__ = [
    "CryingBaby",
    "CryingBabyParams",
    "DEFAULT_PARAMS",
    "BabyState",
    "BabyAction",
    "BabyObservation",
    "FULL",
    "HUNGRY",
    "FEED",
    "IGNORE",
    "CRYING",
    "QUIET",
    "FeedWhenCrying",
]
