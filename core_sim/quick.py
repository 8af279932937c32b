"""Score-only sampler for bulk runs where the event log is not needed."""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Callable

from core_sim.prng import Seed, derive_prng

BASE_GOAL_RATE = 1.1


@dataclass(frozen=True)
class QuickResult:
    home_goals: int
    away_goals: int


def sample_poisson(rand: Callable[[], float], lam: float) -> int:
    # Knuth
    if lam <= 0:
        return 0
    limit = math.exp(-lam)
    k = 0
    p = 1.0
    while True:
        k += 1
        p *= rand()
        if p <= limit:
            return k - 1


def quick_result(seed: Seed, home_advantage: float = 0.2) -> QuickResult:
    prng = derive_prng('match', seed)
    home_goals = sample_poisson(prng.next, BASE_GOAL_RATE + home_advantage)
    away_goals = sample_poisson(prng.next, BASE_GOAL_RATE - home_advantage * 0.5)
    return QuickResult(home_goals=home_goals, away_goals=away_goals)
