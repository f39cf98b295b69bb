# court_rotation/ratings.py
from __future__ import annotations
from typing import Optional, Protocol, Sequence, Tuple
import numpy as np

from .models import EngineConfig, Player


class BaseRatingSource(Protocol):
    """Supplies (offensive, defensive) base ratings for a five-player lineup."""

    def base_ratings(self, lineup: Sequence[str]) -> Tuple[float, float]:
        ...


class RandomBaseRatings:
    """Synthetic baselines drawn uniformly from [low, high); seeded, so reproducible."""

    def __init__(self, low: float = 80.0, high: float = 100.0, seed: Optional[int] = 42):
        self.low = low
        self.high = high
        self._rng = np.random.default_rng(seed)

    @classmethod
    def from_config(cls, config: EngineConfig) -> "RandomBaseRatings":
        return cls(config.rating_base_low, config.rating_base_high, config.random_seed)

    def base_ratings(self, lineup: Sequence[str]) -> Tuple[float, float]:
        off, dfn = self._rng.uniform(self.low, self.high, size=2)
        return float(off), float(dfn)


class FixedBaseRatings:
    def __init__(self, offensive: float = 90.0, defensive: float = 90.0):
        self.offensive = offensive
        self.defensive = defensive

    def base_ratings(self, lineup: Sequence[str]) -> Tuple[float, float]:
        return self.offensive, self.defensive


def skill_variety(players: Sequence[Optional[Player]]) -> float:
    """distinct skills / total skill instances across the lineup (0 with no skills)."""
    skills = [s for p in players if p is not None for s in p.skills]
    if not skills:
        return 0.0
    return len(set(skills)) / len(skills)


def lineup_ratings(
    variety: float,
    base_offensive: float,
    base_defensive: float,
    config: Optional[EngineConfig] = None,
) -> Tuple[float, float, float]:
    config = config or EngineConfig()
    factor = config.variety_floor + variety * config.variety_weight
    offensive = base_offensive * factor
    defensive = base_defensive * factor
    plus_minus = (offensive - defensive) / 10 - 5
    return offensive, defensive, plus_minus
