# core_sim/stats.py
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, TYPE_CHECKING

from core_sim.config import EngineConfig
from core_sim.weather import get_weather_effects

if TYPE_CHECKING:
    from core_sim.state import MatchContext, SimulationState
    from core_sim.prng import Prng


@dataclass
class SideStat:
    home: float = 0
    away: float = 0

    def __getitem__(self, side: str) -> float:
        if side == 'home':
            return self.home
        if side == 'away':
            return self.away
        raise KeyError(side)

    def __setitem__(self, side: str, value: float) -> None:
        if side == 'home':
            self.home = value
        elif side == 'away':
            self.away = value
        else:
            raise KeyError(side)

    def total(self) -> float:
        return self.home + self.away

    def to_dict(self) -> Dict[str, float]:
        return {'home': self.home, 'away': self.away}


def _counter() -> SideStat:
    return SideStat(0, 0)


def _ratio() -> SideStat:
    return SideStat(0.0, 0.0)


@dataclass
class MatchStats:
    """
    Running per-side counters of one match.

    Possession is accrued per tick and only sums to 100 after
    :meth:`normalise_possession` runs at full time; pass accuracy is a
    running average in percent.
    """
    possession: SideStat = field(default_factory=_ratio)
    shots: SideStat = field(default_factory=_counter)
    shots_on_target: SideStat = field(default_factory=_counter)
    xg: SideStat = field(default_factory=_ratio)
    passes: SideStat = field(default_factory=_counter)
    pass_accuracy: SideStat = field(default_factory=_ratio)
    fouls: SideStat = field(default_factory=_counter)
    corners: SideStat = field(default_factory=_counter)
    yellow_cards: SideStat = field(default_factory=_counter)
    red_cards: SideStat = field(default_factory=_counter)

    def copy(self) -> "MatchStats":
        return MatchStats(**{f.name: SideStat(getattr(self, f.name).home, getattr(self, f.name).away)
                             for f in fields(self)})

    def normalise_possession(self) -> None:
        total = self.possession.total()
        if total <= 0:
            self.possession = SideStat(50.0, 50.0)
            return
        self.possession = SideStat(self.possession.home * 100.0 / total,
                                   self.possession.away * 100.0 / total)

    def total_cards(self) -> int:
        return int(self.yellow_cards.total() + self.red_cards.total())

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name).to_dict() for f in fields(self)}


def possession_share(cfg: EngineConfig) -> float:
    """Possession points one tick is worth (100 spread over regulation ticks)."""
    minutes = 2 * cfg.number('match.minutes_per_half', 45)
    ticks = cfg.number('match.ticks_per_minute', 4)
    return 100.0 / (minutes * ticks)


def update_tick_stats(state: "SimulationState", ctx: "MatchContext", prng: "Prng") -> None:
    """Credit possession to the side on the ball and record its passing for the tick."""
    cfg = ctx.config
    side = state.possession
    stats = state.stats

    stats.possession[side] += possession_share(cfg)

    attempts = prng.int(0, int(cfg.number('passing.max_attempts_exclusive', 3)))
    if attempts <= 0:
        return
    stats.passes[side] += attempts
    total = stats.passes[side]
    accuracy = cfg.number('passing.base_accuracy', 0.8) * get_weather_effects(ctx.weather).passing_accuracy
    successful = attempts * accuracy
    previous = stats.pass_accuracy[side]
    stats.pass_accuracy[side] = (previous * (total - attempts) + successful * 100.0) / total
