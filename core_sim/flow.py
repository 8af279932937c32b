"""Match flow: event probability, intensity, momentum and possession."""
from __future__ import annotations
from typing import TYPE_CHECKING

from core_sim.tactics import calculate_possession_tendency
from core_sim.utils import clamp, other_side, side_sign
from core_sim.weather import Weather

if TYPE_CHECKING:
    from core_sim.config import EngineConfig
    from core_sim.prng import Prng
    from core_sim.state import MatchContext, SimulationState


def event_probability(state: "SimulationState", ctx: "MatchContext") -> float:
    cfg = ctx.config
    p = cfg.number('events.base_probability', 0.15) * (0.5 + state.intensity / 100.0)
    if state.minute > cfg.number('events.late_minute', 80):
        p *= cfg.number('events.late_mult', 1.3)
    elif state.minute < cfg.number('events.early_minute', 10):
        p *= cfg.number('events.early_mult', 1.1)
    p *= 1.0 + abs(state.momentum) / 200.0
    if ctx.weather != Weather.CLEAR:
        p *= cfg.number('events.adverse_weather_mult', 1.1)
    return min(p, cfg.number('events.max_probability', 0.4))


def update_intensity(state: "SimulationState", ctx: "MatchContext", prng: "Prng") -> None:
    """Per-minute drift: late game and tight scores raise it, blowouts calm it."""
    cfg = ctx.config
    intensity = state.intensity
    diff = abs(state.score_difference)
    ceiling = int(cfg.number('intensity.max', 100))

    # each boost is capped on its own, before the jitter
    if state.minute > cfg.number('intensity.late_minute', 60):
        intensity = min(ceiling, intensity + 1)
    if diff <= cfg.number('intensity.close_margin', 1):
        intensity = min(ceiling, intensity + int(cfg.number('intensity.close_boost', 2)))
    elif diff >= cfg.number('intensity.blowout_margin', 3):
        intensity = max(int(cfg.number('intensity.blowout_floor', 30)), intensity - 1)

    intensity += prng.int(-2, 3)
    state.intensity = int(clamp(intensity, cfg.number('intensity.min', 20), cfg.number('intensity.max', 100)))


def boost_intensity(state: "SimulationState", amount: float, cfg: "EngineConfig") -> None:
    state.intensity = int(min(cfg.number('intensity.max', 100), state.intensity + amount))


def swing_momentum(state: "SimulationState", side: str, amount: float, cfg: "EngineConfig") -> None:
    limit = cfg.number('momentum.limit', 100)
    state.momentum = int(clamp(state.momentum + side_sign(side) * amount, -limit, limit))


def update_possession(state: "SimulationState", ctx: "MatchContext", prng: "Prng") -> None:
    h = calculate_possession_tendency(ctx.home)
    a = calculate_possession_tendency(ctx.away)
    home_chance = h / (h + a) + state.momentum * ctx.config.number('possession.momentum_bias', 0.002)
    state.possession = 'home' if prng.next() < home_chance else 'away'


def flip_possession(state: "SimulationState") -> None:
    state.possession = other_side(state.possession)
