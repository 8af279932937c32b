"""Expected-goals model for a single shot."""
from __future__ import annotations
from typing import TYPE_CHECKING

from core_sim.tactics import calculate_attack_rating, calculate_defense_rating, get_tactical_xg_modifier
from core_sim.utils import clamp, side_sign
from core_sim.weather import get_weather_effects

if TYPE_CHECKING:
    from core_sim.prng import Prng
    from core_sim.state import MatchContext, SimulationState


def calculate_xg(state: "SimulationState", ctx: "MatchContext", prng: "Prng", side: str,
                 shot_type: str = 'shot') -> float:
    """
    xG of a shot taken by ``side``.

    Quality comes from the attacker/defender rating gap, scaled by tactics,
    a random shooting position, momentum, weather and home advantage.
    Consumes exactly one PRNG draw.

    Returns:
        Probability in ``[xg.min, xg.max]``
    """
    cfg = ctx.config
    attacking = ctx.team(side)
    defending = ctx.opponent(side)

    quality = (calculate_attack_rating(attacking) - calculate_defense_rating(defending)) / 100.0
    xg = cfg.number('xg.base', 0.10) + quality * cfg.number('xg.quality_weight', 0.05)
    xg *= get_tactical_xg_modifier(attacking, shot_type)

    position = cfg.number('xg.position_min', 0.8) + prng.next() * cfg.number('xg.position_span', 0.4)
    xg *= position

    xg += state.momentum * side_sign(side) * cfg.number('xg.momentum_weight', 0.001)
    xg *= get_weather_effects(ctx.weather).shot_accuracy
    if side == 'home':
        xg *= 1.0 + ctx.home_advantage

    return clamp(xg, cfg.number('xg.min', 0.01), cfg.number('xg.max', 0.8))
