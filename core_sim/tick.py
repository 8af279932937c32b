from __future__ import annotations
from typing import TYPE_CHECKING

from core_sim.event_generator import generate_event
from core_sim.fatigue import apply_stamina_tick
from core_sim.flow import event_probability, update_intensity, update_possession
from core_sim.stats import update_tick_stats

if TYPE_CHECKING:
    from core_sim.prng import Prng
    from core_sim.state import MatchContext, SimulationState


def simulate_tick(state: "SimulationState", ctx: "MatchContext", prng: "Prng") -> None:
    """One 15-second slice. The order of PRNG draws below must not change."""
    if prng.next() < event_probability(state, ctx):
        generate_event(state, ctx, prng)
    if prng.next() < ctx.config.number('possession.change_prob', 0.10):
        update_possession(state, ctx, prng)
    update_tick_stats(state, ctx, prng)
    apply_stamina_tick(state, ctx, prng)


def simulate_minute(state: "SimulationState", ctx: "MatchContext", prng: "Prng", minute: int,
                    *, update_flow: bool = True) -> None:
    """Run every tick of ``minute``; stoppage minutes skip the intensity update."""
    state.minute = minute
    for _ in range(int(ctx.config.number('match.ticks_per_minute', 4))):
        simulate_tick(state, ctx, prng)
    if update_flow:
        update_intensity(state, ctx, prng)
