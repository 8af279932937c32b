from __future__ import annotations
from typing import Iterable, TYPE_CHECKING

from models.player import Player
from models.team import Team
from core_sim.tactics import calculate_stamina_drain

if TYPE_CHECKING:
    from core_sim.prng import Prng
    from core_sim.state import MatchContext, SimulationState


def _drain_team(state: "SimulationState", team: Team, players: Iterable[Player], prng: "Prng",
                *, jitter_min: float, jitter_span: float) -> None:
    base = calculate_stamina_drain(team, state.minute, state.intensity)
    for p in players:
        # one draw per rostered player, in roster order
        drain = base * (jitter_min + prng.next() * jitter_span)
        current = state.player_stamina.get(p.id, float(p.stamina))
        state.player_stamina[p.id] = max(0.0, current - drain)


def apply_stamina_tick(state: "SimulationState", ctx: "MatchContext", prng: "Prng") -> None:
    """Drain tracked stamina of both rosters, home first."""
    cfg = ctx.config
    jitter_min = cfg.number('stamina.jitter_min', 0.8)
    jitter_span = cfg.number('stamina.jitter_span', 0.4)
    _drain_team(state, ctx.home, ctx.home.players, prng, jitter_min=jitter_min, jitter_span=jitter_span)
    _drain_team(state, ctx.away, ctx.away.players, prng, jitter_min=jitter_min, jitter_span=jitter_span)


def apply_injury_loss(state: "SimulationState", player: Player, loss: float) -> None:
    current = state.player_stamina.get(player.id, float(player.stamina))
    state.player_stamina[player.id] = max(0.0, current - loss)
