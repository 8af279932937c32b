"""
Weighted event selection and the per-category handlers that apply an event
to the simulation state.

Every handler consumes randomness only from the PRNG it is given, so the
order of draws inside a handler is part of the reproducibility contract.
"""
from __future__ import annotations
import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, TYPE_CHECKING

from models.player import Player
from models.team import Team
from core_sim.events import EventType
from core_sim.fatigue import apply_injury_loss
from core_sim.flow import boost_intensity, swing_momentum, update_possession
from core_sim.tactics import calculate_attack_rating, calculate_defense_rating
from core_sim.utils import other_side
from core_sim.xg import calculate_xg

if TYPE_CHECKING:
    from core_sim.prng import Prng
    from core_sim.state import MatchContext, SimulationState

logger = logging.getLogger(__name__)


class EventCategory(str, Enum):
    # declaration order is the selection order
    SHOT = 'shot'
    CHANCE = 'chance'
    FOUL = 'foul'
    INJURY = 'injury'
    CORNER = 'corner'
    NOTHING = 'nothing'


def calculate_event_weights(state: "SimulationState", ctx: "MatchContext") -> Dict[EventCategory, float]:
    cfg = ctx.config
    base = cfg.get('events.weights', {}) or {}
    weights = {c: float(base.get(c.value, 0)) for c in EventCategory}

    def bump(bonus_path: str) -> None:
        for name, delta in (cfg.get(bonus_path, {}) or {}).items():
            cat = EventCategory(name)
            weights[cat] += float(delta)

    attacking = ctx.team(state.possession)
    defending = ctx.opponent(state.possession)
    advantage = calculate_attack_rating(attacking) - calculate_defense_rating(defending)
    threshold = cfg.number('events.advantage_threshold', 20)
    if advantage > threshold:
        bump('events.advantage_bonus')
    elif advantage < -threshold:
        bump('events.disadvantage_bonus')

    if state.minute > cfg.number('events.late_minute', 80):
        bump('events.late_bonus')
    if ctx.weather.is_slippery:
        bump('events.slippery_bonus')
    return weights


def select_weighted_event(weights: Dict[EventCategory, float], prng: "Prng") -> EventCategory:
    total = sum(weights.get(c, 0.0) for c in EventCategory)
    r = prng.next() * total
    for category in EventCategory:
        r -= weights.get(category, 0.0)
        if r <= 0:
            return category
    return EventCategory.NOTHING


def _pick_player(players: List[Player], prng: "Prng") -> Player:
    return players[prng.int(0, len(players))]


def _pick_shooter(team: Team, ctx: "MatchContext", prng: "Prng") -> Optional[Player]:
    positions = ctx.config.get('shots.attacking_positions', ['ST', 'AM', 'LM', 'RM'])
    attackers = team.get_players_by_position(*positions)
    if attackers:
        return _pick_player(attackers, prng)
    if team.players:
        return team.players[0]
    return None


def handle_shot(state: "SimulationState", ctx: "MatchContext", prng: "Prng", side: str) -> None:
    cfg = ctx.config
    team = ctx.team(side)
    shooter = _pick_shooter(team, ctx, prng)
    if shooter is None:
        logger.warning("%s has no players; skipping shot at %d'", team.name, state.minute)
        return

    xg = calculate_xg(state, ctx, prng, side)
    stats = state.stats
    stats.shots[side] += 1
    stats.xg[side] += xg

    on_target = prng.next() < cfg.number('shots.on_target_ratio', 0.4) * (1 + xg)
    is_goal = prng.next() < xg
    if on_target:
        stats.shots_on_target[side] += 1

    if is_goal:
        state.add_goal(side)
        state.emit(EventType.GOAL, side, shooter.name,
                   f"GOAL! {shooter.name} scores for {team.name}!", xg=xg)
        swing_momentum(state, side, cfg.number('momentum.goal_swing', 20), cfg)
        boost_intensity(state, cfg.number('intensity.goal_boost', 15), cfg)
    elif on_target:
        state.emit(EventType.SHOT, side, shooter.name,
                   f"{shooter.name} forces a save from the keeper", xg=xg)
    else:
        state.emit(EventType.SHOT, side, shooter.name, f"{shooter.name} shoots wide", xg=xg)

    state.possession = other_side(side)


def handle_chance(state: "SimulationState", ctx: "MatchContext", prng: "Prng", side: str) -> None:
    team = ctx.team(side)
    if not team.players:
        logger.warning("%s has no players; skipping chance at %d'", team.name, state.minute)
        return
    player = _pick_player(team.players, prng)
    state.emit(EventType.CHANCE, side, player.name, f"Good chance for {player.name}")
    swing_momentum(state, side, ctx.config.number('momentum.chance_swing', 5), ctx.config)


def handle_foul(state: "SimulationState", ctx: "MatchContext", prng: "Prng", side: str) -> None:
    """``side`` is the team in possession; the other side commits the foul."""
    cfg = ctx.config
    fouling = other_side(side)
    team = ctx.team(fouling)
    if not team.players:
        logger.warning("%s has no players; skipping foul at %d'", team.name, state.minute)
        return
    player = _pick_player(team.players, prng)
    state.stats.fouls[fouling] += 1
    state.emit(EventType.FOUL, fouling, player.name, f"Foul by {player.name}")

    card = prng.next()
    if card < cfg.number('fouls.red_prob', 0.02):
        state.stats.red_cards[fouling] += 1
        state.emit(EventType.RED_CARD, fouling, player.name, f"Red card! {player.name} is sent off")
    elif card < cfg.number('fouls.yellow_prob', 0.15):
        state.stats.yellow_cards[fouling] += 1
        state.emit(EventType.YELLOW_CARD, fouling, player.name, f"Yellow card for {player.name}")

    state.possession = side


def handle_injury(state: "SimulationState", ctx: "MatchContext", prng: "Prng", side: str) -> None:
    injured_side = 'home' if prng.next() < 0.5 else 'away'
    team = ctx.team(injured_side)
    if not team.players:
        logger.warning("%s has no players; skipping injury at %d'", team.name, state.minute)
        return
    player = _pick_player(team.players, prng)
    state.emit(EventType.INJURY, injured_side, player.name, f"{player.name} is down injured")
    apply_injury_loss(state, player, ctx.config.number('injuries.stamina_loss', 20.0))


def handle_corner(state: "SimulationState", ctx: "MatchContext", prng: "Prng", side: str) -> None:
    team = ctx.team(side)
    state.stats.corners[side] += 1
    state.emit(EventType.CORNER, side, None, f"Corner kick for {team.name}")
    if prng.next() < ctx.config.number('corners.shot_prob', 0.30):
        handle_shot(state, ctx, prng, side)


def handle_nothing(state: "SimulationState", ctx: "MatchContext", prng: "Prng", side: str) -> None:
    update_possession(state, ctx, prng)


Handler = Callable[["SimulationState", "MatchContext", "Prng", str], None]

EVENT_HANDLERS: Dict[EventCategory, Handler] = {
    EventCategory.SHOT: handle_shot,
    EventCategory.CHANCE: handle_chance,
    EventCategory.FOUL: handle_foul,
    EventCategory.INJURY: handle_injury,
    EventCategory.CORNER: handle_corner,
    EventCategory.NOTHING: handle_nothing,
}


def generate_event(state: "SimulationState", ctx: "MatchContext", prng: "Prng") -> EventCategory:
    """Pick one category for the side in possession and apply it. Returns the category."""
    category = select_weighted_event(calculate_event_weights(state, ctx), prng)
    EVENT_HANDLERS[category](state, ctx, prng, state.possession)
    return category
