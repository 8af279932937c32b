from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from models.team import Team
from core_sim.config import EngineConfig
from core_sim.events import EventType, MatchEvent
from core_sim.flow import boost_intensity, flip_possession
from core_sim.prng import Prng, Seed, derive_prng
from core_sim.state import MatchContext, SimulationState
from core_sim.stats import MatchStats
from core_sim.tick import simulate_minute
from core_sim.utils import clamp, round_half_up
from core_sim.weather import Weather

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchResult:
    home_score: int
    away_score: int
    stats: MatchStats
    events: Tuple[MatchEvent, ...]
    duration: int
    stoppage_time: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'home_score': self.home_score,
            'away_score': self.away_score,
            'stats': self.stats.to_dict(),
            'events': [e.to_dict() for e in self.events],
            'duration': self.duration,
            'stoppage_time': self.stoppage_time,
        }


def calculate_stoppage_time(state: SimulationState, ctx: MatchContext, prng: Prng) -> int:
    """
    Added time in whole minutes: a base plus extra for goals, cards and
    injuries, jittered by up to one minute either way.
    """
    cfg = ctx.config
    raw = (
        cfg.number('stoppage.base', 2.0)
        + cfg.number('stoppage.per_goal', 0.5) * state.goals
        + cfg.number('stoppage.per_card', 0.3) * state.stats.total_cards()
        + cfg.number('stoppage.per_injury', 1.0) * state.count_events(EventType.INJURY)
        + (prng.next() * 2 - 1)
    )
    return int(clamp(round_half_up(raw), cfg.number('stoppage.min', 1), cfg.number('stoppage.max', 8)))


def simulate_match(
    seed: Seed,
    home_team: Team,
    away_team: Team,
    weather: Union[str, Weather] = 'clear',
    *,
    home_team_id: Optional[str] = None,
    away_team_id: Optional[str] = None,
    config: Optional[EngineConfig] = None,
) -> MatchResult:
    """
    Simulate a full match.

    Args:
        seed: Match seed; same seed and inputs give the same result
        home_team: Home side (never mutated)
        away_team: Away side (never mutated)
        weather: Weather name or member
        home_team_id: Identifier used in the PRNG key, defaults to ``home_team.id``
        away_team_id: Identifier used in the PRNG key, defaults to ``away_team.id``
        config: Engine configuration, defaults to the cached global config

    Returns:
        MatchResult with final score, stats snapshot and event log

    Raises:
        ValueError: unknown weather
    """
    ctx = MatchContext.build(seed, home_team, away_team, weather, config)
    home_id = home_team_id if home_team_id is not None else home_team.id
    away_id = away_team_id if away_team_id is not None else away_team.id
    prng = derive_prng('match', seed, home_id, away_id)
    state = SimulationState.kickoff(ctx)
    cfg = ctx.config

    logger.info("Kick-off: %s vs %s (seed=%s, weather=%s)",
                home_team.name, away_team.name, seed, ctx.weather.value)

    half = int(cfg.number('match.minutes_per_half', 45))
    for minute in range(0, half):
        simulate_minute(state, ctx, prng, minute)
    flip_possession(state)
    for minute in range(half, 2 * half):
        simulate_minute(state, ctx, prng, minute)

    stoppage = calculate_stoppage_time(state, ctx, prng)
    logger.debug("Stoppage time: %d min", stoppage)
    boost_intensity(state, cfg.number('intensity.stoppage_boost', 20), cfg)
    for minute in range(2 * half, 2 * half + stoppage):
        simulate_minute(state, ctx, prng, minute, update_flow=False)

    state.stats.normalise_possession()

    logger.info("Full time: %s %d-%d %s (%d events)",
                home_team.name, state.home_score, state.away_score, away_team.name, len(state.events))
    return MatchResult(
        home_score=state.home_score,
        away_score=state.away_score,
        stats=state.stats.copy(),
        events=tuple(state.events),
        duration=2 * half + stoppage,
        stoppage_time=stoppage,
    )
