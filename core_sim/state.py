from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from models.team import Team
from core_sim.config import EngineConfig
from core_sim.events import EventType, MatchEvent
from core_sim.prng import Seed
from core_sim.stats import MatchStats
from core_sim.weather import Weather


@dataclass(frozen=True)
class MatchContext:
    """Immutable inputs of one match, shared by every component of the call."""
    home: Team
    away: Team
    weather: Weather
    seed: Seed
    home_advantage: float = 0.10
    config: EngineConfig = field(default_factory=EngineConfig)

    @classmethod
    def build(cls, seed: Seed, home: Team, away: Team, weather: Union[str, Weather] = 'clear',
              config: Optional[EngineConfig] = None) -> "MatchContext":
        cfg = config or EngineConfig()
        return cls(
            home=home,
            away=away,
            weather=Weather.parse(weather),
            seed=seed,
            home_advantage=cfg.number('match.home_advantage', 0.10),
            config=cfg,
        )

    def team(self, side: str) -> Team:
        return self.home if side == 'home' else self.away

    def opponent(self, side: str) -> Team:
        return self.away if side == 'home' else self.home


@dataclass
class SimulationState:
    """Mutable state owned by a single ``simulate_match`` call."""
    minute: int = 0
    home_score: int = 0
    away_score: int = 0
    possession: str = 'home'
    intensity: int = 50
    momentum: int = 0
    player_stamina: Dict[str, float] = field(default_factory=dict)
    events: List[MatchEvent] = field(default_factory=list)
    stats: MatchStats = field(default_factory=MatchStats)

    @classmethod
    def kickoff(cls, ctx: MatchContext) -> "SimulationState":
        stamina: Dict[str, float] = {}
        for team in (ctx.home, ctx.away):
            for p in team.players:
                stamina[p.id] = float(p.stamina)
        return cls(
            intensity=int(ctx.config.number('match.start_intensity', 50)),
            player_stamina=stamina,
        )

    def add_goal(self, side: str) -> None:
        if side == 'home':
            self.home_score += 1
        else:
            self.away_score += 1

    @property
    def goals(self) -> int:
        return self.home_score + self.away_score

    @property
    def score_difference(self) -> int:
        return self.home_score - self.away_score

    def emit(self, type_: EventType, team: str, player: Optional[str], description: str,
             xg: Optional[float] = None) -> MatchEvent:
        event = MatchEvent(minute=self.minute, type=type_, team=team, player=player,
                           description=description, xg=xg)
        self.events.append(event)
        return event

    def count_events(self, type_: EventType) -> int:
        return sum(1 for e in self.events if e.type == type_)
