"""Team and tactical setup snapshots."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from models.player import Player

FORMATIONS = ('4-4-2', '4-3-3', '3-5-2')
MENTALITIES = ('defensive', 'balanced', 'attacking')
PRESSING_LEVELS = ('low', 'medium', 'high')
TEMPOS = ('slow', 'medium', 'fast')
WIDTHS = ('narrow', 'normal', 'wide')


@dataclass
class TacticalSetup:
    formation: str = '4-4-2'
    mentality: str = 'balanced'   # defensive, balanced, attacking
    pressing: str = 'medium'      # low, medium, high
    tempo: str = 'medium'         # slow, medium, fast
    width: str = 'normal'         # narrow, normal, wide

    def is_valid(self) -> bool:
        return (
            self.formation in FORMATIONS
            and self.mentality in MENTALITIES
            and self.pressing in PRESSING_LEVELS
            and self.tempo in TEMPOS
            and self.width in WIDTHS
        )

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "TacticalSetup":
        data = data or {}
        return cls(
            formation=data.get('formation', '4-4-2'),
            mentality=data.get('mentality', 'balanced'),
            pressing=data.get('pressing', 'medium'),
            tempo=data.get('tempo', 'medium'),
            width=data.get('width', 'normal'),
        )


@dataclass
class Team:
    """
    Team snapshot handed to the engine.

    Attributes:
        id: Team identifier, part of the match PRNG key
        name: Display name
        players: Roster; may be empty (events needing a player are skipped)
        tactics: Formation, mentality, pressing, tempo and width
        overall_rating: Team strength driving the rating collaborators
    """
    id: str
    name: str
    players: List[Player] = field(default_factory=list)
    tactics: TacticalSetup = field(default_factory=TacticalSetup)
    overall_rating: float = 100.0

    def __post_init__(self) -> None:
        if not self.tactics.is_valid():
            raise ValueError(f"Invalid tactical setup for {self.name}: {self.tactics}")

    def get_players_by_position(self, *positions: str) -> List[Player]:
        wanted = {p.upper() for p in positions}
        return [p for p in self.players if (p.position or '').upper() in wanted]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        name = data.get('name', 'Unknown Team')
        return cls(
            id=str(data.get('id', name)),
            name=name,
            players=[Player.from_dict(p) for p in data.get('players', [])],
            tactics=TacticalSetup.from_dict(data.get('tactics')),
            overall_rating=float(data.get('overall_rating', 100.0)),
        )
