"""Player snapshot consumed by the match engine."""
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional


@dataclass
class PlayerAttributes:
    """
    Attribute ratings on the 1-20 scale.

    Goalkeeper attributes (handling, reflexes, kicking) are optional and stay
    ``None`` for outfield players.
    """
    # technical
    finishing: int = 10
    passing: int = 10
    crossing: int = 10
    dribbling: int = 10
    technique: int = 10
    # physical
    pace: int = 10
    strength: int = 10
    stamina: int = 10
    # mental
    decisions: int = 10
    positioning: int = 10
    anticipation: int = 10
    # defensive
    tackling: int = 10
    marking: int = 10
    # goalkeeping
    handling: Optional[int] = None
    reflexes: Optional[int] = None
    kicking: Optional[int] = None

    def average(self) -> float:
        values = [getattr(self, f.name) for f in fields(self)]
        values = [v for v in values if v is not None]
        return sum(values) / len(values) if values else 10.0

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PlayerAttributes":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})


@dataclass
class Player:
    """
    A rostered player. The engine only reads it; in-match stamina lives in
    the simulation state, never on this object.

    Attributes:
        id: Unique player identifier (unique across both teams of a match)
        name: Display name used in event descriptions
        position: Position code (GK, DF, MF, FW, ST, AM, LM, RM, ...)
        attributes: 1-20 attribute ratings
        stamina: Base stamina 0-100; starting value and ceiling for the match
        morale: 0-100
        condition: 0-100
    """
    id: str
    name: str
    position: str
    attributes: PlayerAttributes = field(default_factory=PlayerAttributes)
    stamina: float = 90.0
    morale: float = 75.0
    condition: float = 95.0

    def is_goalkeeper(self) -> bool:
        return (self.position or '').upper() == 'GK'

    def get_overall_rating(self) -> float:
        """Attribute average mapped from the 1-20 scale to 0-100."""
        return self.attributes.average() * 5.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        return cls(
            id=str(data['id']),
            name=data.get('name', 'Anon'),
            position=data.get('position', 'MF'),
            attributes=PlayerAttributes.from_dict(data.get('attributes')),
            stamina=float(data.get('stamina', 90.0)),
            morale=float(data.get('morale', 75.0)),
            condition=float(data.get('condition', 95.0)),
        )
