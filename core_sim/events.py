from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class EventType(str, Enum):
    GOAL = 'goal'
    SHOT = 'shot'
    CHANCE = 'chance'
    FOUL = 'foul'
    YELLOW_CARD = 'yellow_card'
    RED_CARD = 'red_card'
    INJURY = 'injury'
    CORNER = 'corner'


KEY_EVENT_TYPES = frozenset({EventType.GOAL, EventType.RED_CARD, EventType.INJURY})


@dataclass(frozen=True)
class MatchEvent:
    """
    One entry of the match log. Events are only ever appended, so ``minute``
    is non-decreasing in emission order.
    """
    minute: int
    type: EventType
    team: str                     # 'home' | 'away'
    player: Optional[str]
    description: str
    xg: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            'minute': self.minute,
            'type': self.type.value,
            'team': self.team,
            'player': self.player,
            'description': self.description,
        }
        if self.xg is not None:
            d['xg'] = self.xg
        return d
