"""Helper functions shared by the match engine."""
import math
from typing import Literal

Side = Literal['home', 'away']


def clamp(value: float, min_val: float, max_val: float) -> float:
    """
    Bound a value to ``[min_val, max_val]``.

    Args:
        value: Value to bound
        min_val: Lower bound
        max_val: Upper bound

    Returns:
        Bounded value
    """
    return max(min_val, min(max_val, value))


def other_side(side: str) -> Side:
    return 'away' if side == 'home' else 'home'


def side_sign(side: str) -> int:
    """+1 for home, -1 for away; momentum is measured from the home side."""
    return 1 if side == 'home' else -1


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding
    return math.floor(value + 0.5)
