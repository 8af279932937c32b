"""Weather conditions and the multipliers they apply to play."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union


class Weather(str, Enum):
    CLEAR = 'clear'
    RAIN = 'rain'
    SNOW = 'snow'
    WIND = 'wind'

    @classmethod
    def parse(cls, value: Union[str, "Weather"]) -> "Weather":
        """Accept either a member or its string value.

        Raises:
            ValueError: unknown weather name.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(w.value for w in cls)
            raise ValueError(f"Unknown weather {value!r} (expected one of: {valid})") from None

    @property
    def is_slippery(self) -> bool:
        return self in (Weather.RAIN, Weather.SNOW)


@dataclass(frozen=True)
class WeatherEffects:
    passing_accuracy: float  # multiplier
    shot_accuracy: float     # multiplier
    stamina_drain: float     # multiplier
    long_ball_bonus: float   # additive


WEATHER_EFFECTS: Dict[Weather, WeatherEffects] = {
    Weather.CLEAR: WeatherEffects(passing_accuracy=1.0, shot_accuracy=1.0, stamina_drain=1.0, long_ball_bonus=0.0),
    Weather.RAIN: WeatherEffects(passing_accuracy=0.9, shot_accuracy=0.85, stamina_drain=1.1, long_ball_bonus=-0.1),
    Weather.SNOW: WeatherEffects(passing_accuracy=0.8, shot_accuracy=0.75, stamina_drain=1.25, long_ball_bonus=-0.2),
    Weather.WIND: WeatherEffects(passing_accuracy=0.95, shot_accuracy=0.9, stamina_drain=1.05, long_ball_bonus=0.15),
}

_DESCRIPTIONS: Dict[Weather, str] = {
    Weather.CLEAR: 'Perfect playing conditions with clear skies',
    Weather.RAIN: 'Light rain making the pitch slippery',
    Weather.SNOW: 'Heavy snow affecting visibility and ball control',
    Weather.WIND: 'Strong winds affecting long passes and shots',
}


def get_weather_effects(weather: Union[str, Weather]) -> WeatherEffects:
    return WEATHER_EFFECTS[Weather.parse(weather)]


def apply_weather_modifier(base_value: float, weather: Union[str, Weather], effect: str) -> float:
    """Apply one weather effect to a value.

    ``long_ball_bonus`` is added, every other effect multiplies.

    Args:
        base_value: Value before weather is taken into account.
        weather: Weather member or name.
        effect: Field name of :class:`WeatherEffects`.

    Returns:
        Adjusted value.
    """
    effects = get_weather_effects(weather)
    if not hasattr(effects, effect):
        raise ValueError(f"Unknown weather effect {effect!r}")
    modifier = getattr(effects, effect)
    if effect == 'long_ball_bonus':
        return base_value + modifier
    return base_value * modifier


def get_weather_description(weather: Union[str, Weather]) -> str:
    return _DESCRIPTIONS[Weather.parse(weather)]
