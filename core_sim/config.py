from __future__ import annotations
import copy
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml


DEFAULTS: Dict[str, Any] = {
    'match': {
        'minutes_per_half': 45,
        'ticks_per_minute': 4,
        'home_advantage': 0.10,
        'start_intensity': 50,
    },
    'events': {
        'base_probability': 0.15,
        'max_probability': 0.4,
        'late_minute': 80,
        'late_mult': 1.3,
        'early_minute': 10,
        'early_mult': 1.1,
        'adverse_weather_mult': 1.1,
        'weights': {'shot': 20, 'chance': 15, 'foul': 10, 'injury': 1, 'corner': 8, 'nothing': 46},
        'advantage_threshold': 20,
        'advantage_bonus': {'shot': 10, 'chance': 5},
        'disadvantage_bonus': {'shot': -5, 'foul': 5},
        'late_bonus': {'shot': 5, 'foul': 3},
        'slippery_bonus': {'foul': 3, 'shot': -2},
    },
    'shots': {
        'attacking_positions': ['ST', 'AM', 'LM', 'RM'],
        'on_target_ratio': 0.4,
    },
    'xg': {
        'base': 0.10,
        'quality_weight': 0.05,
        'position_min': 0.8,
        'position_span': 0.4,
        'momentum_weight': 0.001,
        'min': 0.01,
        'max': 0.8,
    },
    'fouls': {'yellow_prob': 0.15, 'red_prob': 0.02},
    'corners': {'shot_prob': 0.30},
    'injuries': {'stamina_loss': 20.0},
    'possession': {'change_prob': 0.10, 'momentum_bias': 0.002},
    'passing': {'base_accuracy': 0.8, 'max_attempts_exclusive': 3},
    'momentum': {'goal_swing': 20, 'chance_swing': 5, 'limit': 100},
    'intensity': {
        'min': 20,
        'max': 100,
        'goal_boost': 15,
        'late_minute': 60,
        'close_margin': 1,
        'close_boost': 2,
        'blowout_margin': 3,
        'blowout_floor': 30,
        'stoppage_boost': 20,
    },
    'stamina': {'jitter_min': 0.8, 'jitter_span': 0.4},
    'stoppage': {
        'base': 2.0,
        'per_goal': 0.5,
        'per_card': 0.3,
        'per_injury': 1.0,
        'min': 1,
        'max': 8,
    },
}


def merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge ``b`` over ``a`` without touching either input."""
    out = copy.deepcopy(a)
    for k, v in (b or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = merge(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out


@dataclass
class EngineConfig:
    data: Dict[str, Any] = field(default_factory=lambda: copy.deepcopy(DEFAULTS))

    def get(self, path: str, default: Any = None) -> Any:
        cur: Any = self.data
        for part in path.split('.'):
            if isinstance(cur, dict) and part in cur:
                cur = cur[part]
            else:
                return default
        return cur

    def number(self, path: str, default: float) -> float:
        """Dotted lookup coerced to float; falls back to ``default`` on junk values."""
        value = self.get(path, default)
        try:
            return float(value)
        except (TypeError, ValueError):
            return float(default)


_GLOBAL_CONFIG: Optional[EngineConfig] = None


def load_config(path: str = 'engine_config.yml') -> EngineConfig:
    global _GLOBAL_CONFIG
    cfg = EngineConfig()
    if os.path.exists(path):
        with open(path, 'r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"{path}: top-level YAML node must be a mapping")
        cfg.data = merge(DEFAULTS, loaded)
    _GLOBAL_CONFIG = cfg
    return cfg


def get_config() -> EngineConfig:
    global _GLOBAL_CONFIG
    if _GLOBAL_CONFIG is None:
        _GLOBAL_CONFIG = load_config()
    return _GLOBAL_CONFIG


def reset_config() -> None:
    """Drop the cached config so the next ``get_config`` reloads it."""
    global _GLOBAL_CONFIG
    _GLOBAL_CONFIG = None
