"""Pure rating collaborators: team + tactics in, scalar modifiers out."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict

from models.team import TacticalSetup, Team
from core_sim.utils import clamp


@dataclass(frozen=True)
class FormationModifiers:
    attack: float
    defense: float
    midfield: float
    width: float
    pressing: float


FORMATION_MODIFIERS: Dict[str, FormationModifiers] = {
    '4-4-2': FormationModifiers(attack=0.0, defense=0.1, midfield=-0.05, width=0.0, pressing=0.0),
    '4-3-3': FormationModifiers(attack=0.15, defense=-0.1, midfield=0.05, width=0.1, pressing=0.1),
    '3-5-2': FormationModifiers(attack=0.05, defense=-0.05, midfield=0.15, width=-0.1, pressing=0.05),
}

MENTALITY_MODIFIERS: Dict[str, Dict[str, float]] = {
    'defensive': {'attack': -0.2, 'defense': 0.3, 'possession': -0.1, 'pressing': -0.15},
    'balanced': {'attack': 0.0, 'defense': 0.0, 'possession': 0.0, 'pressing': 0.0},
    'attacking': {'attack': 0.3, 'defense': -0.15, 'possession': 0.1, 'pressing': 0.1},
}

PRESSING_MODIFIERS: Dict[str, Dict[str, float]] = {
    'low': {'ball_recovery': -0.2, 'stamina_drain': 0.7, 'passing_accuracy': 0.1},
    'medium': {'ball_recovery': 0.0, 'stamina_drain': 1.0, 'passing_accuracy': 0.0},
    'high': {'ball_recovery': 0.3, 'stamina_drain': 1.4, 'passing_accuracy': -0.15},
}

TEMPO_MODIFIERS: Dict[str, Dict[str, float]] = {
    'slow': {'pass_accuracy': 0.15, 'chance_creation': -0.1, 'stamina_drain': 0.8},
    'medium': {'pass_accuracy': 0.0, 'chance_creation': 0.0, 'stamina_drain': 1.0},
    'fast': {'pass_accuracy': -0.1, 'chance_creation': 0.2, 'stamina_drain': 1.2},
}

WIDTH_MODIFIERS: Dict[str, Dict[str, float]] = {
    'narrow': {'central_play': 0.2, 'crossing_bonus': -0.3, 'compactness': 0.15},
    'normal': {'central_play': 0.0, 'crossing_bonus': 0.0, 'compactness': 0.0},
    'wide': {'central_play': -0.1, 'crossing_bonus': 0.25, 'compactness': -0.1},
}

RATING_FLOOR = 20.0
RATING_CEILING = 200.0


def calculate_attack_rating(team: Team) -> float:
    t = team.tactics
    formation = FORMATION_MODIFIERS[t.formation]
    mentality = MENTALITY_MODIFIERS[t.mentality]
    rating = team.overall_rating * (1 + formation.attack + mentality['attack'])
    rating *= 1 + TEMPO_MODIFIERS[t.tempo]['chance_creation']
    return clamp(rating, RATING_FLOOR, RATING_CEILING)


def calculate_defense_rating(team: Team) -> float:
    t = team.tactics
    formation = FORMATION_MODIFIERS[t.formation]
    mentality = MENTALITY_MODIFIERS[t.mentality]
    rating = team.overall_rating * (1 + formation.defense + mentality['defense'])
    rating *= 1 + PRESSING_MODIFIERS[t.pressing]['ball_recovery'] * 0.5
    return clamp(rating, RATING_FLOOR, RATING_CEILING)


def calculate_midfield_rating(team: Team) -> float:
    t = team.tactics
    rating = team.overall_rating * (1 + FORMATION_MODIFIERS[t.formation].midfield)
    # possession-minded sides control the middle better
    if t.mentality == 'balanced' or t.tempo == 'slow':
        rating *= 1.1
    return clamp(rating, RATING_FLOOR, RATING_CEILING)


def calculate_stamina_drain(team: Team, minute: int, intensity: float) -> float:
    """
    Stamina drained per tick by each player of ``team``.

    Args:
        team: Team whose tactics set the workload
        minute: Current match minute
        intensity: Current match intensity (20-100)

    Returns:
        Drain in stamina points before per-player jitter
    """
    t = team.tactics
    drain = 1.0
    if t.formation == '3-5-2':
        drain *= 1.1  # wing-backs cover more ground
    drain *= PRESSING_MODIFIERS[t.pressing]['stamina_drain']
    drain *= TEMPO_MODIFIERS[t.tempo]['stamina_drain']
    if t.mentality == 'attacking':
        drain *= 1.15
    elif t.mentality == 'defensive':
        drain *= 0.9

    intensity_mult = 0.5 + (intensity / 100.0) * 0.8  # 0.5 .. 1.3
    if minute > 75:
        time_mult = 1.3
    elif minute > 60:
        time_mult = 1.1
    else:
        time_mult = 1.0
    return drain * intensity_mult * time_mult


def calculate_possession_tendency(team: Team) -> float:
    t = team.tactics
    tendency = 0.5 + MENTALITY_MODIFIERS[t.mentality]['possession']
    if t.tempo == 'slow':
        tendency += 0.1
    elif t.tempo == 'fast':
        tendency -= 0.05
    if t.formation == '3-5-2':
        tendency += 0.05
    elif t.formation == '4-3-3':
        tendency -= 0.03
    return clamp(tendency, 0.2, 0.8)


def get_tactical_matchup(home_team: Team, away_team: Team) -> Dict[str, float]:
    """Edge one setup holds over the other, as ``{'home_advantage', 'away_advantage'}``."""
    home_adv = 0.0
    away_adv = 0.0
    hf, af = home_team.tactics.formation, away_team.tactics.formation

    if hf == '4-3-3' and af == '4-4-2':
        home_adv += 0.1
    elif hf == '4-4-2' and af == '4-3-3':
        away_adv += 0.1

    if hf == '3-5-2' and af == '4-4-2':
        home_adv += 0.08
    elif hf == '4-4-2' and af == '3-5-2':
        away_adv += 0.08

    if hf == '4-3-3' and af == '3-5-2':
        home_adv += 0.05
    elif hf == '3-5-2' and af == '4-3-3':
        away_adv += 0.05

    hm, am = home_team.tactics.mentality, away_team.tactics.mentality
    if hm == 'attacking' and am == 'defensive':
        home_adv += 0.12
    elif hm == 'defensive' and am == 'attacking':
        away_adv += 0.12

    if home_team.tactics.pressing == 'high' and away_team.tactics.tempo == 'slow':
        home_adv += 0.08
    elif home_team.tactics.pressing == 'low' and away_team.tactics.tempo == 'fast':
        away_adv += 0.08

    return {'home_advantage': home_adv, 'away_advantage': away_adv}


def get_tactical_xg_modifier(team: Team, shot_type: str = 'shot') -> float:
    t = team.tactics
    modifier = 1.0 + FORMATION_MODIFIERS[t.formation].attack * 0.5
    if shot_type == 'header' and t.width == 'wide':
        modifier += 0.15
    if shot_type == 'shot' and t.formation == '4-3-3':
        modifier += 0.08
    modifier += MENTALITY_MODIFIERS[t.mentality]['attack'] * 0.3
    return clamp(modifier, 0.5, 2.0)


def get_default_tactics(formation: str) -> TacticalSetup:
    return TacticalSetup(formation=formation)


def validate_tactics(tactics: TacticalSetup) -> bool:
    return tactics.is_valid()
