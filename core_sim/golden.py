"""
Golden matches: fixed seeds and team setups with the metric ranges a healthy
engine is expected to land in. Used by ``main.py --golden`` and the test suite
to catch balance regressions.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from models.player import Player, PlayerAttributes
from models.team import TacticalSetup, Team
from core_sim.match import MatchResult, simulate_match

logger = logging.getLogger(__name__)

Range = Tuple[float, float]


@dataclass
class GoldenMatch:
    id: str
    description: str
    seed: int
    home_team: Team
    away_team: Team
    weather: str
    expected_ranges: Dict[str, Range]


@dataclass
class GoldenValidation:
    passed: bool
    failures: List[str] = field(default_factory=list)
    metrics: Dict[str, float] = field(default_factory=dict)


@dataclass
class GoldenRun:
    match: GoldenMatch
    result: MatchResult
    validation: GoldenValidation


@dataclass
class GoldenSummary:
    passed: int
    failed: int
    results: List[GoldenRun]


def _base_attributes(level: int, **boosts: int) -> PlayerAttributes:
    attrs = PlayerAttributes(
        finishing=level, passing=level, crossing=level, dribbling=level, technique=level,
        pace=level, strength=level, stamina=level, decisions=level, positioning=level,
        anticipation=level, tackling=level, marking=level,
    )
    for name, bonus in boosts.items():
        setattr(attrs, name, level + bonus)
    return attrs


def _player(pid: str, name: str, position: str, attributes: PlayerAttributes) -> Player:
    return Player(id=pid, name=name, position=position, attributes=attributes,
                  stamina=90.0, morale=80.0, condition=95.0)


def build_test_team(team_id: str, name: str, overall_rating: float, formation: str = '4-4-2',
                    **tactics: str) -> Team:
    """
    Standard 1-4-4-2 test roster whose attributes scale with ``overall_rating``
    (rating 80 -> attribute level 8). Extra keyword arguments override the
    balanced default tactics.
    """
    level = int(overall_rating // 10)
    players = [_player(f"{team_id}-GK1", 'Test Keeper', 'GK',
                       _base_attributes(level, positioning=1, anticipation=1))]
    players[0].attributes.handling = level + 2
    players[0].attributes.reflexes = level + 2
    players[0].attributes.kicking = level
    for i in range(1, 5):
        players.append(_player(f"{team_id}-DF{i}", f"Test Defender {i}", 'DF',
                               _base_attributes(level, tackling=2, marking=2, strength=1, positioning=1)))
    for i in range(1, 5):
        players.append(_player(f"{team_id}-MF{i}", f"Test Midfielder {i}", 'MF',
                               _base_attributes(level, passing=2, technique=1, decisions=1, stamina=2)))
    for i in range(1, 3):
        players.append(_player(f"{team_id}-FW{i}", f"Test Forward {i}", 'FW',
                               _base_attributes(level, finishing=3, pace=2, dribbling=1, positioning=2)))
    setup = TacticalSetup(formation=formation, **tactics)
    return Team(id=team_id, name=name, players=players, tactics=setup, overall_rating=float(overall_rating))


GOLDEN_MATCHES: List[GoldenMatch] = [
    GoldenMatch(
        id='GM-001',
        description='Evenly matched teams (4-4-2 vs 4-4-2) - Clear weather',
        seed=42,
        home_team=build_test_team('HOME-001', 'Home United', 100, '4-4-2'),
        away_team=build_test_team('AWAY-001', 'Away City', 100, '4-4-2'),
        weather='clear',
        expected_ranges={'home_score': (0, 4), 'away_score': (0, 4), 'home_xg': (0.8, 2.5),
                         'away_xg': (0.6, 2.2), 'home_possession': (45, 60), 'events': (8, 25)},
    ),
    GoldenMatch(
        id='GM-002',
        description='Strong home team vs weak away team - Rain conditions',
        seed=99,
        home_team=build_test_team('HOME-002', 'Strong FC', 140, '4-3-3'),
        away_team=build_test_team('AWAY-002', 'Weak United', 80, '4-4-2'),
        weather='rain',
        expected_ranges={'home_score': (1, 5), 'away_score': (0, 2), 'home_xg': (1.2, 3.5),
                         'away_xg': (0.3, 1.5), 'home_possession': (55, 75), 'events': (10, 30)},
    ),
    GoldenMatch(
        id='GM-003',
        description='Defensive vs Attacking formations - Snow weather',
        seed=7,
        home_team=build_test_team('HOME-003', 'Defensive FC', 110, '3-5-2',
                                  mentality='defensive', pressing='low'),
        away_team=build_test_team('AWAY-003', 'Attacking United', 110, '4-3-3',
                                  mentality='attacking', pressing='high'),
        weather='snow',
        expected_ranges={'home_score': (0, 3), 'away_score': (0, 3), 'home_xg': (0.5, 2.0),
                         'away_xg': (0.8, 2.8), 'home_possession': (35, 50), 'events': (12, 35)},
    ),
    GoldenMatch(
        id='GM-004',
        description='High-intensity match - Windy conditions',
        seed=123,
        home_team=build_test_team('HOME-004', 'Fast FC', 120, '4-3-3', tempo='fast', pressing='high'),
        away_team=build_test_team('AWAY-004', 'Counter United', 115, '4-4-2', tempo='fast'),
        weather='wind',
        expected_ranges={'home_score': (1, 4), 'away_score': (0, 3), 'home_xg': (1.0, 3.2),
                         'away_xg': (0.6, 2.5), 'home_possession': (50, 65), 'events': (15, 35)},
    ),
    GoldenMatch(
        id='GM-005',
        description='Low-scoring tactical battle',
        seed=456,
        home_team=build_test_team('HOME-005', 'Solid FC', 95, '4-4-2', mentality='defensive', tempo='slow'),
        away_team=build_test_team('AWAY-005', 'Cautious City', 95, '4-4-2', mentality='defensive', tempo='slow'),
        weather='clear',
        expected_ranges={'home_score': (0, 2), 'away_score': (0, 2), 'home_xg': (0.3, 1.5),
                         'away_xg': (0.2, 1.2), 'home_possession': (45, 55), 'events': (6, 20)},
    ),
    GoldenMatch(
        id='GM-006',
        description='Wide play vs narrow formation',
        seed=789,
        home_team=build_test_team('HOME-006', 'Wide FC', 105, '4-3-3', width='wide'),
        away_team=build_test_team('AWAY-006', 'Narrow United', 105, '3-5-2', width='narrow', pressing='high'),
        weather='clear',
        expected_ranges={'home_score': (0, 3), 'away_score': (0, 3), 'home_xg': (0.8, 2.5),
                         'away_xg': (0.7, 2.3), 'home_possession': (48, 62), 'events': (10, 28)},
    ),
    GoldenMatch(
        id='GM-007',
        description='Stamina test - High pressing vs slow tempo',
        seed=321,
        home_team=build_test_team('HOME-007', 'Press FC', 100, '4-3-3', pressing='high', tempo='fast'),
        away_team=build_test_team('AWAY-007', 'Patient United', 100, '4-4-2', tempo='slow', pressing='low'),
        weather='clear',
        expected_ranges={'home_score': (0, 4), 'away_score': (0, 3), 'home_xg': (0.9, 2.8),
                         'away_xg': (0.5, 2.0), 'home_possession': (52, 68), 'events': (12, 30)},
    ),
    GoldenMatch(
        id='GM-008',
        description='Quality mismatch - Clear conditions',
        seed=654,
        home_team=build_test_team('HOME-008', 'Elite FC', 160, '4-3-3'),
        away_team=build_test_team('AWAY-008', 'Amateur United', 60, '4-4-2'),
        weather='clear',
        expected_ranges={'home_score': (2, 6), 'away_score': (0, 2), 'home_xg': (2.0, 4.5),
                         'away_xg': (0.1, 1.0), 'home_possession': (65, 80), 'events': (15, 40)},
    ),
    GoldenMatch(
        id='GM-009',
        description='Formation counter - 3-5-2 vs 4-3-3',
        seed=987,
        home_team=build_test_team('HOME-009', 'Midfield FC', 110, '3-5-2'),
        away_team=build_test_team('AWAY-009', 'Wings United', 110, '4-3-3'),
        weather='rain',
        expected_ranges={'home_score': (0, 3), 'away_score': (0, 4), 'home_xg': (0.6, 2.2),
                         'away_xg': (0.8, 2.6), 'home_possession': (48, 62), 'events': (8, 25)},
    ),
    GoldenMatch(
        id='GM-010',
        description='Late drama potential - Balanced teams',
        seed=147,
        home_team=build_test_team('HOME-010', 'Drama FC', 105, '4-4-2'),
        away_team=build_test_team('AWAY-010', 'Thriller United', 105, '4-4-2'),
        weather='wind',
        expected_ranges={'home_score': (0, 4), 'away_score': (0, 4), 'home_xg': (0.7, 2.8),
                         'away_xg': (0.5, 2.5), 'home_possession': (45, 58), 'events': (10, 30)},
    ),
]


def collect_metrics(result: MatchResult) -> Dict[str, float]:
    return {
        'home_score': result.home_score,
        'away_score': result.away_score,
        'home_xg': result.stats.xg.home,
        'away_xg': result.stats.xg.away,
        'home_possession': result.stats.possession.home,
        'events': len(result.events),
    }


def validate_golden_match(match: GoldenMatch, result: MatchResult) -> GoldenValidation:
    metrics = collect_metrics(result)
    failures: List[str] = []
    for key, (lo, hi) in match.expected_ranges.items():
        actual = metrics.get(key)
        if actual is None:
            failures.append(f"{key}: metric is undefined")
        elif actual < lo or actual > hi:
            failures.append(f"{key}: expected {lo}-{hi}, got {actual}")
    return GoldenValidation(passed=not failures, failures=failures, metrics=metrics)


def run_golden_match_tests(matches: Optional[List[GoldenMatch]] = None,
                           simulate: Callable[..., MatchResult] = simulate_match) -> GoldenSummary:
    runs: List[GoldenRun] = []
    passed = failed = 0
    for match in (GOLDEN_MATCHES if matches is None else matches):
        result = simulate(match.seed, match.home_team, match.away_team, match.weather)
        validation = validate_golden_match(match, result)
        runs.append(GoldenRun(match=match, result=result, validation=validation))
        if validation.passed:
            passed += 1
        else:
            failed += 1
            logger.info("%s outside expected ranges: %s", match.id, "; ".join(validation.failures))
    return GoldenSummary(passed=passed, failed=failed, results=runs)
