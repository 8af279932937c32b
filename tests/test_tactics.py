import pytest

from models.team import TacticalSetup, Team
from core_sim.tactics import (
    calculate_attack_rating,
    calculate_defense_rating,
    calculate_midfield_rating,
    calculate_possession_tendency,
    calculate_stamina_drain,
    get_default_tactics,
    get_tactical_matchup,
    get_tactical_xg_modifier,
    validate_tactics,
)


def _team(rating: float = 100.0, **tactics) -> Team:
    return Team(id="T", name="T", tactics=TacticalSetup(**tactics), overall_rating=rating)


def test_attack_rating_default_and_aggressive():
    assert calculate_attack_rating(_team()) == pytest.approx(100.0)
    aggressive = _team(formation="4-3-3", mentality="attacking", tempo="fast")
    assert calculate_attack_rating(aggressive) == pytest.approx(100 * 1.45 * 1.2)


def test_ratings_are_clamped():
    assert calculate_attack_rating(_team(190, formation="4-3-3", mentality="attacking")) == 200.0
    assert calculate_defense_rating(_team(15)) == 20.0


def test_defense_rating_uses_pressing():
    assert calculate_defense_rating(_team()) == pytest.approx(110.0)
    assert calculate_defense_rating(_team(pressing="high")) == pytest.approx(110.0 * 1.15)
    assert calculate_defense_rating(_team(mentality="defensive")) == pytest.approx(140.0)


def test_midfield_rating_bonus_for_balanced_or_slow():
    assert calculate_midfield_rating(_team()) == pytest.approx(95.0 * 1.1)
    assert calculate_midfield_rating(_team(mentality="attacking")) == pytest.approx(95.0)
    assert calculate_midfield_rating(_team(formation="3-5-2", mentality="attacking", tempo="slow")) == pytest.approx(115.0 * 1.1)


def test_stamina_drain_grows_late_and_with_workload():
    base = _team()
    assert calculate_stamina_drain(base, 10, 50) == pytest.approx(0.9)
    assert calculate_stamina_drain(base, 65, 50) == pytest.approx(0.99)
    assert calculate_stamina_drain(base, 80, 50) == pytest.approx(1.17)
    heavy = _team(formation="3-5-2", pressing="high", tempo="fast", mentality="attacking")
    light = _team(pressing="low", tempo="slow", mentality="defensive")
    assert calculate_stamina_drain(heavy, 30, 70) > calculate_stamina_drain(light, 30, 70)


def test_possession_tendency():
    assert calculate_possession_tendency(_team()) == pytest.approx(0.5)
    assert calculate_possession_tendency(_team(formation="3-5-2", mentality="defensive", tempo="slow")) == pytest.approx(0.55)
    assert calculate_possession_tendency(_team(formation="4-3-3", mentality="attacking", tempo="fast")) == pytest.approx(0.52)


def test_tactical_xg_modifier():
    assert get_tactical_xg_modifier(_team(), "shot") == pytest.approx(1.0)
    assert get_tactical_xg_modifier(_team(formation="4-3-3"), "shot") == pytest.approx(1.155)
    assert get_tactical_xg_modifier(_team(width="wide"), "header") == pytest.approx(1.15)
    assert get_tactical_xg_modifier(_team(mentality="defensive"), "shot") == pytest.approx(0.94)


def test_matchup_is_directional():
    m = get_tactical_matchup(_team(formation="4-3-3"), _team(formation="4-4-2"))
    assert m == pytest.approx({"home_advantage": 0.1, "away_advantage": 0.0})
    m = get_tactical_matchup(_team(formation="4-4-2"), _team(formation="4-3-3"))
    assert m == pytest.approx({"home_advantage": 0.0, "away_advantage": 0.1})
    m = get_tactical_matchup(_team(mentality="attacking", pressing="high"), _team(mentality="defensive", tempo="slow"))
    assert m["home_advantage"] == pytest.approx(0.2)


def test_default_and_validation():
    t = get_default_tactics("3-5-2")
    assert t.formation == "3-5-2" and t.mentality == "balanced"
    assert validate_tactics(t)
    assert not validate_tactics(TacticalSetup(formation="5-4-1"))
    with pytest.raises(ValueError):
        Team(id="X", name="X", tactics=TacticalSetup(tempo="frantic"))
