import pytest

from models.loader import TEAMS_JSON, load_teams
from models.player import Player, PlayerAttributes
from models.team import TacticalSetup, Team


def test_sample_teams_file():
    teams = load_teams(TEAMS_JSON)
    assert len(teams) >= 2
    ids = set()
    for team in teams.values():
        assert len(team.players) == 11
        assert team.tactics.is_valid()
        assert team.get_players_by_position("ST", "AM", "LM", "RM")
        ids.update(p.id for p in team.players)
    assert len(ids) == sum(len(t.players) for t in teams.values())


def test_team_from_dict_defaults():
    team = Team.from_dict({"name": "Plain", "players": [{"id": 1, "name": "One"}]})
    assert team.id == "Plain"
    assert team.tactics == TacticalSetup()
    assert team.players[0].id == "1"
    assert team.players[0].position == "MF"
    assert team.overall_rating == 100.0


def test_invalid_tactics_rejected():
    with pytest.raises(ValueError):
        Team.from_dict({"name": "Odd", "tactics": {"formation": "2-3-5"}})


def test_player_rating_and_attributes():
    attrs = PlayerAttributes.from_dict({"finishing": 20, "unknown": 3})
    p = Player(id="p", name="P", position="st", attributes=attrs)
    assert not p.is_goalkeeper()
    assert p.get_overall_rating() == pytest.approx((20 + 12 * 10) / 13 * 5)
    keeper = Player(id="k", name="K", position="GK", attributes=PlayerAttributes(handling=15, reflexes=15, kicking=15))
    assert keeper.is_goalkeeper()
    assert keeper.attributes.average() == pytest.approx((13 * 10 + 45) / 16)


def test_position_lookup_case_insensitive():
    team = Team(id="t", name="t", players=[Player(id="a", name="A", position="st"), Player(id="b", name="B", position="GK")])
    assert [p.id for p in team.get_players_by_position("ST")] == ["a"]
