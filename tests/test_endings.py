"""Tests for ctesiphus.engine.endings."""

from ctesiphus.engine.endings import (
    VICTORY_CATEGORIES,
    VictoryCategory,
    category_results,
    champion,
    overall_standings,
)
from ctesiphus.models.state import HexPosition, Player


def make_player(player_id, name, cp=0, explored=0, kills=0, sp=10, games=0):
    return Player(
        id=player_id,
        name=name,
        position=HexPosition(row=0, col=player_id),
        supply_points=sp,
        campaign_points=cp,
        explored_hexes=explored,
        operatives_killed=kills,
        games_played=games,
    )


def sample_players():
    return [
        make_player(0, "Alice", cp=5, explored=1, kills=0, sp=3, games=2),
        make_player(1, "Bob", cp=1, explored=4, kills=2, sp=8, games=2),
    ]


class TestCategories:
    """Tests for per-category rankings."""

    def test_all_categories_defined(self):
        assert set(VICTORY_CATEGORIES) == set(VictoryCategory)

    def test_leaders(self):
        results = category_results(sample_players())
        assert results[VictoryCategory.WARLORD][0].name == "Alice"
        assert results[VictoryCategory.EXPLORER][0].name == "Bob"
        assert results[VictoryCategory.HEADHUNTER][0].name == "Bob"
        assert results[VictoryCategory.PIONEER][0].name == "Bob"

    def test_ties_keep_player_order(self):
        results = category_results(sample_players())
        assert [p.name for p in results[VictoryCategory.TROOPER]] == ["Alice", "Bob"]


class TestStandings:
    """Tests for overall standings."""

    def test_points(self):
        standings = overall_standings(sample_players())
        assert [(s.name, s.points) for s in standings] == [("Bob", 8), ("Alice", 7)]

    def test_category_wins(self):
        bob = overall_standings(sample_players())[0]
        assert VictoryCategory.EXPLORER in bob.category_wins
        assert VictoryCategory.WARLORD not in bob.category_wins

    def test_champion(self):
        assert champion(sample_players()).name == "Bob"

    def test_no_players(self):
        assert overall_standings([]) == []
        assert champion([]) is None
