"""End-of-campaign standings for Ctesiphus.

When the threat clock reaches the target the campaign ends and players are
ranked in five victory categories:

- WARLORD:    most Campaign Points
- EXPLORER:   most hexes explored
- HEADHUNTER: most enemy operatives killed
- PIONEER:    most Supply Points remaining
- TROOPER:    most games played

Overall standings award each player ``len(players) - rank_index`` points per
category (first place earns len(players), last place earns 1). Players tied on
a statistic keep their player order within the category.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ctesiphus.models.state import Player


class VictoryCategory(str, Enum):
    """Victory categories awarded at the end of a campaign."""

    WARLORD = "warlord"
    EXPLORER = "explorer"
    HEADHUNTER = "headhunter"
    PIONEER = "pioneer"
    TROOPER = "trooper"


@dataclass(frozen=True)
class CategoryDefinition:
    """Display data and ranked statistic of a category.

    Attributes:
        title: Display title
        description: What the category rewards
        stat: Player attribute the category ranks on (descending)
    """

    title: str
    description: str
    stat: str


VICTORY_CATEGORIES: dict[VictoryCategory, CategoryDefinition] = {
    VictoryCategory.WARLORD: CategoryDefinition("Warlord", "Most Campaign Points", "campaign_points"),
    VictoryCategory.EXPLORER: CategoryDefinition("Explorer", "Most hexes explored", "explored_hexes"),
    VictoryCategory.HEADHUNTER: CategoryDefinition("Headhunter", "Most operatives killed", "operatives_killed"),
    VictoryCategory.PIONEER: CategoryDefinition("Pioneer", "Most Supply Points remaining", "supply_points"),
    VictoryCategory.TROOPER: CategoryDefinition("Trooper", "Most games played", "games_played"),
}


@dataclass(frozen=True)
class Standing:
    """A player's overall result."""

    player_id: int
    name: str
    points: int
    category_wins: tuple[VictoryCategory, ...]


def rank_category(players: list[Player], category: VictoryCategory) -> list[Player]:
    """Players ordered best-first on the category's statistic."""
    stat = VICTORY_CATEGORIES[category].stat
    return sorted(players, key=lambda p: getattr(p, stat), reverse=True)


def category_results(players: list[Player]) -> dict[VictoryCategory, list[Player]]:
    """Ranking of the players in every victory category."""
    return {category: rank_category(players, category) for category in VICTORY_CATEGORIES}


def overall_standings(players: list[Player]) -> list[Standing]:
    """Aggregate category rankings into overall standings, best first."""
    if not players:
        return []

    points = {p.id: 0 for p in players}
    wins: dict[int, list[VictoryCategory]] = {p.id: [] for p in players}
    for category, ranked in category_results(players).items():
        for rank_index, player in enumerate(ranked):
            points[player.id] += len(players) - rank_index
        wins[ranked[0].id].append(category)

    standings = [
        Standing(
            player_id=p.id,
            name=p.name,
            points=points[p.id],
            category_wins=tuple(wins[p.id]),
        )
        for p in players
    ]
    return sorted(standings, key=lambda s: s.points, reverse=True)


def champion(players: list[Player]) -> Optional[Standing]:
    """Overall campaign winner (None without players)."""
    standings = overall_standings(players)
    return standings[0] if standings else None
