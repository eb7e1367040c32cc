"""Turn priority for Ctesiphus.

Priority rules:
1. Lowest Campaign Points goes first
2. If tied, lowest Supply Points goes first
3. If still tied, players share the priority number and settle the order
   with a roll-off at the table (see needs_roll_off)
"""

from __future__ import annotations

from ctesiphus.models.state import Player


def _sort_key(player: Player) -> tuple[int, int]:
    return player.campaign_points, player.supply_points


def determine_priority(players: list[Player]) -> list[Player]:
    """Sort players into priority order and assign 1-based priority values.

    The sort is stable, so fully tied players keep their input order. Tied
    players share a priority number; the next distinct player takes its
    position-based rank (1, 1, 3, ...).

    Returns:
        Copies of the players with ``priority`` set, in priority order
    """
    ordered = sorted(players, key=_sort_key)
    result: list[Player] = []
    current_priority = 1
    for i, player in enumerate(ordered):
        if i > 0 and _sort_key(player) != _sort_key(ordered[i - 1]):
            current_priority = i + 1
        result.append(player.model_copy(update={"priority": current_priority}))
    return result


def needs_roll_off(players: list[Player]) -> bool:
    """True if two or more players tie for first priority on both CP and SP."""
    if len(players) < 2:
        return False
    lowest_cp = min(p.campaign_points for p in players)
    lowest_cp_players = [p for p in players if p.campaign_points == lowest_cp]
    if len(lowest_cp_players) < 2:
        return False
    lowest_sp = min(p.supply_points for p in lowest_cp_players)
    tied = [p for p in lowest_cp_players if p.supply_points == lowest_sp]
    return len(tied) >= 2
