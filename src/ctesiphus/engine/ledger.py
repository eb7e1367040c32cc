"""Player resource ledger for Ctesiphus.

apply_delta is the single path through which Supply and Campaign Point changes
flow. It keeps SP inside [SP_MIN, SP_MAX] and appends a HistoryEntry recording
the before/after values of both resources, so the history is always complete.

Campaign Points are deliberately left unclamped: normal play only adds CP, but
explicit adjustments may push them below zero.
"""

from __future__ import annotations

from ctesiphus.models.state import HistoryEntry, Phase, Player
from ctesiphus.parameters import SP_MAX, SP_MIN


def clamp_supply(value: int) -> int:
    """Clamp a Supply Point value to [SP_MIN, SP_MAX]."""
    return max(SP_MIN, min(SP_MAX, value))


def apply_delta(
    player: Player,
    round_number: int,
    phase: Phase,
    sp_delta: int,
    cp_delta: int,
    reason: str,
) -> Player:
    """Return a copy of the player with the resource changes applied.

    Args:
        player: Player before the change (not modified)
        round_number: Current campaign round
        phase: Current phase
        sp_delta: Supply Point change (result is clamped)
        cp_delta: Campaign Point change (unclamped)
        reason: Human-readable cause recorded in the history

    Returns:
        Updated Player with the new HistoryEntry appended
    """
    sp_after = clamp_supply(player.supply_points + sp_delta)
    cp_after = player.campaign_points + cp_delta
    entry = HistoryEntry(
        round=round_number,
        phase=phase,
        action=reason,
        sp_before=player.supply_points,
        sp_after=sp_after,
        cp_before=player.campaign_points,
        cp_after=cp_after,
    )
    return player.model_copy(
        update={
            "supply_points": sp_after,
            "campaign_points": cp_after,
            "history": [*player.history, entry],
        }
    )


def resupply_gain(proposed: int, current_sp: int) -> int:
    """SP a resupply actually adds without exceeding SP_MAX (never negative)."""
    return max(0, min(proposed, SP_MAX - current_sp))
