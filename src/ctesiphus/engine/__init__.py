"""Campaign engine module for Ctesiphus.

This module contains the core campaign logic including:
- hexgrid: Offset/axial hex math, neighbors, distances and pathfinding
- dice: D3/D6/D36 rolls and dice-notation parsing
- ledger: The single path for Supply/Campaign Point changes
- priority: Turn priority ordering
- placement: Base placement rules
- campaign_engine: Phase cycle, exploration, actions and battles
- endings: End-of-campaign victory categories and standings

Usage:
    from ctesiphus.engine import create_campaign

    engine = create_campaign(2, player_names=["Alice", "Bob"])

    # Movement phase: step onto a neighbouring hex for 1 SP
    engine.move_player(0, "1,2", cost=1)
    engine.next_phase()

    # Battle phase is mandatory
    engine.record_battle("Victory")
    engine.next_phase()

    # Action phase
    engine.perform_action("RESUPPLY")

    if engine.is_game_over():
        print(engine.get_summary())
"""

from ctesiphus.engine.campaign_engine import (
    CampaignEngine,
    CampaignInvariantError,
    OperationResult,
    create_campaign,
)
from ctesiphus.engine.dice import (
    RollBreakdown,
    parse_notation,
    resolve_value,
    roll_2d6,
    roll_compound,
    roll_d3,
    roll_d6,
    roll_notation,
    roll_range,
    roll_with_breakdown,
)
from ctesiphus.engine.endings import (
    VICTORY_CATEGORIES,
    Standing,
    VictoryCategory,
    category_results,
    champion,
    overall_standings,
)
from ctesiphus.engine.hexgrid import (
    axial_to_offset,
    decode_id,
    distance,
    encode_id,
    hexes_in_range,
    neighbors,
    offset_to_axial,
    shortest_path,
)
from ctesiphus.engine.ledger import apply_delta, clamp_supply, resupply_gain
from ctesiphus.engine.priority import determine_priority, needs_roll_off

__all__ = [
    # Campaign engine
    "CampaignEngine",
    "CampaignInvariantError",
    "OperationResult",
    "create_campaign",
    # Dice
    "RollBreakdown",
    "parse_notation",
    "resolve_value",
    "roll_2d6",
    "roll_compound",
    "roll_d3",
    "roll_d6",
    "roll_notation",
    "roll_range",
    "roll_with_breakdown",
    # Endings
    "VICTORY_CATEGORIES",
    "Standing",
    "VictoryCategory",
    "category_results",
    "champion",
    "overall_standings",
    # Hex grid
    "axial_to_offset",
    "decode_id",
    "distance",
    "encode_id",
    "hexes_in_range",
    "neighbors",
    "offset_to_axial",
    "shortest_path",
    # Ledger and priority
    "apply_delta",
    "clamp_supply",
    "resupply_gain",
    "determine_priority",
    "needs_roll_off",
]
