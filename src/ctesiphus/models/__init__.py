"""Ctesiphus campaign models.

This module exports the core data structures for the campaign.
"""

from .actions import (
    ACTION_DESCRIPTIONS,
    BATTLE_REWARDS,
    INTENT_PHASES,
    ActionType,
    BattleResult,
    BattleReward,
    parse_battle_result,
)
from .state import (
    PHASE_ORDER,
    CampaignState,
    Event,
    EventType,
    Hex,
    HexPosition,
    HexType,
    HistoryEntry,
    MapConfig,
    Phase,
    Player,
)
from .tables import (
    MAP_CONFIGS,
    PLAYER_COLORS,
    THREAT_LEVEL_NAMES,
    TableEntry,
    get_condition,
    get_location,
    threat_level_name,
)

__all__ = [
    # Enums
    "ActionType",
    "BattleResult",
    "EventType",
    "HexType",
    "Phase",
    # State Models
    "CampaignState",
    "Event",
    "Hex",
    "HexPosition",
    "HistoryEntry",
    "MapConfig",
    "Player",
    # Content
    "BattleReward",
    "TableEntry",
    "ACTION_DESCRIPTIONS",
    "BATTLE_REWARDS",
    "INTENT_PHASES",
    "MAP_CONFIGS",
    "PHASE_ORDER",
    "PLAYER_COLORS",
    "THREAT_LEVEL_NAMES",
    # Functions
    "get_condition",
    "get_location",
    "parse_battle_result",
    "threat_level_name",
]
