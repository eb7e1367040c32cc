"""Action and battle definitions for Ctesiphus.

Action-phase actions always act on the current player. Battle results carry a
fixed Supply/Campaign Point reward applied through the ledger.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ctesiphus.models.state import Phase


class ActionType(str, Enum):
    """Campaign actions available in the Action phase.

    Inherits from str for proper JSON serialization.
    """

    RESUPPLY = "RESUPPLY"
    SCOUT = "SCOUT"
    SEARCH = "SEARCH"
    ENCAMP = "ENCAMP"
    DEMOLISH = "DEMOLISH"


class BattleResult(str, Enum):
    """Possible outcomes of the Battle phase for the acting player."""

    VICTORY = "Victory"
    DRAW = "Draw"
    DEFEAT = "Defeat"
    BYE = "Bye"


class BattleReward(BaseModel):
    """Fixed resource reward for a battle result."""

    model_config = ConfigDict(frozen=True)

    sp_gain: int = Field(default=0, ge=0)
    cp_gain: int = Field(default=0, ge=0)


BATTLE_REWARDS: dict[BattleResult, BattleReward] = {
    BattleResult.VICTORY: BattleReward(cp_gain=1),
    BattleResult.DRAW: BattleReward(sp_gain=1),
    BattleResult.DEFEAT: BattleReward(sp_gain=1),
    BattleResult.BYE: BattleReward(sp_gain=2),
}


ACTION_DESCRIPTIONS: dict[ActionType, str] = {
    ActionType.SCOUT: "Explore a hex within 3 hexes. Costs 1 SP per hex distance.",
    ActionType.RESUPPLY: "Gain SP based on location: Base (10 SP), Camp (D3+3 SP), Other (1 SP).",
    ActionType.SEARCH: "Search the current hex for resources. Effect depends on location.",
    ActionType.ENCAMP: "Build a camp. Costs SP equal to distance to nearest base/camp.",
    ActionType.DEMOLISH: "Destroy an opponent's camp on the hex you occupy.",
}


# Player intents as named by the presentation layer, mapped to the only phase
# in which each is legal.
INTENT_PHASES: dict[str, Phase] = {
    "move": Phase.MOVEMENT,
    "battle": Phase.BATTLE,
    "scout": Phase.ACTION,
    "resupply": Phase.ACTION,
    "search": Phase.ACTION,
    "encamp": Phase.ACTION,
    "demolish": Phase.ACTION,
}


def parse_battle_result(value: str) -> BattleResult:
    """Parse a battle result by value or name ("Victory", "win", "BYE", ...).

    Raises:
        ValueError: If the value names no battle result
    """
    aliases = {
        "win": BattleResult.VICTORY,
        "loss": BattleResult.DEFEAT,
        "lose": BattleResult.DEFEAT,
    }
    normalized = value.strip().lower()
    if normalized in aliases:
        return aliases[normalized]
    for result in BattleResult:
        if result.value.lower() == normalized or result.name.lower() == normalized:
            return result
    valid = [r.value for r in BattleResult]
    raise ValueError(f"Unknown battle result '{value}'. Valid results: {valid}")
