"""Campaign state models for Ctesiphus.

This module defines the pydantic models that make up a campaign snapshot.
The snapshot is the unit handed to (and received from) the persistence layer,
so every range from the campaign rules is declared on the fields themselves:
an out-of-range value coming from outside is reported by validation instead of
being silently repaired. The engine keeps values in range by routing every
resource change through the ledger (see ctesiphus.engine.ledger).

Aggregate root: CampaignState
- players: ordered list of Player (index == player id)
- hexes: mapping of encoded hex id ("row,col") -> Hex
- round / phase / current player pointers and the threat clock
- event_log: append-only list of Event, also the player-facing error channel
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ctesiphus.parameters import (
    DEFAULT_TARGET_THREAT,
    HEX_ID_DELIMITER,
    MAX_THREAT,
    MIN_THREAT,
    SP_MAX,
    SP_MIN,
)


def utc_timestamp() -> str:
    """Current time as an ISO-8601 string (UTC)."""
    return datetime.now(timezone.utc).isoformat()


class Phase(str, Enum):
    """Turn phases.

    SETUP only exists before the campaign starts; a running campaign cycles
    MOVEMENT -> BATTLE -> ACTION -> THREAT for every player turn.

    Inherits from str for proper JSON serialization.
    """

    SETUP = "setup"
    MOVEMENT = "movement"
    BATTLE = "battle"
    ACTION = "action"
    THREAT = "threat"

    @property
    def label(self) -> str:
        """Display name ("Movement", "Battle", ...)."""
        return self.value.capitalize()


PHASE_ORDER: list[Phase] = [Phase.MOVEMENT, Phase.BATTLE, Phase.ACTION, Phase.THREAT]


class HexType(str, Enum):
    """Map tier of a hex."""

    SURFACE = "surface"
    TOMB = "tomb"


class EventType(str, Enum):
    """Event log taxonomy."""

    SYSTEM = "system"
    MOVEMENT = "movement"
    EXPLORATION = "exploration"
    BATTLE = "battle"
    ACTION = "action"
    REWARD = "reward"
    WARNING = "warning"
    ERROR = "error"


class HexPosition(BaseModel):
    """Offset (odd-r) hex coordinate."""

    model_config = ConfigDict(frozen=True)

    row: int = Field(ge=0)
    col: int = Field(ge=0)

    @property
    def key(self) -> str:
        """Encoded hex id, e.g. "2,3"."""
        return f"{self.row}{HEX_ID_DELIMITER}{self.col}"

    def __str__(self) -> str:
        return self.key


class MapConfig(BaseModel):
    """Map dimensions for a given player count.

    Rows [0, surface_rows) are surface hexes, the remainder are tomb hexes.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    rows: int = Field(ge=1)
    cols: int = Field(ge=1)
    surface_rows: int = Field(ge=0)
    tomb_rows: int = Field(ge=0)

    @model_validator(mode="after")
    def check_tiers(self) -> MapConfig:
        """Surface rows must leave room for the tomb tier."""
        if self.surface_rows >= self.rows:
            raise ValueError(
                f"surface_rows ({self.surface_rows}) must be less than rows ({self.rows})"
            )
        if self.surface_rows + self.tomb_rows != self.rows:
            raise ValueError(
                f"surface_rows + tomb_rows ({self.surface_rows} + {self.tomb_rows}) "
                f"must equal rows ({self.rows})"
            )
        return self

    def contains(self, position: HexPosition) -> bool:
        """Check whether a position lies inside the map."""
        return 0 <= position.row < self.rows and 0 <= position.col < self.cols

    def hex_type_for_row(self, row: int) -> HexType:
        """Tier of every hex in the given row."""
        return HexType.SURFACE if row < self.surface_rows else HexType.TOMB


class Hex(BaseModel):
    """A single map hex.

    location_key / condition_key are 0 until the hex is explored; afterwards
    they are keys into the location / condition table for the hex's type.
    """

    position: HexPosition
    type: HexType
    explored: bool = False
    location_key: int = Field(default=0, ge=0)
    condition_key: int = Field(default=0, ge=0)
    explored_by: list[int] = Field(default_factory=list)
    blocked: bool = False

    @property
    def key(self) -> str:
        return self.position.key

    @property
    def row(self) -> int:
        return self.position.row

    @property
    def col(self) -> int:
        return self.position.col


class HistoryEntry(BaseModel):
    """One resource change in a player's ledger history.

    Immutable once appended; used for audit and display only.
    """

    model_config = ConfigDict(frozen=True)

    round: int = Field(ge=1)
    phase: Phase
    timestamp: str = Field(default_factory=utc_timestamp)
    action: str
    sp_before: int
    sp_after: int
    cp_before: int
    cp_after: int

    @property
    def sp_change(self) -> int:
        """SP actually applied (after clamping)."""
        return self.sp_after - self.sp_before

    @property
    def cp_change(self) -> int:
        return self.cp_after - self.cp_before


class Player(BaseModel):
    """Per-player campaign record.

    Attributes:
        id: 0-based index, stable for the whole campaign
        name: Display name
        kill_team_name: Name of the player's kill team
        color: Display colour (hex string)
        position: Current hex
        supply_points: Supply Points, always within [0, 10]
        campaign_points: Campaign Points (unclamped, may go negative)
        bases: Base hexes; the first is the starting base and is never removed
        camps: Camp hexes in build order
        explored_hexes: Number of hexes this player explored
        priority: Last computed priority (informational only)
        history: Append-only ledger history
    """

    id: int = Field(ge=0)
    name: str
    kill_team_name: str = ""
    color: str = "#ffffff"
    position: HexPosition
    supply_points: int = Field(ge=SP_MIN, le=SP_MAX)
    campaign_points: int = 0
    bases: list[HexPosition] = Field(default_factory=list)
    camps: list[HexPosition] = Field(default_factory=list)
    explored_hexes: int = Field(default=0, ge=0)
    operatives_killed: int = Field(default=0, ge=0)
    games_played: int = Field(default=0, ge=0)
    games_won: int = Field(default=0, ge=0)
    games_lost: int = Field(default=0, ge=0)
    priority: Optional[int] = None
    history: list[HistoryEntry] = Field(default_factory=list)

    def has_base_at(self, position: HexPosition) -> bool:
        return position in self.bases

    def has_camp_at(self, position: HexPosition) -> bool:
        return position in self.camps

    def structures(self) -> list[HexPosition]:
        """Bases followed by camps."""
        return [*self.bases, *self.camps]


class Event(BaseModel):
    """A single entry of the campaign event log."""

    model_config = ConfigDict(frozen=True)

    type: EventType
    message: str
    round: int = Field(ge=1)
    phase: Phase
    timestamp: str = Field(default_factory=utc_timestamp)


class CampaignState(BaseModel):
    """Complete campaign state (the aggregate root).

    Lifecycle: not started (SETUP) -> active -> ended. Once game_ended is true
    the state is terminal; it remains readable.

    Shared state variables:
        current_round: Round counter (starts at 1)
        current_phase: Phase of the current player's turn
        current_player_index: Index into players of the acting player
        threat_level: Campaign clock (1-10, starts at 1)
        target_threat_level: Threat at which the campaign ends (1-10)
        battle_recorded: Whether the acting player recorded a battle this turn
    """

    campaign_name: str = ""
    game_started: bool = False
    game_ended: bool = False
    solo_mode: bool = False
    player_count: int = Field(default=0, ge=0)
    current_round: int = Field(default=1, ge=1)
    current_phase: Phase = Phase.SETUP
    current_player_index: int = Field(default=0, ge=0)
    threat_level: int = Field(default=MIN_THREAT, ge=MIN_THREAT, le=MAX_THREAT)
    target_threat_level: int = Field(default=DEFAULT_TARGET_THREAT, ge=MIN_THREAT, le=MAX_THREAT)
    battle_recorded: bool = False
    players: list[Player] = Field(default_factory=list)
    hexes: dict[str, Hex] = Field(default_factory=dict)
    map_config: Optional[MapConfig] = None
    event_log: list[Event] = Field(default_factory=list)

    def get_player(self, index: int) -> Optional[Player]:
        """Get a player by index, None if unknown."""
        if 0 <= index < len(self.players):
            return self.players[index]
        return None

    def get_hex(self, hex_key: str) -> Optional[Hex]:
        return self.hexes.get(hex_key)

    @property
    def current_player(self) -> Optional[Player]:
        return self.get_player(self.current_player_index)

    @property
    def is_last_phase(self) -> bool:
        return self.current_phase == PHASE_ORDER[-1]

    @property
    def is_last_player(self) -> bool:
        return self.current_player_index >= len(self.players) - 1

    # Serialization methods
    def to_json(self) -> str:
        """Serialize state to JSON string."""
        return self.model_dump_json(indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> CampaignState:
        """Deserialize state from JSON string."""
        return cls.model_validate_json(json_str)

    def to_dict(self) -> dict:
        """Serialize state to a JSON-compatible dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> CampaignState:
        """Deserialize state from dictionary."""
        return cls.model_validate(data)
