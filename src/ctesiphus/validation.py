"""Campaign state validation for Ctesiphus.

This module gates externally supplied state. It never raises for malformed
input: every problem becomes a ValidationIssue with a dotted field path.

What IS validated:
1. Schema: field types, enum membership and value ranges (pydantic models)
2. Structure: hex ids well-formed and matching their hexes, positions on the map,
   player ids matching their index, player count matching the settings
3. Content: explored hexes carry valid table keys for their tier
4. Lifecycle: phase / current player consistent with the started flag

Also provides the phase transition table and per-phase intent legality used by
the engine and by external callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from pydantic import ValidationError

from ctesiphus.engine.hexgrid import decode_id
from ctesiphus.models.actions import INTENT_PHASES, ActionType
from ctesiphus.models.state import CampaignState, Phase
from ctesiphus.models.tables import condition_table, location_table


# =============================================================================
# Validation Result Data Classes
# =============================================================================


@dataclass
class ValidationIssue:
    """A single validation problem."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}" if self.path else self.message


@dataclass
class ValidationResult:
    """Outcome of validating a snapshot."""

    valid: bool = True
    errors: list[ValidationIssue] = field(default_factory=list)
    state: Optional[CampaignState] = None

    def add(self, path: str, message: str) -> None:
        self.errors.append(ValidationIssue(path=path, message=message))
        self.valid = False

    def messages(self) -> list[str]:
        return [str(issue) for issue in self.errors]


# =============================================================================
# Phase rules
# =============================================================================

VALID_TRANSITIONS: dict[Phase, set[Phase]] = {
    Phase.SETUP: {Phase.MOVEMENT},
    Phase.MOVEMENT: {Phase.BATTLE},
    Phase.BATTLE: {Phase.ACTION},
    Phase.ACTION: {Phase.THREAT},
    Phase.THREAT: {Phase.MOVEMENT},
}


@dataclass(frozen=True)
class PhaseRequirement:
    required: bool
    message: str


PHASE_REQUIREMENTS: dict[Phase, PhaseRequirement] = {
    Phase.MOVEMENT: PhaseRequirement(False, "Movement is optional. You can Hold Position or Regroup."),
    Phase.BATTLE: PhaseRequirement(True, "You must record a battle result (Victory/Draw/Defeat/Bye)"),
    Phase.ACTION: PhaseRequirement(False, "Action is optional. You can skip if desired."),
    Phase.THREAT: PhaseRequirement(False, "Threat phase completes when the turn passes on."),
}

SKIP_CONFIRMATION_MESSAGES: dict[Phase, str] = {
    Phase.MOVEMENT: "Skip Movement Phase? You will not move your kill team this round.",
    Phase.ACTION: "Skip Action Phase? You will not perform any campaign action this round.",
}


def _as_phase(value: Union[Phase, str]) -> Optional[Phase]:
    if isinstance(value, Phase):
        return value
    try:
        return Phase(str(value).lower())
    except ValueError:
        return None


def validate_phase_transition(from_phase: Union[Phase, str], to_phase: Union[Phase, str]) -> bool:
    """Check a phase change against the transition table."""
    source = _as_phase(from_phase)
    target = _as_phase(to_phase)
    if source is None or target is None:
        return False
    return target in VALID_TRANSITIONS[source]


def can_advance_phase(phase: Union[Phase, str], battle_recorded: bool) -> tuple[bool, Optional[str]]:
    """Check whether the current phase's requirements are met.

    Returns:
        Tuple of (can_advance, reason). reason is None when advancing is allowed.
    """
    current = _as_phase(phase)
    if current is None or current not in PHASE_REQUIREMENTS:
        return False, "Invalid phase"
    requirement = PHASE_REQUIREMENTS[current]
    if current == Phase.BATTLE and requirement.required and not battle_recorded:
        return False, requirement.message
    return True, None


def skip_confirmation_message(phase: Union[Phase, str]) -> Optional[str]:
    """Confirmation prompt for skipping an optional phase (None if not skippable)."""
    current = _as_phase(phase)
    if current is None:
        return None
    return SKIP_CONFIRMATION_MESSAGES.get(current)


def validate_player_action(
    state: CampaignState,
    player_id: int,
    action: Union[str, ActionType],
) -> bool:
    """Check whether a player intent is legal in the current phase.

    Intents: "move" (Movement), "battle" (Battle) and the five campaign actions
    (Action phase). Unknown players and unknown intents are rejected.
    """
    if state.get_player(player_id) is None:
        return False
    intent = action.value if isinstance(action, ActionType) else str(action)
    required_phase = INTENT_PHASES.get(intent.lower())
    if required_phase is None:
        return False
    return state.current_phase == required_phase


# =============================================================================
# Snapshot validation
# =============================================================================


def _location_path(loc: tuple) -> str:
    return ".".join(str(part) for part in loc)


def _check_structure(state: CampaignState, result: ValidationResult) -> None:
    config = state.map_config

    if state.game_started:
        if state.current_phase == Phase.SETUP:
            result.add("current_phase", "a started campaign cannot be in the setup phase")
        if not state.players:
            result.add("players", "a started campaign must have players")
        elif state.current_player_index >= len(state.players):
            result.add(
                "current_player_index",
                f"index {state.current_player_index} out of range for {len(state.players)} players",
            )
        if config is None:
            result.add("map_config", "a started campaign must have a map configuration")
        if (
            not state.game_ended
            and not state.solo_mode
            and state.threat_level > state.target_threat_level
        ):
            result.add(
                "threat_level",
                f"threat {state.threat_level} exceeds target {state.target_threat_level} "
                "in a campaign that has not ended",
            )
    elif state.game_ended:
        result.add("game_ended", "a campaign cannot end before it starts")

    if state.players and state.player_count != len(state.players):
        result.add(
            "player_count",
            f"settings declare {state.player_count} players but {len(state.players)} are present",
        )

    for index, player in enumerate(state.players):
        if player.id != index:
            result.add(f"players.{index}.id", f"player id {player.id} does not match index {index}")
        if state.game_started and not player.bases:
            result.add(f"players.{index}.bases", "every player keeps their starting base")
        if config is None:
            continue
        if not config.contains(player.position):
            result.add(f"players.{index}.position", f"{player.position.key} is off the map")
        for kind in ("bases", "camps"):
            for i, position in enumerate(getattr(player, kind)):
                if not config.contains(position):
                    result.add(f"players.{index}.{kind}.{i}", f"{position.key} is off the map")

    for key, hex_obj in state.hexes.items():
        path = f"hexes.{key}"
        try:
            position = decode_id(key)
        except ValueError as e:
            result.add(path, str(e))
            continue
        if position != hex_obj.position:
            result.add(path, f"key does not match hex position {hex_obj.position.key}")
        if config is not None:
            if not config.contains(position):
                result.add(path, "hex is off the map")
            elif config.hex_type_for_row(position.row) != hex_obj.type:
                result.add(f"{path}.type", f"row {position.row} must be {config.hex_type_for_row(position.row).value}")
        if hex_obj.explored:
            if hex_obj.location_key not in location_table(hex_obj.type):
                result.add(f"{path}.location_key", f"{hex_obj.location_key} is not a {hex_obj.type.value} location")
            if hex_obj.condition_key not in condition_table(hex_obj.type):
                result.add(f"{path}.condition_key", f"{hex_obj.condition_key} is not a {hex_obj.type.value} condition")
        elif hex_obj.location_key or hex_obj.condition_key:
            result.add(path, "unexplored hex must not carry location/condition keys")
        for player_id in hex_obj.explored_by:
            if state.get_player(player_id) is None:
                result.add(f"{path}.explored_by", f"unknown player id {player_id}")


def validate_state(snapshot: Any) -> ValidationResult:
    """Validate a campaign snapshot.

    Args:
        snapshot: Serialized state dict (or an already-built CampaignState)

    Returns:
        ValidationResult; on success ``state`` holds the parsed CampaignState
    """
    result = ValidationResult()

    if isinstance(snapshot, CampaignState):
        snapshot = snapshot.to_dict()
    if not isinstance(snapshot, dict):
        result.add("", f"snapshot must be a mapping, got {type(snapshot).__name__}")
        return result

    try:
        state = CampaignState.model_validate(snapshot)
    except ValidationError as e:
        for error in e.errors():
            result.add(_location_path(error["loc"]), error["msg"])
        return result

    _check_structure(state, result)
    if result.valid:
        result.state = state
    return result


def validate_state_update(current: Union[CampaignState, dict], update: dict) -> ValidationResult:
    """Validate the result of merging a partial update over the current state."""
    base = current.to_dict() if isinstance(current, CampaignState) else dict(current)
    return validate_state({**base, **update})
