"""Tests for ctesiphus.validation.

Tests cover:
- Phase transition table and phase requirements
- Intent legality per phase
- Snapshot validation: schema ranges, structure and content checks
- Partial state updates
"""

import pytest

from ctesiphus.models.state import CampaignState, Phase
from ctesiphus.validation import (
    can_advance_phase,
    skip_confirmation_message,
    validate_phase_transition,
    validate_player_action,
    validate_state,
    validate_state_update,
)


def issue_paths(result):
    return [issue.path for issue in result.errors]


# =============================================================================
# Phase rules
# =============================================================================


class TestPhaseTransitions:
    """Tests for the transition table."""

    @pytest.mark.parametrize("source,target", [
        ("setup", "movement"),
        ("movement", "battle"),
        ("battle", "action"),
        ("action", "threat"),
        ("threat", "movement"),
    ])
    def test_legal(self, source, target):
        assert validate_phase_transition(source, target)

    @pytest.mark.parametrize("source,target", [
        ("movement", "action"),
        ("battle", "movement"),
        ("threat", "setup"),
        ("setup", "battle"),
        ("nowhere", "movement"),
    ])
    def test_illegal(self, source, target):
        assert not validate_phase_transition(source, target)

    def test_accepts_enum(self):
        assert validate_phase_transition(Phase.ACTION, Phase.THREAT)


class TestPhaseRequirements:
    def test_battle_requires_result(self):
        allowed, reason = can_advance_phase(Phase.BATTLE, battle_recorded=False)
        assert not allowed
        assert "battle result" in reason

    def test_battle_recorded(self):
        assert can_advance_phase(Phase.BATTLE, battle_recorded=True) == (True, None)

    def test_optional_phases(self):
        for phase in (Phase.MOVEMENT, Phase.ACTION, Phase.THREAT):
            assert can_advance_phase(phase, battle_recorded=False)[0]

    def test_skip_messages(self):
        assert "Movement" in skip_confirmation_message("movement")
        assert skip_confirmation_message(Phase.BATTLE) is None


class TestPlayerAction:
    """Tests for validate_player_action."""

    def test_move_only_in_movement(self, two_player_engine):
        state = two_player_engine.state
        assert validate_player_action(state, 0, "move")
        assert not validate_player_action(state, 0, "battle")

    def test_actions_in_action_phase(self, two_player_engine):
        state = two_player_engine.state
        state.current_phase = Phase.ACTION
        assert validate_player_action(state, 0, "encamp")
        assert validate_player_action(state, 1, "SCOUT")

    def test_unknown_player(self, two_player_engine):
        assert not validate_player_action(two_player_engine.state, 7, "move")

    def test_unknown_intent(self, two_player_engine):
        assert not validate_player_action(two_player_engine.state, 0, "dance")


# =============================================================================
# Snapshot validation
# =============================================================================


class TestValidateState:
    """Tests for validate_state."""

    def test_started_campaign_is_valid(self, two_player_engine):
        result = validate_state(two_player_engine.state.to_dict())
        assert result.valid, result.messages()
        assert isinstance(result.state, CampaignState)

    def test_accepts_model(self, two_player_engine):
        assert validate_state(two_player_engine.state).valid

    def test_fresh_state_is_valid(self):
        assert validate_state(CampaignState().to_dict()).valid

    def test_not_a_mapping(self):
        result = validate_state(["nope"])
        assert not result.valid
        assert result.state is None

    def test_sp_out_of_range(self, two_player_engine):
        data = two_player_engine.state.to_dict()
        data["players"][0]["supply_points"] = 11
        result = validate_state(data)
        assert not result.valid
        assert "players.0.supply_points" in issue_paths(result)

    def test_unknown_phase(self, two_player_engine):
        data = two_player_engine.state.to_dict()
        data["current_phase"] = "lunch"
        assert "current_phase" in issue_paths(validate_state(data))

    def test_current_player_out_of_range(self, two_player_engine):
        data = two_player_engine.state.to_dict()
        data["current_player_index"] = 2
        assert "current_player_index" in issue_paths(validate_state(data))

    def test_threat_above_target(self, two_player_engine):
        data = two_player_engine.state.to_dict()
        data["threat_level"] = 8
        assert "threat_level" in issue_paths(validate_state(data))

    def test_threat_above_target_allowed_once_ended(self, two_player_engine):
        data = two_player_engine.state.to_dict()
        data["threat_level"] = 8
        data["game_ended"] = True
        assert validate_state(data).valid

    def test_player_count_mismatch(self, two_player_engine):
        data = two_player_engine.state.to_dict()
        data["player_count"] = 3
        assert "player_count" in issue_paths(validate_state(data))

    def test_hex_key_mismatch(self, two_player_engine):
        data = two_player_engine.state.to_dict()
        data["hexes"]["1,1"]["position"] = {"row": 2, "col": 2}
        assert "hexes.1,1" in issue_paths(validate_state(data))

    def test_malformed_hex_key(self, two_player_engine):
        data = two_player_engine.state.to_dict()
        data["hexes"]["x"] = data["hexes"]["1,1"]
        assert "hexes.x" in issue_paths(validate_state(data))

    def test_wrong_tier(self, two_player_engine):
        data = two_player_engine.state.to_dict()
        data["hexes"]["3,3"]["type"] = "surface"
        assert "hexes.3,3.type" in issue_paths(validate_state(data))

    def test_explored_hex_needs_table_keys(self, two_player_engine):
        data = two_player_engine.state.to_dict()
        data["hexes"]["1,1"]["explored"] = True
        data["hexes"]["1,1"]["location_key"] = 40
        assert "hexes.1,1.location_key" in issue_paths(validate_state(data))

    def test_unexplored_hex_without_keys(self, two_player_engine):
        data = two_player_engine.state.to_dict()
        data["hexes"]["1,1"]["location_key"] = 12
        assert "hexes.1,1" in issue_paths(validate_state(data))

    def test_position_off_map(self, two_player_engine):
        data = two_player_engine.state.to_dict()
        data["players"][1]["position"] = {"row": 9, "col": 0}
        assert "players.1.position" in issue_paths(validate_state(data))

    def test_player_without_base(self, two_player_engine):
        data = two_player_engine.state.to_dict()
        data["players"][0]["bases"] = []
        assert "players.0.bases" in issue_paths(validate_state(data))

    def test_ended_before_started(self):
        data = CampaignState().to_dict()
        data["game_ended"] = True
        assert "game_ended" in issue_paths(validate_state(data))

    def test_never_raises_on_garbage(self):
        result = validate_state({"players": "many", "hexes": 3, "threat_level": "high"})
        assert not result.valid
        assert len(result.errors) >= 3


class TestValidateStateUpdate:
    def test_valid_update(self, two_player_engine):
        assert validate_state_update(two_player_engine.state, {"campaign_name": "Winter"}).valid

    def test_invalid_update(self, two_player_engine):
        result = validate_state_update(two_player_engine.state, {"threat_level": 0})
        assert not result.valid
        assert "threat_level" in issue_paths(result)
