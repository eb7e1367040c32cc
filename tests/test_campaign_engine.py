"""Unit tests for ctesiphus.engine.campaign_engine.

Tests cover:
- Campaign start: map, players, starting bases, argument checking
- Phase cycle: mandatory battle, turn hand-off, round end and threat clock
- Exploration: table rolls, immediate rewards, solo threat increases
- Movement: SP costs, refusals, exploring on arrival
- Actions: Resupply, Scout, Search, Encamp, Demolish
- Battle recording, manual adjustments and player updates
- Terminal state refusals and invariant errors
"""

import pytest

from ctesiphus.engine.campaign_engine import (
    CampaignEngine,
    CampaignInvariantError,
    create_campaign,
)
from ctesiphus.models.actions import ActionType, BattleResult
from ctesiphus.models.state import EventType, HexPosition, HexType, Phase
from ctesiphus.parameters import BASE_KEY
from ctesiphus.validation import validate_state


def complete_turn(engine, result="Victory"):
    """Drive the current player's turn from Movement to the hand-off."""
    assert engine.state.current_phase == Phase.MOVEMENT
    assert engine.next_phase().success  # -> battle
    assert engine.record_battle(result).success
    assert engine.next_phase().success  # -> action
    assert engine.next_phase().success  # -> threat
    return engine.next_phase()          # -> next player / next round


def complete_round(engine, result="Victory"):
    outcome = None
    for _ in range(len(engine.state.players)):
        outcome = complete_turn(engine, result)
    return outcome


def set_hex(engine, key, location_key, condition_key=11):
    """Mark a hex as explored with the given table keys."""
    hex_obj = engine.state.hexes[key]
    engine.state.hexes[key] = hex_obj.model_copy(
        update={"explored": True, "location_key": location_key, "condition_key": condition_key}
    )


def place_player(engine, index, key, sp=None):
    player = engine.state.players[index]
    update = {"position": engine.state.hexes[key].position}
    if sp is not None:
        update["supply_points"] = sp
    engine.state.players[index] = player.model_copy(update=update)


def last_event(engine):
    return engine.state.event_log[-1]


# =============================================================================
# Campaign start
# =============================================================================


class TestStartGame:
    """Tests for start_game."""

    def test_two_player_start(self):
        engine = CampaignEngine(random_seed=1)
        state = engine.start_game(2, False, ["Alice", "Bob"])

        assert len(state.players) == 2
        assert all(p.supply_points == 10 and p.campaign_points == 0 for p in state.players)
        assert state.current_phase == Phase.MOVEMENT
        assert state.current_round == 1
        assert state.threat_level == 1
        assert state.game_started
        assert not state.game_ended
        assert [p.name for p in state.players] == ["Alice", "Bob"]

    def test_map_built_from_config(self, two_player_engine):
        state = two_player_engine.state
        assert len(state.hexes) == 25
        assert state.hexes["1,4"].type == HexType.SURFACE
        assert state.hexes["2,0"].type == HexType.TOMB

    def test_starting_bases(self, two_player_engine):
        state = two_player_engine.state
        alice, bob = state.players
        assert alice.position.key == "0,1"
        assert bob.position.key == "0,3"
        assert alice.bases == [alice.position]
        base_hex = state.hexes["0,1"]
        assert base_hex.explored
        assert base_hex.location_key == BASE_KEY
        assert base_hex.explored_by == [0]

    def test_default_names(self):
        engine = create_campaign(3, player_names=["Only"])
        assert [p.name for p in engine.state.players] == ["Only", "Player 2", "Player 3"]

    def test_start_event_logged(self, two_player_engine):
        assert "Campaign started with 2 players" in two_player_engine.state.event_log[0].message

    @pytest.mark.parametrize("count", [0, 1, 7])
    def test_unsupported_player_count(self, count):
        with pytest.raises(ValueError, match="Unsupported player count .*Supported: 2-6"):
            CampaignEngine().start_game(count)

    @pytest.mark.parametrize("target", [0, 11])
    def test_unsupported_target(self, target):
        with pytest.raises(ValueError, match="Target threat level"):
            CampaignEngine().start_game(2, target_threat_level=target)

    def test_operations_refused_before_start(self):
        engine = CampaignEngine()
        result = engine.next_phase()
        assert not result.success
        assert last_event(engine).type == EventType.ERROR


# =============================================================================
# Phase cycle
# =============================================================================


class TestPhaseCycle:
    """Tests for next_phase."""

    def test_movement_to_battle(self, two_player_engine):
        result = two_player_engine.next_phase()
        assert result.success
        assert two_player_engine.state.current_phase == Phase.BATTLE

    def test_battle_is_mandatory(self, two_player_engine):
        engine = two_player_engine
        engine.next_phase()
        events_before = len(engine.state.event_log)

        result = engine.next_phase()

        assert not result.success
        assert engine.state.current_phase == Phase.BATTLE
        assert len(engine.state.event_log) == events_before + 1
        assert last_event(engine).type == EventType.ERROR

        engine.record_battle(BattleResult.DRAW)
        assert engine.next_phase().success
        assert engine.state.current_phase == Phase.ACTION

    def test_turn_passes_to_next_player(self, two_player_engine):
        engine = two_player_engine
        result = complete_turn(engine)
        assert result.success
        assert engine.state.current_player_index == 1
        assert engine.state.current_phase == Phase.MOVEMENT
        assert not engine.state.battle_recorded
        assert engine.state.threat_level == 1

    def test_round_end_raises_threat(self, two_player_engine):
        engine = two_player_engine
        complete_round(engine)
        assert engine.state.current_round == 2
        assert engine.state.current_player_index == 0
        assert engine.state.threat_level == 2
        assert engine.state.current_phase == Phase.MOVEMENT

    def test_campaign_ends_exactly_at_target(self):
        engine = create_campaign(2, target_threat_level=4, random_seed=3)
        for expected_threat in (2, 3):
            complete_round(engine)
            assert engine.state.threat_level == expected_threat
            assert not engine.state.game_ended

        complete_round(engine)
        assert engine.state.threat_level == 4
        assert engine.state.game_ended
        assert "Campaign ended" in last_event(engine).message

    def test_ended_campaign_refuses_operations(self):
        engine = create_campaign(2, target_threat_level=2, random_seed=3)
        complete_round(engine)
        assert engine.is_game_over()
        snapshot = engine.get_current_state()

        for result in (
            engine.next_phase(),
            engine.move_player(0, "1,1", 1),
            engine.record_battle("Victory"),
            engine.perform_action(ActionType.RESUPPLY),
        ):
            assert not result.success

        assert engine.state.players == snapshot.players
        assert engine.state.current_round == snapshot.current_round
        assert engine.is_game_over()

    def test_invariant_error_on_bad_index(self, two_player_engine):
        two_player_engine.state.current_player_index = 5
        with pytest.raises(CampaignInvariantError):
            two_player_engine.next_phase()

    def test_invariant_error_without_players(self, two_player_engine):
        two_player_engine.state.players = []
        with pytest.raises(CampaignInvariantError):
            two_player_engine.record_battle("Victory")


# =============================================================================
# Exploration and movement
# =============================================================================


class TestExploration:
    """Tests for explore_hex."""

    def test_explore_rolls_tables(self, scripted_rng):
        engine = CampaignEngine(rng=scripted_rng())
        engine.start_game(2)
        engine._random = scripted_rng([1, 5, 2, 3])

        result = engine.explore_hex("1,1")

        hex_obj = engine.state.hexes["1,1"]
        assert result.success
        assert hex_obj.explored
        assert hex_obj.location_key == 15
        assert hex_obj.condition_key == 23
        assert hex_obj.explored_by == [0]
        assert engine.state.players[0].explored_hexes == 1
        assert "Frozen Outpost" in result.message

    def test_sp_reward_is_clamped(self, two_player_engine, scripted_rng):
        engine = two_player_engine
        place_player(engine, 0, "0,1", sp=9)
        engine._random = scripted_rng([1, 2, 1, 1, 3])  # Supply Cache, D3 -> 3

        result = engine.explore_hex("1,1")

        assert result.sp_change == 1
        assert engine.state.players[0].supply_points == 10
        assert engine.state.players[0].history[-1].action == "Explored Supply Cache"

    def test_cp_reward(self, two_player_engine, scripted_rng):
        engine = two_player_engine
        engine._random = scripted_rng([1, 6, 1, 1])  # Sensor Array
        result = engine.explore_hex("1,1")
        assert result.cp_change == 1
        assert engine.state.players[0].campaign_points == 1
        assert any(e.type == EventType.REWARD for e in engine.state.event_log)

    def test_explore_for_other_player(self, two_player_engine, scripted_rng):
        engine = two_player_engine
        engine._random = scripted_rng([1, 5, 1, 1])
        engine.explore_hex("1,3", player_index=1)
        assert engine.state.hexes["1,3"].explored_by == [1]
        assert engine.state.players[1].explored_hexes == 1

    def test_already_explored_is_refused(self, two_player_engine):
        engine = two_player_engine
        result = engine.explore_hex("0,1")
        assert not result.success
        assert last_event(engine).type == EventType.WARNING
        assert engine.state.hexes["0,1"].location_key == BASE_KEY

    def test_unknown_hex(self, two_player_engine):
        assert not two_player_engine.explore_hex("9,9").success

    def test_blocked_hex(self, two_player_engine):
        two_player_engine.toggle_hex_blocked("1,1")
        assert not two_player_engine.explore_hex("1,1").success
        assert not two_player_engine.state.hexes["1,1"].explored

    def test_solo_tomb_threat_increase(self, scripted_rng):
        engine = CampaignEngine(rng=scripted_rng())
        engine.start_game(2, solo_mode=True)
        engine._random = scripted_rng([2, 1, 3, 6])  # Empty Corridor, Overlord's Attention (+2)

        engine.explore_hex("3,2")

        assert engine.state.threat_level == 3
        assert last_event(engine).type == EventType.WARNING
        assert not engine.state.game_ended

    def test_solo_threat_reaching_target_waits_for_round_end(self, scripted_rng):
        engine = CampaignEngine(rng=scripted_rng())
        engine.start_game(2, solo_mode=True, target_threat_level=3)
        engine._random = scripted_rng([2, 1, 3, 6])  # Empty Corridor, Overlord's Attention (+2)

        assert engine.explore_hex("3,2").success
        assert engine.state.threat_level == 3
        assert not engine.state.game_ended

        complete_turn(engine)
        assert engine.state.current_player_index == 1
        assert not engine.state.game_ended

        complete_turn(engine)
        assert engine.state.threat_level == 4
        assert engine.state.game_ended
        assert "Campaign ended" in last_event(engine).message

    def test_threat_increase_ignored_outside_solo(self, two_player_engine, scripted_rng):
        engine = two_player_engine
        engine._random = scripted_rng([2, 1, 1, 3])  # Awakening
        engine.explore_hex("3,2")
        assert engine.state.threat_level == 1


class TestMovement:
    """Tests for move_player."""

    def test_move_spends_sp_and_explores(self, two_player_engine, scripted_rng):
        engine = two_player_engine
        engine._random = scripted_rng([1, 5, 1, 1])

        result = engine.move_player(0, "1,1", 1)

        alice = engine.state.players[0]
        assert result.success
        assert result.sp_change == -1
        assert alice.supply_points == 9
        assert alice.position == HexPosition(row=1, col=1)
        assert engine.state.hexes["1,1"].explored
        assert engine.state.hexes["1,1"].explored_by == [0]
        assert alice.history[0].action == "Moved to hex 1,1"

    def test_move_result_includes_exploration_reward(self, two_player_engine, scripted_rng):
        engine = two_player_engine
        engine._random = scripted_rng([1, 6, 1, 1])  # Sensor Array

        result = engine.move_player(0, "1,1", 1)

        assert result.sp_change == -1
        assert result.cp_change == 1
        assert engine.state.players[0].campaign_points == 1

    def test_move_to_explored_hex_does_not_reroll(self, two_player_engine, scripted_rng):
        engine = two_player_engine
        set_hex(engine, "1,1", 15)
        engine._random = scripted_rng([3, 6, 3, 6])
        engine.move_player(0, "1,1", 1)
        assert engine.state.hexes["1,1"].location_key == 15
        assert engine.state.players[0].explored_hexes == 0

    def test_insufficient_sp_refused(self, two_player_engine):
        engine = two_player_engine
        place_player(engine, 0, "0,1", sp=3)
        before = engine.state.players[0]

        result = engine.move_player(0, "1,1", 5)

        assert not result.success
        assert engine.state.players[0] == before
        assert last_event(engine).type == EventType.ERROR

    def test_blocked_target_refused(self, two_player_engine):
        engine = two_player_engine
        engine.toggle_hex_blocked("1,1")
        assert not engine.move_player(0, "1,1", 1).success
        assert engine.state.players[0].position.key == "0,1"

    def test_unknown_player_refused(self, two_player_engine):
        assert not two_player_engine.move_player(4, "1,1", 1).success

    def test_negative_cost_refused(self, two_player_engine):
        assert not two_player_engine.move_player(0, "1,1", -1).success

    def test_toggle_blocked_round_trip(self, two_player_engine):
        engine = two_player_engine
        engine.toggle_hex_blocked("2,2")
        assert engine.state.hexes["2,2"].blocked
        engine.toggle_hex_blocked("2,2")
        assert not engine.state.hexes["2,2"].blocked

    def test_reachable_hexes_skip_blocked(self, two_player_engine):
        engine = two_player_engine
        engine.toggle_hex_blocked("1,1")
        reachable = engine.reachable_hexes(0)
        assert "1,1" not in reachable
        assert "1,0" in reachable


# =============================================================================
# Actions
# =============================================================================


class TestResupply:
    """Tests for the RESUPPLY action."""

    def test_capped_at_base(self, two_player_engine):
        engine = two_player_engine
        place_player(engine, 0, "0,1", sp=9)

        result = engine.perform_action(ActionType.RESUPPLY)

        alice = engine.state.players[0]
        assert result.success
        assert alice.supply_points == 10
        assert alice.history[-1].sp_change == 1

    def test_full_sp_is_informational(self, two_player_engine):
        engine = two_player_engine
        result = engine.perform_action("resupply")
        assert result.success
        assert result.sp_change == 0
        assert engine.state.players[0].history == []
        assert "already at max SP" in last_event(engine).message

    def test_elsewhere(self, two_player_engine):
        engine = two_player_engine
        set_hex(engine, "1,1", 15)
        place_player(engine, 0, "1,1", sp=5)
        engine.perform_action(ActionType.RESUPPLY)
        assert engine.state.players[0].supply_points == 6

    def test_at_camp(self, two_player_engine, scripted_rng):
        engine = two_player_engine
        set_hex(engine, "1,1", 15)
        place_player(engine, 0, "1,1", sp=2)
        alice = engine.state.players[0]
        engine.state.players[0] = alice.model_copy(update={"camps": [alice.position]})
        engine._random = scripted_rng([2])  # D3+3 -> 5

        engine.perform_action(ActionType.RESUPPLY)

        assert engine.state.players[0].supply_points == 7

    def test_bonus_condition(self, two_player_engine):
        engine = two_player_engine
        set_hex(engine, "2,1", 21, condition_key=26)  # Energy Nexus
        place_player(engine, 0, "2,1", sp=5)
        engine.perform_action(ActionType.RESUPPLY)
        assert engine_sp(engine) == 7

    def test_reduced_condition(self, two_player_engine):
        engine = two_player_engine
        set_hex(engine, "1,1", 15, condition_key=23)  # Sub-Zero
        place_player(engine, 0, "1,1", sp=5)

        result = engine.perform_action(ActionType.RESUPPLY)

        assert result.sp_change == 0
        assert engine_sp(engine) == 5
        assert "gained no SP" in last_event(engine).message


class TestScout:
    """Tests for the SCOUT action."""

    def test_scout_explores_target(self, two_player_engine, scripted_rng):
        engine = two_player_engine
        engine._random = scripted_rng([1, 5, 1, 1])

        result = engine.perform_action(ActionType.SCOUT, {"target_hex": "1,2", "distance": 2})

        assert result.success
        assert engine.state.players[0].supply_points == 8
        assert engine.state.hexes["1,2"].explored
        assert engine.state.hexes["1,2"].explored_by == [0]

    def test_requires_parameters(self, two_player_engine):
        result = two_player_engine.perform_action(ActionType.SCOUT, {"target_hex": "1,2"})
        assert not result.success
        assert engine_sp(two_player_engine) == 10

    def test_explored_target_costs_nothing(self, two_player_engine):
        engine = two_player_engine
        result = engine.perform_action(ActionType.SCOUT, {"target_hex": "0,3", "distance": 2})
        assert not result.success
        assert engine_sp(engine) == 10

    def test_insufficient_sp(self, two_player_engine):
        engine = two_player_engine
        place_player(engine, 0, "0,1", sp=1)
        result = engine.perform_action(ActionType.SCOUT, {"target_hex": "2,2", "distance": 2})
        assert not result.success
        assert not engine.state.hexes["2,2"].explored


def engine_sp(engine, index=0):
    return engine.state.players[index].supply_points


class TestSearch:
    """Tests for the SEARCH action."""

    def test_search_sp(self, two_player_engine, scripted_rng):
        engine = two_player_engine
        set_hex(engine, "1,1", 14)  # Crashed Vessel
        place_player(engine, 0, "1,1", sp=4)
        engine._random = scripted_rng([3])

        result = engine.perform_action(ActionType.SEARCH)

        assert result.sp_change == 3
        assert engine_sp(engine) == 7

    def test_search_cp(self, two_player_engine):
        engine = two_player_engine
        set_hex(engine, "1,1", 32)  # Burial Mound
        place_player(engine, 0, "1,1")
        result = engine.perform_action(ActionType.SEARCH)
        assert result.cp_change == 1
        assert engine.state.players[0].campaign_points == 1

    def test_search_finds_nothing(self, two_player_engine):
        engine = two_player_engine
        result = engine.perform_action(ActionType.SEARCH)
        assert result.success
        assert "found nothing" in result.message
        assert engine.state.players[0].history == []


class TestEncamp:
    """Tests for the ENCAMP action."""

    def test_encamp_costs_distance(self, two_player_engine):
        engine = two_player_engine
        set_hex(engine, "2,1", 21)
        place_player(engine, 0, "2,1")
        assert engine.calculate_encamp_cost(0) == 2

        result = engine.perform_action(ActionType.ENCAMP)

        alice = engine.state.players[0]
        assert result.success
        assert alice.supply_points == 8
        assert alice.camps == [HexPosition(row=2, col=1)]

    def test_free_encamp_location(self, two_player_engine):
        engine = two_player_engine
        set_hex(engine, "1,1", 11)  # Landing Site
        place_player(engine, 0, "1,1")
        engine.perform_action(ActionType.ENCAMP)
        assert engine_sp(engine) == 10
        assert engine.state.players[0].camps

    def test_cheap_encamp_condition(self, two_player_engine):
        engine = two_player_engine
        set_hex(engine, "2,1", 21, condition_key=34)  # Stable Systems
        place_player(engine, 0, "2,1")
        engine.perform_action(ActionType.ENCAMP)
        assert engine_sp(engine) == 9

    def test_occupied_hex_refused(self, two_player_engine):
        engine = two_player_engine
        result = engine.perform_action(ActionType.ENCAMP)
        assert not result.success
        assert engine.state.players[0].camps == []

    def test_insufficient_sp(self, two_player_engine):
        engine = two_player_engine
        set_hex(engine, "2,1", 21)
        place_player(engine, 0, "2,1", sp=1)
        assert not engine.perform_action(ActionType.ENCAMP).success

    def test_encamp_cost_unknown_player(self, two_player_engine):
        assert two_player_engine.calculate_encamp_cost(9) is None


class TestDemolish:
    """Tests for the DEMOLISH action."""

    def test_demolish_enemy_camp(self, two_player_engine):
        engine = two_player_engine
        set_hex(engine, "1,2", 21)
        camp = engine.state.hexes["1,2"].position
        bob = engine.state.players[1]
        engine.state.players[1] = bob.model_copy(update={"camps": [camp]})
        place_player(engine, 0, "1,2")

        result = engine.perform_action(ActionType.DEMOLISH)

        assert result.success
        assert engine.state.players[1].camps == []
        assert "demolished Bob's camp" in result.message

    def test_no_enemy_camp(self, two_player_engine):
        engine = two_player_engine
        result = engine.perform_action(ActionType.DEMOLISH)
        assert not result.success
        assert last_event(engine).type == EventType.ERROR

    def test_own_camp_not_demolished(self, two_player_engine):
        engine = two_player_engine
        set_hex(engine, "1,2", 21)
        place_player(engine, 0, "1,2")
        alice = engine.state.players[0]
        engine.state.players[0] = alice.model_copy(update={"camps": [alice.position]})
        assert not engine.perform_action(ActionType.DEMOLISH).success
        assert engine.state.players[0].camps


class TestUnknownAction:
    def test_unknown_action(self, two_player_engine):
        result = two_player_engine.perform_action("TELEPORT")
        assert not result.success
        assert "Unknown action" in result.error


# =============================================================================
# Battles and player records
# =============================================================================


class TestRecordBattle:
    """Tests for record_battle."""

    def test_victory(self, two_player_engine):
        engine = two_player_engine
        result = engine.record_battle("Victory", operatives_killed=3)
        alice = engine.state.players[0]
        assert result.cp_change == 1
        assert alice.campaign_points == 1
        assert alice.games_played == 1
        assert alice.games_won == 1
        assert alice.operatives_killed == 3
        assert engine.state.battle_recorded

    def test_defeat(self, two_player_engine):
        engine = two_player_engine
        place_player(engine, 0, "0,1", sp=5)
        engine.record_battle(BattleResult.DEFEAT)
        alice = engine.state.players[0]
        assert alice.supply_points == 6
        assert alice.games_lost == 1

    def test_bye_clamped(self, two_player_engine):
        engine = two_player_engine
        result = engine.record_battle("bye")
        assert result.sp_change == 0
        assert engine.state.players[0].history[-1].action == "Battle result: Bye"

    def test_invalid_result(self, two_player_engine):
        engine = two_player_engine
        result = engine.record_battle("triumph")
        assert not result.success
        assert not engine.state.battle_recorded

    def test_negative_kills_refused(self, two_player_engine):
        assert not two_player_engine.record_battle("Victory", operatives_killed=-1).success


class TestPlayerRecords:
    """Tests for adjust_resources and update_player."""

    def test_adjust_resources_allows_negative_cp(self, two_player_engine):
        engine = two_player_engine
        result = engine.adjust_resources(0, cp_delta=-2, reason="Penalty")
        assert result.success
        assert engine.state.players[0].campaign_points == -2
        assert engine.state.players[0].history[-1].action == "Penalty"

    def test_update_name(self, two_player_engine):
        engine = two_player_engine
        assert engine.update_player(1, {"name": "Robert"}).success
        assert engine.state.players[1].name == "Robert"

    def test_update_protected_field(self, two_player_engine):
        assert not two_player_engine.update_player(0, {"id": 3}).success

    def test_update_unknown_field(self, two_player_engine):
        assert not two_player_engine.update_player(0, {"mood": "grim"}).success

    def test_update_resources_refused(self, two_player_engine):
        engine = two_player_engine
        result = engine.update_player(0, {"supply_points": 3, "campaign_points": 5})
        alice = engine.state.players[0]
        assert not result.success
        assert "adjust_resources" in result.error
        assert alice.supply_points == 10
        assert alice.campaign_points == 0
        assert alice.history == []

    def test_update_cannot_drop_starting_base(self, two_player_engine):
        engine = two_player_engine
        result = engine.update_player(0, {"bases": []})
        assert not result.success
        assert engine.state.players[0].bases == [HexPosition(row=0, col=1)]
        assert validate_state(engine.state.to_dict()).valid

    def test_update_can_add_bases_after_start(self, two_player_engine):
        engine = two_player_engine
        extra = {"row": 1, "col": 1}
        assert engine.update_player(0, {"bases": [{"row": 0, "col": 1}, extra]}).success
        assert engine.state.players[0].bases[1] == HexPosition(**extra)

    def test_update_invalid_value(self, two_player_engine):
        engine = two_player_engine
        assert not engine.update_player(0, {"explored_hexes": -1}).success
        assert engine.state.players[0].explored_hexes == 0


# =============================================================================
# Read accessors
# =============================================================================


class TestAccessors:
    """Tests for read-only views."""

    def test_get_current_state_is_copy(self, two_player_engine):
        snapshot = two_player_engine.get_current_state()
        snapshot.players[0].name = "Changed"
        assert two_player_engine.state.players[0].name == "Alice"

    def test_describe_hex(self, two_player_engine):
        info = two_player_engine.describe_hex("0,3")
        assert info["explored"]
        assert info["base_owner"] == 1
        assert info["occupants"] == [1]
        assert info["location"]["name"] == "Base Camp"

    def test_describe_unexplored_hex(self, two_player_engine):
        info = two_player_engine.describe_hex("3,3")
        assert info["location"] is None
        assert info["type"] == "tomb"

    def test_describe_unknown_hex(self, two_player_engine):
        assert two_player_engine.describe_hex("12,0") is None

    def test_summary(self, two_player_engine):
        summary = two_player_engine.get_summary()
        assert summary["round"] == 1
        assert summary["phase"] == "movement"
        assert summary["current_player"] == "Alice"
        assert summary["explored_hexes"] == 2
        assert summary["total_hexes"] == 25

    def test_priority_written_back(self, two_player_engine):
        engine = two_player_engine
        engine.record_battle("Victory")
        ordered = engine.get_priority()
        assert [p.name for p in ordered] == ["Bob", "Alice"]
        assert engine.state.players[1].priority == 1
        assert engine.state.players[0].priority == 2
        assert not engine.needs_roll_off()
