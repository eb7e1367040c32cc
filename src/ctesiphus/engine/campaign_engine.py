"""Campaign engine for Ctesiphus.

This module implements the CampaignEngine class, which owns the complete
campaign state and exposes every state-changing operation.

Turn Sequence (per player, repeated for every player each round):
1. MOVEMENT - Optional: move to a hex (paying SP), exploring it on arrival
2. BATTLE   - Mandatory: record a battle result before the phase can advance
3. ACTION   - Optional: Resupply, Scout, Search, Encamp or Demolish
4. THREAT   - Turn passes to the next player; after the last player the round
              ends, the Threat Level rises by one and the campaign ends once it
              reaches the target

Error policy:
- Illegal operations (insufficient SP, wrong target, battle not recorded, ...)
  append an error/warning Event, leave the state untouched and return an
  OperationResult with success=False. The event log is the player-facing
  error channel.
- Broken invariants (no players in a started campaign, current player index
  out of range) are programming errors: they are logged and raised as
  CampaignInvariantError before anything is mutated.

The engine is single-writer and synchronous; callers must serialize access
to one engine instance.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Optional, Union

from ctesiphus.engine.dice import resolve_value, roll_compound
from ctesiphus.engine.hexgrid import bounds_of, distance, neighbors
from ctesiphus.engine.ledger import apply_delta, resupply_gain
from ctesiphus.engine.placement import suggested_base_positions
from ctesiphus.engine.priority import determine_priority, needs_roll_off
from ctesiphus.models.actions import (
    BATTLE_REWARDS,
    ActionType,
    BattleResult,
    parse_battle_result,
)
from ctesiphus.models.state import (
    PHASE_ORDER,
    CampaignState,
    Event,
    EventType,
    Hex,
    HexType,
    Phase,
    Player,
)
from ctesiphus.models.tables import (
    MAP_CONFIGS,
    PLAYER_COLORS,
    TableEntry,
    get_condition,
    get_location,
    threat_level_name,
)
from ctesiphus.parameters import (
    BASE_KEY,
    DEFAULT_SEARCH_CP,
    DEFAULT_SEARCH_SP,
    DEFAULT_TARGET_THREAT,
    MAX_PLAYERS,
    MAX_THREAT,
    MIN_PLAYERS,
    MIN_THREAT,
    RESUPPLY_AT_BASE,
    RESUPPLY_AT_CAMP,
    RESUPPLY_CONDITION_MODIFIER,
    RESUPPLY_ELSEWHERE,
    SP_MAX,
    STARTING_CP,
    STARTING_SP,
    THREAT_PER_ROUND,
)

logger = logging.getLogger(__name__)

# Fields update_player may not touch: identity and everything the ledger owns
PROTECTED_PLAYER_FIELDS = {"id", "history", "supply_points", "campaign_points"}


class CampaignInvariantError(RuntimeError):
    """Raised when the campaign state violates an invariant the engine relies on."""


@dataclass
class OperationResult:
    """Result of a state-changing operation.

    Attributes:
        success: Whether the operation was applied
        message: Description of what happened (also logged as an Event)
        error: Reason for refusal if success=False
        sp_change: Supply Points actually applied to the acting player
        cp_change: Campaign Points actually applied to the acting player
    """

    success: bool
    message: str = ""
    error: Optional[str] = None
    sp_change: int = 0
    cp_change: int = 0


class CampaignEngine:
    """Core campaign engine managing the phase cycle and all campaign actions.

    The CampaignEngine handles:
    - Campaign setup (map, players, starting bases)
    - The Movement -> Battle -> Action -> Threat cycle and round/threat clock
    - Exploration with D36 location/condition rolls and their rewards
    - Campaign actions and battle recording through the resource ledger

    Attributes:
        state: Current campaign state (mutated in place by operations)
    """

    def __init__(
        self,
        state: Optional[CampaignState] = None,
        random_seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize the engine.

        Args:
            state: Existing campaign state (e.g. loaded from storage). A fresh,
                not-yet-started state is created if omitted.
            random_seed: Seed for the engine's dice (for reproducibility)
            rng: Pre-built random source; takes precedence over random_seed
        """
        self.state = state if state is not None else CampaignState()
        self._random = rng if rng is not None else random.Random(random_seed)

    # =========================================================================
    # Internal helpers
    # =========================================================================

    def add_event(self, message: str, event_type: EventType = EventType.SYSTEM) -> Event:
        """Append an event to the campaign log."""
        event = Event(
            type=event_type,
            message=message,
            round=self.state.current_round,
            phase=self.state.current_phase,
        )
        self.state.event_log.append(event)
        logger.debug(f"[{event_type.value}] {message}")
        return event

    def _fail(self, message: str, event_type: EventType = EventType.ERROR) -> OperationResult:
        self.add_event(message, event_type)
        logger.warning(f"Refused: {message}")
        return OperationResult(success=False, error=message)

    def _check_active(self) -> Optional[OperationResult]:
        """Refuse operations outside the active part of the lifecycle."""
        if not self.state.game_started:
            return self._fail("The campaign has not started")
        if self.state.game_ended:
            return self._fail("The campaign has ended")
        return None

    def _acting_index(self) -> int:
        """Index of the current player, checking the invariants it depends on."""
        if not self.state.players:
            logger.error("Campaign is running without players")
            raise CampaignInvariantError("Campaign is running without players")
        index = self.state.current_player_index
        if not 0 <= index < len(self.state.players):
            logger.error(f"Current player index {index} out of range")
            raise CampaignInvariantError(
                f"Current player index {index} out of range for {len(self.state.players)} players"
            )
        return index

    def _set_player(self, index: int, player: Player) -> None:
        self.state.players[index] = player

    def _hex_effects(self, hex_obj: Optional[Hex]) -> tuple[Optional[TableEntry], Optional[TableEntry]]:
        """Location and condition entries of an explored hex (None, None otherwise)."""
        if hex_obj is None or not hex_obj.explored:
            return None, None
        return (
            get_location(hex_obj.type, hex_obj.location_key),
            get_condition(hex_obj.type, hex_obj.condition_key),
        )

    def _apply(self, index: int, sp_delta: int, cp_delta: int, reason: str) -> tuple[int, int]:
        """Run a change through the ledger; returns the (sp, cp) actually applied."""
        before = self.state.players[index]
        after = apply_delta(
            before,
            self.state.current_round,
            self.state.current_phase,
            sp_delta,
            cp_delta,
            reason,
        )
        self._set_player(index, after)
        return (
            after.supply_points - before.supply_points,
            after.campaign_points - before.campaign_points,
        )

    # =========================================================================
    # Setup
    # =========================================================================

    def start_game(
        self,
        player_count: int,
        solo_mode: bool = False,
        player_names: Optional[list[str]] = None,
        target_threat_level: int = DEFAULT_TARGET_THREAT,
        campaign_name: str = "",
    ) -> CampaignState:
        """Create the map and players and begin round 1.

        Args:
            player_count: Number of players (2-6), selects the map configuration
            solo_mode: Enables solo rules (tomb conditions can raise the threat)
            player_names: Display names; missing names default to "Player N"
            target_threat_level: Threat Level that ends the campaign (1-10)
            campaign_name: Optional campaign name

        Returns:
            The new campaign state

        Raises:
            ValueError: If player_count or target_threat_level is unsupported
        """
        config = MAP_CONFIGS.get(player_count)
        if config is None:
            raise ValueError(
                f"Unsupported player count {player_count}. "
                f"Supported: {MIN_PLAYERS}-{MAX_PLAYERS}"
            )
        if not MIN_THREAT <= target_threat_level <= MAX_THREAT:
            raise ValueError(
                f"Target threat level must be in [{MIN_THREAT}, {MAX_THREAT}], "
                f"got {target_threat_level}"
            )

        names = list(player_names or [])

        hexes: dict[str, Hex] = {}
        for row in range(config.rows):
            for col in range(config.cols):
                hex_obj = Hex(
                    position={"row": row, "col": col},
                    type=config.hex_type_for_row(row),
                )
                hexes[hex_obj.key] = hex_obj

        start_positions = suggested_base_positions(config, player_count)
        players = []
        for i, position in enumerate(start_positions):
            start_hex = hexes[position.key]
            start_hex.explored = True
            start_hex.location_key = BASE_KEY
            start_hex.condition_key = BASE_KEY
            start_hex.explored_by = [i]
            players.append(
                Player(
                    id=i,
                    name=names[i] if i < len(names) and names[i] else f"Player {i + 1}",
                    kill_team_name=f"Kill Team {i + 1}",
                    color=PLAYER_COLORS[i % len(PLAYER_COLORS)],
                    position=position,
                    supply_points=STARTING_SP,
                    campaign_points=STARTING_CP,
                    bases=[position],
                )
            )

        self.state = CampaignState(
            campaign_name=campaign_name,
            game_started=True,
            game_ended=False,
            solo_mode=solo_mode,
            player_count=player_count,
            current_round=1,
            current_phase=Phase.MOVEMENT,
            current_player_index=0,
            threat_level=MIN_THREAT,
            target_threat_level=target_threat_level,
            battle_recorded=False,
            players=players,
            hexes=hexes,
            map_config=config,
            event_log=[],
        )
        logger.info(
            f"Started campaign '{campaign_name}' with {player_count} players on {config.name}"
        )
        self.add_event(
            f"Campaign started with {player_count} players. "
            f"Target threat level: {target_threat_level}."
        )
        return self.state

    # =========================================================================
    # Phase cycle
    # =========================================================================

    def next_phase(self) -> OperationResult:
        """Advance the phase cycle.

        Battle is the only mandatory phase: leaving it requires a recorded
        battle. From the Threat phase the turn passes to the next player, or,
        after the last player, the round ends and the threat clock ticks.
        """
        refusal = self._check_active()
        if refusal:
            return refusal
        self._acting_index()

        state = self.state
        if state.current_phase == Phase.BATTLE and not state.battle_recorded:
            return self._fail(
                "You must record a battle result before leaving the Battle phase"
            )

        if not state.is_last_phase:
            next_index = PHASE_ORDER.index(state.current_phase) + 1
            state.current_phase = PHASE_ORDER[next_index]
            message = f"Phase changed to {state.current_phase.label}"
            logger.info(message)
            self.add_event(message)
            return OperationResult(success=True, message=message)

        if not state.is_last_player:
            state.current_player_index += 1
            state.current_phase = PHASE_ORDER[0]
            state.battle_recorded = False
            message = f"{state.players[state.current_player_index].name}'s turn"
            logger.info(message)
            self.add_event(message)
            return OperationResult(success=True, message=message)

        # End of round
        state.threat_level = min(state.threat_level + THREAT_PER_ROUND, MAX_THREAT)
        state.current_round += 1
        state.current_player_index = 0
        state.current_phase = PHASE_ORDER[0]
        state.battle_recorded = False

        if state.threat_level >= state.target_threat_level:
            state.game_ended = True
            message = f"Campaign ended! Final threat level: {state.threat_level}"
        else:
            message = (
                f"Round {state.current_round} begins. Threat level: {state.threat_level} "
                f"({threat_level_name(state.threat_level)})"
            )
        logger.info(message)
        self.add_event(message)
        return OperationResult(success=True, message=message)

    def is_game_over(self) -> bool:
        return self.state.game_ended

    # =========================================================================
    # Exploration and movement
    # =========================================================================

    def explore_hex(self, hex_key: str, player_index: Optional[int] = None) -> OperationResult:
        """Explore a hex for the given player (default: the current player).

        Rolls a D36 location and a D36 condition from the tables of the hex's
        tier, stores them on the hex and applies any immediate location reward.
        In solo mode a tomb condition with a threat effect raises the Threat
        Level at once; the end of the campaign is still only checked when the
        round ends.
        """
        refusal = self._check_active()
        if refusal:
            return refusal

        state = self.state
        hex_obj = state.get_hex(hex_key)
        if hex_obj is None:
            return self._fail(f"Unknown hex {hex_key}")
        if hex_obj.explored:
            return self._fail(f"Hex {hex_key} has already been explored", EventType.WARNING)
        if hex_obj.blocked:
            return self._fail(f"Hex {hex_key} is blocked and cannot be explored", EventType.WARNING)

        index = self._acting_index() if player_index is None else player_index
        if state.get_player(index) is None:
            return self._fail(f"Unknown player {index}")

        location_key = roll_compound(self._random)
        condition_key = roll_compound(self._random)
        location = get_location(hex_obj.type, location_key)
        condition = get_condition(hex_obj.type, condition_key)

        state.hexes[hex_key] = hex_obj.model_copy(
            update={
                "explored": True,
                "location_key": location_key,
                "condition_key": condition_key,
                "explored_by": [*hex_obj.explored_by, index],
            }
        )
        message = f"Hex {hex_key} explored: {location.name} ({condition.name})"
        self.add_event(message, EventType.EXPLORATION)

        player = state.players[index]
        self._set_player(
            index, player.model_copy(update={"explored_hexes": player.explored_hexes + 1})
        )

        sp_gain = 0
        cp_gain = 0
        if location.effect == "gainSP":
            sp_gain = max(0, resolve_value(location.value, self._random))
        elif location.effect == "gainCP":
            cp_gain = max(0, resolve_value(location.value, self._random))

        sp_change = cp_change = 0
        if sp_gain or cp_gain:
            sp_change, cp_change = self._apply(index, sp_gain, cp_gain, f"Explored {location.name}")
            name = state.players[index].name
            if sp_gain:
                self.add_event(f"{name} gained {sp_change} SP from {location.name}", EventType.REWARD)
            if cp_gain:
                self.add_event(f"{name} gained {cp_change} CP from {location.name}", EventType.REWARD)

        if (
            state.solo_mode
            and hex_obj.type == HexType.TOMB
            and condition.effect == "threatIncrease"
        ):
            increase = resolve_value(condition.value, self._random) or 1
            state.threat_level = min(state.threat_level + increase, MAX_THREAT)
            self.add_event(
                f"Threat level increased by {increase} to {state.threat_level}!",
                EventType.WARNING,
            )

        logger.info(message)
        return OperationResult(
            success=True, message=message, sp_change=sp_change, cp_change=cp_change
        )

    def move_player(self, player_index: int, target_hex_key: str, cost: int) -> OperationResult:
        """Move a player to a hex, paying ``cost`` SP.

        Arriving on an unexplored hex explores it for the moving player.
        """
        refusal = self._check_active()
        if refusal:
            return refusal

        state = self.state
        player = state.get_player(player_index)
        if player is None:
            return self._fail(f"Unknown player {player_index}")
        target = state.get_hex(target_hex_key)
        if target is None:
            return self._fail(f"Unknown hex {target_hex_key}")
        if target.blocked:
            return self._fail(f"Hex {target_hex_key} is blocked")
        if cost < 0:
            return self._fail(f"Movement cost cannot be negative (got {cost})")
        if player.supply_points < cost:
            return self._fail(
                f"{player.name} doesn't have enough SP to move "
                f"(need {cost}, have {player.supply_points})"
            )

        sp_change, _ = self._apply(player_index, -cost, 0, f"Moved to hex {target_hex_key}")
        moved = state.players[player_index]
        self._set_player(player_index, moved.model_copy(update={"position": target.position}))

        message = f"{player.name} moved to {target_hex_key} (cost: {cost} SP)"
        self.add_event(message, EventType.MOVEMENT)
        logger.info(message)

        cp_change = 0
        if not target.explored:
            explored = self.explore_hex(target_hex_key, player_index)
            sp_change += explored.sp_change
            cp_change = explored.cp_change

        return OperationResult(
            success=True, message=message, sp_change=sp_change, cp_change=cp_change
        )

    def reachable_hexes(self, player_index: int) -> list[str]:
        """Keys of unblocked hexes adjacent to a player (for presentation)."""
        player = self.state.get_player(player_index)
        if player is None or self.state.map_config is None:
            return []
        result = []
        for position in neighbors(player.position, bounds_of(self.state.map_config)):
            hex_obj = self.state.get_hex(position.key)
            if hex_obj is not None and not hex_obj.blocked:
                result.append(position.key)
        return result

    def toggle_hex_blocked(self, hex_key: str) -> OperationResult:
        """Flip the blocked flag of a hex (map editing by the organiser)."""
        hex_obj = self.state.get_hex(hex_key)
        if hex_obj is None:
            return self._fail(f"Unknown hex {hex_key}")
        blocked = not hex_obj.blocked
        self.state.hexes[hex_key] = hex_obj.model_copy(update={"blocked": blocked})
        message = f"Hex {hex_key} {'blocked' if blocked else 'unblocked'}"
        self.add_event(message)
        return OperationResult(success=True, message=message)

    # =========================================================================
    # Actions
    # =========================================================================

    def perform_action(
        self,
        action_type: Union[ActionType, str],
        params: Optional[dict[str, Any]] = None,
    ) -> OperationResult:
        """Perform a campaign action for the current player.

        Args:
            action_type: One of ActionType (or its string value)
            params: Action parameters. SCOUT needs ``target_hex`` and
                ``distance``; ENCAMP takes an optional ``cost`` (defaults to
                calculate_encamp_cost)
        """
        refusal = self._check_active()
        if refusal:
            return refusal

        try:
            action = ActionType(str(getattr(action_type, "value", action_type)).upper())
        except ValueError:
            return self._fail(f"Unknown action: {action_type}")

        params = params or {}
        index = self._acting_index()
        handlers = {
            ActionType.RESUPPLY: self._resupply,
            ActionType.SCOUT: self._scout,
            ActionType.SEARCH: self._search,
            ActionType.ENCAMP: self._encamp,
            ActionType.DEMOLISH: self._demolish,
        }
        return handlers[action](index, params)

    def _resupply(self, index: int, params: dict[str, Any]) -> OperationResult:
        player = self.state.players[index]
        hex_obj = self.state.get_hex(player.position.key)
        _, condition = self._hex_effects(hex_obj)

        if player.has_base_at(player.position):
            proposed = RESUPPLY_AT_BASE
        elif player.has_camp_at(player.position):
            proposed = resolve_value(RESUPPLY_AT_CAMP, self._random)
        else:
            proposed = RESUPPLY_ELSEWHERE

        if condition is not None:
            if condition.effect == "bonusResupply":
                proposed += RESUPPLY_CONDITION_MODIFIER
            elif condition.effect == "reducedResupply":
                proposed -= RESUPPLY_CONDITION_MODIFIER

        actual = resupply_gain(proposed, player.supply_points)
        if actual == 0:
            if player.supply_points >= SP_MAX:
                message = f"{player.name} is already at max SP ({SP_MAX})"
            else:
                message = f"{player.name} gained no SP from resupplying"
            self.add_event(message)
            return OperationResult(success=True, message=message)

        sp_change, _ = self._apply(index, actual, 0, "Resupply action")
        message = f"{player.name} resupplied: +{sp_change} SP"
        self.add_event(message, EventType.ACTION)
        logger.info(message)
        return OperationResult(success=True, message=message, sp_change=sp_change)

    def _scout(self, index: int, params: dict[str, Any]) -> OperationResult:
        player = self.state.players[index]
        target_key = params.get("target_hex")
        cost = params.get("distance")
        if target_key is None or cost is None:
            return self._fail("Scout requires a target hex and a distance")
        target = self.state.get_hex(target_key)
        if target is None:
            return self._fail(f"Unknown hex {target_key}")
        if cost < 0:
            return self._fail(f"Scout distance cannot be negative (got {cost})")
        if target.explored:
            return self._fail(f"Hex {target_key} has already been explored", EventType.WARNING)
        if target.blocked:
            return self._fail(f"Hex {target_key} is blocked and cannot be scouted", EventType.WARNING)
        if player.supply_points < cost:
            return self._fail(
                f"Not enough SP to scout (need {cost}, have {player.supply_points})"
            )

        sp_change, _ = self._apply(index, -cost, 0, f"Scouted hex {target_key}")
        message = f"{player.name} scouted {target_key} (cost: {cost} SP)"
        self.add_event(message, EventType.ACTION)
        explored = self.explore_hex(target_key, index)
        return OperationResult(
            success=True,
            message=message,
            sp_change=sp_change + explored.sp_change,
            cp_change=explored.cp_change,
        )

    def _search(self, index: int, params: dict[str, Any]) -> OperationResult:
        player = self.state.players[index]
        location, _ = self._hex_effects(self.state.get_hex(player.position.key))

        sp_gain = cp_gain = 0
        if location is not None and location.effect == "searchSP":
            sp_gain = max(0, resolve_value(location.value or DEFAULT_SEARCH_SP, self._random))
        elif location is not None and location.effect == "searchCP":
            cp_gain = max(0, resolve_value(location.value or DEFAULT_SEARCH_CP, self._random))

        if not sp_gain and not cp_gain:
            message = f"{player.name} searched but found nothing"
            self.add_event(message, EventType.ACTION)
            return OperationResult(success=True, message=message)

        sp_change, cp_change = self._apply(index, sp_gain, cp_gain, "Search action")
        reward = f"+{sp_change} SP" if sp_gain else f"+{cp_change} CP"
        message = f"{player.name} searched and found: {reward}"
        self.add_event(message, EventType.ACTION)
        logger.info(message)
        return OperationResult(
            success=True, message=message, sp_change=sp_change, cp_change=cp_change
        )

    def _encamp(self, index: int, params: dict[str, Any]) -> OperationResult:
        player = self.state.players[index]
        position = player.position
        if any(p.has_base_at(position) or p.has_camp_at(position) for p in self.state.players):
            return self._fail("Cannot build camp here - already occupied")

        cost = params.get("cost")
        if cost is None:
            cost = self.calculate_encamp_cost(index)
        if cost is None or cost < 0:
            return self._fail(f"Invalid encamp cost: {cost}")

        location, condition = self._hex_effects(self.state.get_hex(position.key))
        if location is not None and location.effect == "freeEncamp":
            cost = 0
        if condition is not None and condition.effect == "cheapEncamp":
            cost = max(0, cost - 1)

        if player.supply_points < cost:
            return self._fail(
                f"Not enough SP to encamp (need {cost}, have {player.supply_points})"
            )

        sp_change, _ = self._apply(index, -cost, 0, f"Built camp at hex {position.key}")
        updated = self.state.players[index]
        self._set_player(index, updated.model_copy(update={"camps": [*updated.camps, position]}))

        message = f"{player.name} built a camp at {position.key} (cost: {cost} SP)"
        self.add_event(message, EventType.ACTION)
        logger.info(message)
        return OperationResult(success=True, message=message, sp_change=sp_change)

    def _demolish(self, index: int, params: dict[str, Any]) -> OperationResult:
        player = self.state.players[index]
        position = player.position
        owner = next(
            (p for p in self.state.players if p.id != player.id and p.has_camp_at(position)),
            None,
        )
        if owner is None:
            return self._fail(f"No enemy camp to demolish at {position.key}")

        remaining = [camp for camp in owner.camps if camp != position]
        self._set_player(owner.id, owner.model_copy(update={"camps": remaining}))

        message = f"{player.name} demolished {owner.name}'s camp at {position.key}!"
        self.add_event(message, EventType.ACTION)
        logger.info(message)
        return OperationResult(success=True, message=message)

    def calculate_encamp_cost(self, player_index: int) -> Optional[int]:
        """Distance from a player to their nearest base or camp (None if unknown player)."""
        player = self.state.get_player(player_index)
        if player is None:
            return None
        structures = player.structures()
        if not structures:
            return None
        return min(distance(player.position, s) for s in structures)

    # =========================================================================
    # Battles and player records
    # =========================================================================

    def record_battle(
        self,
        result: Union[BattleResult, str],
        operatives_killed: int = 0,
    ) -> OperationResult:
        """Record the current player's battle result for this turn."""
        refusal = self._check_active()
        if refusal:
            return refusal

        if not isinstance(result, BattleResult):
            try:
                result = parse_battle_result(str(result))
            except ValueError as e:
                return self._fail(str(e))
        if operatives_killed < 0:
            return self._fail(f"Operatives killed cannot be negative (got {operatives_killed})")

        index = self._acting_index()
        reward = BATTLE_REWARDS[result]
        sp_change, cp_change = self._apply(
            index, reward.sp_gain, reward.cp_gain, f"Battle result: {result.value}"
        )
        player = self.state.players[index]
        self._set_player(
            index,
            player.model_copy(
                update={
                    "games_played": player.games_played + 1,
                    "games_won": player.games_won + (1 if result == BattleResult.VICTORY else 0),
                    "games_lost": player.games_lost + (1 if result == BattleResult.DEFEAT else 0),
                    "operatives_killed": player.operatives_killed + operatives_killed,
                }
            ),
        )
        self.state.battle_recorded = True

        message = f"{player.name}: {result.value} (+{cp_change} CP, +{sp_change} SP)"
        self.add_event(message, EventType.BATTLE)
        logger.info(message)
        return OperationResult(
            success=True, message=message, sp_change=sp_change, cp_change=cp_change
        )

    def adjust_resources(
        self,
        player_index: int,
        sp_delta: int = 0,
        cp_delta: int = 0,
        reason: str = "Manual adjustment",
    ) -> OperationResult:
        """Apply an explicit resource adjustment (penalties, corrections) through the ledger.

        Campaign Points are not floored, so penalties can take them below zero.
        """
        if self.state.get_player(player_index) is None:
            return self._fail(f"Unknown player {player_index}")
        sp_change, cp_change = self._apply(player_index, sp_delta, cp_delta, reason)
        name = self.state.players[player_index].name
        message = f"{name} adjusted: {sp_change:+d} SP, {cp_change:+d} CP ({reason})"
        self.add_event(message, EventType.REWARD)
        return OperationResult(
            success=True, message=message, sp_change=sp_change, cp_change=cp_change
        )

    def update_player(self, player_index: int, updates: dict[str, Any]) -> OperationResult:
        """Merge non-ledger fields into a player record (e.g. name edits).

        Supply and Campaign Points are refused here; they change through
        adjust_resources so every change lands in the history. The starting
        base must stay first in ``bases``. The merged record is re-validated.
        """
        player = self.state.get_player(player_index)
        if player is None:
            return self._fail(f"Unknown player {player_index}")
        protected = PROTECTED_PLAYER_FIELDS.intersection(updates)
        if protected:
            return self._fail(
                f"Cannot update protected fields: {sorted(protected)} "
                "(use adjust_resources for SP/CP changes)"
            )
        unknown = set(updates) - set(Player.model_fields)
        if unknown:
            return self._fail(f"Unknown player fields: {sorted(unknown)}")

        try:
            merged = Player.model_validate({**player.model_dump(), **updates})
        except ValueError as e:
            return self._fail(f"Invalid player update: {e}")
        if player.bases and merged.bases[:1] != player.bases[:1]:
            return self._fail(f"{player.name}'s starting base cannot be removed or replaced")
        self._set_player(player_index, merged)
        return OperationResult(success=True, message=f"Updated {merged.name}")

    # =========================================================================
    # Read accessors
    # =========================================================================

    def get_current_state(self) -> CampaignState:
        """Get a deep copy of the current campaign state."""
        return self.state.model_copy(deep=True)

    def get_current_player(self) -> Optional[Player]:
        return self.state.current_player

    def get_priority(self) -> list[Player]:
        """Players in priority order, writing the computed priority back to the state."""
        ordered = determine_priority(self.state.players)
        for ranked in ordered:
            self._set_player(
                ranked.id, self.state.players[ranked.id].model_copy(update={"priority": ranked.priority})
            )
        return ordered

    def needs_roll_off(self) -> bool:
        return needs_roll_off(self.state.players)

    def describe_hex(self, hex_key: str) -> Optional[dict[str, Any]]:
        """Presentation view of a hex, with resolved table entries if explored."""
        hex_obj = self.state.get_hex(hex_key)
        if hex_obj is None:
            return None
        location, condition = self._hex_effects(hex_obj)
        occupants = [p.id for p in self.state.players if p.position == hex_obj.position]
        return {
            "id": hex_key,
            "row": hex_obj.row,
            "col": hex_obj.col,
            "type": hex_obj.type.value,
            "explored": hex_obj.explored,
            "blocked": hex_obj.blocked,
            "explored_by": list(hex_obj.explored_by),
            "location": location.model_dump() if location else None,
            "condition": condition.model_dump() if condition else None,
            "base_owner": next(
                (p.id for p in self.state.players if p.has_base_at(hex_obj.position)), None
            ),
            "camp_owner": next(
                (p.id for p in self.state.players if p.has_camp_at(hex_obj.position)), None
            ),
            "occupants": occupants,
        }

    def get_summary(self) -> dict[str, Any]:
        """Compact campaign summary for presentation layers."""
        state = self.state
        current = state.current_player
        return {
            "campaign_name": state.campaign_name,
            "game_started": state.game_started,
            "game_ended": state.game_ended,
            "solo_mode": state.solo_mode,
            "round": state.current_round,
            "phase": state.current_phase.value,
            "current_player": current.name if current else None,
            "threat_level": state.threat_level,
            "threat_name": threat_level_name(state.threat_level),
            "target_threat_level": state.target_threat_level,
            "battle_recorded": state.battle_recorded,
            "map": state.map_config.name if state.map_config else None,
            "explored_hexes": sum(1 for h in state.hexes.values() if h.explored),
            "total_hexes": len(state.hexes),
            "players": [
                {
                    "id": p.id,
                    "name": p.name,
                    "kill_team_name": p.kill_team_name,
                    "position": p.position.key,
                    "supply_points": p.supply_points,
                    "campaign_points": p.campaign_points,
                    "bases": [b.key for b in p.bases],
                    "camps": [c.key for c in p.camps],
                    "explored_hexes": p.explored_hexes,
                    "games_played": p.games_played,
                }
                for p in state.players
            ],
        }


def create_campaign(
    player_count: int,
    solo_mode: bool = False,
    player_names: Optional[list[str]] = None,
    target_threat_level: int = DEFAULT_TARGET_THREAT,
    campaign_name: str = "",
    random_seed: Optional[int] = None,
) -> CampaignEngine:
    """Create and start a new campaign.

    Raises:
        ValueError: If player_count or target_threat_level is unsupported
    """
    engine = CampaignEngine(random_seed=random_seed)
    engine.start_game(
        player_count,
        solo_mode=solo_mode,
        player_names=player_names,
        target_threat_level=target_threat_level,
        campaign_name=campaign_name,
    )
    return engine
