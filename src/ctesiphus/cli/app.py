"""Ctesiphus command-line interface.

Each sub-command loads a campaign through the session layer, runs one
operation, prints the events it produced and saves the campaign again.

Usage:
    ctesiphus new winter --players 3 --names Alice Bob Cara
    ctesiphus show winter
    ctesiphus move winter 0 1,2
    ctesiphus next winter
    ctesiphus battle winter victory --kills 3
    ctesiphus action winter scout --target 2,2
    ctesiphus standings winter

Exit codes: 0 on success, 1 when the campaign is missing, fails validation or
the operation is refused.
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from typing import Optional

from ctesiphus.engine.campaign_engine import CampaignEngine, OperationResult
from ctesiphus.engine.endings import VICTORY_CATEGORIES, category_results, overall_standings
from ctesiphus.engine.hexgrid import bounds_of, decode_id, distance, shortest_path
from ctesiphus.models.actions import ActionType
from ctesiphus.models.state import Event
from ctesiphus.parameters import DEFAULT_TARGET_THREAT
from ctesiphus.storage import (
    CampaignLoadError,
    CampaignRepository,
    get_campaign_repository,
    load_engine,
    save_engine,
)


def format_event(event: Event) -> str:
    return f"[R{event.round} {event.phase.label}] {event.type.value}: {event.message}"


def print_events(events: list[Event]) -> None:
    for event in events:
        print(format_event(event))


def print_summary(engine: CampaignEngine) -> None:
    """Human-readable campaign overview."""
    summary = engine.get_summary()
    title = summary["campaign_name"] or "Unnamed campaign"
    print("=" * 60)
    print(title)
    print("=" * 60)
    status = "ENDED" if summary["game_ended"] else f"Round {summary['round']}, {summary['phase']} phase"
    print(f"Status: {status}")
    print(
        f"Threat: {summary['threat_level']}/{summary['target_threat_level']} "
        f"({summary['threat_name']})"
    )
    if summary["current_player"] and not summary["game_ended"]:
        print(f"Current player: {summary['current_player']}")
    print(f"Explored: {summary['explored_hexes']}/{summary['total_hexes']} hexes")
    print("-" * 60)
    for p in summary["players"]:
        camps = ", ".join(p["camps"]) or "none"
        print(
            f"  {p['id']}: {p['name']:<12} at {p['position']:<5} "
            f"SP {p['supply_points']:>2}  CP {p['campaign_points']:>3}  camps: {camps}"
        )


def _open(repo: CampaignRepository, campaign_id: str, seed: Optional[int]) -> Optional[CampaignEngine]:
    """Load a campaign, reporting problems on stderr."""
    rng = random.Random(seed)
    try:
        engine = load_engine(repo, campaign_id, rng=rng)
    except CampaignLoadError as e:
        print(f"Error: campaign {campaign_id} is invalid:", file=sys.stderr)
        for issue in e.issues:
            print(f"  - {issue}", file=sys.stderr)
        return None
    if engine is None:
        print(f"Error: campaign not found: {campaign_id}", file=sys.stderr)
    return engine


def _finish(
    repo: CampaignRepository,
    campaign_id: str,
    engine: CampaignEngine,
    result: OperationResult,
    events_before: int,
) -> int:
    """Print new events, save and turn the operation result into an exit code."""
    print_events(engine.state.event_log[events_before:])
    saved = save_engine(repo, campaign_id, engine)
    if not saved.success:
        print(f"Error: failed to save campaign: {saved.error}", file=sys.stderr)
        return 1
    return 0 if result.success else 1


# =============================================================================
# Sub-commands
# =============================================================================


def cmd_new(args: argparse.Namespace, repo: CampaignRepository) -> int:
    if repo.load_campaign(args.campaign_id) is not None and not args.force:
        print(
            f"Error: campaign {args.campaign_id} already exists (use --force to overwrite)",
            file=sys.stderr,
        )
        return 1

    engine = CampaignEngine(rng=random.Random(args.seed))
    try:
        engine.start_game(
            args.players,
            solo_mode=args.solo,
            player_names=args.names,
            target_threat_level=args.target,
            campaign_name=args.name or args.campaign_id,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return _finish(repo, args.campaign_id, engine, OperationResult(success=True), 0)


def cmd_show(args: argparse.Namespace, repo: CampaignRepository) -> int:
    engine = _open(repo, args.campaign_id, args.seed)
    if engine is None:
        return 1
    if args.json:
        print(json.dumps(engine.get_summary(), indent=2))
    else:
        print_summary(engine)
        if args.events:
            print("-" * 60)
            print_events(engine.state.event_log[-args.events:])
    return 0


def cmd_next(args: argparse.Namespace, repo: CampaignRepository) -> int:
    engine = _open(repo, args.campaign_id, args.seed)
    if engine is None:
        return 1
    before = len(engine.state.event_log)
    return _finish(repo, args.campaign_id, engine, engine.next_phase(), before)


def cmd_move(args: argparse.Namespace, repo: CampaignRepository) -> int:
    engine = _open(repo, args.campaign_id, args.seed)
    if engine is None:
        return 1
    before = len(engine.state.event_log)

    cost = args.cost
    if cost is None:
        cost = _path_cost(engine, args.player, args.hex)
        if cost is None:
            print(f"Error: no path from player {args.player} to {args.hex}", file=sys.stderr)
            return 1

    result = engine.move_player(args.player, args.hex, cost)
    return _finish(repo, args.campaign_id, engine, result, before)


def _path_cost(engine: CampaignEngine, player_index: int, hex_key: str) -> Optional[int]:
    """Number of steps on the shortest unblocked path (None if unreachable)."""
    state = engine.state
    player = state.get_player(player_index)
    if player is None or state.map_config is None:
        return None
    try:
        target = decode_id(hex_key)
    except ValueError:
        return None
    blocked = {h.position for h in state.hexes.values() if h.blocked}
    path = shortest_path(player.position, target, bounds_of(state.map_config), blocked)
    return None if path is None else len(path)


def cmd_explore(args: argparse.Namespace, repo: CampaignRepository) -> int:
    engine = _open(repo, args.campaign_id, args.seed)
    if engine is None:
        return 1
    before = len(engine.state.event_log)
    result = engine.explore_hex(args.hex, args.player)
    return _finish(repo, args.campaign_id, engine, result, before)


def cmd_action(args: argparse.Namespace, repo: CampaignRepository) -> int:
    engine = _open(repo, args.campaign_id, args.seed)
    if engine is None:
        return 1
    before = len(engine.state.event_log)

    action = args.action.upper()
    params: dict = {}
    if action == ActionType.SCOUT.value:
        params["target_hex"] = args.target
        params["distance"] = args.distance
        if args.target and args.distance is None:
            params["distance"] = _scout_distance(engine, args.target)
    elif action == ActionType.ENCAMP.value and args.cost is not None:
        params["cost"] = args.cost

    result = engine.perform_action(action, params)
    return _finish(repo, args.campaign_id, engine, result, before)


def _scout_distance(engine: CampaignEngine, hex_key: str) -> Optional[int]:
    player = engine.get_current_player()
    try:
        target = decode_id(hex_key)
    except ValueError:
        return None
    if player is None:
        return None
    return distance(player.position, target)


def cmd_battle(args: argparse.Namespace, repo: CampaignRepository) -> int:
    engine = _open(repo, args.campaign_id, args.seed)
    if engine is None:
        return 1
    before = len(engine.state.event_log)
    result = engine.record_battle(args.result, operatives_killed=args.kills)
    return _finish(repo, args.campaign_id, engine, result, before)


def cmd_block(args: argparse.Namespace, repo: CampaignRepository) -> int:
    engine = _open(repo, args.campaign_id, args.seed)
    if engine is None:
        return 1
    before = len(engine.state.event_log)
    return _finish(repo, args.campaign_id, engine, engine.toggle_hex_blocked(args.hex), before)


def cmd_priority(args: argparse.Namespace, repo: CampaignRepository) -> int:
    engine = _open(repo, args.campaign_id, args.seed)
    if engine is None:
        return 1
    for player in engine.get_priority():
        print(
            f"  {player.priority}. {player.name} "
            f"(CP {player.campaign_points}, SP {player.supply_points})"
        )
    if engine.needs_roll_off():
        print("Tied for first priority: settle the order with a roll-off.")
    saved = save_engine(repo, args.campaign_id, engine)
    return 0 if saved.success else 1


def cmd_standings(args: argparse.Namespace, repo: CampaignRepository) -> int:
    engine = _open(repo, args.campaign_id, args.seed)
    if engine is None:
        return 1
    players = engine.state.players
    for category, ranked in category_results(players).items():
        definition = VICTORY_CATEGORIES[category]
        leader = ranked[0] if ranked else None
        value = getattr(leader, definition.stat) if leader else "-"
        print(f"  {definition.title:<11} {definition.description:<30} {leader.name if leader else '-'} ({value})")
    print("-" * 60)
    for position, standing in enumerate(overall_standings(players), start=1):
        print(f"  {position}. {standing.name:<12} {standing.points} pts")
    return 0


def cmd_list(args: argparse.Namespace, repo: CampaignRepository) -> int:
    campaigns = repo.list_campaigns()
    if not campaigns:
        print("No campaigns found.")
        return 0
    for c in campaigns:
        status = "ended" if c["game_ended"] else f"round {c['round']}"
        print(f"  {c['id']:<20} {c['campaign_name']:<24} {status:<10} threat {c['threat_level']}")
    return 0


# =============================================================================
# Argument parsing
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ctesiphus",
        description="Track a hex-crawl kill team campaign",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for dice rolls")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p = subparsers.add_parser("new", help="Start a new campaign")
    p.add_argument("campaign_id", help="Campaign identifier")
    p.add_argument("--players", type=int, default=2, help="Number of players, 2-6 (default: 2)")
    p.add_argument("--names", nargs="*", default=None, help="Player names")
    p.add_argument("--solo", action="store_true", help="Enable solo rules")
    p.add_argument(
        "--target",
        type=int,
        default=DEFAULT_TARGET_THREAT,
        help=f"Threat level that ends the campaign (default: {DEFAULT_TARGET_THREAT})",
    )
    p.add_argument("--name", default=None, help="Display name of the campaign")
    p.add_argument("--force", action="store_true", help="Overwrite an existing campaign")
    p.set_defaults(func=cmd_new)

    p = subparsers.add_parser("show", help="Show campaign status")
    p.add_argument("campaign_id")
    p.add_argument("--json", action="store_true", help="Print the summary as JSON")
    p.add_argument("--events", type=int, default=0, help="Also print the last N events")
    p.set_defaults(func=cmd_show)

    p = subparsers.add_parser("next", help="Advance to the next phase")
    p.add_argument("campaign_id")
    p.set_defaults(func=cmd_next)

    p = subparsers.add_parser("move", help="Move a player to a hex")
    p.add_argument("campaign_id")
    p.add_argument("player", type=int, help="Player index")
    p.add_argument("hex", help="Target hex id, e.g. 1,2")
    p.add_argument("--cost", type=int, default=None, help="SP cost (default: path length)")
    p.set_defaults(func=cmd_move)

    p = subparsers.add_parser("explore", help="Explore a hex")
    p.add_argument("campaign_id")
    p.add_argument("hex", help="Hex id, e.g. 1,2")
    p.add_argument("--player", type=int, default=None, help="Exploring player (default: current)")
    p.set_defaults(func=cmd_explore)

    p = subparsers.add_parser("action", help="Perform a campaign action")
    p.add_argument("campaign_id")
    p.add_argument("action", choices=[a.value.lower() for a in ActionType])
    p.add_argument("--target", default=None, help="Scout target hex")
    p.add_argument("--distance", type=int, default=None, help="Scout distance (default: hex distance)")
    p.add_argument("--cost", type=int, default=None, help="Encamp cost override")
    p.set_defaults(func=cmd_action)

    p = subparsers.add_parser("battle", help="Record the current player's battle result")
    p.add_argument("campaign_id")
    p.add_argument("result", help="victory, draw, defeat or bye")
    p.add_argument("--kills", type=int, default=0, help="Enemy operatives killed")
    p.set_defaults(func=cmd_battle)

    p = subparsers.add_parser("priority", help="Show turn priority")
    p.add_argument("campaign_id")
    p.set_defaults(func=cmd_priority)

    p = subparsers.add_parser("standings", help="Show victory categories and standings")
    p.add_argument("campaign_id")
    p.set_defaults(func=cmd_standings)

    p = subparsers.add_parser("list", help="List stored campaigns")
    p.set_defaults(func=cmd_list)

    p = subparsers.add_parser("block", help="Toggle whether a hex is blocked")
    p.add_argument("campaign_id")
    p.add_argument("hex")
    p.set_defaults(func=cmd_block)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    repo = get_campaign_repository()
    return args.func(args, repo)


if __name__ == "__main__":
    sys.exit(main())
