"""Base placement rules for Ctesiphus.

Bases must sit on surface hexes, never share a hex, and keep a minimum
distance from each other that depends on the table size.
"""

from __future__ import annotations

import math

from ctesiphus.engine.hexgrid import distance
from ctesiphus.models.state import HexPosition, MapConfig


def minimum_base_distance(player_count: int) -> int:
    """Minimum hexes between bases: 2 on the small maps (<= 3 players), else 1."""
    if player_count <= 3:
        return 2
    return 1


def are_bases_too_close(a: HexPosition, b: HexPosition, min_distance: int) -> bool:
    return distance(a, b) < min_distance


def is_valid_base_placement(
    position: HexPosition,
    existing_bases: list[HexPosition],
    player_count: int,
    is_surface: bool,
) -> bool:
    """Check a proposed base position against the placement rules."""
    if not is_surface:
        return False

    min_distance = minimum_base_distance(player_count)
    for existing in existing_bases:
        if position == existing:
            return False
        if are_bases_too_close(position, existing, min_distance):
            return False
    return True


def suggested_base_positions(map_config: MapConfig, player_count: int) -> list[HexPosition]:
    """Evenly spaced starting positions along row 0.

    spacing = floor(cols / player_count); player i sits at
    col = min(floor(spacing * i + spacing / 2), cols - 1).
    """
    spacing = map_config.cols // player_count
    return [
        HexPosition(row=0, col=min(math.floor(spacing * i + spacing / 2), map_config.cols - 1))
        for i in range(player_count)
    ]
