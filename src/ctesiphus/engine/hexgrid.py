"""Hex grid math for Ctesiphus.

The campaign map uses offset coordinates (row, col) in an "odd-r" layout:
odd rows are shoved half a hex to the right. Distances are computed by
converting to axial (q, r) and then cube (x, y, z) coordinates:

    q = col - floor(row / 2)        r = row
    x = q   y = -q - r   z = r
    distance = max(|dx|, |dy|, |dz|)

Grid bounds are passed as (max_rows, max_cols); valid positions satisfy
0 <= row < max_rows and 0 <= col < max_cols.

All functions are pure.
"""

from __future__ import annotations

import math
from collections import deque
from typing import Iterable, Optional

from ctesiphus.models.state import HexPosition, MapConfig
from ctesiphus.parameters import HEX_ID_DELIMITER

Bounds = tuple[int, int]

# (d_row, d_col) for even and odd rows respectively
_EVEN_ROW_DIRECTIONS = [(-1, -1), (-1, 0), (0, -1), (0, 1), (1, -1), (1, 0)]
_ODD_ROW_DIRECTIONS = [(-1, 0), (-1, 1), (0, -1), (0, 1), (1, 0), (1, 1)]


def bounds_of(map_config: MapConfig) -> Bounds:
    """Grid bounds of a map configuration."""
    return map_config.rows, map_config.cols


def in_bounds(row: int, col: int, bounds: Bounds) -> bool:
    max_rows, max_cols = bounds
    return 0 <= row < max_rows and 0 <= col < max_cols


# =============================================================================
# Coordinate conversion
# =============================================================================


def offset_to_axial(row: int, col: int) -> tuple[int, int]:
    """Convert offset (row, col) to axial (q, r)."""
    return col - math.floor(row / 2), row


def axial_to_offset(q: int, r: int) -> tuple[int, int]:
    """Convert axial (q, r) back to offset (row, col). Exact inverse of offset_to_axial."""
    return r, q + math.floor(r / 2)


def axial_to_cube(q: int, r: int) -> tuple[int, int, int]:
    return q, -q - r, r


def distance(a: HexPosition, b: HexPosition) -> int:
    """Hex distance between two positions (0 iff same hex)."""
    ax, ay, az = axial_to_cube(*offset_to_axial(a.row, a.col))
    bx, by, bz = axial_to_cube(*offset_to_axial(b.row, b.col))
    return max(abs(ax - bx), abs(ay - by), abs(az - bz))


# =============================================================================
# Neighborhoods
# =============================================================================


def neighbors(position: HexPosition, bounds: Bounds) -> list[HexPosition]:
    """Adjacent hexes inside the bounds (at most 6).

    The direction set depends on row parity because of the shoved-row layout.
    """
    directions = _EVEN_ROW_DIRECTIONS if position.row % 2 == 0 else _ODD_ROW_DIRECTIONS
    result = []
    for d_row, d_col in directions:
        row, col = position.row + d_row, position.col + d_col
        if in_bounds(row, col, bounds):
            result.append(HexPosition(row=row, col=col))
    return result


def hexes_in_range(center: HexPosition, radius: int, bounds: Bounds) -> list[HexPosition]:
    """All in-bounds hexes with 0 < distance <= radius, in row-major order."""
    max_rows, max_cols = bounds
    result = []
    for row in range(max_rows):
        for col in range(max_cols):
            candidate = HexPosition(row=row, col=col)
            if 0 < distance(center, candidate) <= radius:
                result.append(candidate)
    return result


def shortest_path(
    start: HexPosition,
    end: HexPosition,
    bounds: Bounds,
    blocked: Optional[Iterable[HexPosition]] = None,
) -> Optional[list[HexPosition]]:
    """Breadth-first shortest path over the neighbor graph.

    Args:
        start: Starting hex (not included in the result)
        end: Destination hex (included in the result)
        bounds: Grid bounds (max_rows, max_cols)
        blocked: Hexes that cannot be entered

    Returns:
        Ordered hexes from start (exclusive) to end (inclusive), an empty list
        if start == end, or None if end is blocked or unreachable
    """
    if start == end:
        return []
    blocked_set = set(blocked or ())
    if end in blocked_set:
        return None

    came_from: dict[HexPosition, HexPosition] = {}
    visited = {start}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        for neighbor in neighbors(current, bounds):
            if neighbor in visited or neighbor in blocked_set:
                continue
            came_from[neighbor] = current
            if neighbor == end:
                # Reconstruct path
                path = [neighbor]
                while path[-1] in came_from and came_from[path[-1]] != start:
                    path.append(came_from[path[-1]])
                path.reverse()
                return path
            visited.add(neighbor)
            queue.append(neighbor)

    return None


# =============================================================================
# Ids and rendering
# =============================================================================


def encode_id(position: HexPosition) -> str:
    """Stable string id for a position, e.g. "3,4"."""
    return f"{position.row}{HEX_ID_DELIMITER}{position.col}"


def decode_id(hex_id: str) -> HexPosition:
    """Parse an id produced by encode_id.

    Raises:
        ValueError: If the id is not two non-negative integers joined by the delimiter
    """
    parts = hex_id.split(HEX_ID_DELIMITER)
    if len(parts) != 2 or not all(p.strip().isdigit() for p in parts):
        raise ValueError(f"Malformed hex id: {hex_id!r}")
    return HexPosition(row=int(parts[0]), col=int(parts[1]))


def to_pixel(position: HexPosition, hex_size: float) -> tuple[float, float]:
    """Pixel centre for pointy-top rendering."""
    width = hex_size * 2
    height = math.sqrt(3) * hex_size
    horiz_dist = width * 0.75
    vert_dist = height

    x = position.col * horiz_dist
    y = position.row * vert_dist + (vert_dist / 2 if position.col % 2 == 1 else 0)
    return x, y


def to_pixel_flat(position: HexPosition, hex_size: float) -> tuple[float, float]:
    """Pixel centre for flat-top rendering."""
    width = math.sqrt(3) * hex_size
    height = hex_size * 2
    horiz_dist = width
    vert_dist = height * 0.75

    x = position.col * horiz_dist + (horiz_dist / 2 if position.row % 2 == 1 else 0)
    y = position.row * vert_dist
    return x, y
