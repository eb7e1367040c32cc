"""Tests for ctesiphus.engine.hexgrid.

Tests cover:
- Offset <-> axial conversion
- Distance on the odd-r layout
- Neighbors on even and odd rows, clipped to the map
- Range queries and breadth-first pathfinding
- Hex id encoding/decoding
"""

import pytest

from ctesiphus.engine.hexgrid import (
    axial_to_offset,
    decode_id,
    distance,
    encode_id,
    hexes_in_range,
    neighbors,
    offset_to_axial,
    shortest_path,
    to_pixel,
    to_pixel_flat,
)
from ctesiphus.models.state import HexPosition

BOUNDS = (5, 5)


def pos(row, col):
    return HexPosition(row=row, col=col)


# =============================================================================
# Coordinates and distance
# =============================================================================


class TestCoordinates:
    """Tests for coordinate conversion."""

    @pytest.mark.parametrize("row,col,expected", [
        (0, 0, (0, 0)),
        (1, 1, (1, 1)),
        (2, 3, (2, 2)),
        (3, 0, (-1, 3)),
    ])
    def test_offset_to_axial(self, row, col, expected):
        assert offset_to_axial(row, col) == expected

    def test_axial_round_trip(self):
        for row in range(6):
            for col in range(6):
                assert axial_to_offset(*offset_to_axial(row, col)) == (row, col)


class TestDistance:
    """Tests for hex distance."""

    def test_same_hex_is_zero(self):
        assert distance(pos(2, 2), pos(2, 2)) == 0

    def test_along_a_row(self):
        assert distance(pos(0, 0), pos(0, 3)) == 3

    def test_symmetric(self):
        assert distance(pos(0, 1), pos(4, 3)) == distance(pos(4, 3), pos(0, 1))

    def test_neighbors_are_distance_one(self):
        for center in (pos(2, 2), pos(1, 1), pos(0, 0), pos(3, 4)):
            for n in neighbors(center, BOUNDS):
                assert distance(center, n) == 1


# =============================================================================
# Neighborhoods
# =============================================================================


class TestNeighbors:
    """Tests for neighbor enumeration."""

    def test_even_row_interior(self):
        result = neighbors(pos(2, 2), BOUNDS)
        assert set(result) == {pos(1, 1), pos(1, 2), pos(2, 1), pos(2, 3), pos(3, 1), pos(3, 2)}

    def test_odd_row_interior(self):
        result = neighbors(pos(1, 1), BOUNDS)
        assert set(result) == {pos(0, 1), pos(0, 2), pos(1, 0), pos(1, 2), pos(2, 1), pos(2, 2)}

    def test_corner_is_clipped(self):
        assert neighbors(pos(0, 0), BOUNDS) == [pos(0, 1), pos(1, 0)]

    def test_never_out_of_bounds(self):
        for row in range(5):
            for col in range(5):
                for n in neighbors(pos(row, col), BOUNDS):
                    assert 0 <= n.row < 5 and 0 <= n.col < 5


class TestRange:
    """Tests for hexes_in_range."""

    def test_radius_one_matches_neighbors(self):
        assert set(hexes_in_range(pos(2, 2), 1, BOUNDS)) == set(neighbors(pos(2, 2), BOUNDS))

    def test_center_excluded(self):
        assert pos(2, 2) not in hexes_in_range(pos(2, 2), 2, BOUNDS)

    def test_row_major_order(self):
        result = hexes_in_range(pos(2, 2), 2, BOUNDS)
        assert result == sorted(result, key=lambda p: (p.row, p.col))


class TestShortestPath:
    """Tests for breadth-first pathfinding."""

    def test_start_equals_end(self):
        assert shortest_path(pos(1, 1), pos(1, 1), BOUNDS) == []

    def test_path_length_equals_distance(self):
        path = shortest_path(pos(0, 0), pos(4, 4), BOUNDS)
        assert path is not None
        assert len(path) == distance(pos(0, 0), pos(4, 4))
        assert path[-1] == pos(4, 4)

    def test_path_is_connected(self):
        path = shortest_path(pos(0, 0), pos(3, 3), BOUNDS)
        previous = pos(0, 0)
        for step in path:
            assert distance(previous, step) == 1
            previous = step

    def test_blocked_destination(self):
        assert shortest_path(pos(0, 0), pos(0, 2), BOUNDS, blocked=[pos(0, 2)]) is None

    def test_unreachable(self):
        assert shortest_path(pos(0, 0), pos(4, 4), BOUNDS, blocked=[pos(0, 1), pos(1, 0)]) is None

    def test_routes_around_blocked(self):
        path = shortest_path(pos(0, 0), pos(0, 2), BOUNDS, blocked=[pos(0, 1)])
        assert path is not None
        assert pos(0, 1) not in path
        assert len(path) > 2


# =============================================================================
# Ids and rendering
# =============================================================================


class TestIds:
    """Tests for hex id encoding."""

    def test_encode(self):
        assert encode_id(pos(2, 3)) == "2,3"

    def test_decode(self):
        assert decode_id("2,3") == pos(2, 3)

    def test_round_trip(self):
        assert decode_id(encode_id(pos(7, 0))) == pos(7, 0)

    @pytest.mark.parametrize("bad", ["", "2", "2,3,4", "a,b", "-1,2"])
    def test_decode_malformed_raises(self, bad):
        with pytest.raises(ValueError, match="Malformed hex id"):
            decode_id(bad)


class TestPixel:
    """Tests for pixel projections."""

    def test_origin(self):
        assert to_pixel(pos(0, 0), 10) == (0, 0)
        assert to_pixel_flat(pos(0, 0), 10) == (0, 0)

    def test_flat_odd_row_offset(self):
        x_even, _ = to_pixel_flat(pos(0, 1), 10)
        x_odd, _ = to_pixel_flat(pos(1, 1), 10)
        assert x_odd > x_even
