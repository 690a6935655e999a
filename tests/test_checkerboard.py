"""Unit tests for checkerboard intersection and tiling.

Tests cover:
- Ray hitting the floor inside its bounds
- Rays parallel to the floor
- Hits outside the x and z bounds
- Floor behind the ray
- Tile parity and material selection
"""

import math

import pytest
import taichi as ti

ODD_ID = 7
EVEN_ID = 3


def _intersect(origin, direction):
    from src.whitted.geometry.checkerboard import Checkerboard, intersect_checkerboard, vec3

    hit = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f32, shape=())

    @ti.kernel
    def test_kernel(
        ox: ti.f32, oy: ti.f32, oz: ti.f32,
        dx: ti.f32, dy: ti.f32, dz: ti.f32,
    ):
        board = Checkerboard(
            height=-4.0,
            half_extent_x=10.0,
            z_min=-30.0,
            z_max=-10.0,
            odd_material_id=ODD_ID,
            even_material_id=EVEN_ID,
        )
        did_hit, t = intersect_checkerboard(vec3(ox, oy, oz), vec3(dx, dy, dz), board)
        hit[None] = did_hit
        t_val[None] = t

    test_kernel(*origin, *direction)
    return hit[None], t_val[None]


def _unit(v):
    length = math.sqrt(sum(c * c for c in v))
    return tuple(c / length for c in v)


class TestCheckerboardIntersection:
    """Tests for ray-checkerboard intersection."""

    def test_hit_inside_bounds(self):
        """Test a ray from the camera toward the middle of the floor."""
        direction = _unit((0.0, -4.0, -20.0))
        hit, t = _intersect((0.0, 0.0, 0.0), direction)
        assert hit == 1
        assert abs(t - math.sqrt(16.0 + 400.0)) < 1e-3

    def test_parallel_ray_misses(self):
        """Test that a ray running along the floor never hits it."""
        hit, _ = _intersect((0.0, -3.0, 0.0), (0.0, 0.0, -1.0))
        assert hit == 0

    def test_nearly_parallel_ray_misses(self):
        """Test that |direction.y| at or below the epsilon counts as parallel."""
        direction = _unit((0.0, -0.0005, -1.0))
        hit, _ = _intersect((0.0, -3.99, -20.0), direction)
        assert hit == 0

    def test_outside_x_bounds_misses(self):
        """Test a hit point with |x| >= half extent is rejected."""
        direction = _unit((15.0, -4.0, -20.0))
        hit, _ = _intersect((0.0, 0.0, 0.0), direction)
        assert hit == 0

    def test_too_near_in_z_misses(self):
        """Test a hit point with z >= z_max is rejected."""
        direction = _unit((0.0, -4.0, -5.0))
        hit, _ = _intersect((0.0, 0.0, 0.0), direction)
        assert hit == 0

    def test_too_far_in_z_misses(self):
        """Test a hit point with z <= z_min is rejected."""
        direction = _unit((0.0, -4.0, -40.0))
        hit, _ = _intersect((0.0, 0.0, 0.0), direction)
        assert hit == 0

    def test_floor_behind_ray_misses(self):
        """Test a ray pointing up from above the floor misses."""
        hit, _ = _intersect((0.0, 0.0, -20.0), (0.0, 1.0, 0.0))
        assert hit == 0

    def test_hit_from_below(self):
        """Test the floor is hit from underneath as well."""
        hit, t = _intersect((0.0, -10.0, -20.0), (0.0, 1.0, 0.0))
        assert hit == 1
        assert abs(t - 6.0) < 1e-5


class TestCheckerboardTiles:
    """Tests for tile material selection."""

    @pytest.mark.parametrize(
        "x,z,expected",
        [
            # int(0.25 + 1000) + int(-7.75) = 1000 - 7 = 993 (odd)
            (0.5, -15.5, ODD_ID),
            # int(1.25 + 1000) + int(-7.75) = 1001 - 7 = 994 (even)
            (2.5, -15.5, EVEN_ID),
            # int(-2.25 + 1000) + int(-10.25) = 997 - 10 = 987 (odd)
            (-4.5, -20.5, ODD_ID),
            # int(-2.25 + 1000) + int(-11.25) = 997 - 11 = 986 (even)
            (-4.5, -22.5, EVEN_ID),
        ],
    )
    def test_tile_parity(self, x, z, expected):
        """Test the parity rule picks the right tile material."""
        from src.whitted.geometry.checkerboard import (
            Checkerboard,
            checkerboard_material_id,
            vec3,
        )

        result = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel(px: ti.f32, pz: ti.f32):
            board = Checkerboard(
                height=-4.0,
                half_extent_x=10.0,
                z_min=-30.0,
                z_max=-10.0,
                odd_material_id=ODD_ID,
                even_material_id=EVEN_ID,
            )
            result[None] = checkerboard_material_id(board, vec3(px, -4.0, pz))

        test_kernel(x, z)
        assert result[None] == expected

    def test_neighbouring_tiles_alternate(self):
        """Test that stepping one tile in x flips the material."""
        from src.whitted.geometry.checkerboard import (
            Checkerboard,
            checkerboard_material_id,
            vec3,
        )

        results = ti.field(dtype=ti.i32, shape=4)

        @ti.kernel
        def test_kernel():
            board = Checkerboard(
                height=-4.0,
                half_extent_x=10.0,
                z_min=-30.0,
                z_max=-10.0,
                odd_material_id=ODD_ID,
                even_material_id=EVEN_ID,
            )
            for k in ti.static(range(4)):
                results[k] = checkerboard_material_id(
                    board, vec3(-3.0 + 2.0 * k, -4.0, -17.0)
                )

        test_kernel()
        values = [results[k] for k in range(4)]
        for a, b in zip(values, values[1:]):
            assert a != b
