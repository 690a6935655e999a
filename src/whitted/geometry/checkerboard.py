"""Horizontal checkerboard floor with ray-plane intersection.

A checkerboard is a bounded piece of the plane y = height. Its extent is
|x| < half_extent_x and z_min < z < z_max, and the normal always points up.
Tiles are two units wide and alternate between two materials.

Ray-checkerboard intersection:
1. Skip rays (nearly) parallel to the plane.
2. Solve origin.y + t * direction.y = height for t.
3. Keep the hit only if it lies in front of the ray and inside the bounds.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.geometry.checkerboard import Checkerboard
    >>> board = Checkerboard(
    ...     height=-4.0, half_extent_x=10.0, z_min=-30.0, z_max=-10.0,
    ...     odd_material_id=0, even_material_id=1,
    ... )
    >>> # Use intersect_checkerboard within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from .sphere import T_EPSILON

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Offset added to x before truncation so that tiles left of the origin
# keep the same width as the others.
_TILE_OFFSET_X = 1000.0


@ti.dataclass
class Checkerboard:
    """A bounded horizontal checkerboard.

    Attributes:
        height: The y coordinate of the plane.
        half_extent_x: Hits must satisfy |x| < half_extent_x.
        z_min: Hits must satisfy z > z_min.
        z_max: Hits must satisfy z < z_max.
        odd_material_id: Material of tiles with odd parity.
        even_material_id: Material of tiles with even parity.
    """

    height: ti.f32
    half_extent_x: ti.f32
    z_min: ti.f32
    z_max: ti.f32
    odd_material_id: ti.i32
    even_material_id: ti.i32


@ti.func
def intersect_checkerboard(ray_origin: vec3, ray_direction: vec3, board: Checkerboard):
    """Test for ray-checkerboard intersection.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (unit length).
        board: The checkerboard to test against.

    Returns:
        A tuple (hit, t): hit is 1 when the ray crosses the plane beyond
        T_EPSILON inside the board's bounds, and t is the crossing distance.
    """
    did_hit = 0
    hit_t = 0.0

    # Avoid division by zero for rays running along the plane
    if ti.abs(ray_direction.y) > T_EPSILON:
        d = -(ray_origin.y - board.height) / ray_direction.y
        p = ray_origin + ray_direction * d
        if (
            d > T_EPSILON
            and ti.abs(p.x) < board.half_extent_x
            and p.z < board.z_max
            and p.z > board.z_min
        ):
            did_hit = 1
            hit_t = d

    return did_hit, hit_t


@ti.func
def checkerboard_material_id(board: Checkerboard, point: vec3) -> ti.i32:
    """Pick the tile material at a point on the board.

    The tile index along each axis is the scaled coordinate truncated toward
    zero; the sum of the two indices decides the parity.

    Args:
        board: The checkerboard that was hit.
        point: The hit point on the board.

    Returns:
        The material id of the tile containing the point.
    """
    tile_x = ti.cast(0.5 * point.x + _TILE_OFFSET_X, ti.i32)
    tile_z = ti.cast(0.5 * point.z, ti.i32)
    material_id = board.even_material_id
    if (tile_x + tile_z) & 1:
        material_id = board.odd_material_id
    return material_id


@ti.func
def checkerboard_normal() -> vec3:
    """Normal of the checkerboard (always up)."""
    return vec3(0.0, 1.0, 0.0)
