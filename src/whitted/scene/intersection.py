"""Scene-level primitive intersection testing.

This module stores every primitive of the scene in Taichi fields, one group
of fields per primitive kind, and resolves the nearest hit across all of
them. Each primitive carries the material id used to shade it; a
checkerboard carries two and picks one per tile.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.scene.intersection import (
    ...     add_sphere, add_checkerboard, intersect_scene, clear_scene
    ... )
    >>> clear_scene()
    >>> add_sphere((0.0, 0.0, -16.0), 2.0, material_id=0)
    >>> add_checkerboard(-4.0, 10.0, -30.0, -10.0, odd_material_id=1, even_material_id=2)
    >>> # Use intersect_scene within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.whitted.geometry.checkerboard import (
    Checkerboard,
    checkerboard_material_id,
    checkerboard_normal,
    intersect_checkerboard,
)
from src.whitted.geometry.sphere import Sphere, intersect_sphere, sphere_normal

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class SceneHitRecord:
    """Record of a ray-scene intersection.

    Attributes:
        hit: Whether the ray intersected any primitive (1 if hit, 0 if miss).
        t: Distance along the ray to the hit. Only valid if hit == 1.
        point: The 3D point where the ray hit the surface.
        normal: Unit surface normal at the hit: outward from the center for
            spheres, straight up for checkerboards.
        material_id: Material of the surface at the hit point, -1 on a miss.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3
    material_id: ti.i32


# Maximum number of primitives supported in the scene
MAX_SPHERES = 1024
MAX_CHECKERBOARDS = 16

# Starting distance of the nearest-hit search
NO_HIT_DISTANCE = 1e10

# Hits at or beyond this distance count as misses
MAX_HIT_DISTANCE = 1000.0

# Sphere storage: Structure of Arrays layout for GPU efficiency
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_material_ids = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Checkerboard storage
checkerboard_heights = ti.field(dtype=ti.f32, shape=MAX_CHECKERBOARDS)
checkerboard_half_extents = ti.field(dtype=ti.f32, shape=MAX_CHECKERBOARDS)
checkerboard_z_min = ti.field(dtype=ti.f32, shape=MAX_CHECKERBOARDS)
checkerboard_z_max = ti.field(dtype=ti.f32, shape=MAX_CHECKERBOARDS)
checkerboard_odd_material_ids = ti.field(dtype=ti.i32, shape=MAX_CHECKERBOARDS)
checkerboard_even_material_ids = ti.field(dtype=ti.i32, shape=MAX_CHECKERBOARDS)
num_checkerboards = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Clear all primitives from the scene.

    Resets the primitive counts to zero. The actual field data is not
    cleared but will be overwritten when new primitives are added.
    """
    num_spheres[None] = 0
    num_checkerboards[None] = 0


def add_sphere(center: tuple[float, float, float], radius: float, material_id: int = 0) -> int:
    """Add a sphere to the scene.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere.
        material_id: The material ID to associate with this sphere.

    Returns:
        The index of the added sphere.

    Raises:
        RuntimeError: If the maximum number of spheres is exceeded.
        ValueError: If the radius is not positive.
    """
    if radius <= 0.0:
        raise ValueError(f"Sphere radius must be positive, got {radius}")

    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    sphere_centers[idx] = vec3(center[0], center[1], center[2])
    sphere_radii[idx] = radius
    sphere_material_ids[idx] = material_id
    num_spheres[None] = idx + 1
    return idx


def add_checkerboard(
    height: float,
    half_extent_x: float,
    z_min: float,
    z_max: float,
    odd_material_id: int = 0,
    even_material_id: int = 0,
) -> int:
    """Add a bounded horizontal checkerboard to the scene.

    Args:
        height: The y coordinate of the plane.
        half_extent_x: The board covers |x| < half_extent_x.
        z_min: The board covers z > z_min.
        z_max: The board covers z < z_max.
        odd_material_id: Material of tiles with odd parity.
        even_material_id: Material of tiles with even parity.

    Returns:
        The index of the added checkerboard.

    Raises:
        RuntimeError: If the maximum number of checkerboards is exceeded.
        ValueError: If the bounds are empty.
    """
    if half_extent_x <= 0.0 or z_min >= z_max:
        raise ValueError(
            f"Checkerboard bounds are empty: half_extent_x={half_extent_x}, "
            f"z range ({z_min}, {z_max})"
        )

    idx = num_checkerboards[None]
    if idx >= MAX_CHECKERBOARDS:
        raise RuntimeError(f"Maximum number of checkerboards ({MAX_CHECKERBOARDS}) exceeded")
    checkerboard_heights[idx] = height
    checkerboard_half_extents[idx] = half_extent_x
    checkerboard_z_min[idx] = z_min
    checkerboard_z_max[idx] = z_max
    checkerboard_odd_material_ids[idx] = odd_material_id
    checkerboard_even_material_ids[idx] = even_material_id
    num_checkerboards[None] = idx + 1
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


def get_checkerboard_count() -> int:
    """Get the number of checkerboards in the scene."""
    return int(num_checkerboards[None])


@ti.func
def _get_checkerboard(idx: ti.i32) -> Checkerboard:
    return Checkerboard(
        height=checkerboard_heights[idx],
        half_extent_x=checkerboard_half_extents[idx],
        z_min=checkerboard_z_min[idx],
        z_max=checkerboard_z_max[idx],
        odd_material_id=checkerboard_odd_material_ids[idx],
        even_material_id=checkerboard_even_material_ids[idx],
    )


@ti.func
def intersect_scene(ray_origin: vec3, ray_direction: vec3) -> SceneHitRecord:
    """Find the nearest surface hit by a ray.

    Tests every checkerboard, then every sphere, keeping the hit with the
    smallest distance. A sphere at exactly the current nearest distance
    replaces the previous hit.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (unit length).

    Returns:
        A SceneHitRecord for the nearest hit. hit is 0 when nothing lies
        closer than MAX_HIT_DISTANCE.
    """
    closest_t = NO_HIT_DISTANCE
    hit_point = vec3(0.0, 0.0, 0.0)
    hit_normal = vec3(0.0, 0.0, 0.0)
    material_id = -1

    for i in range(num_checkerboards[None]):
        board = _get_checkerboard(i)
        did_hit, t = intersect_checkerboard(ray_origin, ray_direction, board)
        if did_hit == 1 and t < closest_t:
            closest_t = t
            hit_point = ray_origin + ray_direction * t
            hit_normal = checkerboard_normal()
            material_id = checkerboard_material_id(board, hit_point)

    for i in range(num_spheres[None]):
        sphere = Sphere(center=sphere_centers[i], radius=sphere_radii[i])
        did_hit, t = intersect_sphere(ray_origin, ray_direction, sphere)
        if did_hit == 1 and t <= closest_t:
            closest_t = t
            hit_point = ray_origin + ray_direction * t
            hit_normal = sphere_normal(sphere, hit_point)
            material_id = sphere_material_ids[i]

    found = 0
    if closest_t < MAX_HIT_DISTANCE:
        found = 1

    return SceneHitRecord(
        hit=found,
        t=closest_t,
        point=hit_point,
        normal=hit_normal,
        material_id=material_id,
    )
