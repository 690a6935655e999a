"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with geometric ray-sphere intersection
    checkerboard: Bounded horizontal plane with alternating tile materials

All intersection routines are Taichi functions (@ti.func) and share one
contract:
    hit, t = intersect_shape(ray_origin, ray_direction, shape_data)
so the scene can take the nearest hit across every primitive kind.
"""

from .checkerboard import (
    Checkerboard,
    checkerboard_material_id,
    checkerboard_normal,
    intersect_checkerboard,
)
from .sphere import T_EPSILON, Sphere, intersect_sphere, make_sphere, sphere_normal

__all__ = [
    "Sphere",
    "intersect_sphere",
    "make_sphere",
    "sphere_normal",
    "Checkerboard",
    "intersect_checkerboard",
    "checkerboard_material_id",
    "checkerboard_normal",
    "T_EPSILON",
]
