"""Sphere primitive with geometric ray-sphere intersection.

The intersection uses the geometric formulation: project the sphere center
onto the ray, measure the squared distance from the center to the ray, and
step back and forth along the ray by the half-chord length.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.geometry.sphere import Sphere, intersect_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -16), radius=2.0)
    >>> # Use intersect_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.whitted.core.vector import dot, normalize

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Hits closer than this are ignored so a ray leaving a surface does not
# immediately hit that same surface again.
T_EPSILON = 1e-3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.func
def intersect_sphere(ray_origin: vec3, ray_direction: vec3, sphere: Sphere):
    """Test for ray-sphere intersection.

    With L the vector from the ray origin to the center:
        tca = dot(L, direction)           (center projected onto the ray)
        d2  = dot(L, L) - tca^2           (squared distance center-to-ray)
        thc = sqrt(radius^2 - d2)         (half chord)
    and the candidate distances are tca - thc and tca + thc.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (unit length).
        sphere: The sphere to test against.

    Returns:
        A tuple (hit, t): hit is 1 when one of the candidates lies beyond
        T_EPSILON, and t is the nearest such candidate.
    """
    to_center = sphere.center - ray_origin
    tca = dot(to_center, ray_direction)
    d2 = dot(to_center, to_center) - tca * tca
    r2 = sphere.radius * sphere.radius

    did_hit = 0
    hit_t = 0.0

    if d2 <= r2:
        thc = ti.sqrt(r2 - d2)
        t0 = tca - thc
        t1 = tca + thc
        if t0 > T_EPSILON:
            did_hit = 1
            hit_t = t0
        elif t1 > T_EPSILON:
            did_hit = 1
            hit_t = t1

    return did_hit, hit_t


@ti.func
def sphere_normal(sphere: Sphere, point: vec3) -> vec3:
    """Outward unit normal of the sphere at a surface point."""
    return normalize(point - sphere.center)


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> Sphere:
    """Create a sphere from center and radius."""
    return Sphere(center=center, radius=radius)
