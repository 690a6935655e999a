"""Ray data structure and vector utilities for Whitted ray tracing.

This module provides the Ray dataclass and the vector operations used by the
intersection engine and the shading code. Addition, subtraction, negation,
scalar scaling and component indexing come from ``taichi.math.vec3``; the
functions below add the dot product, the norm, normalization and the two
direction transforms of Whitted shading (mirror reflection and Snell
refraction).

All Taichi functions are meant to be called from within kernels. The plain
Python helper ``normalized`` is used when building scenes and cameras.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 0.0, 0.0)
    >>> direction = ti.math.vec3(0.0, 0.0, -1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

import math

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Unit length for
            every ray the tracer casts.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t."""
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors."""
    return a.x * b.x + a.y * b.y + a.z * b.z


@ti.func
def norm(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector.

    Args:
        v: The input vector.

    Returns:
        sqrt(dot(v, v)).
    """
    return ti.sqrt(dot(v, v))


@ti.func
def normalize(v: vec3) -> vec3:
    """Scale a vector to unit length.

    The result is undefined for a zero vector. Geometry built through the
    scene and camera setup never produces one.

    Args:
        v: The input vector.

    Returns:
        v * (1 / norm(v)).
    """
    return v * (1.0 / norm(v))


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Reflect an incident vector about a normal.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (unit length).

    Returns:
        incident - normal * 2 * dot(incident, normal).
    """
    return incident - normal * 2.0 * dot(incident, normal)


@ti.func
def refract(incident: vec3, normal: vec3, eta_t: ti.f32, eta_i: ti.f32) -> vec3:
    """Refract an incident vector through a surface using Snell's law.

    When the incident direction and the normal point the same way the ray is
    leaving the medium, so the normal is flipped and the two refractive
    indices swap roles.

    Total internal reflection has no refracted ray. In that case the direction
    (1, 0, 0) is returned instead; the caller traces it like any other ray.

    Args:
        incident: The incoming direction vector (unit length).
        normal: The outward surface normal (unit length).
        eta_t: Refractive index of the medium behind the surface.
        eta_i: Refractive index of the medium the ray travels in (1.0 for air).

    Returns:
        The refracted direction, or (1, 0, 0) on total internal reflection.
    """
    cos_i = -tm.clamp(dot(incident, normal), -1.0, 1.0)
    n = normal
    eta_from = eta_i
    eta_to = eta_t
    if cos_i < 0.0:
        # Ray starts inside the object: swap the media
        cos_i = -cos_i
        n = -normal
        eta_from = eta_t
        eta_to = eta_i

    eta = eta_from / eta_to
    k = 1.0 - eta * eta * (1.0 - cos_i * cos_i)

    result = vec3(1.0, 0.0, 0.0)
    if k >= 0.0:
        result = incident * eta + n * (eta * cos_i - ti.sqrt(k))
    return result


# =============================================================================
# Python-side helpers
# =============================================================================


def normalized(v: tuple[float, float, float]) -> tuple[float, float, float]:
    """Normalize a vector given as a Python tuple.

    Args:
        v: The (x, y, z) components.

    Returns:
        The unit vector in the same direction.

    Raises:
        ValueError: If v has zero length.
    """
    length = math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])
    if length == 0.0:
        raise ValueError(f"Cannot normalize zero-length vector {tuple(v)}")
    return (v[0] / length, v[1] / length, v[2] / length)
