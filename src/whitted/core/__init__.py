"""Core rendering module.

Components:
    vector: Ray data structure, vector utilities, reflection and refraction
    integrator: Whitted light transport and the parallel render kernel
    renderer: Row-banded rendering with progress callbacks

The integrator traces one primary ray per pixel, shades every hit with the
Phong model, casts shadow rays toward each point light and follows mirror
reflection and Snell refraction up to a fixed depth.
"""

from .vector import (
    Ray,
    dot,
    make_ray,
    norm,
    normalize,
    normalized,
    ray_at,
    reflect,
    refract,
    vec3,
)

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from src.whitted.core.integrator or src.whitted.core.renderer.

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "dot",
    "norm",
    "normalize",
    "normalized",
    "reflect",
    "refract",
]
