"""Camera module for primary ray generation.

Components:
    pinhole: Pinhole camera looking down -z with a vertical field of view

Ray generation is a Taichi function so every pixel of the render kernel
builds its own primary ray in parallel.
"""

from .pinhole import (
    PinholeCamera,
    get_camera_info,
    get_primary_ray,
    setup_camera,
)

__all__ = [
    "PinholeCamera",
    "setup_camera",
    "get_primary_ray",
    "get_camera_info",
]
