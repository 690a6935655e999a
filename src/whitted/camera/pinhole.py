"""Pinhole camera model for primary ray generation.

The camera sits at a fixed origin and looks down the -z axis. For an image of
width W and height H, pixel index p (row-major, row 0 at the top) gets the
direction

    x = (p mod W + 0.5) - W / 2
    y = -(p div W + 0.5) + H / 2
    z = -H / (2 * tan(fov / 2))

normalized. The sign on y flips the image so that increasing rows go down.
The vertical field of view is given in radians.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.camera.pinhole import PinholeCamera, setup_camera
    >>> camera = PinholeCamera(width=1024, height=768, fov=1.05)
    >>> setup_camera(camera)
    >>> # Use get_primary_ray(pixel, width, height) within a Taichi kernel
"""

import math
from dataclasses import dataclass

import taichi as ti

from src.whitted.core.vector import Ray, make_ray, normalize, vec3

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class PinholeCamera:
    """Configuration for a pinhole camera looking down -z.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Vertical field of view in radians.
        origin: Camera position in world space (x, y, z).
    """

    width: int = 1024
    height: int = 768
    fov: float = 1.05
    origin: tuple[float, float, float] = (0.0, 0.0, 0.0)


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_camera_fov = ti.field(dtype=ti.f32, shape=())


def setup_camera(camera: PinholeCamera) -> None:
    """Upload the camera configuration.

    Args:
        camera: Camera configuration with position and field of view.

    Raises:
        ValueError: If the image size is not positive or the field of view
            is outside (0, pi).
    """
    if camera.width <= 0 or camera.height <= 0:
        raise ValueError(f"Image size must be positive, got {camera.width}x{camera.height}")
    if not 0.0 < camera.fov < math.pi:
        raise ValueError(f"Field of view must be in (0, pi) radians, got {camera.fov}")

    _camera_origin[None] = vec3(camera.origin[0], camera.origin[1], camera.origin[2])
    _camera_fov[None] = camera.fov


# =============================================================================
# Ray Generation
# =============================================================================


@ti.func
def get_primary_ray(pixel: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the primary ray through the center of a pixel.

    Args:
        pixel: Row-major pixel index (0 = top-left).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A Ray from the camera origin with unit direction.
    """
    col = pixel % width
    row = pixel // width
    w = ti.cast(width, ti.f32)
    h = ti.cast(height, ti.f32)

    dir_x = (ti.cast(col, ti.f32) + 0.5) - w / 2.0
    dir_y = -(ti.cast(row, ti.f32) + 0.5) + h / 2.0
    dir_z = -h / (2.0 * ti.tan(_camera_fov[None] / 2.0))

    return make_ray(_camera_origin[None], normalize(vec3(dir_x, dir_y, dir_z)))


# =============================================================================
# Utility Functions
# =============================================================================


def get_camera_info() -> dict[str, object]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with the camera origin and field of view.
    """
    origin_vec = _camera_origin[None]
    return {
        "origin": (float(origin_vec[0]), float(origin_vec[1]), float(origin_vec[2])),
        "fov": float(_camera_fov[None]),
    }
