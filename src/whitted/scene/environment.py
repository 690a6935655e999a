"""Point lights and background color.

Lights are bare positions with an implicit intensity of 1.0. The background
color is what a ray returns when it leaves the scene or when the recursion
depth runs out.
"""

import taichi as ti
import taichi.math as tm

from src.whitted.scene.model import DEFAULT_BACKGROUND

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Maximum number of point lights in the scene
MAX_LIGHTS = 64

light_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())
background_color = ti.Vector.field(3, dtype=ti.f32, shape=())


def clear_environment() -> None:
    """Remove all lights and restore the default background color."""
    num_lights[None] = 0
    set_background(DEFAULT_BACKGROUND)


def add_light(position: tuple[float, float, float]) -> int:
    """Add a point light.

    Args:
        position: The light position (x, y, z).

    Returns:
        The index of the added light.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
    """
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_positions[idx] = vec3(position[0], position[1], position[2])
    num_lights[None] = idx + 1
    return idx


def set_background(color: tuple[float, float, float]) -> None:
    """Set the color returned by rays that hit nothing."""
    background_color[None] = vec3(color[0], color[1], color[2])


def get_light_count() -> int:
    """Get the number of lights in the scene."""
    return int(num_lights[None])


def get_background() -> tuple[float, float, float]:
    """Get the current background color."""
    c = background_color[None]
    return (float(c[0]), float(c[1]), float(c[2]))


@ti.func
def get_light_position(light_idx: ti.i32) -> vec3:
    """Position of the light with the given index."""
    return light_positions[light_idx]


@ti.func
def get_background_color() -> vec3:
    """Background color, for use inside kernels."""
    return background_color[None]
