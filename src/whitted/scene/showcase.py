"""Showcase scene: eight spheres over a checkerboard floor.

The scene has:
- A 20 x 20 checkerboard floor at y = -4, spanning z from -30 to -10
- Eight spheres, each with its own material (ivory, emerald, sapphire,
  pearl, gold, ruby, amethyst, turquoise)
- Three white point lights
- A sky-blue background

It is rendered at 1024 x 768 with a vertical field of view of 1.05 rad
(about 60 degrees).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.scene.showcase import create_showcase_scene
    >>> from src.whitted.core.renderer import render
    >>>
    >>> scene, camera = create_showcase_scene()
    >>> image = render(scene, camera)
"""

from src.whitted.camera.pinhole import PinholeCamera
from src.whitted.scene.model import Material, Scene, SceneCheckerboard, SceneSphere

# =============================================================================
# Image Parameters
# =============================================================================

IMAGE_WIDTH = 1024
IMAGE_HEIGHT = 768
FIELD_OF_VIEW = 1.05  # radians, about 60 degrees

# =============================================================================
# Materials
# =============================================================================

IVORY = Material("ivory", 1.0, (0.9, 0.5, 0.1, 0.0), (0.4, 0.4, 0.3), 50.0)
GLASS = Material("glass", 1.5, (0.0, 0.9, 0.1, 0.8), (0.6, 0.7, 0.8), 125.0)
RED_RUBBER = Material("red_rubber", 1.0, (1.4, 0.3, 0.0, 0.0), (0.3, 0.1, 0.1), 10.0)
MIRROR = Material("mirror", 1.0, (0.0, 16.0, 0.8, 0.0), (1.0, 1.0, 1.0), 1425.0)
GOLD = Material("gold", 1.2, (0.8, 0.6, 0.0, 0.0), (0.7, 0.5, 0.2), 80.0)
EMERALD = Material("emerald", 1.4, (0.1, 0.9, 0.0, 0.0), (0.3, 0.8, 0.4), 100.0)
SAPPHIRE = Material("sapphire", 1.6, (0.0, 0.2, 0.8, 0.0), (0.2, 0.5, 0.7), 150.0)
PEARL = Material("pearl", 1.2, (0.9, 0.9, 0.8, 0.0), (0.8, 0.8, 0.7), 20.0)
RUBY = Material("ruby", 1.7, (0.6, 0.0, 0.1, 0.0), (0.8, 0.2, 0.2), 120.0)
AMETHYST = Material("amethyst", 1.5, (0.3, 0.0, 0.8, 0.0), (0.6, 0.1, 0.7), 90.0)
TURQUOISE = Material("turquoise", 1.4, (0.0, 0.7, 0.8, 0.0), (0.2, 0.5, 0.6), 70.0)

MATERIALS = {
    material.name: material
    for material in (
        IVORY,
        GLASS,
        RED_RUBBER,
        MIRROR,
        GOLD,
        EMERALD,
        SAPPHIRE,
        PEARL,
        RUBY,
        AMETHYST,
        TURQUOISE,
    )
}

# =============================================================================
# Geometry and Lights
# =============================================================================

SPHERES = (
    SceneSphere((-3.0, 0.0, -16.0), 2.0, IVORY),
    SceneSphere((-1.0, -1.5, -12.0), 2.0, EMERALD),
    SceneSphere((1.5, -0.5, -18.0), 3.0, SAPPHIRE),
    SceneSphere((7.0, 5.0, -18.0), 4.0, PEARL),
    SceneSphere((2.0, 2.0, -10.0), 1.0, GOLD),
    SceneSphere((0.0, 4.0, -15.0), 1.5, RUBY),
    SceneSphere((-4.0, 1.0, -12.0), 1.8, AMETHYST),
    SceneSphere((6.0, -1.0, -14.0), 2.5, TURQUOISE),
)

LIGHTS = (
    (-20.0, 20.0, 20.0),
    (30.0, 50.0, -25.0),
    (30.0, 20.0, 30.0),
)

FLOOR = SceneCheckerboard(height=-4.0, half_extent_x=10.0, z_min=-30.0, z_max=-10.0)


def create_showcase_scene(
    width: int = IMAGE_WIDTH,
    height: int = IMAGE_HEIGHT,
) -> tuple[Scene, PinholeCamera]:
    """Create the showcase scene and its camera.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A tuple (scene, camera). The camera sits at the origin looking
        down -z with the showcase field of view.
    """
    scene = Scene(
        spheres=SPHERES,
        checkerboards=(FLOOR,),
        lights=LIGHTS,
    )
    camera = PinholeCamera(width=width, height=height, fov=FIELD_OF_VIEW)
    return scene, camera
