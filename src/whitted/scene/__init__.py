"""Scene module for scene description, storage and ray-scene queries.

Components:
    model: Immutable scene description (materials, spheres, floors, lights)
    intersection: Taichi storage of primitives and nearest-hit resolution
    environment: Point lights and background color
    manager: Uploads a scene description into the Taichi storage
    showcase: The eight-sphere showcase scene

Scene data is organized for efficient GPU access:
    - Structure-of-Arrays layout for geometric data
    - Integer material ids resolved through the Phong material registry
"""

from .environment import (
    MAX_LIGHTS,
    add_light,
    clear_environment,
    get_background,
    get_light_count,
    set_background,
)
from .intersection import (
    MAX_CHECKERBOARDS,
    MAX_HIT_DISTANCE,
    MAX_SPHERES,
    SceneHitRecord,
    add_checkerboard,
    add_sphere,
    clear_scene,
    get_checkerboard_count,
    get_sphere_count,
    intersect_scene,
)
from .manager import (
    CheckerboardInfo,
    MaterialInfo,
    SceneManager,
    SphereInfo,
    load_scene,
)
from .model import DEFAULT_BACKGROUND, Material, Scene, SceneCheckerboard, SceneSphere
from .showcase import create_showcase_scene

__all__ = [
    # Scene description
    "Material",
    "Scene",
    "SceneSphere",
    "SceneCheckerboard",
    "DEFAULT_BACKGROUND",
    # Intersection module
    "SceneHitRecord",
    "add_sphere",
    "add_checkerboard",
    "clear_scene",
    "get_sphere_count",
    "get_checkerboard_count",
    "intersect_scene",
    "MAX_SPHERES",
    "MAX_CHECKERBOARDS",
    "MAX_HIT_DISTANCE",
    # Environment module
    "add_light",
    "clear_environment",
    "get_background",
    "get_light_count",
    "set_background",
    "MAX_LIGHTS",
    # Manager module
    "SceneManager",
    "MaterialInfo",
    "SphereInfo",
    "CheckerboardInfo",
    "load_scene",
    # Showcase scene
    "create_showcase_scene",
]
