"""Immutable scene description.

A Scene is plain data: named materials shared by reference, spheres,
checkerboard floors, point lights and a background color. It holds no Taichi
state; SceneManager.load_scene() uploads it into the Taichi fields the
renderer reads, which keeps the renderer usable with any synthetic scene.

Example:
    >>> red = Material("red", albedo=(1.4, 0.3, 0.0, 0.0), diffuse_color=(0.3, 0.1, 0.1),
    ...                specular_exponent=10.0)
    >>> scene = Scene(
    ...     spheres=(SceneSphere(center=(0.0, 0.0, -16.0), radius=2.0, material=red),),
    ...     lights=((-20.0, 20.0, 20.0),),
    ... )
"""

from dataclasses import dataclass, field

Color = tuple[float, float, float]
Point = tuple[float, float, float]

# Color of rays that leave the scene or run out of depth
DEFAULT_BACKGROUND: Color = (0.2, 0.7, 0.8)


@dataclass(frozen=True)
class Material:
    """A named Phong material.

    Attributes:
        name: Human-readable name, used for bookkeeping only.
        refractive_index: Index of refraction (>= 1.0).
        albedo: Weights of the diffuse, specular, reflective and refractive
            contributions. The default makes a purely diffuse surface with
            twice the base color.
        diffuse_color: Diffuse base color (RGB).
        specular_exponent: Phong shininess (>= 0).
    """

    name: str
    refractive_index: float = 1.0
    albedo: tuple[float, float, float, float] = (2.0, 0.0, 0.0, 0.0)
    diffuse_color: Color = (0.0, 0.0, 0.0)
    specular_exponent: float = 0.0


@dataclass(frozen=True)
class SceneSphere:
    """A sphere with its material."""

    center: Point
    radius: float
    material: Material


@dataclass(frozen=True)
class SceneCheckerboard:
    """A bounded horizontal checkerboard floor.

    Attributes:
        height: The y coordinate of the floor.
        half_extent_x: The floor covers |x| < half_extent_x.
        z_min: The floor covers z > z_min.
        z_max: The floor covers z < z_max.
        odd_material: Material of tiles with odd parity.
        even_material: Material of tiles with even parity.
    """

    height: float = -4.0
    half_extent_x: float = 10.0
    z_min: float = -30.0
    z_max: float = -10.0
    odd_material: Material = field(
        default_factory=lambda: Material("checker_light", diffuse_color=(0.3, 0.3, 0.3))
    )
    even_material: Material = field(
        default_factory=lambda: Material("checker_dark", diffuse_color=(0.3, 0.2, 0.1))
    )


@dataclass(frozen=True)
class Scene:
    """Everything the renderer needs besides the camera.

    Attributes:
        spheres: Spheres in the scene.
        checkerboards: Checkerboard floors in the scene.
        lights: Point light positions; every light has intensity 1.0.
        background: Color returned for rays that hit nothing.
    """

    spheres: tuple[SceneSphere, ...] = ()
    checkerboards: tuple[SceneCheckerboard, ...] = ()
    lights: tuple[Point, ...] = ()
    background: Color = DEFAULT_BACKGROUND

    @property
    def materials(self) -> tuple[Material, ...]:
        """Distinct materials used by the scene, in first-use order."""
        seen: dict[Material, None] = {}
        for board in self.checkerboards:
            seen.setdefault(board.odd_material)
            seen.setdefault(board.even_material)
        for sphere in self.spheres:
            seen.setdefault(sphere.material)
        return tuple(seen)
