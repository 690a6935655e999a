"""Scene manager coordinating primitives, materials and lights.

The SceneManager is the Python-side owner of all Taichi scene storage. It
registers materials, primitives and lights, keeps a readable record of what
was added, and can upload an immutable Scene in one call.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.scene.manager import SceneManager
    >>> scene = SceneManager()
    >>> mat_id = scene.add_material(refractive_index=1.0, albedo=(0.9, 0.5, 0.1, 0.0),
    ...                             diffuse_color=(0.4, 0.4, 0.3), specular_exponent=50.0)
    >>> scene.add_sphere(center=(-3, 0, -16), radius=2, material_id=mat_id)
    >>> scene.add_light((-20, 20, 20))
"""

from dataclasses import dataclass
from typing import Any

from src.whitted.materials.phong import add_phong_material, clear_phong_materials
from src.whitted.scene.environment import add_light, clear_environment, set_background
from src.whitted.scene.intersection import (
    add_checkerboard,
    add_sphere,
    clear_scene,
    get_checkerboard_count,
    get_sphere_count,
)
from src.whitted.scene.model import Material, Scene


@dataclass
class MaterialInfo:
    """Information about a registered material.

    Attributes:
        material_id: The material ID in the Phong registry.
        name: The material name (empty if added without one).
        params: The material parameters as provided during creation.
    """

    material_id: int
    name: str
    params: dict[str, Any]


@dataclass
class SphereInfo:
    """Information about a sphere in the scene."""

    sphere_index: int
    center: tuple[float, float, float]
    radius: float
    material_id: int


@dataclass
class CheckerboardInfo:
    """Information about a checkerboard in the scene."""

    checkerboard_index: int
    height: float
    half_extent_x: float
    z_min: float
    z_max: float
    odd_material_id: int
    even_material_id: int


class SceneManager:
    """Scene manager coordinating primitives, materials and lights.

    Attributes:
        materials: MaterialInfo for all registered materials.
        spheres: SphereInfo for all spheres in the scene.
        checkerboards: CheckerboardInfo for all checkerboards in the scene.
        lights: Positions of all lights in the scene.
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.materials: list[MaterialInfo] = []
        self.spheres: list[SphereInfo] = []
        self.checkerboards: list[CheckerboardInfo] = []
        self.lights: list[tuple[float, float, float]] = []
        self._material_ids: dict[Material, int] = {}
        self._clear_all()

    def _clear_all(self) -> None:
        """Clear all scene data including Taichi fields."""
        clear_scene()
        clear_phong_materials()
        clear_environment()
        self.materials.clear()
        self.spheres.clear()
        self.checkerboards.clear()
        self.lights.clear()
        self._material_ids.clear()

    def clear(self) -> None:
        """Clear the entire scene (primitives, materials and lights)."""
        self._clear_all()

    # =========================================================================
    # Material Management
    # =========================================================================

    def add_material(
        self,
        refractive_index: float = 1.0,
        albedo: tuple[float, float, float, float] = (2.0, 0.0, 0.0, 0.0),
        diffuse_color: tuple[float, float, float] = (0.0, 0.0, 0.0),
        specular_exponent: float = 0.0,
        name: str = "",
    ) -> int:
        """Add a Phong material to the scene.

        Returns:
            The material ID for this material.

        Raises:
            RuntimeError: If the maximum number of materials is exceeded.
            ValueError: If any parameter is out of range.
        """
        material_id = add_phong_material(
            refractive_index=refractive_index,
            albedo=albedo,
            diffuse_color=diffuse_color,
            specular_exponent=specular_exponent,
        )
        self.materials.append(
            MaterialInfo(
                material_id=material_id,
                name=name,
                params={
                    "refractive_index": refractive_index,
                    "albedo": albedo,
                    "diffuse_color": diffuse_color,
                    "specular_exponent": specular_exponent,
                },
            )
        )
        return material_id

    def material_id(self, material: Material) -> int:
        """Get the ID of a Material, registering it on first use.

        Equal materials share one ID, so a material reused by several
        spheres is stored once.
        """
        if material not in self._material_ids:
            self._material_ids[material] = self.add_material(
                refractive_index=material.refractive_index,
                albedo=material.albedo,
                diffuse_color=material.diffuse_color,
                specular_exponent=material.specular_exponent,
                name=material.name,
            )
        return self._material_ids[material]

    def get_material_info(self, material_id: int) -> MaterialInfo:
        """Get information about a material.

        Raises:
            IndexError: If material_id is out of range.
        """
        if not 0 <= material_id < len(self.materials):
            raise IndexError(f"Material ID {material_id} out of range")
        return self.materials[material_id]

    # =========================================================================
    # Primitive and Light Management
    # =========================================================================

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        material_id: int,
    ) -> int:
        """Add a sphere with an already registered material.

        Returns:
            The index of the sphere in the sphere storage.

        Raises:
            ValueError: If material_id is not registered or radius <= 0.
            RuntimeError: If the maximum number of spheres is exceeded.
        """
        self._check_material_id(material_id)
        idx = add_sphere(center, radius, material_id)
        self.spheres.append(
            SphereInfo(
                sphere_index=idx,
                center=tuple(center),
                radius=radius,
                material_id=material_id,
            )
        )
        return idx

    def add_checkerboard(
        self,
        height: float,
        half_extent_x: float,
        z_min: float,
        z_max: float,
        odd_material_id: int,
        even_material_id: int,
    ) -> int:
        """Add a bounded checkerboard floor with registered tile materials.

        Returns:
            The index of the checkerboard in the checkerboard storage.

        Raises:
            ValueError: If a material ID is not registered or the bounds are empty.
            RuntimeError: If the maximum number of checkerboards is exceeded.
        """
        self._check_material_id(odd_material_id)
        self._check_material_id(even_material_id)
        idx = add_checkerboard(
            height, half_extent_x, z_min, z_max, odd_material_id, even_material_id
        )
        self.checkerboards.append(
            CheckerboardInfo(
                checkerboard_index=idx,
                height=height,
                half_extent_x=half_extent_x,
                z_min=z_min,
                z_max=z_max,
                odd_material_id=odd_material_id,
                even_material_id=even_material_id,
            )
        )
        return idx

    def add_light(self, position: tuple[float, float, float]) -> int:
        """Add a point light with unit intensity.

        Raises:
            RuntimeError: If the maximum number of lights is exceeded.
        """
        idx = add_light(position)
        self.lights.append(tuple(position))
        return idx

    def set_background(self, color: tuple[float, float, float]) -> None:
        """Set the color of rays that hit nothing."""
        set_background(color)

    def _check_material_id(self, material_id: int) -> None:
        if not 0 <= material_id < len(self.materials):
            raise ValueError(
                f"Material ID {material_id} is not registered "
                f"({len(self.materials)} materials available)"
            )

    # =========================================================================
    # Whole-scene upload
    # =========================================================================

    def load_scene(self, scene: Scene) -> None:
        """Replace the current contents with an immutable Scene."""
        self.clear()
        for material in scene.materials:
            self.material_id(material)
        for board in scene.checkerboards:
            self.add_checkerboard(
                board.height,
                board.half_extent_x,
                board.z_min,
                board.z_max,
                self.material_id(board.odd_material),
                self.material_id(board.even_material),
            )
        for sphere in scene.spheres:
            self.add_sphere(sphere.center, sphere.radius, self.material_id(sphere.material))
        for position in scene.lights:
            self.add_light(position)
        self.set_background(scene.background)

    def get_sphere_count(self) -> int:
        """Get the number of spheres in the scene."""
        return get_sphere_count()

    def get_checkerboard_count(self) -> int:
        """Get the number of checkerboards in the scene."""
        return get_checkerboard_count()

    def get_light_count(self) -> int:
        """Get the number of lights in the scene."""
        return len(self.lights)

    def get_material_count(self) -> int:
        """Get the number of materials in the scene."""
        return len(self.materials)


def load_scene(scene: Scene) -> SceneManager:
    """Upload a Scene into the Taichi scene storage.

    Args:
        scene: The scene to upload.

    Returns:
        The SceneManager now holding the scene.
    """
    manager = SceneManager()
    manager.load_scene(scene)
    return manager
