"""Materials module for surface shading.

Components:
    phong: Phong material (diffuse + specular) with reflective and
        refractive weights, stored in a Taichi-side registry

The Whitted integrator looks materials up by id with get_phong_material()
and combines the four weighted contributions into the final radiance.
"""

from .phong import (
    MAX_MATERIALS,
    PhongMaterial,
    add_phong_material,
    clear_phong_materials,
    get_phong_material,
    get_phong_material_count,
)

__all__ = [
    "PhongMaterial",
    "add_phong_material",
    "clear_phong_materials",
    "get_phong_material",
    "get_phong_material_count",
    "MAX_MATERIALS",
]
