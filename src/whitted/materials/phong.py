"""Phong material registry for Whitted shading.

A Phong material combines four independent contributions, each scaled by
its own albedo weight:

    radiance = diffuse_color * diffuse_intensity * albedo[0]
             + white * specular_intensity * albedo[1]
             + reflect_color * albedo[2]
             + refract_color * albedo[3]

The weights are not required to sum to one. The specular exponent is the
Phong shininess, and the refractive index feeds Snell's law for the
refracted ray.

Materials are stored in Taichi fields and referred to by integer id, so the
integrator can fetch them inside kernels.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.materials.phong import add_phong_material
    >>> glass_id = add_phong_material(
    ...     refractive_index=1.5,
    ...     albedo=(0.0, 0.9, 0.1, 0.8),
    ...     diffuse_color=(0.6, 0.7, 0.8),
    ...     specular_exponent=125.0,
    ... )
"""

import taichi as ti
import taichi.math as tm

# Type aliases for vectors
vec3 = tm.vec3
vec4 = tm.vec4


@ti.dataclass
class PhongMaterial:
    """Phong material properties.

    Attributes:
        refractive_index: Index of refraction (>= 1.0).
        albedo: Weights of the diffuse, specular, reflective and refractive
            contributions, in that order.
        diffuse_color: Base color of the diffuse term (RGB).
        specular_exponent: Phong shininess (>= 0).
    """

    refractive_index: ti.f32
    albedo: vec4
    diffuse_color: vec3
    specular_exponent: ti.f32


# =============================================================================
# Material Field Storage
# =============================================================================

# Maximum number of materials in the scene
MAX_MATERIALS = 256

material_refractive_indices = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
material_albedos = ti.Vector.field(4, dtype=ti.f32, shape=MAX_MATERIALS)
material_diffuse_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_MATERIALS)
material_specular_exponents = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())


def clear_phong_materials() -> None:
    """Clear all materials.

    Resets the material count to zero. Existing data in the fields will be
    overwritten when new materials are added.
    """
    num_materials[None] = 0


def add_phong_material(
    refractive_index: float = 1.0,
    albedo: tuple[float, float, float, float] = (2.0, 0.0, 0.0, 0.0),
    diffuse_color: tuple[float, float, float] = (0.0, 0.0, 0.0),
    specular_exponent: float = 0.0,
) -> int:
    """Add a Phong material to the material registry.

    Args:
        refractive_index: Index of refraction. Must be at least 1.0.
        albedo: Diffuse, specular, reflective and refractive weights.
        diffuse_color: Diffuse base color as (R, G, B).
        specular_exponent: Phong shininess. Must be non-negative.

    Returns:
        The id of the added material.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
        ValueError: If the refractive index is below 1.0, the specular
            exponent is negative, or albedo does not have four weights.
    """
    if refractive_index < 1.0:
        raise ValueError(f"Refractive index must be >= 1.0, got {refractive_index}")
    if specular_exponent < 0.0:
        raise ValueError(f"Specular exponent must be >= 0, got {specular_exponent}")
    if len(albedo) != 4:
        raise ValueError(
            f"Albedo needs 4 weights (diffuse, specular, reflective, refractive), "
            f"got {len(albedo)}"
        )

    idx = num_materials[None]
    if idx >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

    material_refractive_indices[idx] = refractive_index
    material_albedos[idx] = vec4(albedo[0], albedo[1], albedo[2], albedo[3])
    material_diffuse_colors[idx] = vec3(diffuse_color[0], diffuse_color[1], diffuse_color[2])
    material_specular_exponents[idx] = specular_exponent
    num_materials[None] = idx + 1
    return idx


def get_phong_material_count() -> int:
    """Get the number of materials in the registry."""
    return int(num_materials[None])


@ti.func
def get_phong_material(material_id: ti.i32) -> PhongMaterial:
    """Fetch a material from the registry by id.

    Args:
        material_id: The id returned by add_phong_material.

    Returns:
        The PhongMaterial stored under that id.
    """
    return PhongMaterial(
        refractive_index=material_refractive_indices[material_id],
        albedo=material_albedos[material_id],
        diffuse_color=material_diffuse_colors[material_id],
        specular_exponent=material_specular_exponents[material_id],
    )
