"""Whitted integrator for recursive ray tracing.

This module implements the light transport of a classic Whitted ray tracer
and the kernel that renders a frame with it.

At every surface hit the radiance is the sum of:
    - Phong diffuse and specular light from every point light that is not
      blocked (one shadow ray per light)
    - the color seen along the mirror reflection, times albedo[2]
    - the color seen along the Snell refraction, times albedo[3]

Rays that hit nothing, and rays deeper than MAX_DEPTH bounces, return the
background color. Both the reflected and the refracted ray are always
traced, whatever the material weights.

Taichi functions cannot call themselves, so cast_ray() keeps the pending
rays on a small per-thread stack. Each entry carries the product of the
albedo weights along its path. Radiance is linear in the reflected and
refracted colors, so summing weight * local color over all entries gives
the same result as the recursive formulation. With both children pushed
at every level the stack never holds more than MAX_DEPTH + 2 rays.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.core.integrator import setup_render_target, render_image
    >>> from src.whitted.scene.showcase import create_showcase_scene
    >>> from src.whitted.scene.manager import load_scene
    >>> from src.whitted.camera.pinhole import setup_camera
    >>>
    >>> scene, camera = create_showcase_scene()
    >>> load_scene(scene)
    >>> setup_camera(camera)
    >>> setup_render_target(camera.width, camera.height)
    >>> render_image()
"""

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.whitted.camera.pinhole import get_primary_ray
from src.whitted.core.vector import dot, norm, normalize, normalized, reflect, refract
from src.whitted.materials.phong import PhongMaterial, get_phong_material
from src.whitted.scene.environment import get_background_color, get_light_position, num_lights
from src.whitted.scene.intersection import intersect_scene

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Rendering Constants
# =============================================================================

# Rays at a depth greater than this return the background color
MAX_DEPTH = 4

# Pending rays per thread: one waiting sibling per level plus the two
# children of the deepest hit
STACK_SIZE = MAX_DEPTH + 2

# Refractive index of the medium the camera sits in
AIR_REFRACTIVE_INDEX = 1.0

# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Radiance per pixel, indexed [row, column] with row 0 at the top
_framebuffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH))

_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the render target.

    Sets the active image dimensions and clears the framebuffer. The buffer
    is preallocated to MAX_IMAGE_HEIGHT x MAX_IMAGE_WIDTH.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions are not positive or exceed the maximum.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the framebuffer to zero."""
    _framebuffer.fill(0.0)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions as (width, height)."""
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Raise if the render target has not been set up."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Light Transport
# =============================================================================


@ti.func
def is_shadowed(point: vec3, light_dir: vec3, light_position: vec3) -> ti.i32:
    """Check whether a point is hidden from a light.

    The point is in shadow when the ray toward the light hits a surface
    strictly nearer than the light itself.

    Args:
        point: The shaded surface point.
        light_dir: Unit direction from the point toward the light.
        light_position: The light position.

    Returns:
        1 if the light is blocked, 0 otherwise.
    """
    rec = intersect_scene(point, light_dir)
    shadowed = 0
    if rec.hit == 1 and norm(rec.point - point) < norm(light_position - point):
        shadowed = 1
    return shadowed


@ti.func
def shade_local(point: vec3, normal: vec3, direction: vec3, material: PhongMaterial) -> vec3:
    """Phong diffuse and specular light arriving directly from the lights.

    Args:
        point: The surface point.
        normal: Unit surface normal at the point.
        direction: Direction of the ray that hit the point.
        material: Material at the point.

    Returns:
        diffuse_color * diffuse * albedo[0] + white * specular * albedo[1].
    """
    diffuse_intensity = 0.0
    specular_intensity = 0.0

    for i in range(num_lights[None]):
        light = get_light_position(i)
        light_dir = normalize(light - point)
        if is_shadowed(point, light_dir, light) == 0:
            diffuse_intensity += ti.max(0.0, dot(light_dir, normal))
            highlight = ti.max(0.0, -dot(reflect(-light_dir, normal), direction))
            specular_intensity += highlight**material.specular_exponent

    return (
        material.diffuse_color * diffuse_intensity * material.albedo[0]
        + vec3(1.0, 1.0, 1.0) * specular_intensity * material.albedo[1]
    )


@ti.func
def cast_ray(origin: vec3, direction: vec3) -> vec3:
    """Compute the radiance seen along a ray.

    Args:
        origin: The starting point of the ray.
        direction: The direction of the ray (unit length).

    Returns:
        The unclamped radiance (RGB).
    """
    background = get_background_color()
    radiance = vec3(0.0, 0.0, 0.0)

    stack_origin = ti.Matrix.zero(ti.f32, STACK_SIZE, 3)
    stack_direction = ti.Matrix.zero(ti.f32, STACK_SIZE, 3)
    stack_weight = ti.Matrix.zero(ti.f32, STACK_SIZE, 3)
    stack_depth = ti.Vector.zero(ti.i32, STACK_SIZE)

    for c in ti.static(range(3)):
        stack_origin[0, c] = origin[c]
        stack_direction[0, c] = direction[c]
        stack_weight[0, c] = 1.0
    top = 1

    while top > 0:
        top -= 1
        ray_origin = vec3(stack_origin[top, 0], stack_origin[top, 1], stack_origin[top, 2])
        ray_direction = vec3(
            stack_direction[top, 0], stack_direction[top, 1], stack_direction[top, 2]
        )
        weight = vec3(stack_weight[top, 0], stack_weight[top, 1], stack_weight[top, 2])
        depth = stack_depth[top]

        if depth > MAX_DEPTH:
            radiance += weight * background
        else:
            rec = intersect_scene(ray_origin, ray_direction)
            if rec.hit == 0:
                radiance += weight * background
            else:
                material = get_phong_material(rec.material_id)
                reflect_dir = normalize(reflect(ray_direction, rec.normal))
                refract_dir = normalize(
                    refract(
                        ray_direction,
                        rec.normal,
                        material.refractive_index,
                        AIR_REFRACTIVE_INDEX,
                    )
                )

                radiance += weight * shade_local(rec.point, rec.normal, ray_direction, material)

                reflect_weight = weight * material.albedo[2]
                refract_weight = weight * material.albedo[3]
                for c in ti.static(range(3)):
                    stack_origin[top, c] = rec.point[c]
                    stack_direction[top, c] = reflect_dir[c]
                    stack_weight[top, c] = reflect_weight[c]
                    stack_origin[top + 1, c] = rec.point[c]
                    stack_direction[top + 1, c] = refract_dir[c]
                    stack_weight[top + 1, c] = refract_weight[c]
                stack_depth[top] = depth + 1
                stack_depth[top + 1] = depth + 1
                top += 2

    return radiance


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_rows(row_start: ti.i32, row_end: ti.i32, width: ti.i32, height: ti.i32):
    """Render every pixel of rows [row_start, row_end) into the framebuffer.

    The outermost loop runs in parallel; each pixel writes only its own slot.
    """
    for pixel in range(row_start * width, row_end * width):
        ray = get_primary_ray(pixel, width, height)
        _framebuffer[pixel // width, pixel % width] = cast_ray(ray.origin, ray.direction)


@ti.kernel
def _trace_single_ray(origin: vec3, direction: vec3) -> vec3:
    """Trace one ray. Used for testing and debugging."""
    return cast_ray(origin, direction)


# =============================================================================
# Public Rendering API
# =============================================================================


def trace_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
) -> tuple[float, float, float]:
    """Compute the radiance along a single ray.

    This is a Python-callable function for testing. For whole frames use
    render_image(), which processes all pixels in parallel.

    Args:
        origin: The starting point of the ray.
        direction: The ray direction; normalized before tracing.

    Returns:
        Tuple of (R, G, B) radiance values.

    Raises:
        ValueError: If direction has zero length.
    """
    d = normalized(direction)
    color = _trace_single_ray(vec3(origin[0], origin[1], origin[2]), vec3(d[0], d[1], d[2]))
    return (float(color[0]), float(color[1]), float(color[2]))


def render_rows(row_start: int, row_end: int) -> None:
    """Render the rows [row_start, row_end) of the current render target.

    Raises:
        RuntimeError: If render target has not been set up.
        ValueError: If the row range is outside the image.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    if not 0 <= row_start <= row_end <= height:
        raise ValueError(f"Row range [{row_start}, {row_end}) outside image of height {height}")
    if row_end > row_start:
        _render_rows(row_start, row_end, width, height)


def render_image() -> None:
    """Render every pixel of the current render target.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()
    _, height = get_image_dimensions()
    render_rows(0, height)


def get_image_numpy() -> npt.NDArray[np.float32]:
    """Get the rendered radiance as a NumPy array.

    The values are not tone mapped and may exceed 1.0.

    Returns:
        Array of shape (height, width, 3), row 0 at the top.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    full_image = _framebuffer.to_numpy()
    return np.ascontiguousarray(full_image[:height, :width, :], dtype=np.float32)
