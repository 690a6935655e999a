"""Frame renderer built on the Whitted integrator.

This module provides a convenient wrapper around the integrator that supports:
- Rendering in bands of rows with progress callbacks for UI updates
- A one-call render(scene, camera) entry point returning the radiance buffer

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.core.renderer import render
    >>> from src.whitted.scene.showcase import create_showcase_scene
    >>>
    >>> scene, camera = create_showcase_scene()
    >>> image = render(scene, camera)  # (768, 1024, 3) float32 radiance
"""

from collections.abc import Callable

import numpy as np
import numpy.typing as npt

from src.whitted.camera.pinhole import PinholeCamera, setup_camera
from src.whitted.core.integrator import (
    get_image_numpy,
    render_rows,
    setup_render_target,
)
from src.whitted.scene.manager import load_scene
from src.whitted.scene.model import Scene

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


class WhittedRenderer:
    """Renders the loaded scene into the integrator's framebuffer.

    The renderer keeps the image size and delegates to the global
    integrator buffers (which are Taichi fields). Scene and camera must be
    uploaded before render() is called.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """Initialize the renderer.

        Args:
            width: Image width in pixels (max 2048).
            height: Image height in pixels (max 2048).

        Raises:
            ValueError: If dimensions are invalid.
        """
        self._width = width
        self._height = height
        self._rows_done = 0
        setup_render_target(width, height)

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def rows_done(self) -> int:
        """Number of rows rendered by the last render() call."""
        return self._rows_done

    def render(
        self,
        rows_per_batch: int | None = None,
        callback: ProgressCallback | None = None,
    ) -> None:
        """Render the whole frame.

        Args:
            rows_per_batch: Rows rendered per kernel launch. None renders
                the frame in one launch.
            callback: Called after each batch with (rows_done, height).

        Raises:
            ValueError: If rows_per_batch is not positive.
        """
        if rows_per_batch is None:
            rows_per_batch = self._height
        if rows_per_batch <= 0:
            raise ValueError(f"rows_per_batch must be positive, got {rows_per_batch}")

        self._rows_done = 0
        while self._rows_done < self._height:
            row_end = min(self._rows_done + rows_per_batch, self._height)
            render_rows(self._rows_done, row_end)
            self._rows_done = row_end
            if callback is not None:
                callback(self._rows_done, self._height)

    def get_image_numpy(self) -> npt.NDArray[np.float32]:
        """Get the rendered radiance, shape (height, width, 3)."""
        return get_image_numpy()


def render(
    scene: Scene,
    camera: PinholeCamera,
    *,
    rows_per_batch: int | None = None,
    callback: ProgressCallback | None = None,
) -> npt.NDArray[np.float32]:
    """Render a scene through a camera.

    Uploads the scene and camera, traces one ray per pixel and returns the
    unclamped radiance.

    Args:
        scene: The scene to render.
        camera: The camera, including the image size.
        rows_per_batch: Rows rendered per kernel launch (None for all).
        callback: Progress callback receiving (rows_done, height).

    Returns:
        Array of shape (camera.height, camera.width, 3), row 0 at the top.
    """
    load_scene(scene)
    setup_camera(camera)
    renderer = WhittedRenderer(camera.width, camera.height)
    renderer.render(rows_per_batch=rows_per_batch, callback=callback)
    return renderer.get_image_numpy()
