"""Image export utilities for rendered images.

Supported formats:
    - PPM (binary P6, the tracer's native output, via Pillow)
    - PNG (8-bit, via Pillow)

Both formats store the same bytes: each channel is 255 * channel / denom
truncated to an unsigned byte, where denom = max(1, max(r, g, b)) of the
pixel.

Example:
    >>> from src.whitted.preview.export import save_ppm
    >>> from src.whitted.core.renderer import render
    >>>
    >>> image = render(scene, camera)
    >>> save_ppm(image, "out.ppm")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.whitted.preview.display import max_channel_denominator


def image_to_uint8(
    image: npt.NDArray[np.float32],
) -> npt.NDArray[np.uint8]:
    """Convert a linear float32 image to uint8 with max-channel tone mapping.

    Args:
        image: Linear radiance array of shape (H, W, 3).

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.
    """
    image = image.astype(np.float32)
    scaled = np.float32(255.0) * image / max_channel_denominator(image)
    return np.clip(scaled, 0.0, 255.0).astype(np.uint8)


def _save(image: npt.NDArray[np.float32], filepath: str | Path, image_format: str) -> Path:
    path = Path(filepath)
    pil_image = PILImage.fromarray(image_to_uint8(image))
    pil_image.save(path, format=image_format)
    return path


def save_ppm(image: npt.NDArray[np.float32], filepath: str | Path) -> Path:
    """Save a radiance array as a binary PPM (P6) file.

    Args:
        image: Linear radiance array of shape (H, W, 3).
        filepath: Output file path.

    Returns:
        The path written.
    """
    return _save(image, filepath, "PPM")


def save_png(image: npt.NDArray[np.float32], filepath: str | Path) -> Path:
    """Save a radiance array as an 8-bit PNG file.

    Args:
        image: Linear radiance array of shape (H, W, 3).
        filepath: Output file path.

    Returns:
        The path written.
    """
    return _save(image, filepath, "PNG")


def load_image_uint8(filepath: str | Path) -> npt.NDArray[np.uint8]:
    """Read an 8-bit RGB image (PPM or PNG) into an (H, W, 3) array."""
    with PILImage.open(filepath) as pil_image:
        return np.asarray(pil_image.convert("RGB"), dtype=np.uint8)


def compute_rmse(
    image_a: npt.NDArray[np.generic],
    image_b: npt.NDArray[np.generic],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
