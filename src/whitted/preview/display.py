"""Tone mapping and Matplotlib preview for rendered images.

The tracer returns unclamped radiance. Max-channel tone mapping brings it
into the displayable range per pixel:

    denom = max(1, max(r, g, b))
    out   = color / denom

Pixels already inside [0, 1] are untouched; brighter pixels are scaled down
as a whole, so their hue is preserved.

Example:
    >>> from src.whitted.preview.display import show_preview
    >>> from src.whitted.core.renderer import render
    >>>
    >>> image = render(scene, camera)
    >>> show_preview(image)
"""

from __future__ import annotations

from typing import Literal

import numpy as np
import numpy.typing as npt

# Type alias for tone mapping options
ToneMapMethod = Literal["none", "max_channel"]


def max_channel_denominator(
    image: npt.NDArray[np.float32],
) -> npt.NDArray[np.float32]:
    """Per-pixel scale factor max(1, max(r, g, b)).

    Args:
        image: Linear image array of shape (..., 3).

    Returns:
        Array of shape (..., 1) that broadcasts against the image.
    """
    return np.maximum(1.0, image.max(axis=-1, keepdims=True)).astype(np.float32)


def tone_map_max_channel(
    image: npt.NDArray[np.float32],
) -> npt.NDArray[np.float32]:
    """Scale each pixel so that its brightest channel is at most 1.

    Args:
        image: Linear image array of shape (H, W, 3).

    Returns:
        Tone mapped image with channels in [0, 1] for non-negative input.
    """
    image = image.astype(np.float32)
    result = image / max_channel_denominator(image)
    return result.astype(np.float32)


def process_image_for_display(
    image: npt.NDArray[np.float32],
    tone_map: ToneMapMethod = "max_channel",
) -> npt.NDArray[np.float32]:
    """Tone map an image and clamp it to [0, 1] for display.

    Args:
        image: Linear image array of shape (H, W, 3).
        tone_map: Tone mapping method.

    Returns:
        Processed image in [0, 1] range.

    Raises:
        ValueError: If tone_map is not a known method.
    """
    result = image.astype(np.float32, copy=True)

    if tone_map == "max_channel":
        result = tone_map_max_channel(result)
    elif tone_map != "none":
        raise ValueError(f"Unknown tone mapping method: {tone_map}")

    result = np.clip(result, 0.0, 1.0)
    return result.astype(np.float32)


def show_preview(
    image: npt.NDArray[np.float32],
    *,
    tone_map: ToneMapMethod = "max_channel",
    title: str | None = None,
    figsize: tuple[float, float] = (10, 7.5),
    block: bool = True,
) -> None:
    """Display a rendered image as a Matplotlib figure.

    Requires the optional ``preview`` dependencies (matplotlib).

    Args:
        image: Linear image array of shape (H, W, 3).
        tone_map: Tone mapping method.
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(image, tone_map=tone_map)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")

    if title is None:
        height, width = image.shape[:2]
        title = f"Whitted render - {width}x{height}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
