"""Preview module for output and visualization.

Components:
    display: Max-channel tone mapping and Matplotlib preview window
    export: PPM/PNG export and image comparison

Example:
    >>> from src.whitted.preview import save_ppm
    >>> from src.whitted.core.renderer import render
    >>>
    >>> image = render(scene, camera)
    >>> save_ppm(image, "out.ppm")
"""

from src.whitted.preview.display import (
    ToneMapMethod,
    max_channel_denominator,
    process_image_for_display,
    show_preview,
    tone_map_max_channel,
)
from src.whitted.preview.export import (
    compute_rmse,
    image_to_uint8,
    load_image_uint8,
    save_png,
    save_ppm,
)

__all__ = [
    # Display functions
    "show_preview",
    # Tone mapping
    "tone_map_max_channel",
    "max_channel_denominator",
    "process_image_for_display",
    "ToneMapMethod",
    # Export functions
    "save_ppm",
    "save_png",
    "load_image_uint8",
    "image_to_uint8",
    "compute_rmse",
]
