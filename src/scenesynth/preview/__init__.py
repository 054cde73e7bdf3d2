"""Preview module for rendered images.

Components:
    exposure: Quantile brightness and exposure normalization
    display: Matplotlib image preview and top-down scene layout plots
    export: PNG export and image loading via Pillow

Example:
    >>> from src.scenesynth.preview import brightness_scale, save_png_from_array
    >>> scale = brightness_scale(image, rng)
    >>> save_png_from_array(image, "out.png", scale=scale)
"""

from src.scenesynth.preview.display import (
    apply_gamma,
    plot_layout,
    process_image_for_display,
    save_layout,
    show_image,
    show_layout,
)
from src.scenesynth.preview.exposure import (
    BRIGHTNESS_QUANTILE,
    brightness_scale,
    normalize_exposure,
    pixel_brightness,
    quantile_brightness,
    sample_target_brightness,
)
from src.scenesynth.preview.export import (
    image_to_uint8,
    load_image_array,
    save_png_from_array,
)

__all__ = [
    # Exposure
    "quantile_brightness",
    "pixel_brightness",
    "brightness_scale",
    "sample_target_brightness",
    "normalize_exposure",
    "BRIGHTNESS_QUANTILE",
    # Display
    "apply_gamma",
    "process_image_for_display",
    "show_image",
    "plot_layout",
    "show_layout",
    "save_layout",
    # Export
    "image_to_uint8",
    "save_png_from_array",
    "load_image_array",
]
