"""Image loading and export.

Supported formats:
    - PNG (8-bit sRGB via Pillow) for output
    - Anything Pillow reads for input

Example:
    >>> from src.scenesynth.preview.export import load_image_array, save_png_from_array
    >>> image = load_image_array("render.png")
    >>> save_png_from_array(image, "render_bright.png", scale=1.8, gamma=1.0)
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.scenesynth.preview.display import process_image_for_display


def image_to_uint8(
    image: npt.NDArray[np.float32],
    *,
    gamma: float = 2.2,
    scale: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a linear float32 image to uint8 for display/export.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma correction value (default 2.2 for sRGB).
        scale: Brightness factor applied before gamma.

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.
    """
    processed = process_image_for_display(image, gamma=gamma, scale=scale)
    return np.round(processed * 255).astype(np.uint8)


def save_png_from_array(
    image: npt.NDArray[np.float32],
    filepath: str | Path,
    *,
    gamma: float = 2.2,
    scale: float = 1.0,
) -> None:
    """Save a NumPy array as a PNG file.

    Args:
        image: Linear image array of shape (H, W, 3).
        filepath: Output file path (should end in .png).
        gamma: Gamma correction value (default 2.2 for sRGB).
        scale: Brightness factor applied before gamma.
    """
    image_uint8 = image_to_uint8(image, gamma=gamma, scale=scale)
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(str(filepath))


def load_image_array(filepath: str | Path) -> npt.NDArray[np.float32]:
    """Read an image as float32 RGB in [0, 1].

    The pixel values are used as they are stored; no inverse gamma is
    applied.

    Raises:
        OSError: If the file cannot be read as an image.
    """
    with PILImage.open(filepath) as pil_image:
        rgb = pil_image.convert("RGB")
        return np.asarray(rgb, dtype=np.float32) / 255.0
