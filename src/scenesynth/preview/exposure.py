"""Exposure normalization for rendered images.

Rendered scenes vary wildly in brightness: a few small lights in a deep room
leave most pixels dark. brightness_scale() picks a random target brightness
and returns the factor that brings the image's reference brightness up to
it. Images are only ever brightened, never darkened.

The reference brightness is the 80th percentile of per-pixel channel means.
Older code called this value the "median"; it is not. A high percentile keeps
images dominated by dark background from being blown out.

Example:
    >>> rng = np.random.default_rng(0)
    >>> image = np.full((4, 4, 3), 0.05, dtype=np.float32)
    >>> brightness_scale(image, rng) >= 1.0
    True
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

# Percentile of pixel brightness used as the reference statistic
BRIGHTNESS_QUANTILE = 0.8

# Target brightness ~ clip(N(mean, std), min, max)
TARGET_BRIGHTNESS_MEAN = 0.3
TARGET_BRIGHTNESS_STD = 0.1
TARGET_BRIGHTNESS_RANGE = (0.1, 0.9)

# Floor on the reference brightness, so black images do not divide by zero
MIN_REFERENCE_BRIGHTNESS = 1e-5


def pixel_brightness(image: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """Mean of the channel values of every pixel, flattened.

    Raises:
        ValueError: If the image is not a non-empty (H, W, C) array.
    """
    arr = np.asarray(image, dtype=np.float64)
    if arr.ndim != 3 or arr.shape[2] == 0:
        raise ValueError(f"Expected an image of shape (H, W, C), got {arr.shape}")
    if arr.shape[0] * arr.shape[1] == 0:
        raise ValueError("Image has no pixels")
    return arr.reshape(-1, arr.shape[2]).mean(axis=1)


def quantile_brightness(image: npt.ArrayLike, quantile: float = BRIGHTNESS_QUANTILE) -> float:
    """Brightness at the given quantile of all pixels (no interpolation).

    Sorts the per-pixel brightness ascending and returns the element at
    index floor(quantile * count), clamped to the last element.

    Args:
        image: Linear image of shape (H, W, C).
        quantile: Fraction in [0, 1].

    Returns:
        The quantile brightness.
    """
    if not 0.0 <= quantile <= 1.0:
        raise ValueError(f"Quantile must be in [0, 1], got {quantile}")
    brightness = np.sort(pixel_brightness(image))
    index = min(int(len(brightness) * quantile), len(brightness) - 1)
    return float(brightness[index])


def sample_target_brightness(rng: np.random.Generator) -> float:
    """Draw a target brightness from a clipped normal distribution."""
    lo, hi = TARGET_BRIGHTNESS_RANGE
    target = rng.normal(TARGET_BRIGHTNESS_MEAN, TARGET_BRIGHTNESS_STD)
    return float(min(hi, max(lo, target)))


def brightness_scale(
    image: npt.ArrayLike,
    rng: np.random.Generator,
    *,
    target: float | None = None,
) -> float:
    """Factor (>= 1) that lifts the image's reference brightness to a target.

    Args:
        image: Linear image of shape (H, W, C).
        rng: Random generator used to draw the target brightness.
        target: Use this target instead of drawing one.

    Returns:
        max(1, target / reference), where reference is the 80th percentile
        brightness floored at MIN_REFERENCE_BRIGHTNESS.
    """
    if target is None:
        target = sample_target_brightness(rng)
    reference = max(MIN_REFERENCE_BRIGHTNESS, quantile_brightness(image))
    return max(1.0, target / reference)


def normalize_exposure(
    image: npt.ArrayLike,
    rng: np.random.Generator,
) -> tuple[npt.NDArray[np.float32], float]:
    """Brighten an image toward a random target brightness.

    Returns:
        The scaled image (float32) and the scale that was applied.
    """
    arr = np.asarray(image, dtype=np.float32)
    scale = brightness_scale(arr, rng)
    return (arr * np.float32(scale)).astype(np.float32), scale
