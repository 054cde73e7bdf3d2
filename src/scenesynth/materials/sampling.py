"""Hook for painting scene geometry with materials.

The composer asks a MaterialSampler for the material of every backdrop panel
and every placed mesh. Texture- or image-driven randomization lives outside
this package and plugs in here; the default sampler below only draws a
random diffuse color.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Union

import numpy as np

from src.scenesynth.materials.emissive import EmissiveMaterial
from src.scenesynth.materials.lambertian import LambertianMaterial

Material = Union[LambertianMaterial, EmissiveMaterial]

# (geometry, image paths, rng) -> material
MaterialSampler = Callable[[Any, Sequence[str], np.random.Generator], Material]

# Default albedos stay away from pure black and pure white
DEFAULT_ALBEDO_RANGE = (0.1, 0.9)


def random_lambertian(
    geometry: Any,
    images: Sequence[str],
    rng: np.random.Generator,
) -> LambertianMaterial:
    """Draw a diffuse material with a uniformly random color.

    The geometry and image paths are ignored.
    """
    lo, hi = DEFAULT_ALBEDO_RANGE
    r, g, b = rng.uniform(lo, hi, size=3)
    return LambertianMaterial(albedo=(float(r), float(g), float(b)))
