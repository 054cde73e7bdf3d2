"""Materials module.

Components:
    lambertian: Diffuse material record with energy-conservation checks
    emissive: Emission-only material used by lights
    sampling: MaterialSampler hook and the default random diffuse sampler
"""

from .emissive import EmissiveMaterial
from .lambertian import LambertianMaterial
from .sampling import DEFAULT_ALBEDO_RANGE, Material, MaterialSampler, random_lambertian

__all__ = [
    "LambertianMaterial",
    "EmissiveMaterial",
    "Material",
    "MaterialSampler",
    "random_lambertian",
    "DEFAULT_ALBEDO_RANGE",
]
