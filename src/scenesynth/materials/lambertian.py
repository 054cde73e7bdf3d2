"""Lambertian (ideal diffuse) material record.

Backdrop panels and placed meshes are painted with a diffuse albedo. How the
albedo is chosen (textures, image statistics, ...) is up to the material
sampler plugged into the composer; this module only validates the result.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LambertianMaterial:
    """A diffuse material.

    Attributes:
        albedo: Diffuse reflectance as (R, G, B), each in [0, 1].
    """

    albedo: tuple[float, float, float]

    def __post_init__(self) -> None:
        if len(self.albedo) != 3:
            raise ValueError(f"Albedo must have 3 components, got {len(self.albedo)}")
        # Validate albedo for energy conservation
        for i, component in enumerate(self.albedo):
            if component < 0.0 or component > 1.0:
                raise ValueError(
                    f"Albedo component {i} = {component} is outside [0, 1]. "
                    "This would violate energy conservation."
                )
        object.__setattr__(self, "albedo", tuple(float(c) for c in self.albedo))

    @property
    def emission(self) -> tuple[float, float, float]:
        return (0.0, 0.0, 0.0)

    def to_dict(self) -> dict[str, object]:
        return {"type": "lambertian", "albedo": list(self.albedo)}
