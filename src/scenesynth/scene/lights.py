"""Light records and importance-sampling focus points.

A light is an analytic shape (sphere or box) with an emission-only material.
Every light also becomes a focus point: a sphere around its bounding box that
the tracer aims a share of its rays at.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from src.scenesynth.core.vector import Vec3, as_vec3
from src.scenesynth.geometry.aabb import AxisAlignedBox
from src.scenesynth.geometry.primitives import Box, Sphere
from src.scenesynth.materials.emissive import EmissiveMaterial

LightShape = Union[Sphere, Box]


@dataclass(frozen=True, eq=False)
class FocusPoint:
    """A sphere the tracer preferentially samples rays toward.

    Attributes:
        center: Center of the sphere.
        radius: Radius of the sphere, positive.
    """

    center: Vec3
    radius: float

    def __post_init__(self) -> None:
        center = as_vec3(self.center)
        center.setflags(write=False)
        object.__setattr__(self, "center", center)
        if not self.radius > 0.0:
            raise ValueError(f"Focus point radius must be positive, got {self.radius}")
        object.__setattr__(self, "radius", float(self.radius))

    @classmethod
    def around(cls, bounds: AxisAlignedBox) -> FocusPoint:
        """The sphere through the corners of a bounding box."""
        return cls(center=bounds.center, radius=bounds.diagonal / 2.0)

    def to_dict(self) -> dict[str, object]:
        return {"center": self.center.tolist(), "radius": self.radius}


@dataclass(frozen=True, eq=False)
class LightSpec:
    """An emissive light.

    Attributes:
        shape: Sphere or box geometry.
        material: Emission-only material.
    """

    shape: LightShape
    material: EmissiveMaterial

    def bounds(self) -> AxisAlignedBox:
        return self.shape.bounds()

    def focus_point(self) -> FocusPoint:
        return FocusPoint.around(self.bounds())

    def to_dict(self) -> dict[str, object]:
        return {"shape": self.shape.to_dict(), "material": self.material.to_dict()}
