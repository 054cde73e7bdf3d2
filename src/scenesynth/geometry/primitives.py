"""Analytic primitives used as light shapes.

Lights are either spheres or axis-aligned boxes. Both only need to report
their bounding box here; intersection is the ray tracer's business.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from src.scenesynth.core.vector import Vec3, as_vec3
from src.scenesynth.geometry.aabb import AxisAlignedBox


@dataclass(frozen=True, eq=False)
class Sphere:
    """A sphere given by center and radius.

    Attributes:
        center: Center point (x, y, z).
        radius: Radius, must be positive.
    """

    center: Vec3
    radius: float

    def __post_init__(self) -> None:
        center = as_vec3(self.center)
        center.setflags(write=False)
        object.__setattr__(self, "center", center)
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")
        object.__setattr__(self, "radius", float(self.radius))

    def bounds(self) -> AxisAlignedBox:
        r = np.full(3, self.radius)
        return AxisAlignedBox(min=self.center - r, max=self.center + r)

    def to_dict(self) -> dict[str, object]:
        return {"type": "sphere", "center": self.center.tolist(), "radius": self.radius}


@dataclass(frozen=True, eq=False)
class Box:
    """A solid axis-aligned box.

    Attributes:
        min: Minimum corner.
        max: Maximum corner.
    """

    min: Vec3
    max: Vec3

    def __post_init__(self) -> None:
        # Reuse the bounding box validation (min <= max, finite)
        box = AxisAlignedBox(min=self.min, max=self.max)
        object.__setattr__(self, "min", box.min)
        object.__setattr__(self, "max", box.max)

    @classmethod
    def around(cls, center: Vec3, half_extent: Vec3) -> Box:
        """Build a box from its center and per-axis half extent."""
        c = as_vec3(center)
        h = as_vec3(half_extent)
        return cls(min=c - h, max=c + h)

    def bounds(self) -> AxisAlignedBox:
        return AxisAlignedBox(min=self.min, max=self.max)

    def to_dict(self) -> dict[str, object]:
        return {"type": "box", "min": self.min.tolist(), "max": self.max.tolist()}
