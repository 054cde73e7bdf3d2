"""Axis-aligned bounding boxes.

An AxisAlignedBox is used both as the target volume for object placement
and as the bounding volume of a light. The invariant ``min <= max`` holds on
every axis; zero-extent axes are allowed here and rejected by the code that
needs a positive extent (placement).

Example:
    >>> box = AxisAlignedBox.from_bounds((0, 0, 0), (1, 4, 1))
    >>> box.extent.tolist()
    [1.0, 4.0, 1.0]
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from src.scenesynth.core.vector import Vec3, as_vec3, distance, midpoint


def _frozen(arr: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class AxisAlignedBox:
    """A box spanned by its minimum and maximum corners.

    Attributes:
        min: Minimum corner (x, y, z).
        max: Maximum corner (x, y, z).
    """

    min: Vec3
    max: Vec3

    def __post_init__(self) -> None:
        lo = as_vec3(self.min)
        hi = as_vec3(self.max)
        if not (np.all(np.isfinite(lo)) and np.all(np.isfinite(hi))):
            raise ValueError(f"Box corners must be finite: {lo.tolist()}, {hi.tolist()}")
        for axis in range(3):
            if lo[axis] > hi[axis]:
                raise ValueError(
                    f"Box min exceeds max on axis {axis}: {lo[axis]} > {hi[axis]}"
                )
        object.__setattr__(self, "min", _frozen(lo))
        object.__setattr__(self, "max", _frozen(hi))

    @classmethod
    def from_bounds(cls, min_corner: npt.ArrayLike, max_corner: npt.ArrayLike) -> AxisAlignedBox:
        """Build a box from two corner sequences."""
        return cls(min=as_vec3(min_corner), max=as_vec3(max_corner))

    @classmethod
    def from_points(cls, points: npt.ArrayLike) -> AxisAlignedBox:
        """Build the tightest box around a set of points.

        Raises:
            ValueError: If no points are given.
        """
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        if len(pts) == 0:
            raise ValueError("Cannot bound an empty set of points")
        return cls(min=pts.min(axis=0), max=pts.max(axis=0))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AxisAlignedBox):
            return NotImplemented
        return bool(np.array_equal(self.min, other.min) and np.array_equal(self.max, other.max))

    def __hash__(self) -> int:
        return hash((tuple(self.min.tolist()), tuple(self.max.tolist())))

    @property
    def extent(self) -> Vec3:
        """Size of the box along each axis."""
        return self.max - self.min

    @property
    def center(self) -> Vec3:
        return midpoint(self.min, self.max)

    @property
    def diagonal(self) -> float:
        """Length of the diagonal from min to max."""
        return distance(self.min, self.max)

    def contains_point(self, point: npt.ArrayLike, tol: float = 0.0) -> bool:
        p = as_vec3(point)
        return bool(np.all(p >= self.min - tol) and np.all(p <= self.max + tol))

    def contains(self, other: AxisAlignedBox, tol: float = 0.0) -> bool:
        """Check whether other lies inside this box, within tol on every side."""
        return self.contains_point(other.min, tol) and self.contains_point(other.max, tol)

    def to_dict(self) -> dict[str, list[float]]:
        return {"min": self.min.tolist(), "max": self.max.tolist()}
