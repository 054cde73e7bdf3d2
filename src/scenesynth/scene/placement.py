"""Scale-to-fit placement of meshes inside a target box.

A mesh is shrunk by a random fraction of the largest uniform scale that
still fits the target box, then moved by a random translation that keeps it
inside. There is no overlap avoidance: objects may intersect each other.

Example:
    >>> rng = np.random.default_rng(0)
    >>> mesh = Mesh.box((0, 0, 0), (2, 2, 2))
    >>> target = AxisAlignedBox.from_bounds((0, 0, 0), (1, 4, 1))
    >>> max_fit_scale(mesh.bounds(), target)
    0.5
    >>> target.contains(place_in_bounds(mesh, target, rng).bounds(), tol=1e-9)
    True
"""

from __future__ import annotations

import numpy as np

from src.scenesynth.errors import DegenerateMeshError
from src.scenesynth.geometry.aabb import AxisAlignedBox
from src.scenesynth.geometry.mesh import Mesh

# Sampled scale is U[MIN_SCALE_FRACTION, 1) times the largest fitting scale
MIN_SCALE_FRACTION = 0.1


def max_fit_scale(mesh_bounds: AxisAlignedBox, target: AxisAlignedBox) -> float:
    """Largest uniform scale that keeps the mesh within target on every axis.

    Raises:
        DegenerateMeshError: If the mesh has zero or non-finite extent on
            some axis.
        ValueError: If the target has zero extent on some axis.
    """
    # Corners near the float limits can overflow to an infinite extent
    with np.errstate(over="ignore"):
        diff = mesh_bounds.extent
    target_diff = target.extent
    if not np.all(np.isfinite(diff)) or np.any(diff <= 0.0):
        raise DegenerateMeshError(
            f"Cannot fit a mesh with zero or non-finite extent: extent {diff.tolist()}"
        )
    if np.any(target_diff <= 0.0):
        raise ValueError(f"Placement box must have positive extent, got {target_diff.tolist()}")
    return float(np.min(target_diff / diff))


def place_in_bounds(mesh: Mesh, target: AxisAlignedBox, rng: np.random.Generator) -> Mesh:
    """Return a scaled and translated copy of mesh that lies inside target.

    Args:
        mesh: Mesh to place; must have positive extent on every axis.
        target: Placement box.
        rng: Random generator for the scale and translation.

    Returns:
        The placed mesh. The input mesh is not modified.

    Raises:
        DegenerateMeshError: If the mesh is empty or flat along some axis.
        ValueError: If the target box is flat along some axis.
    """
    if mesh.is_empty():
        raise DegenerateMeshError("Cannot place an empty mesh")

    max_scale = max_fit_scale(mesh.bounds(), target)
    scale = rng.uniform(MIN_SCALE_FRACTION, 1.0) * max_scale
    scaled = mesh.scale(scale)

    # Range of translations keeping the scaled mesh inside the target
    translate_min = target.min - scaled.min()
    translate_max = target.max - scaled.max()
    # Rounding can leave translate_max a hair below translate_min at full scale
    translate_max = np.maximum(translate_max, translate_min)
    offset = translate_min + rng.random(3) * (translate_max - translate_min)
    return scaled.translate(offset)
