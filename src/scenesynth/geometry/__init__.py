"""Geometry module for meshes, bounding boxes and light primitives.

Components:
    aabb: Axis-aligned bounding boxes (placement targets, light bounds)
    mesh: Immutable triangle meshes, box construction, edge adjacency,
        Rodrigues rotation matrices
    primitives: Sphere and box shapes used for lights
    off: Object File Format reader

All geometry here is plain NumPy on the Python side. Scenes are converted to
Taichi fields only when handed to the tracer (see scene.upload).
"""

from .aabb import AxisAlignedBox
from .mesh import Mesh, neighbors_from_edges, rotation_matrix
from .off import load_off, read_off
from .primitives import Box, Sphere

__all__ = [
    "AxisAlignedBox",
    "Mesh",
    "neighbors_from_edges",
    "rotation_matrix",
    "read_off",
    "load_off",
    "Sphere",
    "Box",
]
