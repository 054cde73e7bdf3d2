"""Immutable triangle meshes.

A Mesh is an unordered collection of triangles stored as a read-only numpy
array of shape (N, 3, 3): triangle index, vertex index, coordinate axis.
Every operation returns a new Mesh, so once a mesh is handed to a scene it
cannot be changed behind the scene's back.

Triangles are wound counter-clockwise when seen from the side their normal
points to (right-hand rule), which is the convention used by ``Mesh.box``
and by the OFF reader.

Example:
    >>> mesh = Mesh.box((0, 0, 0), (1, 2, 3))
    >>> len(mesh)
    12
    >>> mesh.bounds().extent.tolist()
    [1.0, 2.0, 3.0]
"""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from src.scenesynth.core.vector import Vec3, as_vec3
from src.scenesynth.geometry.aabb import AxisAlignedBox

# Vertex coordinates are rounded to this many decimals when matching shared
# edges, so vertices produced by the same arithmetic compare equal.
_VERTEX_DECIMALS = 9

# Corner indices of each box face, counter-clockwise seen from outside.
# Corner i has x = bit 0, y = bit 1, z = bit 2 (0 -> min, 1 -> max).
_BOX_FACES = (
    (0, 4, 6, 2),  # -X
    (1, 3, 7, 5),  # +X
    (0, 1, 5, 4),  # -Y
    (2, 6, 7, 3),  # +Y
    (0, 2, 3, 1),  # -Z
    (4, 5, 7, 6),  # +Z
)

TriangleArray = npt.NDArray[np.float64]


def rotation_matrix(axis: npt.ArrayLike, angle: float) -> npt.NDArray[np.float64]:
    """Build the 3x3 matrix rotating by angle (radians) about axis.

    Uses Rodrigues' formula; the axis does not need to be normalized.

    Raises:
        ValueError: If the axis has zero length.
    """
    k = as_vec3(axis)
    norm = np.linalg.norm(k)
    if norm == 0.0:
        raise ValueError("Rotation axis must be non-zero")
    k = k / norm
    cross = np.array(
        [
            [0.0, -k[2], k[1]],
            [k[2], 0.0, -k[0]],
            [-k[1], k[0], 0.0],
        ]
    )
    return np.eye(3) + math.sin(angle) * cross + (1.0 - math.cos(angle)) * (cross @ cross)


def _vertex_key(v: npt.NDArray[np.float64]) -> tuple[float, float, float]:
    r = np.round(v, _VERTEX_DECIMALS) + 0.0  # fold -0.0 into 0.0
    return (float(r[0]), float(r[1]), float(r[2]))


@dataclass(frozen=True, eq=False)
class Mesh:
    """A triangle mesh with value semantics.

    Attributes:
        triangles: Read-only array of shape (N, 3, 3).
    """

    triangles: TriangleArray

    def __post_init__(self) -> None:
        tris = np.array(self.triangles, dtype=np.float64)
        if tris.size == 0:
            tris = tris.reshape(0, 3, 3)
        if tris.ndim != 3 or tris.shape[1:] != (3, 3):
            raise ValueError(f"Triangles must have shape (N, 3, 3), got {tris.shape}")
        if not np.all(np.isfinite(tris)):
            raise ValueError("Triangle coordinates must be finite")
        tris.setflags(write=False)
        object.__setattr__(self, "triangles", tris)

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def from_triangles(cls, triangles: Iterable[Sequence[npt.ArrayLike]]) -> Mesh:
        """Build a mesh from an iterable of (a, b, c) vertex triples."""
        tris = [np.asarray(t, dtype=np.float64) for t in triangles]
        if not tris:
            return cls(np.zeros((0, 3, 3)))
        return cls(np.stack(tris))

    @classmethod
    def box(cls, min_corner: npt.ArrayLike, max_corner: npt.ArrayLike) -> Mesh:
        """Build the closed 12-triangle mesh of an axis-aligned box.

        Normals point outward; each face is split along one diagonal into
        two triangles that share that diagonal edge.
        """
        lo = as_vec3(min_corner)
        hi = as_vec3(max_corner)
        corners = np.array(
            [[(hi if i & (1 << axis) else lo)[axis] for axis in range(3)] for i in range(8)]
        )
        tris = []
        for a, b, c, d in _BOX_FACES:
            tris.append(corners[[a, b, c]])
            tris.append(corners[[a, c, d]])
        return cls(np.stack(tris))

    # =========================================================================
    # Queries
    # =========================================================================

    def __len__(self) -> int:
        return len(self.triangles)

    def __iter__(self) -> Iterator[TriangleArray]:
        return iter(self.triangles)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mesh):
            return NotImplemented
        return bool(np.array_equal(self.triangles, other.triangles))

    __hash__ = None  # type: ignore[assignment]

    def is_empty(self) -> bool:
        return len(self.triangles) == 0

    def _require_triangles(self) -> None:
        if self.is_empty():
            raise ValueError("Mesh has no triangles")

    def min(self) -> Vec3:
        """Minimum corner of the mesh's bounding box."""
        self._require_triangles()
        return self.triangles.reshape(-1, 3).min(axis=0)

    def max(self) -> Vec3:
        """Maximum corner of the mesh's bounding box."""
        self._require_triangles()
        return self.triangles.reshape(-1, 3).max(axis=0)

    def bounds(self) -> AxisAlignedBox:
        return AxisAlignedBox(min=self.min(), max=self.max())

    def normals(self) -> npt.NDArray[np.float64]:
        """Unit normal of every triangle, shape (N, 3).

        Degenerate (zero-area) triangles get a zero normal.
        """
        a, b, c = self.triangles[:, 0], self.triangles[:, 1], self.triangles[:, 2]
        n = np.cross(b - a, c - a)
        lengths = np.linalg.norm(n, axis=1, keepdims=True)
        return np.divide(n, lengths, out=np.zeros_like(n), where=lengths > 0)

    def vertices(self) -> set[tuple[float, float, float]]:
        """The set of distinct vertex positions."""
        return {_vertex_key(v) for v in self.triangles.reshape(-1, 3)}

    def edge_map(self) -> dict[frozenset, list[int]]:
        """Map every undirected edge to the indices of triangles using it."""
        edges: dict[frozenset, list[int]] = defaultdict(list)
        for index, tri in enumerate(self.triangles):
            keys = [_vertex_key(v) for v in tri]
            for i in range(3):
                edges[frozenset((keys[i], keys[(i + 1) % 3]))].append(index)
        return edges

    # =========================================================================
    # Transformations (all return new meshes)
    # =========================================================================

    def map_coords(self, fn: Callable[[npt.NDArray[np.float64]], npt.NDArray[np.float64]]) -> Mesh:
        """Apply fn to the (M, 3) array of all vertices and rebuild the mesh."""
        coords = fn(self.triangles.reshape(-1, 3).copy())
        return Mesh(np.asarray(coords, dtype=np.float64).reshape(-1, 3, 3))

    def scale(self, factor: float) -> Mesh:
        """Scale uniformly about the origin."""
        return Mesh(self.triangles * factor)

    def translate(self, offset: npt.ArrayLike) -> Mesh:
        return Mesh(self.triangles + as_vec3(offset))

    def transform(self, matrix: npt.ArrayLike) -> Mesh:
        """Multiply every vertex (as a column vector) by a 3x3 matrix."""
        m = np.asarray(matrix, dtype=np.float64)
        if m.shape != (3, 3):
            raise ValueError(f"Expected a 3x3 matrix, got shape {m.shape}")
        return self.map_coords(lambda coords: coords @ m.T)

    def subset(self, indices: Sequence[int]) -> Mesh:
        """A new mesh containing only the triangles at indices, in order."""
        return Mesh(self.triangles[list(indices)])

    def to_dict(self) -> dict[str, object]:
        return {"triangles": self.triangles.tolist()}


def neighbors_from_edges(
    edges: dict[frozenset, list[int]],
    triangle: TriangleArray,
    index: int,
) -> list[int]:
    """Neighbors of triangle index, looked up in a precomputed edge map.

    Neighbors are returned in the order their shared edges are found, each
    at most once.
    """
    keys = [_vertex_key(v) for v in triangle]
    found: list[int] = []
    for i in range(3):
        for other in edges.get(frozenset((keys[i], keys[(i + 1) % 3])), ()):
            if other != index and other not in found:
                found.append(other)
    return found
