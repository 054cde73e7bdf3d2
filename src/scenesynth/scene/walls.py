"""Decomposition of a room's box mesh into paintable wall panels.

Each face of the room box is two triangles sharing a diagonal. Pairing every
triangle with its coplanar edge neighbor splits the box into six panels that
can each receive their own material. Triangles on adjacent faces also share
edges, but their normals are perpendicular, so the normal test tells them
apart.
"""

from __future__ import annotations

import numpy as np

from src.scenesynth.errors import BackdropShapeError
from src.scenesynth.geometry.mesh import Mesh, neighbors_from_edges

# Minimum normal dot product for two triangles to count as coplanar
COPLANAR_THRESHOLD = 0.99


def decompose_walls(mesh: Mesh, *, threshold: float = COPLANAR_THRESHOLD) -> list[Mesh]:
    """Split a closed box mesh into two-triangle panels.

    Args:
        mesh: Closed mesh made of rectangular faces, two triangles each.
        threshold: Normal dot product above which neighbors are coplanar.

    Returns:
        One two-triangle mesh per face, in the order faces are first visited.

    Raises:
        BackdropShapeError: If some triangle has no unvisited coplanar
            neighbor (the mesh is not a box of paired triangles).
    """
    normals = mesh.normals()
    edges = mesh.edge_map()
    visited = np.zeros(len(mesh), dtype=bool)

    panels: list[Mesh] = []
    for index in range(len(mesh)):
        if visited[index]:
            continue
        partner = None
        for other in neighbors_from_edges(edges, mesh.triangles[index], index):
            if not visited[other] and float(np.dot(normals[index], normals[other])) > threshold:
                partner = other
                break
        if partner is None:
            raise BackdropShapeError(
                f"Triangle {index} has no coplanar neighbor; backdrop must be a closed box"
            )
        visited[index] = visited[partner] = True
        panels.append(mesh.subset([index, partner]))
    return panels
