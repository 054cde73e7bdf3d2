"""Loading of Object File Format (OFF) meshes.

Parsing is done by trimesh; this module turns its result into a Mesh and
every failure into MeshLoadError, which aborts the scene being composed.
Polygonal faces come back triangulated, and vertices are kept exactly as
stored (no merging or cleanup), so degenerate files stay detectable.

Example:
    >>> mesh = load_off("models/bunny.off")
    >>> len(mesh) > 0
    True
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import IO

import trimesh

from src.scenesynth.errors import MeshLoadError
from src.scenesynth.geometry.mesh import Mesh


def _as_trimesh(loaded: object, source: str) -> trimesh.Trimesh:
    if isinstance(loaded, trimesh.Scene):
        meshes = [g for g in loaded.geometry.values() if isinstance(g, trimesh.Trimesh)]
        if not meshes:
            raise MeshLoadError(f"{source}: file contains no mesh geometry")
        return trimesh.util.concatenate(meshes)
    if not isinstance(loaded, trimesh.Trimesh):
        raise MeshLoadError(f"{source}: unsupported geometry {type(loaded).__name__}")
    return loaded


def read_off(stream: IO, source: str = "<stream>") -> Mesh:
    """Parse an OFF document into a Mesh.

    Args:
        stream: Text or binary stream positioned at the start of the document.
        source: Name used in error messages.

    Returns:
        The triangulated mesh.

    Raises:
        MeshLoadError: If the document is malformed or has no faces.
    """
    data = stream.read()
    if isinstance(data, str):
        data = data.encode("utf-8")
    try:
        loaded = trimesh.load(io.BytesIO(data), file_type="off", force="mesh", process=False)
        mesh = _as_trimesh(loaded, source)
        if len(mesh.faces) == 0:
            raise MeshLoadError(f"{source}: mesh has no faces")
        return Mesh(mesh.triangles)
    except MeshLoadError:
        raise
    except Exception as exc:
        # trimesh reports malformed input with assorted builtin exceptions
        raise MeshLoadError(f"{source}: invalid OFF data ({exc})") from exc


def load_off(path: str | Path) -> Mesh:
    """Read an OFF file from disk.

    Raises:
        MeshLoadError: If the file cannot be opened or parsed.
    """
    path = Path(path)
    try:
        with path.open("rb") as f:
            return read_off(f, source=str(path))
    except MeshLoadError:
        raise
    except OSError as exc:
        raise MeshLoadError(f"{path}: {exc}") from exc
