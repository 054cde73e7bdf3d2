"""Error types raised while composing a scene.

Composition is all-or-nothing: any of these aborts the whole scene and is
surfaced to the caller without retries.
"""


class SceneSynthError(Exception):
    """Base class for scene synthesis failures."""


class MeshLoadError(SceneSynthError, OSError):
    """A mesh file is missing, unreadable or malformed."""


class DegenerateMeshError(SceneSynthError, ValueError):
    """A mesh has zero extent on some axis and cannot be scaled to fit."""


class BackdropShapeError(SceneSynthError, RuntimeError):
    """A backdrop mesh is not a closed box of paired coplanar triangles."""
