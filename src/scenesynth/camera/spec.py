"""Camera descriptions.

A composed scene describes its camera as a CameraSpec: origin, target and a
field of view in radians. The tracer consumes a PinholeCamera (degrees, an
explicit up vector and an aspect ratio); CameraSpec.to_pinhole() converts.

Scenes are Z-up: the floor is z = 0 and the ceiling z = 1, so the camera's
up vector is +Z.

Example:
    >>> spec = CameraSpec(origin=(0, -5, 0.5), target=(0, 5, 0.5), fov=math.pi / 4)
    >>> spec.to_pinhole(aspect_ratio=1.0).vfov
    45.0
"""

import math
from dataclasses import dataclass

import numpy as np

from src.scenesynth.core.vector import Vec3, as_vec3, normalize

# Field of view bounds in radians (half to full of a 60 degree reference)
MIN_FOV = math.pi / 6.0
MAX_FOV = math.pi / 3.0

# Up direction for every scene (Z-up world)
WORLD_UP = (0.0, 0.0, 1.0)


@dataclass(frozen=True, eq=False)
class CameraSpec:
    """Camera placement chosen by a scene composer.

    Attributes:
        origin: Camera position in world space.
        target: Point the camera looks at; must differ from origin.
        fov: Vertical field of view in radians, in [MIN_FOV, MAX_FOV].
    """

    origin: Vec3
    target: Vec3
    fov: float

    def __post_init__(self) -> None:
        origin = as_vec3(self.origin)
        target = as_vec3(self.target)
        if np.array_equal(origin, target):
            raise ValueError("Camera origin and target must differ")
        if not MIN_FOV <= self.fov <= MAX_FOV:
            raise ValueError(
                f"Field of view {self.fov} is outside [{MIN_FOV}, {MAX_FOV}] radians"
            )
        origin.setflags(write=False)
        target.setflags(write=False)
        object.__setattr__(self, "origin", origin)
        object.__setattr__(self, "target", target)
        object.__setattr__(self, "fov", float(self.fov))

    @property
    def direction(self) -> Vec3:
        """Unit view direction from origin toward target."""
        return normalize(self.target - self.origin)

    def to_pinhole(self, aspect_ratio: float = 1.0) -> "PinholeCamera":
        """Convert to the tracer's camera description."""
        return PinholeCamera(
            lookfrom=tuple(self.origin.tolist()),
            lookat=tuple(self.target.tolist()),
            vup=WORLD_UP,
            vfov=math.degrees(self.fov),
            aspect_ratio=aspect_ratio,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "origin": self.origin.tolist(),
            "target": self.target.tolist(),
            "fov": self.fov,
        }


@dataclass
class PinholeCamera:
    """Configuration for a pinhole (perspective) camera.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation.
        vfov: Vertical field of view in degrees.
        aspect_ratio: Width divided by height of the output image.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float]
    vfov: float
    aspect_ratio: float
