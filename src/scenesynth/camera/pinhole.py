"""Tracer-side pinhole camera setup.

camera_frame() derives the orthonormal basis and the image plane of a
PinholeCamera on the CPU. setup_camera() writes that frame into Taichi
fields, where the tracer's ray generation reads it.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.scenesynth.camera.spec import CameraSpec
    >>> spec = CameraSpec(origin=(0, -5, 0.5), target=(0, 5, 0.5), fov=math.pi / 4)
    >>> setup_camera(spec.to_pinhole(aspect_ratio=1.0))
    >>> get_camera_info()["origin"]
    (0.0, -5.0, 0.5)
"""

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti

from src.scenesynth.camera.spec import PinholeCamera

# Below this length the view direction counts as parallel to vup
_MIN_RIGHT_LENGTH = 1e-12

# =============================================================================
# Taichi Fields for Camera State (GPU-accessible)
# =============================================================================

# One scalar vec3 field per frame vector, keyed by CameraFrame attribute name.
# u points right, v up, w backward (away from the view direction).
_FRAME_NAMES = ("origin", "u", "v", "w", "horizontal", "vertical", "lower_left")
_frame_fields = {name: ti.Vector.field(3, dtype=ti.f32, shape=()) for name in _FRAME_NAMES}


@dataclass(frozen=True)
class CameraFrame:
    """World-space camera basis and image plane.

    The image plane sits at unit distance in front of the camera; a ray for
    image coordinates (s, t) in [0, 1]^2 points from origin toward
    lower_left + s * horizontal + t * vertical.
    """

    origin: npt.NDArray[np.float64]
    u: npt.NDArray[np.float64]
    v: npt.NDArray[np.float64]
    w: npt.NDArray[np.float64]
    horizontal: npt.NDArray[np.float64]
    vertical: npt.NDArray[np.float64]
    lower_left: npt.NDArray[np.float64]


def camera_frame(camera: PinholeCamera) -> CameraFrame:
    """Compute the basis and image plane of a pinhole camera.

    Raises:
        ValueError: If lookfrom equals lookat, or the view direction is
            parallel to vup.
    """
    origin = np.asarray(camera.lookfrom, dtype=np.float64)
    backward = origin - np.asarray(camera.lookat, dtype=np.float64)
    distance = np.linalg.norm(backward)
    if distance == 0.0:
        raise ValueError("Camera lookfrom and lookat must differ")
    w = backward / distance

    right = np.cross(np.asarray(camera.vup, dtype=np.float64), w)
    right_length = np.linalg.norm(right)
    if right_length < _MIN_RIGHT_LENGTH:
        raise ValueError("Camera view direction is parallel to the up vector")
    u = right / right_length
    v = np.cross(w, u)

    half_height = math.tan(math.radians(camera.vfov) / 2.0)
    vertical = 2.0 * half_height * v
    horizontal = camera.aspect_ratio * 2.0 * half_height * u
    return CameraFrame(
        origin=origin,
        u=u,
        v=v,
        w=w,
        horizontal=horizontal,
        vertical=vertical,
        lower_left=origin - w - (horizontal + vertical) / 2.0,
    )


def setup_camera(camera: PinholeCamera) -> CameraFrame:
    """Store the camera frame in the tracer's fields.

    Args:
        camera: Camera position, orientation, field of view and aspect.

    Returns:
        The frame that was written.

    Raises:
        ValueError: If the camera orientation is undefined (see camera_frame).
    """
    frame = camera_frame(camera)
    for name, field in _frame_fields.items():
        field[None] = getattr(frame, name).tolist()
    return frame


def get_camera_info() -> dict[str, tuple[float, float, float]]:
    """Read back the stored camera frame, one (x, y, z) tuple per vector."""
    info = {}
    for name, field in _frame_fields.items():
        vec = field[None]
        info[name] = (float(vec[0]), float(vec[1]), float(vec[2]))
    return info
