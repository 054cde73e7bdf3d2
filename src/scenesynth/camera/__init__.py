"""Camera module.

Components:
    spec: CameraSpec (what a composed scene asks for) and the tracer's
        PinholeCamera description
    pinhole: Taichi-side basis and viewport setup for a PinholeCamera

The composer produces a CameraSpec in radians; to_pinhole() converts it to
the tracer's degree-based, Z-up PinholeCamera.
"""

from .spec import MAX_FOV, MIN_FOV, WORLD_UP, CameraSpec, PinholeCamera

# Note: pinhole is NOT imported here because it declares Taichi fields.
# Import it after ti.init():
#   from src.scenesynth.camera.pinhole import setup_camera

__all__ = [
    "CameraSpec",
    "PinholeCamera",
    "MIN_FOV",
    "MAX_FOV",
    "WORLD_UP",
]
