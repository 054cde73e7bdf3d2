"""Scene module for procedural scene composition.

Components:
    layout: SceneLayout contract, RoomLayout and layout sampling
    placement: Scale-to-fit + random-translate mesh placement
    walls: Decomposition of a room box into paintable wall panels
    lights: Light records and focus points
    composer: random_scene() and the SceneComposition it returns
    upload: Taichi-side storage of a composed scene for the tracer

A scene is composed on the Python side with NumPy and only touches Taichi
when it is uploaded for rendering.
"""

from .composer import (
    LIGHT_FOCUS_BUDGET,
    ObjectKind,
    RenderObject,
    SceneComposition,
    SceneParams,
    TracerConfig,
    random_rotation,
    random_scene,
)
from .layout import (
    LayoutKind,
    RoomLayout,
    RoomParams,
    SceneLayout,
    make_layout,
    random_scene_layout,
)
from .lights import FocusPoint, LightSpec
from .placement import MIN_SCALE_FRACTION, max_fit_scale, place_in_bounds
from .walls import COPLANAR_THRESHOLD, decompose_walls

# Note: upload is NOT imported here because it declares Taichi fields.
# Import it after ti.init():
#   from src.scenesynth.scene.upload import upload_scene

__all__ = [
    # Composer
    "random_scene",
    "random_rotation",
    "SceneComposition",
    "SceneParams",
    "RenderObject",
    "ObjectKind",
    "TracerConfig",
    "LIGHT_FOCUS_BUDGET",
    # Layout
    "SceneLayout",
    "RoomLayout",
    "RoomParams",
    "LayoutKind",
    "make_layout",
    "random_scene_layout",
    # Lights
    "LightSpec",
    "FocusPoint",
    # Placement and walls
    "place_in_bounds",
    "max_fit_scale",
    "MIN_SCALE_FRACTION",
    "decompose_walls",
    "COPLANAR_THRESHOLD",
]
