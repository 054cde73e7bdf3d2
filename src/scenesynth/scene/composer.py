"""Random scene composition.

random_scene() builds one complete scene for the ray tracer:

1. Sample a layout (currently always a rectangular room).
2. Sample how many objects (1-10) and lights (1-5) to add.
3. Add the layout's backdrop panels, each with its own material.
4. For each object: pick a mesh file, load it, rotate it randomly about a
   random axis, and let the layout place it.
5. For each light: let the layout create it and register it as a focus point
   with probability 0.3 / light_count, so lights always get 30% of the
   tracer's focused samples in total.
6. Sample a field of view in [pi/6, pi/3] and aim the camera as the layout
   asks.

Composition is all-or-nothing. A mesh that fails to load or is degenerate
aborts the whole scene; nothing partial is returned.

Example:
    >>> rng = np.random.default_rng(1234)
    >>> scene = random_scene(["models/chair.off"], [], rng)
    >>> len(scene.tracer.focus_points) == len(scene.objects_of_kind(ObjectKind.LIGHT))
    True
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Union

import numpy as np

from src.scenesynth.camera.spec import MAX_FOV, MIN_FOV, CameraSpec
from src.scenesynth.core.vector import random_unit_vector
from src.scenesynth.geometry.mesh import Mesh, rotation_matrix
from src.scenesynth.geometry.off import load_off
from src.scenesynth.geometry.primitives import Box, Sphere
from src.scenesynth.materials.sampling import Material, MaterialSampler, random_lambertian
from src.scenesynth.scene.layout import RoomParams, SceneLayout, random_scene_layout
from src.scenesynth.scene.lights import FocusPoint

log = logging.getLogger(__name__)

# Share of tracer samples reserved for light focus points; the rest stays
# with ordinary (unfocused) sampling.
LIGHT_FOCUS_BUDGET = 0.3

# Slack when checking focus probability sums
_PROB_TOLERANCE = 1e-9

Geometry = Union[Mesh, Sphere, Box]
MeshLoader = Callable[[str], Mesh]


class ObjectKind(IntEnum):
    """Role of a renderable object in the scene."""

    BACKDROP = 0
    MESH = 1
    LIGHT = 2


@dataclass(frozen=True)
class SceneParams:
    """Sampling ranges for scene composition.

    Attributes:
        object_count_range: Inclusive range of placed objects.
        light_count_range: Inclusive range of lights.
        light_focus_budget: Total focus probability shared by the lights.
        fov_range: Field of view range in radians.
        room: Parameters of room layouts.
    """

    object_count_range: tuple[int, int] = (1, 10)
    light_count_range: tuple[int, int] = (1, 5)
    light_focus_budget: float = LIGHT_FOCUS_BUDGET
    fov_range: tuple[float, float] = (MIN_FOV, MAX_FOV)
    room: RoomParams = field(default_factory=RoomParams)

    def __post_init__(self) -> None:
        for name in ("object_count_range", "light_count_range"):
            lo, hi = getattr(self, name)
            if lo < 0 or lo > hi:
                raise ValueError(f"{name} must satisfy 0 <= min <= max, got {(lo, hi)}")
        if self.light_count_range[0] < 1:
            raise ValueError("A scene needs at least one light")
        if not 0.0 <= self.light_focus_budget <= LIGHT_FOCUS_BUDGET:
            raise ValueError(
                f"light_focus_budget must be in [0, {LIGHT_FOCUS_BUDGET}], "
                f"got {self.light_focus_budget}"
            )
        lo, hi = self.fov_range
        if not MIN_FOV <= lo <= hi <= MAX_FOV:
            raise ValueError(f"fov_range must lie within [{MIN_FOV}, {MAX_FOV}], got {(lo, hi)}")


@dataclass(frozen=True)
class RenderObject:
    """A piece of geometry with its material.

    Attributes:
        geometry: Mesh for backdrop panels and placed objects, Sphere or Box
            for lights.
        material: Diffuse or emissive material.
        kind: Role of the object in the scene.
    """

    geometry: Geometry
    material: Material
    kind: ObjectKind

    def to_dict(self) -> dict[str, object]:
        if isinstance(self.geometry, Mesh):
            geometry = {"type": "mesh", **self.geometry.to_dict()}
        else:
            geometry = self.geometry.to_dict()
        return {
            "kind": self.kind.name.lower(),
            "geometry": geometry,
            "material": self.material.to_dict(),
        }


@dataclass(frozen=True)
class TracerConfig:
    """What the tracer needs besides the objects.

    Attributes:
        camera: Camera placement and field of view.
        focus_points: Spheres to preferentially sample toward.
        focus_probs: Selection probability of each focus point, parallel to
            focus_points.
    """

    camera: CameraSpec
    focus_points: tuple[FocusPoint, ...] = ()
    focus_probs: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "focus_points", tuple(self.focus_points))
        object.__setattr__(self, "focus_probs", tuple(float(p) for p in self.focus_probs))
        if len(self.focus_points) != len(self.focus_probs):
            raise ValueError(
                f"Got {len(self.focus_points)} focus points but "
                f"{len(self.focus_probs)} probabilities"
            )
        for i, prob in enumerate(self.focus_probs):
            if not 0.0 <= prob <= 1.0:
                raise ValueError(f"Focus probability {i} = {prob} is outside [0, 1]")
        total = sum(self.focus_probs)
        if total > LIGHT_FOCUS_BUDGET + _PROB_TOLERANCE:
            raise ValueError(
                f"Focus probabilities sum to {total}, above {LIGHT_FOCUS_BUDGET}"
            )

    def to_dict(self) -> dict[str, object]:
        return {
            "camera": self.camera.to_dict(),
            "focus_points": [fp.to_dict() for fp in self.focus_points],
            "focus_probs": list(self.focus_probs),
        }


@dataclass(frozen=True)
class SceneComposition:
    """A finished scene: ordered renderable objects plus tracer settings.

    Attributes:
        objects: Backdrop panels, then placed meshes, then lights.
        tracer: Camera and focus point configuration.
        layout: Layout the scene was built in.
    """

    objects: tuple[RenderObject, ...]
    tracer: TracerConfig
    layout: SceneLayout

    def objects_of_kind(self, kind: ObjectKind) -> list[RenderObject]:
        return [obj for obj in self.objects if obj.kind == kind]

    def to_dict(self) -> dict[str, object]:
        """JSON-ready description of the whole scene."""
        return {
            "layout": self.layout.to_dict(),
            "objects": [obj.to_dict() for obj in self.objects],
            "tracer": self.tracer.to_dict(),
        }


# =============================================================================
# Composition
# =============================================================================


def _sample_count(rng: np.random.Generator, count_range: tuple[int, int]) -> int:
    lo, hi = count_range
    return int(rng.integers(lo, hi + 1))


def random_rotation(mesh: Mesh, rng: np.random.Generator) -> Mesh:
    """Rotate mesh by a uniform angle in [0, 2pi) about a uniform random axis."""
    axis = random_unit_vector(rng)
    angle = rng.random() * 2.0 * math.pi
    return mesh.transform(rotation_matrix(axis, angle))


def random_scene(
    models: Sequence[str],
    images: Sequence[str],
    rng: np.random.Generator,
    *,
    params: SceneParams | None = None,
    material_sampler: MaterialSampler | None = None,
    mesh_loader: MeshLoader = load_off,
    layout: SceneLayout | None = None,
) -> SceneComposition:
    """Compose a random scene.

    Args:
        models: Paths of mesh files to draw objects from.
        images: Image paths handed to the material sampler.
        rng: Random generator; the only source of randomness.
        params: Sampling ranges (defaults to SceneParams()).
        material_sampler: Chooses materials for panels and objects
            (defaults to a random diffuse color).
        mesh_loader: Reads a mesh file (defaults to the OFF reader).
        layout: Use this layout instead of sampling one.

    Returns:
        The composed scene.

    Raises:
        ValueError: If no models are given while objects are requested.
        MeshLoadError: If a mesh file cannot be loaded.
        DegenerateMeshError: If a loaded mesh is flat along some axis.
    """
    if params is None:
        params = SceneParams()
    if material_sampler is None:
        material_sampler = random_lambertian
    if not models and params.object_count_range[1] > 0:
        raise ValueError("At least one model path is required to place objects")

    if layout is None:
        layout = random_scene_layout(rng, params.room)
    num_objects = _sample_count(rng, params.object_count_range)
    num_lights = _sample_count(rng, params.light_count_range)
    log.debug("Composing scene: layout=%s objects=%d lights=%d", layout, num_objects, num_lights)

    objects: list[RenderObject] = []
    focus_points: list[FocusPoint] = []
    focus_probs: list[float] = []

    for wall in layout.create_backdrop():
        objects.append(
            RenderObject(wall, material_sampler(wall, images, rng), ObjectKind.BACKDROP)
        )

    for _ in range(num_objects):
        path = models[int(rng.integers(len(models)))]
        mesh = mesh_loader(path)
        mesh = random_rotation(mesh, rng)
        mesh = layout.place_mesh(mesh, rng)
        log.debug("Placed %s (%d triangles)", path, len(mesh))
        objects.append(RenderObject(mesh, material_sampler(mesh, images, rng), ObjectKind.MESH))

    light_prob = params.light_focus_budget / num_lights
    for _ in range(num_lights):
        light = layout.create_light(rng)
        objects.append(RenderObject(light.shape, light.material, ObjectKind.LIGHT))
        focus_points.append(light.focus_point())
        focus_probs.append(light_prob)

    origin, target = layout.camera_info()
    fov = float(rng.uniform(*params.fov_range))
    tracer = TracerConfig(
        camera=CameraSpec(origin=origin, target=target, fov=fov),
        focus_points=tuple(focus_points),
        focus_probs=tuple(focus_probs),
    )

    log.info(
        "Composed scene with %d objects (%d placed, %d lights)",
        len(objects),
        num_objects,
        num_lights,
    )
    return SceneComposition(objects=tuple(objects), tracer=tracer, layout=layout)
