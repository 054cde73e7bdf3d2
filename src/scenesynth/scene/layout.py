"""Scene layouts: room-shape-specific camera, light, backdrop and placement.

A SceneLayout decides where the camera goes, where lights may appear, what
the enclosing backdrop looks like and which volume objects are placed in.
The set of layouts is closed: every implementation is listed in LayoutKind
and built by make_layout(). Only the rectangular RoomLayout exists today.

The room is Z-up with the floor at z = 0 and the ceiling at z = height
(1.0 by default). It is centered on the origin in X (width) and Y (depth);
the camera sits at the -Y wall looking toward +Y.

Example:
    >>> layout = RoomLayout(width=1.0, depth=10.0)
    >>> position, target = layout.camera_info()
    >>> target.tolist()
    [0.0, 5.0, 0.5]
    >>> len(layout.create_backdrop())
    6
"""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from src.scenesynth.core.vector import Vec3, uniform_vec3, vec3
from src.scenesynth.geometry.aabb import AxisAlignedBox
from src.scenesynth.geometry.mesh import Mesh
from src.scenesynth.geometry.primitives import Box, Sphere
from src.scenesynth.materials.emissive import EmissiveMaterial
from src.scenesynth.scene.lights import LightShape, LightSpec
from src.scenesynth.scene.placement import place_in_bounds
from src.scenesynth.scene.walls import decompose_walls

# =============================================================================
# Room Parameters
# =============================================================================


@dataclass(frozen=True)
class RoomParams:
    """Sampling ranges and constants for rectangular rooms.

    Attributes:
        width_range: Range of room widths (X extent).
        depth_range: Range of room depths (Y extent).
        height: Room height (Z extent), the unit reference.
        camera_epsilon: Distance of the camera in front of the near wall.
        ceiling_light_prob: Probability of a ceiling light (else side wall).
        wall_light_max_height: Side-wall lights sit at z in [0, this].
        sphere_radius_range: Radius range of spherical lights.
        box_half_extent_range: Per-axis half extent range of box lights.
        emission_range: Range of the light intensity factor.
        emission_scale: Multiplier applied to the intensity factor.
    """

    width_range: tuple[float, float] = (0.5, 2.5)
    depth_range: tuple[float, float] = (5.0, 25.0)
    height: float = 1.0
    camera_epsilon: float = 1e-5
    ceiling_light_prob: float = 0.5
    wall_light_max_height: float = 0.9
    sphere_radius_range: tuple[float, float] = (0.05, 0.25)
    box_half_extent_range: tuple[float, float] = (0.05, 0.15)
    emission_range: tuple[float, float] = (0.1, 1.1)
    emission_scale: float = 10.0

    def __post_init__(self) -> None:
        for name in (
            "width_range",
            "depth_range",
            "sphere_radius_range",
            "box_half_extent_range",
            "emission_range",
        ):
            lo, hi = getattr(self, name)
            if lo > hi:
                raise ValueError(f"{name} has min {lo} greater than max {hi}")
        if self.width_range[0] <= 0.0 or self.depth_range[0] <= 0.0:
            raise ValueError("Room width and depth ranges must be positive")
        if self.height <= 0.0:
            raise ValueError(f"Room height must be positive, got {self.height}")
        if self.sphere_radius_range[0] <= 0.0 or self.box_half_extent_range[0] <= 0.0:
            raise ValueError("Light sizes must be positive")
        if not 0.0 <= self.ceiling_light_prob <= 1.0:
            raise ValueError(f"ceiling_light_prob must be in [0, 1], got {self.ceiling_light_prob}")


# =============================================================================
# Layout Contract
# =============================================================================


class SceneLayout(abc.ABC):
    """Room-shape-specific decisions made while composing a scene.

    Implementations are immutable once created; randomized operations take
    the generator explicitly.
    """

    @abc.abstractmethod
    def camera_info(self) -> tuple[Vec3, Vec3]:
        """Camera (position, target) consistent with the layout's bounds."""

    @abc.abstractmethod
    def create_light(self, rng: np.random.Generator) -> LightSpec:
        """A randomized emissive light that makes sense in this layout."""

    @abc.abstractmethod
    def create_backdrop(self) -> list[Mesh]:
        """Meshes acting as the walls of the scene, one per paintable panel."""

    @abc.abstractmethod
    def placement_bounds(self) -> AxisAlignedBox:
        """Volume that placed objects must stay inside."""

    def place_mesh(self, mesh: Mesh, rng: np.random.Generator) -> Mesh:
        """Scale and translate a copy of mesh so it fits the placement bounds."""
        return place_in_bounds(mesh, self.placement_bounds(), rng)

    @abc.abstractmethod
    def to_dict(self) -> dict[str, object]:
        """JSON-ready description of the layout."""


# =============================================================================
# Rectangular Room
# =============================================================================


@dataclass(frozen=True)
class RoomLayout(SceneLayout):
    """A rectangular room with lights on the ceiling and side walls.

    Attributes:
        width: Room extent along X.
        depth: Room extent along Y.
        params: Light, camera and height settings.
    """

    width: float
    depth: float
    params: RoomParams = field(default_factory=RoomParams)

    def __post_init__(self) -> None:
        if not (self.width > 0.0 and self.depth > 0.0):
            raise ValueError(
                f"Room width and depth must be positive, got {self.width} x {self.depth}"
            )

    @property
    def height(self) -> float:
        return self.params.height

    def room_bounds(self) -> AxisAlignedBox:
        """The full interior of the room."""
        return AxisAlignedBox(
            min=vec3(-self.width / 2, -self.depth / 2, 0.0),
            max=vec3(self.width / 2, self.depth / 2, self.height),
        )

    def camera_info(self) -> tuple[Vec3, Vec3]:
        mid_height = self.height / 2
        position = vec3(0.0, -self.depth / 2 + self.params.camera_epsilon, mid_height)
        target = vec3(0.0, self.depth / 2, mid_height)
        return position, target

    def _light_center(self, rng: np.random.Generator) -> Vec3:
        if rng.random() < self.params.ceiling_light_prob:
            return vec3(
                (rng.random() - 0.5) * self.width,
                (rng.random() - 0.5) * self.depth,
                self.height,
            )
        # Side wall, left or right
        x = self.width / 2
        if rng.integers(2) == 0:
            x = -x
        return vec3(
            x,
            (rng.random() - 0.5) * self.depth,
            rng.random() * self.params.wall_light_max_height,
        )

    def _light_shape(self, center: Vec3, rng: np.random.Generator) -> LightShape:
        if rng.integers(2) == 0:
            radius = rng.uniform(*self.params.sphere_radius_range)
            return Sphere(center=center, radius=radius)
        lo, hi = self.params.box_half_extent_range
        half_extent = lo + uniform_vec3(rng) * (hi - lo)
        return Box.around(center, half_extent)

    def create_light(self, rng: np.random.Generator) -> LightSpec:
        center = self._light_center(rng)
        shape = self._light_shape(center, rng)
        intensity = rng.uniform(*self.params.emission_range) * self.params.emission_scale
        return LightSpec(shape=shape, material=EmissiveMaterial.white(intensity))

    def create_backdrop(self) -> list[Mesh]:
        bounds = self.room_bounds()
        return decompose_walls(Mesh.box(bounds.min, bounds.max))

    def placement_bounds(self) -> AxisAlignedBox:
        # Whole floor footprint, full height
        return self.room_bounds()

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": LayoutKind.ROOM.value,
            "width": self.width,
            "depth": self.depth,
            "height": self.height,
        }


# =============================================================================
# Layout Selection
# =============================================================================


class LayoutKind(Enum):
    """Every available layout implementation."""

    ROOM = "room"


def make_layout(
    kind: LayoutKind,
    rng: np.random.Generator,
    room_params: RoomParams | None = None,
) -> SceneLayout:
    """Sample the parameters of a layout of the given kind."""
    if room_params is None:
        room_params = RoomParams()
    if kind is LayoutKind.ROOM:
        return RoomLayout(
            width=float(rng.uniform(*room_params.width_range)),
            depth=float(rng.uniform(*room_params.depth_range)),
            params=room_params,
        )
    raise ValueError(f"Unknown layout kind: {kind}")


def random_scene_layout(
    rng: np.random.Generator,
    room_params: RoomParams | None = None,
) -> SceneLayout:
    """Sample a layout kind and its parameters.

    Only rooms exist at the moment, so this always returns a RoomLayout.
    """
    kinds = list(LayoutKind)
    kind = kinds[int(rng.integers(len(kinds)))]
    return make_layout(kind, rng, room_params)
