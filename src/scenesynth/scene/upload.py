"""Hand a composed scene to the GPU tracer.

The tracer reads geometry, materials and focus points from Taichi fields in
Structure-of-Arrays layout. upload_scene() flattens a SceneComposition into
those fields:

- Triangles of every mesh (backdrop panels and placed objects), with face
  normals computed by a kernel and the index of the owning object
- Spheres and boxes (lights)
- Per-object albedo and emission
- Focus points with their selection probabilities

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.gpu)
    >>> from src.scenesynth.scene.upload import upload_scene
    >>> info = upload_scene(scene)
    >>> info.num_focus_points == len(scene.tracer.focus_points)
    True
"""

from dataclasses import dataclass

import numpy as np
import taichi as ti
import taichi.math as tm

from src.scenesynth.geometry.mesh import Mesh
from src.scenesynth.geometry.primitives import Box, Sphere
from src.scenesynth.scene.composer import SceneComposition

# Maximum number of primitives supported in the scene
MAX_TRIANGLES = 1 << 18
MAX_SPHERES = 64
MAX_BOXES = 64
MAX_OBJECTS = 256
MAX_FOCUS_POINTS = 64

# Triangle storage: vertex k of triangle i lives at triangle_vertices[i, k]
triangle_vertices = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_TRIANGLES, 3))
triangle_normals = ti.Vector.field(3, dtype=ti.f32, shape=MAX_TRIANGLES)
triangle_object_ids = ti.field(dtype=ti.i32, shape=MAX_TRIANGLES)
num_triangles = ti.field(dtype=ti.i32, shape=())

# Sphere storage
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_object_ids = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Box storage
box_mins = ti.Vector.field(3, dtype=ti.f32, shape=MAX_BOXES)
box_maxs = ti.Vector.field(3, dtype=ti.f32, shape=MAX_BOXES)
box_object_ids = ti.field(dtype=ti.i32, shape=MAX_BOXES)
num_boxes = ti.field(dtype=ti.i32, shape=())

# Per-object material properties
object_albedos = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
object_emissions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
num_objects = ti.field(dtype=ti.i32, shape=())

# Focus points for importance sampling
focus_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_FOCUS_POINTS)
focus_radii = ti.field(dtype=ti.f32, shape=MAX_FOCUS_POINTS)
focus_probs = ti.field(dtype=ti.f32, shape=MAX_FOCUS_POINTS)
num_focus_points = ti.field(dtype=ti.i32, shape=())


@dataclass
class SceneUploadInfo:
    """Counts of what upload_scene() wrote.

    Attributes:
        num_objects: Renderable objects (material slots).
        num_triangles: Triangles across all meshes.
        num_spheres: Spherical lights.
        num_boxes: Box lights.
        num_focus_points: Focus points.
    """

    num_objects: int
    num_triangles: int
    num_spheres: int
    num_boxes: int
    num_focus_points: int


def clear_scene() -> None:
    """Reset every count to zero.

    Field data is not cleared; it is overwritten by the next upload.
    """
    num_triangles[None] = 0
    num_spheres[None] = 0
    num_boxes[None] = 0
    num_objects[None] = 0
    num_focus_points[None] = 0


def _check_capacity(name: str, count: int, limit: int) -> None:
    if count > limit:
        raise RuntimeError(f"Maximum number of {name} ({limit}) exceeded: {count}")


@ti.kernel
def _compute_triangle_normals(n: ti.i32):
    """Fill triangle_normals for the first n triangles."""
    for i in range(n):
        a = triangle_vertices[i, 0]
        b = triangle_vertices[i, 1]
        c = triangle_vertices[i, 2]
        normal = tm.cross(b - a, c - a)
        length = tm.length(normal)
        if length > 0.0:
            normal = normal / length
        triangle_normals[i] = normal


def upload_scene(scene: SceneComposition) -> SceneUploadInfo:
    """Write a composed scene into the tracer's fields.

    Any previously uploaded scene is replaced.

    Args:
        scene: The composition to upload.

    Returns:
        Counts of uploaded primitives.

    Raises:
        RuntimeError: If the scene exceeds a storage capacity. Nothing is
            written in that case.
    """
    meshes: list[tuple[int, Mesh]] = []
    spheres: list[tuple[int, Sphere]] = []
    boxes: list[tuple[int, Box]] = []
    for object_id, obj in enumerate(scene.objects):
        if isinstance(obj.geometry, Mesh):
            meshes.append((object_id, obj.geometry))
        elif isinstance(obj.geometry, Sphere):
            spheres.append((object_id, obj.geometry))
        elif isinstance(obj.geometry, Box):
            boxes.append((object_id, obj.geometry))
        else:
            raise ValueError(f"Unsupported geometry type: {type(obj.geometry).__name__}")
    tri_count = sum(len(mesh) for _, mesh in meshes)
    focus_count = len(scene.tracer.focus_points)

    _check_capacity("objects", len(scene.objects), MAX_OBJECTS)
    _check_capacity("triangles", tri_count, MAX_TRIANGLES)
    _check_capacity("spheres", len(spheres), MAX_SPHERES)
    _check_capacity("boxes", len(boxes), MAX_BOXES)
    _check_capacity("focus points", focus_count, MAX_FOCUS_POINTS)

    clear_scene()

    # Triangles go in with one bulk copy; the fields are larger than the scene
    vertices = np.zeros((MAX_TRIANGLES, 3, 3), dtype=np.float32)
    object_ids = np.full(MAX_TRIANGLES, -1, dtype=np.int32)
    offset = 0
    for object_id, mesh in meshes:
        vertices[offset : offset + len(mesh)] = mesh.triangles
        object_ids[offset : offset + len(mesh)] = object_id
        offset += len(mesh)
    triangle_vertices.from_numpy(vertices)
    triangle_object_ids.from_numpy(object_ids)
    num_triangles[None] = tri_count
    _compute_triangle_normals(tri_count)

    for idx, (object_id, sphere) in enumerate(spheres):
        sphere_centers[idx] = sphere.center.tolist()
        sphere_radii[idx] = sphere.radius
        sphere_object_ids[idx] = object_id
    num_spheres[None] = len(spheres)

    for idx, (object_id, box) in enumerate(boxes):
        box_mins[idx] = box.min.tolist()
        box_maxs[idx] = box.max.tolist()
        box_object_ids[idx] = object_id
    num_boxes[None] = len(boxes)

    for object_id, obj in enumerate(scene.objects):
        object_albedos[object_id] = list(obj.material.albedo)
        object_emissions[object_id] = list(obj.material.emission)
    num_objects[None] = len(scene.objects)

    for idx, (point, prob) in enumerate(zip(scene.tracer.focus_points, scene.tracer.focus_probs)):
        focus_centers[idx] = point.center.tolist()
        focus_radii[idx] = point.radius
        focus_probs[idx] = prob
    num_focus_points[None] = focus_count

    return SceneUploadInfo(
        num_objects=len(scene.objects),
        num_triangles=tri_count,
        num_spheres=len(spheres),
        num_boxes=len(boxes),
        num_focus_points=focus_count,
    )


def get_triangle_count() -> int:
    """Get the number of uploaded triangles."""
    return int(num_triangles[None])


def get_sphere_count() -> int:
    """Get the number of uploaded spheres."""
    return int(num_spheres[None])


def get_box_count() -> int:
    """Get the number of uploaded boxes."""
    return int(num_boxes[None])


def get_object_count() -> int:
    """Get the number of uploaded objects."""
    return int(num_objects[None])


def get_focus_point_count() -> int:
    """Get the number of uploaded focus points."""
    return int(num_focus_points[None])


def get_focus_probabilities() -> list[float]:
    """Read back the uploaded focus probabilities."""
    return [float(focus_probs[i]) for i in range(get_focus_point_count())]


def get_triangle_normal(index: int) -> tuple[float, float, float]:
    """Read back one uploaded face normal."""
    n = triangle_normals[index]
    return (float(n[0]), float(n[1]), float(n[2]))
