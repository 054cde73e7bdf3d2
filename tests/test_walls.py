"""Unit tests for splitting a room box into wall panels."""

import numpy as np
import pytest


class TestDecomposeWalls:
    """Tests for decompose_walls."""

    def test_box_gives_six_panels(self):
        from src.scenesynth.geometry.mesh import Mesh
        from src.scenesynth.scene.walls import decompose_walls

        panels = decompose_walls(Mesh.box((-0.5, -5, 0), (0.5, 5, 1)))
        assert len(panels) == 6
        assert all(len(panel) == 2 for panel in panels)

    def test_panel_triangles_are_coplanar(self):
        from src.scenesynth.geometry.mesh import Mesh
        from src.scenesynth.scene.walls import decompose_walls

        for panel in decompose_walls(Mesh.box((0, 0, 0), (2, 3, 1))):
            n0, n1 = panel.normals()
            assert np.dot(n0, n1) > 0.99

    def test_panels_face_different_directions(self):
        from src.scenesynth.geometry.mesh import Mesh
        from src.scenesynth.scene.walls import decompose_walls

        normals = {
            tuple(np.round(panel.normals()[0]).astype(int))
            for panel in decompose_walls(Mesh.box((0, 0, 0), (1, 1, 1)))
        }
        assert len(normals) == 6

    def test_panels_cover_every_triangle_once(self):
        from src.scenesynth.geometry.mesh import Mesh
        from src.scenesynth.scene.walls import decompose_walls

        box = Mesh.box((0, 0, 0), (1, 2, 3))
        panels = decompose_walls(box)
        combined = np.concatenate([panel.triangles for panel in panels])
        assert len(combined) == len(box)
        assert {tri.tobytes() for tri in combined} == {tri.tobytes() for tri in box}

    def test_panel_vertices_are_box_corners(self):
        from src.scenesynth.geometry.mesh import Mesh
        from src.scenesynth.scene.walls import decompose_walls

        box = Mesh.box((-1, -1, 0), (1, 1, 1))
        corners = set()
        for panel in decompose_walls(box):
            assert len(panel.vertices()) == 4
            corners |= panel.vertices()
        assert corners == box.vertices()

    def test_input_is_not_modified(self):
        from src.scenesynth.geometry.mesh import Mesh
        from src.scenesynth.scene.walls import decompose_walls

        box = Mesh.box((0, 0, 0), (1, 1, 1))
        before = box.triangles.copy()
        decompose_walls(box)
        assert np.array_equal(box.triangles, before)


class TestMalformedBackdrop:
    """Tests for meshes that are not boxes of paired triangles."""

    def test_single_triangle_raises(self):
        from src.scenesynth.errors import BackdropShapeError
        from src.scenesynth.geometry.mesh import Mesh
        from src.scenesynth.scene.walls import decompose_walls

        mesh = Mesh.from_triangles([[(0, 0, 0), (1, 0, 0), (0, 1, 0)]])
        with pytest.raises(BackdropShapeError):
            decompose_walls(mesh)

    def test_missing_triangle_raises(self):
        from src.scenesynth.errors import BackdropShapeError
        from src.scenesynth.geometry.mesh import Mesh
        from src.scenesynth.scene.walls import decompose_walls

        box = Mesh.box((0, 0, 0), (1, 1, 1))
        with pytest.raises(BackdropShapeError):
            decompose_walls(box.subset(range(11)))

    def test_tetrahedron_raises(self, tetra_path):
        from src.scenesynth.errors import BackdropShapeError
        from src.scenesynth.geometry.off import load_off
        from src.scenesynth.scene.walls import decompose_walls

        with pytest.raises(BackdropShapeError):
            decompose_walls(load_off(tetra_path))

    def test_error_is_runtime_error(self):
        from src.scenesynth.geometry.mesh import Mesh
        from src.scenesynth.scene.walls import decompose_walls

        mesh = Mesh.from_triangles([[(0, 0, 0), (1, 0, 0), (0, 1, 0)]])
        with pytest.raises(RuntimeError):
            decompose_walls(mesh)

    def test_empty_mesh_has_no_panels(self):
        from src.scenesynth.geometry.mesh import Mesh
        from src.scenesynth.scene.walls import decompose_walls

        assert decompose_walls(Mesh.from_triangles([])) == []
