"""Unit tests for OFF mesh loading.

Tests cover:
- Well-formed files (quads triangulated, comments, counts on header)
- Malformed documents raise MeshLoadError
- Missing files raise MeshLoadError
"""

import io

import numpy as np
import pytest


class TestReadOff:
    """Tests for parsing OFF documents."""

    def test_cube_is_triangulated(self, cube_path):
        from src.scenesynth.geometry.off import load_off

        mesh = load_off(cube_path)
        # 6 quads -> 12 triangles
        assert len(mesh) == 12
        assert mesh.min().tolist() == [0.0, 0.0, 0.0]
        assert mesh.max().tolist() == [1.0, 1.0, 1.0]

    def test_tetrahedron(self, tetra_path):
        from src.scenesynth.geometry.off import load_off

        mesh = load_off(tetra_path)
        assert len(mesh) == 4
        assert mesh.bounds().extent.tolist() == [2.0, 3.0, 1.0]

    def test_vertices_kept_as_stored(self, tetra_path):
        from src.scenesynth.geometry.off import load_off

        mesh = load_off(tetra_path)
        assert mesh.vertices() == {
            (0.0, 0.0, 0.0),
            (2.0, 0.0, 0.0),
            (0.0, 3.0, 0.0),
            (0.0, 0.0, 1.0),
        }

    def test_quad_split_covers_square(self):
        from src.scenesynth.geometry.off import read_off

        text = "OFF\n4 1 0\n0 0 0\n1 0 0\n1 1 0\n0 1 0\n4 0 1 2 3\n"
        mesh = read_off(io.StringIO(text))
        assert len(mesh) == 2
        normals = mesh.normals()
        assert np.allclose(normals, [[0, 0, 1], [0, 0, 1]])
        a, b, c = mesh.triangles[:, 0], mesh.triangles[:, 1], mesh.triangles[:, 2]
        areas = np.linalg.norm(np.cross(b - a, c - a), axis=1) / 2
        assert areas.sum() == pytest.approx(1.0)

    def test_binary_stream(self):
        from src.scenesynth.geometry.off import read_off

        data = b"OFF\n3 1 0\n0 0 0\n1 0 0\n0 1 0\n3 0 1 2\n"
        assert len(read_off(io.BytesIO(data))) == 1

    def test_counts_on_header_line(self):
        from src.scenesynth.geometry.off import read_off

        text = "OFF 3 1 0\n0 0 0\n1 0 0\n0 1 0\n3 0 1 2\n"
        assert len(read_off(io.StringIO(text))) == 1

    def test_comments_and_blank_lines(self):
        from src.scenesynth.geometry.off import read_off

        text = "# header comment\nOFF\n\n3 1 0  # counts\n0 0 0\n1 0 0 # v1\n0 1 0\n\n3 0 1 2\n"
        assert len(read_off(io.StringIO(text))) == 1

    def test_face_colors_ignored(self):
        from src.scenesynth.geometry.off import read_off

        text = "OFF\n3 1 0\n0 0 0\n1 0 0\n0 1 0\n3 0 1 2 255 0 0\n"
        assert len(read_off(io.StringIO(text))) == 1

    def test_degenerate_face_is_kept(self, point_path):
        from src.scenesynth.geometry.off import load_off

        mesh = load_off(point_path)
        assert len(mesh) == 1
        assert mesh.bounds().extent.tolist() == [0.0, 0.0, 0.0]


class TestMalformed:
    """Tests for fatal load errors."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "PLY\n3 1 0\n",
            "OFF\n",
            "OFF\nthree 1 0\n",
            "OFF\n3 1 0\n0 0 0\n1 0 0\n",
            "OFF\n3 1 0\n0 0 0\n1 0\n0 1 0\n3 0 1 2\n",
            "OFF\n3 1 0\n0 0 0\n1 0 x\n0 1 0\n3 0 1 2\n",
            "OFF\n3 1 0\n0 0 0\n1 0 0\n0 1 0\n",
            "OFF\n3 0 0\n0 0 0\n1 0 0\n0 1 0\n",
        ],
    )
    def test_malformed_documents(self, text):
        from src.scenesynth.errors import MeshLoadError
        from src.scenesynth.geometry.off import read_off

        with pytest.raises(MeshLoadError):
            read_off(io.StringIO(text))

    def test_cause_is_chained(self):
        from src.scenesynth.errors import MeshLoadError
        from src.scenesynth.geometry.off import read_off

        with pytest.raises(MeshLoadError) as excinfo:
            read_off(io.StringIO("OFF\nthree 1 0\n"), source="bad.off")
        assert excinfo.value.__cause__ is not None
        assert "bad.off" in str(excinfo.value)

    def test_missing_file(self, tmp_path):
        from src.scenesynth.errors import MeshLoadError
        from src.scenesynth.geometry.off import load_off

        with pytest.raises(MeshLoadError, match="missing.off"):
            load_off(tmp_path / "missing.off")

    def test_load_error_is_os_error(self, tmp_path):
        from src.scenesynth.geometry.off import load_off

        with pytest.raises(OSError):
            load_off(tmp_path / "missing.off")

    def test_binary_file(self, tmp_path):
        from src.scenesynth.errors import MeshLoadError
        from src.scenesynth.geometry.off import load_off

        path = tmp_path / "binary.off"
        path.write_bytes(b"\xff\xfe\x00\x81")
        with pytest.raises(MeshLoadError):
            load_off(path)

    def test_error_names_source(self, write_off):
        from src.scenesynth.errors import MeshLoadError
        from src.scenesynth.geometry.off import load_off

        path = write_off("broken.off", "OFF\n1 1 0\n")
        with pytest.raises(MeshLoadError, match="broken.off"):
            load_off(path)
