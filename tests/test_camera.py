"""Unit tests for camera descriptions and the tracer's pinhole setup.

Tests cover:
- CameraSpec validation and conversion to PinholeCamera
- Orthonormal basis computed by setup_camera (Z-up world)
- Viewport dimensions from field of view and aspect ratio
"""

import math

import numpy as np
import pytest


class TestCameraSpec:
    """Tests for CameraSpec."""

    def test_direction(self):
        from src.scenesynth.camera.spec import CameraSpec

        spec = CameraSpec(origin=(0, -5, 0.5), target=(0, 5, 0.5), fov=math.pi / 4)
        assert np.allclose(spec.direction, [0, 1, 0])

    def test_to_pinhole(self):
        from src.scenesynth.camera.spec import WORLD_UP, CameraSpec

        spec = CameraSpec(origin=(0, -5, 0.5), target=(0, 5, 0.5), fov=math.pi / 4)
        camera = spec.to_pinhole(aspect_ratio=1.5)
        assert camera.lookfrom == (0.0, -5.0, 0.5)
        assert camera.lookat == (0.0, 5.0, 0.5)
        assert camera.vup == WORLD_UP == (0.0, 0.0, 1.0)
        assert camera.vfov == pytest.approx(45.0)
        assert camera.aspect_ratio == 1.5

    def test_same_origin_and_target_raises(self):
        from src.scenesynth.camera.spec import CameraSpec

        with pytest.raises(ValueError):
            CameraSpec(origin=(1, 1, 1), target=(1, 1, 1), fov=math.pi / 4)

    @pytest.mark.parametrize("fov", [0.1, math.pi / 2])
    def test_fov_out_of_range_raises(self, fov):
        from src.scenesynth.camera.spec import CameraSpec

        with pytest.raises(ValueError):
            CameraSpec(origin=(0, 0, 0), target=(0, 1, 0), fov=fov)

    def test_fov_bounds_are_inclusive(self):
        from src.scenesynth.camera.spec import MAX_FOV, MIN_FOV, CameraSpec

        CameraSpec(origin=(0, 0, 0), target=(0, 1, 0), fov=MIN_FOV)
        CameraSpec(origin=(0, 0, 0), target=(0, 1, 0), fov=MAX_FOV)

    def test_to_dict(self):
        from src.scenesynth.camera.spec import CameraSpec

        spec = CameraSpec(origin=(0, 0, 0), target=(0, 1, 0), fov=math.pi / 4)
        assert spec.to_dict() == {
            "origin": [0.0, 0.0, 0.0],
            "target": [0.0, 1.0, 0.0],
            "fov": math.pi / 4,
        }


class TestSetupCamera:
    """Tests for setup_camera."""

    def test_room_camera_basis(self):
        from src.scenesynth.camera.pinhole import get_camera_info, setup_camera
        from src.scenesynth.camera.spec import CameraSpec

        spec = CameraSpec(origin=(0, -5, 0.5), target=(0, 5, 0.5), fov=math.pi / 4)
        setup_camera(spec.to_pinhole())
        info = get_camera_info()

        assert info["origin"] == pytest.approx((0.0, -5.0, 0.5))
        assert info["u"] == pytest.approx((1.0, 0.0, 0.0), abs=1e-6)
        assert info["v"] == pytest.approx((0.0, 0.0, 1.0), abs=1e-6)
        assert info["w"] == pytest.approx((0.0, -1.0, 0.0), abs=1e-6)

    def test_viewport_size(self):
        from src.scenesynth.camera.pinhole import get_camera_info, setup_camera
        from src.scenesynth.camera.spec import PinholeCamera

        camera = PinholeCamera(
            lookfrom=(0.0, 0.0, 0.0),
            lookat=(0.0, 1.0, 0.0),
            vup=(0.0, 0.0, 1.0),
            vfov=90.0,
            aspect_ratio=2.0,
        )
        setup_camera(camera)
        info = get_camera_info()

        assert np.linalg.norm(info["horizontal"]) == pytest.approx(4.0, rel=1e-5)
        assert np.linalg.norm(info["vertical"]) == pytest.approx(2.0, rel=1e-5)
        assert info["lower_left"] == pytest.approx((-2.0, 1.0, -1.0), abs=1e-5)

    def test_same_position_raises(self):
        from src.scenesynth.camera.pinhole import setup_camera
        from src.scenesynth.camera.spec import PinholeCamera

        camera = PinholeCamera(
            lookfrom=(1.0, 1.0, 1.0),
            lookat=(1.0, 1.0, 1.0),
            vup=(0.0, 0.0, 1.0),
            vfov=45.0,
            aspect_ratio=1.0,
        )
        with pytest.raises(ValueError):
            setup_camera(camera)

    def test_looking_straight_up_raises(self):
        from src.scenesynth.camera.pinhole import setup_camera
        from src.scenesynth.camera.spec import PinholeCamera

        camera = PinholeCamera(
            lookfrom=(0.0, 0.0, 0.0),
            lookat=(0.0, 0.0, 1.0),
            vup=(0.0, 0.0, 1.0),
            vfov=45.0,
            aspect_ratio=1.0,
        )
        with pytest.raises(ValueError):
            setup_camera(camera)


class TestCameraFrame:
    """Tests for camera_frame, the CPU-side frame computation."""

    def test_frame_is_orthonormal(self):
        from src.scenesynth.camera.pinhole import camera_frame
        from src.scenesynth.camera.spec import CameraSpec

        spec = CameraSpec(origin=(0.3, -4, 0.2), target=(-0.1, 6, 0.9), fov=math.pi / 5)
        frame = camera_frame(spec.to_pinhole(aspect_ratio=1.25))
        basis = np.stack([frame.u, frame.v, frame.w])
        assert np.allclose(basis @ basis.T, np.eye(3))
        assert np.allclose(-frame.w, spec.direction)

    def test_image_plane_center_is_one_unit_ahead(self):
        from src.scenesynth.camera.pinhole import camera_frame
        from src.scenesynth.camera.spec import CameraSpec

        spec = CameraSpec(origin=(0, -5, 0.5), target=(0, 5, 0.5), fov=math.pi / 3)
        frame = camera_frame(spec.to_pinhole())
        center = frame.lower_left + (frame.horizontal + frame.vertical) / 2
        assert np.allclose(center, [0, -4, 0.5])
        assert np.linalg.norm(frame.vertical) == pytest.approx(2 * math.tan(math.pi / 6))

    def test_setup_returns_written_frame(self):
        from src.scenesynth.camera.pinhole import get_camera_info, setup_camera
        from src.scenesynth.camera.spec import CameraSpec

        spec = CameraSpec(origin=(1, 1, 0.5), target=(1, 3, 0.5), fov=math.pi / 4)
        frame = setup_camera(spec.to_pinhole())
        assert get_camera_info()["lower_left"] == pytest.approx(
            tuple(frame.lower_left), abs=1e-5
        )
