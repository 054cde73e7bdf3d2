"""Pytest configuration for scene synthesis tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session, and helpers that
write small OFF meshes to a temporary directory.
"""

import pytest
import taichi as ti

CUBE_OFF = """OFF
# unit cube
8 6 12
0 0 0
1 0 0
1 1 0
0 1 0
0 0 1
1 0 1
1 1 1
0 1 1
4 0 3 2 1
4 4 5 6 7
4 0 1 5 4
4 2 3 7 6
4 1 2 6 5
4 0 4 7 3
"""

TETRA_OFF = """OFF
4 4 6
0 0 0
2 0 0
0 3 0
0 0 1
3 0 2 1
3 0 1 3
3 0 3 2
3 1 2 3
"""

# A single triangle collapsed to a point: zero extent on every axis
POINT_OFF = """OFF
1 1 0
0.5 0.5 0.5
3 0 0 0
"""


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_uploaded_scene():
    """Clear uploaded scene data before and after each test."""
    # Import here so Taichi is initialized before fields are declared
    from src.scenesynth.scene.upload import clear_scene

    clear_scene()
    yield
    clear_scene()


@pytest.fixture
def write_off(tmp_path):
    """Factory writing OFF text to a file in tmp_path and returning its path."""

    def _write(name: str, text: str) -> str:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def cube_path(write_off):
    return write_off("cube.off", CUBE_OFF)


@pytest.fixture
def tetra_path(write_off):
    return write_off("tetra.off", TETRA_OFF)


@pytest.fixture
def point_path(write_off):
    return write_off("point.off", POINT_OFF)


@pytest.fixture
def rng():
    """A seeded generator so every test is reproducible."""
    import numpy as np

    return np.random.default_rng(2024)
