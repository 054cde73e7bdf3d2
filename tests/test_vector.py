"""Unit tests for coordinate helpers and random sampling.

Tests cover:
- vec3 construction and conversion
- midpoint, distance, normalize
- Random unit vectors and uniform samples
- Seeded generators reproduce the same draws
"""

import numpy as np
import pytest


class TestCoordinates:
    """Tests for plain coordinate helpers."""

    def test_vec3_components(self):
        from src.scenesynth.core.vector import vec3

        v = vec3(1.0, 2.0, 3.0)
        assert v.dtype == np.float64
        assert v.tolist() == [1.0, 2.0, 3.0]

    def test_vec3_defaults_to_origin(self):
        from src.scenesynth.core.vector import vec3

        assert vec3().tolist() == [0.0, 0.0, 0.0]

    def test_as_vec3_copies(self):
        from src.scenesynth.core.vector import as_vec3

        source = np.array([1.0, 2.0, 3.0])
        v = as_vec3(source)
        v[0] = 10.0
        assert source[0] == 1.0

    def test_as_vec3_rejects_wrong_length(self):
        from src.scenesynth.core.vector import as_vec3

        with pytest.raises(ValueError):
            as_vec3([1.0, 2.0])

    def test_midpoint(self):
        from src.scenesynth.core.vector import midpoint, vec3

        m = midpoint(vec3(0, 0, 0), vec3(2, 4, -6))
        assert m.tolist() == [1.0, 2.0, -3.0]

    def test_distance(self):
        from src.scenesynth.core.vector import distance, vec3

        assert distance(vec3(0, 0, 0), vec3(3, 4, 0)) == pytest.approx(5.0)

    def test_normalize(self):
        from src.scenesynth.core.vector import normalize, vec3

        n = normalize(vec3(0, 0, 5))
        assert np.allclose(n, [0, 0, 1])

    def test_normalize_zero_raises(self):
        from src.scenesynth.core.vector import normalize, vec3

        with pytest.raises(ValueError):
            normalize(vec3())


class TestRandomSampling:
    """Tests for sampling on an injected generator."""

    def test_random_unit_vector_has_unit_length(self, rng):
        from src.scenesynth.core.vector import random_unit_vector

        for _ in range(100):
            assert np.linalg.norm(random_unit_vector(rng)) == pytest.approx(1.0)

    def test_random_unit_vector_covers_both_hemispheres(self, rng):
        from src.scenesynth.core.vector import random_unit_vector

        zs = [random_unit_vector(rng)[2] for _ in range(200)]
        assert min(zs) < 0.0 < max(zs)

    def test_uniform_vec3_in_unit_cube(self, rng):
        from src.scenesynth.core.vector import uniform_vec3

        samples = np.array([uniform_vec3(rng) for _ in range(200)])
        assert samples.shape == (200, 3)
        assert np.all(samples >= 0.0)
        assert np.all(samples < 1.0)

    def test_make_rng_is_reproducible(self):
        from src.scenesynth.core.vector import make_rng, random_unit_vector

        a = random_unit_vector(make_rng(5))
        b = random_unit_vector(make_rng(5))
        assert np.array_equal(a, b)
