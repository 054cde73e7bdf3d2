"""Coordinate helpers and random sampling.

Coordinates are float64 numpy arrays of shape (3,). The functions here never
mutate their arguments, so a coordinate can be shared freely once created.

Randomness always comes from a ``numpy.random.Generator`` handed in by the
caller; there is no module-level random state.

Example:
    >>> rng = make_rng(7)
    >>> axis = random_unit_vector(rng)
    >>> round(float(np.linalg.norm(axis)), 6)
    1.0
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

Vec3 = npt.NDArray[np.float64]

# Below this norm a Gaussian sample is redrawn before normalizing
_MIN_SAMPLE_NORM = 1e-8


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> Vec3:
    """Create a coordinate from its three components."""
    return np.array([x, y, z], dtype=np.float64)


def as_vec3(value: npt.ArrayLike) -> Vec3:
    """Convert a sequence of three numbers to a coordinate.

    Raises:
        ValueError: If the value does not have exactly three components.
    """
    arr = np.asarray(value, dtype=np.float64)
    if arr.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {arr.shape}")
    return arr.copy()


def midpoint(a: Vec3, b: Vec3) -> Vec3:
    """Return the point halfway between a and b."""
    return (np.asarray(a, dtype=np.float64) + np.asarray(b, dtype=np.float64)) / 2.0


def distance(a: Vec3, b: Vec3) -> float:
    """Return the Euclidean distance between a and b."""
    return float(np.linalg.norm(np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)))


def normalize(v: Vec3) -> Vec3:
    """Return v scaled to unit length.

    Raises:
        ValueError: If v has zero length.
    """
    v = np.asarray(v, dtype=np.float64)
    norm = np.linalg.norm(v)
    if norm == 0.0:
        raise ValueError("Cannot normalize a zero-length vector")
    return v / norm


# =============================================================================
# Random Sampling
# =============================================================================


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Create a random generator, seeded for reproducible scenes when given."""
    return np.random.default_rng(seed)


def uniform_vec3(rng: np.random.Generator) -> Vec3:
    """Sample each component independently from U[0, 1)."""
    return rng.random(3)


def random_unit_vector(rng: np.random.Generator) -> Vec3:
    """Sample a direction uniformly on the unit sphere.

    Normalizing an isotropic Gaussian sample gives a uniform direction.
    """
    while True:
        v = rng.standard_normal(3)
        norm = np.linalg.norm(v)
        if norm > _MIN_SAMPLE_NORM:
            return normalize(v)
