"""Core helpers shared across the package.

Components:
    vector: Coordinate helpers (vec3, midpoint, distance, normalize) and
        random sampling on an explicitly passed numpy Generator

Coordinates are plain float64 numpy arrays of shape (3,). Every helper
returns a new array and never mutates its inputs.
"""

from .vector import (
    distance,
    make_rng,
    midpoint,
    normalize,
    random_unit_vector,
    uniform_vec3,
    vec3,
)

__all__ = [
    "vec3",
    "midpoint",
    "distance",
    "normalize",
    "make_rng",
    "random_unit_vector",
    "uniform_vec3",
]
