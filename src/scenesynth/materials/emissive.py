"""Emission-only material for lights.

A light reflects nothing; it only emits. The emission color is unbounded
above (HDR) but must be non-negative.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EmissiveMaterial:
    """A purely emissive material.

    Attributes:
        emission: Emitted radiance as (R, G, B), each >= 0.
    """

    emission: tuple[float, float, float]

    def __post_init__(self) -> None:
        if len(self.emission) != 3:
            raise ValueError(f"Emission must have 3 components, got {len(self.emission)}")
        for i, component in enumerate(self.emission):
            if component < 0.0:
                raise ValueError(f"Emission component {i} = {component} is negative.")
        object.__setattr__(self, "emission", tuple(float(c) for c in self.emission))

    @classmethod
    def white(cls, intensity: float) -> EmissiveMaterial:
        """Emit the same intensity on all three channels."""
        return cls(emission=(intensity, intensity, intensity))

    @property
    def albedo(self) -> tuple[float, float, float]:
        return (0.0, 0.0, 0.0)

    def to_dict(self) -> dict[str, object]:
        return {"type": "emissive", "emission": list(self.emission)}
