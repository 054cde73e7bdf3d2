"""Procedural room scene synthesis for feeding a ray tracer.

This package builds randomized 3D scenes (backdrop walls, placed meshes,
emissive lights and a camera) inside a rectangular room and normalizes the
exposure of the images rendered from them.

Subpackages:
    core: Vector helpers and random sampling on an injected generator
    geometry: Bounding boxes, triangle meshes, light primitives, OFF reader
    materials: Lambertian and emissive material records
    camera: Camera descriptions and tracer-side camera setup
    scene: Room layout, placement, wall decomposition, composer, upload
    preview: Exposure normalization, display and image export
"""

__version__ = "0.1.0"
