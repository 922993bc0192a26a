"""Offline path tracer for sphere scenes.

Subpackages:
    core: Vectors, colours, rays, bounding boxes and shared errors
    camera: The static camera that casts rays through viewport space
    geometry: Spheres, groups and hit records
    materials: Static colour, normal map and diffuse scattering
    hitlist: The flattened per-material hit lists used while tracing
    renderer: Ray generation, single- and multi-threaded rendering, images
    specifications: Scene and feature files
"""

__version__ = "0.1.0"
