"""Taichi-based stochastic ray tracer for sphere scenes.

This package renders spheres with diffuse and metal materials under a sky
gradient. Pixels are estimated by averaging jittered camera rays, and rows
are split into bands that render in parallel on the CPU.

Subpackages:
    core: Vectors, rays, random streams, the path evaluator and the renderer
    geometry: Sphere primitive and intersection
    materials: Diffuse and metal scattering
    scene: Sphere storage, scene manager and the default scene
    camera: Pinhole camera with a fixed view volume
    preview: PNG export

Modules holding Taichi fields must be imported after ti.init().
"""

__version__ = "0.1.0"
