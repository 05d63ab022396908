"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with half-b quadratic intersection
"""

from .sphere import HitRecord, Sphere, hit_sphere, make_sphere

__all__ = [
    "Sphere",
    "HitRecord",
    "hit_sphere",
    "make_sphere",
]
