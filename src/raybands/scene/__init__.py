"""Scene module for scene management and hit records.

Components:
    intersection: Sphere storage in Taichi fields and nearest-hit queries
    manager: Host-side scene builder with shared materials
    default: The two-sphere demo scene

The scene is read only during rendering and shared by all bands.
"""

from .default import create_default_scene
from .intersection import (
    MAX_SPHERES,
    SceneHitRecord,
    add_sphere,
    clear_scene,
    get_sphere_count,
    intersect_scene,
)
from .manager import (
    MaterialInfo,
    SceneManager,
    SphereInfo,
    SphereSpec,
)

__all__ = [
    # Intersection module
    "SceneHitRecord",
    "add_sphere",
    "clear_scene",
    "get_sphere_count",
    "intersect_scene",
    "MAX_SPHERES",
    # Manager module
    "SceneManager",
    "SphereSpec",
    "MaterialInfo",
    "SphereInfo",
    # Default scene
    "create_default_scene",
]
