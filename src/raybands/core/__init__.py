"""Core rendering module.

Components:
    ray: Ray data structure and vector utilities
    random: Per-band xorshift32 random streams
    integrator: Path-color evaluator (bounce loop with depth cap)
    renderer: Band partition and the parallel render kernel
    config: Render configuration and its validation

Only the field-free modules are imported here; integrator, random and
renderer declare Taichi fields and must be imported after ti.init().
"""

from .config import RenderConfig, RenderConfigError
from .ray import (
    Ray,
    cross,
    dot,
    length,
    length_square,
    make_ray,
    normalize,
    ray_at,
    reflect,
    vec3,
)

__all__ = [
    "RenderConfig",
    "RenderConfigError",
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "length",
    "length_square",
    "normalize",
    "dot",
    "cross",
    "reflect",
]
