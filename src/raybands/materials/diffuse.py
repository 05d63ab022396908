"""Diffuse (matte) material.

A diffuse surface scatters the incoming ray toward a random point inside the
unit sphere that sits on top of the hit point along the normal:

    target = hit_point + normal + random_in_unit_sphere()
    scattered_direction = target - hit_point

The attenuation is the albedo and the path always continues. The incident
direction plays no part.
"""

from dataclasses import dataclass

import taichi as ti

from raybands.core.random import random_in_unit_sphere
from raybands.core.ray import vec3


def validate_albedo(albedo: tuple[float, float, float]) -> None:
    """Raise ValueError unless every albedo component lies in [0, 1]."""
    if len(albedo) != 3:
        raise ValueError(f"Albedo must have 3 components, got {len(albedo)}")
    for i, component in enumerate(albedo):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )


@dataclass(frozen=True)
class DiffuseMaterial:
    """Diffuse material description.

    Attributes:
        albedo: The reflectance color (R, G, B), each component in [0, 1].
    """

    albedo: tuple[float, float, float]

    def __post_init__(self) -> None:
        validate_albedo(self.albedo)


@ti.func
def scatter_diffuse(
    albedo: vec3,
    hit_point: vec3,
    normal: vec3,
    stream: ti.i32,
):
    """Scatter a ray off a diffuse surface.

    Args:
        albedo: The reflectance color (RGB).
        hit_point: The intersection point, origin of the scattered ray.
        normal: The outward surface normal (unit length).
        stream: The random stream owned by the calling band.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter) where
        did_scatter is always 1.
    """
    target = hit_point + normal + random_in_unit_sphere(stream)
    scattered_direction = target - hit_point
    return scattered_direction, albedo, 1
