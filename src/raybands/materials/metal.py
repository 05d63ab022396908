"""Metal (specular reflective) material.

Metals mirror the incoming direction about the normal:

    R = I - 2(I . N)N

with I the normalized incident direction. A non-zero fuzz perturbs R by a
random point in a sphere of radius fuzz. Rays that end up pointing into the
surface are absorbed.

A fuzz of exactly zero takes a separate path that draws no random numbers.
"""

from dataclasses import dataclass

import taichi as ti

from raybands.core.random import random_in_unit_sphere
from raybands.core.ray import dot, normalize, reflect, vec3
from raybands.materials.diffuse import validate_albedo


@dataclass(frozen=True)
class MetalMaterial:
    """Metal material description.

    Attributes:
        albedo: The reflective color (R, G, B), each component in [0, 1].
        fuzz: Perturbation radius in [0, 1]. 0 is a perfect mirror. Values
            of 1 or more are clamped to exactly 1.
    """

    albedo: tuple[float, float, float]
    fuzz: float = 0.0

    def __post_init__(self) -> None:
        validate_albedo(self.albedo)
        if self.fuzz < 0.0:
            raise ValueError(
                f"Fuzz = {self.fuzz} is negative. "
                "Fuzz must be between 0 (perfect mirror) and 1 (maximum fuzz)."
            )
        if self.fuzz >= 1.0:
            # Frozen dataclass, so go through object.__setattr__
            object.__setattr__(self, "fuzz", 1.0)


@ti.func
def scatter_metal(
    albedo: vec3,
    fuzz: ti.f32,
    incident_direction: vec3,
    normal: vec3,
    stream: ti.i32,
):
    """Scatter a ray off a metal surface.

    Args:
        albedo: The reflective color (RGB).
        fuzz: The perturbation radius in [0, 1].
        incident_direction: The incoming ray direction (any length).
        normal: The outward surface normal (unit length).
        stream: The random stream owned by the calling band.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter) where
        did_scatter is 1 only if the scattered direction leaves the surface.
    """
    reflected = reflect(normalize(incident_direction), normal)

    scattered_direction = reflected
    if fuzz != 0.0:
        scattered_direction = reflected + fuzz * random_in_unit_sphere(stream)

    did_scatter = 0
    if dot(scattered_direction, normal) > 0.0:
        did_scatter = 1

    return scattered_direction, albedo, did_scatter
