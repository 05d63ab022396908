"""Sphere primitive and ray-sphere intersection.

The intersection solves |origin + t*direction - center|^2 = radius^2 as a
quadratic in t using the half-b form:

    a = dot(d, d)
    b = dot(oc, d)          (half of the textbook linear coefficient)
    c = dot(oc, oc) - r^2
    discriminant = b^2 - a*c

where oc = origin - center. Tangent rays (discriminant == 0) count as misses.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raybands.geometry.sphere import Sphere, hit_sphere
    >>> # Inside a kernel:
    >>> # rec = hit_sphere(origin, direction, Sphere(center=c, radius=0.5), 0.001, 1e9)
"""

import taichi as ti

from raybands.core.ray import dot, vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.dataclass
class HitRecord:
    """Record of a ray-sphere intersection.

    Attributes:
        hit: 1 if the ray intersected the sphere, 0 on a miss.
        t: The ray parameter of the intersection. Only valid if hit == 1.
        point: The intersection point. Only valid if hit == 1.
        normal: The outward surface normal, (point - center) / radius.
            It is never flipped toward the ray, so rays leaving a sphere
            from the inside see a normal pointing along their direction.
            Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3


@ti.func
def hit_sphere(
    ray_origin: vec3,
    ray_direction: vec3,
    sphere: Sphere,
    t_min: ti.f32,
    t_max: ti.f32,
) -> HitRecord:
    """Test for ray-sphere intersection inside the open interval (t_min, t_max).

    The smaller root is tried first; if it lies outside the interval the
    larger root is tried under the same bound. No further roots exist.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray (need not be normalized).
        sphere: The sphere to test intersection against.
        t_min: Exclusive lower bound on t (avoids self-intersection).
        t_max: Exclusive upper bound on t (closest hit so far).

    Returns:
        A HitRecord; check its hit field.
    """
    oc = ray_origin - sphere.center

    a = dot(ray_direction, ray_direction)
    b = dot(oc, ray_direction)
    c = dot(oc, oc) - sphere.radius * sphere.radius

    discriminant = b * b - a * c

    # Taichi requires outer-scope declaration
    did_hit = 0
    hit_t = 0.0
    hit_point = vec3(0.0, 0.0, 0.0)
    hit_normal = vec3(0.0, 0.0, 0.0)

    if discriminant > 0.0:
        sqrt_d = ti.sqrt(discriminant)

        t = (-b - sqrt_d) / a
        valid = t < t_max and t > t_min

        if not valid:
            t = (-b + sqrt_d) / a
            valid = t < t_max and t > t_min

        if valid:
            did_hit = 1
            hit_t = t
            hit_point = ray_origin + t * ray_direction
            hit_normal = (hit_point - sphere.center) / sphere.radius

    return HitRecord(
        hit=did_hit,
        t=hit_t,
        point=hit_point,
        normal=hit_normal,
    )


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> Sphere:
    """Create a sphere from center and radius."""
    return Sphere(center=center, radius=radius)
