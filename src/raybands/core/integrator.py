"""Path-color evaluator for Monte Carlo light transport.

This module estimates the color seen along one ray. The ray is intersected
with the scene; on a hit the surface material scatters it and the estimate
continues along the scattered ray, attenuated by the material's albedo. On
a miss the ray picks up the sky gradient.

The estimate follows the recursive definition

    color(ray, depth) = attenuation * color(scattered, depth + 1)
                            if hit and depth < max_depth and did_scatter
                      = black   if hit otherwise
                      = sky(ray.direction)   if no hit

Taichi functions cannot recurse, so the recursion is unrolled into a loop
that carries the product of attenuations. The material always scatters on a
hit, even at the depth cap, so the random streams advance exactly as in the
recursive form. There is no Russian roulette: the depth cap and absorption
are the only ways a path ends before reaching the sky.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raybands.core.integrator import trace_ray
    >>> color, depth = trace_ray((0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
"""

import taichi as ti

from raybands.core.random import check_stream, seed_random_stream
from raybands.core.ray import Ray, make_ray, normalize, vec3
from raybands.materials.registry import scatter_material
from raybands.scene.intersection import intersect_scene

# =============================================================================
# Rendering Constants
# =============================================================================

# Maximum ray bounces (path length)
MAX_DEPTH = 50

# t_min avoids self-intersection ("shadow acne"); t_max is unbounded
T_MIN = 0.001
T_MAX = float("inf")

# Depth reached by the last trace_ray() call
_last_depth = ti.field(dtype=ti.i32, shape=())


@ti.func
def sky_color(direction: vec3) -> vec3:
    """Background gradient from white at the bottom to light blue at the top.

    Args:
        direction: The ray direction (any non-zero length).

    Returns:
        (1 - t) * white + t * (0.5, 0.7, 1.0) with t = 0.5 * (unit.y + 1).
    """
    unit_direction = normalize(direction)
    t = 0.5 * (unit_direction.y + 1.0)
    return (1.0 - t) * vec3(1.0, 1.0, 1.0) + t * vec3(0.5, 0.7, 1.0)


@ti.func
def trace_path(ray: Ray, stream: ti.i32, max_depth: ti.i32):
    """Estimate the color arriving along a ray.

    Args:
        ray: The primary ray.
        stream: The random stream owned by the calling band.
        max_depth: Number of bounces after which a hit returns black.

    Returns:
        A tuple of (color, depth) where depth is the number of bounces taken.
    """
    color = vec3(0.0, 0.0, 0.0)
    throughput = vec3(1.0, 1.0, 1.0)
    origin = ray.origin
    direction = ray.direction
    depth = 0
    active = 1

    while active == 1:
        rec = intersect_scene(origin, direction, T_MIN, T_MAX)

        if rec.hit == 1:
            scattered_direction, attenuation, did_scatter = scatter_material(
                rec.material_id, direction, rec.point, rec.normal, stream
            )
            if depth < max_depth and did_scatter == 1:
                throughput *= attenuation
                origin = rec.point
                direction = scattered_direction
                depth += 1
            else:
                # Absorbed, or out of bounces
                active = 0
        else:
            color = throughput * sky_color(direction)
            active = 0

    return color, depth


@ti.kernel
def _trace_single_ray(origin: vec3, direction: vec3, stream: ti.i32, max_depth: ti.i32) -> vec3:
    color, depth = trace_path(make_ray(origin, direction), stream, max_depth)
    _last_depth[None] = depth
    return color


def trace_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    stream: int = 0,
    max_depth: int = MAX_DEPTH,
    seed: int | None = None,
) -> tuple[tuple[float, float, float], int]:
    """Trace a single ray from Python scope.

    Intended for testing and debugging. Rendering goes through
    raybands.core.renderer.render(), which traces whole bands in parallel.

    Args:
        origin: The ray origin.
        direction: The ray direction.
        stream: The random stream to draw from.
        max_depth: The bounce cap.
        seed: If given, the stream is reseeded first.

    Returns:
        A tuple of ((R, G, B), depth).

    Raises:
        ValueError: If the stream index or the seed is out of range.
    """
    check_stream(stream)
    if seed is not None:
        seed_random_stream(stream, seed)
    color = _trace_single_ray(vec3(*origin), vec3(*direction), stream, max_depth)
    return (float(color[0]), float(color[1]), float(color[2])), int(_last_depth[None])
