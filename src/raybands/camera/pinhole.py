"""Pinhole camera with a fixed axis-aligned view volume.

The camera maps normalized image-plane coordinates (u, v) to world-space
rays. Its view volume is the classic 2:1 frustum: the image plane spans
x in [-2, 2] and y in [-1, 1] at z = -1, seen from the origin.

Ray generation uses normalized coordinates:
    u = 0: left edge, u = 1: right edge
    v = 0: bottom edge, v = 1: top edge

Values outside [0, 1] are legal and sample outside the nominal frustum.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raybands.camera.pinhole import PinholeCamera, setup_camera, get_ray
    >>> setup_camera(PinholeCamera())
    >>> # Inside a kernel:
    >>> # ray = get_ray(0.5, 0.5)  # Ray through image center
"""

from dataclasses import dataclass

import taichi as ti

from raybands.core.ray import Ray, make_ray

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True)
class PinholeCamera:
    """Configuration for the pinhole camera.

    Attributes:
        lower_left_corner: Lower-left corner of the image plane (x, y, z).
        horizontal: Vector spanning the full image width.
        vertical: Vector spanning the full image height.
        origin: Camera position in world space.
    """

    lower_left_corner: tuple[float, float, float] = (-2.0, -1.0, -1.0)
    horizontal: tuple[float, float, float] = (4.0, 0.0, 0.0)
    vertical: tuple[float, float, float] = (0.0, 2.0, 0.0)
    origin: tuple[float, float, float] = (0.0, 0.0, 0.0)


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_viewport_horizontal = ti.Vector.field(3, dtype=ti.f32, shape=())
_viewport_vertical = ti.Vector.field(3, dtype=ti.f32, shape=())
_lower_left_corner = ti.Vector.field(3, dtype=ti.f32, shape=())


def setup_camera(camera: PinholeCamera) -> None:
    """Copy a camera configuration into the Taichi fields.

    Must be called from Python scope before rendering. The camera is read
    only while kernels run, so all bands share it.

    Args:
        camera: The camera configuration.
    """
    _camera_origin[None] = list(camera.origin)
    _viewport_horizontal[None] = list(camera.horizontal)
    _viewport_vertical[None] = list(camera.vertical)
    _lower_left_corner[None] = list(camera.lower_left_corner)


# =============================================================================
# Ray Generation (Taichi scope)
# =============================================================================


@ti.func
def get_ray(u: ti.f32, v: ti.f32) -> Ray:
    """Generate a ray through normalized image coordinates (u, v).

    The direction is llc + u*horizontal + v*vertical - origin, evaluated left
    to right and left unnormalized.

    Args:
        u: Horizontal coordinate (left to right).
        v: Vertical coordinate (bottom to top).

    Returns:
        A Ray starting at the camera origin.
    """
    origin = _camera_origin[None]
    direction = (
        _lower_left_corner[None]
        + u * _viewport_horizontal[None]
        + v * _viewport_vertical[None]
        - origin
    )
    return make_ray(origin, direction)


def get_camera_info() -> dict[str, tuple[float, float, float]]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with origin, horizontal, vertical and lower_left.
    """
    origin_vec = _camera_origin[None]
    h_vec = _viewport_horizontal[None]
    vert_vec = _viewport_vertical[None]
    ll_vec = _lower_left_corner[None]

    return {
        "origin": (float(origin_vec[0]), float(origin_vec[1]), float(origin_vec[2])),
        "horizontal": (float(h_vec[0]), float(h_vec[1]), float(h_vec[2])),
        "vertical": (float(vert_vec[0]), float(vert_vec[1]), float(vert_vec[2])),
        "lower_left": (float(ll_vec[0]), float(ll_vec[1]), float(ll_vec[2])),
    }
