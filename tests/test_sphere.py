"""Unit tests for sphere geometry and ray-sphere intersection.

Tests cover:
- Direct hits (distance, point and outward normal)
- Misses, including tangent rays
- Rays starting inside or on the sphere
- The exclusive (t_min, t_max) interval
- Non-normalized ray directions
"""

import numpy as np
import pytest
import taichi as ti

T_FAR = 1.0e9


def _intersect(origin, direction, center, radius, t_min=0.001, t_max=T_FAR):
    """Run hit_sphere in a kernel and return (hit, t, point, normal)."""
    from raybands.core.ray import vec3
    from raybands.geometry.sphere import Sphere, hit_sphere

    hit = ti.field(dtype=ti.i32, shape=())
    t = ti.field(dtype=ti.f32, shape=())
    point = ti.Vector.field(3, dtype=ti.f32, shape=())
    normal = ti.Vector.field(3, dtype=ti.f32, shape=())

    @ti.kernel
    def test_kernel(
        ox: ti.f32, oy: ti.f32, oz: ti.f32,
        dx: ti.f32, dy: ti.f32, dz: ti.f32,
        cx: ti.f32, cy: ti.f32, cz: ti.f32,
        r: ti.f32, lo: ti.f32, hi: ti.f32,
    ):
        sphere = Sphere(center=vec3(cx, cy, cz), radius=r)
        rec = hit_sphere(vec3(ox, oy, oz), vec3(dx, dy, dz), sphere, lo, hi)
        hit[None] = rec.hit
        t[None] = rec.t
        point[None] = rec.point
        normal[None] = rec.normal

    test_kernel(*origin, *direction, *center, radius, t_min, t_max)
    return hit[None], t[None], point[None].to_numpy(), normal[None].to_numpy()


class TestSphereIntersection:
    """Tests for hit_sphere."""

    def test_direct_hit(self):
        """Test a head-on hit lands at distance minus radius."""
        hit, t, point, normal = _intersect((0, 0, 5), (0, 0, -1), (0, 0, 0), 1.0)
        assert hit == 1
        assert t == pytest.approx(4.0)
        np.testing.assert_allclose(point, [0.0, 0.0, 1.0], atol=1e-6)
        # Outward normal points back toward the ray origin
        np.testing.assert_allclose(normal, [0.0, 0.0, 1.0], atol=1e-6)

    def test_hit_off_axis_sphere(self):
        hit, t, point, normal = _intersect((0, 0, 0), (0, 0, -1), (0, 0, -1), 0.5)
        assert hit == 1
        assert t == pytest.approx(0.5)
        np.testing.assert_allclose(point, [0.0, 0.0, -0.5], atol=1e-6)
        np.testing.assert_allclose(normal, [0.0, 0.0, 1.0], atol=1e-6)

    def test_miss(self):
        hit, _, _, _ = _intersect((0, 5, 5), (0, 0, -1), (0, 0, 0), 1.0)
        assert hit == 0

    def test_sphere_behind_ray(self):
        hit, _, _, _ = _intersect((0, 0, 5), (0, 0, 1), (0, 0, 0), 1.0)
        assert hit == 0

    def test_tangent_ray_is_miss(self):
        """Test that a zero discriminant is not a hit."""
        hit, _, _, _ = _intersect((1, 0, 5), (0, 0, -1), (0, 0, 0), 1.0)
        assert hit == 0

    def test_origin_inside_sphere_uses_far_root(self):
        """Test that a ray from the center hits the far wall at t = radius."""
        hit, t, point, normal = _intersect((0, 0, 0), (0, 0, -1), (0, 0, 0), 2.0)
        assert hit == 1
        assert t == pytest.approx(2.0)
        np.testing.assert_allclose(point, [0.0, 0.0, -2.0], atol=1e-6)
        # Never flipped: points along the ray direction when leaving
        np.testing.assert_allclose(normal, [0.0, 0.0, -1.0], atol=1e-6)

    def test_origin_on_surface_skips_self_hit(self):
        """Test that the root at t = 0 is rejected by t_min."""
        hit, t, point, _ = _intersect((0, 0, 1), (0, 0, -1), (0, 0, 0), 1.0)
        assert hit == 1
        assert t == pytest.approx(2.0)
        np.testing.assert_allclose(point, [0.0, 0.0, -1.0], atol=1e-6)

    def test_t_max_is_exclusive(self):
        """Test that a root equal to t_max is rejected."""
        hit, _, _, _ = _intersect((0, 0, 5), (0, 0, -1), (0, 0, 0), 1.0, t_max=4.0)
        assert hit == 0

    def test_t_max_between_roots_keeps_near_root(self):
        hit, t, _, _ = _intersect((0, 0, 5), (0, 0, -1), (0, 0, 0), 1.0, t_max=5.0)
        assert hit == 1
        assert t == pytest.approx(4.0)

    def test_t_min_between_roots_uses_far_root(self):
        hit, t, _, _ = _intersect((0, 0, 5), (0, 0, -1), (0, 0, 0), 1.0, t_min=4.5)
        assert hit == 1
        assert t == pytest.approx(6.0)

    def test_non_normalized_direction(self):
        """Test that t scales with the direction length."""
        hit, t, point, normal = _intersect((0, 0, 5), (0, 0, -2), (0, 0, 0), 1.0)
        assert hit == 1
        assert t == pytest.approx(2.0)
        np.testing.assert_allclose(point, [0.0, 0.0, 1.0], atol=1e-6)
        np.testing.assert_allclose(normal, [0.0, 0.0, 1.0], atol=1e-6)

    def test_normal_is_unit_length(self):
        hit, _, _, normal = _intersect((0.3, 0.2, 5), (0, 0, -1), (0, 0, 0), 1.5)
        assert hit == 1
        assert np.linalg.norm(normal) == pytest.approx(1.0, abs=1e-5)

    def test_make_sphere(self):
        from raybands.core.ray import vec3
        from raybands.geometry.sphere import make_sphere

        result = ti.field(dtype=ti.f32, shape=4)

        @ti.kernel
        def test_kernel():
            sphere = make_sphere(vec3(1.0, 2.0, 3.0), 0.5)
            result[0] = sphere.center[0]
            result[1] = sphere.center[1]
            result[2] = sphere.center[2]
            result[3] = sphere.radius

        test_kernel()
        assert list(result.to_numpy()) == [1.0, 2.0, 3.0, 0.5]
