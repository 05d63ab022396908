"""Unit tests for scene storage and nearest-hit queries."""

import math

import numpy as np
import pytest
import taichi as ti


def _query(origin, direction, t_max=math.inf):
    """Run intersect_scene in a kernel and return the record fields."""
    from raybands.core.ray import vec3
    from raybands.scene.intersection import intersect_scene

    hit = ti.field(dtype=ti.i32, shape=())
    material_id = ti.field(dtype=ti.i32, shape=())
    t = ti.field(dtype=ti.f32, shape=())
    point = ti.Vector.field(3, dtype=ti.f32, shape=())

    @ti.kernel
    def test_kernel(
        ox: ti.f32, oy: ti.f32, oz: ti.f32,
        dx: ti.f32, dy: ti.f32, dz: ti.f32,
        hi: ti.f32,
    ):
        rec = intersect_scene(vec3(ox, oy, oz), vec3(dx, dy, dz), 0.001, hi)
        hit[None] = rec.hit
        material_id[None] = rec.material_id
        t[None] = rec.t
        point[None] = rec.point

    test_kernel(*origin, *direction, t_max)
    return hit[None], material_id[None], t[None], point[None].to_numpy()


class TestSceneStorage:
    """Tests for adding and clearing spheres."""

    def test_add_sphere_returns_sequential_indices(self):
        from raybands.scene.intersection import add_sphere, get_sphere_count

        assert add_sphere((0.0, 0.0, -1.0), 0.5, material_id=0) == 0
        assert add_sphere((0.0, -100.5, -1.0), 100.0, material_id=1) == 1
        assert get_sphere_count() == 2

    def test_clear_scene(self):
        from raybands.scene.intersection import add_sphere, clear_scene, get_sphere_count

        add_sphere((0.0, 0.0, -1.0), 0.5)
        clear_scene()
        assert get_sphere_count() == 0

    @pytest.mark.parametrize("radius", [0.0, -1.0, float("nan")])
    def test_non_positive_radius_raises(self, radius):
        from raybands.scene.intersection import add_sphere, get_sphere_count

        with pytest.raises(ValueError):
            add_sphere((0.0, 0.0, 0.0), radius)
        assert get_sphere_count() == 0


class TestIntersectScene:
    """Tests for the nearest-hit scan."""

    def test_empty_scene_misses(self):
        hit, material_id, _, _ = _query((0, 0, 0), (0, 0, -1))
        assert hit == 0
        assert material_id == -1

    @pytest.mark.parametrize("near_first", [True, False])
    def test_nearest_hit_wins_regardless_of_order(self, near_first):
        from raybands.scene.intersection import add_sphere

        spheres = [((0.0, 0.0, -2.0), 0.5, 7), ((0.0, 0.0, -6.0), 1.0, 3)]
        if not near_first:
            spheres.reverse()
        for center, radius, material_id in spheres:
            add_sphere(center, radius, material_id)

        hit, material_id, t, point = _query((0, 0, 0), (0, 0, -1))
        assert hit == 1
        assert material_id == 7
        assert t == pytest.approx(1.5)
        np.testing.assert_allclose(point, [0.0, 0.0, -1.5], atol=1e-6)

    def test_t_max_limits_scan(self):
        from raybands.scene.intersection import add_sphere

        add_sphere((0.0, 0.0, -10.0), 1.0, 2)
        hit, _, _, _ = _query((0, 0, 0), (0, 0, -1), t_max=5.0)
        assert hit == 0

    def test_miss_with_spheres_present(self):
        from raybands.scene.intersection import add_sphere

        add_sphere((0.0, 0.0, -1.0), 0.5, 0)
        hit, material_id, _, _ = _query((0, 0, 0), (0, 1, 0))
        assert hit == 0
        assert material_id == -1
