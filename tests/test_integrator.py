"""Unit tests for the path-color evaluator.

Tests cover:
- Sky gradient on misses
- Single mirror bounce into the sky
- Absorption and the bounce cap
- Stream usage at the cap
"""

import pytest

SEED = 485468


def _mirror(albedo=(1.0, 1.0, 1.0)):
    from raybands.materials import MetalMaterial

    return MetalMaterial(albedo=albedo, fuzz=0.0)


class TestSkyColor:
    """Tests for rays that escape the scene."""

    @pytest.mark.parametrize(
        "direction,expected",
        [
            ((0.0, 1.0, 0.0), (0.5, 0.7, 1.0)),
            ((0.0, -1.0, 0.0), (1.0, 1.0, 1.0)),
            ((1.0, 0.0, 0.0), (0.75, 0.85, 1.0)),
            ((0.0, 5.0, 0.0), (0.5, 0.7, 1.0)),
        ],
    )
    def test_empty_scene_returns_sky(self, direction, expected):
        from raybands.core.integrator import trace_ray

        color, depth = trace_ray((0.0, 0.0, 0.0), direction, seed=SEED)
        assert color == pytest.approx(expected, abs=1e-6)
        assert depth == 0

    def test_sky_blue_channel_is_one(self):
        """Test that the sky gradient never dims the blue channel."""
        from raybands.core.integrator import trace_ray

        for direction in [(0.3, -0.9, 0.1), (-2.0, 0.5, -1.0), (0.0, 0.1, -1.0)]:
            color, _ = trace_ray((0.0, 0.0, 0.0), direction, seed=SEED)
            assert color[2] == pytest.approx(1.0, abs=1e-6)


class TestPathTracing:
    """Tests for scattering paths through simple scenes."""

    def test_mirror_bounce_to_sky(self):
        """Test one perfect reflection off a tinted mirror."""
        from raybands.core.integrator import trace_ray
        from raybands.scene.manager import SceneManager, SphereSpec

        SceneManager().load_spheres(
            [SphereSpec((0.0, 0.0, -1.0), 0.5, _mirror((1.0, 0.2, 0.2)))]
        )
        color, depth = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), seed=SEED)
        assert color == pytest.approx((0.75, 0.17, 0.2), abs=1e-6)
        assert depth == 1

    def test_reflection_into_surface_is_black(self):
        """Test a mirror seen from inside absorbs the ray."""
        from raybands.core.integrator import trace_ray
        from raybands.scene.manager import SceneManager, SphereSpec

        SceneManager().load_spheres([SphereSpec((0.0, 0.0, 0.0), 1.0, _mirror())])
        color, depth = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), seed=SEED)
        assert color == (0.0, 0.0, 0.0)
        assert depth == 0

    @pytest.mark.parametrize("max_depth", [50, 5, 1])
    def test_depth_cap_returns_black(self, max_depth):
        """Test facing mirrors bounce until the cap and then return black."""
        from raybands.core.integrator import trace_ray
        from raybands.scene.manager import SceneManager, SphereSpec

        mirror = _mirror()
        SceneManager().load_spheres(
            [
                SphereSpec((0.0, 0.0, -2.0), 1.0, mirror),
                SphereSpec((0.0, 0.0, 2.0), 1.0, mirror),
            ]
        )
        color, depth = trace_ray(
            (0.0, 0.0, 0.0), (0.0, 0.0, -1.0), max_depth=max_depth, seed=SEED
        )
        assert color == (0.0, 0.0, 0.0)
        assert depth == max_depth

    def test_zero_depth_still_scatters(self):
        """Test that a hit at the cap still consumes the material's draws."""
        from raybands.core.integrator import trace_ray
        from raybands.core.random import get_random_state
        from raybands.materials import DiffuseMaterial
        from raybands.scene.manager import SceneManager, SphereSpec

        SceneManager().load_spheres(
            [SphereSpec((0.0, -100.5, -1.0), 100.0, DiffuseMaterial((0.5, 0.5, 0.5)))]
        )
        color, depth = trace_ray(
            (0.0, 0.0, 0.0), (0.0, -1.0, 0.0), max_depth=0, seed=SEED
        )
        assert color == (0.0, 0.0, 0.0)
        assert depth == 0
        assert get_random_state(0) != SEED

    def test_diffuse_ground_is_deterministic(self):
        from raybands.core.integrator import trace_ray
        from raybands.scene.default import create_default_scene
        from raybands.scene.manager import SceneManager

        SceneManager().load_spheres(create_default_scene())
        first = trace_ray((0.0, 0.0, 0.0), (0.3, -1.0, -1.0), stream=2, seed=SEED)
        second = trace_ray((0.0, 0.0, 0.0), (0.3, -1.0, -1.0), stream=2, seed=SEED)
        assert first == second

        color, depth = first
        assert depth >= 1
        # Grey albedo halves the light at least once
        assert all(0.0 <= c <= 0.5 + 1e-6 for c in color)


class TestTraceRayArguments:
    """Tests for trace_ray argument checks."""

    @pytest.mark.parametrize("stream", [-1, 1024, 5000])
    def test_out_of_range_stream_without_seed(self, stream):
        """Test that a bad stream is rejected even when no seed is given."""
        from raybands.core.integrator import trace_ray

        with pytest.raises(ValueError, match="Random stream"):
            trace_ray((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), stream=stream)

    def test_last_stream_is_accepted(self):
        from raybands.core.integrator import trace_ray
        from raybands.core.random import MAX_RANDOM_STREAMS

        color, depth = trace_ray(
            (0.0, 0.0, 0.0), (0.0, 1.0, 0.0), stream=MAX_RANDOM_STREAMS - 1, seed=SEED
        )
        assert color == pytest.approx((0.5, 0.7, 1.0), abs=1e-6)
        assert depth == 0
