"""Unit tests for camera ray generation.

Tests cover:
- Camera placement, orientation and viewport size
- Sequence length and sample/x/y ordering
- Unjittered rays matching the camera exactly
- Jitter staying inside its pixel
- Band restriction and restarting
"""

import math

import pytest

from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Vector3
from pathtracer.renderer.generator import RayGenerator


def same_direction(a, b):
    return (a.x, a.y, a.z) == pytest.approx((b.x, b.y, b.z))


class TestCamera:

    def test_center_looks_down_negative_z(self):
        ray = Camera(aspect_ratio=2.0).cast(0.5, 0.5)
        assert same_direction(ray.direction, type(ray.direction)(0, 0, -1))

    def test_lower_left_corner(self):
        ray = Camera(aspect_ratio=2.0).cast(0.0, 0.0)
        assert (ray.direction.x, ray.direction.y, ray.direction.z) == pytest.approx((-2.0, -1.0, -1.0))
        assert (ray.origin.x, ray.origin.y, ray.origin.z) == (0, 0, 0)

    def test_position_moves_origin_only(self):
        position = Vector3(1, 2, 3)
        ray = Camera(aspect_ratio=1.0, position=position).cast(0.5, 0.5)
        assert (ray.origin.x, ray.origin.y, ray.origin.z) == (1, 2, 3)
        assert same_direction(ray.direction, Vector3(0, 0, -1))

    def test_yaw_turns_towards_positive_x(self):
        ray = Camera(aspect_ratio=1.0, yaw=math.pi / 2).cast(0.5, 0.5)
        assert same_direction(ray.direction, Vector3(1, 0, 0))

    def test_pitch_tilts_upwards(self):
        ray = Camera(aspect_ratio=1.0, pitch=math.pi / 4).cast(0.5, 0.5)
        half = math.sqrt(0.5)
        assert same_direction(ray.direction, Vector3(0, half, -half))

    def test_fov_sets_viewport_height(self):
        camera = Camera(aspect_ratio=2.0, fov=2 * math.atan(0.5))
        ray = camera.cast(0.0, 0.0)
        assert (ray.direction.x, ray.direction.y, ray.direction.z) == pytest.approx((-1.0, -0.5, -1.0))

    def test_focus_dist_scales_viewport(self):
        ray = Camera(aspect_ratio=1.0, focus_dist=3.0).cast(0.0, 0.0)
        assert (ray.direction.x, ray.direction.y, ray.direction.z) == pytest.approx((-3.0, -3.0, -3.0))


class TestRayGeneratorOrder:

    def test_length(self, rng):
        gen = RayGenerator(Camera(1.5), (6, 4), 3, rng)
        assert len(gen) == 72
        assert len(list(gen)) == 72
        assert len(gen) == 0

    def test_samples_fastest_then_x_then_y(self, rng):
        coords = [(s, x, y) for s, x, y, _ in RayGenerator(Camera(1.0), (3, 2), 2, rng)]
        assert coords[:6] == [(0, 0, 0), (1, 0, 0), (0, 1, 0), (1, 1, 0), (0, 2, 0), (1, 2, 0)]
        assert coords[6] == (0, 0, 1)
        assert coords[-1] == (1, 2, 1)

    def test_len_counts_down(self, rng):
        gen = RayGenerator(Camera(1.0), (2, 2), 1, rng)
        next(gen)
        assert len(gen) == 3

    def test_restart(self, rng):
        gen = RayGenerator(Camera(1.0), (2, 2), 1, rng)
        first = [(s, x, y) for s, x, y, _ in gen]
        gen.restart()
        assert [(s, x, y) for s, x, y, _ in gen] == first


class TestRayGeneratorSampling:

    def test_single_sample_is_not_jittered(self, scripted_rng):
        camera = Camera(aspect_ratio=5 / 4)
        rng = scripted_rng([0.5])
        for s, x, y, ray in RayGenerator(camera, (5, 4), 1, rng):
            expected = camera.cast(x / 4, y / 3)
            assert same_direction(ray.direction, expected.direction)
        assert rng.calls == 0

    def test_jitter_uses_rng(self, scripted_rng):
        camera = Camera(aspect_ratio=1.0)
        rng = scripted_rng([0.25, 0.75])
        s, x, y, ray = next(RayGenerator(camera, (5, 5), 2, rng))
        assert same_direction(ray.direction, camera.cast(0.25 / 4, 0.75 / 4).direction)

    def test_jitter_stays_within_pixel(self, rng):
        camera = Camera(aspect_ratio=1.0)
        width = height = 5
        for s, x, y, ray in RayGenerator(camera, (width, height), 4, rng):
            # Invert the camera mapping to recover the jittered pixel coordinates
            d = ray.direction - camera.lower_left_corner
            u = d.x / camera.horizontal.x
            v = d.y / camera.vertical.y
            assert x - 1e-9 <= u * (width - 1) < x + 1
            assert y - 1e-9 <= v * (height - 1) < y + 1

    def test_one_pixel_wide_image(self, rng):
        rays = list(RayGenerator(Camera(1.0), (1, 1), 1, rng))
        assert len(rays) == 1


class TestRayGeneratorBands:

    def test_rows_restrict_sequence(self, rng):
        gen = RayGenerator(Camera(1.0), (4, 10), 1, rng, rows=(3, 6))
        assert len(gen) == 12
        ys = sorted({y for _, _, y, _ in gen})
        assert ys == [3, 4, 5]

    def test_band_rays_match_full_frame(self, rng):
        camera = Camera(aspect_ratio=4 / 10)
        full = {(x, y): ray for _, x, y, ray in RayGenerator(camera, (4, 10), 1, rng)}
        for _, x, y, ray in RayGenerator(camera, (4, 10), 1, rng, rows=(7, 10)):
            assert same_direction(ray.direction, full[(x, y)].direction)

    def test_rows_out_of_range(self, rng):
        with pytest.raises(ValueError):
            RayGenerator(Camera(1.0), (4, 10), 1, rng, rows=(5, 11))
