"""Tests for pixel resolution and the progressive renderer."""

import random
import threading

import numpy as np
import pytest

from camera.camera import Camera, ThinLensCamera
from core.errors import ConfigurationError, RenderCancelled
from core.vector import Vector3
from renderer.raytracer import Renderer, render_image, render_pixel


class TestRenderPixel:

    def test_same_random_draws_give_same_pixel(self, wide_camera, single_sphere_world):
        a = render_pixel(wide_camera, single_sphere_world, 200, 112, 1, 10, rng=random.Random(42))
        b = render_pixel(wide_camera, single_sphere_world, 200, 112, 1, 10, rng=random.Random(42))
        assert a == b

    def test_single_sphere_scene(self, wide_camera, single_sphere_world):
        rng = random.Random(7)
        center = render_pixel(wide_camera, single_sphere_world, 200, 112, 100, 25, rng=rng)
        corner = render_pixel(wide_camera, single_sphere_world, 0, 0, 100, 25, rng=rng)

        # Every path from the center pixel bounces off the yellow sphere, which absorbs all blue
        r, g, b = center
        assert b == 0
        assert 120 < r <= g < 255

        # The corner misses the sphere and shows the sky gradient
        assert corner[2] == 255
        assert 150 < corner[0] < corner[1] < 255
        assert corner != center

    @pytest.mark.parametrize("samples, depth", [(0, 10), (-1, 10), (4, 0)])
    def test_invalid_budget(self, wide_camera, single_sphere_world, samples, depth):
        with pytest.raises(ConfigurationError):
            render_pixel(wide_camera, single_sphere_world, 0, 0, samples, depth)


class TestRenderer:

    @pytest.fixture
    def small_camera(self):
        return Camera(Vector3(0, 0, 0), 16.0 / 9.0, 32, 18)

    def test_progressive_accumulation(self, small_camera, single_sphere_world):
        renderer = Renderer(small_camera, single_sphere_world, max_depth=5, seed=3)
        assert renderer.samples == 0
        assert not renderer.image().any()

        renderer.render_pass()
        renderer.render_pass()
        assert renderer.samples == 2
        assert renderer.accumulation_buffer.shape == (18, 32, 3)
        assert renderer.image().any()

        renderer.reset_accumulation()
        assert renderer.samples == 0
        assert not renderer.accumulation_buffer.any()

    def test_render_image(self, small_camera, single_sphere_world):
        image = render_image(small_camera, single_sphere_world, 32, 18, samples=2, max_depth=5, seed=11)
        assert image.shape == (18, 32, 3)
        assert image.dtype == np.uint8
        # Sphere in the middle, sky along the top row
        assert image[9, 16, 2] == 0
        assert (image[0, :, 2] == 255).all()

    def test_seeded_render_is_reproducible(self, small_camera, single_sphere_world):
        a = render_image(small_camera, single_sphere_world, 32, 18, samples=1, max_depth=5, seed=5)
        b = render_image(small_camera, single_sphere_world, 32, 18, samples=1, max_depth=5, seed=5)
        assert np.array_equal(a, b)

    def test_thin_lens_camera(self, single_sphere_world):
        camera = ThinLensCamera(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0),
                                vertical_fov_degrees=90, aspect_ratio=2.0, aperture=0.1,
                                focus_distance=1.0, image_width=20)
        image = render_image(camera, single_sphere_world, 20, 10, samples=1, max_depth=5, seed=2)
        assert image.shape == (10, 20, 3)
        assert image[5, 10, 2] == 0

    def test_size_must_match_camera(self, small_camera, single_sphere_world):
        with pytest.raises(ConfigurationError):
            render_image(small_camera, single_sphere_world, 64, 36, samples=1, max_depth=5)

    def test_invalid_budget(self, small_camera, single_sphere_world):
        with pytest.raises(ConfigurationError):
            render_image(small_camera, single_sphere_world, 32, 18, samples=0, max_depth=5)
        with pytest.raises(ConfigurationError):
            Renderer(small_camera, single_sphere_world, max_depth=0)

    def test_cancel(self, small_camera, single_sphere_world):
        cancel = threading.Event()
        cancel.set()
        renderer = Renderer(small_camera, single_sphere_world, max_depth=5)
        with pytest.raises(RenderCancelled):
            renderer.render(4, cancel=cancel)
        assert renderer.samples == 0
