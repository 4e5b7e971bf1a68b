# renderer/raytracer.py
import random
import time
from typing import Optional, Tuple

import numpy as np
from loguru import logger

from camera.camera import AnyCamera
from core.errors import ConfigurationError, RenderCancelled
from core.vector import Vector3
from geometry.hittable import Hittable
from renderer.integrator import ray_color
from renderer.tone_mapping import to_rgb8, tone_map

DEFAULT_MAX_DEPTH = 25


def _check_budget(samples: int, max_depth: int):
    if samples < 1:
        raise ConfigurationError(f"samples per pixel must be positive, got {samples}")
    if max_depth < 1:
        raise ConfigurationError(f"max depth must be positive, got {max_depth}")


class Renderer:
    """
    Progressive CPU path tracer. Every pass adds one jittered sample per
    pixel to the accumulation buffer; image() resolves the running average.
    """
    def __init__(self, camera: AnyCamera, world: Hittable, max_depth: int = DEFAULT_MAX_DEPTH,
                 seed: Optional[int] = None):
        _check_budget(1, max_depth)
        self.camera = camera
        self.world = world
        self.width = camera.image_width
        self.height = camera.image_height
        self.max_depth = max_depth
        self.rng = random.Random(seed)
        self.accumulation_buffer = np.zeros((self.height, self.width, 3), dtype=np.float64)
        self.samples = 0

    def reset_accumulation(self):
        """Drop every accumulated sample, e.g. after the camera or scene changed."""
        self.accumulation_buffer.fill(0)
        self.samples = 0

    def render_pass(self, cancel=None):
        """
        Trace one sample for every pixel. `cancel` is any object with an
        is_set() method and is checked once per row.
        """
        camera, world, rng, depth = self.camera, self.world, self.rng, self.max_depth
        buffer = self.accumulation_buffer
        for y in range(self.height):
            if cancel is not None and cancel.is_set():
                raise RenderCancelled(f"render cancelled at row {y} of pass {self.samples + 1}")
            row = buffer[y]
            for x in range(self.width):
                color = ray_color(camera.pixel_ray(x, y, rng), depth, world, rng)
                row[x, 0] += color.x
                row[x, 1] += color.y
                row[x, 2] += color.z
        self.samples += 1

    def render(self, samples: int, cancel=None) -> np.ndarray:
        """Run `samples` passes and return the resolved uint8 image."""
        _check_budget(samples, self.max_depth)
        logger.info("Rendering {}x{} with {} samples, max depth {}",
                    self.width, self.height, samples, self.max_depth)
        start = time.perf_counter()
        for i in range(samples):
            self.render_pass(cancel)
            logger.debug("Pass {}/{} done ({:.2f}s elapsed)", i + 1, samples, time.perf_counter() - start)
        logger.info("Render finished in {:.2f}s", time.perf_counter() - start)
        return self.image()

    def image(self) -> np.ndarray:
        """The accumulated samples tone-mapped to a (height, width, 3) uint8 array."""
        return tone_map(self.accumulation_buffer, self.samples)


def render_pixel(camera: AnyCamera, world: Hittable, x: int, y: int, samples: int,
                 max_depth: int = DEFAULT_MAX_DEPTH,
                 rng: Optional[random.Random] = None) -> Tuple[int, int, int]:
    """
    Average `samples` independent paths through pixel (x, y) and return the
    gamma-corrected 8-bit color. Deterministic for a given rng state.
    """
    _check_budget(samples, max_depth)
    if rng is None:
        rng = random.Random()
    total = Vector3(0.0, 0.0, 0.0)
    for _ in range(samples):
        total = total + ray_color(camera.pixel_ray(x, y, rng), max_depth, world, rng)
    return to_rgb8(total, samples)


def render_image(camera: AnyCamera, world: Hittable, width: int, height: int, samples: int,
                 max_depth: int = DEFAULT_MAX_DEPTH, seed: Optional[int] = None,
                 cancel=None) -> np.ndarray:
    """
    Render the full image as a (height, width, 3) uint8 grid, row 0 at the top.

    Raises:
        ConfigurationError: If the size does not match the camera or the sample
            budget is not positive.
        RenderCancelled: If `cancel` is set during the render.
    """
    if (width, height) != (camera.image_width, camera.image_height):
        raise ConfigurationError(
            f"requested {width}x{height} but the camera was built for "
            f"{camera.image_width}x{camera.image_height}"
        )
    renderer = Renderer(camera, world, max_depth=max_depth, seed=seed)
    return renderer.render(samples, cancel=cancel)
