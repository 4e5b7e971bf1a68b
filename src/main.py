# main.py
import argparse
import sys

import numpy as np
import pygame
from loguru import logger
from PIL import Image

from camera.camera import SimpleCameraConfig, ThinLensCameraConfig, build_camera
from core.errors import ConfigurationError, RayTracerError
from core.log import configure_logging
from core.vector import Vector3
from geometry.world import World, build_scene
from materials.lambertian import Lambertian
from materials.presets import ColorPresets, DielectricPresets, MetalPresets
from renderer.raytracer import Renderer
from renderer.settings import QUALITY_LEVELS, RenderSettings

SCENES = ("single", "materials", "focus")


def create_world(name: str) -> World:
    if name == "single":
        return build_scene([
            ((Vector3(0, 0, -1), 0.5), Lambertian(Vector3(0.8, 0.8, 0.0))),
        ])

    glass = DielectricPresets.glass()
    entries = [
        ((Vector3(0, -100.5, -1), 100), ColorPresets.matte(ColorPresets.GROUND)),
        ((Vector3(0, 0, -1), 0.5), ColorPresets.matte(ColorPresets.BLUE)),
        # Hollow glass sphere: an air bubble inside a glass shell
        ((Vector3(-1, 0, -1), 0.5), glass),
        ((Vector3(-1, 0, -1), 0.4), DielectricPresets.air_bubble()),
        ((Vector3(1, 0, -1), 0.5), MetalPresets.gold()),
    ]
    if name == "focus":
        entries.append(((Vector3(0, -0.3, -0.4), 0.2), glass))
    return build_scene(entries)


def create_camera(name: str, settings: RenderSettings):
    if name == "focus":
        look_from = Vector3(-2, 2, 1)
        look_at = Vector3(0, 0, -1)
        config = ThinLensCameraConfig(
            look_from=look_from,
            look_at=look_at,
            up=Vector3(0, 1, 0),
            vertical_fov_degrees=20,
            aspect_ratio=settings.aspect_ratio,
            aperture=0.6,
            focus_distance=(look_from - look_at).length(),
            image_width=settings.image_width,
            image_height=settings.image_height,
        )
    else:
        config = SimpleCameraConfig(
            origin=Vector3(0, 0, 0),
            aspect_ratio=settings.aspect_ratio,
            image_width=settings.image_width,
            image_height=settings.image_height,
        )
    return build_camera(config)


class Application:
    """
    Shows the render in a pygame window, adding one sample per pixel each
    frame until the sample budget is reached.
    """
    def __init__(self, renderer: Renderer, settings: RenderSettings, output: str = None):
        self.renderer = renderer
        self.settings = settings
        self.output = output

        pygame.init()
        self.screen = pygame.display.set_mode((renderer.width, renderer.height))
        pygame.display.set_caption("Path Tracer")
        self.clock = pygame.time.Clock()

    def run(self):
        running = True
        try:
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN:
                        if event.key == pygame.K_ESCAPE:
                            running = False
                        elif event.key == pygame.K_SPACE:
                            self.renderer.reset_accumulation()
                            logger.info("Accumulation reset")

                if self.renderer.samples < self.settings.samples:
                    self.renderer.render_pass()
                    pygame.display.set_caption(
                        f"Path Tracer | {self.renderer.samples}/{self.settings.samples} samples")
                    # surfarray is indexed (x, y)
                    frame = self.renderer.image().transpose(1, 0, 2)
                    self.screen.blit(pygame.surfarray.make_surface(frame), (0, 0))
                    pygame.display.flip()
                    if self.renderer.samples == self.settings.samples and self.output:
                        save_image(self.renderer.image(), self.output)
                self.clock.tick(60)
        finally:
            pygame.quit()


def save_image(image: np.ndarray, path: str):
    Image.fromarray(image).save(path)
    logger.info("Saved {}x{} image to {}", image.shape[1], image.shape[0], path)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Monte Carlo path tracer for sphere scenes.")
    parser.add_argument("--scene", choices=SCENES, default="materials")
    parser.add_argument("--quality", choices=sorted(QUALITY_LEVELS), default=None)
    parser.add_argument("--width", type=int, default=None, help="image width in pixels")
    parser.add_argument("--samples", type=int, default=None, help="samples per pixel")
    parser.add_argument("--depth", type=int, default=None, help="maximum bounces per path")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--output", "-o", default=None, help="save the final image (PNG, PPM, ...)")
    parser.add_argument("--headless", action="store_true", help="render without opening a window")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    try:
        settings = RenderSettings.from_env()
        if args.quality is not None:
            settings = RenderSettings.from_quality(args.quality, image_width=settings.image_width,
                                                   seed=settings.seed)
        settings = settings.with_overrides(image_width=args.width, samples=args.samples,
                                           max_depth=args.depth, seed=args.seed)
        world = create_world(args.scene)
        camera = create_camera(args.scene, settings)
    except ConfigurationError as e:
        logger.error("Invalid configuration: {}", e)
        return 2

    logger.info("Scene {!r}: {} spheres, {}x{}, quality {}", args.scene, len(world),
                settings.image_width, settings.image_height, settings.quality)
    renderer = Renderer(camera, world, max_depth=settings.max_depth, seed=settings.seed)

    if args.headless:
        if not args.output:
            logger.error("--headless requires --output")
            return 2
        try:
            image = renderer.render(settings.samples)
        except RayTracerError as e:
            logger.error("Render failed: {}", e)
            return 1
        save_image(image, args.output)
        return 0

    Application(renderer, settings, output=args.output).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
