# camera/camera.py
import math
import random
from dataclasses import dataclass
from typing import Optional, Union

from core.errors import ConfigurationError, DegenerateVectorError
from core.ray import Ray
from core.utils import random_in_unit_disk
from core.vector import Vector3


@dataclass(frozen=True)
class SimpleCameraConfig:
    """Axis-aligned camera looking down -z, without depth of field."""
    origin: Vector3
    aspect_ratio: float
    image_width: int
    image_height: int


@dataclass(frozen=True)
class ThinLensCameraConfig:
    """Oriented camera with a thin-lens depth-of-field model."""
    look_from: Vector3
    look_at: Vector3
    up: Vector3
    vertical_fov_degrees: float
    aspect_ratio: float
    aperture: float
    focus_distance: float
    image_width: int
    image_height: Optional[int] = None


def _check_resolution(aspect_ratio: float, width: int, height: int):
    if not math.isfinite(aspect_ratio) or aspect_ratio <= 0:
        raise ConfigurationError(f"aspect ratio must be positive, got {aspect_ratio}")
    if width < 1 or height < 1:
        raise ConfigurationError(f"image resolution must be positive, got {width}x{height}")


class Camera:
    """
    Axis-aligned pinhole camera. The viewport sits one unit in front of the
    origin along -z, is two units tall and aspect_ratio * 2 units wide.
    """
    focal_length = 1.0
    viewport_height = 2.0

    def __init__(self, origin: Vector3, aspect_ratio: float, image_width: int, image_height: int):
        _check_resolution(aspect_ratio, image_width, image_height)
        self.origin = origin
        self.aspect_ratio = aspect_ratio
        self.image_width = image_width
        self.image_height = image_height

        viewport_width = self.viewport_height * aspect_ratio

        # Vectors across the horizontal and down the vertical viewport edges
        vpu = Vector3(viewport_width, 0, 0)
        vpv = Vector3(0, -self.viewport_height, 0)

        # Offsets to the next pixel right and below
        self.pdu = vpu / image_width
        self.pdv = vpv / image_height

        viewport_upper_left = (origin - Vector3(0, 0, self.focal_length)
                               - vpu / 2 - vpv / 2)
        self.pixel_origin = viewport_upper_left + (self.pdu + self.pdv) * 0.5

    def get_ray(self, x: float, y: float, rng: random.Random) -> Ray:
        """
        Returns a ray through pixel (x, y), jittered inside the pixel for
        anti-aliasing.
        """
        jx = rng.random() - 0.5
        jy = rng.random() - 0.5
        sample = self.pixel_origin + self.pdu * (x + jx) + self.pdv * (y + jy)
        return Ray(self.origin, sample - self.origin)

    def pixel_ray(self, x: int, y: int, rng: random.Random) -> Ray:
        return self.get_ray(x, y, rng)


class ThinLensCamera:
    """
    Camera oriented by look-from / look-at / up with a thin lens. Points on
    the focus plane stay sharp; everything else is blurred in proportion
    to the aperture.
    """
    def __init__(self, look_from: Vector3, look_at: Vector3, up: Vector3,
                 vertical_fov_degrees: float, aspect_ratio: float,
                 aperture: float = 0.0, focus_distance: float = 1.0,
                 image_width: int = 400, image_height: Optional[int] = None):
        if image_height is None:
            image_height = max(1, int(image_width / aspect_ratio)) if aspect_ratio > 0 else 0
        _check_resolution(aspect_ratio, image_width, image_height)
        if not 0 < vertical_fov_degrees < 180:
            raise ConfigurationError(f"vertical fov must be in (0, 180), got {vertical_fov_degrees}")
        if not math.isfinite(aperture) or aperture < 0:
            raise ConfigurationError(f"aperture must be non-negative, got {aperture}")
        if not math.isfinite(focus_distance) or focus_distance <= 0:
            raise ConfigurationError(f"focus distance must be positive, got {focus_distance}")

        self.origin = look_from
        self.aspect_ratio = aspect_ratio
        self.image_width = image_width
        self.image_height = image_height
        self.aperture = aperture
        self.focus_distance = focus_distance
        self.lens_radius = aperture / 2.0

        try:
            self.w = (look_from - look_at).normalize()
            self.u = up.cross(self.w).normalize()
        except DegenerateVectorError as e:
            raise ConfigurationError(
                "camera basis is degenerate: look_from equals look_at or up is parallel to the view direction"
            ) from e
        self.v = self.w.cross(self.u)

        viewport_height = 2.0 * math.tan(math.radians(vertical_fov_degrees) / 2)
        viewport_width = aspect_ratio * viewport_height

        # Scale by focus distance so the viewport lies on the focus plane
        self.horizontal = self.u * (viewport_width * focus_distance)
        self.vertical = self.v * (viewport_height * focus_distance)
        self.lower_left_corner = (self.origin
                                  - self.horizontal * 0.5
                                  - self.vertical * 0.5
                                  - self.w * focus_distance)

    def get_ray(self, s: float, t: float, rng: random.Random) -> Ray:
        """Generates a ray through viewport coordinates (s, t) in [0, 1]^2."""
        if self.lens_radius > 0:
            rd = random_in_unit_disk(rng) * self.lens_radius
            offset = self.u * rd.x + self.v * rd.y
        else:
            offset = Vector3(0, 0, 0)

        ray_origin = self.origin + offset
        ray_direction = (self.lower_left_corner
                         + self.horizontal * s
                         + self.vertical * t
                         - ray_origin)
        return Ray(ray_origin, ray_direction)

    def pixel_ray(self, x: int, y: int, rng: random.Random) -> Ray:
        # Row 0 is the top of the image, t = 0 is the bottom of the viewport
        s = (x + rng.random()) / self.image_width
        t = (self.image_height - 1 - y + rng.random()) / self.image_height
        return self.get_ray(s, t, rng)


AnyCamera = Union[Camera, ThinLensCamera]


def build_camera(config: Union[SimpleCameraConfig, ThinLensCameraConfig]) -> AnyCamera:
    """
    Build a camera from one of the two config kinds.

    Raises:
        ConfigurationError: If the config is of an unknown type or describes
            degenerate viewport geometry.
    """
    if isinstance(config, SimpleCameraConfig):
        return Camera(config.origin, config.aspect_ratio, config.image_width, config.image_height)
    if isinstance(config, ThinLensCameraConfig):
        return ThinLensCamera(
            look_from=config.look_from,
            look_at=config.look_at,
            up=config.up,
            vertical_fov_degrees=config.vertical_fov_degrees,
            aspect_ratio=config.aspect_ratio,
            aperture=config.aperture,
            focus_distance=config.focus_distance,
            image_width=config.image_width,
            image_height=config.image_height,
        )
    raise ConfigurationError(f"unsupported camera config {type(config).__name__}")
