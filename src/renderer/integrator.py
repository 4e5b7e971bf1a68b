# renderer/integrator.py
import math
import random

from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import Hittable

# Minimum hit distance; keeps scattered rays from re-hitting their own surface.
SHADOW_EPSILON = 0.001

BLACK = Vector3(0.0, 0.0, 0.0)
WHITE = Vector3(1.0, 1.0, 1.0)
SKY_BLUE = Vector3(0.5, 0.7, 1.0)


def sky_color(ray: Ray) -> Vector3:
    """Vertical white-to-blue background gradient."""
    unit_direction = ray.direction.normalize()
    a = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - a) + SKY_BLUE * a


def ray_color(ray: Ray, depth: int, world: Hittable, rng: random.Random) -> Vector3:
    """
    Returns the color seen along the ray. Each bounce asks the hit material
    to scatter and multiplies its attenuation into the running throughput;
    rays that escape pick up the sky color. Equivalent to the recursive
    formulation attenuation * ray_color(scattered, depth - 1).
    """
    throughput = WHITE
    while depth > 0:
        rec = world.hit(ray, SHADOW_EPSILON, math.inf)
        if rec is None:
            return throughput * sky_color(ray)

        result = rec.material.scatter(ray, rec, rng)
        if not result.did_scatter:
            return BLACK
        throughput = throughput * result.attenuation
        ray = result.scattered
        depth -= 1

    # Exceeded bounce budget.
    return BLACK
