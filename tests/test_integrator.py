"""Tests for the ray color integrator."""

import math
import random

import pytest

from core.ray import Ray
from core.vector import Vector3
from geometry.sphere import Sphere
from geometry.world import World
from materials.dielectric import Dielectric
from materials.lambertian import Lambertian
from materials.material import Material, ScatterRecord
from materials.metal import Metal
from renderer.integrator import SHADOW_EPSILON, ray_color, sky_color


class Absorber(Material):
    def scatter(self, ray_in, rec, rng):
        return ScatterRecord(Vector3(1, 1, 1), Ray(rec.point, rec.normal), False)


class StraightUp(Material):
    def scatter(self, ray_in, rec, rng):
        return ScatterRecord(Vector3(0.5, 0.5, 0.5), Ray(rec.point, Vector3(0, 1, 0)))


def expected_sky(direction):
    unit = direction.normalize()
    a = 0.5 * (unit.y + 1.0)
    return ((1 - a) + a * 0.5, (1 - a) + a * 0.7, (1 - a) + a * 1.0)


@pytest.mark.parametrize("direction", [
    Vector3(0, 1, 0), Vector3(0, -1, 0), Vector3(1, 0.2, -1), Vector3(-0.3, -0.7, 0.1),
])
def test_missing_rays_return_sky(direction, single_sphere_world, rng):
    ray = Ray(Vector3(0, 5, 0), direction)
    assert single_sphere_world.hit(ray, SHADOW_EPSILON, math.inf) is None
    assert tuple(ray_color(ray, 10, single_sphere_world, rng)) == pytest.approx(expected_sky(direction))
    assert tuple(sky_color(ray)) == pytest.approx(expected_sky(direction))


def test_sky_gradient_endpoints():
    assert tuple(sky_color(Ray(Vector3(0, 0, 0), Vector3(0, 1, 0)))) == pytest.approx((0.5, 0.7, 1.0))
    assert tuple(sky_color(Ray(Vector3(0, 0, 0), Vector3(0, -3, 0)))) == pytest.approx((1, 1, 1))


def test_zero_depth_is_black(single_sphere_world, rng):
    for direction in (Vector3(0, 0, -1), Vector3(0, 1, 0)):
        assert tuple(ray_color(Ray(Vector3(0, 0, 0), direction), 0, single_sphere_world, rng)) == (0, 0, 0)


def test_absorbed_rays_are_black(rng):
    world = World([Sphere(Vector3(0, 0, -1), 0.5, Absorber())])
    assert tuple(ray_color(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), 5, world, rng)) == (0, 0, 0)


def test_attenuation_multiplies_the_escaping_sky(rng):
    world = World([Sphere(Vector3(0, 0, -1), 0.5, StraightUp())])
    ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))
    assert tuple(ray_color(ray, 2, world, rng)) == pytest.approx((0.25, 0.35, 0.5))
    # A single bounce of budget is used up by the scatter itself
    assert tuple(ray_color(ray, 1, world, rng)) == (0, 0, 0)


def recursive_ray_color(ray, depth, world, rng):
    if depth <= 0:
        return Vector3(0, 0, 0)
    rec = world.hit(ray, SHADOW_EPSILON, math.inf)
    if rec is None:
        return sky_color(ray)
    result = rec.material.scatter(ray, rec, rng)
    if not result.did_scatter:
        return Vector3(0, 0, 0)
    return result.attenuation * recursive_ray_color(result.scattered, depth - 1, world, rng)


def test_loop_matches_recursive_formulation():
    world = World([
        Sphere(Vector3(0, -100.5, -1), 100, Lambertian(Vector3(0.8, 0.8, 0.0))),
        Sphere(Vector3(0, 0, -1), 0.5, Lambertian(Vector3(0.1, 0.2, 0.5))),
        Sphere(Vector3(-1, 0, -1), 0.5, Dielectric(1.5)),
        Sphere(Vector3(1, 0, -1), 0.5, Metal(Vector3(0.8, 0.6, 0.2), 0.3)),
    ])
    directions = [Vector3(x, y, -1) for x in (-1.2, -0.5, 0, 0.5, 1.1) for y in (-0.4, 0, 0.3)]
    for seed, direction in enumerate(directions):
        ray = Ray(Vector3(0, 0, 0), direction)
        looped = ray_color(ray, 25, world, random.Random(seed))
        recursed = recursive_ray_color(ray, 25, world, random.Random(seed))
        assert tuple(looped) == pytest.approx(tuple(recursed), rel=1e-12, abs=1e-15)
