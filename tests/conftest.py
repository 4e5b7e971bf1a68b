"""Pytest configuration and shared fixtures."""

import random

import pytest

from camera.camera import Camera
from core.vector import Vector3
from geometry.sphere import Sphere
from geometry.world import World
from materials.lambertian import Lambertian


@pytest.fixture
def rng():
    """A seeded random source so every test sees the same draws."""
    return random.Random(1234)


@pytest.fixture
def yellow_matte():
    return Lambertian(Vector3(0.8, 0.8, 0.0))


@pytest.fixture
def single_sphere_world(yellow_matte):
    """One diffuse sphere at (0, 0, -1) with radius 0.5."""
    return World([Sphere(Vector3(0, 0, -1), 0.5, yellow_matte)])


@pytest.fixture
def wide_camera():
    """16:9 camera, 400 pixels wide, looking down -z from the origin."""
    return Camera(Vector3(0, 0, 0), 16.0 / 9.0, 400, 225)
