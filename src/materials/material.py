# materials/material.py
import math
import random
from core.errors import ConfigurationError
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import HitRecord

class ScatterRecord:
    """
    Result of a scatter call: the attenuation color, the outgoing ray and
    whether the ray scattered at all (False means it was absorbed).
    """
    __slots__ = ("attenuation", "scattered", "did_scatter")

    def __init__(self, attenuation: Vector3, scattered: Ray, did_scatter: bool = True):
        self.attenuation = attenuation
        self.scattered = scattered
        self.did_scatter = did_scatter

class Material:
    """
    Abstract material class. Subclasses must implement scatter().
    Materials hold only their construction parameters and may be shared
    between several primitives.
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> ScatterRecord:
        """
        Computes the scattered ray and attenuation for a ray hitting the surface.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

def check_albedo(albedo: Vector3) -> Vector3:
    if not isinstance(albedo, Vector3):
        albedo = Vector3(*albedo)
    if not all(math.isfinite(c) and c >= 0 for c in albedo):
        raise ConfigurationError(f"albedo components must be finite and non-negative, got {albedo!r}")
    return albedo
