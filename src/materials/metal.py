# materials/metal.py
import math
import random
from core.errors import ConfigurationError
from core.ray import Ray
from core.vector import Vector3
from core.utils import reflect, random_unit_vector
from geometry.hittable import HitRecord
from materials.material import Material, ScatterRecord, check_albedo

class Metal(Material):
    """
    Metal material: mirror reflection perturbed by a fuzz factor in [0, 1].
    """
    def __init__(self, albedo: Vector3, fuzz: float = 0.0):
        if not math.isfinite(fuzz):
            raise ConfigurationError(f"fuzz must be finite, got {fuzz}")
        self.albedo = check_albedo(albedo)
        self.fuzz = min(max(float(fuzz), 0.0), 1.0)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> ScatterRecord:
        reflected = reflect(ray_in.direction.normalize(), rec.normal).normalize()
        reflected = reflected + random_unit_vector(rng) * self.fuzz
        scattered = Ray(rec.point, reflected)
        # Absorb the ray if the fuzz pushed it below the surface
        return ScatterRecord(self.albedo, scattered, reflected.dot(rec.normal) > 0)

    def __repr__(self) -> str:
        return f"Metal({self.albedo!r}, fuzz={self.fuzz})"
