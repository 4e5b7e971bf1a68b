# src/materials/dielectric.py
import math
import random
from core.errors import ConfigurationError
from core.ray import Ray
from core.utils import reflect, refract, schlick
from core.vector import Vector3
from geometry.hittable import HitRecord
from materials.material import Material, ScatterRecord

WHITE = Vector3(1.0, 1.0, 1.0)

class Dielectric(Material):
    """
    Clear refractive material (glass, water, diamond). Each hit either
    reflects or refracts, chosen with Schlick's reflectance.
    """
    def __init__(self, refraction_index: float):
        if not math.isfinite(refraction_index) or refraction_index <= 0:
            raise ConfigurationError(f"refraction index must be positive, got {refraction_index}")
        self.refraction_index = float(refraction_index)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> ScatterRecord:
        # Determine if we're entering or exiting the material
        ratio = 1.0 / self.refraction_index if rec.front_face else self.refraction_index

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)

        cannot_refract = ratio * sin_theta > 1.0
        if cannot_refract or rng.random() < schlick(cos_theta, ratio):
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, ratio)

        return ScatterRecord(WHITE, Ray(rec.point, direction))

    def __repr__(self) -> str:
        return f"Dielectric({self.refraction_index})"
