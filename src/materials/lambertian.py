# materials/lambertian.py
import random
from core.ray import Ray
from core.vector import Vector3
from core.utils import random_unit_vector
from geometry.hittable import HitRecord
from materials.material import Material, ScatterRecord, check_albedo

class Lambertian(Material):
    """
    Lambertian (ideal diffuse) material.
    """

    def __init__(self, albedo: Vector3):
        self.albedo = check_albedo(albedo)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> ScatterRecord:
        # Pick a random scatter direction by adding a random unit vector to the normal.
        scatter_direction = rec.normal + random_unit_vector(rng)

        # If scatter_direction is degenerate, just use the normal.
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        return ScatterRecord(self.albedo, Ray(rec.point, scatter_direction))

    def __repr__(self) -> str:
        return f"Lambertian({self.albedo!r})"
