# geometry/sphere.py
import math
from typing import Optional
from core.errors import ConfigurationError
from core.vector import Vector3
from core.ray import Ray
from geometry.hittable import Hittable, HitRecord
from materials.material import Material

class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.
    """
    def __init__(self, center: Vector3, radius: float, material: Material):
        if not isinstance(center, Vector3):
            try:
                center = Vector3(*center)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"sphere center must be a 3-vector, got {center!r}") from e
        if not all(math.isfinite(c) for c in center):
            raise ConfigurationError(f"sphere center must be finite, got {center!r}")
        if not math.isfinite(radius) or radius <= 0:
            raise ConfigurationError(f"sphere radius must be positive, got {radius}")
        if not isinstance(material, Material):
            raise ConfigurationError(f"sphere material must be a Material, got {material!r}")
        self.center = center
        self.radius = float(radius)
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        oc = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        half_b = oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = half_b * half_b - a * c

        if discriminant < 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        # Find the nearest root strictly inside (t_min, t_max)
        root = (-half_b - sqrt_disc) / a
        if root <= t_min or root >= t_max:
            root = (-half_b + sqrt_disc) / a
            if root <= t_min or root >= t_max:
                return None

        point = ray.at(root)
        rec = HitRecord(point=point, t=root, material=self.material)
        outward_normal = (point - self.center) / self.radius
        rec.set_face_normal(ray, outward_normal)
        return rec

    def __repr__(self) -> str:
        return f"Sphere({self.center!r}, {self.radius}, {self.material!r})"
