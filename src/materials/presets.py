# materials/presets.py
from core.vector import Vector3
from materials.metal import Metal
from materials.lambertian import Lambertian
from materials.dielectric import Dielectric

class ColorPresets:
    """Common albedo colors."""

    RED = Vector3(0.7, 0.3, 0.3)
    YELLOW = Vector3(0.8, 0.8, 0.0)
    BLUE = Vector3(0.1, 0.2, 0.5)
    GROUND = Vector3(0.8, 0.8, 0.0)
    GRAY = Vector3(0.5, 0.5, 0.5)

    @staticmethod
    def matte(color: Vector3) -> Lambertian:
        """Create a matte material with the given color."""
        return Lambertian(color)

class MetalPresets:
    """Predefined metal materials."""

    @staticmethod
    def gold() -> Metal:
        return Metal(Vector3(0.8, 0.6, 0.2), fuzz=0.1)

    @staticmethod
    def silver() -> Metal:
        return Metal(Vector3(0.8, 0.8, 0.8), fuzz=0.3)

    @staticmethod
    def chrome() -> Metal:
        return Metal(Vector3(0.9, 0.9, 0.9), fuzz=0.0)

    @staticmethod
    def brushed_metal() -> Metal:
        return Metal(Vector3(0.8, 0.8, 0.8), fuzz=0.6)

class DielectricPresets:
    """Predefined dielectric materials with their refractive indices."""

    @staticmethod
    def glass() -> Dielectric:
        return Dielectric(1.5)

    @staticmethod
    def water() -> Dielectric:
        return Dielectric(1.33)

    @staticmethod
    def diamond() -> Dielectric:
        return Dielectric(2.42)

    @staticmethod
    def air_bubble() -> Dielectric:
        """Air pocket inside glass: the relative index of air to glass."""
        return Dielectric(1.0 / 1.5)
