# src/geometry/world.py
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from loguru import logger

from core.errors import ConfigurationError
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import Hittable, HitRecord
from geometry.sphere import Sphere

SceneEntry = Union[Hittable, Tuple[Tuple[Vector3, float], object]]

class World(Hittable):
    """
    An append-only list of Hittable objects. Intersection is a linear scan
    that keeps the closest hit found so far.
    """
    def __init__(self, objects: Optional[Iterable[Hittable]] = None):
        self.objects: List[Hittable] = []
        for obj in objects or ():
            self.add(obj)

    def add(self, obj: Hittable):
        if not isinstance(obj, Hittable):
            raise ConfigurationError(f"cannot add {obj!r} to the world: not a Hittable")
        self.objects.append(obj)

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = t_max
        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest_so_far)
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record


def build_scene(entries: Iterable[SceneEntry]) -> World:
    """
    Build a World from hittables or ((center, radius), material) pairs.

    Raises:
        ConfigurationError: If an entry is malformed or describes an invalid sphere.
    """
    world = World()
    for entry in entries:
        if isinstance(entry, Hittable):
            world.add(entry)
            continue
        try:
            (center, radius), material = entry
            if not isinstance(center, Vector3):
                center = Vector3(*center)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"invalid scene entry {entry!r}") from e
        world.add(Sphere(center, radius, material))
    logger.debug("Built scene with {} primitives", len(world))
    return world
