# geometry/world.py
from typing import Iterable, List, Optional
from core.vector import Vector3
from core.ray import Ray
from geometry.hittable import Hittable, HitRecord

class World(Hittable):
    """
    The scene: an unordered list of primitives plus the two sky colors that
    make up the background gradient.

    The world is built once before rendering and only read afterwards, so it
    can be shared by every render worker without locking.

    When two primitives report the same t, the one added first wins.
    """
    def __init__(self, objects: Optional[Iterable[Hittable]] = None,
                 sky_color_above: Vector3 = Vector3(0.5, 0.7, 1.0),
                 sky_color_below: Vector3 = Vector3(1.0, 1.0, 1.0)):
        self.objects: List[Hittable] = list(objects) if objects is not None else []
        self.sky_color_above = sky_color_above
        self.sky_color_below = sky_color_below

    def add(self, obj: Hittable):
        self.objects.append(obj)

    def extend(self, objs: Iterable[Hittable]):
        self.objects.extend(objs)

    def clear(self):
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = t_max
        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest_so_far)
            # Strictly closer only, so an equal t keeps the earlier primitive.
            if rec is not None and (hit_record is None or rec.t < closest_so_far):
                closest_so_far = rec.t
                hit_record = rec
        return hit_record

    def ambient_color(self, ray: Ray) -> Vector3:
        """
        Background radiance for a ray that hits nothing: a vertical blend from
        sky_color_below (straight down) to sky_color_above (straight up).
        """
        unit_direction = ray.direction.normalize()
        t = 0.5 * (unit_direction.y + 1.0)
        return self.sky_color_below * (1.0 - t) + self.sky_color_above * t

    def __repr__(self) -> str:
        return f"World({len(self.objects)} objects)"
