# geometry/sphere.py
import math
from typing import Optional
from core.vector import Vector3
from core.ray import Ray
from geometry.hittable import Hittable, HitRecord

class Sphere(Hittable):
    """
    A sphere given by center and radius. The outward normal at a surface point
    is (p - center) / radius, which is unit length without normalizing.
    """
    def __init__(self, center: Vector3, radius: float, material):
        if radius <= 0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        self.center = center
        self.radius = radius
        self.material = material

    def outward_normal(self, p: Vector3) -> Vector3:
        return (p - self.center) / self.radius

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        # |O + tD - C|^2 = r^2 with the factor 2 folded into half_b
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        if a == 0:
            return None
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = half_b * half_b - a * c
        if discriminant < 0:
            return None
        root_disc = math.sqrt(discriminant)

        # Near root first, then the far one (ray starting inside the sphere)
        for t in ((-half_b - root_disc) / a, (-half_b + root_disc) / a):
            if t_min <= t <= t_max:
                return self._record(ray, t)
        return None

    def _record(self, ray: Ray, t: float) -> HitRecord:
        p = ray.at(t)
        rec = HitRecord(p=p, t=t, material=self.material)
        rec.set_face_normal(ray, self.outward_normal(p))
        return rec

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"
