# materials/metal.py
import random
from typing import Optional, Tuple
from core.ray import Ray
from core.vector import Vector3
from core.utils import reflect, random_in_unit_sphere
from geometry.hittable import HitRecord
from materials.material import Material

class Metal(Material):
    """
    Metal material with reflective properties. Glossiness 1 is a perfect
    mirror, 0 the roughest surface.
    """
    def __init__(self, albedo: Vector3, glossiness: float = 1.0):
        if not 0.0 <= glossiness <= 1.0:
            raise ValueError(f"glossiness must be in [0, 1], got {glossiness}")
        self.albedo = albedo
        self.glossiness = glossiness

    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: random.Random) -> Optional[Tuple[Ray, Vector3]]:
        reflected = reflect(ray_in.direction.normalize(), rec.normal)
        roughness = 1.0 - self.glossiness
        if roughness > 0.0:
            reflected = reflected + random_in_unit_sphere(rng) * roughness
        scattered = Ray(rec.p, reflected)

        if scattered.direction.dot(rec.normal) > 0:
            return scattered, self.albedo

        return None  # Absorb the ray if it does not scatter forward

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo}, glossiness={self.glossiness})"
