# materials/light.py
import random
from typing import Optional, Tuple
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import HitRecord
from materials.material import Material

class Light(Material):
    """
    Emissive material that provides constant radiance. Components of the
    emission may exceed 1.0.
    """
    def __init__(self, emission: Vector3):
        self.emission = emission

    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: random.Random) -> Optional[Tuple[Ray, Vector3]]:
        """
        Emissive materials do not scatter rays.
        """
        return None

    def emitted(self, rec: HitRecord) -> Vector3:
        return self.emission

    def __repr__(self) -> str:
        return f"Light(emission={self.emission})"
