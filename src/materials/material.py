# materials/material.py
import random
from typing import Optional, Tuple
from core.ray import Ray
from core.vector import Vector3, BLACK
from geometry.hittable import HitRecord

class Material:
    """
    Abstract material class. Subclasses must implement scatter(); emissive
    materials also override emitted().

    Materials hold no mutable state and are shared by all render workers;
    randomness comes only from the rng passed in by the caller.
    """
    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng: random.Random) -> Optional[Tuple[Ray, Vector3]]:
        """
        Computes the scattered ray and attenuation.
        Returns a tuple (scattered_ray, attenuation) or None if the ray is absorbed.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

    def emitted(self, rec: HitRecord) -> Vector3:
        """
        Radiance emitted at the hit point. Non-emissive materials return black.
        """
        return BLACK
