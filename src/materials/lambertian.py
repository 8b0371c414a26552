# materials/lambertian.py
import random
from typing import Tuple
from core.ray import Ray
from core.vector import Vector3
from core.utils import random_in_hemisphere
from geometry.hittable import HitRecord
from materials.material import Material

class Lambertian(Material):
    """
    Lambertian diffuse material.
    """

    def __init__(self, albedo: Vector3):
        self.albedo = albedo

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> Tuple[Ray, Vector3]:
        """
        Scatter a ray according to a Lambertian reflection model.
        Always succeeds; returns (scattered_ray, attenuation).
        """
        scatter_direction = rec.normal + random_in_hemisphere(rec.normal, rng)

        # Catch degenerate scatter direction
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        return Ray(rec.p, scatter_direction), self.albedo

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo})"
